from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from config_hub.models import AuditRecord, ErrorRecord
from config_hub.schemas import DagRun, DagRunPage, DagSummary, DashboardMetrics, LayerSummary

_LAYER_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("quality", "Quality"),
    ("reconciliation", "Reconciliation"),
    ("bronze", "Bronze"),
    ("silver", "Silver"),
    ("gold", "Gold"),
)
DEFAULT_LAYER = "Bronze"

_SUMMARY_FIELDS = {
    "Quality": "data_quality",
    "Reconciliation": "reconciliation",
    "Bronze": "bronze",
    "Silver": "silver",
    "Gold": "gold",
}

# Layer filter values: derived labels plus the dag-summary keys (snake and camel case).
_LAYER_FILTERS = {
    **{label.lower(): label for label in _SUMMARY_FIELDS},
    **{field.replace("_", ""): label for label, field in _SUMMARY_FIELDS.items()},
}


def resolve_layer(layer: str) -> Optional[str]:
    normalized = "".join(ch for ch in layer.lower() if ch.isalnum())
    return _LAYER_FILTERS.get(normalized)


_SORT_COLUMNS = {
    "dagName": AuditRecord.code_name,
    "status": AuditRecord.status,
    "lastRun": AuditRecord.start_time,
    "startTime": AuditRecord.start_time,
}


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def from_bounds(
        cls, start: Optional[datetime], end: Optional[datetime]
    ) -> Optional["DateRange"]:
        if start is None or end is None:
            return None
        return cls(start=_as_naive_utc(start), end=_as_naive_utc(end))


def _as_naive_utc(value: datetime) -> datetime:
    # Run history columns are timezone-naive UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _layer_expression():
    code_name = func.lower(func.coalesce(AuditRecord.code_name, ""))
    return case(
        *[(code_name.like(f"%{keyword}%"), label) for keyword, label in _LAYER_KEYWORDS],
        else_=DEFAULT_LAYER,
    )


def _within(column, date_range: Optional[DateRange]):
    if date_range is None:
        return None
    return and_(column >= date_range.start, column <= date_range.end)


def get_dashboard_metrics(db: Session, date_range: Optional[DateRange] = None) -> DashboardMetrics:
    status = func.lower(AuditRecord.status)
    stmt = select(status.label("status"), func.count().label("total")).group_by(status)
    condition = _within(AuditRecord.start_time, date_range)
    if condition is not None:
        stmt = stmt.where(condition)

    metrics = DashboardMetrics()
    for row in db.execute(stmt):
        metrics.total_pipelines += row.total
        if row.status == "success":
            metrics.successful_runs += row.total
        elif row.status == "failed":
            metrics.failed_runs += row.total
        elif row.status == "scheduled":
            metrics.scheduled_runs += row.total
        elif row.status == "running":
            metrics.running_runs += row.total
    return metrics


def get_dag_summary(db: Session, date_range: Optional[DateRange] = None) -> DagSummary:
    per_run = select(
        _layer_expression().label("layer"), func.lower(AuditRecord.status).label("status")
    )
    condition = _within(AuditRecord.start_time, date_range)
    if condition is not None:
        per_run = per_run.where(condition)
    # Grouping on the subquery columns keeps the CASE literals out of GROUP BY.
    runs = per_run.subquery()
    stmt = select(runs.c.layer, runs.c.status, func.count().label("total")).group_by(
        runs.c.layer, runs.c.status
    )

    summary = DagSummary()
    for row in db.execute(stmt):
        bucket: LayerSummary = getattr(summary, _SUMMARY_FIELDS[row.layer])
        bucket.total += row.total
        if row.status == "success":
            bucket.success += row.total
        elif row.status == "failed":
            bucket.failed += row.total
    return summary


def get_dag_runs(
    db: Session,
    *,
    page: int = 1,
    limit: int = 5,
    search: Optional[str] = None,
    layer: Optional[str] = None,
    status: Optional[str] = None,
    date_range: Optional[DateRange] = None,
    sort_by: str = "lastRun",
    sort_order: str = "desc",
) -> DagRunPage:
    layer_expr = _layer_expression()
    conditions = []

    if search:
        conditions.append(AuditRecord.code_name.like(f"%{search}%"))
    if status and status.lower() != "all":
        conditions.append(AuditRecord.status == status.upper())
    if layer and layer.strip().lower() != "all":
        label = resolve_layer(layer)
        if label is None:
            # An unknown layer matches nothing rather than everything.
            conditions.append(AuditRecord.audit_key.is_(None))
        else:
            conditions.append(layer_expr == label)
    range_condition = _within(AuditRecord.start_time, date_range)
    if range_condition is not None:
        conditions.append(range_condition)

    count_stmt = select(func.count()).select_from(AuditRecord)
    stmt = select(AuditRecord, layer_expr.label("layer"))
    if conditions:
        count_stmt = count_stmt.where(*conditions)
        stmt = stmt.where(*conditions)

    sort_column = _SORT_COLUMNS.get(sort_by, AuditRecord.start_time)
    ordering = sort_column.asc() if sort_order == "asc" else sort_column.desc()
    stmt = stmt.order_by(ordering, AuditRecord.audit_key.desc())

    page = max(page, 1)
    limit = max(limit, 1)
    total = db.scalar(count_stmt) or 0
    rows = db.execute(stmt.limit(limit).offset((page - 1) * limit)).all()

    data = []
    for record, derived_layer in rows:
        duration = None
        if record.start_time and record.end_time:
            duration = round((record.end_time - record.start_time).total_seconds())
        data.append(
            DagRun(
                audit_key=record.audit_key,
                dag_name=record.code_name or "Unknown DAG",
                run_id=record.run_id or "",
                layer=derived_layer,
                status=record.status or "Unknown",
                last_run=record.start_time,
                duration=duration,
            )
        )

    return DagRunPage(data=data, total=total, page=page, limit=limit)


def get_error_logs(db: Session, date_range: Optional[DateRange] = None) -> list[ErrorRecord]:
    stmt = select(ErrorRecord)
    condition = _within(ErrorRecord.execution_time, date_range)
    if condition is not None:
        stmt = stmt.where(condition)
    stmt = stmt.order_by(ErrorRecord.execution_time.desc(), ErrorRecord.error_id.desc())
    return list(db.execute(stmt).scalars().all())
