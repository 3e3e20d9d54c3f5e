from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.schemas import DagRunPage, DagSummary, DashboardMetrics, ErrorLogRead
from config_hub.services.run_history import (
    DateRange,
    get_dag_runs,
    get_dag_summary,
    get_dashboard_metrics,
    get_error_logs,
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_date_range(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
) -> Optional[DateRange]:
    return DateRange.from_bounds(start_date, end_date)


@router.get("/metrics", response_model=DashboardMetrics)
def read_dashboard_metrics(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
) -> DashboardMetrics:
    return get_dashboard_metrics(db, date_range)


@router.get("/dag-summary", response_model=DagSummary)
def read_dag_summary(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
) -> DagSummary:
    return get_dag_summary(db, date_range)


@router.get("/dags", response_model=DagRunPage)
def read_dag_runs(
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=200),
    layer: Optional[str] = Query(None),
    run_status: Optional[str] = Query(None, alias="status"),
    sort_by: str = Query("lastRun", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
) -> DagRunPage:
    return get_dag_runs(
        db,
        page=page,
        limit=limit,
        search=search,
        layer=layer,
        status=run_status,
        date_range=date_range,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/errors", response_model=list[ErrorLogRead])
def read_error_logs(
    date_range: Optional[DateRange] = Depends(get_date_range),
    db: Session = Depends(get_db),
) -> list[ErrorLogRead]:
    return get_error_logs(db, date_range)
