from __future__ import annotations

from typing import Optional

from sqlalchemy import Select, func, not_, or_, select

from config_hub.models.entities import SourceConnection
from config_hub.schemas import ConnectionCategory

CATEGORY_TYPES: dict[ConnectionCategory, tuple[str, ...]] = {
    ConnectionCategory.DATABASE: ("postgresql", "mysql", "sql server", "oracle", "database"),
    ConnectionCategory.FILE: ("file", "csv", "json", "excel", "parquet"),
    ConnectionCategory.CLOUD: ("azure", "aws", "gcp", "snowflake", "bigquery", "cloud"),
    ConnectionCategory.API: ("api", "rest", "graphql"),
}


def _known_types() -> tuple[str, ...]:
    return tuple(value for types in CATEGORY_TYPES.values() for value in types)


def build_connection_query(
    *,
    category: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> Select:
    stmt = select(SourceConnection)
    connection_type = func.lower(SourceConnection.connection_type)

    normalized_category = (category or "").strip().lower()
    if normalized_category and normalized_category != "all":
        try:
            parsed = ConnectionCategory(normalized_category)
        except ValueError:
            parsed = None
        if parsed is None:
            # An unrecognised category matches nothing rather than everything.
            stmt = stmt.where(SourceConnection.connection_id.is_(None))
        elif parsed is ConnectionCategory.OTHER:
            stmt = stmt.where(not_(connection_type.in_(_known_types())))
        else:
            stmt = stmt.where(connection_type.in_(CATEGORY_TYPES[parsed]))

    term = (search or "").strip()
    if term:
        pattern = f"%{term.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(SourceConnection.connection_name).like(pattern),
                func.lower(func.coalesce(SourceConnection.host, "")).like(pattern),
                connection_type.like(pattern),
            )
        )

    normalized_status = (status or "").strip()
    if normalized_status and normalized_status.lower() != "all":
        stmt = stmt.where(func.lower(SourceConnection.status) == normalized_status.lower())

    return stmt.order_by(SourceConnection.connection_id.desc())
