import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from config_hub.config import get_settings
from config_hub.database import get_db
from config_hub.models import SourceConnection
from config_hub.routers.common import apply_updates, normalize_payload
from config_hub.schemas import (
    ColumnMetadata,
    ColumnWithType,
    ConnectionStatus,
    ConnectionTestRequest,
    ConnectionTestResult,
    DeleteResult,
    SourceConnectionCreate,
    SourceConnectionRead,
    SourceConnectionUpdate,
)
from config_hub.services import introspection
from config_hub.services.connection_filters import build_connection_query
from config_hub.services.connection_testing import (
    ConnectionTestError,
    UnsupportedConnectionError,
    test_connection,
)
from config_hub.services.introspection import (
    ConnectionDescriptor,
    IntrospectionError,
    IntrospectionOptions,
)

router = APIRouter(prefix="/connections", tags=["Source Connections"])

logger = logging.getLogger(__name__)


def get_introspection_options() -> IntrospectionOptions:
    return IntrospectionOptions.from_settings(get_settings())


def _get_connection_or_404(connection_id: int, db: Session) -> SourceConnection:
    connection = db.get(SourceConnection, connection_id)
    if not connection:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    return connection


def _introspection_failure(exc: IntrospectionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=list[SourceConnectionRead])
def list_connections(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    connection_status: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
) -> list[SourceConnectionRead]:
    stmt = build_connection_query(category=category, search=search, status=connection_status)
    return db.execute(stmt).scalars().all()


@router.post("", response_model=SourceConnectionRead, status_code=status.HTTP_201_CREATED)
def create_connection(
    payload: SourceConnectionCreate, db: Session = Depends(get_db)
) -> SourceConnectionRead:
    connection = SourceConnection(**normalize_payload(payload.model_dump()))
    db.add(connection)
    db.commit()
    db.refresh(connection)
    logger.info("Created %s connection %s", connection.connection_type, connection.connection_id)
    return connection


@router.post("/test", response_model=ConnectionTestResult)
def test_unsaved_connection(
    payload: ConnectionTestRequest,
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> ConnectionTestResult:
    descriptor = ConnectionDescriptor(**payload.model_dump())
    try:
        duration_ms, summary = test_connection(descriptor, options)
    except ConnectionTestError as exc:
        return ConnectionTestResult(success=False, message=str(exc))

    return ConnectionTestResult(
        success=True,
        message="Connection successful.",
        duration_ms=duration_ms,
        connection_summary=summary,
    )


@router.get("/{connection_id}", response_model=SourceConnectionRead)
def get_connection(connection_id: int, db: Session = Depends(get_db)) -> SourceConnectionRead:
    return _get_connection_or_404(connection_id, db)


@router.put("/{connection_id}", response_model=SourceConnectionRead)
def update_connection(
    connection_id: int,
    payload: SourceConnectionUpdate,
    db: Session = Depends(get_db),
) -> SourceConnectionRead:
    connection = _get_connection_or_404(connection_id, db)

    update_data = payload.model_dump(exclude_unset=True)
    # Reads never return secrets, so a blank secret on update means "keep the stored one".
    for secret_field in ("password", "api_key"):
        if secret_field in update_data and not update_data[secret_field]:
            update_data.pop(secret_field)
    apply_updates(connection, update_data)

    db.commit()
    db.refresh(connection)
    return connection


@router.delete("/{connection_id}", response_model=DeleteResult)
def delete_connection(connection_id: int, db: Session = Depends(get_db)) -> DeleteResult:
    connection = _get_connection_or_404(connection_id, db)
    db.delete(connection)
    db.commit()
    return DeleteResult(message="Connection deleted successfully")


@router.post("/{connection_id}/test", response_model=ConnectionTestResult)
def test_stored_connection(
    connection_id: int,
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> ConnectionTestResult:
    connection = _get_connection_or_404(connection_id, db)
    descriptor = ConnectionDescriptor.from_record(connection)

    try:
        duration_ms, summary = test_connection(descriptor, options)
    except UnsupportedConnectionError as exc:
        return ConnectionTestResult(success=False, message=str(exc))
    except ConnectionTestError as exc:
        connection.status = ConnectionStatus.FAILED.value
        db.commit()
        return ConnectionTestResult(success=False, message=str(exc))

    connection.status = ConnectionStatus.ACTIVE.value
    connection.last_sync = datetime.now(timezone.utc)
    db.commit()
    return ConnectionTestResult(
        success=True,
        message="Connection successful.",
        duration_ms=duration_ms,
        connection_summary=summary,
    )


@router.get("/{connection_id}/schemas", response_model=list[str])
def list_connection_schemas(
    connection_id: int,
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> list[str]:
    descriptor = ConnectionDescriptor.from_record(_get_connection_or_404(connection_id, db))
    try:
        return introspection.list_schemas(descriptor, options)
    except IntrospectionError as exc:
        raise _introspection_failure(exc) from exc


@router.get("/{connection_id}/schemas/{schema_name}/tables", response_model=list[str])
def list_connection_tables(
    connection_id: int,
    schema_name: str,
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> list[str]:
    descriptor = ConnectionDescriptor.from_record(_get_connection_or_404(connection_id, db))
    try:
        return introspection.list_tables(descriptor, schema_name, options)
    except IntrospectionError as exc:
        raise _introspection_failure(exc) from exc


@router.get(
    "/{connection_id}/schemas/{schema_name}/tables/{table_name}/metadata",
    response_model=list[ColumnMetadata],
)
def get_table_metadata(
    connection_id: int,
    schema_name: str,
    table_name: str,
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> list[ColumnMetadata]:
    descriptor = ConnectionDescriptor.from_record(_get_connection_or_404(connection_id, db))
    try:
        columns = introspection.list_columns(descriptor, schema_name, table_name, options)
    except IntrospectionError as exc:
        raise _introspection_failure(exc) from exc
    return [ColumnMetadata.model_validate(column) for column in columns]


@router.get(
    "/{connection_id}/schemas/{schema_name}/tables/{table_name}/columns",
    response_model=list[str],
)
def list_table_columns(
    connection_id: int,
    schema_name: str,
    table_name: str,
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> list[str]:
    descriptor = ConnectionDescriptor.from_record(_get_connection_or_404(connection_id, db))
    try:
        columns = introspection.list_columns(descriptor, schema_name, table_name, options)
    except IntrospectionError as exc:
        raise _introspection_failure(exc) from exc
    return [column.attribute_name for column in columns]


@router.get(
    "/{connection_id}/schemas/{schema_name}/tables/{table_name}/columns-with-types",
    response_model=list[ColumnWithType],
)
def list_table_columns_with_types(
    connection_id: int,
    schema_name: str,
    table_name: str,
    data_types: Optional[str] = Query(None, alias="dataTypes"),
    db: Session = Depends(get_db),
    options: IntrospectionOptions = Depends(get_introspection_options),
) -> list[ColumnWithType]:
    descriptor = ConnectionDescriptor.from_record(_get_connection_or_404(connection_id, db))
    try:
        columns = introspection.list_column_types(
            descriptor, schema_name, table_name, options, data_types
        )
    except IntrospectionError as exc:
        raise _introspection_failure(exc) from exc
    return [
        ColumnWithType(column_name=column.attribute_name, data_type=column.data_type)
        for column in columns
    ]
