from datetime import datetime, timezone

from sqlalchemy import CHAR, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from config_hub.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=_utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=_utcnow, onupdate=_utcnow
    )


class SourceConnection(Base, TimestampMixin):
    __tablename__ = "source_connection_table"

    connection_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    connection_name: Mapped[str] = mapped_column(String(255), nullable=False)
    connection_type: Mapped[str] = mapped_column(String(100), nullable=False)
    host: Mapped[str | None] = mapped_column(String(255), nullable=True)
    port: Mapped[int | None] = mapped_column(Integer, nullable=True)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    database_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    file_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    api_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cloud_provider: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True, default="Pending")
    last_sync: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def has_password(self) -> bool:
        return bool(self.password)


class ConfigRecord(Base, TimestampMixin):
    __tablename__ = "config_table"

    config_key: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    execution_layer: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_system: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_file_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    source_file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    source_file_delimiter: Mapped[str | None] = mapped_column(String(10), nullable=True)
    source_schema_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_table_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_file_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    target_file_delimiter: Mapped[str | None] = mapped_column(String(10), nullable=True)
    target_schema_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    temporary_target_table: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_table_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    load_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    primary_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    effective_date_column: Mapped[str | None] = mapped_column(String(50), nullable=True)
    md5_columns: Mapped[str | None] = mapped_column(String(255), nullable=True)
    custom_code: Mapped[str | None] = mapped_column(String(500), nullable=True)
    execution_sequence: Mapped[str | None] = mapped_column(String(20), nullable=True)
    enable_dynamic_schema: Mapped[str | None] = mapped_column(String(1), nullable=True, default="N")
    active_flag: Mapped[str | None] = mapped_column(String(1), nullable=True, default="Y")
    full_data_refresh_flag: Mapped[str | None] = mapped_column(String(1), nullable=True, default="N")
    source_connection_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_layer: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_system: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_connection_id: Mapped[int | None] = mapped_column(Integer, nullable=True)


class DataDictionaryRecord(Base):
    __tablename__ = "data_dictionary_table"

    data_dictionary_key: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    config_key: Mapped[int] = mapped_column(Integer, nullable=False)
    execution_layer: Mapped[str] = mapped_column(String(50), nullable=False)
    schema_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    table_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    attribute_name: Mapped[str] = mapped_column(String(100), nullable=False)
    data_type: Mapped[str] = mapped_column(String(50), nullable=False)
    length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    precision_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scale: Mapped[int | None] = mapped_column(Integer, nullable=True)
    insert_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=_utcnow
    )
    update_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=_utcnow, onupdate=_utcnow
    )
    column_description: Mapped[str | None] = mapped_column(String(150), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_not_null: Mapped[str | None] = mapped_column(CHAR(1), nullable=True)
    is_primary_key: Mapped[str | None] = mapped_column(CHAR(1), nullable=True)
    is_foreign_key: Mapped[str | None] = mapped_column(CHAR(1), nullable=True)
    active_flag: Mapped[str | None] = mapped_column(CHAR(1), nullable=True)


class ReconciliationConfig(Base):
    __tablename__ = "reconciliation_config"

    recon_key: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_key: Mapped[int | None] = mapped_column(Integer, nullable=True)
    execution_layer: Mapped[str] = mapped_column(String(20), nullable=False)
    source_schema: Mapped[str | None] = mapped_column(String(20), nullable=True)
    source_table: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_schema: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_table: Mapped[str | None] = mapped_column(String(50), nullable=True)
    recon_type: Mapped[str] = mapped_column(String(50), nullable=False)
    attribute: Mapped[str | None] = mapped_column(String(20), nullable=True)
    source_query: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_query: Mapped[str | None] = mapped_column(Text, nullable=True)
    threshold_percentage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    active_flag: Mapped[str] = mapped_column(String(2), nullable=False, default="Y")


class DataQualityConfig(Base):
    __tablename__ = "data_quality_config_table"

    data_quality_key: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    config_key: Mapped[int] = mapped_column(Integer, nullable=False)
    execution_layer: Mapped[str] = mapped_column(String(100), nullable=False)
    table_name: Mapped[str] = mapped_column(String(25), nullable=False)
    attribute_name: Mapped[str] = mapped_column(String(250), nullable=False)
    validation_type: Mapped[str] = mapped_column(String(50), nullable=False)
    reference_table_name: Mapped[str | None] = mapped_column(String(25), nullable=True)
    default_value: Mapped[str | None] = mapped_column(String(25), nullable=True)
    error_table_transfer_flag: Mapped[str | None] = mapped_column(
        String(5), nullable=True, default="N"
    )
    threshold_percentage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    active_flag: Mapped[str | None] = mapped_column(String(5), nullable=True, default="Y")
    custom_query: Mapped[str | None] = mapped_column(String(500), nullable=True)
    source_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_connection_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_schema: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source_table_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_connection_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_schema: Mapped[str | None] = mapped_column(String(50), nullable=True)
    target_table_name: Mapped[str | None] = mapped_column(String(50), nullable=True)


class AuditRecord(Base):
    """Run history written by the pipeline engine; read-only for this service."""

    __tablename__ = "audit_table"

    audit_key: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_key: Mapped[int | None] = mapped_column(Integer, nullable=True)
    code_name: Mapped[str | None] = mapped_column(String(60), nullable=True)
    run_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_system: Mapped[str | None] = mapped_column(String(20), nullable=True)
    schema_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    target_table_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    source_file_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    inserted_row_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_row_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_row_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    no_change_row_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str | None] = mapped_column(String(10), nullable=True)
    last_pulled_time: Mapped[str | None] = mapped_column(String(40), nullable=True)


class ErrorRecord(Base):
    __tablename__ = "error_table"

    # The engine's error table has no key of its own; a surrogate id keeps the ORM happy.
    error_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    config_key: Mapped[int | None] = mapped_column(Integer, nullable=True)
    audit_key: Mapped[int | None] = mapped_column(Integer, nullable=True)
    code_name: Mapped[str | None] = mapped_column(String(60), nullable=True)
    run_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_system: Mapped[str | None] = mapped_column(String(20), nullable=True)
    schema_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    target_table_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    source_file_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    execution_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    error_details: Mapped[str | None] = mapped_column(Text, nullable=True)
