from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _truncate(value: Any, limit: int) -> Any:
    if isinstance(value, str):
        return value[:limit]
    return value


def _reject_null(value: Any, info) -> Any:
    # Partial updates may omit a required column but never clear it.
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value


class ConnectionStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    FAILED = "Failed"


class ConnectionCategory(str, Enum):
    DATABASE = "database"
    FILE = "file"
    CLOUD = "cloud"
    API = "api"
    OTHER = "other"


class SourceConnectionBase(CamelModel):
    connection_name: str = Field(..., min_length=1, max_length=100)
    connection_type: str = Field(..., min_length=1, max_length=50)
    host: Optional[str] = Field(None, max_length=100)
    port: Optional[int] = Field(None, ge=1, le=65535)
    username: Optional[str] = Field(None, max_length=50)
    database_name: Optional[str] = Field(None, max_length=50)
    file_path: Optional[str] = Field(None, max_length=200)
    cloud_provider: Optional[str] = Field(None, max_length=50)
    last_sync: Optional[datetime] = None


class SourceConnectionCreate(SourceConnectionBase):
    password: Optional[str] = Field(None, max_length=200)
    api_key: Optional[str] = Field(None, max_length=200)
    status: ConnectionStatus = ConnectionStatus.PENDING


class SourceConnectionUpdate(CamelModel):
    connection_name: Optional[str] = Field(None, min_length=1, max_length=100)
    connection_type: Optional[str] = Field(None, min_length=1, max_length=50)
    host: Optional[str] = Field(None, max_length=100)
    port: Optional[int] = Field(None, ge=1, le=65535)
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, max_length=200)
    database_name: Optional[str] = Field(None, max_length=50)
    file_path: Optional[str] = Field(None, max_length=200)
    api_key: Optional[str] = Field(None, max_length=200)
    cloud_provider: Optional[str] = Field(None, max_length=50)
    last_sync: Optional[datetime] = None
    status: Optional[ConnectionStatus] = None

    @field_validator("connection_name", "connection_type", mode="before")
    @classmethod
    def _required_columns(cls, value, info):
        return _reject_null(value, info)


class SourceConnectionRead(SourceConnectionBase):
    connection_id: int
    status: Optional[str] = None
    has_password: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConnectionTestRequest(CamelModel):
    connection_type: str = Field(..., min_length=1, max_length=50)
    host: Optional[str] = None
    port: Optional[int] = Field(None, ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[str] = None
    database_name: Optional[str] = None


class ConnectionTestResult(CamelModel):
    success: bool
    message: str
    duration_ms: Optional[float] = None
    connection_summary: Optional[str] = None


class DeleteResult(CamelModel):
    success: bool = True
    message: str


class ColumnMetadata(CamelModel):
    attribute_name: str
    data_type: str
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_key_table: Optional[str] = None
    is_not_null: bool = False
    column_description: str = ""


class ColumnWithType(CamelModel):
    column_name: str
    data_type: str


class PipelineBase(CamelModel):
    execution_layer: Optional[str] = Field(None, max_length=30)
    source_system: Optional[str] = Field(None, max_length=30)
    source_connection_id: Optional[int] = Field(None, alias="connectionId")
    source_type: Optional[str] = Field(None, max_length=20)
    source_file_path: Optional[str] = Field(None, max_length=100)
    source_file_name: Optional[str] = Field(None, max_length=50)
    source_file_delimiter: Optional[str] = Field(None, max_length=2)
    source_schema_name: Optional[str] = Field(None, max_length=30)
    source_table_name: Optional[str] = Field(None, max_length=30)
    target_layer: Optional[str] = Field(None, max_length=30)
    target_system: Optional[str] = Field(None, max_length=30)
    target_connection_id: Optional[int] = None
    target_type: Optional[str] = Field(None, max_length=20)
    target_file_path: Optional[str] = Field(None, max_length=50)
    target_file_delimiter: Optional[str] = Field(None, max_length=2)
    target_schema_name: Optional[str] = Field(None, max_length=30)
    temporary_target_table: Optional[str] = Field(None, max_length=30)
    target_table_name: Optional[str] = Field(None, max_length=30)
    load_type: Optional[str] = Field(None, max_length=20)
    primary_key: Optional[str] = Field(None, max_length=40)
    effective_date_column: Optional[str] = Field(None, max_length=30)
    md5_columns: Optional[str] = Field(None, max_length=150)
    custom_code: Optional[str] = Field(None, max_length=150)
    execution_sequence: Optional[str] = Field(None, max_length=5)
    enable_dynamic_schema: Optional[str] = Field(None, max_length=1)
    active_flag: Optional[str] = Field(None, max_length=1)
    full_data_refresh_flag: Optional[str] = Field(None, alias="fullDataRefreshFlag", max_length=1)


class PipelineCreate(PipelineBase):
    pass


class PipelineUpdate(PipelineBase):
    pass


class PipelineRead(PipelineBase):
    config_key: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


_DICTIONARY_LIMITS = {
    "execution_layer": 50,
    "schema_name": 50,
    "table_name": 50,
    "attribute_name": 100,
    "data_type": 50,
    "column_description": 150,
    "created_by": 100,
    "updated_by": 100,
}


class DataDictionaryFields(CamelModel):
    """Column widths are enforced by truncation, mirroring what the form does client side."""

    schema_name: Optional[str] = None
    table_name: Optional[str] = None
    length: Optional[int] = Field(None, ge=0)
    precision_value: Optional[int] = Field(None, ge=0)
    scale: Optional[int] = Field(None, ge=0)
    column_description: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    is_not_null: Optional[str] = Field(None, max_length=1)
    is_primary_key: Optional[str] = Field(None, max_length=1)
    is_foreign_key: Optional[str] = Field(None, max_length=1)
    active_flag: Optional[str] = Field(None, max_length=1)

    @field_validator(*_DICTIONARY_LIMITS, mode="before", check_fields=False)
    @classmethod
    def _truncate_to_column_width(cls, value, info):
        return _truncate(value, _DICTIONARY_LIMITS[info.field_name])


class DataDictionaryCreate(DataDictionaryFields):
    config_key: int
    execution_layer: str = Field(..., min_length=1)
    attribute_name: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)
    active_flag: Optional[str] = Field("Y", max_length=1)


class DataDictionaryUpdate(DataDictionaryFields):
    config_key: Optional[int] = None
    execution_layer: Optional[str] = Field(None, min_length=1)
    attribute_name: Optional[str] = Field(None, min_length=1)
    data_type: Optional[str] = Field(None, min_length=1)

    @field_validator("config_key", "execution_layer", "attribute_name", "data_type", mode="before")
    @classmethod
    def _required_columns(cls, value, info):
        return _reject_null(value, info)


class DataDictionaryRead(DataDictionaryFields):
    data_dictionary_key: int
    config_key: int
    execution_layer: str
    attribute_name: str
    data_type: str
    insert_date: Optional[datetime] = None
    update_date: Optional[datetime] = None


class ReconciliationType(str, Enum):
    COUNT_CHECK = "count_check"
    SUM_CHECK = "sum_check"
    AMOUNT_CHECK = "amount_check"
    DATA_CHECK = "data_check"


class ReconciliationFields(CamelModel):
    config_key: Optional[int] = None
    source_schema: Optional[str] = Field(None, max_length=20)
    source_table: Optional[str] = Field(None, max_length=50)
    target_schema: Optional[str] = Field(None, max_length=50)
    target_table: Optional[str] = Field(None, max_length=50)
    attribute: Optional[str] = Field(None, max_length=20)
    source_query: Optional[str] = None
    target_query: Optional[str] = None
    threshold_percentage: Optional[int] = Field(None, ge=0, le=100)


class ReconciliationConfigCreate(ReconciliationFields):
    execution_layer: str = Field(..., min_length=1, max_length=20)
    recon_type: ReconciliationType
    active_flag: str = Field("Y", max_length=2)


class ReconciliationConfigUpdate(ReconciliationFields):
    execution_layer: Optional[str] = Field(None, min_length=1, max_length=20)
    recon_type: Optional[ReconciliationType] = None
    active_flag: Optional[str] = Field(None, max_length=2)

    @field_validator("execution_layer", "recon_type", "active_flag", mode="before")
    @classmethod
    def _required_columns(cls, value, info):
        return _reject_null(value, info)


class ReconciliationConfigRead(ReconciliationFields):
    recon_key: int
    execution_layer: str
    recon_type: str
    active_flag: str


class ValidationType(str, Enum):
    NOT_NULL = "NOT_NULL"
    UNIQUE = "UNIQUE"
    DATA_TYPE = "DATA_TYPE"
    RANGE = "RANGE"
    REGEX = "REGEX"
    CUSTOM = "CUSTOM"
    REFERENCE = "REFERENCE"


class DataQualityFields(CamelModel):
    reference_table_name: Optional[str] = Field(None, max_length=25)
    default_value: Optional[str] = Field(None, max_length=25)
    error_table_transfer_flag: Optional[str] = Field(None, max_length=5)
    threshold_percentage: Optional[int] = Field(None, ge=0, le=100)
    custom_query: Optional[str] = Field(None, max_length=500)
    source_system: Optional[str] = Field(None, max_length=50)
    source_connection_id: Optional[int] = None
    source_type: Optional[str] = Field(None, max_length=50)
    source_schema: Optional[str] = Field(None, max_length=50)
    source_table_name: Optional[str] = Field(None, max_length=50)
    target_system: Optional[str] = Field(None, max_length=50)
    target_connection_id: Optional[int] = None
    target_type: Optional[str] = Field(None, max_length=50)
    target_schema: Optional[str] = Field(None, max_length=50)
    target_table_name: Optional[str] = Field(None, max_length=50)


class DataQualityConfigCreate(DataQualityFields):
    config_key: int
    execution_layer: str = Field(..., min_length=1, max_length=100)
    table_name: str = Field(..., min_length=1, max_length=25)
    attribute_name: str = Field(..., min_length=1, max_length=250)
    validation_type: ValidationType
    error_table_transfer_flag: Optional[str] = Field("N", max_length=5)
    active_flag: Optional[str] = Field("Y", max_length=5)


class DataQualityConfigUpdate(DataQualityFields):
    config_key: Optional[int] = None
    execution_layer: Optional[str] = Field(None, min_length=1, max_length=100)
    table_name: Optional[str] = Field(None, min_length=1, max_length=25)
    attribute_name: Optional[str] = Field(None, min_length=1, max_length=250)
    validation_type: Optional[ValidationType] = None
    active_flag: Optional[str] = Field(None, max_length=5)

    @field_validator(
        "config_key",
        "execution_layer",
        "table_name",
        "attribute_name",
        "validation_type",
        mode="before",
    )
    @classmethod
    def _required_columns(cls, value, info):
        return _reject_null(value, info)


class DataQualityConfigRead(DataQualityFields):
    data_quality_key: int
    config_key: int
    execution_layer: str
    table_name: str
    attribute_name: str
    validation_type: str
    active_flag: Optional[str] = None


class DashboardMetrics(CamelModel):
    total_pipelines: int = 0
    successful_runs: int = 0
    failed_runs: int = 0
    scheduled_runs: int = 0
    running_runs: int = 0


class LayerSummary(CamelModel):
    total: int = 0
    success: int = 0
    failed: int = 0


class DagSummary(CamelModel):
    data_quality: LayerSummary = Field(default_factory=LayerSummary)
    reconciliation: LayerSummary = Field(default_factory=LayerSummary)
    bronze: LayerSummary = Field(default_factory=LayerSummary)
    silver: LayerSummary = Field(default_factory=LayerSummary)
    gold: LayerSummary = Field(default_factory=LayerSummary)


class DagRun(CamelModel):
    audit_key: int
    dag_name: str
    run_id: str
    layer: str
    status: str
    last_run: Optional[datetime] = None
    duration: Optional[int] = None


class DagRunPage(CamelModel):
    data: list[DagRun]
    total: int
    page: int
    limit: int


class ErrorLogRead(CamelModel):
    error_id: int
    config_key: Optional[int] = None
    audit_key: Optional[int] = None
    code_name: Optional[str] = None
    run_id: Optional[str] = None
    source_system: Optional[str] = None
    schema_name: Optional[str] = None
    target_table_name: Optional[str] = None
    source_file_name: Optional[str] = None
    execution_time: Optional[datetime] = None
    error_details: Optional[str] = None
