from config_hub.schemas.entities import (
    CamelModel,
    ColumnMetadata,
    ColumnWithType,
    ConnectionCategory,
    ConnectionStatus,
    ConnectionTestRequest,
    ConnectionTestResult,
    DagRun,
    DagRunPage,
    DagSummary,
    DashboardMetrics,
    DataDictionaryCreate,
    DataDictionaryFields,
    DataDictionaryRead,
    DataDictionaryUpdate,
    DataQualityConfigCreate,
    DataQualityConfigRead,
    DataQualityConfigUpdate,
    DataQualityFields,
    DeleteResult,
    ErrorLogRead,
    LayerSummary,
    PipelineBase,
    PipelineCreate,
    PipelineRead,
    PipelineUpdate,
    ReconciliationConfigCreate,
    ReconciliationConfigRead,
    ReconciliationConfigUpdate,
    ReconciliationFields,
    ReconciliationType,
    SourceConnectionBase,
    SourceConnectionCreate,
    SourceConnectionRead,
    SourceConnectionUpdate,
    ValidationType,
)

__all__ = [
    "CamelModel",
    "ColumnMetadata",
    "ColumnWithType",
    "ConnectionCategory",
    "ConnectionStatus",
    "ConnectionTestRequest",
    "ConnectionTestResult",
    "DagRun",
    "DagRunPage",
    "DagSummary",
    "DashboardMetrics",
    "DataDictionaryCreate",
    "DataDictionaryFields",
    "DataDictionaryRead",
    "DataDictionaryUpdate",
    "DataQualityConfigCreate",
    "DataQualityConfigRead",
    "DataQualityConfigUpdate",
    "DataQualityFields",
    "DeleteResult",
    "ErrorLogRead",
    "LayerSummary",
    "PipelineBase",
    "PipelineCreate",
    "PipelineRead",
    "PipelineUpdate",
    "ReconciliationConfigCreate",
    "ReconciliationConfigRead",
    "ReconciliationConfigUpdate",
    "ReconciliationFields",
    "ReconciliationType",
    "SourceConnectionBase",
    "SourceConnectionCreate",
    "SourceConnectionRead",
    "SourceConnectionUpdate",
    "ValidationType",
]
