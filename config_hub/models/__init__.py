from config_hub.models.entities import (
    AuditRecord,
    ConfigRecord,
    DataDictionaryRecord,
    DataQualityConfig,
    ErrorRecord,
    ReconciliationConfig,
    SourceConnection,
)

__all__ = [
    "AuditRecord",
    "ConfigRecord",
    "DataDictionaryRecord",
    "DataQualityConfig",
    "ErrorRecord",
    "ReconciliationConfig",
    "SourceConnection",
]
