from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from config_hub.models import ConfigRecord


class UnknownLookupCategory(LookupError):
    """Raised when a dropdown category has no registered option list."""


DEFAULT_OPTIONS: dict[str, tuple[str, ...]] = {
    "execution_layer": ("Bronze", "Silver", "Gold"),
    "load_type": ("Truncate and Load", "Incremental", "SCD1", "SCD2"),
    "source_type": ("Table", "File", "API"),
    "target_type": ("Table", "File"),
    "source_system": (),
    "active_flag": ("Y", "N"),
    "is_not_null": ("Y", "N"),
    "recon_type": ("count_check", "sum_check", "amount_check", "data_check"),
    "data_type": ("varchar", "integer", "bigint", "decimal", "date", "timestamp", "boolean", "text"),
    "file_delimiter": (",", "|", "\t", ";"),
    "execution_sequence": ("1", "2", "3", "4", "5"),
    "validation_type": ("NOT_NULL", "UNIQUE", "DATA_TYPE", "RANGE", "REGEX", "CUSTOM", "REFERENCE"),
}

# Categories that also surface values already used by saved pipelines.
_CONFIG_COLUMNS = {
    "execution_layer": ConfigRecord.execution_layer,
    "source_system": ConfigRecord.source_system,
    "source_type": ConfigRecord.source_type,
    "target_type": ConfigRecord.target_type,
    "load_type": ConfigRecord.load_type,
}


def _merge_unique(defaults: Iterable[str], stored: Iterable[Optional[str]]) -> list[str]:
    merged = list(defaults)
    seen = {value.lower() for value in merged}
    for value in stored:
        cleaned = (value or "").strip()
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        merged.append(cleaned)
    return merged


def get_lookup_values(db: Session, category: str) -> list[str]:
    normalized = (category or "").strip().lower()
    if normalized not in DEFAULT_OPTIONS:
        raise UnknownLookupCategory(f"Unknown metadata category: {category}")

    defaults = DEFAULT_OPTIONS[normalized]
    column = _CONFIG_COLUMNS.get(normalized)
    if column is None:
        return list(defaults)

    stored = db.execute(select(column).distinct().order_by(column)).scalars().all()
    return _merge_unique(defaults, stored)
