from enum import Enum
from typing import Any


def normalize_payload(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


def apply_updates(instance: Any, data: dict[str, Any]) -> None:
    for field_name, value in normalize_payload(data).items():
        setattr(instance, field_name, value)
