"""
Field accessors used by rule checks.

Rules run on normalized records, where empty strings and empty lists are
already absent, but they still guard against wrong types.
"""

from __future__ import annotations

from typing import Any


def text_field(record: dict[str, Any], field: str) -> str | None:
    value = record.get(field)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def list_field(record: dict[str, Any], field: str) -> list[Any] | None:
    value = record.get(field)
    if isinstance(value, list) and value:
        return value
    return None


def first_present(record: dict[str, Any], *fields: str) -> Any:
    """Return the first truthy value among the given alias fields."""
    for field in fields:
        value = record.get(field)
        if value:
            return value
    return None


def as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
