"""
Metadata Normalizer — Canonicalizes raw records before rules run.

Empty strings and empty lists collapse into absent keys so that rules only
need to check presence. The input is never mutated.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from metaquality.core.dates import parse_date

STRING_FIELDS = (
    "title",
    "description",
    "license",
    "publisher",
    "methodology",
    "funding",
    "spatial_coverage",
    "version",
    "doi",
    "access_url",
    "contact_email",
    "identifier",
    "language",
)

ARRAY_FIELDS = ("authors", "keywords", "data_format", "citations", "related_datasets")

DATE_FIELDS = ("publication_date",)


def normalize_metadata(raw: Any) -> dict[str, Any]:
    """Return a cleaned copy of a raw metadata record; non-mappings become {}."""
    if not isinstance(raw, Mapping):
        return {}

    normalized: dict[str, Any] = {str(k): copy.deepcopy(v) for k, v in raw.items()}

    for field in STRING_FIELDS:
        value = normalized.get(field)
        if isinstance(value, str):
            value = value.strip()
            if value:
                normalized[field] = value
            else:
                del normalized[field]

    for field in ARRAY_FIELDS:
        value = normalized.get(field)
        if isinstance(value, list):
            items = [item.strip() if isinstance(item, str) else item for item in value]
            items = [item for item in items if item not in ("", None) and item is not False]
            if items:
                normalized[field] = items
            else:
                del normalized[field]

    for field in DATE_FIELDS:
        if field in normalized:
            _normalize_date(normalized, field)

    return normalized


def _normalize_date(record: dict[str, Any], field: str) -> None:
    value = record[field]
    if value is None or (isinstance(value, str) and not value.strip()):
        del record[field]
        return
    parsed = parse_date(value)
    if parsed is not None:
        record[field] = parsed.isoformat()
    elif isinstance(value, str):
        # Unparseable dates are kept for the date-validity rule to report
        record[field] = value.strip()
