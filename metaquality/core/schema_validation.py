"""
Schema Validation — Structural check of a normalized record.

Runs after normalization, so blank strings and empty lists have already been
dropped and an all-blank title counts as missing.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from metaquality.models.metadata_models import MetadataDocument, SchemaError, SchemaValidation


def validate_metadata(metadata: dict[str, Any]) -> SchemaValidation:
    try:
        MetadataDocument.model_validate(metadata)
    except ValidationError as e:
        errors = [
            SchemaError(
                field=".".join(str(part) for part in err["loc"]) or "root",
                message=err["msg"],
                keyword=err["type"],
            )
            for err in e.errors()
        ]
        return SchemaValidation(valid=False, error_count=len(errors), errors=errors)
    return SchemaValidation()


def metadata_json_schema() -> dict[str, Any]:
    """JSON Schema of the expected metadata record."""
    return MetadataDocument.model_json_schema()
