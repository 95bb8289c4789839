"""
Schema Route — GET /schema

JSON Schema of the metadata record shape reported in `schema_validation`.
"""

from __future__ import annotations

from fastapi import APIRouter

from metaquality.core.schema_validation import metadata_json_schema

router = APIRouter(tags=["schema"])


@router.get("/schema")
async def schema():
    return metadata_json_schema()
