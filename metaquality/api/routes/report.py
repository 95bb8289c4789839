"""
Report Route — POST /report/json

Evaluates the record in detail and returns the structured JSON report.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from metaquality.api.dependencies import get_pipeline
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.reports.json_report import generate_json_report

router = APIRouter(prefix="/report", tags=["report"])


@router.post("/json")
async def json_report(
    metadata: Any = Body(default=None),
    pipeline: EvaluationPipeline = Depends(get_pipeline),
):
    detailed = pipeline.evaluate_detailed(metadata)
    return generate_json_report(detailed, detailed.normalized_metadata)
