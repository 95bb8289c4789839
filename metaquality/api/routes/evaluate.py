"""
Evaluation Routes — score a single metadata record.

  POST /evaluate           → summary result
  POST /evaluate/detailed  → summary plus every intermediate artifact
  POST /evaluate/save      → detailed result, recorded to history

The body is any JSON value; malformed records are scored, never rejected.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from metaquality.api.dependencies import get_audit_logger, get_pipeline
from metaquality.audit.logger import AuditLogger
from metaquality.config import settings
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.models.evaluation_models import DetailedEvaluationResult, EvaluationResult

logger = logging.getLogger("metaquality.api.evaluate")

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluationResult)
async def evaluate(
    metadata: Any = Body(default=None),
    pipeline: EvaluationPipeline = Depends(get_pipeline),
):
    return pipeline.evaluate(metadata)


@router.post("/detailed", response_model=DetailedEvaluationResult)
async def evaluate_detailed(
    metadata: Any = Body(default=None),
    pipeline: EvaluationPipeline = Depends(get_pipeline),
):
    return pipeline.evaluate_detailed(metadata)


@router.post("/save")
async def evaluate_and_save(
    metadata: Any = Body(default=None),
    pipeline: EvaluationPipeline = Depends(get_pipeline),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Evaluate in detail and append the result to the history log."""
    result = pipeline.evaluate_detailed(metadata)
    entry = audit.build_entry(result)
    if settings.history_enabled:
        audit.log(entry)
        logger.info(f"[{entry.evaluation_id}] Saved evaluation (score {entry.overall_score})")
    return {
        "evaluation_id": entry.evaluation_id,
        "saved": settings.history_enabled,
        "result": result,
    }
