"""
Analytics Routes — views across saved evaluations.

  GET /analytics?days=30             → aggregate statistics for the window
  GET /compare/{first_id}/{second_id} → second evaluation minus first (404 if either is unknown)
  GET /dataset/{title}/history        → saved evaluations of one dataset, newest first
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from metaquality.api.dependencies import get_audit_logger
from metaquality.audit.logger import AuditLogger
from metaquality.models.evaluation_models import EvaluationComparison, HistoryAnalytics

router = APIRouter(tags=["analytics"])


@router.get("/analytics", response_model=HistoryAnalytics)
async def analytics(
    days: int = Query(default=30, ge=1, le=3650),
    audit: AuditLogger = Depends(get_audit_logger),
):
    return audit.analytics(days=days)


@router.get("/compare/{first_id}/{second_id}", response_model=EvaluationComparison)
async def compare_evaluations(
    first_id: str,
    second_id: str,
    audit: AuditLogger = Depends(get_audit_logger),
):
    comparison = audit.compare(first_id, second_id)
    if comparison is None:
        raise HTTPException(status_code=404, detail="One or both evaluations not found")
    return comparison


@router.get("/dataset/{title}/history")
async def dataset_history(
    title: str,
    audit: AuditLogger = Depends(get_audit_logger),
):
    entries = audit.dataset_history(title)
    return {
        "dataset_name": title,
        "count": len(entries),
        "evaluations": [{k: v for k, v in e.items() if k != "result"} for e in entries],
    }
