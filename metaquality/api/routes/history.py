"""
History Routes — saved evaluations.

  GET    /history                  → most recent saved evaluations
  GET    /history/{evaluation_id}  → one saved evaluation (404 if unknown)
  DELETE /history/{evaluation_id}  → remove a saved evaluation (404 if unknown)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from metaquality.api.dependencies import get_audit_logger
from metaquality.audit.logger import AuditLogger

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def list_history(
    limit: int = Query(default=50, ge=1, le=500),
    audit: AuditLogger = Depends(get_audit_logger),
):
    entries = audit.read_recent(limit)
    # Listing omits the stored result body
    return {
        "count": len(entries),
        "entries": [{k: v for k, v in e.items() if k != "result"} for e in entries],
    }


@router.get("/{evaluation_id}")
async def get_history_entry(
    evaluation_id: str,
    audit: AuditLogger = Depends(get_audit_logger),
):
    entry = audit.get(evaluation_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Evaluation {evaluation_id} not found")
    return entry


@router.delete("/{evaluation_id}")
async def delete_history_entry(
    evaluation_id: str,
    audit: AuditLogger = Depends(get_audit_logger),
):
    if not audit.delete(evaluation_id):
        raise HTTPException(status_code=404, detail=f"Evaluation {evaluation_id} not found")
    return {"success": True, "message": "Evaluation deleted"}
