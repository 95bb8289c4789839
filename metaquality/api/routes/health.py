"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metaquality.api.dependencies import get_catalogue
from metaquality.core.catalogue import RuleCatalogue

router = APIRouter()


@router.get("/health")
async def health(catalogue: RuleCatalogue = Depends(get_catalogue)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "engine": "deterministic",
        "rules": len(catalogue),
    }
