"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from metaquality.audit.logger import AuditLogger
from metaquality.core.catalogue import RuleCatalogue, build_default_catalogue
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.workers.batch_worker import BatchWorker


def get_catalogue() -> RuleCatalogue:
    """Shared default rule catalogue (cached by its builder)."""
    return build_default_catalogue()


@lru_cache
def get_pipeline() -> EvaluationPipeline:
    """Shared evaluation pipeline singleton."""
    return EvaluationPipeline(catalogue=get_catalogue())


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_batch_worker() -> BatchWorker:
    """Shared batch worker singleton."""
    return BatchWorker(pipeline=get_pipeline())
