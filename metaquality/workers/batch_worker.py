"""
Batch Worker — Background batch evaluation jobs.

Jobs are created as "queued", switch to "running" once picked up, and end as
"complete" (with a BatchResponse) or "failed" (with an error string). The
batch itself runs off the event loop via asyncio.to_thread. Only the most
recent `max_finished_jobs` finished jobs are kept; older ones are evicted
oldest-first and then poll as unknown.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections import deque
from typing import Any

from metaquality.config import settings
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.models.evaluation_models import BatchItemResult, BatchJobStatus, BatchResponse

logger = logging.getLogger("metaquality.worker")


def build_batch_response(items: list[BatchItemResult]) -> BatchResponse:
    """Aggregate per-record batch results into one response."""
    scores = [item.result.overall_score for item in items if item.result is not None]
    return BatchResponse(
        total=len(items),
        evaluated=len(scores),
        failed=len(items) - len(scores),
        average_score=round(sum(scores) / len(scores), 2) if scores else None,
        results=items,
    )


class BatchWorker:
    """In-memory batch job runner."""

    def __init__(
        self,
        pipeline: EvaluationPipeline | None = None,
        max_finished_jobs: int | None = None,
    ) -> None:
        self.pipeline = pipeline or EvaluationPipeline()
        self.max_finished_jobs = max_finished_jobs or settings.max_finished_jobs

        # In-memory job store (lost on restart)
        self._jobs: dict[str, BatchJobStatus] = {}
        self._records: dict[str, list[Any]] = {}
        # Finished job ids, oldest first
        self._finished: deque[str] = deque()

    def submit(self, records: list[Any]) -> BatchJobStatus:
        """Register a new job in the queued state."""
        job_id = str(uuid.uuid4())[:8]
        status = BatchJobStatus(job_id=job_id, status="queued", total=len(records))
        self._jobs[job_id] = status
        self._records[job_id] = list(records)
        logger.info(f"[{job_id}] Queued batch of {len(records)} records")
        return status

    def get_status(self, job_id: str) -> BatchJobStatus | None:
        return self._jobs.get(job_id)

    async def run_job(self, job_id: str) -> None:
        """Run a queued job to completion, recording its final state."""
        status = self._jobs.get(job_id)
        records = self._records.pop(job_id, None)
        if status is None or records is None:
            logger.warning(f"[{job_id}] Unknown or already started job")
            return

        status.status = "running"
        start_time = time.monotonic()

        def _progress(done: int, total: int) -> None:
            status.progress = done / total if total else 1.0

        try:
            items = await asyncio.to_thread(self.pipeline.batch_evaluate, records, _progress)
        except Exception as e:
            logger.exception(f"[{job_id}] Batch job failed")
            status.status = "failed"
            status.error = f"{type(e).__name__}: {e}"
            self._mark_finished(job_id)
            return

        status.response = build_batch_response(items)
        status.progress = 1.0
        status.status = "complete"
        self._mark_finished(job_id)

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            f"[{job_id}] Batch complete in {elapsed_ms:.0f}ms, "
            f"{status.response.evaluated}/{status.response.total} evaluated"
        )

    def _mark_finished(self, job_id: str) -> None:
        self._finished.append(job_id)
        while len(self._finished) > self.max_finished_jobs:
            evicted = self._finished.popleft()
            self._jobs.pop(evicted, None)
            logger.debug(f"[{evicted}] Evicted finished job")
