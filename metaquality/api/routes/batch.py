"""
Batch Routes — evaluate many records at once.

  POST /batch            → synchronous, small batches only
  POST /batch/start      → queue a background job, returns its id
  GET  /batch/{job_id}   → poll job status and, once complete, its results

Each record is scored independently; one bad record never fails the batch.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from metaquality.api.dependencies import get_batch_worker, get_pipeline
from metaquality.config import settings
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.models.evaluation_models import BatchJobStatus, BatchRequest, BatchResponse
from metaquality.workers.batch_worker import BatchWorker, build_batch_response

logger = logging.getLogger("metaquality.api.batch")

router = APIRouter(prefix="/batch", tags=["batch"])


def _check_size(records: list) -> None:
    if len(records) > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Batch exceeds maximum size of {settings.max_batch_size} records",
        )


@router.post("", response_model=BatchResponse)
async def batch_evaluate(
    request: BatchRequest,
    pipeline: EvaluationPipeline = Depends(get_pipeline),
):
    _check_size(request.records)
    if len(request.records) > settings.background_batch_threshold:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Batches over {settings.background_batch_threshold} records "
                "must be submitted via /batch/start"
            ),
        )

    items = pipeline.batch_evaluate(request.records)
    return build_batch_response(items)


@router.post("/start", response_model=BatchJobStatus, status_code=202)
async def start_batch(
    request: BatchRequest,
    background_tasks: BackgroundTasks,
    worker: BatchWorker = Depends(get_batch_worker),
):
    _check_size(request.records)
    job = worker.submit(request.records)
    background_tasks.add_task(worker.run_job, job.job_id)
    return job


@router.get("/{job_id}", response_model=BatchJobStatus)
async def batch_status(
    job_id: str,
    worker: BatchWorker = Depends(get_batch_worker),
):
    job = worker.get_status(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Batch job {job_id} not found")
    return job
