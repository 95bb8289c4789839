"""
Metaquality FastAPI Application — Metadata quality evaluation service.

  POST /evaluate[/detailed|/save] → score one metadata record
  POST /batch, /batch/start       → score many records
  GET  /rules[/statistics|/categories]
  GET  /history[/{evaluation_id}], DELETE /history/{evaluation_id}
  GET  /analytics, /compare/{a}/{b}, /dataset/{title}/history
  GET  /schema                    → JSON Schema of a metadata record
  POST /report/json
  GET  /health                    → {"status": "ok"}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from metaquality.api.routes.analytics import router as analytics_router
from metaquality.api.routes.batch import router as batch_router
from metaquality.api.routes.evaluate import router as evaluate_router
from metaquality.api.routes.health import router as health_router
from metaquality.api.routes.history import router as history_router
from metaquality.api.routes.report import router as report_router
from metaquality.api.routes.rules import router as rules_router
from metaquality.api.routes.schema import router as schema_router
from metaquality.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("metaquality")

app = FastAPI(
    title="Metaquality",
    description="Deterministic, explainable metadata quality scoring",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(rules_router)
app.include_router(evaluate_router)
app.include_router(batch_router)
app.include_router(history_router)
app.include_router(analytics_router)
app.include_router(report_router)
app.include_router(schema_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8', 'replace')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors()), "body": body.decode("utf-8", "replace")[:100]},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("metaquality.main:app", host=settings.host, port=settings.port)
