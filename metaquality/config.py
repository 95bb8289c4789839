"""
Metaquality Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
None are required; defaults produce a working local service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Recommendations ──
    max_recommendations: int = Field(
        default=10, ge=1, description="Items in flat lists and grouped priority actions"
    )
    simple_recommendation_limit: int = Field(
        default=5, ge=1, description="Sentences returned in the summary evaluation"
    )
    top_improvements_count: int = Field(
        default=5, ge=1, description="Failed rules listed as top improvements"
    )
    quick_wins_count: int = Field(
        default=3, ge=0, description="Priority actions surfaced as quick wins"
    )

    # ── Batch ──
    max_batch_size: int = Field(
        default=100, ge=1, description="Max records accepted by a single batch request"
    )
    background_batch_threshold: int = Field(
        default=20,
        description="Batches above this size are refused by /batch and must use /batch/start",
    )
    max_finished_jobs: int = Field(
        default=100, ge=1, description="Completed or failed batch jobs kept for polling"
    )

    # ── History ──
    audit_log_path: str = Field(
        default="evaluations.jsonl", description="Path to JSON-lines evaluation history"
    )
    history_enabled: bool = Field(
        default=True, description="Record saved evaluations to the history log"
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Shared instance, read at import time
settings = Settings()
