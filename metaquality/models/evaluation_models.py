"""
Evaluation Request/Response Models — API contract schemas.

These are the public-facing Pydantic models returned by the evaluation
pipeline and served unchanged by the FastAPI endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field

from metaquality.models.metadata_models import SchemaValidation
from metaquality.models.recommendation_models import (
    FlatRecommendations,
    GroupedRecommendations,
    ImprovementRoadmap,
    PriorityAction,
    QuickWin,
)
from metaquality.models.rule_models import RuleResult
from metaquality.models.score_models import (
    CategoryPriority,
    CategoryScores,
    EvaluationSummary,
    Grade,
    Improvement,
)


class EvaluationResult(BaseModel):
    """Summary evaluation of one metadata record."""

    overall_score: int = Field(..., ge=0, le=100)
    grade: Grade
    categories: CategoryScores
    summary: EvaluationSummary
    recommendations: list[str] = Field(default_factory=list)
    schema_validation: SchemaValidation = Field(default_factory=SchemaValidation)
    evaluation_time_ms: float = Field(default=0.0, description="Wall-clock diagnostic only")


class DetailedEvaluationResult(EvaluationResult):
    """Summary evaluation plus every intermediate artifact."""

    rule_results: list[RuleResult] = Field(default_factory=list)
    category_priority: list[CategoryPriority] = Field(default_factory=list)
    top_improvements: list[Improvement] = Field(default_factory=list)
    recommendation_report: GroupedRecommendations | None = None
    quick_wins: list[PriorityAction] = Field(
        default_factory=list, description="Highest-priority actions of the grouped report"
    )
    flat_recommendations: FlatRecommendations | None = None
    easy_wins: list[QuickWin] = Field(
        default_factory=list, description="Failed rules that take little effort to fix"
    )
    roadmap: ImprovementRoadmap | None = None
    normalized_metadata: dict[str, Any] = Field(default_factory=dict)
    evaluated_on: date | None = None


class BatchItemResult(BaseModel):
    """Evaluation of one record in a batch, tagged with its input index."""

    index: int
    result: EvaluationResult | None = None
    error: str | None = None


class BatchRequest(BaseModel):
    """Request body for /batch endpoints. Records may be any JSON value."""

    records: list[Any] = Field(default_factory=list)


class BatchResponse(BaseModel):
    message: str = "batch_complete"
    total: int = 0
    evaluated: int = 0
    failed: int = 0
    average_score: float | None = None
    results: list[BatchItemResult] = Field(default_factory=list)


class BatchJobStatus(BaseModel):
    """Response for polling a background batch job."""

    job_id: str
    status: Literal["queued", "running", "complete", "failed"]
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    total: int = 0
    response: BatchResponse | None = None
    error: str | None = None


class HistoryEntry(BaseModel):
    """A saved evaluation as recorded in the history log."""

    evaluation_id: str
    timestamp: str = ""
    title: str | None = None
    overall_score: int = Field(..., ge=0, le=100)
    grade: str
    failed_rules: int = 0
    duration_ms: float = 0.0
    result: dict[str, Any] = Field(default_factory=dict)


class RuleChange(BaseModel):
    rule_id: str
    before: bool
    after: bool
    improvement: bool


class EvaluationComparison(BaseModel):
    """Difference between two saved evaluations (second minus first)."""

    evaluation1: dict[str, Any]
    evaluation2: dict[str, Any]
    score_diff: int
    score_improved: bool
    category_diffs: dict[str, int] = Field(default_factory=dict)
    rule_changes: list[RuleChange] = Field(default_factory=list)
    recommendations_resolved: list[str] = Field(default_factory=list)
    new_recommendations: list[str] = Field(default_factory=list)


class AnalyticsOverview(BaseModel):
    total_evaluations: int = 0
    average_score: float | None = None
    min_score: int | None = None
    max_score: int | None = None
    high_quality_count: int = Field(default=0, description="Grades A and B")
    low_quality_count: int = Field(default=0, description="Grades D and F")


class DailyTrend(BaseModel):
    date: str
    evaluations: int
    average_score: float


class CommonIssue(BaseModel):
    rule_id: str
    count: int


class HistoryAnalytics(BaseModel):
    """Aggregate statistics over saved evaluations in a time window."""

    days: int
    start: str
    overall: AnalyticsOverview
    score_distribution: dict[str, int] = Field(default_factory=dict)
    grade_distribution: dict[str, int] = Field(default_factory=dict)
    category_averages: dict[str, int] = Field(default_factory=dict)
    daily_trend: list[DailyTrend] = Field(default_factory=list)
    common_issues: list[CommonIssue] = Field(default_factory=list)
