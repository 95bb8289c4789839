"""
Scoring Data Models — Explainable breakdown of a quality score.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from metaquality.models.rule_models import Category, Severity


class CategoryScores(BaseModel):
    """Score (0-100) for each of the four quality categories."""

    identification: int = Field(..., ge=0, le=100)
    description: int = Field(..., ge=0, le=100)
    legal: int = Field(..., ge=0, le=100)
    provenance: int = Field(..., ge=0, le=100)

    def get(self, category: Category) -> int:
        return getattr(self, category.value)


class ScoreDetails(BaseModel):
    """Weights behind the percentages."""

    total_weight: int
    total_earned: int
    category_weights: dict[Category, int]
    category_earned: dict[Category, int]


class ScoreSummary(BaseModel):
    """Overall and per-category scores derived from rule results."""

    overall_score: int = Field(..., ge=0, le=100, description="Final quality score 0-100")
    categories: CategoryScores
    details: ScoreDetails
    formula: str = Field(
        default="score = round(100 × Σ passed weights / Σ all weights)",
        description="Human-readable formula used",
    )


class Grade(BaseModel):
    """Letter grade for an overall score."""

    letter: Literal["A", "B", "C", "D", "F"]
    label: str
    description: str


class CategoryPriority(BaseModel):
    category: Category
    score: int


class Improvement(BaseModel):
    """A failed rule and what fixing it is worth."""

    rule_id: str
    name: str
    category: Category
    weight: int
    severity: Severity
    priority_score: int
    message: str
    recommendation: str


class EvaluationSummary(BaseModel):
    total_rules: int
    passed: int
    failed: int
    pass_rate: int = Field(..., ge=0, le=100)


class ScoreReport(BaseModel):
    """Everything the score calculator derives from one rule run."""

    scores: ScoreSummary
    grade: Grade
    summary: EvaluationSummary
    category_priority: list[CategoryPriority] = Field(default_factory=list)
    top_improvements: list[Improvement] = Field(default_factory=list)
