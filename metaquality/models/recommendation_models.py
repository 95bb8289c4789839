"""
Recommendation Data Models — Flat, grouped and phased remediation guidance.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from metaquality.models.rule_models import Category, Severity

RecommendationStatus = Literal["action_needed", "no_action_needed"]


class FlatRecommendation(BaseModel):
    """One entry of the ranked punch-list."""

    priority: int = Field(..., ge=1, description="1-based rank")
    rule_id: str
    rule: str
    category: Category
    severity: Severity
    issue: str
    action: str
    potential_gain: int = Field(..., description="Weight earned by fixing this rule")


class FlatRecommendations(BaseModel):
    type: Literal["flat"] = "flat"
    status: RecommendationStatus
    recommendations: list[FlatRecommendation] = Field(default_factory=list)
    summary: str
    total_issues: int = 0


class GroupedItem(BaseModel):
    rule_id: str
    rule: str
    severity: Severity
    issue: str
    recommendation: str
    weight: int
    priority_score: int
    is_priority: bool = False


class CategoryGroup(BaseModel):
    """Failed rules of one category."""

    category: Category
    display_name: str
    items: list[GroupedItem] = Field(default_factory=list)
    total_issues: int = 0
    critical_count: int = 0
    important_count: int = 0
    urgency: int = Field(default=0, description="critical×4 + important×2")


class PriorityAction(BaseModel):
    rule_id: str
    action: str
    impact: str
    severity: Severity
    category: Category


class GroupedRecommendations(BaseModel):
    type: Literal["grouped"] = "grouped"
    status: RecommendationStatus
    categories: list[CategoryGroup] = Field(default_factory=list)
    summary: str
    priority_actions: list[PriorityAction] = Field(default_factory=list)


class QuickWin(BaseModel):
    rule_id: str
    action: str
    impact: str


class RoadmapPhase(BaseModel):
    name: str
    description: str
    items: list[PriorityAction] = Field(default_factory=list)


class ImprovementRoadmap(BaseModel):
    phase1_critical: RoadmapPhase
    phase2_important: RoadmapPhase
    phase3_polish: RoadmapPhase
