"""
Rule Data Models — Categories, severities, rule definitions and outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    IDENTIFICATION = "identification"
    DESCRIPTION = "description"
    LEGAL = "legal"
    PROVENANCE = "provenance"


# Declaration order of Category is the canonical tie-break order
CATEGORY_ORDER: dict[Category, int] = {c: i for i, c in enumerate(Category)}


class Severity(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    WARNING = "warning"
    SUGGESTION = "suggestion"


SEVERITY_MULTIPLIERS: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.IMPORTANT: 3,
    Severity.WARNING: 2,
    Severity.SUGGESTION: 1,
}


class EvaluationContext(BaseModel):
    """Inputs shared by every rule check besides the record itself."""

    model_config = ConfigDict(frozen=True)

    today: date = Field(..., description="Evaluation-time clock for date rules")


class RuleOutcome(BaseModel):
    """Result of one rule check against one record."""

    passed: bool
    value: Any = Field(default=None, description="Inspected value or derived metric")
    message: str = Field(..., description="Human-readable pass/fail explanation")


class RuleFault(BaseModel):
    """A rule check that could not produce an outcome."""

    rule_id: str
    error_type: str
    error_message: str


# Type for a rule check function
RuleCheckFn = Callable[[dict[str, Any], EvaluationContext], RuleOutcome]


@dataclass(frozen=True)
class RuleDeclaration:
    """
    A rule as authored in a rule group module.

    The category is a free label here (rule groups may still use legacy
    labels such as 'accessibility'); the catalogue resolves it to a
    Category when it builds RuleDefinitions.
    """

    id: str
    name: str
    description: str
    category: str
    weight: int
    severity: Severity
    check: RuleCheckFn
    recommendation: str


@dataclass(frozen=True)
class RuleDefinition:
    """An immutable catalogue rule with a resolved category."""

    id: str
    name: str
    description: str
    category: Category
    weight: int
    severity: Severity
    check_fn: RuleCheckFn
    recommendation: str

    @property
    def priority_score(self) -> int:
        return self.weight * SEVERITY_MULTIPLIERS[self.severity]

    def check(self, record: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
        return self.check_fn(record, context)

    def to_summary(self) -> RuleSummary:
        return RuleSummary(
            id=self.id,
            name=self.name,
            description=self.description,
            category=self.category,
            weight=self.weight,
            severity=self.severity,
        )


class RuleResult(BaseModel):
    """Outcome of a single rule, tagged with the rule it came from."""

    rule_id: str = Field(..., description="Catalogue rule identifier, e.g. 'title-presence'")
    rule_name: str
    category: Category
    passed: bool
    value: Any = None
    message: str = ""


class RuleRunResult(BaseModel):
    """Result of running every catalogue rule on one record."""

    results: list[RuleResult] = Field(default_factory=list)
    faults: list[RuleFault] = Field(default_factory=list)
    duration_ms: float = 0.0


class RuleSummary(BaseModel):
    """Public description of a catalogue rule."""

    id: str
    name: str
    description: str
    category: Category
    weight: int
    severity: Severity


class RuleStatistics(BaseModel):
    """Aggregate figures about a rule catalogue."""

    total_rules: int
    total_weight: int
    category_count: int
    category_counts: dict[Category, int]
    category_weights: dict[Category, int]
    severity_counts: dict[Severity, int]
