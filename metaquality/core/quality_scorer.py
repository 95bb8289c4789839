"""
Quality Scoring Engine — Computes explainable quality scores from rule results.

Quality Score = round(100 × Σ weights of passed rules / Σ weights of all rules)

Weights always come from the catalogue, so a rule that faulted still counts
towards the total weight while earning nothing.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from metaquality.core.catalogue import RuleCatalogue
from metaquality.models.rule_models import CATEGORY_ORDER, Category, RuleResult
from metaquality.models.score_models import (
    CategoryPriority,
    CategoryScores,
    EvaluationSummary,
    Grade,
    Improvement,
    ScoreDetails,
    ScoreReport,
    ScoreSummary,
)

TOP_IMPROVEMENTS = 5

# (lower bound inclusive, letter, label, description), highest first
GRADE_THRESHOLDS: list[tuple[int, str, str, str]] = [
    (90, "A", "Excellent", "Metadata quality is excellent and meets or exceeds all standards."),
    (80, "B", "Good", "Metadata quality is good with minor improvements recommended."),
    (70, "C", "Acceptable", "Metadata quality is acceptable but could benefit from improvements."),
    (60, "D", "Needs Improvement", "Metadata quality needs improvement to meet recommended standards."),
    (0, "F", "Poor", "Metadata quality is poor and requires significant improvements."),
]


def percentage(earned: int, total: int) -> int:
    """100 × earned / total, rounded half-up to an integer."""
    ratio = Decimal(100 * earned) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_scores(rule_results: list[RuleResult], catalogue: RuleCatalogue) -> ScoreSummary:
    """
    Compute overall and per-category scores.

    Each rule id is counted at most once; results for rules the catalogue
    does not know are ignored.

    Args:
        rule_results: Output of RuleEngine.run().results
        catalogue: The catalogue the results were produced with

    Returns:
        ScoreSummary with percentages and the weights behind them.
    """
    total_weight = catalogue.total_weight()
    category_weights = catalogue.category_weights()
    category_earned: dict[Category, int] = {c: 0 for c in Category}

    counted: set[str] = set()
    for result in rule_results:
        rule = catalogue.get_rule(result.rule_id)
        if rule is None or rule.id in counted:
            continue
        counted.add(rule.id)
        if result.passed:
            category_earned[rule.category] += rule.weight

    total_earned = sum(category_earned.values())
    overall = percentage(total_earned, total_weight) if total_weight > 0 else 0

    category_scores = {
        c.value: (
            percentage(category_earned[c], category_weights[c])
            if category_weights[c] > 0
            else 100
        )
        for c in Category
    }

    return ScoreSummary(
        overall_score=overall,
        categories=CategoryScores(**category_scores),
        details=ScoreDetails(
            total_weight=total_weight,
            total_earned=total_earned,
            category_weights=category_weights,
            category_earned=category_earned,
        ),
    )


def get_grade(score: int) -> Grade:
    """Map an overall score onto the fixed A-F threshold table."""
    for lower, letter, label, description in GRADE_THRESHOLDS:
        if score >= lower:
            return Grade(letter=letter, label=label, description=description)
    lower, letter, label, description = GRADE_THRESHOLDS[-1]
    return Grade(letter=letter, label=label, description=description)


def get_category_priority(categories: CategoryScores) -> list[CategoryPriority]:
    """Categories ordered lowest score first; ties keep declaration order."""
    ranked = sorted(Category, key=lambda c: (categories.get(c), CATEGORY_ORDER[c]))
    return [CategoryPriority(category=c, score=categories.get(c)) for c in ranked]


def get_improvement_potential(
    rule_results: list[RuleResult], catalogue: RuleCatalogue
) -> list[Improvement]:
    """Failed rules ranked by priority score, then weight, then catalogue order."""
    improvements: list[Improvement] = []
    seen: set[str] = set()

    for result in rule_results:
        if result.passed or result.rule_id in seen:
            continue
        rule = catalogue.get_rule(result.rule_id)
        if rule is None:
            continue
        seen.add(rule.id)
        improvements.append(
            Improvement(
                rule_id=rule.id,
                name=rule.name,
                category=rule.category,
                weight=rule.weight,
                severity=rule.severity,
                priority_score=rule.priority_score,
                message=result.message,
                recommendation=rule.recommendation,
            )
        )

    improvements.sort(
        key=lambda i: (-i.priority_score, -i.weight, catalogue.index_of(i.rule_id))
    )
    return improvements


def summarize_results(rule_results: list[RuleResult]) -> EvaluationSummary:
    passed = sum(1 for r in rule_results if r.passed)
    total = len(rule_results)
    return EvaluationSummary(
        total_rules=total,
        passed=passed,
        failed=total - passed,
        pass_rate=percentage(passed, total) if total else 0,
    )


def calculate_score_summary(
    rule_results: list[RuleResult],
    catalogue: RuleCatalogue,
    top_n: int = TOP_IMPROVEMENTS,
) -> ScoreReport:
    """Scores, grade, pass counts, category priority and top improvements."""
    scores = calculate_scores(rule_results, catalogue)
    return ScoreReport(
        scores=scores,
        grade=get_grade(scores.overall_score),
        summary=summarize_results(rule_results),
        category_priority=get_category_priority(scores.categories),
        top_improvements=get_improvement_potential(rule_results, catalogue)[:top_n],
    )
