"""
JSON Report Generator — Structured report for programmatic use.

Builds a report from a DetailedEvaluationResult without recomputing or
altering any score; only labels (status, compliance level) are derived.
"""

from __future__ import annotations

import time
from typing import Any

from metaquality.models.evaluation_models import DetailedEvaluationResult
from metaquality.models.rule_models import Category, Severity

REPORT_VERSION = "1.0.0"
MAX_ACTION_ITEMS = 5
CI_MINIMUM_SCORE = 60


def assessment_status(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 80:
        return "good"
    if score >= 70:
        return "acceptable"
    if score >= 60:
        return "needs_improvement"
    return "poor"


def compliance_level(score: int) -> str:
    if score >= 90:
        return "full"
    if score >= 70:
        return "partial"
    if score >= 50:
        return "minimal"
    return "non_compliant"


def category_status(score: int) -> str:
    if score >= 80:
        return "good"
    if score >= 60:
        return "acceptable"
    if score >= 40:
        return "needs_work"
    return "critical"


def _results_by_category(detailed: DetailedEvaluationResult) -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = {c.value: [] for c in Category}
    for r in detailed.rule_results:
        grouped[r.category.value].append(
            {
                "rule_id": r.rule_id,
                "rule_name": r.rule_name,
                "passed": r.passed,
                "message": r.message,
                "value": r.value,
            }
        )
    return grouped


def _issues_by_severity(detailed: DetailedEvaluationResult) -> dict[str, int]:
    counts = {s.value: 0 for s in Severity}
    if detailed.recommendation_report:
        for group in detailed.recommendation_report.categories:
            for item in group.items:
                counts[item.severity.value] += 1
    return counts


def _action_items(detailed: DetailedEvaluationResult) -> list[dict]:
    """Priority actions first, topped up from top improvements."""
    items: list[dict] = []
    if detailed.recommendation_report:
        for action in detailed.recommendation_report.priority_actions[:MAX_ACTION_ITEMS]:
            items.append(
                {
                    "priority": len(items) + 1,
                    "rule_id": action.rule_id,
                    "severity": action.severity.value,
                    "category": action.category.value,
                    "action": action.action,
                    "potential_impact": action.impact,
                }
            )

    seen = {i["rule_id"] for i in items}
    for imp in detailed.top_improvements:
        if len(items) >= MAX_ACTION_ITEMS:
            break
        if imp.rule_id in seen:
            continue
        seen.add(imp.rule_id)
        items.append(
            {
                "priority": len(items) + 1,
                "rule_id": imp.rule_id,
                "severity": imp.severity.value,
                "category": imp.category.value,
                "action": imp.recommendation,
                "potential_impact": f"+{imp.weight} points",
            }
        )
    return items


def _improvement_plan(detailed: DetailedEvaluationResult) -> dict[str, Any]:
    """Ranked punch-list, low-effort fixes and the phased roadmap."""
    flat = detailed.flat_recommendations
    roadmap = detailed.roadmap
    return {
        "ranked": [r.model_dump(mode="json") for r in flat.recommendations] if flat else [],
        "quick_wins": [w.model_dump() for w in detailed.easy_wins],
        "roadmap": roadmap.model_dump(mode="json") if roadmap else None,
    }


def generate_json_report(
    detailed: DetailedEvaluationResult,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Generate the structured JSON report.

    Args:
        detailed: Output of EvaluationPipeline.evaluate_detailed()
        metadata: The (normalized) record that was evaluated

    Returns:
        JSON-serializable dict.
    """
    metadata = metadata or {}
    score = detailed.overall_score
    results_by_category = _results_by_category(detailed)
    by_severity = _issues_by_severity(detailed)

    return {
        "report_version": REPORT_VERSION,
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "evaluated_on": detailed.evaluated_on.isoformat() if detailed.evaluated_on else None,
        "evaluation_time_ms": detailed.evaluation_time_ms,
        "dataset": {
            "title": metadata.get("title") or "Untitled Dataset",
            "identifier": metadata.get("doi") or metadata.get("identifier"),
            "version": metadata.get("version"),
        },
        "assessment": {
            "overall_score": score,
            "grade": detailed.grade.model_dump(),
            "status": assessment_status(score),
            "compliance_level": compliance_level(score),
        },
        "scores": {
            "overall": score,
            "categories": {
                c.value: {
                    "score": detailed.categories.get(c),
                    "status": category_status(detailed.categories.get(c)),
                }
                for c in Category
            },
        },
        "schema_validation": detailed.schema_validation.model_dump(),
        "validation": {
            "rules_evaluated": detailed.summary.total_rules,
            "rules_passed": detailed.summary.passed,
            "rules_failed": detailed.summary.failed,
            "pass_rate": detailed.summary.pass_rate,
        },
        "issues": {
            "total": detailed.summary.failed,
            "by_severity": by_severity,
            "by_category": {
                cat: sum(1 for r in results if not r["passed"])
                for cat, results in results_by_category.items()
            },
        },
        "detailed_results": results_by_category,
        "recommendations": _action_items(detailed),
        "improvement_plan": _improvement_plan(detailed),
        "ci_summary": {
            "passed": score >= CI_MINIMUM_SCORE,
            "minimum_score_threshold": CI_MINIMUM_SCORE,
            "blocking_issues": by_severity[Severity.CRITICAL.value],
            "warnings": by_severity[Severity.IMPORTANT.value] + by_severity[Severity.WARNING.value],
        },
    }
