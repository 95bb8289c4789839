"""
Recommendation Generator — Turns failed rules into prioritized guidance.

Priority = rule weight × severity multiplier (critical=4, important=3,
warning=2, suggestion=1). Ties fall back to raw weight, then catalogue order.
The same ranking feeds the flat list, the grouped report's priority actions
and the simple string list.
"""

from __future__ import annotations

from dataclasses import dataclass

from metaquality.core.catalogue import RuleCatalogue
from metaquality.models.recommendation_models import (
    CategoryGroup,
    FlatRecommendation,
    FlatRecommendations,
    GroupedItem,
    GroupedRecommendations,
    ImprovementRoadmap,
    PriorityAction,
    QuickWin,
    RoadmapPhase,
)
from metaquality.models.rule_models import (
    CATEGORY_ORDER,
    Category,
    RuleDefinition,
    RuleResult,
    Severity,
)

DEFAULT_MAX_RECOMMENDATIONS = 10
DEFAULT_SIMPLE_LIMIT = 5

NO_ISSUES_SUMMARY = "No issues found. Metadata quality is excellent!"
NO_ACTION_NEEDED = "No action needed: all quality rules passed."

CATEGORY_NAMES: dict[Category, str] = {
    Category.IDENTIFICATION: "Identification & Attribution",
    Category.DESCRIPTION: "Description & Discoverability",
    Category.LEGAL: "Legal & Licensing",
    Category.PROVENANCE: "Provenance & Access",
}

# Low-effort fixes surfaced as quick wins
QUICK_WIN_RULES = (
    "keywords-presence",
    "keywords-minimum-count",
    "publisher-presence",
    "version-present",
    "data-format-specified",
    "contact-for-licensing",
)


@dataclass(frozen=True)
class _FailedRule:
    rule: RuleDefinition
    message: str
    position: int


def summarize(failed: list[_FailedRule]) -> str:
    """One sentence with issue counts per severity."""
    if not failed:
        return NO_ISSUES_SUMMARY

    counts = {s: sum(1 for f in failed if f.rule.severity is s) for s in Severity}
    parts = []
    if counts[Severity.CRITICAL]:
        parts.append(f"{counts[Severity.CRITICAL]} critical")
    if counts[Severity.IMPORTANT]:
        parts.append(f"{counts[Severity.IMPORTANT]} important")
    if counts[Severity.WARNING]:
        n = counts[Severity.WARNING]
        parts.append(f"{n} warning{'s' if n > 1 else ''}")
    if counts[Severity.SUGGESTION]:
        n = counts[Severity.SUGGESTION]
        parts.append(f"{n} suggestion{'s' if n > 1 else ''}")

    total = len(failed)
    return f"Found {total} issue{'s' if total > 1 else ''}: {', '.join(parts)}."


class RecommendationGenerator:
    """Builds flat, grouped, simple and phased views of failed rules."""

    def __init__(self, catalogue: RuleCatalogue) -> None:
        self.catalogue = catalogue

    def ranked_failures(self, rule_results: list[RuleResult]) -> list[_FailedRule]:
        """Failed rules, one per rule id, in priority order."""
        failed: list[_FailedRule] = []
        seen: set[str] = set()
        for result in rule_results:
            if result.passed or result.rule_id in seen:
                continue
            rule = self.catalogue.get_rule(result.rule_id)
            if rule is None:
                continue
            seen.add(rule.id)
            failed.append(
                _FailedRule(
                    rule=rule,
                    message=result.message,
                    position=self.catalogue.index_of(rule.id),
                )
            )
        failed.sort(key=lambda f: (-f.rule.priority_score, -f.rule.weight, f.position))
        return failed

    def generate_flat(
        self,
        rule_results: list[RuleResult],
        max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    ) -> FlatRecommendations:
        failed = self.ranked_failures(rule_results)
        top = failed[:max_recommendations]
        return FlatRecommendations(
            status="action_needed" if failed else "no_action_needed",
            recommendations=[
                FlatRecommendation(
                    priority=rank,
                    rule_id=f.rule.id,
                    rule=f.rule.name,
                    category=f.rule.category,
                    severity=f.rule.severity,
                    issue=f.message,
                    action=f.rule.recommendation,
                    potential_gain=f.rule.weight,
                )
                for rank, f in enumerate(top, start=1)
            ],
            summary=summarize(failed),
            total_issues=len(failed),
        )

    def generate_grouped(
        self,
        rule_results: list[RuleResult],
        max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    ) -> GroupedRecommendations:
        failed = self.ranked_failures(rule_results)
        top = failed[:max_recommendations]
        top_ids = {f.rule.id for f in top}

        groups: dict[Category, CategoryGroup] = {}
        # failed is already in priority order, so items are appended sorted
        for f in failed:
            cat = f.rule.category
            if cat not in groups:
                groups[cat] = CategoryGroup(category=cat, display_name=CATEGORY_NAMES[cat])
            group = groups[cat]
            group.items.append(
                GroupedItem(
                    rule_id=f.rule.id,
                    rule=f.rule.name,
                    severity=f.rule.severity,
                    issue=f.message,
                    recommendation=f.rule.recommendation,
                    weight=f.rule.weight,
                    priority_score=f.rule.priority_score,
                    is_priority=f.rule.id in top_ids,
                )
            )
            group.total_issues += 1
            if f.rule.severity is Severity.CRITICAL:
                group.critical_count += 1
            elif f.rule.severity is Severity.IMPORTANT:
                group.important_count += 1

        for group in groups.values():
            group.urgency = group.critical_count * 4 + group.important_count * 2

        ordered = sorted(
            groups.values(),
            key=lambda g: (-g.urgency, CATEGORY_ORDER[g.category]),
        )

        return GroupedRecommendations(
            status="action_needed" if failed else "no_action_needed",
            categories=ordered,
            summary=summarize(failed),
            priority_actions=[self._action(f) for f in top],
        )

    def generate_simple(
        self,
        rule_results: list[RuleResult],
        limit: int = DEFAULT_SIMPLE_LIMIT,
    ) -> list[str]:
        failed = self.ranked_failures(rule_results)
        if not failed:
            return [NO_ACTION_NEEDED]
        return [f.rule.recommendation for f in failed[:limit]]

    def generate_quick_wins(self, rule_results: list[RuleResult]) -> list[QuickWin]:
        return [
            QuickWin(
                rule_id=f.rule.id,
                action=f.rule.recommendation,
                impact=f"Low effort, +{f.rule.weight} points",
            )
            for f in self.ranked_failures(rule_results)
            if f.rule.id in QUICK_WIN_RULES
        ]

    def generate_roadmap(self, rule_results: list[RuleResult]) -> ImprovementRoadmap:
        failed = self.ranked_failures(rule_results)
        critical = [self._action(f) for f in failed if f.rule.severity is Severity.CRITICAL]
        important = [self._action(f) for f in failed if f.rule.severity is Severity.IMPORTANT]
        polish = [
            self._action(f)
            for f in failed
            if f.rule.severity in (Severity.WARNING, Severity.SUGGESTION)
        ]
        return ImprovementRoadmap(
            phase1_critical=RoadmapPhase(
                name="Critical Fixes",
                description="Address these issues first to meet minimum quality standards",
                items=critical,
            ),
            phase2_important=RoadmapPhase(
                name="Important Improvements",
                description="These improvements significantly enhance metadata quality",
                items=important,
            ),
            phase3_polish=RoadmapPhase(
                name="Quality Polish",
                description="Optional improvements for excellent metadata quality",
                items=polish,
            ),
        )

    @staticmethod
    def _action(f: _FailedRule) -> PriorityAction:
        return PriorityAction(
            rule_id=f.rule.id,
            action=f.rule.recommendation,
            impact=f"+{f.rule.weight} points",
            severity=f.rule.severity,
            category=f.rule.category,
        )
