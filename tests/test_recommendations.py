"""
Tests for Recommendation Generator — ranking, grouping and simple lists.
"""

import pytest

from metaquality.core.normalizer import normalize_metadata
from metaquality.core.recommendations import (
    NO_ACTION_NEEDED,
    NO_ISSUES_SUMMARY,
    RecommendationGenerator,
)
from metaquality.core.rule_engine import RuleEngine
from metaquality.models.rule_models import Category, Severity


@pytest.fixture
def generator(catalogue):
    return RecommendationGenerator(catalogue)


@pytest.fixture
def rich_results(catalogue, context, rich_metadata):
    return RuleEngine(catalogue).run(normalize_metadata(rich_metadata), context).results


@pytest.fixture
def empty_results(catalogue, context):
    return RuleEngine(catalogue).run({}, context).results


@pytest.fixture
def all_passed(rich_results):
    return [r.model_copy(update={"passed": True}) for r in rich_results]


def test_ranked_failures_order(generator, rich_results):
    ranked = [f.rule.id for f in generator.ranked_failures(rich_results)]
    assert ranked == [
        "data-format-specified",
        "int-schema-defined",
        "cit-persistent-id",
        "reu-variables",
        "acc-open-format",
        "doi-present",
        "contact-for-licensing",
        "temporal-coverage-present",
        "spatial-coverage-present",
        "funding-present",
        "citations-present",
        "reu-units",
    ]


def test_ranked_failures_ignore_duplicates(generator, rich_results):
    ranked = generator.ranked_failures(rich_results + rich_results)
    assert len(ranked) == 12


def test_flat_recommendations(generator, rich_results):
    flat = generator.generate_flat(rich_results, max_recommendations=3)
    assert flat.type == "flat"
    assert flat.status == "action_needed"
    assert flat.total_issues == 12
    assert [r.priority for r in flat.recommendations] == [1, 2, 3]
    first = flat.recommendations[0]
    assert first.rule_id == "data-format-specified"
    assert first.potential_gain == 3
    assert first.severity is Severity.WARNING
    assert flat.summary == "Found 12 issues: 3 important, 2 warnings, 7 suggestions."


def test_grouped_recommendations(generator, rich_results):
    grouped = generator.generate_grouped(rich_results, max_recommendations=4)
    assert grouped.type == "grouped"
    assert [g.category for g in grouped.categories] == [
        Category.DESCRIPTION,
        Category.IDENTIFICATION,
        Category.LEGAL,
        Category.PROVENANCE,
    ]
    description = grouped.categories[0]
    assert description.important_count == 2
    assert description.urgency == 4
    assert description.total_issues == len(description.items) == 4
    assert sum(g.total_issues for g in grouped.categories) == 12

    assert [a.rule_id for a in grouped.priority_actions] == [
        "data-format-specified",
        "int-schema-defined",
        "cit-persistent-id",
        "reu-variables",
    ]
    assert grouped.priority_actions[0].impact == "+3 points"
    flagged = {i.rule_id for g in grouped.categories for i in g.items if i.is_priority}
    assert flagged == {a.rule_id for a in grouped.priority_actions}


def test_grouped_items_sorted_by_priority(generator, empty_results):
    grouped = generator.generate_grouped(empty_results)
    for group in grouped.categories:
        keys = [(-i.priority_score, -i.weight) for i in group.items]
        assert keys == sorted(keys)
    assert grouped.categories[0].critical_count >= 1


def test_simple_recommendations(generator, rich_results, catalogue):
    simple = generator.generate_simple(rich_results, limit=2)
    assert simple == [
        catalogue.require_rule("data-format-specified").recommendation,
        catalogue.require_rule("int-schema-defined").recommendation,
    ]
    assert len(set(generator.generate_simple(rich_results, limit=50))) == 12


def test_no_failures(generator, all_passed):
    assert generator.generate_simple(all_passed) == [NO_ACTION_NEEDED]
    flat = generator.generate_flat(all_passed)
    assert flat.status == "no_action_needed"
    assert flat.summary == NO_ISSUES_SUMMARY
    assert flat.recommendations == []
    grouped = generator.generate_grouped(all_passed)
    assert grouped.categories == []
    assert grouped.priority_actions == []


def test_quick_wins(generator, rich_results):
    wins = generator.generate_quick_wins(rich_results)
    assert [w.rule_id for w in wins] == ["data-format-specified", "contact-for-licensing"]
    assert wins[0].impact == "Low effort, +3 points"


def test_roadmap_phases_by_severity(generator, empty_results):
    roadmap = generator.generate_roadmap(empty_results)
    assert {a.severity for a in roadmap.phase1_critical.items} == {Severity.CRITICAL}
    assert {a.severity for a in roadmap.phase2_important.items} == {Severity.IMPORTANT}
    assert {a.severity for a in roadmap.phase3_polish.items} <= {Severity.WARNING, Severity.SUGGESTION}
    total = (
        len(roadmap.phase1_critical.items)
        + len(roadmap.phase2_important.items)
        + len(roadmap.phase3_polish.items)
    )
    assert total == 37
