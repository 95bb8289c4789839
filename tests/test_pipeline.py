"""
Tests for Evaluation Pipeline — end-to-end scenarios with a frozen clock.
"""

from datetime import date

import pytest

from metaquality.config import Settings
from metaquality.core.recommendations import NO_ACTION_NEEDED
from metaquality.engine.pipeline import EvaluationPipeline


def _stable(result):
    """Result without the wall-clock field."""
    return result.model_dump(exclude={"evaluation_time_ms"})


def test_rich_record_grades_a(pipeline, rich_metadata):
    result = pipeline.evaluate(rich_metadata)
    assert result.overall_score == 90
    assert result.grade.letter == "A"
    assert result.categories.identification == 92
    assert result.categories.description == 90
    assert result.categories.legal == 95
    assert result.categories.provenance == 81
    assert result.summary.total_rules == 43
    assert result.summary.failed == 12
    assert len(result.recommendations) == 5


def test_future_publication_date_costs_exactly_one_rule(pipeline, rich_metadata, future_metadata):
    valid = pipeline.evaluate_detailed(rich_metadata)
    future = pipeline.evaluate_detailed(future_metadata)

    changed = {
        a.rule_id
        for a, b in zip(valid.rule_results, future.rule_results)
        if a.passed != b.passed
    }
    assert changed == {"publication-date-not-future"}
    assert future.overall_score == 88
    assert future.grade.letter == "B"
    assert future.overall_score < valid.overall_score


def test_clock_is_injected():
    """The same record is valid or future depending only on the clock."""
    record = {"publication_date": "2025-06-02"}
    before = EvaluationPipeline(clock=lambda: date(2025, 6, 1)).evaluate_detailed(record)
    after = EvaluationPipeline(clock=lambda: date(2025, 6, 2)).evaluate_detailed(record)

    def not_future(result):
        return next(r for r in result.rule_results if r.rule_id == "publication-date-not-future")

    assert not not_future(before).passed
    assert not_future(after).passed
    assert before.evaluated_on == date(2025, 6, 1)


def test_empty_record(pipeline):
    result = pipeline.evaluate({})
    assert result.overall_score == 7
    assert result.grade.letter == "F"
    assert result.summary.failed == 37


@pytest.mark.parametrize("raw", [None, "not an object", 42, [1, 2, 3]])
def test_non_object_input_scores_as_empty(pipeline, raw):
    assert _stable(pipeline.evaluate(raw)) == _stable(pipeline.evaluate({}))


def test_minimal_record(pipeline, minimal_metadata):
    result = pipeline.evaluate(minimal_metadata)
    assert result.overall_score == 25
    assert result.categories.legal == 0
    assert result.categories.description == 35


def test_determinism(pipeline, rich_metadata):
    assert _stable(pipeline.evaluate_detailed(rich_metadata)) == _stable(
        pipeline.evaluate_detailed(rich_metadata)
    )


def test_summary_and_detailed_agree(pipeline, rich_metadata):
    summary = pipeline.evaluate(rich_metadata)
    detailed = pipeline.evaluate_detailed(rich_metadata)
    assert detailed.overall_score == summary.overall_score
    assert detailed.categories == summary.categories
    assert detailed.recommendations == summary.recommendations


def test_detailed_artifacts(pipeline, rich_metadata):
    detailed = pipeline.evaluate_detailed({**rich_metadata, "title": "  padded title here  "})
    assert len(detailed.rule_results) == 43
    assert detailed.normalized_metadata["title"] == "padded title here"
    assert len(detailed.top_improvements) == 5
    assert [p.category.value for p in detailed.category_priority][0] == "provenance"
    assert detailed.recommendation_report.status == "action_needed"
    assert detailed.quick_wins == detailed.recommendation_report.priority_actions[:3]
    assert detailed.flat_recommendations.total_issues == 12
    assert [w.rule_id for w in detailed.easy_wins] == ["data-format-specified", "contact-for-licensing"]
    assert len(detailed.roadmap.phase2_important.items) == 3
    assert detailed.schema_validation.valid


def test_settings_drive_list_sizes(catalogue, rich_metadata):
    settings = Settings(simple_recommendation_limit=2, top_improvements_count=1, quick_wins_count=1)
    pipeline = EvaluationPipeline(catalogue=catalogue, clock=lambda: date(2025, 6, 1), settings=settings)
    detailed = pipeline.evaluate_detailed(rich_metadata)
    assert len(detailed.recommendations) == 2
    assert len(detailed.top_improvements) == 1
    assert len(detailed.quick_wins) == 1


def test_perfect_record_needs_no_action(pipeline, rich_metadata):
    perfect = {
        **rich_metadata,
        "doi": "10.5281/zenodo.1234567",
        "identifier": "10.5281/zenodo.1234567",
        "data_format": ["CSV", "JSON"],
        "schema": {"fields": [{"name": "pm25", "unit": "ug/m3"}]},
        "variables": [{"name": "pm25", "unit": "ug/m3"}],
        "contact_email": "data@example.org",
        "temporal_coverage": {"start_date": "2015-01-01", "end_date": "2022-12-31"},
        "spatial_coverage": "Greater Manchester, UK (WGS 84)",
        "funding": "Example Research Council grant EX/123",
        "citations": ["Smith et al. 2023, Atmospheric Environment"],
    }
    result = pipeline.evaluate(perfect)
    assert result.overall_score == 100
    assert result.summary.failed == 0
    assert result.recommendations == [NO_ACTION_NEEDED]


def test_batch_isolates_null_record(pipeline, rich_metadata, minimal_metadata):
    items = pipeline.batch_evaluate([rich_metadata, None, minimal_metadata])
    assert [i.index for i in items] == [0, 1, 2]
    assert all(i.error is None for i in items)
    assert items[0].result.overall_score == 90
    assert items[1].result.overall_score == 7
    assert items[2].result.overall_score == 25


def test_batch_reports_unexpected_failure(pipeline, rich_metadata, monkeypatch):
    original = pipeline.evaluate

    def flaky(raw):
        if raw == "explode":
            raise RuntimeError("kaboom")
        return original(raw)

    monkeypatch.setattr(pipeline, "evaluate", flaky)
    progress = []
    items = pipeline.batch_evaluate(
        [rich_metadata, "explode", rich_metadata],
        on_progress=lambda done, total: progress.append((done, total)),
    )
    assert items[1].result is None
    assert items[1].error == "RuntimeError: kaboom"
    assert items[0].result.overall_score == items[2].result.overall_score == 90
    assert progress == [(1, 3), (2, 3), (3, 3)]


def test_list_rules(pipeline):
    rules = pipeline.list_rules()
    assert len(rules) == 43
    assert rules[0].id == "title-presence"
