"""
Tests for Audit Logger — JSON-lines evaluation history.
"""

import json
from datetime import datetime, timezone

import pytest

from metaquality.audit.logger import AuditLogger


def test_log_and_read_back(tmp_path, pipeline, rich_metadata):
    audit = AuditLogger(str(tmp_path / "history.jsonl"))
    entry = audit.build_entry(pipeline.evaluate_detailed(rich_metadata))
    audit.log(entry)

    assert entry.title == rich_metadata["title"]
    assert entry.grade == "A"
    assert entry.overall_score == 90
    assert entry.failed_rules == 12

    recent = audit.read_recent()
    assert len(recent) == 1
    assert recent[0]["evaluation_id"] == entry.evaluation_id
    assert recent[0]["result"]["overall_score"] == 90

    stored = audit.get(entry.evaluation_id)
    assert stored["result"]["evaluated_on"] == "2025-06-01"


def test_read_recent_returns_latest_entries(tmp_path, pipeline):
    audit = AuditLogger(str(tmp_path / "history.jsonl"))
    ids = []
    for i in range(5):
        entry = audit.build_entry(pipeline.evaluate_detailed({"title": f"Dataset number {i}"}))
        audit.log(entry)
        ids.append(entry.evaluation_id)

    recent = audit.read_recent(2)
    assert [e["evaluation_id"] for e in recent] == ids[-2:]
    assert audit.read_recent(0) == []


def test_missing_file_and_unknown_id(tmp_path):
    audit = AuditLogger(str(tmp_path / "nothing.jsonl"))
    assert audit.read_recent() == []
    assert audit.get("abc") is None


def test_corrupt_lines_are_skipped(tmp_path):
    path = tmp_path / "history.jsonl"
    path.write_text('not json\n\n' + json.dumps({"evaluation_id": "x1", "overall_score": 5}) + "\n")
    audit = AuditLogger(str(path))
    assert [e["evaluation_id"] for e in audit.read_recent()] == ["x1"]


def test_write_failure_is_logged_not_raised(tmp_path, pipeline, caplog):
    audit = AuditLogger(str(tmp_path / "missing-dir" / "history.jsonl"))
    audit.log(audit.build_entry(pipeline.evaluate_detailed({})))
    assert "Failed to write audit log" in caplog.text


def test_untitled_record_has_no_title(tmp_path, pipeline):
    audit = AuditLogger(str(tmp_path / "history.jsonl"))
    entry = audit.build_entry(pipeline.evaluate_detailed({"title": 42}))
    assert entry.title is None


@pytest.fixture
def audit(tmp_path):
    return AuditLogger(str(tmp_path / "history.jsonl"))


def _save(audit, pipeline, record, timestamp=None):
    entry = audit.build_entry(pipeline.evaluate_detailed(record))
    if timestamp is not None:
        entry = entry.model_copy(update={"timestamp": timestamp})
    audit.log(entry)
    return entry


def test_delete(audit, pipeline, rich_metadata, minimal_metadata):
    first = _save(audit, pipeline, rich_metadata)
    second = _save(audit, pipeline, minimal_metadata)

    assert audit.delete(first.evaluation_id) is True
    assert audit.get(first.evaluation_id) is None
    assert [e["evaluation_id"] for e in audit.read_recent()] == [second.evaluation_id]
    assert audit.delete(first.evaluation_id) is False


def test_delete_without_history_file(tmp_path):
    audit = AuditLogger(str(tmp_path / "nothing.jsonl"))
    assert audit.delete("abc") is False
    assert not (tmp_path / "nothing.jsonl").exists()


def test_dataset_history_newest_first(audit, pipeline):
    older = _save(audit, pipeline, {"title": "River Levels"})
    _save(audit, pipeline, {"title": "Bird Counts"})
    newer = _save(audit, pipeline, {"title": "River Levels", "license": "CC0-1.0"})

    history = audit.dataset_history("River Levels")
    assert [e["evaluation_id"] for e in history] == [newer.evaluation_id, older.evaluation_id]
    assert audit.dataset_history("Unknown") == []


def test_compare(audit, pipeline, rich_metadata, minimal_metadata):
    before = _save(audit, pipeline, minimal_metadata)
    after = _save(audit, pipeline, rich_metadata)

    comparison = audit.compare(before.evaluation_id, after.evaluation_id)
    assert comparison.score_diff == 90 - 25
    assert comparison.score_improved is True
    assert comparison.category_diffs["legal"] == 95
    changes = {c.rule_id: c for c in comparison.rule_changes}
    assert changes["license-presence"].before is False
    assert changes["license-presence"].after is True
    assert changes["license-presence"].improvement is True
    assert "doi-present" not in changes
    assert comparison.recommendations_resolved
    assert not set(comparison.recommendations_resolved) & set(after.result["recommendations"])
    assert comparison.evaluation1["evaluation_id"] == before.evaluation_id

    reverse = audit.compare(after.evaluation_id, before.evaluation_id)
    assert reverse.score_diff == -65
    assert reverse.score_improved is False
    assert all(not c.improvement for c in reverse.rule_changes)


def test_compare_unknown_id(audit, pipeline, rich_metadata):
    entry = _save(audit, pipeline, rich_metadata)
    assert audit.compare(entry.evaluation_id, "missing") is None
    assert audit.compare("missing", entry.evaluation_id) is None


def test_analytics(audit, pipeline, rich_metadata, minimal_metadata):
    now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    _save(audit, pipeline, rich_metadata, "2025-05-31T10:00:00Z")
    _save(audit, pipeline, minimal_metadata, "2025-06-01T09:00:00Z")
    _save(audit, pipeline, {}, "2025-06-01T11:00:00Z")
    # Outside the 30-day window
    _save(audit, pipeline, rich_metadata, "2025-04-01T00:00:00Z")

    stats = audit.analytics(days=30, now=now)
    assert stats.days == 30
    assert stats.start == "2025-05-02T12:00:00Z"
    assert stats.overall.total_evaluations == 3
    assert stats.overall.average_score == 40.7
    assert stats.overall.min_score == 7
    assert stats.overall.max_score == 90
    assert stats.overall.high_quality_count == 1
    assert stats.overall.low_quality_count == 2
    assert stats.score_distribution == {"90-100": 1, "0-49": 2}
    assert stats.grade_distribution == {"A": 1, "F": 2}
    assert stats.category_averages["legal"] == 32
    assert [(d.date, d.evaluations, d.average_score) for d in stats.daily_trend] == [
        ("2025-05-31", 1, 90.0),
        ("2025-06-01", 2, 16.0),
    ]

    # Every rule the rich record fails also fails for the other two
    rich_failed = {
        r.rule_id for r in pipeline.evaluate_detailed(rich_metadata).rule_results if not r.passed
    }
    assert len(stats.common_issues) == 10
    assert all(issue.count == 3 for issue in stats.common_issues)
    assert {issue.rule_id for issue in stats.common_issues} <= rich_failed


def test_analytics_without_history(audit):
    stats = audit.analytics()
    assert stats.overall.total_evaluations == 0
    assert stats.overall.average_score is None
    assert stats.score_distribution == {}
    assert stats.common_issues == []
