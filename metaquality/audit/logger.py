"""
Audit Logger — Structured JSON-lines evaluation history.

Records every saved evaluation with: evaluation_id, timestamp, dataset title,
overall score, grade, failed rule count, duration, and the full detailed
result. Saved evaluations can be deleted, compared pairwise, listed per
dataset title and aggregated into time-windowed analytics.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from metaquality.config import settings
from metaquality.models.evaluation_models import (
    AnalyticsOverview,
    CommonIssue,
    DailyTrend,
    DetailedEvaluationResult,
    EvaluationComparison,
    HistoryAnalytics,
    HistoryEntry,
    RuleChange,
)

logger = logging.getLogger("metaquality.audit")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
COMMON_ISSUES_LIMIT = 10

# (label, lowest score) in descending order
SCORE_BUCKETS = (
    ("90-100", 90),
    ("80-89", 80),
    ("70-79", 70),
    ("60-69", 60),
    ("50-59", 50),
    ("0-49", 0),
)
GRADE_ORDER = ("A", "B", "C", "D", "F")


def _mean(values: list[int | float], places: str = "0.1") -> float:
    """Half-up rounded mean of a non-empty list."""
    total = Decimal(str(sum(values))) / Decimal(len(values))
    return float(total.quantize(Decimal(places), rounding=ROUND_HALF_UP))


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _score_bucket(score: int) -> str:
    for label, lowest in SCORE_BUCKETS:
        if score >= lowest:
            return label
    return SCORE_BUCKETS[-1][0]


class AuditLogger:
    """Writes history entries to a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)

    def build_entry(self, result: DetailedEvaluationResult) -> HistoryEntry:
        """Wrap a detailed evaluation in a new history entry."""
        title = result.normalized_metadata.get("title")
        return HistoryEntry(
            evaluation_id=str(uuid.uuid4())[:8],
            timestamp=time.strftime(TIMESTAMP_FORMAT, time.gmtime()),
            title=title if isinstance(title, str) else None,
            overall_score=result.overall_score,
            grade=result.grade.letter,
            failed_rules=result.summary.failed,
            duration_ms=result.evaluation_time_ms,
            result=result.model_dump(mode="json"),
        )

    def log(self, entry: HistoryEntry) -> None:
        """Append a history entry to the log file. Write failures are logged, not raised."""
        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(entry.model_dump(mode="json")) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def _read_all(self) -> list[dict]:
        if not self.log_path.exists():
            return []

        entries: list[dict] = []
        try:
            with open(self.log_path) as f:
                for line in f:
                    line = line.strip()
                    if line:
                        try:
                            entries.append(json.loads(line))
                        except json.JSONDecodeError:
                            continue
        except OSError:
            return []

        return entries

    def read_recent(self, count: int = 50) -> list[dict]:
        """Read the most recent N history entries, oldest first."""
        if count <= 0:
            return []
        return self._read_all()[-count:]

    def get(self, evaluation_id: str) -> dict | None:
        """Look up one saved evaluation by id; the latest write wins."""
        for entry in reversed(self._read_all()):
            if entry.get("evaluation_id") == evaluation_id:
                return entry
        return None

    def delete(self, evaluation_id: str) -> bool:
        """Remove every entry with this id. Returns False if none existed."""
        entries = self._read_all()
        remaining = [e for e in entries if e.get("evaluation_id") != evaluation_id]
        if len(remaining) == len(entries):
            return False

        tmp_path = self.log_path.with_name(self.log_path.name + ".tmp")
        with open(tmp_path, "w") as f:
            for entry in remaining:
                f.write(json.dumps(entry) + "\n")
        tmp_path.replace(self.log_path)

        logger.info(f"Deleted evaluation {evaluation_id}")
        return True

    def dataset_history(self, title: str) -> list[dict]:
        """Saved evaluations of one dataset title, newest first."""
        return [e for e in reversed(self._read_all()) if e.get("title") == title]

    def compare(self, first_id: str, second_id: str) -> EvaluationComparison | None:
        """
        Compare two saved evaluations. Differences are second minus first.

        Returns None when either id is unknown.
        """
        first = self.get(first_id)
        second = self.get(second_id)
        if first is None or second is None:
            return None

        result1 = first.get("result") or {}
        result2 = second.get("result") or {}

        score_diff = second["overall_score"] - first["overall_score"]

        categories1 = result1.get("categories") or {}
        category_diffs = {
            name: score - categories1.get(name, 0)
            for name, score in (result2.get("categories") or {}).items()
        }

        before = {r["rule_id"]: r["passed"] for r in result1.get("rule_results", [])}
        rule_changes = [
            RuleChange(
                rule_id=r["rule_id"],
                before=before[r["rule_id"]],
                after=r["passed"],
                improvement=r["passed"] and not before[r["rule_id"]],
            )
            for r in result2.get("rule_results", [])
            if r["rule_id"] in before and before[r["rule_id"]] != r["passed"]
        ]

        recs1 = result1.get("recommendations", [])
        recs2 = result2.get("recommendations", [])

        return EvaluationComparison(
            evaluation1=first,
            evaluation2=second,
            score_diff=score_diff,
            score_improved=score_diff > 0,
            category_diffs=category_diffs,
            rule_changes=rule_changes,
            recommendations_resolved=[r for r in recs1 if r not in recs2],
            new_recommendations=[r for r in recs2 if r not in recs1],
        )

    def analytics(self, days: int = 30, now: datetime | None = None) -> HistoryAnalytics:
        """Aggregate statistics over evaluations saved in the last `days` days."""
        now = now or datetime.now(timezone.utc)
        start = now - timedelta(days=days)

        window: list[tuple[datetime, dict]] = []
        for entry in self._read_all():
            saved_at = _parse_timestamp(entry.get("timestamp"))
            if saved_at is not None and saved_at >= start and "overall_score" in entry:
                window.append((saved_at, entry))

        scores = [e["overall_score"] for _, e in window]
        grades = [e.get("grade") for _, e in window]

        overall = AnalyticsOverview(
            total_evaluations=len(window),
            average_score=_mean(scores) if scores else None,
            min_score=min(scores) if scores else None,
            max_score=max(scores) if scores else None,
            high_quality_count=sum(1 for g in grades if g in ("A", "B")),
            low_quality_count=sum(1 for g in grades if g in ("D", "F")),
        )

        buckets = Counter(_score_bucket(s) for s in scores)
        grade_counts = Counter(grades)

        category_totals: dict[str, list[int]] = defaultdict(list)
        failed_rules: Counter[str] = Counter()
        by_day: dict[str, list[int]] = defaultdict(list)
        for saved_at, entry in window:
            result = entry.get("result") or {}
            for name, score in (result.get("categories") or {}).items():
                category_totals[name].append(score)
            for r in result.get("rule_results", []):
                if not r.get("passed"):
                    failed_rules[r["rule_id"]] += 1
            by_day[saved_at.date().isoformat()].append(entry["overall_score"])

        return HistoryAnalytics(
            days=days,
            start=start.strftime(TIMESTAMP_FORMAT),
            overall=overall,
            score_distribution={label: buckets[label] for label, _ in SCORE_BUCKETS if buckets[label]},
            grade_distribution={g: grade_counts[g] for g in GRADE_ORDER if grade_counts[g]},
            category_averages={
                name: int(_mean(values, places="1")) for name, values in category_totals.items()
            },
            daily_trend=[
                DailyTrend(date=day, evaluations=len(values), average_score=_mean(values))
                for day, values in sorted(by_day.items())
            ],
            # most_common keeps first-seen order on equal counts
            common_issues=[
                CommonIssue(rule_id=rule_id, count=count)
                for rule_id, count in failed_rules.most_common(COMMON_ISSUES_LIMIT)
            ],
        )
