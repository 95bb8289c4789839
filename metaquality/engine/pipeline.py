"""
Evaluation Pipeline — Main orchestrator for metadata quality evaluation.

Full pipeline:
1. Normalize the raw record
2. Validate its structure against MetadataDocument (reported, never scored)
3. Run every catalogue rule → one result per rule
4. Calculate overall/category scores and grade
5. Generate recommendations
6. Assemble the summary or detailed result

Summary and detailed evaluations run the identical steps; they differ only in
which intermediate artifacts are returned.
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from typing import Any, Callable

from metaquality.config import Settings, settings as default_settings
from metaquality.core.catalogue import RuleCatalogue, build_default_catalogue
from metaquality.core.normalizer import normalize_metadata
from metaquality.core.quality_scorer import calculate_score_summary
from metaquality.core.recommendations import RecommendationGenerator
from metaquality.core.rule_engine import RuleEngine
from metaquality.core.schema_validation import validate_metadata
from metaquality.models.evaluation_models import (
    BatchItemResult,
    DetailedEvaluationResult,
    EvaluationResult,
)
from metaquality.models.metadata_models import SchemaValidation
from metaquality.models.recommendation_models import (
    FlatRecommendations,
    GroupedRecommendations,
    ImprovementRoadmap,
    QuickWin,
)
from metaquality.models.rule_models import EvaluationContext, RuleResult, RuleSummary
from metaquality.models.score_models import ScoreReport

logger = logging.getLogger("metaquality.engine")

Clock = Callable[[], date]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class _PipelineRun:
    """Artifacts of one pass through the pipeline."""

    def __init__(
        self,
        normalized: dict[str, Any],
        context: EvaluationContext,
        schema_validation: SchemaValidation,
        rule_results: list[RuleResult],
        score_report: ScoreReport,
        recommendations: list[str],
        grouped: GroupedRecommendations,
        flat: FlatRecommendations,
        easy_wins: list[QuickWin],
        roadmap: ImprovementRoadmap,
        elapsed_ms: float,
    ) -> None:
        self.normalized = normalized
        self.context = context
        self.schema_validation = schema_validation
        self.rule_results = rule_results
        self.score_report = score_report
        self.recommendations = recommendations
        self.grouped = grouped
        self.flat = flat
        self.easy_wins = easy_wins
        self.roadmap = roadmap
        self.elapsed_ms = elapsed_ms


class EvaluationPipeline:
    """
    Metadata evaluation pipeline orchestrator.

    Ties together: normalizer → rule engine → score calculator →
    recommendation generator.
    """

    def __init__(
        self,
        catalogue: RuleCatalogue | None = None,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.catalogue = catalogue or build_default_catalogue()
        self.clock = clock or utc_today
        self.settings = settings or default_settings
        self.rule_engine = RuleEngine(self.catalogue)
        self.recommender = RecommendationGenerator(self.catalogue)

    def evaluate(self, raw: Any) -> EvaluationResult:
        """Evaluate one raw record and return the summary result."""
        run = self._run(raw)
        report = run.score_report
        return EvaluationResult(
            overall_score=report.scores.overall_score,
            grade=report.grade,
            categories=report.scores.categories,
            summary=report.summary,
            recommendations=run.recommendations,
            schema_validation=run.schema_validation,
            evaluation_time_ms=run.elapsed_ms,
        )

    def evaluate_detailed(self, raw: Any) -> DetailedEvaluationResult:
        """Evaluate one raw record and keep every intermediate artifact."""
        run = self._run(raw)
        report = run.score_report
        return DetailedEvaluationResult(
            overall_score=report.scores.overall_score,
            grade=report.grade,
            categories=report.scores.categories,
            summary=report.summary,
            recommendations=run.recommendations,
            schema_validation=run.schema_validation,
            evaluation_time_ms=run.elapsed_ms,
            rule_results=run.rule_results,
            category_priority=report.category_priority,
            top_improvements=report.top_improvements,
            recommendation_report=run.grouped,
            quick_wins=run.grouped.priority_actions[: self.settings.quick_wins_count],
            flat_recommendations=run.flat,
            easy_wins=run.easy_wins,
            roadmap=run.roadmap,
            normalized_metadata=run.normalized,
            evaluated_on=run.context.today,
        )

    def batch_evaluate(
        self,
        records: list[Any],
        on_progress: Callable[[int, int], None] | None = None,
    ) -> list[BatchItemResult]:
        """
        Evaluate each record independently, tagging results with their index.

        A record whose evaluation fails unexpectedly is reported with an
        error and does not affect the others. `on_progress(done, total)` is
        called after every record.
        """
        logger.info(f"Batch evaluation starting for {len(records)} records")
        items: list[BatchItemResult] = []
        for index, record in enumerate(records):
            try:
                items.append(BatchItemResult(index=index, result=self.evaluate(record)))
            except Exception as e:
                logger.exception(f"Batch record {index} failed")
                items.append(BatchItemResult(index=index, error=f"{type(e).__name__}: {e}"))
            if on_progress is not None:
                on_progress(index + 1, len(records))
        return items

    def list_rules(self) -> list[RuleSummary]:
        return self.catalogue.list_rules()

    def _run(self, raw: Any) -> _PipelineRun:
        start_time = time.monotonic()

        logger.info("Evaluation starting")

        # ── Step 1: Normalize ──
        normalized = normalize_metadata(raw)
        context = EvaluationContext(today=self.clock())

        # ── Step 2: Structure ──
        schema_validation = validate_metadata(normalized)
        if not schema_validation.valid:
            logger.debug(f"Record has {schema_validation.error_count} schema errors")

        # ── Step 3: Rules ──
        rule_run = self.rule_engine.run(normalized, context)

        # ── Step 4: Scores ──
        report = calculate_score_summary(
            rule_run.results,
            self.catalogue,
            top_n=self.settings.top_improvements_count,
        )

        # ── Step 5: Recommendations ──
        simple = self.recommender.generate_simple(
            rule_run.results, limit=self.settings.simple_recommendation_limit
        )
        grouped = self.recommender.generate_grouped(
            rule_run.results, max_recommendations=self.settings.max_recommendations
        )
        flat = self.recommender.generate_flat(
            rule_run.results, max_recommendations=self.settings.max_recommendations
        )
        easy_wins = self.recommender.generate_quick_wins(rule_run.results)
        roadmap = self.recommender.generate_roadmap(rule_run.results)

        elapsed = round((time.monotonic() - start_time) * 1000, 2)
        logger.info(
            f"Evaluation complete in {elapsed:.1f}ms: score {report.scores.overall_score} "
            f"({report.grade.letter}), {report.summary.failed}/{report.summary.total_rules} rules failed"
        )

        return _PipelineRun(
            normalized=normalized,
            context=context,
            schema_validation=schema_validation,
            rule_results=rule_run.results,
            score_report=report,
            recommendations=simple,
            grouped=grouped,
            flat=flat,
            easy_wins=easy_wins,
            roadmap=roadmap,
            elapsed_ms=elapsed,
        )
