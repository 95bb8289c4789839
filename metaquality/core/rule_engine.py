"""
Rule Engine — Runs every catalogue rule against a normalized record.

Rules are pure functions — no I/O, no network, no randomness. A rule that
raises is reported as a RuleFault and scored as failed; it never stops the
remaining rules from running.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from metaquality.core.catalogue import RuleCatalogue
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDefinition,
    RuleFault,
    RuleOutcome,
    RuleResult,
    RuleRunResult,
)

logger = logging.getLogger("metaquality.rules")


def run_rule(
    rule: RuleDefinition,
    record: dict[str, Any],
    context: EvaluationContext,
) -> RuleOutcome | RuleFault:
    """Evaluate one rule, returning either its outcome or the fault it hit."""
    try:
        outcome = rule.check(record, context)
    except Exception as e:
        return RuleFault(rule_id=rule.id, error_type=type(e).__name__, error_message=str(e))

    if not isinstance(outcome, RuleOutcome):
        return RuleFault(
            rule_id=rule.id,
            error_type="InvalidOutcome",
            error_message=f"check returned {type(outcome).__name__}, expected RuleOutcome",
        )
    return outcome


def fault_to_result(rule: RuleDefinition, fault: RuleFault) -> RuleResult:
    return RuleResult(
        rule_id=rule.id,
        rule_name=rule.name,
        category=rule.category,
        passed=False,
        value=None,
        message=f"Rule evaluation error: {fault.error_type}: {fault.error_message}",
    )


class RuleEngine:
    """
    Deterministic rule engine.

    Produces exactly one RuleResult per catalogue rule, in catalogue order.
    """

    def __init__(self, catalogue: RuleCatalogue) -> None:
        self.catalogue = catalogue

    def run(self, record: dict[str, Any], context: EvaluationContext) -> RuleRunResult:
        """
        Run all rules against one normalized record.

        Args:
            record: Normalized metadata record.
            context: Evaluation context carrying the evaluation date.

        Returns:
            RuleRunResult with one result per rule and any faults raised.
        """
        start = time.monotonic()
        results: list[RuleResult] = []
        faults: list[RuleFault] = []

        for rule in self.catalogue:
            outcome = run_rule(rule, record, context)
            if isinstance(outcome, RuleFault):
                logger.warning(
                    f"Rule '{rule.id}' internal error: {outcome.error_type}: {outcome.error_message}"
                )
                faults.append(outcome)
                results.append(fault_to_result(rule, outcome))
                continue
            results.append(
                RuleResult(
                    rule_id=rule.id,
                    rule_name=rule.name,
                    category=rule.category,
                    passed=bool(outcome.passed),
                    value=outcome.value,
                    message=outcome.message,
                )
            )

        elapsed = (time.monotonic() - start) * 1000

        return RuleRunResult(
            results=results,
            faults=faults,
            duration_ms=round(elapsed, 2),
        )

    def run_single_rule(
        self,
        rule_id: str,
        record: dict[str, Any],
        context: EvaluationContext,
    ) -> RuleResult:
        """Run a single rule against a single record."""
        rule = self.catalogue.get_rule(rule_id)
        if rule is None:
            raise ValueError(f"Unknown rule: {rule_id}")
        outcome = run_rule(rule, record, context)
        if isinstance(outcome, RuleFault):
            return fault_to_result(rule, outcome)
        return RuleResult(
            rule_id=rule.id,
            rule_name=rule.name,
            category=rule.category,
            passed=outcome.passed,
            value=outcome.value,
            message=outcome.message,
        )
