"""
Keyword Rules — Keyword/tag quality for discoverability.

Only keywords-presence and keywords-minimum-count fail when keywords are
absent; the quality checks have nothing to evaluate and pass.
"""

from __future__ import annotations

from typing import Any

from metaquality.core.rules.fields import list_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "description"

MIN_KEYWORDS = 3
MAX_KEYWORDS = 15
MIN_KEYWORD_LENGTH = 3

GENERIC_KEYWORDS = {"data", "dataset", "information", "file", "files", "database", "research", "study"}

_NOTHING_TO_EVALUATE = "No keywords to evaluate"


def _keywords(metadata: dict[str, Any]) -> list[str] | None:
    keywords = list_field(metadata, "keywords")
    if keywords is None:
        return None
    return [str(k).strip() for k in keywords]


def check_keywords_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    return RuleOutcome(
        passed=keywords is not None,
        value=keywords or [],
        message=f"{len(keywords)} keyword(s) present" if keywords else "No keywords provided",
    )


def check_keywords_minimum_count(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    if keywords is None:
        return RuleOutcome(passed=False, value=0, message="No keywords provided")
    count = len(keywords)
    passed = count >= MIN_KEYWORDS
    return RuleOutcome(
        passed=passed,
        value=count,
        message=(
            f"Adequate keyword coverage ({count} keywords)"
            if passed
            else f"Insufficient keywords ({count}, minimum {MIN_KEYWORDS} recommended)"
        ),
    )


def check_keywords_not_excessive(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    if keywords is None:
        return RuleOutcome(passed=True, value=0, message=_NOTHING_TO_EVALUATE)
    count = len(keywords)
    passed = count <= MAX_KEYWORDS
    return RuleOutcome(
        passed=passed,
        value=count,
        message=(
            f"Keyword count is reasonable ({count} keywords)"
            if passed
            else f"Too many keywords ({count}, consider reducing to most relevant 10-{MAX_KEYWORDS})"
        ),
    )


def check_keywords_unique(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    if keywords is None:
        return RuleOutcome(passed=True, value=[], message=_NOTHING_TO_EVALUATE)

    seen: set[str] = set()
    duplicates: list[str] = []
    for keyword in keywords:
        lowered = keyword.lower()
        if lowered in seen and lowered not in duplicates:
            duplicates.append(lowered)
        seen.add(lowered)

    return RuleOutcome(
        passed=not duplicates,
        value=duplicates,
        message=(
            f"Duplicate keywords found: {', '.join(duplicates)}"
            if duplicates
            else "All keywords are unique"
        ),
    )


def check_keywords_length(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    if keywords is None:
        return RuleOutcome(passed=True, value=[], message=_NOTHING_TO_EVALUATE)
    short = [k for k in keywords if len(k) < MIN_KEYWORD_LENGTH]
    return RuleOutcome(
        passed=not short,
        value=short,
        message=(
            f"Some keywords are too short: {', '.join(short)}"
            if short
            else "All keywords are meaningful length"
        ),
    )


def check_keywords_no_generic(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    keywords = _keywords(metadata)
    if keywords is None:
        return RuleOutcome(passed=True, value=[], message=_NOTHING_TO_EVALUATE)
    generic = [k for k in keywords if k.lower() in GENERIC_KEYWORDS]
    return RuleOutcome(
        passed=not generic,
        value=generic,
        message=f"Generic keywords found: {', '.join(generic)}" if generic else "Keywords are specific",
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="keywords-presence",
        name="Keywords Present",
        description="Dataset should have keywords for discoverability",
        category=CATEGORY,
        weight=8,
        severity=Severity.IMPORTANT,
        check=check_keywords_presence,
        recommendation=(
            "Add keywords that describe the dataset topic, domain, and content "
            "to improve discoverability."
        ),
    ),
    RuleDeclaration(
        id="keywords-minimum-count",
        name="Minimum Keyword Count",
        description="Dataset should have at least 3 keywords",
        category=CATEGORY,
        weight=6,
        severity=Severity.WARNING,
        check=check_keywords_minimum_count,
        recommendation=(
            "Add at least 3 keywords covering: (1) the subject domain, (2) data type "
            "or format, (3) geographic or temporal scope."
        ),
    ),
    RuleDeclaration(
        id="keywords-not-excessive",
        name="Keywords Not Excessive",
        description="Dataset should not have too many keywords (more than 15 may indicate tag spam)",
        category=CATEGORY,
        weight=2,
        severity=Severity.SUGGESTION,
        check=check_keywords_not_excessive,
        recommendation=(
            "Reduce keywords to the most relevant 10-15 terms. Excessive tagging can "
            "reduce search effectiveness."
        ),
    ),
    RuleDeclaration(
        id="keywords-unique",
        name="Keywords Unique",
        description="Keywords should not contain duplicates",
        category=CATEGORY,
        weight=3,
        severity=Severity.WARNING,
        check=check_keywords_unique,
        recommendation="Remove duplicate keywords to maintain clean metadata.",
    ),
    RuleDeclaration(
        id="keywords-length",
        name="Keyword Quality",
        description="Keywords should be meaningful (not too short)",
        category=CATEGORY,
        weight=3,
        severity=Severity.SUGGESTION,
        check=check_keywords_length,
        recommendation="Replace very short keywords with more descriptive terms (minimum 3 characters recommended).",
    ),
    RuleDeclaration(
        id="keywords-no-generic",
        name="Keywords Specific",
        description="Keywords should be specific (avoid overly generic terms)",
        category=CATEGORY,
        weight=3,
        severity=Severity.SUGGESTION,
        check=check_keywords_no_generic,
        recommendation='Replace generic keywords like "data" or "dataset" with more specific domain terms.',
    ),
]
