"""
Provenance Rules — Publication dates, coverage, funding, access and citations.

publication-date-not-future is the only rule that depends on the evaluation
clock; it reads the date from the EvaluationContext, never from the system.
"""

from __future__ import annotations

import re
from typing import Any

from metaquality.core.dates import parse_date
from metaquality.core.rules.fields import list_field, text_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "provenance"

URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

_NO_DATE = "No publication date provided"


def check_publication_date_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    published = text_field(metadata, "publication_date")
    return RuleOutcome(
        passed=published is not None,
        value=published,
        message=f"Publication date: {published}" if published else _NO_DATE,
    )


def check_publication_date_valid(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    raw = metadata.get("publication_date")
    if not raw:
        return RuleOutcome(passed=False, value=None, message=_NO_DATE)
    is_valid = parse_date(raw) is not None
    return RuleOutcome(
        passed=is_valid,
        value=raw,
        message="Publication date is valid" if is_valid else "Publication date format is invalid",
    )


def check_publication_date_not_future(
    metadata: dict[str, Any], context: EvaluationContext
) -> RuleOutcome:
    raw = metadata.get("publication_date")
    if not raw:
        return RuleOutcome(passed=False, value=None, message=_NO_DATE)
    published = parse_date(raw)
    if published is None:
        return RuleOutcome(passed=False, value=raw, message="Invalid date format")
    # Anything up to the end of the evaluation day is accepted
    is_future = published > context.today
    return RuleOutcome(
        passed=not is_future,
        value=raw,
        message=(
            f"Publication date is in the future (evaluated on {context.today.isoformat()})"
            if is_future
            else "Publication date is valid (not in future)"
        ),
    )


def check_temporal_coverage_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    coverage = metadata.get("temporal_coverage")
    has_temporal = isinstance(coverage, dict) and bool(
        coverage.get("start_date") or coverage.get("end_date")
    )
    return RuleOutcome(
        passed=has_temporal,
        value=coverage if has_temporal else None,
        message=(
            "Temporal coverage is specified"
            if has_temporal
            else "No temporal coverage information provided"
        ),
    )


def check_spatial_coverage_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    spatial = text_field(metadata, "spatial_coverage")
    return RuleOutcome(
        passed=spatial is not None,
        value=spatial,
        message=f"Spatial coverage: {spatial}" if spatial else "No spatial coverage information provided",
    )


def check_funding_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    funding = text_field(metadata, "funding")
    return RuleOutcome(
        passed=funding is not None,
        value=funding,
        message="Funding source acknowledged" if funding else "No funding information provided",
    )


def check_access_url_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    url = text_field(metadata, "access_url")
    return RuleOutcome(
        passed=url is not None,
        value=url,
        message="Access URL provided" if url else "No access URL provided",
    )


def check_access_url_valid(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    url = text_field(metadata, "access_url")
    if url is None:
        return RuleOutcome(passed=False, value=None, message="No access URL provided")
    is_valid = URL_PATTERN.match(url) is not None
    return RuleOutcome(
        passed=is_valid,
        value=url,
        message="Access URL format is valid" if is_valid else "Access URL format appears invalid",
    )


def check_citations_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    citations = list_field(metadata, "citations")
    count = len(citations) if citations else 0
    return RuleOutcome(
        passed=count > 0,
        value=count,
        message=(
            f"{count} citation(s) listed"
            if count
            else "No citations or related publications listed"
        ),
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="publication-date-present",
        name="Publication Date Present",
        description="Dataset should specify publication date",
        category=CATEGORY,
        weight=10,
        severity=Severity.IMPORTANT,
        check=check_publication_date_present,
        recommendation="Add a publication date in ISO format (YYYY-MM-DD) to establish data currency.",
    ),
    RuleDeclaration(
        id="publication-date-valid",
        name="Publication Date Valid",
        description="Publication date should be a valid date",
        category=CATEGORY,
        weight=5,
        severity=Severity.WARNING,
        check=check_publication_date_valid,
        recommendation="Use a valid date format (YYYY-MM-DD recommended, e.g., 2024-01-15).",
    ),
    RuleDeclaration(
        id="publication-date-not-future",
        name="Publication Date Not Future",
        description="Publication date should not be in the future",
        category=CATEGORY,
        weight=4,
        severity=Severity.WARNING,
        check=check_publication_date_not_future,
        recommendation="Correct the publication date to reflect when the dataset was actually published.",
    ),
    RuleDeclaration(
        id="temporal-coverage-present",
        name="Temporal Coverage Specified",
        description="Dataset should specify the time period covered by the data",
        category=CATEGORY,
        weight=2,
        severity=Severity.SUGGESTION,
        check=check_temporal_coverage_present,
        recommendation=(
            "Add temporal coverage information (start_date and end_date) to indicate "
            "when the data was collected."
        ),
    ),
    RuleDeclaration(
        id="spatial-coverage-present",
        name="Spatial Coverage Specified",
        description="Dataset should specify geographic coverage",
        category=CATEGORY,
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_spatial_coverage_present,
        recommendation=(
            "Add geographic coverage information (e.g., country, region, coordinates) "
            "if applicable to the dataset."
        ),
    ),
    RuleDeclaration(
        id="funding-present",
        name="Funding Acknowledged",
        description="Dataset should acknowledge funding sources",
        category=CATEGORY,
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_funding_present,
        recommendation=(
            "If applicable, add funding source information including grant numbers "
            "for transparency and compliance."
        ),
    ),
    RuleDeclaration(
        id="access-url-present",
        name="Access URL Provided",
        description="Dataset should provide an access URL",
        category=CATEGORY,
        weight=6,
        severity=Severity.WARNING,
        check=check_access_url_present,
        recommendation="Add an access URL where users can download or access the dataset.",
    ),
    RuleDeclaration(
        id="access-url-valid",
        name="Access URL Valid Format",
        description="Access URL should be a valid URL format",
        category=CATEGORY,
        weight=3,
        severity=Severity.WARNING,
        check=check_access_url_valid,
        recommendation="Provide a valid HTTP/HTTPS URL (e.g., https://example.com/datasets/my-dataset).",
    ),
    RuleDeclaration(
        id="citations-present",
        name="Citations Listed",
        description="Dataset should list related publications or citations",
        category=CATEGORY,
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_citations_present,
        recommendation="Add related publications, papers, or documentation that describe or use this dataset.",
    ),
]
