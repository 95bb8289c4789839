"""
Accessibility Rules — Data access and format checks.

Rules tagged 'accessibility' are scored under provenance. Several of these
overlap with provenance/description rules and are removed by catalogue
deduplication in favour of the heavier rule.
"""

from __future__ import annotations

import re
from typing import Any

from metaquality.core.rules.fields import as_list, first_present
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "accessibility"

URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)

OPEN_FORMATS = ("csv", "json", "xml", "parquet", "geojson", "txt", "tsv", "rdf")

URL_FIELDS = ("access_url", "accessURL", "download_url", "downloadURL")
FORMAT_FIELDS = ("data_format", "format", "distribution")


def check_url_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    url = first_present(metadata, *URL_FIELDS)
    return RuleOutcome(
        passed=url is not None,
        value=url,
        message=(
            "Dataset has an access URL"
            if url
            else "Missing access URL - users cannot find where to get the data"
        ),
    )


def check_url_valid(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    url = first_present(metadata, *URL_FIELDS)
    if url is None:
        return RuleOutcome(passed=False, message="No access URL to validate")
    is_valid = isinstance(url, str) and URL_PATTERN.match(url) is not None
    return RuleOutcome(
        passed=is_valid,
        value=url,
        message="Access URL is valid" if is_valid else "Access URL is not a valid HTTP/HTTPS URL",
    )


def check_format_specified(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    formats = as_list(first_present(metadata, *FORMAT_FIELDS))
    return RuleOutcome(
        passed=bool(formats),
        value=formats,
        message=(
            f"Data format(s) specified: {', '.join(str(f) for f in formats)}"
            if formats
            else "No data format specified"
        ),
    )


def check_open_format(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    formats = [str(f) for f in as_list(first_present(metadata, "data_format", "format")) if f]
    if not formats:
        return RuleOutcome(passed=False, value=[], message="No data format specified")
    has_open = any(of in f.lower() for f in formats for of in OPEN_FORMATS)
    return RuleOutcome(
        passed=has_open,
        value=formats,
        message="Open format available" if has_open else "No open format detected",
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="acc-url-present",
        name="Access URL Provided",
        description="Dataset must have an access URL",
        category=CATEGORY,
        weight=5,
        severity=Severity.IMPORTANT,
        check=check_url_present,
        recommendation="Provide a valid HTTP/HTTPS URL where users can access the data.",
    ),
    RuleDeclaration(
        id="acc-url-valid",
        name="Access URL Valid Format",
        description="Access URL must be a valid HTTP/HTTPS URL",
        category=CATEGORY,
        weight=2,
        severity=Severity.WARNING,
        check=check_url_valid,
        recommendation="Ensure the access URL starts with http:// or https:// and contains no spaces.",
    ),
    RuleDeclaration(
        id="acc-format-specified",
        name="Data Format Specified",
        description="Available data formats should be specified",
        category="description",
        weight=2,
        severity=Severity.WARNING,
        check=check_format_specified,
        recommendation="Specify the file formats available (e.g., CSV, JSON, Parquet).",
    ),
    RuleDeclaration(
        id="acc-open-format",
        name="Open Format Available",
        description="At least one open/standard format should be available",
        category=CATEGORY,
        weight=2,
        severity=Severity.WARNING,
        check=check_open_format,
        recommendation="Include open formats like CSV, JSON, or Parquet.",
    ),
]
