"""
Interoperability Rules — Standards compliance and integration checks.

Rules tagged 'interoperability' are scored under description.
"""

from __future__ import annotations

import json
import re
from typing import Any

from metaquality.core.rules.fields import first_present, text_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "interoperability"

ISO8601_PATTERN = re.compile(r"^\d{4}(-\d{2}(-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?)?)?$")
SEMVER_PATTERN = re.compile(r"^v?\d+\.\d+(\.\d+)?$")
DATE_VERSION_PATTERN = re.compile(r"^\d{4}(-\d{2})?(-\d{2})?$")
MACHINE_LICENSE_PATTERN = re.compile(
    r"^(CC(-BY|-NC|-SA|-ND)*-\d\.\d|MIT|Apache-\d\.\d|GPL-\d\.\d|BSD|CC0|PDDL|ODbL|ODC)",
    re.IGNORECASE,
)
CRS_PATTERN = re.compile(r"WGS\s*84|EPSG:\d+|CRS|coordinates|bbox", re.IGNORECASE)

DATE_FIELDS = ("publication_date", "created", "modified", "issued")
SCHEMA_FIELDS = ("schema", "schema_url", "columns", "fields", "structure", "data_dictionary")


def _collect_dates(metadata: dict[str, Any]) -> list[str]:
    dates = [str(metadata[f]) for f in DATE_FIELDS if metadata.get(f)]
    coverage = metadata.get("temporal_coverage")
    if isinstance(coverage, dict):
        for key in ("start_date", "end_date"):
            if coverage.get(key):
                dates.append(str(coverage[key]))
    return dates


def check_schema_defined(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    schema = first_present(metadata, *SCHEMA_FIELDS)
    return RuleOutcome(
        passed=schema is not None,
        value=schema,
        message="Data schema defined" if schema else "No schema defined",
    )


def check_date_iso8601(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    dates = _collect_dates(metadata)
    if not dates:
        return RuleOutcome(passed=True, message="No dates to validate")
    valid = sum(1 for d in dates if ISO8601_PATTERN.match(d.strip()))
    all_valid = valid == len(dates)
    return RuleOutcome(
        passed=all_valid,
        value=f"{valid}/{len(dates)}",
        message="Dates follow ISO 8601" if all_valid else f"{valid}/{len(dates)} dates in ISO 8601",
    )


def check_version_pattern(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    version = text_field(metadata, "version")
    if version is None:
        return RuleOutcome(passed=False, message="No version specified")
    has_pattern = bool(SEMVER_PATTERN.match(version) or DATE_VERSION_PATTERN.match(version))
    return RuleOutcome(
        passed=has_pattern,
        value=version,
        message=f"Version: {version}" if has_pattern else "Version lacks standard pattern",
    )


def check_machine_license(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    if license_id is None:
        return RuleOutcome(passed=False, message="No license specified")
    is_url = license_id.lower().startswith(("http://", "https://"))
    readable = is_url or MACHINE_LICENSE_PATTERN.match(license_id) is not None
    return RuleOutcome(
        passed=readable,
        value=license_id,
        message="License is machine-readable" if readable else "Use SPDX identifier or license URL",
    )


def check_spatial_crs(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    spatial = first_present(metadata, "spatial_coverage", "spatial")
    if spatial is None:
        return RuleOutcome(passed=True, message="No spatial data")
    text = spatial if isinstance(spatial, str) else json.dumps(spatial, default=str)
    has_crs = CRS_PATTERN.search(text) is not None
    return RuleOutcome(
        passed=has_crs,
        value=spatial,
        message="Spatial reference documented" if has_crs else "Specify coordinate reference system",
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="int-schema-defined",
        name="Schema Documented",
        description="Data schema or structure should be defined",
        category=CATEGORY,
        weight=2,
        severity=Severity.IMPORTANT,
        check=check_schema_defined,
        recommendation="Document the data structure (schema, columns or data dictionary) for interoperability.",
    ),
    RuleDeclaration(
        id="int-date-iso8601",
        name="ISO 8601 Dates",
        description="Dates should follow ISO 8601 format",
        category=CATEGORY,
        weight=2,
        severity=Severity.WARNING,
        check=check_date_iso8601,
        recommendation="Use ISO 8601 date format (YYYY-MM-DD).",
    ),
    RuleDeclaration(
        id="int-version-pattern",
        name="Version Pattern",
        description="Version should follow semantic or date-based pattern",
        category=CATEGORY,
        weight=2,
        severity=Severity.SUGGESTION,
        check=check_version_pattern,
        recommendation="Use semantic versioning (1.0.0) or date-based versioning (2024-01).",
    ),
    RuleDeclaration(
        id="int-machine-license",
        name="Machine-Readable License",
        description="License should be machine-readable (SPDX or URL)",
        category="legal",
        weight=2,
        severity=Severity.WARNING,
        check=check_machine_license,
        recommendation="Use SPDX license identifier or provide license URL.",
    ),
    RuleDeclaration(
        id="int-spatial-crs",
        name="Spatial Reference System",
        description="Spatial data should specify coordinate reference system",
        category="provenance",
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_spatial_crs,
        recommendation="Specify coordinate reference system (e.g., WGS84, EPSG code).",
    ),
]
