"""
Reusability Rules — Data reuse and reproducibility checks.

Rules tagged 'reusability' are scored under description.
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

CATEGORY = "reusability"

MIN_METHODOLOGY_LENGTH = 50

REUSE_LICENSE_PATTERN = re.compile(
    r"^(CC(-BY|0|-0)|MIT|Apache|BSD|ODC|PDDL|ODbL|Public\s*Domain|Unlicense)",
    re.IGNORECASE,
)

VARIABLE_FIELDS = ("variables", "columns", "fields", "data_dictionary", "schema", "codebook")


def check_methodology(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    methodology = first_present(metadata, "methodology", "methods", "collection_method")
    documented = isinstance(methodology, str) and len(methodology) > MIN_METHODOLOGY_LENGTH
    return RuleOutcome(
        passed=documented,
        value=methodology[:100] if isinstance(methodology, str) else None,
        message="Methodology documented" if documented else "Methodology missing or incomplete",
    )


def check_license_reuse(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    if license_id is None:
        return RuleOutcome(passed=False, message="No license specified")
    can_reuse = REUSE_LICENSE_PATTERN.match(license_id) is not None
    return RuleOutcome(
        passed=can_reuse,
        value=license_id,
        message="License allows reuse" if can_reuse else "License may restrict reuse",
    )


def check_variables(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    definitions = first_present(metadata, *VARIABLE_FIELDS)
    return RuleOutcome(
        passed=definitions is not None,
        message="Variable definitions provided" if definitions else "No variable definitions",
    )


def check_units(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    variables = first_present(metadata, "variables", "columns", "fields")
    if variables is None:
        return RuleOutcome(passed=False, message="No variables to specify units for")
    has_units = bool(
        first_present(metadata, "units", "measurement_units")
        or "unit" in json.dumps(variables, default=str).lower()
    )
    return RuleOutcome(
        passed=has_units,
        message="Units specified" if has_units else "Units not specified",
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="reu-methodology",
        name="Methodology Documented",
        description="Data collection methodology should be documented",
        category=CATEGORY,
        weight=5,
        severity=Severity.WARNING,
        check=check_methodology,
        recommendation="Document data collection methodology for reproducibility.",
    ),
    RuleDeclaration(
        id="reu-license-reuse",
        name="License Allows Reuse",
        description="License should explicitly allow data reuse",
        category="legal",
        weight=3,
        severity=Severity.IMPORTANT,
        check=check_license_reuse,
        recommendation="Use open licenses like CC-BY or CC0 for maximum reusability.",
    ),
    RuleDeclaration(
        id="reu-variables",
        name="Variable Definitions",
        description="Variable/column definitions should be provided",
        category=CATEGORY,
        weight=2,
        severity=Severity.IMPORTANT,
        check=check_variables,
        recommendation="Provide definitions for all variables/columns.",
    ),
    RuleDeclaration(
        id="reu-units",
        name="Units Specified",
        description="Units of measurement should be specified for documented variables",
        category=CATEGORY,
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_units,
        recommendation="Specify units of measurement for numeric data.",
    ),
]
