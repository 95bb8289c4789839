"""
Description Rules — Description length, methodology and data formats.
"""

from __future__ import annotations

from typing import Any

from metaquality.core.rules.fields import list_field, text_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "description"

MIN_DESCRIPTION_LENGTH = 100
COMPREHENSIVE_DESCRIPTION_LENGTH = 250
MIN_METHODOLOGY_LENGTH = 50


def check_description_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    description = text_field(metadata, "description")
    return RuleOutcome(
        passed=description is not None,
        value=description,
        message="Description is present" if description else "Dataset is missing a description",
    )


def check_description_length_minimum(
    metadata: dict[str, Any], context: EvaluationContext
) -> RuleOutcome:
    description = text_field(metadata, "description")
    if description is None:
        return RuleOutcome(passed=False, value=0, message="No description provided")
    length = len(description)
    passed = length >= MIN_DESCRIPTION_LENGTH
    return RuleOutcome(
        passed=passed,
        value=length,
        message=(
            f"Description length ({length} chars) meets minimum requirement"
            if passed
            else f"Description is too short ({length} chars, minimum {MIN_DESCRIPTION_LENGTH} recommended)"
        ),
    )


def check_description_comprehensive(
    metadata: dict[str, Any], context: EvaluationContext
) -> RuleOutcome:
    description = text_field(metadata, "description")
    if description is None:
        return RuleOutcome(passed=False, value=0, message="No description provided")
    length = len(description)
    passed = length >= COMPREHENSIVE_DESCRIPTION_LENGTH
    return RuleOutcome(
        passed=passed,
        value=length,
        message=(
            f"Description is comprehensive ({length} chars)"
            if passed
            else (
                f"Description could be more detailed ({length} chars, "
                f"{COMPREHENSIVE_DESCRIPTION_LENGTH}+ recommended for best quality)"
            )
        ),
    )


def check_methodology_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    methodology = text_field(metadata, "methodology")
    return RuleOutcome(
        passed=methodology is not None,
        value=len(methodology) if methodology else 0,
        message="Methodology is documented" if methodology else "No methodology documentation provided",
    )


def check_methodology_detailed(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    methodology = text_field(metadata, "methodology")
    if methodology is None:
        return RuleOutcome(passed=False, value=0, message="No methodology provided")
    length = len(methodology)
    passed = length >= MIN_METHODOLOGY_LENGTH
    return RuleOutcome(
        passed=passed,
        value=length,
        message=(
            f"Methodology is adequately detailed ({length} chars)"
            if passed
            else f"Methodology description is brief ({length} chars, {MIN_METHODOLOGY_LENGTH}+ recommended)"
        ),
    )


def check_data_format_specified(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    formats = list_field(metadata, "data_format")
    return RuleOutcome(
        passed=formats is not None,
        value=formats or [],
        message=(
            f"Data formats specified: {', '.join(str(f) for f in formats)}"
            if formats
            else "No data formats specified"
        ),
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="description-presence",
        name="Description Present",
        description="Dataset must have a description",
        category=CATEGORY,
        weight=15,
        severity=Severity.CRITICAL,
        check=check_description_presence,
        recommendation=(
            "Add a description explaining what the dataset contains, its purpose, "
            "and how it was created."
        ),
    ),
    RuleDeclaration(
        id="description-length-minimum",
        name="Description Minimum Length",
        description="Description should be at least 100 characters",
        category=CATEGORY,
        weight=10,
        severity=Severity.IMPORTANT,
        check=check_description_length_minimum,
        recommendation=(
            "Expand the description to at least 100 characters. Include information "
            "about the data content, collection methods, and intended use."
        ),
    ),
    RuleDeclaration(
        id="description-comprehensive",
        name="Description Comprehensive",
        description="Description should be detailed (at least 250 characters for good quality)",
        category=CATEGORY,
        weight=6,
        severity=Severity.SUGGESTION,
        check=check_description_comprehensive,
        recommendation=(
            "For best quality, expand the description to 250+ characters covering data "
            "scope, methodology, temporal/spatial coverage, and limitations."
        ),
    ),
    RuleDeclaration(
        id="methodology-present",
        name="Methodology Documented",
        description="Dataset should document collection or processing methodology",
        category=CATEGORY,
        weight=8,
        severity=Severity.IMPORTANT,
        check=check_methodology_present,
        recommendation=(
            "Add methodology documentation explaining how the data was collected, "
            "processed, and validated."
        ),
    ),
    RuleDeclaration(
        id="methodology-detailed",
        name="Methodology Detailed",
        description="Methodology should be sufficiently detailed (at least 50 characters)",
        category=CATEGORY,
        weight=4,
        severity=Severity.SUGGESTION,
        check=check_methodology_detailed,
        recommendation=(
            "Expand methodology to include specific collection instruments, sampling "
            "methods, processing steps, and quality assurance measures."
        ),
    ),
    RuleDeclaration(
        id="data-format-specified",
        name="Data Format Specified",
        description="Dataset should specify available data formats",
        category=CATEGORY,
        weight=3,
        severity=Severity.WARNING,
        check=check_data_format_specified,
        recommendation="Specify the file formats available for this dataset (e.g., CSV, JSON, Parquet, GeoJSON).",
    ),
]
