"""
Identification Rules — Title, authors, publisher, version and DOI.

Checks that a dataset can be told apart from others and attributed.
"""

from __future__ import annotations

import re
from typing import Any

from metaquality.core.rules.fields import list_field, text_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "identification"

MIN_TITLE_LENGTH = 10

GENERIC_TITLES = {"data", "dataset", "file", "untitled", "test", "sample", "new dataset"}

DOI_PATTERN = re.compile(r"^10\.\d{4,}/\S+$")


def check_title_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    title = text_field(metadata, "title")
    return RuleOutcome(
        passed=title is not None,
        value=title,
        message="Title is present" if title else "Dataset is missing a title",
    )


def check_title_length(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    title = text_field(metadata, "title")
    if title is None:
        return RuleOutcome(passed=False, value=0, message="No title provided")
    length = len(title)
    passed = length >= MIN_TITLE_LENGTH
    return RuleOutcome(
        passed=passed,
        value=length,
        message=(
            f"Title length ({length} chars) meets minimum requirement"
            if passed
            else f"Title is too short ({length} chars, minimum {MIN_TITLE_LENGTH} recommended)"
        ),
    )


def check_title_not_generic(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    title = text_field(metadata, "title")
    if title is None:
        return RuleOutcome(passed=False, value=None, message="No title provided")
    lowered = title.lower()
    is_generic = any(lowered == g or lowered.startswith(g + " ") for g in GENERIC_TITLES)
    return RuleOutcome(
        passed=not is_generic,
        value=title,
        message=(
            "Title appears to be generic or placeholder text"
            if is_generic
            else "Title is specific and descriptive"
        ),
    )


def check_authors_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    authors = list_field(metadata, "authors")
    count = len(authors) if authors else 0
    return RuleOutcome(
        passed=count > 0,
        value=count,
        message=f"{count} author(s) listed" if count else "No authors listed",
    )


def check_publisher_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    publisher = text_field(metadata, "publisher")
    return RuleOutcome(
        passed=publisher is not None,
        value=publisher,
        message="Publisher is identified" if publisher else "No publisher information provided",
    )


def check_version_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    version = text_field(metadata, "version")
    return RuleOutcome(
        passed=version is not None,
        value=version,
        message=f"Version {version} specified" if version else "No version information provided",
    )


def check_doi_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    doi = text_field(metadata, "doi")
    valid = doi is not None and DOI_PATTERN.match(doi) is not None
    if valid:
        message = "Valid DOI present"
    elif doi:
        message = "DOI format appears invalid"
    else:
        message = "No DOI provided"
    return RuleOutcome(passed=valid, value=doi, message=message)


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="title-presence",
        name="Title Present",
        description="Dataset must have a title",
        category=CATEGORY,
        weight=15,
        severity=Severity.CRITICAL,
        check=check_title_presence,
        recommendation="Provide a clear, concise title that describes the dataset content.",
    ),
    RuleDeclaration(
        id="title-length",
        name="Title Length",
        description="Title should be at least 10 characters for clarity",
        category=CATEGORY,
        weight=8,
        severity=Severity.WARNING,
        check=check_title_length,
        recommendation=(
            "Expand the title to be more descriptive (at least 10 characters). "
            "Include the subject, data type, and scope."
        ),
    ),
    RuleDeclaration(
        id="title-not-generic",
        name="Title Not Generic",
        description="Title should not be overly generic",
        category=CATEGORY,
        weight=5,
        severity=Severity.WARNING,
        check=check_title_not_generic,
        recommendation=(
            "Replace generic title with a specific, descriptive name that indicates "
            "the dataset content and scope."
        ),
    ),
    RuleDeclaration(
        id="authors-presence",
        name="Authors Listed",
        description="Dataset should list at least one author or contributor",
        category=CATEGORY,
        weight=10,
        severity=Severity.IMPORTANT,
        check=check_authors_presence,
        recommendation="Add at least one author name to establish provenance and enable proper citation.",
    ),
    RuleDeclaration(
        id="publisher-presence",
        name="Publisher Identified",
        description="Dataset should identify the publishing organization",
        category=CATEGORY,
        weight=6,
        severity=Severity.WARNING,
        check=check_publisher_presence,
        recommendation="Add the name of the organization or entity responsible for publishing this dataset.",
    ),
    RuleDeclaration(
        id="version-present",
        name="Version Specified",
        description="Dataset should have a version identifier",
        category=CATEGORY,
        weight=4,
        severity=Severity.SUGGESTION,
        check=check_version_present,
        recommendation=(
            'Add a version identifier (e.g., "1.0.0", "2024-01") to track dataset '
            "updates and enable reproducibility."
        ),
    ),
    RuleDeclaration(
        id="doi-present",
        name="DOI Available",
        description="Dataset should have a Digital Object Identifier for persistent citation",
        category=CATEGORY,
        weight=2,
        severity=Severity.SUGGESTION,
        check=check_doi_present,
        recommendation="Register a DOI for this dataset to enable persistent identification and proper citation.",
    ),
]
