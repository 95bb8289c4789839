"""
Citation Rules — Citation and attribution checks.

Rules tagged 'citation' are scored under identification.
"""

from __future__ import annotations

import re
from typing import Any

from metaquality.core.rules.fields import first_present, list_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "citation"

DOI_PREFIX = re.compile(r"^https?://(dx\.)?doi\.org/", re.IGNORECASE)

PERSISTENT_ID_PATTERNS = (
    re.compile(r"^10\.\d{4,}"),
    re.compile(r"^ark:", re.IGNORECASE),
    re.compile(r"^hdl:", re.IGNORECASE),
    re.compile(r"^urn:", re.IGNORECASE),
    re.compile(r"^https?://(dx\.)?doi\.org/", re.IGNORECASE),
    re.compile(r"^https?://hdl\.handle\.net/", re.IGNORECASE),
)


def check_doi_present(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    doi = first_present(metadata, "doi", "identifier")
    has_doi = isinstance(doi, str) and DOI_PREFIX.sub("", doi).startswith("10.")
    return RuleOutcome(
        passed=has_doi,
        value=doi,
        message="Dataset has a DOI" if has_doi else "No DOI for citation",
    )


def check_publisher(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    publisher = first_present(metadata, "publisher", "repository", "organization")
    return RuleOutcome(
        passed=publisher is not None,
        value=publisher,
        message="Publisher identified" if publisher else "Publisher not specified",
    )


def check_persistent_id(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    identifier = first_present(metadata, "identifier", "doi", "ark", "handle")
    if not isinstance(identifier, str):
        return RuleOutcome(passed=False, message="No identifier present")
    identifier = identifier.strip()
    is_persistent = any(p.match(identifier) for p in PERSISTENT_ID_PATTERNS)
    return RuleOutcome(
        passed=is_persistent,
        value=identifier,
        message=(
            "Uses persistent identifier"
            if is_persistent
            else "Not a recognized persistent identifier"
        ),
    )


def check_citations(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    citations = list_field(metadata, "citations")
    return RuleOutcome(
        passed=citations is not None,
        value=len(citations) if citations else 0,
        message="Citations listed" if citations else "No citations listed",
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="cit-doi-present",
        name="DOI Available",
        description="Dataset should have a DOI for citation",
        category=CATEGORY,
        weight=1,
        severity=Severity.WARNING,
        check=check_doi_present,
        recommendation="Register a DOI for proper dataset citation.",
    ),
    RuleDeclaration(
        id="cit-publisher",
        name="Publisher Identified",
        description="Publisher/repository should be identified",
        category=CATEGORY,
        weight=4,
        severity=Severity.WARNING,
        check=check_publisher,
        recommendation="Identify the publisher or hosting repository.",
    ),
    RuleDeclaration(
        id="cit-persistent-id",
        name="Persistent Identifier",
        description="Identifier should be persistent (DOI, ARK, Handle)",
        category=CATEGORY,
        weight=2,
        severity=Severity.IMPORTANT,
        check=check_persistent_id,
        recommendation="Use DOI, ARK, or Handle for persistent identification.",
    ),
    RuleDeclaration(
        id="cit-citations",
        name="Citations Listed",
        description="Related publications should be referenced",
        category="provenance",
        weight=1,
        severity=Severity.SUGGESTION,
        check=check_citations,
        recommendation="Link related publications that use this dataset.",
    ),
]
