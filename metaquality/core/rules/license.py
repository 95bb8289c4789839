"""
License Rules — Legal and licensing compliance.
"""

from __future__ import annotations

from typing import Any

from metaquality.core.rules.fields import text_field
from metaquality.models.rule_models import (
    EvaluationContext,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)

CATEGORY = "legal"

# Common SPDX license identifiers for open data
SPDX_LICENSES = {
    spdx.lower()
    for spdx in (
        "CC0-1.0", "CC-BY-1.0", "CC-BY-2.0", "CC-BY-2.5", "CC-BY-3.0", "CC-BY-4.0",
        "CC-BY-SA-1.0", "CC-BY-SA-2.0", "CC-BY-SA-2.5", "CC-BY-SA-3.0", "CC-BY-SA-4.0",
        "CC-BY-NC-1.0", "CC-BY-NC-2.0", "CC-BY-NC-2.5", "CC-BY-NC-3.0", "CC-BY-NC-4.0",
        "CC-BY-NC-SA-1.0", "CC-BY-NC-SA-2.0", "CC-BY-NC-SA-2.5", "CC-BY-NC-SA-3.0", "CC-BY-NC-SA-4.0",
        "CC-BY-ND-1.0", "CC-BY-ND-2.0", "CC-BY-ND-2.5", "CC-BY-ND-3.0", "CC-BY-ND-4.0",
        "CC-BY-NC-ND-1.0", "CC-BY-NC-ND-2.0", "CC-BY-NC-ND-2.5", "CC-BY-NC-ND-3.0", "CC-BY-NC-ND-4.0",
        "ODbL-1.0", "ODC-By-1.0", "PDDL-1.0",
        "MIT", "Apache-2.0", "GPL-3.0-only", "GPL-3.0-or-later", "BSD-3-Clause", "BSD-2-Clause",
        "Unlicense", "WTFPL",
    )
}

# Licenses that promote open data reuse
OPEN_LICENSES = {
    spdx.lower()
    for spdx in (
        "CC0-1.0", "CC-BY-4.0", "CC-BY-SA-4.0", "ODbL-1.0", "ODC-By-1.0", "PDDL-1.0",
        "Unlicense", "MIT", "Apache-2.0", "BSD-3-Clause", "BSD-2-Clause",
    )
}

_NO_LICENSE = "No license specified"


def check_license_presence(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    return RuleOutcome(
        passed=license_id is not None,
        value=license_id,
        message=f"License specified: {license_id}" if license_id else _NO_LICENSE,
    )


def check_license_spdx_valid(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    if license_id is None:
        return RuleOutcome(passed=False, value=None, message=_NO_LICENSE)
    is_spdx = license_id.lower() in SPDX_LICENSES
    return RuleOutcome(
        passed=is_spdx,
        value=license_id,
        message=(
            "License uses standard SPDX identifier"
            if is_spdx
            else "License does not match a known SPDX identifier"
        ),
    )


def check_license_open(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    if license_id is None:
        return RuleOutcome(passed=False, value=None, message=_NO_LICENSE)
    is_open = license_id.lower() in OPEN_LICENSES
    return RuleOutcome(
        passed=is_open,
        value=license_id,
        message="License promotes open data reuse" if is_open else "License may limit data reuse and sharing",
    )


def check_license_not_restrictive(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    license_id = text_field(metadata, "license")
    if license_id is None:
        return RuleOutcome(passed=False, value=None, message=_NO_LICENSE)
    no_derivatives = "-ND" in license_id.upper()
    return RuleOutcome(
        passed=not no_derivatives,
        value=license_id,
        message=(
            "License contains NoDerivatives restriction"
            if no_derivatives
            else "License allows derivative works"
        ),
    )


def check_contact_for_licensing(metadata: dict[str, Any], context: EvaluationContext) -> RuleOutcome:
    email = text_field(metadata, "contact_email")
    has_contact = email is not None and "@" in email
    return RuleOutcome(
        passed=has_contact,
        value=email if has_contact else None,
        message=(
            "Contact email available for licensing questions"
            if has_contact
            else "No contact email provided for licensing inquiries"
        ),
    )


RULES: list[RuleDeclaration] = [
    RuleDeclaration(
        id="license-presence",
        name="License Present",
        description="Dataset must specify a license",
        category=CATEGORY,
        weight=15,
        severity=Severity.CRITICAL,
        check=check_license_presence,
        recommendation=(
            "Specify a clear license for the dataset. Consider using a standard SPDX "
            "identifier like CC-BY-4.0 or CC0-1.0."
        ),
    ),
    RuleDeclaration(
        id="license-spdx-valid",
        name="SPDX License Identifier",
        description="License should use standard SPDX identifier for interoperability",
        category=CATEGORY,
        weight=8,
        severity=Severity.IMPORTANT,
        check=check_license_spdx_valid,
        recommendation=(
            "Use a standard SPDX license identifier (e.g., CC-BY-4.0, MIT, Apache-2.0) "
            "for better interoperability and legal clarity."
        ),
    ),
    RuleDeclaration(
        id="license-open",
        name="Open Data License",
        description="Dataset should use an open license that permits reuse",
        category=CATEGORY,
        weight=5,
        severity=Severity.SUGGESTION,
        check=check_license_open,
        recommendation="Consider using an open license like CC-BY-4.0 or CC0-1.0 to maximize data reuse and impact.",
    ),
    RuleDeclaration(
        id="license-not-restrictive",
        name="License Not Overly Restrictive",
        description="License should not contain ND (NoDerivatives) restriction for maximum usability",
        category=CATEGORY,
        weight=3,
        severity=Severity.SUGGESTION,
        check=check_license_not_restrictive,
        recommendation=(
            "The NoDerivatives (ND) restriction limits how others can build on your data. "
            "Consider a less restrictive license for greater impact."
        ),
    ),
    RuleDeclaration(
        id="contact-for-licensing",
        name="Contact Information for Licensing",
        description="Dataset should provide contact for licensing questions",
        category=CATEGORY,
        weight=2,
        severity=Severity.SUGGESTION,
        check=check_contact_for_licensing,
        recommendation="Provide a contact email address for users with licensing questions or data access requests.",
    ),
]
