"""
Tests for Rule Catalogue — category normalization, deduplication and integrity checks.
"""

import pytest

from metaquality.core.catalogue import (
    CatalogueIntegrityError,
    RuleCatalogue,
    normalize_category,
    rule_signature,
)
from metaquality.models.rule_models import (
    Category,
    RuleDeclaration,
    RuleOutcome,
    Severity,
)


def _passing(metadata, context):
    return RuleOutcome(passed=True, message="ok")


def _decl(rule_id, name="Rule", category="identification", weight=1, severity=Severity.WARNING, check=_passing):
    return RuleDeclaration(
        id=rule_id,
        name=name,
        description=f"{name} description",
        category=category,
        weight=weight,
        severity=severity,
        check=check,
        recommendation=f"Fix {name}",
    )


# --- Category normalization ---


@pytest.mark.parametrize(
    "label, expected",
    [
        ("identification", Category.IDENTIFICATION),
        ("Description", Category.DESCRIPTION),
        ("  LEGAL ", Category.LEGAL),
        ("provenance", Category.PROVENANCE),
        ("accessibility", Category.PROVENANCE),
        ("interoperability", Category.DESCRIPTION),
        ("citation", Category.IDENTIFICATION),
        ("reusability", Category.DESCRIPTION),
        (Category.LEGAL, Category.LEGAL),
    ],
)
def test_normalize_category(label, expected):
    assert normalize_category(label) is expected


def test_normalize_category_rejects_unknown_label():
    with pytest.raises(CatalogueIntegrityError):
        normalize_category("findability")


def test_rule_signature_ignores_case_and_spacing():
    assert rule_signature(Category.LEGAL, "License  Present") == rule_signature(
        Category.LEGAL, "license present"
    )


# --- Default catalogue ---


def test_default_catalogue_totals(catalogue):
    assert len(catalogue) == 43
    assert catalogue.total_weight() == 206
    assert catalogue.category_weights() == {
        Category.IDENTIFICATION: 52,
        Category.DESCRIPTION: 80,
        Category.LEGAL: 38,
        Category.PROVENANCE: 36,
    }


def test_default_catalogue_drops_lighter_duplicates(catalogue):
    for dropped in (
        "acc-url-present",
        "acc-url-valid",
        "acc-format-specified",
        "cit-doi-present",
        "cit-publisher",
        "cit-citations",
        "reu-methodology",
    ):
        assert dropped not in catalogue
    assert "access-url-present" in catalogue
    assert "citations-present" in catalogue


def test_default_catalogue_remaps_extended_categories(catalogue):
    assert catalogue.require_rule("int-machine-license").category is Category.LEGAL
    assert catalogue.require_rule("reu-variables").category is Category.DESCRIPTION
    assert catalogue.require_rule("cit-persistent-id").category is Category.IDENTIFICATION
    assert catalogue.require_rule("acc-open-format").category is Category.PROVENANCE


def test_every_rule_is_well_formed(catalogue):
    ids = [rule.id for rule in catalogue]
    assert len(ids) == len(set(ids))
    for rule in catalogue:
        assert rule.weight > 0
        assert rule.category in Category
        assert rule.severity in Severity
        assert rule.recommendation


def test_statistics(catalogue):
    stats = catalogue.statistics()
    assert stats.total_rules == 43
    assert stats.total_weight == 206
    assert stats.category_count == 4
    assert sum(stats.category_counts.values()) == 43
    assert sum(stats.severity_counts.values()) == 43
    assert catalogue.all_rules() == tuple(catalogue)
    assert catalogue.index_of("title-presence") == 0


def test_require_rule_unknown_raises(catalogue):
    with pytest.raises(KeyError):
        catalogue.require_rule("does-not-exist")
    assert catalogue.get_rule("does-not-exist") is None


# --- Construction ---


def test_duplicate_signature_keeps_heavier_rule_in_first_position():
    cat = RuleCatalogue(
        [
            _decl("a", name="Same Rule", weight=2),
            _decl("b", name="Other Rule", weight=1),
            _decl("c", name="same rule", weight=5),
        ]
    )
    assert [r.id for r in cat] == ["c", "b"]
    assert cat.total_weight() == 6


def test_duplicate_signature_with_equal_weight_keeps_first():
    cat = RuleCatalogue(
        [
            _decl("a", name="Same Rule", weight=3),
            _decl("c", name="Same Rule", weight=3),
        ]
    )
    assert [r.id for r in cat] == ["a"]


def test_same_name_in_different_categories_is_kept():
    cat = RuleCatalogue(
        [
            _decl("a", name="Same Rule", category="legal"),
            _decl("b", name="Same Rule", category="provenance"),
        ]
    )
    assert len(cat) == 2


def test_duplicate_ids_rejected():
    with pytest.raises(CatalogueIntegrityError):
        RuleCatalogue([_decl("a", name="One"), _decl("a", name="Two")])


def test_duplicate_id_rejected_even_when_dedup_would_drop_it():
    # The second declaration loses on weight, but its id still collides
    with pytest.raises(CatalogueIntegrityError, match="Duplicate rule id"):
        RuleCatalogue([_decl("a", name="Same Rule", weight=3), _decl("a", name="same rule", weight=1)])


@pytest.mark.parametrize("weight", [0, -1, 1.5, True])
def test_invalid_weight_rejected(weight):
    with pytest.raises(CatalogueIntegrityError):
        RuleCatalogue([_decl("a", weight=weight)])


def test_unknown_category_rejected():
    with pytest.raises(CatalogueIntegrityError):
        RuleCatalogue([_decl("a", category="findability")])


def test_unknown_severity_rejected():
    with pytest.raises(CatalogueIntegrityError):
        RuleCatalogue([_decl("a", severity="blocker")])


def test_missing_check_rejected():
    with pytest.raises(CatalogueIntegrityError):
        RuleCatalogue([_decl("a", check=None)])


def test_empty_catalogue():
    cat = RuleCatalogue([])
    assert len(cat) == 0
    assert cat.total_weight() == 0
