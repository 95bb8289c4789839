"""
Rule Catalogue — The fixed, validated set of quality rules.

Built once from the rule group modules, then shared read-only by the rule
engine, scorer and recommendation generator. Construction fails fast on an
inconsistent rule set so that scores are never computed from one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from functools import lru_cache

from metaquality.core.rules import (
    accessibility,
    citation,
    description,
    identification,
    interoperability,
    keywords,
    license,
    provenance,
    reusability,
)
from metaquality.models.rule_models import (
    Category,
    RuleDeclaration,
    RuleDefinition,
    RuleStatistics,
    RuleSummary,
    Severity,
)

logger = logging.getLogger("metaquality.catalogue")

# Rule groups in insertion order
RULE_GROUPS: list[list[RuleDeclaration]] = [
    identification.RULES,
    description.RULES,
    keywords.RULES,
    license.RULES,
    provenance.RULES,
    accessibility.RULES,
    interoperability.RULES,
    citation.RULES,
    reusability.RULES,
]

# Labels used by extended rule groups and the category they are scored under
LEGACY_CATEGORY_MAP: dict[str, Category] = {
    "accessibility": Category.PROVENANCE,
    "interoperability": Category.DESCRIPTION,
    "citation": Category.IDENTIFICATION,
    "reusability": Category.DESCRIPTION,
}


class CatalogueIntegrityError(ValueError):
    """The rule set is inconsistent and must not be used for scoring."""


def normalize_category(label: str | Category) -> Category:
    """
    Resolve any category label to one of the four scoring categories.

    Canonical names map to themselves (case-insensitive); the legacy labels
    in LEGACY_CATEGORY_MAP are remapped. Anything else is rejected.
    """
    if isinstance(label, Category):
        return label
    key = str(label).strip().lower()
    try:
        return Category(key)
    except ValueError:
        pass
    if key in LEGACY_CATEGORY_MAP:
        return LEGACY_CATEGORY_MAP[key]
    raise CatalogueIntegrityError(f"Unknown rule category: {label!r}")


def rule_signature(category: Category, name: str) -> str:
    normalized_name = re.sub(r"\s+", "-", name.strip().lower())
    return f"{category.value}-{normalized_name}"


class RuleCatalogue:
    """
    Immutable, ordered collection of rule definitions.

    Rules whose (category, normalized name) collide are deduplicated at
    construction: the heavier rule is kept in the position of the first one,
    and on equal weight the first-declared rule wins.
    """

    def __init__(self, declarations: Iterable[RuleDeclaration]) -> None:
        kept: list[RuleDefinition] = []
        by_signature: dict[str, int] = {}
        declared_ids: set[str] = set()

        for declaration in declarations:
            rule = _resolve(declaration)
            if rule.id in declared_ids:
                raise CatalogueIntegrityError(f"Duplicate rule id: {rule.id!r}")
            declared_ids.add(rule.id)
            signature = rule_signature(rule.category, rule.name)
            if signature in by_signature:
                idx = by_signature[signature]
                existing = kept[idx]
                if rule.weight > existing.weight:
                    logger.debug(f"Rule '{existing.id}' replaced by heavier duplicate '{rule.id}'")
                    kept[idx] = rule
                else:
                    logger.debug(f"Duplicate rule '{rule.id}' dropped in favour of '{existing.id}'")
                continue
            by_signature[signature] = len(kept)
            kept.append(rule)

        self._rules: tuple[RuleDefinition, ...] = tuple(kept)
        self._by_id: dict[str, RuleDefinition] = {rule.id: rule for rule in self._rules}
        self._position: dict[str, int] = {rule.id: i for i, rule in enumerate(self._rules)}

        self._category_weights: dict[Category, int] = {c: 0 for c in Category}
        for rule in self._rules:
            self._category_weights[rule.category] += rule.weight
        self._total_weight = sum(self._category_weights.values())

        logger.info(
            f"Rule catalogue ready: {len(self._rules)} rules, total weight {self._total_weight}"
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    def all_rules(self) -> tuple[RuleDefinition, ...]:
        return self._rules

    def get_rule(self, rule_id: str) -> RuleDefinition | None:
        return self._by_id.get(rule_id)

    def require_rule(self, rule_id: str) -> RuleDefinition:
        try:
            return self._by_id[rule_id]
        except KeyError:
            raise KeyError(f"Unknown rule: {rule_id}") from None

    def index_of(self, rule_id: str) -> int:
        """Catalogue position of a rule, used as the final ordering tie-break."""
        return self._position[rule_id]

    def total_weight(self) -> int:
        return self._total_weight

    def category_weights(self) -> dict[Category, int]:
        return dict(self._category_weights)

    def rules_by_category(self, category: Category | str) -> tuple[RuleDefinition, ...]:
        cat = normalize_category(category)
        return tuple(r for r in self._rules if r.category is cat)

    def rules_by_severity(self) -> dict[Severity, list[RuleDefinition]]:
        grouped: dict[Severity, list[RuleDefinition]] = {s: [] for s in Severity}
        for rule in self._rules:
            grouped[rule.severity].append(rule)
        return grouped

    def list_rules(self) -> list[RuleSummary]:
        return [rule.to_summary() for rule in self._rules]

    def statistics(self) -> RuleStatistics:
        by_severity = self.rules_by_severity()
        return RuleStatistics(
            total_rules=len(self._rules),
            total_weight=self._total_weight,
            category_count=len(Category),
            category_counts={c: len(self.rules_by_category(c)) for c in Category},
            category_weights=self.category_weights(),
            severity_counts={s: len(rules) for s, rules in by_severity.items()},
        )


def _resolve(declaration: RuleDeclaration) -> RuleDefinition:
    if not declaration.id or not declaration.id.strip():
        raise CatalogueIntegrityError(f"Rule {declaration.name!r} has no id")
    if isinstance(declaration.weight, bool) or not isinstance(declaration.weight, int):
        raise CatalogueIntegrityError(f"Rule {declaration.id!r} weight must be an integer")
    if declaration.weight <= 0:
        raise CatalogueIntegrityError(
            f"Rule {declaration.id!r} weight must be positive, got {declaration.weight}"
        )
    try:
        severity = Severity(declaration.severity)
    except ValueError:
        raise CatalogueIntegrityError(
            f"Rule {declaration.id!r} has unknown severity {declaration.severity!r}"
        ) from None
    if not callable(declaration.check):
        raise CatalogueIntegrityError(f"Rule {declaration.id!r} has no check function")

    return RuleDefinition(
        id=declaration.id,
        name=declaration.name,
        description=declaration.description,
        category=normalize_category(declaration.category),
        weight=declaration.weight,
        severity=severity,
        check_fn=declaration.check,
        recommendation=declaration.recommendation,
    )


@lru_cache
def build_default_catalogue() -> RuleCatalogue:
    """The production catalogue, built once per process."""
    return RuleCatalogue(rule for group in RULE_GROUPS for rule in group)
