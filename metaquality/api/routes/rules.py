"""
Rule Catalogue Routes — read-only views of the active rule set.

  GET /rules             → every rule, in catalogue order
  GET /rules/statistics  → totals per category and severity
  GET /rules/categories  → per-category display name, rule count and weight
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metaquality.api.dependencies import get_catalogue
from metaquality.core.catalogue import RuleCatalogue
from metaquality.core.recommendations import CATEGORY_NAMES
from metaquality.models.rule_models import Category, RuleStatistics, RuleSummary

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("", response_model=list[RuleSummary])
async def list_rules(catalogue: RuleCatalogue = Depends(get_catalogue)):
    return catalogue.list_rules()


@router.get("/statistics", response_model=RuleStatistics)
async def rule_statistics(catalogue: RuleCatalogue = Depends(get_catalogue)):
    return catalogue.statistics()


@router.get("/categories")
async def rule_categories(catalogue: RuleCatalogue = Depends(get_catalogue)):
    weights = catalogue.category_weights()
    return [
        {
            "category": category.value,
            "display_name": CATEGORY_NAMES[category],
            "rule_count": len(catalogue.rules_by_category(category)),
            "total_weight": weights[category],
        }
        for category in Category
    ]
