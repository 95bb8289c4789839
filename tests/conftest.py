"""
Test fixtures shared across all metaquality tests.
"""

from datetime import date

import pytest

from metaquality.core.catalogue import build_default_catalogue
from metaquality.engine.pipeline import EvaluationPipeline
from metaquality.models.rule_models import EvaluationContext

EVALUATION_DAY = date(2025, 6, 1)


@pytest.fixture
def today():
    return EVALUATION_DAY


@pytest.fixture
def context():
    return EvaluationContext(today=EVALUATION_DAY)


@pytest.fixture
def catalogue():
    return build_default_catalogue()


@pytest.fixture
def pipeline(catalogue):
    """Pipeline with the evaluation clock frozen at EVALUATION_DAY."""
    return EvaluationPipeline(catalogue=catalogue, clock=lambda: EVALUATION_DAY)


@pytest.fixture
def rich_metadata():
    """A well-documented record that should grade A."""
    return {
        "title": "Greater Manchester Air Quality Measurements 2015-2022",
        "description": (
            "Daily air quality measurements (PM2.5, PM10, NO2 and ozone) collected "
            "from 42 monitoring stations across the Greater Manchester region between "
            "2015 and 2022. Each record includes station identifiers, timestamps, "
            "pollutant concentrations and data quality flags for downstream analysis."
        ),
        "keywords": ["air quality", "particulate matter", "urban monitoring"],
        "license": "CC-BY-4.0",
        "publication_date": "2023-03-15",
        "methodology": (
            "Hourly readings from reference-grade analysers were aggregated to daily "
            "means after automated and manual validation."
        ),
        "access_url": "https://data.example.org/air-quality",
        "authors": ["Jane Smith", "Ravi Patel"],
        "publisher": "Example Environmental Observatory",
        "version": "1.0.0",
    }


@pytest.fixture
def future_metadata(rich_metadata):
    """The rich record, published after the evaluation day."""
    return {**rich_metadata, "publication_date": "2026-01-10"}


@pytest.fixture
def minimal_metadata():
    return {"title": "Test Dataset", "description": "A dataset for testing."}
