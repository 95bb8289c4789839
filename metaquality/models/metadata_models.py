"""
Metadata Document Models — The expected shape of a dataset metadata record.

Scoring never depends on these models: a record that fails validation is
still evaluated by every rule. Validation only reports structural problems
(wrong types, missing title/description) alongside the score.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MetadataDocument(BaseModel):
    """A dataset metadata record. Unknown fields are allowed."""

    model_config = ConfigDict(extra="allow", title="Dataset Metadata")

    title: str = Field(..., min_length=1, description="Dataset title")
    description: str = Field(..., min_length=1, description="What the dataset contains")
    authors: list[str | dict[str, Any]] | None = None
    publisher: str | dict[str, Any] | None = None
    keywords: list[str] | None = None
    license: str | None = Field(default=None, description="SPDX identifier preferred")
    publication_date: str | None = Field(default=None, description="ISO 8601 date")
    version: str | None = None
    doi: str | None = None
    identifier: str | None = None
    access_url: str | None = None
    data_format: str | list[str] | None = None
    methodology: str | None = None
    contact_email: str | None = None
    language: str | None = None
    funding: str | list[Any] | dict[str, Any] | None = None
    temporal_coverage: str | dict[str, Any] | None = None
    spatial_coverage: str | dict[str, Any] | None = None
    citations: list[str | dict[str, Any]] | None = None
    related_datasets: list[Any] | None = None
    variables: list[Any] | dict[str, Any] | None = None


class SchemaError(BaseModel):
    field: str
    message: str
    keyword: str = Field(..., description="pydantic error type, e.g. string_type")


class SchemaValidation(BaseModel):
    """Structural validation of a record against MetadataDocument."""

    valid: bool = True
    error_count: int = 0
    errors: list[SchemaError] = Field(default_factory=list)
