"""
Tests for Metadata Normalizer and date parsing.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from metaquality.core.dates import parse_date
from metaquality.core.normalizer import normalize_metadata


# --- normalize_metadata ---


@pytest.mark.parametrize("raw", [None, "title", 42, ["title"], True])
def test_non_mapping_becomes_empty_record(raw):
    assert normalize_metadata(raw) == {}


def test_strings_are_trimmed_and_blank_strings_removed():
    result = normalize_metadata({"title": "  Air Quality  ", "description": "   ", "license": ""})
    assert result == {"title": "Air Quality"}


def test_arrays_drop_empty_items_and_empty_arrays_removed():
    result = normalize_metadata(
        {"keywords": [" air ", "", None, False, "ozone"], "authors": ["", "  "], "citations": []}
    )
    assert result == {"keywords": ["air", "ozone"]}


def test_unknown_fields_pass_through():
    result = normalize_metadata({"schema": {"columns": ["a"]}, "custom": "  kept as is  "})
    assert result["schema"] == {"columns": ["a"]}
    assert result["custom"] == "  kept as is  "


def test_wrong_types_are_left_for_rules_to_judge():
    result = normalize_metadata({"title": 123, "keywords": "air, ozone"})
    assert result == {"title": 123, "keywords": "air, ozone"}


def test_publication_date_is_canonicalized():
    assert normalize_metadata({"publication_date": "2023/03/15"})["publication_date"] == "2023-03-15"
    assert normalize_metadata({"publication_date": "15 March 2023"})["publication_date"] == "2023-03-15"
    assert normalize_metadata({"publication_date": 2020})["publication_date"] == "2020-01-01"


def test_blank_publication_date_removed():
    assert normalize_metadata({"publication_date": "  "}) == {}
    assert normalize_metadata({"publication_date": None}) == {}


def test_unparseable_publication_date_kept():
    result = normalize_metadata({"publication_date": " sometime last spring "})
    assert result["publication_date"] == "sometime last spring"


def test_input_is_not_mutated():
    raw = {"title": "  Title  ", "keywords": [" a ", ""], "extra": {"nested": [1]}}
    snapshot = {"title": "  Title  ", "keywords": [" a ", ""], "extra": {"nested": [1]}}
    result = normalize_metadata(raw)
    result["extra"]["nested"].append(2)
    assert raw == snapshot


def test_normalization_is_idempotent(rich_metadata):
    messy = {
        **rich_metadata,
        "title": f"  {rich_metadata['title']}  ",
        "keywords": rich_metadata["keywords"] + ["", None],
        "publication_date": "2023/03/15",
        "funding": "   ",
    }
    once = normalize_metadata(messy)
    assert normalize_metadata(once) == once


# --- parse_date ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2023-03-15", date(2023, 3, 15)),
        ("2023-03-15T10:30:00", date(2023, 3, 15)),
        ("2023/03/15", date(2023, 3, 15)),
        ("2023.03.15", date(2023, 3, 15)),
        ("15 March 2023", date(2023, 3, 15)),
        ("Mar 15, 2023", date(2023, 3, 15)),
        ("2023-03", date(2023, 3, 1)),
        ("2023", date(2023, 1, 1)),
    ],
)
def test_parse_date_formats(text, expected):
    assert parse_date(text) == expected


def test_parse_date_converts_aware_datetimes_to_utc():
    assert parse_date("2023-03-15T23:30:00-05:00") == date(2023, 3, 16)
    assert parse_date("2023-03-15T23:30:00Z") == date(2023, 3, 15)


def test_parse_date_accepts_date_objects():
    assert parse_date(date(2020, 1, 2)) == date(2020, 1, 2)
    aware = datetime(2020, 1, 2, 23, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert parse_date(aware) == date(2020, 1, 3)


@pytest.mark.parametrize("value", [None, "", "not a date", "2023-13-45", True, {}, []])
def test_parse_date_rejects_garbage(value):
    assert parse_date(value) is None
