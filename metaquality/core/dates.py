"""
Best-effort calendar date parsing shared by the normalizer and date rules.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%Y-%m",
    "%Y/%m",
    "%Y",
)


def parse_date(value: Any) -> date | None:
    """
    Parse a date from common textual forms.

    Accepts ISO 8601 dates and datetimes (aware datetimes are converted to
    UTC first), slash/dot separated dates, month-name forms and bare
    year or year-month values. Returns None when nothing matches.
    """
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if value is None or isinstance(value, (bool, dict, list)):
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return _utc_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()
