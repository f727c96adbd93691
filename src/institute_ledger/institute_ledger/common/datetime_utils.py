from __future__ import annotations

from datetime import date, datetime
from typing import Any


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> date:
    """Accept a date, a datetime or an ISO string (a time part is ignored)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``; the day of month is ignored."""
    return (end.year * 12 + end.month) - (start.year * 12 + start.month)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
