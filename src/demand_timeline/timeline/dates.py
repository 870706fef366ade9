# src/demand_timeline/timeline/dates.py

"""
Calendar-date helpers.

Selected dates arrive as "YYYY-MM-DD" strings. They are split into integer
components and turned into a plain `datetime.date`, never parsed as an instant,
so the weekday cannot drift across a UTC boundary.
"""

from __future__ import annotations

from datetime import date, timedelta


def parse_ymd(ymd: str) -> date:
    """
    Parse "YYYY-MM-DD" into a calendar date.

    Raises ValueError on anything else; a malformed date is a caller error.
    """
    parts = (ymd or "").strip().split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"expected YYYY-MM-DD, got {ymd!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def format_ymd(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def weekday_of(d: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return d.isoweekday() % 7


def shift_date(d: date, days: int) -> date:
    return d + timedelta(days=int(days))
