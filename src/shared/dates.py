"""Calendar-day helpers shared by the engine and the storage adapters.

All engine comparisons happen on whole days: datetimes are truncated to
their date before differencing so time-of-day never shifts a window.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Any, Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


def start_of_day(value: Union[date, datetime]) -> date:
    """Normalize a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Whole days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (start_of_day(end) - start_of_day(start)).days


def add_years(value: date, years: int) -> date:
    """Shift by whole years; Feb 29 lands on Feb 28 in non-leap years."""
    return value + relativedelta(years=years)


def anniversary_in_year(original: date, year: int) -> date:
    """The month/day of ``original`` placed in ``year``."""
    day = min(original.day, calendar.monthrange(year, original.month)[1])
    return date(year, original.month, day)


def next_anniversary(original: date, today: date) -> date:
    """Nearest non-past anniversary of ``original``; today counts as current."""
    this_year = anniversary_in_year(original, today.year)
    if this_year >= today:
        return this_year
    return anniversary_in_year(original, today.year + 1)


def age_in_years(birth_date: date, on: date) -> float:
    """Age with fractional years, as displayed next to forecasted animals."""
    years = relativedelta(on, birth_date).years
    last_birthday = add_years(birth_date, years)
    return years + (on - last_birthday).days / 365


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a stored date field into a calendar day.

    Accepts ``date``/``datetime`` objects and ISO or common day-first/
    month-first strings. Returns None for empty values.

    Raises:
        ValueError: If the value is present but cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Unparseable date value: {value!r}") from exc
