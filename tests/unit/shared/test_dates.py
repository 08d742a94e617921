from __future__ import annotations

from datetime import date, datetime

import pytest

from src.shared.dates import (
    add_years,
    age_in_years,
    days_between,
    next_anniversary,
    parse_date,
)


def test_days_between_ignores_time_of_day() -> None:
    assert days_between(datetime(2024, 6, 1, 23, 59), datetime(2024, 6, 2, 0, 1)) == 1
    assert days_between(date(2024, 6, 5), date(2024, 6, 1)) == -4


def test_add_years_clamps_leap_day() -> None:
    assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
    assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)


def test_next_anniversary_same_day_counts() -> None:
    assert next_anniversary(date(2020, 6, 1), date(2024, 6, 1)) == date(2024, 6, 1)
    assert next_anniversary(date(2020, 5, 31), date(2024, 6, 1)) == date(2025, 5, 31)


def test_age_in_years_is_fractional() -> None:
    assert age_in_years(date(2020, 6, 1), date(2024, 6, 1)) == 4
    assert 4.4 < age_in_years(date(2020, 1, 1), date(2024, 6, 1)) < 4.5


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-06-01", date(2024, 6, 1)),
        ("2024-06-01T10:30:00Z", date(2024, 6, 1)),
        ("June 1, 2024", date(2024, 6, 1)),
        (datetime(2024, 6, 1, 8), date(2024, 6, 1)),
        (date(2024, 6, 1), date(2024, 6, 1)),
        (None, None),
        ("", None),
    ],
)
def test_parse_date_accepts_stored_formats(value, expected) -> None:
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", ["not a date", "31/31/2024", 12345])
def test_parse_date_rejects_garbage(value) -> None:
    with pytest.raises(ValueError):
        parse_date(value)
