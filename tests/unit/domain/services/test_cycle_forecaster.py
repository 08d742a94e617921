from __future__ import annotations

from datetime import date, timedelta

from src.domain.services.cycle_forecaster import (
    compute_horizon_end,
    next_occurrence,
    project_occurrences,
)

TODAY = date(2024, 6, 1)


def test_compute_horizon_end_handles_leap_day() -> None:
    assert compute_horizon_end(date(2024, 2, 29), 2) == date(2026, 2, 28)
    assert compute_horizon_end(TODAY) == date(2026, 6, 1)


def test_next_occurrence_rolls_past_anchor_forward() -> None:
    assert next_occurrence(date(2024, 1, 1), 30, date(2024, 3, 1)) == date(2024, 3, 1)
    assert next_occurrence(date(2024, 1, 1), 30, date(2024, 3, 2)) == date(
        2024, 3, 31
    )


def test_next_occurrence_keeps_future_anchor() -> None:
    assert next_occurrence(date(2024, 7, 1), 180, TODAY) == date(2024, 7, 1)


def test_next_occurrence_without_data() -> None:
    assert next_occurrence(None, 180, TODAY) is None
    assert next_occurrence(date(2024, 1, 1), 0, TODAY) is None


def test_project_occurrences_steps_by_interval_until_horizon() -> None:
    horizon_end = date(2026, 6, 1)

    dates = project_occurrences(
        date(2024, 3, 1), 180, today=TODAY, horizon_end=horizon_end
    )

    assert dates[0] == date(2024, 3, 1) + timedelta(days=180)
    assert all(b - a == timedelta(days=180) for a, b in zip(dates, dates[1:]))
    assert all(TODAY <= day <= horizon_end for day in dates)
    assert dates[-1] + timedelta(days=180) > horizon_end
    assert len(dates) == 4


def test_project_occurrences_skips_missed_cycles() -> None:
    dates = project_occurrences(
        date(2019, 1, 1), 180, today=TODAY, horizon_end=date(2025, 6, 1)
    )

    assert dates
    assert TODAY <= dates[0] < TODAY + timedelta(days=180)
    assert (dates[0] - date(2019, 1, 1)).days % 180 == 0


def test_project_occurrences_includes_horizon_end() -> None:
    anchor = TODAY
    horizon_end = anchor + timedelta(days=60)

    dates = project_occurrences(anchor, 30, today=TODAY, horizon_end=horizon_end)

    assert dates == [anchor + timedelta(days=30), horizon_end]


def test_project_occurrences_respects_cap() -> None:
    dates = project_occurrences(
        date(2024, 5, 31),
        1,
        today=TODAY,
        horizon_end=date(2030, 1, 1),
        max_occurrences=5,
    )

    assert dates == [TODAY + timedelta(days=offset) for offset in range(5)]


def test_project_occurrences_anchor_is_next() -> None:
    dates = project_occurrences(
        date(2024, 8, 1),
        100,
        today=TODAY,
        horizon_end=date(2025, 1, 1),
        anchor_is_next=True,
    )

    assert dates == [date(2024, 8, 1), date(2024, 11, 9)]


def test_project_occurrences_insufficient_data() -> None:
    assert project_occurrences(None, 180, today=TODAY, horizon_end=TODAY) == []
    assert (
        project_occurrences(
            date(2024, 1, 1), 0, today=TODAY, horizon_end=date(2026, 1, 1)
        )
        == []
    )
    assert (
        project_occurrences(
            date(2024, 1, 1), -10, today=TODAY, horizon_end=date(2026, 1, 1)
        )
        == []
    )
