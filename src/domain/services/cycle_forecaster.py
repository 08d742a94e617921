"""Domain service projecting recurring cycle dates forward."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import List, Optional

from src.shared import get_logger
from src.shared.dates import add_years

logger = get_logger(__name__)

DEFAULT_HORIZON_YEARS = 2
MAX_PROJECTED_OCCURRENCES = 20


def compute_horizon_end(today: date, years: int = DEFAULT_HORIZON_YEARS) -> date:
    """Furthest date a forecast may reach."""
    return add_years(today, years)


def _roll_forward(current: date, interval: timedelta, today: date) -> date:
    if current >= today:
        return current
    missed = math.ceil((today - current).days / interval.days)
    return current + interval * missed


def next_occurrence(
    anchor: Optional[date], interval_days: int, today: date
) -> Optional[date]:
    """First occurrence on or after ``today`` following ``anchor``.

    The anchor itself counts when it is not in the past.
    """
    if anchor is None or interval_days <= 0:
        return None
    return _roll_forward(anchor, timedelta(days=interval_days), today)


def project_occurrences(
    anchor: Optional[date],
    interval_days: int,
    *,
    today: date,
    horizon_end: date,
    max_occurrences: int = MAX_PROJECTED_OCCURRENCES,
    anchor_is_next: bool = False,
) -> List[date]:
    """
    Project occurrences by repeatedly adding ``interval_days``.

    Args:
        anchor: Most recent known occurrence, or an already computed next
            occurrence when ``anchor_is_next`` is set.
        interval_days: Cycle length in days.
        today: Occurrences before this day are skipped.
        horizon_end: Last day (inclusive) that may be returned.
        max_occurrences: Hard cap on produced occurrences.
        anchor_is_next: Treat ``anchor`` as the first candidate instead of
            the last known occurrence.

    Returns:
        Ascending dates; empty when there is no anchor or no usable interval.
    """
    if anchor is None:
        return []
    if interval_days <= 0:
        logger.warning(
            "forecast.invalid_interval",
            interval_days=interval_days,
            anchor=anchor.isoformat(),
        )
        return []

    interval = timedelta(days=interval_days)
    current = anchor if anchor_is_next else anchor + interval
    current = _roll_forward(current, interval, today)

    occurrences: List[date] = []
    while current <= horizon_end and len(occurrences) < max_occurrences:
        occurrences.append(current)
        current += interval

    if len(occurrences) == max_occurrences and current <= horizon_end:
        logger.debug(
            "forecast.iteration_cap_reached",
            anchor=anchor.isoformat(),
            interval_days=interval_days,
            cap=max_occurrences,
        )
    return occurrences
