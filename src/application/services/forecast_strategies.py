"""
Interchangeable heat forecast strategies.

``LegacyForecastStrategy`` projects from the profile's heat-date history
only and is fully synchronous. ``UnifiedForecastStrategy`` also reads the
structured heat cycle records through the corroboration lookups and anchors
on the most recent start of either source.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from src.domain.entities.animal import AnimalCycleProfile
from src.domain.entities.forecast import (
    ForecastOccurrence,
    IntervalEstimate,
    predicted_occurrence_id,
)
from src.domain.ports.corroboration import ICorroborationLookups
from src.domain.services.cycle_forecaster import (
    MAX_PROJECTED_OCCURRENCES,
    next_occurrence,
    project_occurrences,
)
from src.domain.services.interval_estimator import (
    DEFAULT_HEAT_INTERVAL_DAYS,
    estimate_interval,
)
from src.shared import get_logger

logger = get_logger(__name__)


def _to_occurrences(
    animal: AnimalCycleProfile,
    dates: Iterable[date],
    interval: IntervalEstimate,
) -> List[ForecastOccurrence]:
    return [
        ForecastOccurrence(
            id=predicted_occurrence_id(animal.id, on),
            animal_id=animal.id,
            animal_name=animal.name,
            date=on,
            confidence=interval.confidence,
            interval_days=interval.days,
        )
        for on in dates
    ]


class LegacyForecastStrategy:
    """Last recorded heat plus the interval, repeated up to the horizon."""

    name = "legacy"

    def __init__(
        self,
        default_interval_days: int = DEFAULT_HEAT_INTERVAL_DAYS,
        max_occurrences: int = MAX_PROJECTED_OCCURRENCES,
    ):
        self.default_interval_days = default_interval_days
        self.max_occurrences = max_occurrences

    def compute(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
    ) -> List[ForecastOccurrence]:
        occurrences: List[ForecastOccurrence] = []
        for animal in animals:
            if not animal.is_female:
                continue
            try:
                interval = estimate_interval(animal, self.default_interval_days)
                dates = project_occurrences(
                    animal.last_heat_date(),
                    interval.days,
                    today=today,
                    horizon_end=horizon_end,
                    max_occurrences=self.max_occurrences,
                )
                occurrences.extend(_to_occurrences(animal, dates, interval))
            except Exception as exc:
                logger.warning(
                    "forecast.legacy.animal_failed",
                    animal_id=animal.id,
                    error=str(exc),
                )
        occurrences.sort(key=lambda occurrence: occurrence.date)
        return occurrences

    async def forecast(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> List[ForecastOccurrence]:
        return self.compute(animals, today=today, horizon_end=horizon_end)


class UnifiedForecastStrategy:
    """Anchors on heat cycle records merged with the legacy history."""

    name = "unified"

    def __init__(
        self,
        default_interval_days: int = DEFAULT_HEAT_INTERVAL_DAYS,
        max_occurrences: int = MAX_PROJECTED_OCCURRENCES,
    ):
        self.default_interval_days = default_interval_days
        self.max_occurrences = max_occurrences

    async def _latest_heat(
        self,
        animal: AnimalCycleProfile,
        lookups: Optional[ICorroborationLookups],
    ) -> Optional[date]:
        starts = list(animal.heat_dates)
        if lookups is not None:
            cycles = await lookups.heat_cycles(animal.id)
            starts.extend(cycle.start_date for cycle in cycles)
        return max(starts) if starts else None

    async def _forecast_animal(
        self,
        animal: AnimalCycleProfile,
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
    ) -> List[ForecastOccurrence]:
        latest = await self._latest_heat(animal, lookups)
        if latest is None:
            return []

        interval = estimate_interval(animal, self.default_interval_days)
        if interval.days <= 0:
            return []
        upcoming = next_occurrence(
            latest + timedelta(days=interval.days),
            interval.days,
            today,
        )
        dates = project_occurrences(
            upcoming,
            interval.days,
            today=today,
            horizon_end=horizon_end,
            max_occurrences=self.max_occurrences,
            anchor_is_next=True,
        )
        return _to_occurrences(animal, dates, interval)

    async def forecast(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> List[ForecastOccurrence]:
        occurrences: List[ForecastOccurrence] = []
        for animal in animals:
            if not animal.is_female:
                continue
            try:
                occurrences.extend(
                    await self._forecast_animal(
                        animal, today=today, horizon_end=horizon_end, lookups=lookups
                    )
                )
            except Exception as exc:
                logger.warning(
                    "forecast.unified.animal_failed",
                    animal_id=animal.id,
                    error=str(exc),
                )
        occurrences.sort(key=lambda occurrence: occurrence.date)
        return occurrences
