"""
Forecast Use Cases - Application Layer

Multi-year heat forecast, the flat upcoming-heats list and strategy
diagnostics. Engine failures never escape these use cases: a problem with
one animal drops that animal, a problem with a whole strategy is absorbed
by the supervisor.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Union

from src.application.models import ForecastTuning
from src.application.services.corroboration_cache import CorroborationCache
from src.application.services.forecast_supervisor import ForecastSupervisor
from src.domain.entities.animal import AnimalCycleProfile
from src.domain.entities.forecast import ForecastOccurrence
from src.domain.repositories.record_store import IRecordStore
from src.domain.services.cycle_forecaster import compute_horizon_end
from src.domain.services.status_reconciler import reconcile_animal
from src.shared import EnumForecastCaller, get_logger

from ..dtos.forecast_dto import (
    AnimalForecastDTO,
    ForecastComparisonDTO,
    ForecastDiagnosticsDTO,
    ForecastOccurrenceDTO,
    HeatForecastResponseDTO,
    ReadinessReportDTO,
    UpcomingHeatsResponseDTO,
)

logger = get_logger(__name__)

Caller = Union[EnumForecastCaller, str]


@dataclass(slots=True)
class AnimalForecast:
    """Reconciled forecast of one fertile female."""

    animal: AnimalCycleProfile
    age_years: Optional[float]
    needs_warning: bool
    occurrences: List[ForecastOccurrence] = field(default_factory=list)


def _caller_value(caller: Caller) -> str:
    return str(getattr(caller, "value", caller))


def _group_by_animal(
    occurrences: Sequence[ForecastOccurrence],
) -> Dict[str, List[ForecastOccurrence]]:
    grouped: Dict[str, List[ForecastOccurrence]] = defaultdict(list)
    for occurrence in occurrences:
        grouped[occurrence.animal_id].append(occurrence)
    return grouped


class GetHeatForecastUseCase:
    """Multi-year heat forecast of every fertile female."""

    def __init__(
        self,
        record_store: IRecordStore,
        supervisor: ForecastSupervisor,
        tuning: ForecastTuning,
    ) -> None:
        self._record_store = record_store
        self._supervisor = supervisor
        self._tuning = tuning

    def _eligible(
        self, animals: Sequence[AnimalCycleProfile], today: date
    ) -> List[AnimalCycleProfile]:
        return [
            animal
            for animal in animals
            if animal.is_fertile(today, self._tuning.max_breeding_age_years)
        ]

    async def forecast_animals(
        self,
        caller: Caller = EnumForecastCaller.HEAT_PLANNING,
        today: Optional[date] = None,
    ) -> List[AnimalForecast]:
        """Reconciled occurrences grouped per fertile female."""
        today = today or date.today()
        horizon_end = compute_horizon_end(today, self._tuning.horizon_years)
        animals = self._eligible(await self._record_store.list_animals(), today)
        if not animals:
            return []

        cache = CorroborationCache(self._record_store)
        predicted = _group_by_animal(
            await self._supervisor.forecast(
                animals,
                caller=caller,
                today=today,
                horizon_end=horizon_end,
                lookups=cache,
            )
        )

        forecasts: List[AnimalForecast] = []
        for animal in animals:
            try:
                occurrences = reconcile_animal(
                    animal,
                    predicted.get(animal.id, []),
                    cycles=await cache.heat_cycles(animal.id),
                    plans=await cache.plans(animal.id),
                    confirmations=await cache.confirmations(animal.id),
                    today=today,
                    windows=self._tuning.windows,
                )
            except Exception as exc:
                logger.warning(
                    "forecast.animal_failed", animal_id=animal.id, error=str(exc)
                )
                continue

            age = animal.age_on(today)
            forecasts.append(
                AnimalForecast(
                    animal=animal,
                    age_years=age,
                    needs_warning=(
                        age is not None and age >= self._tuning.warning_age_years
                    ),
                    occurrences=occurrences,
                )
            )

        logger.info(
            "forecast.completed",
            caller=_caller_value(caller),
            animals=len(forecasts),
            lookups=cache.misses,
        )
        return forecasts

    async def execute(
        self,
        caller: Caller = EnumForecastCaller.HEAT_PLANNING,
        today: Optional[date] = None,
    ) -> HeatForecastResponseDTO:
        today = today or date.today()
        forecasts = await self.forecast_animals(caller, today)
        return HeatForecastResponseDTO(
            caller=_caller_value(caller),
            generated_on=today,
            horizon_end=compute_horizon_end(today, self._tuning.horizon_years),
            animals=[
                AnimalForecastDTO(
                    animal_id=forecast.animal.id,
                    animal_name=forecast.animal.name,
                    image_url=forecast.animal.image_url,
                    age_years=(
                        round(forecast.age_years, 1)
                        if forecast.age_years is not None
                        else None
                    ),
                    needs_warning=forecast.needs_warning,
                    occurrences=[
                        ForecastOccurrenceDTO.from_domain(occurrence)
                        for occurrence in forecast.occurrences
                    ],
                )
                for forecast in forecasts
            ],
        )


class GetUpcomingHeatsUseCase:
    """Date-ordered heats of non-sterilized females within the next days."""

    def __init__(
        self,
        record_store: IRecordStore,
        supervisor: ForecastSupervisor,
        tuning: ForecastTuning,
    ) -> None:
        self._record_store = record_store
        self._supervisor = supervisor
        self._tuning = tuning

    async def execute(
        self,
        caller: Caller = EnumForecastCaller.UPCOMING_HEATS,
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> UpcomingHeatsResponseDTO:
        today = today or date.today()
        until = today + timedelta(days=days or self._tuning.upcoming_days)
        animals = [
            animal
            for animal in await self._record_store.list_animals()
            if animal.is_female and not animal.is_sterilized
        ]

        heats: List[ForecastOccurrence] = []
        if animals:
            heats = await self._supervisor.forecast(
                animals,
                caller=caller,
                today=today,
                horizon_end=until,
                lookups=CorroborationCache(self._record_store),
            )
        heats = sorted(heats, key=lambda occurrence: occurrence.date)

        return UpcomingHeatsResponseDTO(
            caller=_caller_value(caller),
            generated_on=today,
            until=until,
            heats=[ForecastOccurrenceDTO.from_domain(heat) for heat in heats],
        )


class GetForecastDiagnosticsUseCase:
    """Run both strategies in the foreground and report how they differ."""

    def __init__(
        self,
        record_store: IRecordStore,
        supervisor: ForecastSupervisor,
        tuning: ForecastTuning,
    ) -> None:
        self._record_store = record_store
        self._supervisor = supervisor
        self._tuning = tuning

    async def execute(self, today: Optional[date] = None) -> ForecastDiagnosticsDTO:
        today = today or date.today()
        horizon_end = today + timedelta(days=self._tuning.upcoming_days)
        animals = await self._record_store.list_animals()
        cache = CorroborationCache(self._record_store)

        result = await self._supervisor.compare_strategies(
            animals, today=today, horizon_end=horizon_end, lookups=cache
        )
        readiness = await self._supervisor.check_readiness(
            animals, today=today, horizon_end=horizon_end, lookups=cache
        )

        return ForecastDiagnosticsDTO(
            generated_on=today,
            legacy=[ForecastOccurrenceDTO.from_domain(o) for o in result.legacy],
            unified=[ForecastOccurrenceDTO.from_domain(o) for o in result.unified],
            comparison=ForecastComparisonDTO(
                matches=result.comparison.matches,
                legacy_count=result.comparison.legacy_count,
                unified_count=result.comparison.unified_count,
                errors=result.comparison.errors,
                warnings=result.comparison.warnings,
            ),
            readiness=ReadinessReportDTO(
                ready=readiness.ready,
                issues=readiness.issues,
                recommendations=readiness.recommendations,
            ),
            supervisor=self._supervisor.stats.as_dict(),
            checked_at=datetime.now(timezone.utc),
        )
