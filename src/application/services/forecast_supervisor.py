"""
Dual-path forecast supervisor.

Runs the strategy configured for a caller and guarantees a result:

* unified selected: run it under ``timeout_seconds``; on timeout or error
  fall back to legacy.
* legacy selected: run it directly.
* anything escaping the above: retry legacy once, then return ``[]``.

When validation is enabled, a background task recomputes the other path
and logs differences. It never changes or delays the returned result.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Set, Union

from src.application.models.forecast_config import SupervisorConfig
from src.application.services.forecast_strategies import LegacyForecastStrategy
from src.domain.entities.animal import AnimalCycleProfile
from src.domain.entities.errors import ForecastComputationError, ForecastTimeoutError
from src.domain.entities.forecast import ForecastOccurrence
from src.domain.entities.health import SupervisorStats
from src.domain.ports.corroboration import ICorroborationLookups
from src.domain.ports.forecast_strategy import ForecastStrategy
from src.domain.services.forecast_comparator import (
    ForecastComparison,
    compare_forecasts,
)
from src.shared import EnumForecastCaller, get_logger

logger = get_logger(__name__)

Caller = Union[EnumForecastCaller, str]


@dataclass(slots=True)
class StrategyComparison:
    """Both strategies' output for the same input, plus their differences."""

    legacy: List[ForecastOccurrence]
    unified: List[ForecastOccurrence]
    comparison: ForecastComparison


@dataclass(slots=True)
class ReadinessReport:
    """Whether the unified strategy can replace legacy everywhere."""

    ready: bool
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def _caller_name(caller: Caller) -> str:
    return str(getattr(caller, "value", caller))


def _consume_abandoned(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("forecast.supervisor.abandoned_run_failed", error=str(exc))


class ForecastSupervisor:
    """Selects, guards and cross-checks the legacy and unified strategies."""

    def __init__(
        self,
        legacy: LegacyForecastStrategy,
        unified: ForecastStrategy,
        config: SupervisorConfig,
    ):
        self.legacy = legacy
        self.unified = unified
        self.config = config
        self.stats = SupervisorStats()
        self._background: Set[asyncio.Task] = set()

    def _log(self, event: str, **kwargs) -> None:
        if self.config.enable_logging:
            logger.info(event, **kwargs)

    def _track(self, task: asyncio.Task) -> None:
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def forecast(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        caller: Caller,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> List[ForecastOccurrence]:
        """
        Forecast heats for ``animals`` on behalf of ``caller``.

        Never raises: the worst outcome is an empty list.
        """
        name = _caller_name(caller)
        use_unified = self.config.uses_unified(name)
        self.stats.runs += 1
        self.stats.last_run_fell_back = False
        self._log(
            "forecast.supervisor.start",
            caller=name,
            animals=len(animals),
            use_unified=use_unified,
        )

        try:
            if use_unified:
                return await self._unified_with_fallback(
                    animals,
                    caller=name,
                    today=today,
                    horizon_end=horizon_end,
                    lookups=lookups,
                )
            return self._legacy_with_validation(
                animals,
                caller=name,
                today=today,
                horizon_end=horizon_end,
                lookups=lookups,
            )
        except Exception as exc:
            self.stats.critical_failures += 1
            self.stats.last_run_fell_back = True
            logger.error(
                "forecast.supervisor.critical_error", caller=name, error=str(exc)
            )

        try:
            result = self.legacy.compute(animals, today=today, horizon_end=horizon_end)
        except Exception as exc:
            logger.error(
                "forecast.supervisor.legacy_retry_failed", caller=name, error=str(exc)
            )
            return []
        logger.warning(
            "forecast.supervisor.legacy_retry_succeeded",
            caller=name,
            count=len(result),
        )
        return result

    async def _unified_with_fallback(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        caller: str,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
    ) -> List[ForecastOccurrence]:
        try:
            result = await self._run_with_timeout(
                self.unified,
                animals,
                today=today,
                horizon_end=horizon_end,
                lookups=lookups,
            )
        except Exception as exc:
            if isinstance(exc, ForecastTimeoutError):
                self.stats.timeouts += 1
            self.stats.fallbacks += 1
            self.stats.last_run_fell_back = True
            logger.warning(
                "forecast.supervisor.fallback",
                caller=caller,
                strategy=self.unified.name,
                error=str(exc),
            )
            result = self.legacy.compute(animals, today=today, horizon_end=horizon_end)
            self._log(
                "forecast.supervisor.fallback_succeeded",
                caller=caller,
                count=len(result),
            )
            return result

        self.stats.unified_successes += 1
        self._log(
            "forecast.supervisor.unified_succeeded", caller=caller, count=len(result)
        )
        if self.config.validate:
            self._schedule_validation(
                animals,
                caller=caller,
                today=today,
                horizon_end=horizon_end,
                lookups=lookups,
                unified_result=result,
            )
        return result

    def _legacy_with_validation(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        caller: str,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
    ) -> List[ForecastOccurrence]:
        result = self.legacy.compute(animals, today=today, horizon_end=horizon_end)
        self._log(
            "forecast.supervisor.legacy_succeeded", caller=caller, count=len(result)
        )
        if self.config.validate:
            self._schedule_validation(
                animals,
                caller=caller,
                today=today,
                horizon_end=horizon_end,
                lookups=lookups,
                legacy_result=result,
            )
        return result

    async def _run_with_timeout(
        self,
        strategy: ForecastStrategy,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
    ) -> List[ForecastOccurrence]:
        """
        Await ``strategy`` for at most ``timeout_seconds``.

        A run that misses the deadline is left to finish on its own; its
        result is discarded.

        Raises:
            ForecastTimeoutError: If the deadline passes first.
            ForecastComputationError: If the strategy raises.
        """
        task = asyncio.ensure_future(
            strategy.forecast(
                animals, today=today, horizon_end=horizon_end, lookups=lookups
            )
        )
        done, _ = await asyncio.wait({task}, timeout=self.config.timeout_seconds)
        if task not in done:
            self._track(task)
            task.add_done_callback(_consume_abandoned)
            raise ForecastTimeoutError(strategy.name, self.config.timeout_seconds)

        exc = task.exception()
        if exc is not None:
            raise ForecastComputationError(strategy.name, str(exc)) from exc
        return task.result()

    def _schedule_validation(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        caller: str,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
        legacy_result: Optional[List[ForecastOccurrence]] = None,
        unified_result: Optional[List[ForecastOccurrence]] = None,
    ) -> None:
        task = asyncio.create_task(
            self._validate(
                list(animals),
                caller=caller,
                today=today,
                horizon_end=horizon_end,
                lookups=lookups,
                legacy_result=legacy_result,
                unified_result=unified_result,
            )
        )
        self._track(task)

    async def _validate(
        self,
        animals: List[AnimalCycleProfile],
        *,
        caller: str,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups],
        legacy_result: Optional[List[ForecastOccurrence]],
        unified_result: Optional[List[ForecastOccurrence]],
    ) -> None:
        try:
            if legacy_result is None:
                legacy_result = self.legacy.compute(
                    animals, today=today, horizon_end=horizon_end
                )
            if unified_result is None:
                unified_result = await self._run_with_timeout(
                    self.unified,
                    animals,
                    today=today,
                    horizon_end=horizon_end,
                    lookups=lookups,
                )
            comparison = compare_forecasts(legacy_result, unified_result)
        except Exception as exc:
            logger.warning(
                "forecast.validation.error", caller=caller, error=str(exc)
            )
            return

        self.stats.validations += 1
        if comparison.matches:
            self._log(
                "forecast.validation.matched",
                caller=caller,
                count=comparison.legacy_count,
            )
            return

        self.stats.mismatches += 1
        self.stats.last_mismatch_at = datetime.now(timezone.utc)
        logger.warning(
            "forecast.validation.mismatch",
            caller=caller,
            legacy_count=comparison.legacy_count,
            unified_count=comparison.unified_count,
            errors=comparison.errors,
            warnings=comparison.warnings,
        )

    async def drain(self) -> None:
        """Wait for pending background validations and abandoned runs."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def compare_strategies(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> StrategyComparison:
        """Run both strategies in the foreground and compare them."""
        legacy = self.legacy.compute(animals, today=today, horizon_end=horizon_end)
        unified = await self.unified.forecast(
            animals, today=today, horizon_end=horizon_end, lookups=lookups
        )
        comparison = compare_forecasts(legacy, unified)
        self._log(
            "forecast.diagnostics.compared",
            legacy_count=len(legacy),
            unified_count=len(unified),
            matches=comparison.matches,
        )
        return StrategyComparison(legacy=legacy, unified=unified, comparison=comparison)

    async def check_readiness(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> ReadinessReport:
        """Report data and result issues blocking a full switch to unified."""
        report = ReadinessReport(ready=False)
        try:
            result = await self.compare_strategies(
                animals, today=today, horizon_end=horizon_end, lookups=lookups
            )
            if not result.comparison.matches:
                report.issues.append(
                    "Legacy and unified methods produce different results"
                )
                report.recommendations.append(
                    "Review heat history data for inconsistencies"
                )
                report.recommendations.append(
                    "Check animals with missing or invalid heat intervals"
                )
            if result.comparison.errors:
                report.issues.append(
                    "Validation errors: " + ", ".join(result.comparison.errors)
                )

            females = [animal for animal in animals if animal.is_female]
            without_history = [animal for animal in females if not animal.heat_dates]
            if without_history:
                report.recommendations.append(
                    f"{len(without_history)} female animals have no heat history"
                )

            with_future = [
                animal
                for animal in females
                if any(heat > today for heat in animal.heat_dates)
            ]
            if with_future:
                report.issues.append(
                    f"{len(with_future)} animals have future heat dates"
                )
                report.recommendations.append(
                    "Clean up invalid future heat dates before migration"
                )
        except Exception as exc:
            report.issues.append(f"Migration readiness check failed: {exc}")

        report.ready = not report.issues
        self._log(
            "forecast.diagnostics.readiness",
            ready=report.ready,
            issue_count=len(report.issues),
        )
        return report
