"""Immutable forecast configuration handed to the engine at construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

from src.domain.services.cycle_forecaster import (
    DEFAULT_HORIZON_YEARS,
    MAX_PROJECTED_OCCURRENCES,
)
from src.domain.services.interval_estimator import DEFAULT_HEAT_INTERVAL_DAYS
from src.domain.services.status_reconciler import ReconciliationWindows
from src.shared.consts import EnumForecastCaller

DEFAULT_UNIFIED_CALLERS: Mapping[str, bool] = MappingProxyType(
    {
        EnumForecastCaller.UPCOMING_HEATS.value: True,
        EnumForecastCaller.PLANNED_LITTERS.value: True,
        EnumForecastCaller.HEAT_PLANNING.value: True,
        EnumForecastCaller.REMINDER_SYNC.value: False,
        EnumForecastCaller.DOG_SERVICES.value: False,
    }
)


@dataclass(frozen=True)
class SupervisorConfig:
    """Which forecast strategy each caller gets, and how it is guarded.

    Attributes:
        use_unified: Master switch; when off every caller runs legacy.
        unified_callers: Per-caller opt-in to the unified strategy.
            Unknown callers run legacy.
        validate: Schedule a background comparison after each run.
        timeout_seconds: Time budget of the unified strategy.
        enable_logging: Log routine migration events (fallbacks and
            mismatches are always logged).
    """

    use_unified: bool = True
    unified_callers: Mapping[str, bool] = field(
        default_factory=lambda: DEFAULT_UNIFIED_CALLERS
    )
    validate: bool = True
    timeout_seconds: float = 5.0
    enable_logging: bool = True

    def __post_init__(self) -> None:
        # Freeze a caller-supplied dict so the config cannot drift at runtime.
        object.__setattr__(
            self, "unified_callers", MappingProxyType(dict(self.unified_callers))
        )

    def uses_unified(self, caller: Union[EnumForecastCaller, str]) -> bool:
        if not self.use_unified:
            return False
        key = getattr(caller, "value", caller)
        return bool(self.unified_callers.get(key, False))


@dataclass(frozen=True)
class ForecastTuning:
    """Numeric knobs of the forecast and reminder engine."""

    default_interval_days: int = DEFAULT_HEAT_INTERVAL_DAYS
    horizon_years: int = DEFAULT_HORIZON_YEARS
    upcoming_days: int = 90
    max_predictions: int = MAX_PROJECTED_OCCURRENCES
    plan_match_days: int = 7
    confirmation_match_days: int = 14
    active_cycle_days: int = 21
    max_breeding_age_years: float = 10
    warning_age_years: float = 8

    @property
    def windows(self) -> ReconciliationWindows:
        return ReconciliationWindows(
            plan_match_days=self.plan_match_days,
            confirmation_match_days=self.confirmation_match_days,
            active_cycle_days=self.active_cycle_days,
        )
