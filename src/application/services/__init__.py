"""
Application Services Package

Forecast strategies, the dual-path supervisor that guards them and the
request-scoped corroboration cache.
"""

from .corroboration_cache import CorroborationCache
from .forecast_strategies import LegacyForecastStrategy, UnifiedForecastStrategy
from .forecast_supervisor import ForecastSupervisor, ReadinessReport, StrategyComparison

__all__ = [
    "CorroborationCache",
    "LegacyForecastStrategy",
    "UnifiedForecastStrategy",
    "ForecastSupervisor",
    "ReadinessReport",
    "StrategyComparison",
]
