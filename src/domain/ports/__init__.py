"""Domain ports package."""

from .corroboration import ICorroborationLookups
from .forecast_strategy import ForecastStrategy
from .health_check import IHealthCheckService

__all__ = ["ForecastStrategy", "ICorroborationLookups", "IHealthCheckService"]
