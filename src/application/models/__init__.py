"""Application-level configuration models."""

from .forecast_config import DEFAULT_UNIFIED_CALLERS, ForecastTuning, SupervisorConfig
from .system_info import SystemInfo

__all__ = [
    "DEFAULT_UNIFIED_CALLERS",
    "ForecastTuning",
    "SupervisorConfig",
    "SystemInfo",
]
