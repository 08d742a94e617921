"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data between the
stores, the forecast engine and the presentation layer.
"""

from .calendar_use_cases import GetCalendarDayUseCase
from .forecast_use_cases import (
    AnimalForecast,
    GetForecastDiagnosticsUseCase,
    GetHeatForecastUseCase,
    GetUpcomingHeatsUseCase,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .reminder_use_cases import GenerateRemindersUseCase, GetRemindersUseCase

__all__ = [
    "GetCalendarDayUseCase",
    "AnimalForecast",
    "GetForecastDiagnosticsUseCase",
    "GetHeatForecastUseCase",
    "GetUpcomingHeatsUseCase",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "GenerateRemindersUseCase",
    "GetRemindersUseCase",
]
