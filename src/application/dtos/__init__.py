"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .calendar_dto import CalendarDayResponseDTO, CalendarEventDTO, EventCategoryDTO
from .forecast_dto import (
    AnimalForecastDTO,
    ForecastComparisonDTO,
    ForecastDiagnosticsDTO,
    ForecastOccurrenceDTO,
    HeatForecastResponseDTO,
    ReadinessReportDTO,
    UpcomingHeatsResponseDTO,
)
from .health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    ReminderWorkerDTO,
    SystemHealthDTO,
)
from .reminder_dto import (
    ReminderDTO,
    ReminderGenerationResponseDTO,
    ReminderListResponseDTO,
)

__all__ = [
    "CalendarDayResponseDTO",
    "CalendarEventDTO",
    "EventCategoryDTO",
    "AnimalForecastDTO",
    "ForecastComparisonDTO",
    "ForecastDiagnosticsDTO",
    "ForecastOccurrenceDTO",
    "HeatForecastResponseDTO",
    "ReadinessReportDTO",
    "UpcomingHeatsResponseDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
    "ReminderWorkerDTO",
    "ReminderDTO",
    "ReminderGenerationResponseDTO",
    "ReminderListResponseDTO",
]
