"""
Domain Entities Package

This package contains the core domain entities of the breeding calendar:
animal records, forecast occurrences, reminders and calendar events.
"""

from .animal import (
    AnimalCycleProfile,
    BreedingPlan,
    HeatCycleRecord,
    Litter,
    MatingConfirmation,
    PlanStatus,
    Sex,
)
from .calendar import (
    EVENT_CATEGORIES,
    CalendarEntry,
    EventCategory,
    MergedCalendarEvent,
    get_event_category,
)
from .errors import (
    DomainError,
    ForecastComputationError,
    ForecastTimeoutError,
    MalformedRecordError,
)
from .forecast import (
    Confidence,
    ForecastOccurrence,
    IntervalEstimate,
    IntervalSource,
    OccurrenceStatus,
    occurrence_sort_key,
)
from .health import (
    ApplicationInfo,
    DependencyStatus,
    ReminderWorkerInfo,
    ServiceStatus,
    SupervisorStats,
    SystemHealth,
    worst_status,
)
from .reminder import ReminderCategory, ReminderPriority, ReminderRecord

__all__ = [
    "AnimalCycleProfile",
    "BreedingPlan",
    "HeatCycleRecord",
    "Litter",
    "MatingConfirmation",
    "PlanStatus",
    "Sex",
    "EVENT_CATEGORIES",
    "CalendarEntry",
    "EventCategory",
    "MergedCalendarEvent",
    "get_event_category",
    "DomainError",
    "ForecastComputationError",
    "ForecastTimeoutError",
    "MalformedRecordError",
    "Confidence",
    "ForecastOccurrence",
    "IntervalEstimate",
    "IntervalSource",
    "OccurrenceStatus",
    "occurrence_sort_key",
    "ApplicationInfo",
    "DependencyStatus",
    "ReminderWorkerInfo",
    "ServiceStatus",
    "SupervisorStats",
    "SystemHealth",
    "worst_status",
    "ReminderCategory",
    "ReminderPriority",
    "ReminderRecord",
]
