"""
Domain entities for the merged calendar view.

Custom entries come from the calendar store as-is: their ``date`` is kept
raw so that the merge view can skip the ones it cannot parse.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


class EventSource:
    FORECAST = "forecast"
    REMINDER = "reminder"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class EventCategory:
    """Display metadata for one calendar category."""

    key: str
    name: str
    icon: str
    color: str
    chip_priority: int


EVENT_CATEGORIES: Dict[str, EventCategory] = {
    category.key: category
    for category in (
        EventCategory("due-date", "Due Date", "★", "rose", 1),
        EventCategory("mating", "Mating", "♥", "rose", 2),
        EventCategory("heat-mated", "Heat (Mated)", "♥", "green", 2),
        EventCategory("birthday", "Birthday", "🎂", "sky", 3),
        EventCategory("birthday-reminder", "Birthday Reminder", "🎂", "sky", 4),
        EventCategory("vaccination", "Vaccination", "💉", "emerald", 5),
        EventCategory("health", "Health", "🏥", "emerald", 6),
        EventCategory("vet-appointment", "Vet Appointment", "🏥", "emerald", 6),
        EventCategory("vet-visit", "Vet Visit", "🏥", "emerald", 6),
        EventCategory("deworming", "Deworming", "💊", "emerald", 6),
        EventCategory("weighing", "Weigh-in", "⚖", "sky", 6),
        EventCategory("heat-active", "Heat (Active)", "🔥", "red", 7),
        EventCategory("heat-planned", "Heat (Planned)", "🔥", "pink", 7),
        EventCategory("heat", "Heat", "🔥", "amber", 7),
        EventCategory("ovulation-predicted", "Ovulation", "⭕", "purple", 8),
        EventCategory("fertility-window", "Fertility Window", "💝", "purple", 9),
        EventCategory("custom", "Custom", "📌", "violet", 10),
        EventCategory("reminder", "Reminder", "🔔", "violet", 11),
    )
}


def get_event_category(key: Optional[str]) -> EventCategory:
    """Metadata for ``key``; unknown or empty keys fall back to ``custom``."""
    if not key:
        return EVENT_CATEGORIES["custom"]
    return EVENT_CATEGORIES.get(key, EVENT_CATEGORIES["custom"])


@dataclass(slots=True)
class CalendarEntry:
    """A user-authored entry from the calendar store."""

    id: str
    title: str
    date: Any
    time: Optional[str] = None
    category: Optional[str] = None
    animal_id: Optional[str] = None
    animal_name: Optional[str] = None
    notes: Optional[str] = None


@dataclass(slots=True)
class MergedCalendarEvent:
    """Common projection of forecasts, reminders and custom entries."""

    id: str
    title: str
    date: date
    category: EventCategory
    source: str
    time: Optional[str] = None
    animal_id: Optional[str] = None
    animal_name: Optional[str] = None
    notes: Optional[str] = None
