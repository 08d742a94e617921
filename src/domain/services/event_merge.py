"""
Domain service merging forecasts, reminders and custom entries per day.

Nothing here is stored: every call projects its three inputs onto
``MergedCalendarEvent`` and keeps the ones that fall on the requested
calendar day.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional

from src.domain.entities.calendar import (
    CalendarEntry,
    EventSource,
    MergedCalendarEvent,
    get_event_category,
)
from src.domain.entities.forecast import ForecastOccurrence, OccurrenceStatus
from src.domain.entities.reminder import ReminderCategory, ReminderRecord
from src.shared import get_logger
from src.shared.dates import parse_date

logger = get_logger(__name__)

OCCURRENCE_CATEGORIES: Dict[OccurrenceStatus, str] = {
    OccurrenceStatus.ACTIVE: "heat-active",
    OccurrenceStatus.CONFIRMED: "heat-active",
    OccurrenceStatus.PLANNED: "heat-planned",
    OccurrenceStatus.MATED: "heat-mated",
    OccurrenceStatus.PREDICTED: "heat",
}

REMINDER_CATEGORIES: Dict[ReminderCategory, str] = {
    ReminderCategory.HEAT: "heat",
    ReminderCategory.VACCINATION: "vaccination",
    ReminderCategory.BIRTHDAY: "birthday-reminder",
    ReminderCategory.DEWORMING: "deworming",
    ReminderCategory.VET_VISIT: "vet-visit",
    ReminderCategory.WEIGHING: "weighing",
}

_OCCURRENCE_TITLES: Dict[OccurrenceStatus, str] = {
    OccurrenceStatus.ACTIVE: "{name} in Heat",
    OccurrenceStatus.CONFIRMED: "{name} Heat",
    OccurrenceStatus.PLANNED: "{name} Heat (Planned Litter)",
    OccurrenceStatus.MATED: "{name} Heat (Mated)",
    OccurrenceStatus.PREDICTED: "{name} Expected Heat",
}


def occurrence_event(occurrence: ForecastOccurrence) -> MergedCalendarEvent:
    title = _OCCURRENCE_TITLES[occurrence.status].format(name=occurrence.animal_name)
    return MergedCalendarEvent(
        id=occurrence.id,
        title=title,
        date=occurrence.date,
        category=get_event_category(OCCURRENCE_CATEGORIES[occurrence.status]),
        source=EventSource.FORECAST,
        animal_id=occurrence.animal_id,
        animal_name=occurrence.animal_name,
        notes=occurrence.notes,
    )


def reminder_event(reminder: ReminderRecord) -> MergedCalendarEvent:
    return MergedCalendarEvent(
        id=reminder.id,
        title=reminder.title,
        date=reminder.due_date,
        category=get_event_category(
            REMINDER_CATEGORIES.get(reminder.category, "reminder")
        ),
        source=EventSource.REMINDER,
        notes=reminder.description,
    )


def entry_event(entry: CalendarEntry) -> Optional[MergedCalendarEvent]:
    """Project a custom entry; None when its date cannot be parsed."""
    try:
        day = parse_date(entry.date)
    except ValueError:
        logger.warning(
            "calendar.entry.malformed_date", entry_id=entry.id, value=repr(entry.date)
        )
        return None
    if day is None:
        logger.warning("calendar.entry.missing_date", entry_id=entry.id)
        return None

    return MergedCalendarEvent(
        id=entry.id,
        title=entry.title,
        date=day,
        category=get_event_category(entry.category),
        source=EventSource.CUSTOM,
        time=entry.time,
        animal_id=entry.animal_id,
        animal_name=entry.animal_name,
        notes=entry.notes,
    )


def _display_key(event: MergedCalendarEvent):
    # Untimed events come after timed ones sharing a chip priority.
    return event.category.chip_priority, event.time is None, event.time or ""


def events_for_date(
    target: date,
    occurrences: Iterable[ForecastOccurrence] = (),
    reminders: Iterable[ReminderRecord] = (),
    entries: Iterable[CalendarEntry] = (),
) -> List[MergedCalendarEvent]:
    """
    Every event falling on ``target``, ordered by chip priority then time.

    Custom entries with an unusable date are logged and left out; they never
    fail the query.
    """
    events: List[MergedCalendarEvent] = [
        occurrence_event(occurrence)
        for occurrence in occurrences
        if occurrence.date == target
    ]
    events.extend(
        reminder_event(reminder)
        for reminder in reminders
        if reminder.due_date == target
    )
    for entry in entries:
        event = entry_event(entry)
        if event is not None and event.date == target:
            events.append(event)

    events.sort(key=_display_key)
    return events
