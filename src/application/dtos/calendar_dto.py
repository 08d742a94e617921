"""DTOs for the merged calendar day view."""

from __future__ import annotations

import datetime as dt
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.calendar import EventCategory, MergedCalendarEvent


class EventCategoryDTO(BaseModel):
    key: str
    name: str
    icon: str
    color: str
    chip_priority: int = Field(description="Lower values are shown first")

    @classmethod
    def from_domain(cls, category: EventCategory) -> "EventCategoryDTO":
        return cls(
            key=category.key,
            name=category.name,
            icon=category.icon,
            color=category.color,
            chip_priority=category.chip_priority,
        )


class CalendarEventDTO(BaseModel):
    """One event of the merged calendar."""

    id: str
    title: str
    date: dt.date
    time: Optional[str] = None
    source: str = Field(description="forecast, reminder or custom")
    category: EventCategoryDTO
    animal_id: Optional[str] = None
    animal_name: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, event: MergedCalendarEvent) -> "CalendarEventDTO":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            time=event.time,
            source=event.source,
            category=EventCategoryDTO.from_domain(event.category),
            animal_id=event.animal_id,
            animal_name=event.animal_name,
            notes=event.notes,
        )


class CalendarDayResponseDTO(BaseModel):
    day: date
    events: List[CalendarEventDTO] = Field(default_factory=list)
