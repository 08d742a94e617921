"""DTOs for reminder listing and generation responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, Field

from src.domain.entities.reminder import (
    ReminderCategory,
    ReminderPriority,
    ReminderRecord,
)


class ReminderDTO(BaseModel):
    """Serializable representation of a reminder."""

    id: str
    title: str
    description: str
    category: ReminderCategory
    due_date: date
    priority: ReminderPriority
    related_id: str = Field(description="Animal or litter the reminder is about")
    generated_at: datetime
    completed: bool = False

    @classmethod
    def from_domain(cls, reminder: ReminderRecord) -> "ReminderDTO":
        return cls(
            id=reminder.id,
            title=reminder.title,
            description=reminder.description,
            category=reminder.category,
            due_date=reminder.due_date,
            priority=reminder.priority,
            related_id=reminder.related_id,
            generated_at=reminder.generated_at,
            completed=reminder.completed,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "vaccination-dog-1-1741132800000",
                "title": "Vaccination for Bella",
                "description": "Vaccination due in 5 days",
                "category": "vaccination",
                "due_date": "2025-03-10",
                "priority": "high",
                "related_id": "dog-1",
                "generated_at": "2025-03-05T00:00:00",
                "completed": False,
            }
        }
    }


class ReminderListResponseDTO(BaseModel):
    reminders: List[ReminderDTO] = Field(default_factory=list)
    total: int = 0


class ReminderGenerationResponseDTO(BaseModel):
    """Outcome of one reminder derivation run."""

    generated_on: date
    generated: int = Field(description="Reminders produced by the rules")
    stored: int = Field(description="Reminders written to the reminder store")
    failed_rules: int = Field(
        default=0, description="Rule evaluations skipped because they raised"
    )
    reminders: List[ReminderDTO] = Field(default_factory=list)
