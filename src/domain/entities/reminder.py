"""Domain entities for derived reminders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict


class ReminderCategory(str, Enum):
    HEAT = "heat"
    VACCINATION = "vaccination"
    BIRTHDAY = "birthday"
    DEWORMING = "deworming"
    VET_VISIT = "vet-visit"
    WEIGHING = "weighing"


class ReminderPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK: Dict[ReminderPriority, int] = {
    ReminderPriority.HIGH: 0,
    ReminderPriority.MEDIUM: 1,
    ReminderPriority.LOW: 2,
}


@dataclass(slots=True)
class ReminderRecord:
    """A time-windowed reminder produced by a derivation rule.

    ``completed`` belongs to the reminder store; the engine always emits
    False and the store keeps whatever the user set.
    """

    id: str
    title: str
    description: str
    category: ReminderCategory
    due_date: date
    priority: ReminderPriority
    related_id: str
    generated_at: datetime
    completed: bool = False


def reminder_id(category: str, related_id: str, generated_at: datetime) -> str:
    """Deterministic id: category, entity and generation instant."""
    stamp = int(generated_at.timestamp() * 1000)
    return f"{category}-{related_id}-{stamp}"
