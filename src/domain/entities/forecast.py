"""Domain entities for heat cycle forecasts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple


class OccurrenceStatus(str, Enum):
    """Lifecycle status of one forecast occurrence."""

    ACTIVE = "active"
    CONFIRMED = "confirmed"
    PLANNED = "planned"
    MATED = "mated"
    PREDICTED = "predicted"

    @property
    def rank(self) -> int:
        return STATUS_RANK[self]


STATUS_RANK: Dict[OccurrenceStatus, int] = {
    OccurrenceStatus.ACTIVE: 0,
    OccurrenceStatus.CONFIRMED: 1,
    OccurrenceStatus.PLANNED: 2,
    OccurrenceStatus.MATED: 3,
    OccurrenceStatus.PREDICTED: 4,
}


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class IntervalSource(str, Enum):
    EXPLICIT = "explicit"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class IntervalEstimate:
    """Cycle length used to project an animal's heats."""

    days: int
    confidence: Confidence
    source: IntervalSource


@dataclass(slots=True)
class ForecastOccurrence:
    """One forecast or historical heat of an animal."""

    id: str
    animal_id: str
    animal_name: str
    date: date
    status: OccurrenceStatus = OccurrenceStatus.PREDICTED
    confidence: Confidence = Confidence.MEDIUM
    interval_days: int = 0
    linked_record_id: Optional[str] = None
    notes: Optional[str] = None

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def is_historical(self) -> bool:
        return self.status in (OccurrenceStatus.ACTIVE, OccurrenceStatus.CONFIRMED)


def occurrence_sort_key(occurrence: ForecastOccurrence) -> Tuple[int, date]:
    """Status rank first, then date ascending."""
    return occurrence.status.rank, occurrence.date


def predicted_occurrence_id(animal_id: str, on: date) -> str:
    return f"{animal_id}-{on.isoformat()}"
