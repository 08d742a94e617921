"""
Domain Entities - Animals and breeding records

Plain records read from the record store. The engine never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from src.shared.dates import age_in_years


class Sex(str, Enum):
    FEMALE = "female"
    MALE = "male"


class PlanStatus(str, Enum):
    """Lifecycle of a planned litter."""

    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class HeatCycleRecord:
    """A heat cycle explicitly logged by the user."""

    id: str
    animal_id: str
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass
class AnimalCycleProfile:
    """Everything the engine needs to know about one animal."""

    id: str
    name: str
    sex: Sex
    birth_date: Optional[date] = None
    sterilization_date: Optional[date] = None
    heat_dates: List[date] = field(default_factory=list)
    heat_interval_days: Optional[int] = None
    vaccination_date: Optional[date] = None
    image_url: Optional[str] = None

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE

    @property
    def is_sterilized(self) -> bool:
        return self.sterilization_date is not None

    def last_heat_date(self) -> Optional[date]:
        """Most recent entry of the heat-date history."""
        return max(self.heat_dates) if self.heat_dates else None

    def age_on(self, on: date) -> Optional[float]:
        if self.birth_date is None:
            return None
        return age_in_years(self.birth_date, on)

    def is_fertile(self, on: date, max_breeding_age_years: float) -> bool:
        """Female, not sterilized, with a known age below the breeding limit."""
        if not self.is_female or self.is_sterilized:
            return False
        age = self.age_on(on)
        return age is not None and age < max_breeding_age_years


@dataclass(slots=True)
class BreedingPlan:
    """A planned litter targeting one expected heat of a female."""

    id: str
    female_id: str
    expected_heat_date: date
    status: PlanStatus = PlanStatus.PLANNED
    mating_dates: List[date] = field(default_factory=list)
    notes: Optional[str] = None

    @property
    def has_follow_through(self) -> bool:
        """Completed, or at least one mating already recorded."""
        return self.status == PlanStatus.COMPLETED or bool(self.mating_dates)


@dataclass(slots=True)
class MatingConfirmation:
    """A mating date attached to a heat cycle, independent of any plan."""

    id: str
    female_id: str
    mating_date: date
    heat_cycle_id: Optional[str] = None
    plan_id: Optional[str] = None


@dataclass(slots=True)
class Litter:
    """A born litter; drives the puppy care reminders."""

    id: str
    name: str
    birth_date: date
    dam_id: Optional[str] = None
    archived: bool = False
