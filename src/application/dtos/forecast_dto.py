"""DTOs for heat forecast and strategy diagnostics responses."""

from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.forecast import (
    Confidence,
    ForecastOccurrence,
    OccurrenceStatus,
)


class ForecastOccurrenceDTO(BaseModel):
    """One forecast or historical heat."""

    id: str = Field(description="Occurrence identifier")
    animal_id: str = Field(description="Animal identifier")
    animal_name: str = Field(description="Animal display name")
    date: dt.date = Field(description="Calendar day of the heat")
    year: int
    month: int
    status: OccurrenceStatus = Field(description="Lifecycle status")
    confidence: Confidence = Field(description="Trust in the projected date")
    interval_days: int = Field(description="Interval used for the projection")
    linked_record_id: Optional[str] = Field(
        default=None, description="Plan, confirmation or cycle backing the status"
    )
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, occurrence: ForecastOccurrence) -> "ForecastOccurrenceDTO":
        return cls(
            id=occurrence.id,
            animal_id=occurrence.animal_id,
            animal_name=occurrence.animal_name,
            date=occurrence.date,
            year=occurrence.year,
            month=occurrence.month,
            status=occurrence.status,
            confidence=occurrence.confidence,
            interval_days=occurrence.interval_days,
            linked_record_id=occurrence.linked_record_id,
            notes=occurrence.notes,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "dog-1-2025-03-01",
                "animal_id": "dog-1",
                "animal_name": "Bella",
                "date": "2025-03-01",
                "year": 2025,
                "month": 3,
                "status": "planned",
                "confidence": "high",
                "interval_days": 190,
                "linked_record_id": "plan-7",
                "notes": "Planned with Max",
            }
        }
    }


class AnimalForecastDTO(BaseModel):
    """Forecast of one fertile female."""

    animal_id: str
    animal_name: str
    image_url: Optional[str] = None
    age_years: Optional[float] = Field(
        default=None, description="Age on the forecast day, in years"
    )
    needs_warning: bool = Field(
        default=False, description="Animal is approaching the breeding age limit"
    )
    occurrences: List[ForecastOccurrenceDTO] = Field(default_factory=list)


class HeatForecastResponseDTO(BaseModel):
    """DTO representing the multi-year heat forecast."""

    caller: str = Field(description="Logical caller the strategy was chosen for")
    generated_on: date
    horizon_end: date
    animals: List[AnimalForecastDTO] = Field(default_factory=list)


class UpcomingHeatsResponseDTO(BaseModel):
    """Flat, date-ordered list of upcoming heats."""

    caller: str
    generated_on: date
    until: date
    heats: List[ForecastOccurrenceDTO] = Field(default_factory=list)


class ForecastComparisonDTO(BaseModel):
    matches: bool
    legacy_count: int
    unified_count: int
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class ReadinessReportDTO(BaseModel):
    ready: bool
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class ForecastDiagnosticsDTO(BaseModel):
    """Side-by-side strategy comparison and migration readiness."""

    generated_on: date
    legacy: List[ForecastOccurrenceDTO] = Field(default_factory=list)
    unified: List[ForecastOccurrenceDTO] = Field(default_factory=list)
    comparison: ForecastComparisonDTO
    readiness: ReadinessReportDTO
    supervisor: Dict[str, Any] = Field(
        default_factory=dict, description="Supervisor counters since startup"
    )
    checked_at: datetime
