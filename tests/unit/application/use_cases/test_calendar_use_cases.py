from __future__ import annotations

from datetime import date, datetime

import pytest

from src.application.models import ForecastTuning, SupervisorConfig
from src.application.services import (
    ForecastSupervisor,
    LegacyForecastStrategy,
    UnifiedForecastStrategy,
)
from src.application.use_cases.calendar_use_cases import GetCalendarDayUseCase
from src.application.use_cases.forecast_use_cases import GetHeatForecastUseCase
from src.domain.entities.calendar import CalendarEntry
from src.domain.entities.reminder import (
    ReminderCategory,
    ReminderPriority,
    ReminderRecord,
)

TODAY = date(2024, 6, 1)
HEAT_DAY = date(2024, 8, 28)


@pytest.fixture()
def calendar_use_case(record_store, reminder_store, calendar_store, bella):
    record_store.animals.append(bella)
    supervisor = ForecastSupervisor(
        legacy=LegacyForecastStrategy(),
        unified=UnifiedForecastStrategy(),
        config=SupervisorConfig(validate=False),
    )
    heat_forecast = GetHeatForecastUseCase(record_store, supervisor, ForecastTuning())
    return GetCalendarDayUseCase(heat_forecast, reminder_store, calendar_store)


def _reminder() -> ReminderRecord:
    return ReminderRecord(
        id="vaccination-dog-bella-1",
        title="Vaccination for Bella",
        description="Vaccination due today",
        category=ReminderCategory.VACCINATION,
        due_date=HEAT_DAY,
        priority=ReminderPriority.HIGH,
        related_id="dog-bella",
        generated_at=datetime(2024, 6, 1),
    )


@pytest.mark.asyncio
async def test_calendar_day_merges_all_sources(
    calendar_use_case, reminder_store, calendar_store
) -> None:
    await reminder_store.upsert_many([_reminder()])
    calendar_store.entries.extend(
        [
            CalendarEntry(id="vet", title="Vet", date="2024-08-28", time="10:00"),
            CalendarEntry(id="bad", title="Bad", date="someday"),
        ]
    )

    dto = await calendar_use_case.execute(HEAT_DAY, today=TODAY)

    assert dto.day == HEAT_DAY
    assert [event.source for event in dto.events] == [
        "reminder",
        "forecast",
        "custom",
    ]
    assert dto.events[1].title == "Bella Expected Heat"
    assert dto.events[1].category.key == "heat"
    assert dto.events[2].time == "10:00"


@pytest.mark.asyncio
async def test_failing_source_is_left_out(
    calendar_use_case, calendar_store, monkeypatch
) -> None:
    async def _broken(include_completed: bool = False):
        raise RuntimeError("reminder store offline")

    monkeypatch.setattr(calendar_use_case._reminder_store, "list_reminders", _broken)
    calendar_store.entries.append(
        CalendarEntry(id="walk", title="Walk", date=HEAT_DAY, category="custom")
    )

    dto = await calendar_use_case.execute(HEAT_DAY, today=TODAY)

    assert [event.id for event in dto.events] == ["dog-bella-2024-08-28", "walk"]


@pytest.mark.asyncio
async def test_empty_day(calendar_use_case) -> None:
    dto = await calendar_use_case.execute(date(2024, 7, 1), today=TODAY)

    assert dto.events == []
