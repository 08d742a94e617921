from __future__ import annotations

from datetime import date
from typing import cast

import pytest

from src.application.models import ForecastTuning
from src.application.use_cases.reminder_use_cases import (
    GenerateRemindersUseCase,
    GetRemindersUseCase,
)
from src.infrastructure.database.mongo_database import MongoDatabase
from src.infrastructure.repositories import (
    MongoRecordStore,
    MongoReminderRepository,
)
from tests.conftest import FakeMongoDatabase

TODAY = date(2024, 6, 1)


@pytest.mark.asyncio
async def test_regeneration_keeps_completed_reminders_hidden():
    fake = FakeMongoDatabase()
    fake.get_collection("dogs").add(
        {
            "id": "dog-bella",
            "name": "Bella",
            "gender": "female",
            "birth_date": "2020-05-10",
            "vaccination_date": "2023-06-05",
        },
        {"id": "dog-rex", "name": "Rex", "gender": "male", "birth_date": "2019-06-03"},
    )
    database = cast(MongoDatabase, fake)
    reminder_repository = MongoReminderRepository(database)
    generate = GenerateRemindersUseCase(
        record_store=MongoRecordStore(database),
        reminder_store=reminder_repository,
        tuning=ForecastTuning(),
    )
    listing = GetRemindersUseCase(reminder_repository)

    first = await generate.execute(today=TODAY)
    assert first.stored == 2

    completed_id = first.reminders[0].id
    fake.get_collection("reminders").documents[completed_id]["completed"] = True

    second = await generate.execute(today=TODAY)
    open_reminders = await listing.execute()
    all_reminders = await listing.execute(include_completed=True)

    assert second.stored == 2
    assert [r.id for r in open_reminders.reminders] == [
        r.id for r in first.reminders if r.id != completed_id
    ]
    assert all_reminders.total == 2
    assert {r.id: r.completed for r in all_reminders.reminders}[completed_id] is True
