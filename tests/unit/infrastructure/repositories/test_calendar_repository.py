from __future__ import annotations

from typing import cast

import pytest

from src.infrastructure.database import MongoDatabase
from src.infrastructure.repositories import MongoCalendarRepository
from tests.conftest import FakeMongoDatabase


@pytest.mark.asyncio
async def test_entries_keep_raw_dates(fake_mongo_database: FakeMongoDatabase):
    fake_mongo_database.get_collection("calendar_events").add(
        {
            "id": "e1",
            "title": "Vet check",
            "date": "2024-06-01",
            "time": "09:00",
            "type": "vet-appointment",
            "dog_id": "dog-bella",
            "dog_name": "Bella",
        },
        {"id": "e2", "title": "Broken", "date": "someday"},
    )
    repository = MongoCalendarRepository(cast(MongoDatabase, fake_mongo_database))

    entries = {entry.id: entry for entry in await repository.list_entries()}

    assert entries["e1"].date == "2024-06-01"
    assert entries["e1"].category == "vet-appointment"
    assert entries["e1"].animal_name == "Bella"
    assert entries["e2"].date == "someday"
    assert entries["e2"].category is None
