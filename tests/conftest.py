from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Sequence

import pytest

from src.domain.entities.animal import (
    AnimalCycleProfile,
    BreedingPlan,
    HeatCycleRecord,
    Litter,
    MatingConfirmation,
    Sex,
)
from src.domain.entities.calendar import CalendarEntry
from src.domain.entities.reminder import ReminderRecord
from src.domain.repositories.calendar_store import ICalendarStore
from src.domain.repositories.record_store import IRecordStore
from src.domain.repositories.reminder_store import IReminderStore

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


TODAY = date(2024, 6, 1)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def bella() -> AnimalCycleProfile:
    """Fertile female, last heat 2024-03-01, 180 day interval."""
    return AnimalCycleProfile(
        id="dog-bella",
        name="Bella",
        sex=Sex.FEMALE,
        birth_date=date(2020, 5, 10),
        heat_dates=[date(2023, 9, 3), date(2024, 3, 1)],
        heat_interval_days=180,
        vaccination_date=date(2023, 6, 5),
    )


@pytest.fixture()
def rex() -> AnimalCycleProfile:
    return AnimalCycleProfile(
        id="dog-rex",
        name="Rex",
        sex=Sex.MALE,
        birth_date=date(2019, 6, 3),
    )


@pytest.fixture()
def sample_litter() -> Litter:
    return Litter(
        id="litter-a",
        name="A-Litter",
        birth_date=date(2024, 5, 11),
        dam_id="dog-bella",
    )


@dataclass
class InMemoryRecordStore(IRecordStore):
    animals: List[AnimalCycleProfile] = field(default_factory=list)
    cycles: List[HeatCycleRecord] = field(default_factory=list)
    plans: List[BreedingPlan] = field(default_factory=list)
    confirmations: List[MatingConfirmation] = field(default_factory=list)
    litters: List[Litter] = field(default_factory=list)
    calls: Dict[str, int] = field(default_factory=dict)

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    async def list_animals(self) -> List[AnimalCycleProfile]:
        self._count("animals")
        return list(self.animals)

    async def list_heat_cycles(self, animal_id: str) -> List[HeatCycleRecord]:
        self._count("heat_cycles")
        return [cycle for cycle in self.cycles if cycle.animal_id == animal_id]

    async def list_plans(self, animal_id: str) -> List[BreedingPlan]:
        self._count("plans")
        return [plan for plan in self.plans if plan.female_id == animal_id]

    async def list_confirmations(self, animal_id: str) -> List[MatingConfirmation]:
        self._count("confirmations")
        return [c for c in self.confirmations if c.female_id == animal_id]

    async def list_litters(self) -> List[Litter]:
        self._count("litters")
        return list(self.litters)


@dataclass
class InMemoryReminderStore(IReminderStore):
    reminders: Dict[str, ReminderRecord] = field(default_factory=dict)

    async def upsert_many(self, reminders: Sequence[ReminderRecord]) -> int:
        for reminder in reminders:
            self.reminders[reminder.id] = reminder
        return len(reminders)

    async def list_reminders(
        self, include_completed: bool = False
    ) -> List[ReminderRecord]:
        return [
            reminder
            for reminder in self.reminders.values()
            if include_completed or not reminder.completed
        ]


@dataclass
class InMemoryCalendarStore(ICalendarStore):
    entries: List[CalendarEntry] = field(default_factory=list)

    async def list_entries(self) -> List[CalendarEntry]:
        return list(self.entries)


@pytest.fixture()
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture()
def reminder_store() -> InMemoryReminderStore:
    return InMemoryReminderStore()


@pytest.fixture()
def calendar_store() -> InMemoryCalendarStore:
    return InMemoryCalendarStore()


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._skip = 0
        self._limit: int | None = None
        self.sorted_by: str | None = None

    def sort(self, key: str | None = None, direction: int = 1) -> "FakeCursor":
        self.sorted_by = key
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit is not None:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.last_query: Dict[str, Any] | None = None
        self.dropped_indexes: List[str] = []
        self.created_indexes: List[tuple[Any, ...]] = []

    def add(self, *documents: Dict[str, Any]) -> None:
        for document in documents:
            self.documents[document["id"]] = document

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self.last_query = query
        key = query.get("id")
        if not isinstance(key, str):
            return None
        return self.documents.get(key)

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.last_query = query
        results = [doc for doc in self.documents.values() if self._matches(doc, query)]
        return FakeCursor(results)

    def replace_one(
        self, query: Dict[str, Any], document: Dict[str, Any], upsert: bool = False
    ) -> Any:
        key = query.get("id")
        if not isinstance(key, str):
            return SimpleNamespace(matched_count=0, acknowledged=False)
        if key not in self.documents and not upsert:
            return SimpleNamespace(matched_count=0, acknowledged=True)
        matched = 1 if key in self.documents else 0
        self.documents[key] = document
        return SimpleNamespace(matched_count=matched, acknowledged=True)

    def drop_index(self, index_name: str) -> None:
        self.dropped_indexes.append(index_name)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeMongoDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: str | None = None,
        sort_direction: int = 1,
        skip: int = 0,
        limit: int | None = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query)
        cursor.sort(sort_by, sort_direction)
        cursor.skip(skip)
        if limit is not None:
            cursor.limit(limit)
        return list(cursor)

    async def upsert_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Any:
        result = self.get_collection(collection_name).replace_one(
            query, document, upsert=True
        )
        if not getattr(result, "acknowledged", True):
            raise Exception(f"Failed to upsert document in {collection_name}")
        return document

    async def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        pass


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime.now(timezone.utc)
