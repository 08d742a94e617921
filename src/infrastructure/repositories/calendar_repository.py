"""MongoDB adapter for user-authored calendar entries."""

from typing import Any, Dict, List

from src.domain.entities.calendar import CalendarEntry
from src.domain.repositories.calendar_store import ICalendarStore
from src.infrastructure.database import MongoDatabase


class MongoCalendarRepository(ICalendarStore):
    """MongoDB implementation of the calendar store."""

    COLLECTION_NAME = "calendar_events"

    def __init__(self, mongo_database: MongoDatabase):
        self.db = mongo_database

    def _to_entity(self, document: Dict[str, Any]) -> CalendarEntry:
        # The date stays raw; the merge view decides whether it is usable.
        return CalendarEntry(
            id=str(document.get("id", "")),
            title=document.get("title", ""),
            date=document.get("date"),
            time=document.get("time"),
            category=document.get("type"),
            animal_id=document.get("dog_id"),
            animal_name=document.get("dog_name"),
            notes=document.get("notes"),
        )

    async def list_entries(self) -> List[CalendarEntry]:
        documents = await self.db.find_many(self.COLLECTION_NAME, {})
        return [self._to_entity(document) for document in documents]
