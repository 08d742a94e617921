"""
MongoDB Reminder Repository - Infrastructure Layer

Stores derived reminders by id. Regenerating a reminder replaces its
content but never resets the ``completed`` flag set by the user.
"""

from typing import Any, Dict, List, Sequence

from src.domain.entities.errors import MalformedRecordError
from src.domain.entities.reminder import (
    ReminderCategory,
    ReminderPriority,
    ReminderRecord,
)
from src.domain.repositories.reminder_store import IReminderStore
from src.infrastructure.database import MongoDatabase
from src.shared import get_logger

from .document_fields import required_date, to_datetime

logger = get_logger(__name__)


class MongoReminderRepository(IReminderStore):
    """MongoDB implementation of the reminder store."""

    COLLECTION_NAME = "reminders"

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB reminder repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, reminder: ReminderRecord, completed: bool) -> Dict[str, Any]:
        return {
            "id": reminder.id,
            "title": reminder.title,
            "description": reminder.description,
            "type": reminder.category.value,
            "due_date": to_datetime(reminder.due_date),
            "priority": reminder.priority.value,
            "related_id": reminder.related_id,
            "generated_at": reminder.generated_at,
            "completed": completed,
        }

    def _to_entity(self, document: Dict[str, Any]) -> ReminderRecord:
        return ReminderRecord(
            id=document["id"],
            title=document.get("title", ""),
            description=document.get("description", ""),
            category=ReminderCategory(document["type"]),
            due_date=required_date(document, "due_date", "reminder"),
            priority=ReminderPriority(document.get("priority", "medium")),
            related_id=document.get("related_id", ""),
            generated_at=document["generated_at"],
            completed=bool(document.get("completed", False)),
        )

    async def upsert_many(self, reminders: Sequence[ReminderRecord]) -> int:
        written = 0
        for reminder in reminders:
            existing = await self.db.find_one(self.COLLECTION_NAME, {"id": reminder.id})
            completed = bool(existing.get("completed")) if existing else False
            await self.db.upsert_one(
                self.COLLECTION_NAME,
                {"id": reminder.id},
                self._to_document(reminder, completed),
            )
            written += 1
        return written

    async def list_reminders(
        self, include_completed: bool = False
    ) -> List[ReminderRecord]:
        query: Dict[str, Any] = {} if include_completed else {"completed": False}
        documents = await self.db.find_many(
            self.COLLECTION_NAME, query, sort_by="due_date"
        )

        reminders: List[ReminderRecord] = []
        for document in documents:
            try:
                reminders.append(self._to_entity(document))
            except (MalformedRecordError, KeyError, ValueError) as exc:
                logger.warning(
                    "reminders.skipped", record_id=document.get("id"), error=str(exc)
                )
        return reminders
