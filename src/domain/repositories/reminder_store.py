"""Reminder Store Interface"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from src.domain.entities.reminder import ReminderRecord


class IReminderStore(ABC):
    """Interface for reminder persistence."""

    @abstractmethod
    async def upsert_many(self, reminders: Sequence[ReminderRecord]) -> int:
        """
        Insert or replace reminders by id.

        The stored ``completed`` flag of an existing reminder is preserved.

        Returns:
            Number of reminders written
        """
        pass

    @abstractmethod
    async def list_reminders(
        self, include_completed: bool = False
    ) -> List[ReminderRecord]:
        """List stored reminders, optionally including completed ones."""
        pass
