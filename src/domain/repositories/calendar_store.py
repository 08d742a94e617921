"""Calendar Store Interface"""

from abc import ABC, abstractmethod
from typing import List

from src.domain.entities.calendar import CalendarEntry


class ICalendarStore(ABC):
    """Interface for user-authored calendar entries."""

    @abstractmethod
    async def list_entries(self) -> List[CalendarEntry]:
        """
        List custom entries with their raw date field.

        Dates are not validated here: the merge view excludes entries whose
        date cannot be parsed.
        """
        pass
