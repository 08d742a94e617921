"""
Repositories Package

This package contains interfaces defining the contracts of the three
collaborator stores the engine reads from and writes to. Specific
implementations are provided by the infrastructure layer.
"""

from .calendar_store import ICalendarStore
from .record_store import IRecordStore
from .reminder_store import IReminderStore

__all__ = ["ICalendarStore", "IRecordStore", "IReminderStore"]
