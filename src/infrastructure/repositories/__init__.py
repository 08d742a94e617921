"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the store interfaces
defined in the domain layer. These implementations handle the details of
data persistence.
"""

from .calendar_repository import MongoCalendarRepository
from .record_store import MongoRecordStore
from .reminder_repository import MongoReminderRepository

__all__ = ["MongoCalendarRepository", "MongoRecordStore", "MongoReminderRepository"]
