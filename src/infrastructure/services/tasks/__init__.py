"""Celery task implementations for infrastructure services."""

from .base import CallbackTask, logger
from .reminder_generation import generate_reminders

__all__ = ["CallbackTask", "generate_reminders", "logger"]
