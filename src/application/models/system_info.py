"""Deployment metadata consumed by the system use cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """What /info reports about this deployment and its reminder worker."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    celery_broker_url: str
    celery_result_backend_url: str
    reminder_schedule_hour: int
    reminder_queue: str = "reminders"
