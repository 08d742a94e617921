#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

Starts the Celery worker that regenerates reminders every day. The worker
runs an embedded beat so a single process both schedules and consumes the
reminder queue.
"""

from typing import List

from src.main.config import get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

configure_logging()
settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


def create_worker():
    """Return the Celery app the reminder task is registered on.

    The shared app is built at import time from environment defaults; the
    loaded settings are applied on top so ``.env`` values take effect too.
    """
    from src.infrastructure.services.celery_config import (
        apply_reminder_settings,
        celery_app,
    )

    app_settings = get_settings()
    apply_reminder_settings(
        celery_app,
        broker_url=app_settings.celery.broker_url,
        backend_url=app_settings.celery.result_backend_url,
        reminder_schedule_hour=app_settings.celery.reminder_schedule_hour,
    )

    logger.info(
        "worker.configure",
        broker_url=app_settings.celery.broker_url,
        backend_url=app_settings.celery.result_backend_url,
        reminder_hour=app_settings.celery.reminder_schedule_hour,
        app_name=celery_app.main,
    )
    return celery_app


def worker_argv() -> List[str]:
    from src.infrastructure.services.celery_config import REMINDER_QUEUE

    return [
        "worker",
        "--loglevel=info",
        f"--queues={REMINDER_QUEUE}",
        "--beat",
        "--concurrency=1",
    ]


def main():
    """Main entry point for Celery worker."""
    logger.info("worker.starting")
    create_worker().worker_main(worker_argv())


if __name__ == "__main__":
    main()
