"""Celery task regenerating the derived reminders."""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from typing import Any, Optional

from src.infrastructure.services.celery_config import REMINDER_TASK, celery_app
from src.infrastructure.services.tasks.base import CallbackTask, logger
from src.infrastructure.settings import get_settings


@celery_app.task(bind=True, base=CallbackTask, name=REMINDER_TASK)
def generate_reminders(self, today: Optional[str] = None) -> dict[str, Any]:
    """Derive reminders for every animal and litter and upsert them.

    Args:
        today: ISO day to evaluate the rules for; the current UTC day when
            omitted.
    """

    from src.application.models import ForecastTuning
    from src.application.use_cases.reminder_use_cases import GenerateRemindersUseCase
    from src.infrastructure.database.mongo_database import MongoDatabase
    from src.infrastructure.repositories import (
        MongoRecordStore,
        MongoReminderRepository,
    )

    settings = get_settings()
    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
    )
    try:
        use_case = GenerateRemindersUseCase(
            record_store=MongoRecordStore(database),
            reminder_store=MongoReminderRepository(database),
            tuning=ForecastTuning(
                default_interval_days=settings.reminders.default_interval_days
            ),
        )
        run_day = (
            date.fromisoformat(today) if today else datetime.now(timezone.utc).date()
        )
        result = asyncio.run(use_case.execute(today=run_day))
    except Exception as exc:
        logger.error("reminders.task.failed", error=str(exc), exc_info=exc)
        raise
    finally:
        database.close()

    return {
        "generated_on": result.generated_on.isoformat(),
        "generated": result.generated,
        "stored": result.stored,
        "failed_rules": result.failed_rules,
    }
