"""
Reminder Use Cases - Application Layer

Derives reminders from the record store with the reminder rules, hands them
to the reminder store, and lists what the store holds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Callable, List, Optional, Sequence

from src.application.models import ForecastTuning
from src.domain.entities.reminder import ReminderRecord
from src.domain.repositories.record_store import IRecordStore
from src.domain.repositories.reminder_store import IReminderStore
from src.domain.services.reminder_rules import (
    LITTER_RULES,
    birthday_reminders,
    heat_reminders,
    vaccination_reminders,
)
from src.shared import get_logger

from ..dtos.reminder_dto import (
    ReminderDTO,
    ReminderGenerationResponseDTO,
    ReminderListResponseDTO,
)

logger = get_logger(__name__)


def reminder_display_key(reminder: ReminderRecord):
    return reminder.priority.rank, reminder.due_date, reminder.title


@dataclass(slots=True)
class ReminderDerivation:
    reminders: List[ReminderRecord] = field(default_factory=list)
    failed_rules: int = 0


def _apply(
    derivation: ReminderDerivation,
    rule: Callable[..., List[ReminderRecord]],
    record,
    today: date,
    **kwargs,
) -> None:
    try:
        derivation.reminders.extend(rule(record, today, **kwargs))
    except Exception as exc:
        derivation.failed_rules += 1
        logger.warning(
            "reminders.rule_failed",
            rule=getattr(rule, "__name__", repr(rule)),
            record_id=getattr(record, "id", None),
            error=str(exc),
        )


class GenerateRemindersUseCase:
    """Evaluate every reminder rule for every animal and litter."""

    def __init__(
        self,
        record_store: IRecordStore,
        reminder_store: IReminderStore,
        tuning: ForecastTuning,
    ) -> None:
        self._record_store = record_store
        self._reminder_store = reminder_store
        self._tuning = tuning

    async def derive(
        self,
        today: date,
        generated_at: Optional[datetime] = None,
    ) -> ReminderDerivation:
        """Run the rules without touching the reminder store.

        A rule raising for one record is counted and skipped; every other
        rule and record is still evaluated.
        """
        generated_at = generated_at or datetime.combine(today, time.min)
        derivation = ReminderDerivation()

        for animal in await self._record_store.list_animals():
            _apply(
                derivation,
                heat_reminders,
                animal,
                today,
                generated_at=generated_at,
                default_interval_days=self._tuning.default_interval_days,
            )
            for rule in (vaccination_reminders, birthday_reminders):
                _apply(derivation, rule, animal, today, generated_at=generated_at)

        for litter in await self._record_store.list_litters():
            for rule in LITTER_RULES:
                _apply(derivation, rule, litter, today, generated_at=generated_at)

        derivation.reminders.sort(key=reminder_display_key)
        return derivation

    async def execute(
        self,
        today: Optional[date] = None,
        generated_at: Optional[datetime] = None,
    ) -> ReminderGenerationResponseDTO:
        today = today or date.today()
        derivation = await self.derive(today, generated_at)
        stored = await self._reminder_store.upsert_many(derivation.reminders)

        logger.info(
            "reminders.generated",
            today=today.isoformat(),
            generated=len(derivation.reminders),
            stored=stored,
            failed_rules=derivation.failed_rules,
        )
        return ReminderGenerationResponseDTO(
            generated_on=today,
            generated=len(derivation.reminders),
            stored=stored,
            failed_rules=derivation.failed_rules,
            reminders=[ReminderDTO.from_domain(r) for r in derivation.reminders],
        )


def _sorted(reminders: Sequence[ReminderRecord]) -> List[ReminderRecord]:
    return sorted(reminders, key=reminder_display_key)


class GetRemindersUseCase:
    """List stored reminders, most urgent first."""

    def __init__(self, reminder_store: IReminderStore) -> None:
        self._reminder_store = reminder_store

    async def execute(self, include_completed: bool = False) -> ReminderListResponseDTO:
        reminders = _sorted(
            await self._reminder_store.list_reminders(
                include_completed=include_completed
            )
        )
        return ReminderListResponseDTO(
            reminders=[ReminderDTO.from_domain(r) for r in reminders],
            total=len(reminders),
        )
