"""Use case for the merged calendar day view."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from src.domain.entities.calendar import CalendarEntry
from src.domain.entities.forecast import ForecastOccurrence
from src.domain.entities.reminder import ReminderRecord
from src.domain.repositories.calendar_store import ICalendarStore
from src.domain.repositories.reminder_store import IReminderStore
from src.domain.services.event_merge import events_for_date
from src.shared import EnumForecastCaller, get_logger

from ..dtos.calendar_dto import CalendarDayResponseDTO, CalendarEventDTO
from .forecast_use_cases import GetHeatForecastUseCase

logger = get_logger(__name__)


class GetCalendarDayUseCase:
    """Forecasts, reminders and custom entries falling on one day.

    Each source is read independently; one failing source is logged and
    contributes nothing instead of failing the day.
    """

    def __init__(
        self,
        heat_forecast: GetHeatForecastUseCase,
        reminder_store: IReminderStore,
        calendar_store: ICalendarStore,
    ) -> None:
        self._heat_forecast = heat_forecast
        self._reminder_store = reminder_store
        self._calendar_store = calendar_store

    async def _occurrences(self, today: date) -> List[ForecastOccurrence]:
        try:
            forecasts = await self._heat_forecast.forecast_animals(
                EnumForecastCaller.HEAT_PLANNING, today
            )
        except Exception as exc:
            logger.warning("calendar.source_failed", source="forecast", error=str(exc))
            return []
        return [
            occurrence for forecast in forecasts for occurrence in forecast.occurrences
        ]

    async def _reminders(self) -> List[ReminderRecord]:
        try:
            return await self._reminder_store.list_reminders(include_completed=False)
        except Exception as exc:
            logger.warning("calendar.source_failed", source="reminders", error=str(exc))
            return []

    async def _entries(self) -> List[CalendarEntry]:
        try:
            return await self._calendar_store.list_entries()
        except Exception as exc:
            logger.warning("calendar.source_failed", source="custom", error=str(exc))
            return []

    async def execute(
        self, day: date, today: Optional[date] = None
    ) -> CalendarDayResponseDTO:
        events = events_for_date(
            day,
            occurrences=await self._occurrences(today or date.today()),
            reminders=await self._reminders(),
            entries=await self._entries(),
        )
        return CalendarDayResponseDTO(
            day=day,
            events=[CalendarEventDTO.from_domain(event) for event in events],
        )
