"""
Presentation Layer - Calendar Controller

Exposes the merged calendar view of a single day.
"""

from datetime import date

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException

from src.application.dtos.calendar_dto import CalendarDayResponseDTO
from src.application.use_cases.calendar_use_cases import GetCalendarDayUseCase
from src.main.container import AppContainer
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get(
    "/{day}",
    response_model=CalendarDayResponseDTO,
    summary="Forecasts, reminders and custom events falling on a day",
)
@inject
async def get_calendar_day(
    day: date,
    use_case: GetCalendarDayUseCase = Depends(
        Provide[AppContainer.get_calendar_day_use_case]
    ),
) -> CalendarDayResponseDTO:
    try:
        return await use_case.execute(day)
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "calendar.day.failure", day=day.isoformat(), error=str(exc), exc_info=exc
        )
        raise HTTPException(status_code=500, detail="Unable to build calendar day")
