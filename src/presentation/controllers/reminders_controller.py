"""
Presentation Layer - Reminders Controller

Lists stored reminders and regenerates them on demand.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.reminder_dto import (
    ReminderGenerationResponseDTO,
    ReminderListResponseDTO,
)
from src.application.use_cases.reminder_use_cases import (
    GenerateRemindersUseCase,
    GetRemindersUseCase,
)
from src.main.container import AppContainer
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.get(
    "",
    response_model=ReminderListResponseDTO,
    summary="List stored reminders, most urgent first",
)
@inject
async def list_reminders(
    include_completed: bool = Query(
        default=False, description="Also return reminders marked as completed"
    ),
    use_case: GetRemindersUseCase = Depends(
        Provide[AppContainer.get_reminders_use_case]
    ),
) -> ReminderListResponseDTO:
    try:
        return await use_case.execute(include_completed=include_completed)
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("reminders.list.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve reminders",
        )


@router.post(
    "/generate",
    response_model=ReminderGenerationResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Regenerate reminders from the breeding records",
    description="""
    Evaluate every reminder rule for every animal and litter as of today and
    store the result. Completed reminders keep their completed flag.
    """,
)
@inject
async def generate_reminders(
    use_case: GenerateRemindersUseCase = Depends(
        Provide[AppContainer.generate_reminders_use_case]
    ),
) -> ReminderGenerationResponseDTO:
    try:
        return await use_case.execute()
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("reminders.generate.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to generate reminders",
        )
