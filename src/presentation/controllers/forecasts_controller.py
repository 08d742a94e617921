"""
Presentation Layer - Forecasts Controller

Exposes the multi-year heat forecast, the upcoming heats list and the
strategy diagnostics.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query

from src.application.dtos.forecast_dto import (
    ForecastDiagnosticsDTO,
    HeatForecastResponseDTO,
    UpcomingHeatsResponseDTO,
)
from src.application.use_cases.forecast_use_cases import (
    GetForecastDiagnosticsUseCase,
    GetHeatForecastUseCase,
    GetUpcomingHeatsUseCase,
)
from src.domain.entities.errors import MalformedRecordError
from src.main.container import AppContainer
from src.shared import EnumForecastCaller, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/forecasts", tags=["Forecasts"])


@router.get(
    "/heats",
    response_model=HeatForecastResponseDTO,
    summary="Forecast heat cycles of every fertile female",
    description="""
    Project each fertile female's heat cycles from today until the end of the
    forecast horizon and reconcile every occurrence against heat cycles,
    planned litters and mating confirmations.
    """,
)
@inject
async def get_heat_forecast(
    caller: EnumForecastCaller = Query(
        default=EnumForecastCaller.HEAT_PLANNING,
        description="Logical caller, used to pick the forecast strategy",
    ),
    use_case: GetHeatForecastUseCase = Depends(
        Provide[AppContainer.get_heat_forecast_use_case]
    ),
) -> HeatForecastResponseDTO:
    try:
        return await use_case.execute(caller)
    except MalformedRecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "forecast.unexpected_error",
            caller=caller.value,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/heats/upcoming",
    response_model=UpcomingHeatsResponseDTO,
    summary="List predicted heats in the coming days",
)
@inject
async def get_upcoming_heats(
    caller: EnumForecastCaller = Query(
        default=EnumForecastCaller.UPCOMING_HEATS,
        description="Logical caller, used to pick the forecast strategy",
    ),
    days: Optional[int] = Query(
        default=None,
        ge=1,
        le=730,
        description="Days ahead to cover; the configured window when omitted",
    ),
    use_case: GetUpcomingHeatsUseCase = Depends(
        Provide[AppContainer.get_upcoming_heats_use_case]
    ),
) -> UpcomingHeatsResponseDTO:
    try:
        return await use_case.execute(caller, days)
    except MalformedRecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error(
            "forecast.upcoming.unexpected_error",
            caller=caller.value,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/diagnostics",
    response_model=ForecastDiagnosticsDTO,
    summary="Compare the legacy and unified forecast strategies",
)
@inject
async def get_forecast_diagnostics(
    use_case: GetForecastDiagnosticsUseCase = Depends(
        Provide[AppContainer.get_forecast_diagnostics_use_case]
    ),
) -> ForecastDiagnosticsDTO:
    try:
        return await use_case.execute()
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("forecast.diagnostics.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=500, detail="Unable to compare forecast strategies"
        )
