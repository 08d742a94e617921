"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import ForecastTuning, SupervisorConfig, SystemInfo
from src.application.services import (
    ForecastSupervisor,
    LegacyForecastStrategy,
    UnifiedForecastStrategy,
)
from src.application.use_cases.calendar_use_cases import GetCalendarDayUseCase
from src.application.use_cases.forecast_use_cases import (
    GetForecastDiagnosticsUseCase,
    GetHeatForecastUseCase,
    GetUpcomingHeatsUseCase,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.application.use_cases.reminder_use_cases import (
    GenerateRemindersUseCase,
    GetRemindersUseCase,
)
from src.infrastructure.database import MongoDatabase
from src.infrastructure.repositories import (
    MongoCalendarRepository,
    MongoRecordStore,
    MongoReminderRepository,
)
from src.infrastructure.services.celery_config import REMINDER_QUEUE
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()
    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    record_store = providers.Singleton(
        MongoRecordStore,
        mongo_database=mongo_database,
    )

    reminder_repository = providers.Singleton(
        MongoReminderRepository,
        mongo_database=mongo_database,
    )

    calendar_repository = providers.Singleton(
        MongoCalendarRepository,
        mongo_database=mongo_database,
    )

    # Forecast engine
    forecast_tuning = providers.Singleton(
        ForecastTuning,
        default_interval_days=config.forecast.default_interval_days,
        horizon_years=config.forecast.horizon_years,
        upcoming_days=config.forecast.upcoming_days,
        max_predictions=config.forecast.max_predictions,
        plan_match_days=config.forecast.plan_match_days,
        confirmation_match_days=config.forecast.confirmation_match_days,
        active_cycle_days=config.forecast.active_cycle_days,
        max_breeding_age_years=config.forecast.max_breeding_age_years,
        warning_age_years=config.forecast.warning_age_years,
    )

    supervisor_config = providers.Singleton(
        SupervisorConfig,
        use_unified=config.forecast.use_unified,
        unified_callers=config.forecast.unified_callers,
        validate=config.forecast.validate_calculations,
        timeout_seconds=config.forecast.timeout_seconds,
        enable_logging=config.forecast.enable_logging,
    )

    legacy_strategy = providers.Singleton(
        LegacyForecastStrategy,
        default_interval_days=config.forecast.default_interval_days,
        max_occurrences=config.forecast.max_predictions,
    )

    unified_strategy = providers.Singleton(
        UnifiedForecastStrategy,
        default_interval_days=config.forecast.default_interval_days,
        max_occurrences=config.forecast.max_predictions,
    )

    # Singleton so the supervisor counters survive across requests
    forecast_supervisor = providers.Singleton(
        ForecastSupervisor,
        legacy=legacy_strategy,
        unified=unified_strategy,
        config=supervisor_config,
    )

    # Application (use cases)
    get_heat_forecast_use_case = providers.Factory(
        GetHeatForecastUseCase,
        record_store=record_store,
        supervisor=forecast_supervisor,
        tuning=forecast_tuning,
    )

    get_upcoming_heats_use_case = providers.Factory(
        GetUpcomingHeatsUseCase,
        record_store=record_store,
        supervisor=forecast_supervisor,
        tuning=forecast_tuning,
    )

    get_forecast_diagnostics_use_case = providers.Factory(
        GetForecastDiagnosticsUseCase,
        record_store=record_store,
        supervisor=forecast_supervisor,
        tuning=forecast_tuning,
    )

    generate_reminders_use_case = providers.Factory(
        GenerateRemindersUseCase,
        record_store=record_store,
        reminder_store=reminder_repository,
        tuning=forecast_tuning,
    )

    get_reminders_use_case = providers.Factory(
        GetRemindersUseCase,
        reminder_store=reminder_repository,
    )

    get_calendar_day_use_case = providers.Factory(
        GetCalendarDayUseCase,
        heat_forecast=get_heat_forecast_use_case,
        reminder_store=reminder_repository,
        calendar_store=calendar_repository,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        broker_url=config.celery.broker_url,
        redis_url=config.celery.result_backend_url,
        forecast_stats=forecast_supervisor.provided.stats,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.app.title,
        description=config.app.description,
        version=config.app.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.app.git_commit,
        build_time=config.app.build_time,
        celery_broker_url=config.celery.broker_url,
        celery_result_backend_url=config.celery.result_backend_url,
        reminder_schedule_hour=config.celery.reminder_schedule_hour,
        reminder_queue=REMINDER_QUEUE,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    This async context manager can be used in the FastAPI lifespan
    to properly initialize and clean up resources. It follows
    the Clean Architecture principles by managing infrastructure
    components through the DI container.
    """
    container = get_container()

    mongo_database = container.mongo_database()
    supervisor = container.forecast_supervisor()

    try:
        # Startup - MongoDB is already connected in __init__
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()

        logger.info("container.resources.initialized")
        yield container

    finally:
        # Let background strategy validations finish before the loop closes
        await supervisor.drain()

        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")
