"""
Main Application - Main Layer

FastAPI entry point of the breeding calendar: wires the container, mounts
the forecast, reminder, calendar and system routers, and ties the Mongo
connection and the forecast supervisor to the application lifespan.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.main.config import AppSettings, get_settings
from src.main.container import app_lifespan, init_container
from src.presentation.controllers import (
    calendar_router,
    forecasts_router,
    reminders_router,
    system_router,
)
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Bootstrap logging from the environment, then refine it once settings load
configure_logging()
settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)

ROUTERS = (system_router, forecasts_router, reminders_router, calendar_router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the stores on startup; drain pending strategy checks on shutdown."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.starting", started_at=app.state.started_at.isoformat())

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("app.stopped")


def create_app(app_settings: AppSettings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the container from; loaded from the
            environment when omitted.

    Returns:
        FastAPI: The configured FastAPI application
    """
    app_settings = app_settings or get_settings()
    init_container(app_settings)

    app = FastAPI(
        title=app_settings.app.title,
        description=app_settings.app.description,
        version=app_settings.app.version,
        debug=app_settings.app.debug,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "src.main.app:app",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
