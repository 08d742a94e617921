from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest
from dependency_injector import providers

from src.application.services import ForecastSupervisor
from src.main.config import AppSettings
from src.main.container import app_lifespan, get_container, init_container


@dataclass
class _StubMongoDatabase:
    ensured_indexes: bool = False
    closed: bool = False

    async def create_indexes(self) -> None:
        self.ensured_indexes = True

    def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_init_and_get_container(monkeypatch) -> None:
    settings = AppSettings()
    container = init_container(settings)
    assert hasattr(container, "mongo_database")
    assert get_container() is container

    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    async with app_lifespan():
        pass


@pytest.mark.asyncio
async def test_app_lifespan_manages_resources(monkeypatch) -> None:
    container = init_container(AppSettings())
    stub_db = _StubMongoDatabase()
    container.mongo_database.override(providers.Object(stub_db))

    drained = []

    async def _drain() -> None:
        drained.append(True)

    monkeypatch.setattr(container.forecast_supervisor(), "drain", _drain)

    async with app_lifespan():
        await asyncio.sleep(0)

    assert stub_db.ensured_indexes is True
    assert stub_db.closed is True
    assert drained == [True]


def test_forecast_supervisor_is_shared() -> None:
    container = init_container(AppSettings())
    container.mongo_database.override(providers.Object(_StubMongoDatabase()))

    supervisor = container.forecast_supervisor()

    assert isinstance(supervisor, ForecastSupervisor)
    assert container.forecast_supervisor() is supervisor
    assert container.health_check_service()._forecast_stats is supervisor.stats


def test_forecast_settings_reach_the_supervisor(monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("FORECAST_VALIDATE_CALCULATIONS", "false")
    container = init_container(AppSettings())

    config = container.supervisor_config()

    assert config.timeout_seconds == 2.5
    assert config.validate is False


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("src.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
