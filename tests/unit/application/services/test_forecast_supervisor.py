from __future__ import annotations

import asyncio
from datetime import date
from typing import List

import pytest

from src.application.models import SupervisorConfig
from src.application.services.forecast_strategies import LegacyForecastStrategy
from src.application.services.forecast_supervisor import ForecastSupervisor
from src.domain.entities.forecast import ForecastOccurrence, predicted_occurrence_id
from src.shared import EnumForecastCaller

TODAY = date(2024, 6, 1)
HORIZON = date(2026, 6, 1)


def _heat(on: date) -> ForecastOccurrence:
    return ForecastOccurrence(
        id=predicted_occurrence_id("dog-bella", on),
        animal_id="dog-bella",
        animal_name="Bella",
        date=on,
    )


class _StubUnified:
    name = "unified"

    def __init__(self, result=None, delay: float = 0.0, error=None):
        self.result = result or []
        self.delay = delay
        self.error = error
        self.calls = 0

    async def forecast(self, animals, *, today, horizon_end, lookups=None):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.result)


class _EagerFailingUnified:
    """Raises while building the call, before any awaitable exists."""

    name = "unified"

    def forecast(self, animals, *, today, horizon_end, lookups=None):
        raise RuntimeError("unified exploded eagerly")


class _FlakyLegacy(LegacyForecastStrategy):
    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures

    def compute(self, animals, *, today, horizon_end) -> List[ForecastOccurrence]:
        if self.failures:
            self.failures -= 1
            raise RuntimeError("legacy exploded")
        return super().compute(animals, today=today, horizon_end=horizon_end)


def _supervisor(unified, legacy=None, **config) -> ForecastSupervisor:
    config.setdefault("validate", False)
    return ForecastSupervisor(
        legacy=legacy or LegacyForecastStrategy(),
        unified=unified,
        config=SupervisorConfig(**config),
    )


async def _forecast(supervisor, animals, caller=EnumForecastCaller.HEAT_PLANNING):
    return await supervisor.forecast(
        animals, caller=caller, today=TODAY, horizon_end=HORIZON
    )


@pytest.mark.asyncio
async def test_unified_result_is_returned(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))])
    supervisor = _supervisor(unified)

    result = await _forecast(supervisor, [bella])

    assert [o.date for o in result] == [date(2024, 9, 1)]
    assert supervisor.stats.runs == 1
    assert supervisor.stats.unified_successes == 1
    assert supervisor.stats.last_run_fell_back is False


@pytest.mark.asyncio
async def test_timeout_falls_back_to_legacy(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))], delay=0.5)
    supervisor = _supervisor(unified, timeout_seconds=0.01)

    result = await _forecast(supervisor, [bella])

    assert result[0].date == date(2024, 8, 28)
    assert supervisor.stats.timeouts == 1
    assert supervisor.stats.fallbacks == 1
    assert supervisor.stats.last_run_fell_back is True
    await supervisor.drain()


@pytest.mark.asyncio
async def test_unified_error_falls_back_to_legacy(bella) -> None:
    supervisor = _supervisor(_StubUnified(error=ValueError("boom")))

    result = await _forecast(supervisor, [bella])

    assert result[0].date == date(2024, 8, 28)
    assert supervisor.stats.fallbacks == 1
    assert supervisor.stats.timeouts == 0


@pytest.mark.asyncio
async def test_unified_raising_synchronously_falls_back_to_legacy(bella) -> None:
    supervisor = _supervisor(_EagerFailingUnified())

    result = await _forecast(supervisor, [bella])

    assert result[0].date == date(2024, 8, 28)
    assert supervisor.stats.fallbacks == 1
    assert supervisor.stats.critical_failures == 0
    assert supervisor.stats.last_run_fell_back is True


@pytest.mark.asyncio
async def test_callers_without_opt_in_run_legacy(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))])
    supervisor = _supervisor(unified)

    result = await _forecast(supervisor, [bella], EnumForecastCaller.REMINDER_SYNC)

    assert result[0].date == date(2024, 8, 28)
    assert unified.calls == 0


@pytest.mark.asyncio
async def test_master_switch_forces_legacy(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))])
    supervisor = _supervisor(unified, use_unified=False)

    await _forecast(supervisor, [bella])

    assert unified.calls == 0


@pytest.mark.asyncio
async def test_unknown_caller_runs_legacy(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))])
    supervisor = _supervisor(unified)

    await _forecast(supervisor, [bella], "some_new_screen")

    assert unified.calls == 0


@pytest.mark.asyncio
async def test_critical_failure_retries_legacy_once(bella) -> None:
    supervisor = _supervisor(_StubUnified(), legacy=_FlakyLegacy(failures=1))

    result = await _forecast(supervisor, [bella], EnumForecastCaller.DOG_SERVICES)

    assert result[0].date == date(2024, 8, 28)
    assert supervisor.stats.critical_failures == 1
    assert supervisor.stats.last_run_fell_back is True


@pytest.mark.asyncio
async def test_total_failure_returns_empty_list(bella) -> None:
    supervisor = _supervisor(_StubUnified(), legacy=_FlakyLegacy(failures=2))

    result = await _forecast(supervisor, [bella], EnumForecastCaller.DOG_SERVICES)

    assert result == []
    assert supervisor.stats.critical_failures == 1


@pytest.mark.asyncio
async def test_background_validation_records_mismatch(bella) -> None:
    unified = _StubUnified([_heat(date(2024, 9, 1))])
    supervisor = _supervisor(unified, validate=True)

    result = await _forecast(supervisor, [bella])
    assert result[0].date == date(2024, 9, 1)

    await supervisor.drain()

    assert supervisor.stats.validations == 1
    assert supervisor.stats.mismatches == 1
    assert supervisor.stats.last_mismatch_at is not None


@pytest.mark.asyncio
async def test_background_validation_after_legacy_run(bella) -> None:
    legacy_dates = LegacyForecastStrategy().compute(
        [bella], today=TODAY, horizon_end=HORIZON
    )
    unified = _StubUnified(legacy_dates)
    supervisor = _supervisor(unified, validate=True, use_unified=False)

    await _forecast(supervisor, [bella])
    await supervisor.drain()

    assert unified.calls == 1
    assert supervisor.stats.validations == 1
    assert supervisor.stats.mismatches == 0


@pytest.mark.asyncio
async def test_compare_strategies_and_readiness(bella) -> None:
    legacy_dates = LegacyForecastStrategy().compute(
        [bella], today=TODAY, horizon_end=HORIZON
    )
    supervisor = _supervisor(_StubUnified(legacy_dates))

    comparison = await supervisor.compare_strategies(
        [bella], today=TODAY, horizon_end=HORIZON
    )
    readiness = await supervisor.check_readiness(
        [bella], today=TODAY, horizon_end=HORIZON
    )

    assert comparison.comparison.matches
    assert readiness.ready is True
    assert readiness.issues == []


@pytest.mark.asyncio
async def test_readiness_reports_future_heats_and_mismatches(bella) -> None:
    bella.heat_dates.append(date(2024, 7, 1))
    supervisor = _supervisor(_StubUnified([]))

    readiness = await supervisor.check_readiness(
        [bella], today=TODAY, horizon_end=HORIZON
    )

    assert readiness.ready is False
    assert "1 animals have future heat dates" in readiness.issues
    assert "Legacy and unified methods produce different results" in readiness.issues
