from __future__ import annotations

from datetime import date

import pytest

from src.application.services.corroboration_cache import CorroborationCache
from src.domain.entities.animal import BreedingPlan, HeatCycleRecord


@pytest.mark.asyncio
async def test_lookups_are_memoized_per_animal(record_store) -> None:
    record_store.cycles.append(
        HeatCycleRecord(id="c1", animal_id="dog-1", start_date=date(2024, 5, 1))
    )
    record_store.plans.append(
        BreedingPlan(id="p1", female_id="dog-1", expected_heat_date=date(2024, 8, 1))
    )
    cache = CorroborationCache(record_store)

    first = await cache.heat_cycles("dog-1")
    second = await cache.heat_cycles("dog-1")
    await cache.plans("dog-1")
    await cache.plans("dog-1")
    await cache.confirmations("dog-2")

    assert first == second
    assert [cycle.id for cycle in first] == ["c1"]
    assert record_store.calls == {"heat_cycles": 1, "plans": 1, "confirmations": 1}
    assert cache.misses == 3
