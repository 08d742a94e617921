"""Request-scoped cache over the record store's per-animal lookups."""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, TypeVar

from src.domain.entities.animal import BreedingPlan, HeatCycleRecord, MatingConfirmation
from src.domain.repositories.record_store import IRecordStore

T = TypeVar("T")


class CorroborationCache:
    """
    Memoizes heat cycle, plan and confirmation reads by animal id.

    Create one per forecast run and drop it afterwards: entries are never
    invalidated, so a long-lived instance would serve stale records.
    """

    def __init__(self, record_store: IRecordStore):
        self._record_store = record_store
        self._heat_cycles: Dict[str, List[HeatCycleRecord]] = {}
        self._plans: Dict[str, List[BreedingPlan]] = {}
        self._confirmations: Dict[str, List[MatingConfirmation]] = {}
        self.misses = 0

    async def _cached(
        self,
        cache: Dict[str, List[T]],
        animal_id: str,
        loader: Callable[[str], Awaitable[List[T]]],
    ) -> List[T]:
        if animal_id not in cache:
            self.misses += 1
            cache[animal_id] = list(await loader(animal_id))
        return cache[animal_id]

    async def heat_cycles(self, animal_id: str) -> List[HeatCycleRecord]:
        return await self._cached(
            self._heat_cycles, animal_id, self._record_store.list_heat_cycles
        )

    async def plans(self, animal_id: str) -> List[BreedingPlan]:
        return await self._cached(self._plans, animal_id, self._record_store.list_plans)

    async def confirmations(self, animal_id: str) -> List[MatingConfirmation]:
        return await self._cached(
            self._confirmations, animal_id, self._record_store.list_confirmations
        )
