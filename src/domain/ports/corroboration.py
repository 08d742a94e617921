"""Port for request-scoped corroboration lookups."""

from __future__ import annotations

from typing import List, Protocol

from src.domain.entities.animal import BreedingPlan, HeatCycleRecord, MatingConfirmation


class ICorroborationLookups(Protocol):
    """Per-animal reads that may be served from a cache within one run."""

    async def heat_cycles(self, animal_id: str) -> List[HeatCycleRecord]:
        ...

    async def plans(self, animal_id: str) -> List[BreedingPlan]:
        ...

    async def confirmations(self, animal_id: str) -> List[MatingConfirmation]:
        ...
