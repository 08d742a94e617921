"""
Record Store Interface

Read-only view over the breeding records owned by the surrounding
application (dogs, heat cycles, planned litters, matings, litters).
"""

from abc import ABC, abstractmethod
from typing import List

from src.domain.entities.animal import (
    AnimalCycleProfile,
    BreedingPlan,
    HeatCycleRecord,
    Litter,
    MatingConfirmation,
)


class IRecordStore(ABC):
    """Interface for record store implementations."""

    @abstractmethod
    async def list_animals(self) -> List[AnimalCycleProfile]:
        """
        List every animal profile.

        Records whose required fields cannot be parsed are skipped by the
        implementation rather than failing the whole listing.
        """
        pass

    @abstractmethod
    async def list_heat_cycles(self, animal_id: str) -> List[HeatCycleRecord]:
        """
        List logged heat cycles of one animal.

        Args:
            animal_id: Identifier of the female

        Returns:
            Heat cycles in any order
        """
        pass

    @abstractmethod
    async def list_plans(self, animal_id: str) -> List[BreedingPlan]:
        """
        List planned litters whose female is ``animal_id``.

        Args:
            animal_id: Identifier of the female

        Returns:
            Plans in any status, cancelled ones included
        """
        pass

    @abstractmethod
    async def list_confirmations(self, animal_id: str) -> List[MatingConfirmation]:
        """
        List mating confirmations recorded for ``animal_id``.

        Confirmations survive deletion of the plan that produced them.
        """
        pass

    @abstractmethod
    async def list_litters(self) -> List[Litter]:
        """List every litter, archived ones included."""
        pass
