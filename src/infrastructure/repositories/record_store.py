"""
MongoDB Record Store - Infrastructure Layer

Read-only adapter over the breeding records kept by the surrounding
application. Documents with an unusable mandatory date are skipped with a
warning; the rest of the listing is still returned.
"""

from typing import Any, Callable, Dict, List, TypeVar

from src.domain.entities.animal import (
    AnimalCycleProfile,
    BreedingPlan,
    HeatCycleRecord,
    Litter,
    MatingConfirmation,
    PlanStatus,
    Sex,
)
from src.domain.entities.errors import MalformedRecordError
from src.domain.repositories.record_store import IRecordStore
from src.infrastructure.database import MongoDatabase
from src.shared import get_logger

from .document_fields import date_list, optional_date, optional_int, required_date

logger = get_logger(__name__)

T = TypeVar("T")


class MongoRecordStore(IRecordStore):
    """MongoDB implementation of the record store."""

    DOGS = "dogs"
    HEAT_CYCLES = "heat_cycles"
    PLANNED_LITTERS = "planned_litters"
    MATING_CONFIRMATIONS = "mating_confirmations"
    LITTERS = "litters"

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB record store.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _map_all(
        self,
        documents: List[Dict[str, Any]],
        mapper: Callable[[Dict[str, Any]], T],
    ) -> List[T]:
        records: List[T] = []
        for document in documents:
            try:
                records.append(mapper(document))
            except (MalformedRecordError, KeyError, ValueError) as exc:
                logger.warning(
                    "records.skipped",
                    record_id=document.get("id"),
                    error=str(exc),
                )
        return records

    def _to_profile(self, document: Dict[str, Any]) -> AnimalCycleProfile:
        return AnimalCycleProfile(
            id=document["id"],
            name=document.get("name", ""),
            sex=Sex(document.get("gender", Sex.FEMALE.value)),
            birth_date=optional_date(document, "birth_date", "dog"),
            sterilization_date=optional_date(document, "sterilization_date", "dog"),
            heat_dates=date_list(document, "heat_history", "date", "dog"),
            heat_interval_days=optional_int(document, "heat_interval", "dog"),
            vaccination_date=optional_date(document, "vaccination_date", "dog"),
            image_url=document.get("image_url"),
        )

    def _to_heat_cycle(self, document: Dict[str, Any]) -> HeatCycleRecord:
        return HeatCycleRecord(
            id=document["id"],
            animal_id=document["dog_id"],
            start_date=required_date(document, "start_date", "heat_cycle"),
            end_date=optional_date(document, "end_date", "heat_cycle"),
            notes=document.get("notes"),
        )

    def _to_plan(self, document: Dict[str, Any]) -> BreedingPlan:
        return BreedingPlan(
            id=document["id"],
            female_id=document["female_id"],
            expected_heat_date=required_date(
                document, "expected_heat_date", "planned_litter"
            ),
            status=PlanStatus(document.get("status", PlanStatus.PLANNED.value)),
            mating_dates=date_list(
                document, "mating_dates", "mating_date", "planned_litter"
            ),
            notes=document.get("notes"),
        )

    def _to_confirmation(self, document: Dict[str, Any]) -> MatingConfirmation:
        return MatingConfirmation(
            id=document["id"],
            female_id=document["female_id"],
            mating_date=required_date(document, "mating_date", "mating_confirmation"),
            heat_cycle_id=document.get("heat_cycle_id"),
            plan_id=document.get("plan_id"),
        )

    def _to_litter(self, document: Dict[str, Any]) -> Litter:
        return Litter(
            id=document["id"],
            name=document.get("name", ""),
            birth_date=required_date(document, "date_of_birth", "litter"),
            dam_id=document.get("dam_id"),
            archived=bool(document.get("archived", False)),
        )

    async def list_animals(self) -> List[AnimalCycleProfile]:
        documents = await self.db.find_many(self.DOGS, {}, sort_by="name")
        return self._map_all(documents, self._to_profile)

    async def list_heat_cycles(self, animal_id: str) -> List[HeatCycleRecord]:
        documents = await self.db.find_many(
            self.HEAT_CYCLES, {"dog_id": animal_id}, sort_by="start_date"
        )
        return self._map_all(documents, self._to_heat_cycle)

    async def list_plans(self, animal_id: str) -> List[BreedingPlan]:
        documents = await self.db.find_many(
            self.PLANNED_LITTERS, {"female_id": animal_id}
        )
        return self._map_all(documents, self._to_plan)

    async def list_confirmations(self, animal_id: str) -> List[MatingConfirmation]:
        documents = await self.db.find_many(
            self.MATING_CONFIRMATIONS, {"female_id": animal_id}
        )
        return self._map_all(documents, self._to_confirmation)

    async def list_litters(self) -> List[Litter]:
        documents = await self.db.find_many(self.LITTERS, {})
        return self._map_all(documents, self._to_litter)

