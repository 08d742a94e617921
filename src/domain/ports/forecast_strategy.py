"""Port for interchangeable heat forecast algorithms."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Protocol, Sequence

from src.domain.entities.animal import AnimalCycleProfile
from src.domain.entities.forecast import ForecastOccurrence
from src.domain.ports.corroboration import ICorroborationLookups


class ForecastStrategy(Protocol):
    """A heat forecasting algorithm run by the dual-path supervisor."""

    name: str

    async def forecast(
        self,
        animals: Sequence[AnimalCycleProfile],
        *,
        today: date,
        horizon_end: date,
        lookups: Optional[ICorroborationLookups] = None,
    ) -> List[ForecastOccurrence]:
        """
        Project predicted heats for ``animals`` between today and horizon_end.

        Animals without enough data contribute nothing. A failure for one
        animal must not abort the others.
        """
        ...
