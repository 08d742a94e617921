"""
Domain service assigning lifecycle statuses to forecast occurrences.

A predicted heat is corroborated by two independent sources, checked in
order:

1. a planned litter for the same female whose expected heat date lies
   within ``plan_match_days`` of the occurrence;
2. a mating confirmation within ``confirmation_match_days``, which keeps a
   heat ``mated`` even after the plan that produced it was deleted.

The most specific status wins (``mated`` over ``planned`` over
``predicted``). Heats logged in the current calendar year are reported as
``confirmed``, or ``active`` while still open and recent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from src.domain.entities.animal import (
    AnimalCycleProfile,
    BreedingPlan,
    HeatCycleRecord,
    MatingConfirmation,
    PlanStatus,
)
from src.domain.entities.forecast import (
    Confidence,
    ForecastOccurrence,
    OccurrenceStatus,
    occurrence_sort_key,
)
from src.shared.dates import days_between

PLAN_MATCH_DAYS = 7
CONFIRMATION_MATCH_DAYS = 14
ACTIVE_CYCLE_DAYS = 21

# How specific a corroborated status is; unrelated to display ordering.
_SPECIFICITY: Dict[OccurrenceStatus, int] = {
    OccurrenceStatus.PREDICTED: 0,
    OccurrenceStatus.PLANNED: 1,
    OccurrenceStatus.MATED: 2,
}


@dataclass(frozen=True, slots=True)
class ReconciliationWindows:
    """Tolerances used when matching corroborating records."""

    plan_match_days: int = PLAN_MATCH_DAYS
    confirmation_match_days: int = CONFIRMATION_MATCH_DAYS
    active_cycle_days: int = ACTIVE_CYCLE_DAYS


@dataclass(frozen=True, slots=True)
class Corroboration:
    status: OccurrenceStatus
    record_id: Optional[str] = None
    notes: Optional[str] = None


def find_matching_plan(
    plans: Iterable[BreedingPlan],
    animal_id: str,
    on: date,
    window_days: int = PLAN_MATCH_DAYS,
) -> Optional[BreedingPlan]:
    """Closest non-cancelled plan of ``animal_id`` within ``window_days``."""
    best: Optional[BreedingPlan] = None
    best_distance = window_days + 1
    for plan in plans:
        if plan.female_id != animal_id or plan.status == PlanStatus.CANCELLED:
            continue
        distance = abs(days_between(plan.expected_heat_date, on))
        if distance <= window_days and distance < best_distance:
            best, best_distance = plan, distance
    return best


def find_matching_confirmation(
    confirmations: Iterable[MatingConfirmation],
    animal_id: str,
    on: date,
    window_days: int = CONFIRMATION_MATCH_DAYS,
) -> Optional[MatingConfirmation]:
    """Closest confirmation of ``animal_id`` within ``window_days``."""
    best: Optional[MatingConfirmation] = None
    best_distance = window_days + 1
    for confirmation in confirmations:
        if confirmation.female_id != animal_id:
            continue
        distance = abs(days_between(confirmation.mating_date, on))
        if distance <= window_days and distance < best_distance:
            best, best_distance = confirmation, distance
    return best


def _plan_corroboration(plan: Optional[BreedingPlan]) -> Corroboration:
    if plan is None:
        return Corroboration(OccurrenceStatus.PREDICTED)
    if plan.has_follow_through:
        return Corroboration(OccurrenceStatus.MATED, plan.id, plan.notes)
    return Corroboration(OccurrenceStatus.PLANNED, plan.id, plan.notes)


def _confirmation_corroboration(
    confirmation: Optional[MatingConfirmation],
) -> Corroboration:
    if confirmation is None:
        return Corroboration(OccurrenceStatus.PREDICTED)
    return Corroboration(OccurrenceStatus.MATED, confirmation.id)


def _most_specific(candidates: Sequence[Corroboration]) -> Corroboration:
    # max() keeps the first of equally specific candidates, so a plan match
    # keeps its id and notes when a confirmation also says mated.
    return max(candidates, key=lambda candidate: _SPECIFICITY[candidate.status])


def reconcile_occurrence(
    occurrence: ForecastOccurrence,
    plans: Sequence[BreedingPlan],
    confirmations: Sequence[MatingConfirmation],
    windows: ReconciliationWindows = ReconciliationWindows(),
) -> ForecastOccurrence:
    """Return ``occurrence`` with its corroborated status and linkage."""
    if occurrence.is_historical:
        return occurrence

    plan = find_matching_plan(
        plans, occurrence.animal_id, occurrence.date, windows.plan_match_days
    )
    confirmation = find_matching_confirmation(
        confirmations,
        occurrence.animal_id,
        occurrence.date,
        windows.confirmation_match_days,
    )
    winner = _most_specific(
        [_plan_corroboration(plan), _confirmation_corroboration(confirmation)]
    )
    if winner.status == OccurrenceStatus.PREDICTED:
        return occurrence

    return replace(
        occurrence,
        status=winner.status,
        linked_record_id=winner.record_id,
        notes=winner.notes if winner.notes is not None else occurrence.notes,
    )


def historical_occurrences(
    animal: AnimalCycleProfile,
    cycles: Iterable[HeatCycleRecord],
    today: date,
    windows: ReconciliationWindows = ReconciliationWindows(),
) -> List[ForecastOccurrence]:
    """Heats logged this calendar year, tagged ``active`` or ``confirmed``."""
    occurrences: List[ForecastOccurrence] = []
    for cycle in cycles:
        if cycle.start_date.year != today.year:
            continue
        days_since_start = days_between(cycle.start_date, today)
        is_open = (
            cycle.end_date is None and days_since_start <= windows.active_cycle_days
        )
        occurrences.append(
            ForecastOccurrence(
                id=f"{animal.id}-confirmed-{cycle.id}",
                animal_id=animal.id,
                animal_name=animal.name,
                date=cycle.start_date,
                status=(
                    OccurrenceStatus.ACTIVE if is_open else OccurrenceStatus.CONFIRMED
                ),
                confidence=Confidence.HIGH,
                interval_days=0,
                linked_record_id=cycle.id,
                notes=cycle.notes,
            )
        )
    return occurrences


def reconcile_animal(
    animal: AnimalCycleProfile,
    predicted: Iterable[ForecastOccurrence],
    *,
    cycles: Sequence[HeatCycleRecord],
    plans: Sequence[BreedingPlan],
    confirmations: Sequence[MatingConfirmation],
    today: date,
    windows: ReconciliationWindows = ReconciliationWindows(),
) -> List[ForecastOccurrence]:
    """Full, sorted occurrence list of one animal."""
    occurrences = historical_occurrences(animal, cycles, today, windows)
    occurrences.extend(
        reconcile_occurrence(occurrence, plans, confirmations, windows)
        for occurrence in predicted
        if occurrence.animal_id == animal.id
    )
    occurrences.sort(key=occurrence_sort_key)
    return occurrences
