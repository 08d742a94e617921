"""Domain service comparing the output of two forecast strategies."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from src.domain.entities.forecast import ForecastOccurrence

# Aligned occurrences further apart than this are reported as drift.
MAX_DRIFT_DAYS = 1


@dataclass(slots=True)
class ForecastComparison:
    """Outcome of comparing a legacy and a unified forecast."""

    legacy_count: int
    unified_count: int
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return not self.errors and not self.warnings


def _occurrence_key(occurrence: ForecastOccurrence) -> str:
    return f"{occurrence.animal_id}-{occurrence.date.isoformat()}"


def _by_animal(
    occurrences: Sequence[ForecastOccurrence],
) -> Dict[str, List[ForecastOccurrence]]:
    grouped: Dict[str, List[ForecastOccurrence]] = defaultdict(list)
    for occurrence in occurrences:
        grouped[occurrence.animal_id].append(occurrence)
    for items in grouped.values():
        items.sort(key=lambda occurrence: occurrence.date)
    return grouped


def compare_forecasts(
    legacy: Sequence[ForecastOccurrence],
    unified: Sequence[ForecastOccurrence],
) -> ForecastComparison:
    """
    Report every difference between two forecasts.

    Occurrences are matched by animal and exact date. Per animal, when both
    sides have the same number of occurrences, aligned pairs that differ by
    more than a day are reported as well. Never raises on differing input.
    """
    comparison = ForecastComparison(
        legacy_count=len(legacy), unified_count=len(unified)
    )
    if len(legacy) != len(unified):
        comparison.errors.append(
            f"Count mismatch: legacy {len(legacy)} vs unified {len(unified)}"
        )

    legacy_keys = {_occurrence_key(occurrence): occurrence for occurrence in legacy}
    unified_keys = {_occurrence_key(occurrence): occurrence for occurrence in unified}

    for key, occurrence in legacy_keys.items():
        if key not in unified_keys:
            comparison.errors.append(
                f"Heat missing in unified: {occurrence.animal_name} "
                f"on {occurrence.date.isoformat()}"
            )
    for key, occurrence in unified_keys.items():
        if key not in legacy_keys:
            comparison.errors.append(
                f"Extra heat in unified: {occurrence.animal_name} "
                f"on {occurrence.date.isoformat()}"
            )

    unified_by_animal = _by_animal(unified)
    for animal_id, legacy_items in _by_animal(legacy).items():
        unified_items = unified_by_animal.get(animal_id, [])
        if len(legacy_items) != len(unified_items):
            continue
        for legacy_item, unified_item in zip(legacy_items, unified_items):
            drift = abs((unified_item.date - legacy_item.date).days)
            if drift > MAX_DRIFT_DAYS:
                comparison.warnings.append(
                    f"Date difference for {legacy_item.animal_name}: "
                    f"{drift * 24} hours"
                )
    return comparison
