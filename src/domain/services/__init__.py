"""
Domain Services Package

Pure engine logic: interval estimation, cycle projection, status
reconciliation, reminder rules, strategy comparison and the merged
calendar view.
"""

from .cycle_forecaster import (
    DEFAULT_HORIZON_YEARS,
    MAX_PROJECTED_OCCURRENCES,
    compute_horizon_end,
    next_occurrence,
    project_occurrences,
)
from .event_merge import events_for_date
from .forecast_comparator import ForecastComparison, compare_forecasts
from .interval_estimator import DEFAULT_HEAT_INTERVAL_DAYS, estimate_interval
from .reminder_rules import ANIMAL_RULES, LITTER_RULES, next_vaccination_date
from .status_reconciler import (
    ReconciliationWindows,
    find_matching_plan,
    reconcile_animal,
    reconcile_occurrence,
)

__all__ = [
    "DEFAULT_HORIZON_YEARS",
    "MAX_PROJECTED_OCCURRENCES",
    "compute_horizon_end",
    "next_occurrence",
    "project_occurrences",
    "events_for_date",
    "ForecastComparison",
    "compare_forecasts",
    "DEFAULT_HEAT_INTERVAL_DAYS",
    "estimate_interval",
    "ANIMAL_RULES",
    "LITTER_RULES",
    "next_vaccination_date",
    "ReconciliationWindows",
    "find_matching_plan",
    "reconcile_animal",
    "reconcile_occurrence",
]
