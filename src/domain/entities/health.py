"""
Health domain entities.

Value objects describing dependency health, forecast supervisor counters
and the metadata surfaced by the /info endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


# Higher is worse; an unconfigured check ranks below a degraded one.
_SEVERITY = {
    ServiceStatus.UP: 0,
    ServiceStatus.UNKNOWN: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DOWN: 3,
}


def worst_status(statuses: Iterable[ServiceStatus]) -> ServiceStatus:
    """Most severe status of ``statuses``; UP when there is none."""
    return max(statuses, key=_SEVERITY.__getitem__, default=ServiceStatus.UP)


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single dependency."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the application."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, dependencies: List[DependencyStatus]) -> SystemHealth:
        return cls(
            status=worst_status(dep.status for dep in dependencies),
            dependencies=dependencies,
        )


@dataclass(slots=True)
class SupervisorStats:
    """Running counters kept by the dual-path forecast supervisor."""

    runs: int = 0
    unified_successes: int = 0
    timeouts: int = 0
    fallbacks: int = 0
    critical_failures: int = 0
    validations: int = 0
    mismatches: int = 0
    last_run_fell_back: bool = False
    last_mismatch_at: Optional[datetime] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "runs": self.runs,
            "unified_successes": self.unified_successes,
            "timeouts": self.timeouts,
            "fallbacks": self.fallbacks,
            "critical_failures": self.critical_failures,
            "validations": self.validations,
            "mismatches": self.mismatches,
            "last_run_fell_back": self.last_run_fell_back,
            "last_mismatch_at": (
                self.last_mismatch_at.isoformat() if self.last_mismatch_at else None
            ),
        }


@dataclass(frozen=True, slots=True)
class ReminderWorkerInfo:
    """Where and when the daily reminder regeneration runs."""

    broker: str
    result_backend: str
    queue: str
    schedule_hour_utc: int


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    worker: ReminderWorkerInfo
    dependencies: List[DependencyStatus] = field(default_factory=list)
