"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ReminderWorkerInfo,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    """One dependency check: a store, the broker pair or the forecast engine."""

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = Field(
        default_factory=dict,
        description="Check specific data, e.g. the forecast supervisor counters",
    )

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            details=status.details,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Worst status of all dependencies")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "degraded",
                "dependencies": [
                    {
                        "name": "forecast_supervisor",
                        "status": "degraded",
                        "message": "Last forecast fell back to the legacy strategy",
                        "checked_at": "2024-06-01T05:00:00Z",
                        "details": {"runs": 14, "fallbacks": 1, "timeouts": 1},
                    }
                ],
            }
        }
    }


class ReminderWorkerDTO(BaseModel):
    """Celery setup of the daily reminder regeneration."""

    broker: str = Field(description="Broker URL without credentials")
    result_backend: str = Field(description="Result backend URL without credentials")
    queue: str
    schedule_hour_utc: int = Field(ge=0, le=23)

    @classmethod
    def from_domain(cls, worker: ReminderWorkerInfo) -> "ReminderWorkerDTO":
        return cls(
            broker=worker.broker,
            result_backend=worker.result_backend,
            queue=worker.queue,
            schedule_hour_utc=worker.schedule_hour_utc,
        )


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    reminder_worker: ReminderWorkerDTO
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            reminder_worker=ReminderWorkerDTO.from_domain(info.worker),
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Breeding Calendar",
                "description": "Heat forecasts and breeding reminders",
                "version": "1.0.0",
                "environment": "production",
                "git_commit": "abcdef1",
                "build_time": "2024-05-30T11:30:00Z",
                "started_at": "2024-06-01T04:00:00Z",
                "uptime_seconds": 3600.5,
                "status": "up",
                "reminder_worker": {
                    "broker": "amqp://rabbitmq:5672/breeding",
                    "result_backend": "redis://redis:6379/0",
                    "queue": "reminders",
                    "schedule_hour_utc": 5,
                },
                "dependencies": [],
            }
        }
    }
