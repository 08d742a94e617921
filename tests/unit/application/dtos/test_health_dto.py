from __future__ import annotations

from datetime import datetime, timezone

from src.application.dtos.health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
)
from src.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ReminderWorkerInfo,
    ServiceStatus,
    SupervisorStats,
    SystemHealth,
)


def test_dependency_status_dto_keeps_supervisor_counters() -> None:
    stats = SupervisorStats(runs=4, timeouts=1)
    domain = DependencyStatus(
        name="forecast_supervisor",
        status=ServiceStatus.UP,
        details=stats.as_dict(),
    )

    dto = DependencyStatusDTO.from_domain(domain)

    assert dto.name == "forecast_supervisor"
    assert dto.status is ServiceStatus.UP
    assert dto.details["runs"] == 4
    assert dto.details["timeouts"] == 1


def test_system_health_dto_from_domain() -> None:
    dto = SystemHealthDTO.from_domain(SystemHealth.from_dependencies([]))
    assert dto.status is ServiceStatus.UP
    assert dto.dependencies == []


def test_application_info_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    info = ApplicationInfo(
        name="Breeding Calendar",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2024-09-01",
        started_at=now,
        uptime_seconds=42.0,
        status=ServiceStatus.UP,
        worker=ReminderWorkerInfo(
            broker="amqp://rabbitmq",
            result_backend="redis://redis",
            queue="reminders",
            schedule_hour_utc=5,
        ),
        dependencies=[DependencyStatus(name="mongo", status=ServiceStatus.UP)],
    )

    dto = ApplicationInfoDTO.from_domain(info)
    assert dto.name == "Breeding Calendar"
    assert dto.status is ServiceStatus.UP
    assert dto.reminder_worker.schedule_hour_utc == 5
    assert dto.dependencies[0].name == "mongo"
