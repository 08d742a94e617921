"""Use cases for health and application info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from src.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from src.application.models import SystemInfo
from src.domain.entities.health import ApplicationInfo, ReminderWorkerInfo
from src.domain.ports.health_check import IHealthCheckService


def redact_credentials(url: str) -> str:
    """Drop the user and password part of a broker or backend URL."""
    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit(parsed._replace(netloc=netloc))


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Deployment metadata, uptime and the reminder worker setup."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    def _worker(self) -> ReminderWorkerInfo:
        return ReminderWorkerInfo(
            broker=redact_credentials(self._info.celery_broker_url),
            result_backend=redact_credentials(self._info.celery_result_backend_url),
            queue=self._info.reminder_queue,
            schedule_hour_utc=self._info.reminder_schedule_hour,
        )

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        return ApplicationInfoDTO.from_domain(
            ApplicationInfo(
                name=self._info.title,
                description=self._info.description,
                version=self._info.version,
                environment=self._info.environment,
                git_commit=self._info.git_commit,
                build_time=self._info.build_time,
                started_at=started,
                uptime_seconds=max(0.0, (now - started).total_seconds()),
                status=system_health.status,
                worker=self._worker(),
                dependencies=system_health.dependencies,
            )
        )
