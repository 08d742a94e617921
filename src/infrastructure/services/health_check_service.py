"""Health checks for the stores, the Celery broker pair and the forecast engine."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Any, Awaitable, Callable, Dict, List, Optional

import pika
import redis.asyncio as aioredis

from src.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SupervisorStats,
    SystemHealth,
)
from src.domain.ports.health_check import IHealthCheckService
from src.infrastructure.database.mongo_database import MongoDatabase
from src.shared import get_logger

logger = get_logger(__name__)

Probe = Callable[[], Awaitable[Optional[Dict[str, Any]]]]


class HealthCheckService(IHealthCheckService):
    """Collect health information for the reminder and forecast backends.

    MongoDB holds the breeding records and the derived reminders, RabbitMQ
    and Redis carry the reminder regeneration job, and the forecast
    supervisor counters tell whether the unified strategy is holding up.
    """

    def __init__(
        self,
        mongo_database: MongoDatabase,
        broker_url: str,
        redis_url: str,
        forecast_stats: Optional[SupervisorStats] = None,
        *,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._broker_url = broker_url
        self._redis_url = redis_url
        self._forecast_stats = forecast_stats
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""
        names = ["mongo", "rabbitmq", "redis", "forecast_supervisor"]
        results = await asyncio.gather(
            self._check_mongo(),
            self._check_rabbitmq(),
            self._check_redis(),
            self._check_forecast_supervisor(),
            return_exceptions=True,
        )

        dependencies: List[DependencyStatus] = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.error("health.check.crashed", dependency=name, error=str(result))
                result = DependencyStatus(
                    name=name, status=ServiceStatus.DOWN, message=str(result)
                )
            dependencies.append(result)

        return SystemHealth.from_dependencies(dependencies)

    async def _probe(
        self,
        name: str,
        label: str,
        configured: bool,
        probe: Probe,
    ) -> DependencyStatus:
        if not configured:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message=f"{label} not configured.",
            )

        start = perf_counter()
        try:
            details = await probe()
        except Exception as exc:
            logger.warning("health.check.failed", dependency=name, error=str(exc))
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"{label} unreachable: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )
        return DependencyStatus(
            name=name,
            status=ServiceStatus.UP,
            message=f"{label} reachable",
            latency_ms=(perf_counter() - start) * 1000,
            details=details or {},
        )

    async def _check_mongo(self) -> DependencyStatus:
        database = self._mongo_database

        async def _ping() -> Dict[str, Any]:
            await asyncio.to_thread(database.client.admin.command, "ping")
            reminders = await asyncio.to_thread(
                database.get_collection("reminders").estimated_document_count
            )
            return {"database": database.db.name, "stored_reminders": reminders}

        return await self._probe("mongo", "MongoDB", bool(database), _ping)

    async def _check_rabbitmq(self) -> DependencyStatus:
        def _connect() -> None:
            connection = pika.BlockingConnection(pika.URLParameters(self._broker_url))
            connection.close()

        async def _ping() -> None:
            await asyncio.to_thread(_connect)

        return await self._probe(
            "rabbitmq", "RabbitMQ broker", bool(self._broker_url), _ping
        )

    async def _check_redis(self) -> DependencyStatus:
        async def _ping() -> None:
            client = aioredis.from_url(
                self._redis_url,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
            try:
                await client.ping()
            finally:
                await client.close()

        return await self._probe(
            "redis", "Redis result backend", bool(self._redis_url), _ping
        )

    async def _check_forecast_supervisor(self) -> DependencyStatus:
        if self._forecast_stats is None:
            return DependencyStatus(
                name="forecast_supervisor",
                status=ServiceStatus.UNKNOWN,
                message="Forecast supervisor not configured.",
            )

        stats = self._forecast_stats
        if stats.last_run_fell_back:
            return DependencyStatus(
                name="forecast_supervisor",
                status=ServiceStatus.DEGRADED,
                message="Last forecast fell back to the legacy strategy",
                details=stats.as_dict(),
            )

        message = (
            "Forecast strategies healthy" if stats.runs else "No forecasts run yet"
        )
        return DependencyStatus(
            name="forecast_supervisor",
            status=ServiceStatus.UP,
            message=message,
            details=stats.as_dict(),
        )
