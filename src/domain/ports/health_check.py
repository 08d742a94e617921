"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Reports storage, broker and forecast supervisor health."""

    async def evaluate(self) -> SystemHealth:
        """Run every check and aggregate the worst status."""
        ...
