"""
Use case: Report service health.

Input: none
Output: HealthStatus / DetailedHealthStatus
Side effects: one ``SELECT 1`` against the database for the detailed probe.
Failure cases: none; dependency failures are reported, not raised.
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

import psutil
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from foundation.core.database import ping_database

logger = logging.getLogger(__name__)

OverallStatus = Literal["healthy", "unhealthy", "degraded"]
DependencyStatus = Literal["connected", "disconnected"]

CONNECTED: DependencyStatus = "connected"
DISCONNECTED: DependencyStatus = "disconnected"


@dataclass(frozen=True)
class DependencyHealth:
    """Reachability of one dependency. Latency in milliseconds."""

    status: DependencyStatus
    latency: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.status}
        if self.latency is not None:
            body["latency"] = self.latency
        return body


@dataclass(frozen=True)
class MemoryUsage:
    """Process memory in bytes and as a share of system memory."""

    used: int
    total: int
    percentage: int


@dataclass(frozen=True)
class HealthStatus:
    """Liveness payload.

    Attributes:
        status: Overall status.
        timestamp: ISO-8601 UTC time of the probe.
        uptime: Seconds since the process started.
        version: Application version string.
    """

    status: OverallStatus
    timestamp: str
    uptime: float
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "uptime": self.uptime,
            "version": self.version,
        }


@dataclass(frozen=True)
class DetailedHealthStatus(HealthStatus):
    """Readiness payload with dependency and memory details."""

    database: DependencyHealth
    memory: MemoryUsage

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["dependencies"] = {"database": self.database.to_dict()}
        body["memory"] = {
            "used": self.memory.used,
            "total": self.memory.total,
            "percentage": self.memory.percentage,
        }
        return body


def determine_overall_status(statuses: Sequence[DependencyStatus]) -> OverallStatus:
    """Derive the overall status from dependency statuses.

    All disconnected is unhealthy, some disconnected is degraded.
    """
    disconnected = sum(1 for status in statuses if status == DISCONNECTED)
    if disconnected == len(statuses):
        return "unhealthy"
    if disconnected > 0:
        return "degraded"
    return "healthy"


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HealthService:
    """Builds liveness and readiness reports.

    Args:
        database: Engine to ping, or None when no database is configured.
        version: Version string reported by the probes.
        process: Process to report on; the current one by default.
    """

    def __init__(
        self,
        database: Engine | None,
        version: str,
        process: psutil.Process | None = None,
    ) -> None:
        self._database = database
        self._version = version
        self._process = process or psutil.Process()

    def get_health_status(self) -> HealthStatus:
        """Return basic liveness; performs no dependency checks."""
        return HealthStatus(
            status="healthy",
            timestamp=_utc_timestamp(),
            uptime=max(0.0, time.time() - self._process.create_time()),
            version=self._version,
        )

    def get_detailed_health(self) -> DetailedHealthStatus:
        """Return readiness including database reachability and memory."""
        basic = self.get_health_status()
        database = self.check_database()
        return DetailedHealthStatus(
            status=determine_overall_status([database.status]),
            timestamp=basic.timestamp,
            uptime=basic.uptime,
            version=basic.version,
            database=database,
            memory=self.get_memory_usage(),
        )

    def check_database(self) -> DependencyHealth:
        """Ping the database and measure the round trip."""
        if self._database is None:
            logger.error("Database health check failed: no database configured")
            return DependencyHealth(DISCONNECTED)
        try:
            started = time.perf_counter()
            ping_database(self._database)
            latency = round((time.perf_counter() - started) * 1000)
        except SQLAlchemyError as exc:
            logger.error("Database health check failed: %s", exc)
            return DependencyHealth(DISCONNECTED)
        return DependencyHealth(CONNECTED, latency)

    def get_memory_usage(self) -> MemoryUsage:
        """Return resident memory of the process against system memory.

        The interpreter has no bounded heap, so ``used`` is the process RSS,
        ``total`` is physical system memory, and ``percentage`` is the share
        of system memory the process holds.
        """
        used = self._process.memory_info().rss
        total = psutil.virtual_memory().total
        percentage = (used * 200 + total) // (2 * total) if total else 0
        return MemoryUsage(used=used, total=total, percentage=percentage)
