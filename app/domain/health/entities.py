"""
Domain entities for the health bounded context.

Snapshots are computed on demand and never persisted. Overall statuses are
derived from ProbeResult.healthy in exactly one place, so the deep health
and readiness views cannot disagree about a dependency.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

FAILED_LATENCY_MILLIS = -1


class ProbeStatus(Enum):
    """Per-dependency status as shown in the deep health view."""

    UP = "up"
    DOWN = "down"


class OverallStatus(Enum):
    """Aggregate status of the deep health view."""

    OK = "ok"
    ERROR = "error"


class ReadinessStatus(Enum):
    """Aggregate status of the readiness view."""

    READY = "ready"
    NOT_READY = "not-ready"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single dependency check.

    Attributes:
        name: Dependency name, used as the key in every snapshot.
        healthy: Whether the dependency answered successfully.
        latency_millis: Round-trip time of the check, -1 on failure.
        detail: Optional human-readable detail.
    """

    name: str
    healthy: bool
    latency_millis: int
    detail: Optional[str] = None

    @classmethod
    def failed(cls, name: str, detail: Optional[str] = None) -> "ProbeResult":
        """Build the result every failing or timed-out probe must return."""
        return cls(
            name=name,
            healthy=False,
            latency_millis=FAILED_LATENCY_MILLIS,
            detail=detail,
        )

    @property
    def status(self) -> ProbeStatus:
        return ProbeStatus.UP if self.healthy else ProbeStatus.DOWN


@dataclass(frozen=True)
class MemoryStats:
    """Process memory usage in megabytes, plus share of system memory (%)."""

    used: float
    total: float
    percentage: float


@dataclass(frozen=True)
class HealthSnapshot:
    """Deep health view: dependency detail plus process telemetry."""

    status: OverallStatus
    timestamp: datetime
    uptime_seconds: int
    memory: MemoryStats
    checks: dict[str, ProbeResult]
    version: str
    environment: str

    @classmethod
    def from_results(
        cls,
        results: Iterable[ProbeResult],
        timestamp: datetime,
        uptime_seconds: int,
        memory: MemoryStats,
        version: str,
        environment: str,
    ) -> "HealthSnapshot":
        """Build a snapshot whose status is ok iff every check is healthy."""
        checks = {result.name: result for result in results}
        all_healthy = all(result.healthy for result in checks.values())
        return cls(
            status=OverallStatus.OK if all_healthy else OverallStatus.ERROR,
            timestamp=timestamp,
            uptime_seconds=uptime_seconds,
            memory=memory,
            checks=checks,
            version=version,
            environment=environment,
        )

    @property
    def is_ok(self) -> bool:
        return self.status is OverallStatus.OK


@dataclass(frozen=True)
class ReadinessSnapshot:
    """Readiness view: one boolean per dependency."""

    status: ReadinessStatus
    timestamp: datetime
    dependencies: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_results(
        cls, results: Iterable[ProbeResult], timestamp: datetime
    ) -> "ReadinessSnapshot":
        """Build a snapshot whose status is ready iff every dependency is up."""
        dependencies = {result.name: result.healthy for result in results}
        all_ready = all(dependencies.values())
        return cls(
            status=ReadinessStatus.READY if all_ready else ReadinessStatus.NOT_READY,
            timestamp=timestamp,
            dependencies=dependencies,
        )

    @property
    def is_ready(self) -> bool:
        return self.status is ReadinessStatus.READY


@dataclass(frozen=True)
class LivenessSnapshot:
    """Liveness view. Always ok while the process can answer."""

    timestamp: datetime
    status: OverallStatus = OverallStatus.OK
