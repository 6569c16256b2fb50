"""
Use case: Deep health check.

Input: None
Output: HealthSnapshot
Side effects: Runs every registered probe once.
Failure cases: None. Dependency failures are reported in the snapshot.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from app.application.health.probe_set import ProbeSet
from app.domain.health.entities import HealthSnapshot
from app.domain.health.ports import ProcessMetricsPort

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class CheckHealthUseCase:
    """Builds the deep health view from fresh probe results and process telemetry."""

    def __init__(
        self,
        probe_set: ProbeSet,
        metrics: ProcessMetricsPort,
        version: str,
        environment: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._probe_set = probe_set
        self._metrics = metrics
        self._version = version
        self._environment = environment
        self._clock = clock

    def execute(self) -> HealthSnapshot:
        """Run the deep health check.

        Returns:
            A snapshot whose status is ok iff every probe reported healthy.
        """
        results = self._probe_set.run_all()
        snapshot = HealthSnapshot.from_results(
            results,
            timestamp=self._clock(),
            uptime_seconds=self._metrics.uptime_seconds(),
            memory=self._metrics.memory(),
            version=self._version,
            environment=self._environment,
        )

        if not snapshot.is_ok:
            down = [name for name, result in snapshot.checks.items() if not result.healthy]
            logger.warning("Health check degraded; down: %s", ", ".join(down))

        return snapshot
