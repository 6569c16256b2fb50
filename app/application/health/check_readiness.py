"""
Use case: Readiness check.

Input: None
Output: ReadinessSnapshot
Side effects: Runs every registered probe once. Results are never shared
    with the deep health check; each call sees fresh dependency state.
Failure cases: None. Dependency failures are reported in the snapshot.
"""

import logging
from datetime import datetime
from typing import Callable

from app.application.health.check_health import utc_now
from app.application.health.probe_set import ProbeSet
from app.domain.health.entities import ReadinessSnapshot

logger = logging.getLogger(__name__)


class CheckReadinessUseCase:
    """Reduces fresh probe results to one boolean per dependency."""

    def __init__(
        self, probe_set: ProbeSet, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._probe_set = probe_set
        self._clock = clock

    def execute(self) -> ReadinessSnapshot:
        """Run the readiness check.

        Returns:
            A snapshot whose status is ready iff every dependency is up.
        """
        snapshot = ReadinessSnapshot.from_results(
            self._probe_set.run_all(), timestamp=self._clock()
        )
        if not snapshot.is_ready:
            logger.info("Not ready: %s", snapshot.dependencies)
        return snapshot
