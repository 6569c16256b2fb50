"""
Port interfaces (ABCs) for the health bounded context.

DependencyProbe carries the containment contract shared by every probe:
a probe implementation only answers "is my dependency up?" in check(),
and run() turns that answer, or any exception it raises, into a
well-formed ProbeResult.
"""

import logging
import time
from abc import ABC, abstractmethod

from app.domain.health.entities import MemoryStats, ProbeResult

logger = logging.getLogger(__name__)


class DependencyProbe(ABC):
    """Port for a named dependency check.

    Contract of run():
        - latency is wall-clock time from invocation to completion, in ms;
        - check() returning False yields healthy=False, latency_millis=-1;
        - any Exception raised by check() yields the same failure result
          and is never propagated;
        - no state is kept between calls, so concurrent calls are safe.

    Subclasses set ``name`` and implement check().
    """

    name: str = "dependency"
    success_detail: str = "Connected successfully"
    failure_detail: str = "Check failed"

    @abstractmethod
    def check(self) -> bool:
        """Perform the dependency round trip. May raise."""
        raise NotImplementedError

    def run(self) -> ProbeResult:
        """Execute check() and convert its outcome into a ProbeResult."""
        started = time.perf_counter()
        try:
            healthy = self.check()
        except Exception as exc:
            logger.warning("Probe '%s' raised %s: %s", self.name, type(exc).__name__, exc)
            return ProbeResult.failed(self.name, f"{type(exc).__name__}: {exc}")

        if not healthy:
            logger.warning("Probe '%s' reported unhealthy.", self.name)
            return ProbeResult.failed(self.name, self.failure_detail)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return ProbeResult(
            name=self.name,
            healthy=True,
            latency_millis=elapsed_ms,
            detail=self.success_detail,
        )


class ProcessMetricsPort(ABC):
    """Port for process telemetry shown in the deep health view."""

    @abstractmethod
    def uptime_seconds(self) -> int:
        """Whole seconds since the service started."""
        raise NotImplementedError

    @abstractmethod
    def memory(self) -> MemoryStats:
        """Current memory usage of the process."""
        raise NotImplementedError
