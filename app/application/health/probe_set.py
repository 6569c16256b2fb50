"""
Registry of named dependency probes.

Each run_all() call fans its probes out on a thread pool of its own, one
worker per probe, so a probe still hanging from an earlier call never
delays the probes of a later one. Every registered name appears in every
result list, so the views built from it never drop a key callers already
depend on. A probe that has not answered by the deadline yields the
standard failure result; its thread is left to finish on its own.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

from app.domain.health.entities import ProbeResult
from app.domain.health.errors import DuplicateProbeError
from app.domain.health.ports import DependencyProbe

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_SECONDS = 3.0


class ProbeSet:
    """Ordered, named set of dependency probes executed uniformly."""

    def __init__(self, timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds
        self._probes: dict[str, DependencyProbe] = {}

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @property
    def names(self) -> list[str]:
        """Registered probe names, in registration order."""
        return list(self._probes)

    def register(self, probe: DependencyProbe) -> None:
        """Add a probe under its ``name``.

        Raises:
            DuplicateProbeError: If the name is already taken.
        """
        if probe.name in self._probes:
            raise DuplicateProbeError(probe.name)
        self._probes[probe.name] = probe
        logger.debug("Registered health probe '%s'.", probe.name)

    def run_all(self) -> list[ProbeResult]:
        """Run every probe once and return fresh results in registration order."""
        probes = list(self._probes.values())
        if not probes:
            return []

        executor = ThreadPoolExecutor(
            max_workers=len(probes), thread_name_prefix="health-probe"
        )
        try:
            submitted = [(probe, executor.submit(probe.run)) for probe in probes]
            deadline = time.monotonic() + self._timeout_seconds
            return [
                self._collect(probe, future, deadline) for probe, future in submitted
            ]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _collect(self, probe: DependencyProbe, future, deadline: float) -> ProbeResult:
        remaining = max(0.0, deadline - time.monotonic())
        try:
            return future.result(timeout=remaining)
        except FuturesTimeoutError:
            future.cancel()
            logger.warning(
                "Probe '%s' timed out after %.1fs.", probe.name, self._timeout_seconds
            )
            return ProbeResult.failed(
                probe.name, f"Timed out after {self._timeout_seconds:.1f}s"
            )
        except Exception as exc:
            logger.error("Probe '%s' escaped its contract: %s", probe.name, exc)
            return ProbeResult.failed(probe.name, f"{type(exc).__name__}: {exc}")
