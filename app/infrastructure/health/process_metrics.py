"""
Adapter: process telemetry via psutil.

Implements the ProcessMetricsPort. Memory figures are megabytes rounded
to two decimals; ``percentage`` is the process share of system memory.
"""

import time

import psutil

from app.domain.health.entities import MemoryStats
from app.domain.health.ports import ProcessMetricsPort

BYTES_PER_MB = 1024 * 1024


class PsutilProcessMetrics(ProcessMetricsPort):
    """Reads RSS and system memory for the current process."""

    def __init__(self) -> None:
        self._process = psutil.Process()
        self._started = time.monotonic()

    def uptime_seconds(self) -> int:
        return int(time.monotonic() - self._started)

    def memory(self) -> MemoryStats:
        used = self._process.memory_info().rss
        total = psutil.virtual_memory().total
        return MemoryStats(
            used=round(used / BYTES_PER_MB, 2),
            total=round(total / BYTES_PER_MB, 2),
            percentage=round(used / total * 100, 2) if total else 0.0,
        )
