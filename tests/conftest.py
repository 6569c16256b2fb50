"""
Shared fixtures and fakes for the test suite.

Required settings are provided through the environment before any
``app`` module is imported, so ``app.main`` can build its module-level
application without a .env file. No test needs a live PostgreSQL or
Redis instance.
"""

import os
import time
from datetime import datetime, timezone

import pytest

os.environ.setdefault("POSTGRES_DB", "geass_test")
os.environ.setdefault("POSTGRES_USER", "geass")
os.environ.setdefault("POSTGRES_PASSWORD", "geass-test-password")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.config import Settings  # noqa: E402
from app.domain.health.entities import MemoryStats  # noqa: E402
from app.domain.health.ports import DependencyProbe, ProcessMetricsPort  # noqa: E402
from app.domain.storage.entities import (  # noqa: E402
    BootstrapReport,
    ConnectionState,
    DatabaseInfo,
)
from app.domain.storage.errors import StorageConnectionError  # noqa: E402
from app.domain.storage.ports import StorageConnection  # noqa: E402

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeStorage(StorageConnection):
    """In-memory StorageConnection with a switchable health flag."""

    def __init__(self, healthy: bool = True, fail_on_start: bool = False) -> None:
        self.healthy = healthy
        self.fail_on_start = fail_on_start
        self.info = DatabaseInfo(version="PostgreSQL 16.1", timescale_version="2.13.0")
        self.describe_error: Exception | None = None
        self.start_calls = 0
        self.stop_calls = 0
        self._state = ConnectionState.DISCONNECTED

    @property
    def state(self) -> ConnectionState:
        return self._state

    def start(self) -> BootstrapReport:
        self.start_calls += 1
        if self.fail_on_start:
            self._state = ConnectionState.FAILED
            raise StorageConnectionError("fake://db", "connection refused")
        self._state = ConnectionState.CONNECTED
        return self.bootstrap()

    def bootstrap(self) -> BootstrapReport:
        return BootstrapReport()

    def stop(self) -> None:
        self.stop_calls += 1
        self._state = ConnectionState.DISCONNECTED

    def is_healthy(self) -> bool:
        return self.healthy

    def describe(self) -> DatabaseInfo:
        if self.describe_error is not None:
            raise self.describe_error
        return self.info


class StaticProbe(DependencyProbe):
    """Probe that answers a fixed value and counts its invocations."""

    def __init__(self, name: str, healthy: bool = True) -> None:
        self.name = name
        self.healthy = healthy
        self.calls = 0

    def check(self) -> bool:
        self.calls += 1
        return self.healthy


class RaisingProbe(DependencyProbe):
    """Probe whose underlying check always raises."""

    def __init__(self, name: str, error: Exception | None = None) -> None:
        self.name = name
        self.error = error or ConnectionError("connection refused")

    def check(self) -> bool:
        raise self.error


class SlowProbe(DependencyProbe):
    """Probe that takes ``delay`` seconds to answer healthy."""

    def __init__(self, name: str, delay: float) -> None:
        self.name = name
        self.delay = delay

    def check(self) -> bool:
        time.sleep(self.delay)
        return True


class FixedMetrics(ProcessMetricsPort):
    """Deterministic process telemetry."""

    def uptime_seconds(self) -> int:
        return 42

    def memory(self) -> MemoryStats:
        return MemoryStats(used=45.6, total=512.0, percentage=8.91)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Valid settings independent of the host environment."""
    return Settings(
        _env_file=None,
        postgres_db="geass_test",
        postgres_user="geass",
        postgres_password="geass-test-password",
        environment="test",
        redis_enabled=False,
        probe_timeout_seconds=1.0,
        log_level="WARNING",
    )


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def fake_storage() -> FakeStorage:
    """A healthy FakeStorage."""
    return FakeStorage()
