"""
Tests for the ProbeSet registry.

Covers registration, ordering, timeouts and concurrent execution.
"""

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.application.health.probe_set import ProbeSet
from app.domain.health.entities import ProbeResult
from app.domain.health.errors import DuplicateProbeError
from app.domain.health.ports import DependencyProbe
from tests.conftest import RaisingProbe, SlowProbe, StaticProbe


class ContractBreakingProbe(DependencyProbe):
    """Overrides run() and lets an exception escape."""

    name = "broken"

    def check(self) -> bool:
        return True

    def run(self) -> ProbeResult:
        raise RuntimeError("escaped")


@pytest.fixture
def probe_set() -> ProbeSet:
    return ProbeSet(timeout_seconds=0.5)


class TestRegistration:
    """Tests for register() and names."""

    def test_names_keep_registration_order(self, probe_set: ProbeSet) -> None:
        """Probes are listed in the order they were registered."""
        probe_set.register(StaticProbe("database"))
        probe_set.register(StaticProbe("redis"))
        assert probe_set.names == ["database", "redis"]

    def test_duplicate_name_rejected(self, probe_set: ProbeSet) -> None:
        """Registering the same name twice raises DuplicateProbeError."""
        probe_set.register(StaticProbe("database"))
        with pytest.raises(DuplicateProbeError) as exc_info:
            probe_set.register(StaticProbe("database"))
        assert exc_info.value.name == "database"


class TestRunAll:
    """Tests for run_all()."""

    def test_every_registered_name_is_reported(self, probe_set: ProbeSet) -> None:
        """Failing probes are reported, never omitted."""
        probe_set.register(StaticProbe("database"))
        probe_set.register(RaisingProbe("redis"))
        probe_set.register(StaticProbe("queue", healthy=False))

        results = probe_set.run_all()

        assert [r.name for r in results] == ["database", "redis", "queue"]
        assert [r.healthy for r in results] == [True, False, False]

    def test_slow_probe_times_out(self) -> None:
        """A probe exceeding the timeout yields the failure result."""
        probes = ProbeSet(timeout_seconds=0.1)
        probes.register(SlowProbe("database", delay=1.0))
        probes.register(StaticProbe("redis"))
        started = time.monotonic()
        results = {r.name: r for r in probes.run_all()}
        elapsed = time.monotonic() - started

        assert elapsed < 0.9
        assert results["database"].healthy is False
        assert results["database"].latency_millis == -1
        assert "Timed out" in results["database"].detail
        assert results["redis"].healthy is True

    def test_probes_run_concurrently(self) -> None:
        """Total time is bounded by the slowest probe, not the sum."""
        probes = ProbeSet(timeout_seconds=2.0)
        for name in ("a", "b", "c", "d"):
            probes.register(SlowProbe(name, delay=0.2))
        started = time.monotonic()
        results = probes.run_all()
        elapsed = time.monotonic() - started

        assert all(r.healthy for r in results)
        assert elapsed < 0.7

    def test_escaped_exception_is_contained(self, probe_set: ProbeSet) -> None:
        """Even a probe breaking its own contract cannot raise through run_all."""
        probe_set.register(ContractBreakingProbe())
        [result] = probe_set.run_all()
        assert result.name == "broken"
        assert result.healthy is False
        assert result.latency_millis == -1

    def test_concurrent_callers_get_independent_results(
        self, probe_set: ProbeSet
    ) -> None:
        """Parallel run_all() calls each receive a full result list."""
        probe = StaticProbe("database")
        probe_set.register(probe)

        with ThreadPoolExecutor(max_workers=4) as pool:
            batches = list(pool.map(lambda _: probe_set.run_all(), range(8)))

        assert all(len(batch) == 1 and batch[0].healthy for batch in batches)

    def test_hung_probe_does_not_starve_later_calls(self) -> None:
        """A probe still hanging from an earlier call cannot time out a healthy one."""
        probes = ProbeSet(timeout_seconds=0.3)
        probes.register(SlowProbe("database", delay=1.5))
        probes.register(StaticProbe("redis"))

        first = {r.name: r for r in probes.run_all()}
        second = {r.name: r for r in probes.run_all()}
        third = {r.name: r for r in probes.run_all()}

        for results in (first, second, third):
            assert results["database"].healthy is False
            assert results["redis"].healthy is True
            assert results["redis"].latency_millis >= 0

    def test_empty_set_returns_no_results(self, probe_set: ProbeSet) -> None:
        assert probe_set.run_all() == []
