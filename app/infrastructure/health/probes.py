"""
Adapter: dependency probes.

Implements the DependencyProbe port for the database and Redis.
Containment (exceptions -> healthy=False, latency -1) is inherited
from DependencyProbe.run().
"""

from typing import Optional

import redis

from app.domain.health.entities import ProbeResult
from app.domain.health.ports import DependencyProbe
from app.domain.storage.ports import StorageConnection

DATABASE_PROBE_NAME = "database"
REDIS_PROBE_NAME = "redis"


class DatabaseProbe(DependencyProbe):
    """Delegates to StorageConnection.is_healthy(); latency is its round trip."""

    name = DATABASE_PROBE_NAME
    failure_detail = "Database round trip failed"

    def __init__(self, storage: StorageConnection) -> None:
        self._storage = storage

    def check(self) -> bool:
        return self._storage.is_healthy()


class RedisProbe(DependencyProbe):
    """PINGs Redis.

    With no client wired the probe still answers, deterministically, so
    the ``redis`` key never disappears from the health views.
    """

    name = REDIS_PROBE_NAME
    failure_detail = "Redis PING failed"
    not_configured_detail = "Not configured"

    def __init__(self, client: Optional[redis.Redis]) -> None:
        self._client = client

    def check(self) -> bool:
        return bool(self._client.ping())

    def run(self) -> ProbeResult:
        if self._client is None:
            return ProbeResult(
                name=self.name,
                healthy=True,
                latency_millis=0,
                detail=self.not_configured_detail,
            )
        return super().run()
