"""
Dependency wiring for the health bounded context.

build_health_components() is the composition root: it constructs the
storage manager, Redis client, probe set and use cases once per
application. The FastAPI dependency functions below hand the use cases
stored on ``app.state`` to the routes. No ambient global state.
"""

from dataclasses import dataclass
from typing import Optional, Union

import redis
from fastapi import Request

from app.application.health.check_health import CheckHealthUseCase
from app.application.health.check_liveness import CheckLivenessUseCase
from app.application.health.check_readiness import CheckReadinessUseCase
from app.application.health.probe_set import ProbeSet
from app.application.storage.describe_database import DescribeDatabaseUseCase
from app.core.config import Settings
from app.domain.health.ports import ProcessMetricsPort
from app.domain.storage.ports import StorageConnection
from app.infrastructure.cache.redis_client import close_redis_client, create_redis_client
from app.infrastructure.health.probes import DatabaseProbe, RedisProbe
from app.infrastructure.health.process_metrics import PsutilProcessMetrics
from app.infrastructure.storage.connection_manager import TimescaleConnectionManager

_NOT_SET = object()


@dataclass
class HealthComponents:
    """Everything the health routes and the lifespan need, built once."""

    storage: StorageConnection
    redis_client: Optional[redis.Redis]
    probe_set: ProbeSet
    check_health: CheckHealthUseCase
    check_liveness: CheckLivenessUseCase
    check_readiness: CheckReadinessUseCase
    describe_database: DescribeDatabaseUseCase

    def close(self) -> None:
        """Release everything except storage, which the lifespan stops itself."""
        close_redis_client(self.redis_client)


def build_storage(settings: Settings) -> TimescaleConnectionManager:
    """Build the connection manager from application settings."""
    return TimescaleConnectionManager(
        settings.get_database_url(),
        hypertable_name=settings.hypertable_name,
        time_column=settings.hypertable_time_column,
        connect_timeout_seconds=settings.db_connect_timeout_seconds,
        statement_timeout_ms=settings.db_statement_timeout_ms,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout_seconds=settings.db_pool_timeout_seconds,
    )


def build_health_components(
    settings: Settings,
    storage: Optional[StorageConnection] = None,
    redis_client: Union[Optional[redis.Redis], object] = _NOT_SET,
    metrics: Optional[ProcessMetricsPort] = None,
) -> HealthComponents:
    """Wire probes and use cases around the given (or default) collaborators.

    Args:
        settings: Application settings.
        storage: Connection manager; built from settings when omitted.
        redis_client: Redis client, or None for "not configured"; built
            from settings when omitted.
        metrics: Process metrics adapter; psutil-backed when omitted.
    """
    storage = storage if storage is not None else build_storage(settings)
    if redis_client is _NOT_SET:
        redis_client = create_redis_client(settings)

    probe_set = ProbeSet(timeout_seconds=settings.probe_timeout_seconds)
    probe_set.register(DatabaseProbe(storage))
    probe_set.register(RedisProbe(redis_client))

    return HealthComponents(
        storage=storage,
        redis_client=redis_client,
        probe_set=probe_set,
        check_health=CheckHealthUseCase(
            probe_set=probe_set,
            metrics=metrics or PsutilProcessMetrics(),
            version=settings.version,
            environment=settings.environment,
        ),
        check_liveness=CheckLivenessUseCase(),
        check_readiness=CheckReadinessUseCase(probe_set=probe_set),
        describe_database=DescribeDatabaseUseCase(storage=storage),
    )


def _components(request: Request) -> HealthComponents:
    return request.app.state.health


def get_check_health_use_case(request: Request) -> CheckHealthUseCase:
    """Return the deep health use case wired at startup."""
    return _components(request).check_health


def get_check_liveness_use_case(request: Request) -> CheckLivenessUseCase:
    """Return the liveness use case wired at startup."""
    return _components(request).check_liveness


def get_check_readiness_use_case(request: Request) -> CheckReadinessUseCase:
    """Return the readiness use case wired at startup."""
    return _components(request).check_readiness


def get_describe_database_use_case(request: Request) -> DescribeDatabaseUseCase:
    """Return the database info use case wired at startup."""
    return _components(request).describe_database
