"""
Health check router.

Provides the deep health, liveness and readiness endpoints.
All routes delegate to use cases. No business logic here.
A downstream dependency being down is reported with 503 and a body,
never with a 500.
"""

from fastapi import APIRouter, Depends, Response

from app.application.health.check_health import CheckHealthUseCase
from app.application.health.check_liveness import CheckLivenessUseCase
from app.application.health.check_readiness import CheckReadinessUseCase
from app.application.storage.describe_database import DescribeDatabaseUseCase
from app.domain.health.entities import HealthSnapshot, ReadinessSnapshot
from app.interfaces.health.dependencies import (
    get_check_health_use_case,
    get_check_liveness_use_case,
    get_check_readiness_use_case,
    get_describe_database_use_case,
)
from app.interfaces.health.schemas import (
    DatabaseInfoResponse,
    ErrorResponse,
    HealthCheckItem,
    HealthResponse,
    LivenessResponse,
    MemoryItem,
    ReadinessResponse,
)

HTTP_200 = 200
HTTP_503 = 503

router = APIRouter(prefix="/health", tags=["health"])


def _to_health_response(snapshot: HealthSnapshot) -> HealthResponse:
    return HealthResponse(
        status=snapshot.status.value,
        timestamp=snapshot.timestamp,
        uptime=snapshot.uptime_seconds,
        memory=MemoryItem(
            used=snapshot.memory.used,
            total=snapshot.memory.total,
            percentage=snapshot.memory.percentage,
        ),
        checks={
            name: HealthCheckItem(
                status=result.status.value,
                response_time=result.latency_millis,
                details=result.detail,
            )
            for name, result in snapshot.checks.items()
        },
        version=snapshot.version,
        environment=snapshot.environment,
    )


def _to_readiness_response(snapshot: ReadinessSnapshot) -> ReadinessResponse:
    return ReadinessResponse(
        status=snapshot.status.value,
        timestamp=snapshot.timestamp,
        dependencies=dict(snapshot.dependencies),
    )


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Checks database and Redis connectivity and reports memory usage "
        "and uptime. Returns 503 when any dependency is down."
    ),
    responses={HTTP_503: {"model": HealthResponse, "description": "A dependency is down"}},
)
def health_check(
    response: Response,
    use_case: CheckHealthUseCase = Depends(get_check_health_use_case),
) -> HealthResponse:
    """Return deep health status with per-dependency detail."""
    snapshot = use_case.execute()
    response.status_code = HTTP_200 if snapshot.is_ok else HTTP_503
    return _to_health_response(snapshot)


@router.get(
    "/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
    description="Process-alive signal. Never depends on external state.",
)
def liveness(
    use_case: CheckLivenessUseCase = Depends(get_check_liveness_use_case),
) -> LivenessResponse:
    """Return ok while the process can answer."""
    snapshot = use_case.execute()
    return LivenessResponse(status=snapshot.status.value, timestamp=snapshot.timestamp)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Whether this instance can accept traffic. Returns 503 when not ready.",
    responses={HTTP_503: {"model": ReadinessResponse, "description": "Not ready"}},
)
def readiness(
    response: Response,
    use_case: CheckReadinessUseCase = Depends(get_check_readiness_use_case),
) -> ReadinessResponse:
    """Return per-dependency readiness."""
    snapshot = use_case.execute()
    response.status_code = HTTP_200 if snapshot.is_ready else HTTP_503
    return _to_readiness_response(snapshot)


@router.get(
    "/database",
    response_model=DatabaseInfoResponse,
    summary="Database info",
    description="Backend version and TimescaleDB version, when installed.",
    responses={HTTP_503: {"model": ErrorResponse, "description": "Database unavailable"}},
)
def database_info(
    use_case: DescribeDatabaseUseCase = Depends(get_describe_database_use_case),
) -> DatabaseInfoResponse:
    """Return database version information."""
    info = use_case.execute()
    return DatabaseInfoResponse(
        version=info.version, timescale_version=info.timescale_version
    )
