"""
Pydantic schemas for the health API responses.

These schemas define the wire contract polled by orchestrators and
monitoring. Field names on the wire are camelCase where the contract
requires it (``responseTime``).
No business logic belongs here.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthCheckItem(BaseModel):
    """Health status of a single dependency."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["up", "down"] = Field(..., description="Health status of the dependency")
    response_time: int = Field(
        ...,
        alias="responseTime",
        description="Response time in milliseconds, -1 when the check failed",
    )
    details: Optional[str] = Field(
        default=None, description="Additional details about the health check"
    )


class MemoryItem(BaseModel):
    """Process memory usage in megabytes."""

    used: float
    total: float
    percentage: float


class HealthResponse(BaseModel):
    """Response schema for the deep health endpoint."""

    status: Literal["ok", "error"]
    timestamp: datetime
    uptime: int = Field(..., description="Application uptime in seconds")
    memory: MemoryItem
    checks: dict[str, HealthCheckItem]
    version: str
    environment: str


class LivenessResponse(BaseModel):
    """Response schema for the liveness probe."""

    status: Literal["ok"]
    timestamp: datetime


class ReadinessResponse(BaseModel):
    """Response schema for the readiness probe."""

    status: Literal["ready", "not-ready"]
    timestamp: datetime
    dependencies: dict[str, bool]


class DatabaseInfoResponse(BaseModel):
    """Response schema for the database info endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    version: str
    timescale_version: Optional[str] = Field(default=None, alias="timescaleVersion")


class ErrorResponse(BaseModel):
    """Body of every error response produced by the error handlers."""

    error: str
    detail: Optional[str] = None
