"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.health.errors import HealthDomainError
from app.domain.storage.errors import (
    StorageDomainError,
    StorageNotConnectedError,
    StorageQueryError,
)

logger = logging.getLogger(__name__)

HTTP_500 = 500
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(StorageNotConnectedError)
    async def handle_storage_not_connected(
        _request: Request, exc: StorageNotConnectedError
    ) -> JSONResponse:
        """Handle requests that need the database while it is not connected."""
        logger.warning("Storage not connected: %s", exc.state)
        return _error_response(HTTP_503, "Database unavailable")

    @app.exception_handler(StorageQueryError)
    async def handle_storage_query(
        _request: Request, exc: StorageQueryError
    ) -> JSONResponse:
        """Handle failed metadata queries."""
        logger.error("Storage query failed: %s", exc.reason)
        return _error_response(HTTP_503, "Database query failed")

    @app.exception_handler(StorageDomainError)
    async def handle_storage_domain(
        _request: Request, exc: StorageDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled storage domain errors."""
        logger.error("Unhandled storage domain error: %s", exc.message)
        return _error_response(HTTP_503, "Database unavailable")

    @app.exception_handler(HealthDomainError)
    async def handle_health_domain(
        _request: Request, exc: HealthDomainError
    ) -> JSONResponse:
        """Catch-all for health wiring errors."""
        logger.error("Unhandled health domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
