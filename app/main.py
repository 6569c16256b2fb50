"""
Application entry point.

Creates the FastAPI application and wires together:
- Health routers (deep health, liveness, readiness, database info)
- Error handlers (centralized domain-to-HTTP mapping)
- Logging configuration
- Storage lifecycle (connect + TimescaleDB bootstrap on startup,
  release on shutdown)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings, get_settings
from app.domain.storage.entities import BootstrapReport
from app.domain.storage.errors import StorageDomainError
from app.domain.storage.ports import StorageConnection
from app.interfaces.health.dependencies import HealthComponents, build_health_components
from app.interfaces.health.router import router as health_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def _start_storage(storage: StorageConnection) -> BootstrapReport:
    """Connect and bootstrap, then log what the backend offers.

    Raises:
        StorageConnectionError: If the database cannot be reached.
    """
    report = storage.start()
    for step in report.steps:
        logger.info("Bootstrap %s: %s", step.step.value, step.outcome.value)

    try:
        info = storage.describe()
        logger.info(
            "Database: %s | TimescaleDB: %s",
            info.version,
            info.timescale_version or "not installed",
        )
    except StorageDomainError as exc:
        logger.warning("Could not read database version: %s", exc.message)

    return report


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: start storage before serving, release it on exit.

    A connection failure propagates and aborts startup. Everything
    acquired before the failure is released on the way out.
    """
    components: HealthComponents = app.state.health

    try:
        await run_in_threadpool(_start_storage, components.storage)
    except Exception:
        logger.error("Startup aborted: storage could not be started.")
        await run_in_threadpool(components.storage.stop)
        components.close()
        raise

    try:
        yield
    finally:
        await run_in_threadpool(components.storage.stop)
        components.close()


def create_app(
    settings: Optional[Settings] = None,
    components: Optional[HealthComponents] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers and error handlers, and builds the health
    components. This is the composition root of the application.

    Args:
        settings: Validated settings; loaded from the environment when omitted.
        components: Pre-built health components (tests inject fakes here).

    Returns:
        A fully configured FastAPI application instance.

    Raises:
        ConfigurationError: If the environment is invalid.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        sql_echo=settings.database_logging or settings.is_development,
    )

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.health = components or build_health_components(settings)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)

    return app


app = create_app()
