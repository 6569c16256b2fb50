"""
Adapter: TimescaleDB connection manager.

Implements the StorageConnection port.
Owns the single pooled SQLAlchemy engine for the process: opens it on
start(), re-asserts the TimescaleDB artifacts (extension, hypertable) on
every startup, and disposes it exactly once on stop().

Failure policy:
    - connect failure: fatal, raised as StorageConnectionError
    - bootstrap step failure: warning, step reported as SKIPPED
    - probe failure: is_healthy() returns False
    - dispose failure: logged and swallowed
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from app.domain.storage.entities import (
    BootstrapOutcome,
    BootstrapReport,
    BootstrapStep,
    BootstrapStepResult,
    ConnectionState,
    DatabaseInfo,
)
from app.domain.storage.errors import (
    StorageConnectionError,
    StorageNotConnectedError,
    StorageQueryError,
)
from app.domain.storage.ports import StorageConnection

logger = logging.getLogger(__name__)

PING_SQL = "SELECT 1"
VERSION_SQL = "SELECT version()"
EXTENSION_VERSION_SQL = (
    "SELECT extversion FROM pg_extension WHERE extname = 'timescaledb'"
)
ENABLE_EXTENSION_SQL = "CREATE EXTENSION IF NOT EXISTS timescaledb CASCADE"
HYPERTABLE_EXISTS_SQL = (
    "SELECT 1 FROM timescaledb_information.hypertables "
    "WHERE hypertable_name = :table"
)
CREATE_HYPERTABLE_SQL = (
    "SELECT create_hypertable(CAST(:table AS regclass), CAST(:column AS name), "
    "if_not_exists => TRUE)"
)

POOL_RECYCLE_SECONDS = 1800


class TimescaleConnectionManager(StorageConnection):
    """Lifecycle owner of the primary PostgreSQL/TimescaleDB connection pool.

    The engine is a QueuePool, so health round trips and application
    queries check out connections side by side without exclusive locks.

    Usage:
        manager = TimescaleConnectionManager(url)
        manager.start()          # connect + bootstrap, raises if unreachable
        manager.is_healthy()     # SELECT 1, never raises
        manager.stop()           # dispose, never raises
    """

    def __init__(
        self,
        url: Union[str, URL],
        hypertable_name: str = "market_data",
        time_column: str = "time",
        connect_timeout_seconds: int = 10,
        statement_timeout_ms: int = 5000,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout_seconds: float = 5.0,
        engine_factory: Callable[..., Engine] = create_engine,
    ) -> None:
        self._url = make_url(url)
        self._hypertable_name = hypertable_name
        self._time_column = time_column
        self._connect_timeout_seconds = connect_timeout_seconds
        self._statement_timeout_ms = statement_timeout_ms
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_timeout_seconds = pool_timeout_seconds
        self._engine_factory = engine_factory

        self._engine: Optional[Engine] = None
        self._state = ConnectionState.DISCONNECTED
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def target(self) -> str:
        """Connection URL safe for logs."""
        return self._url.render_as_string(hide_password=True)

    @property
    def engine(self) -> Engine:
        """The live engine.

        Raises:
            StorageNotConnectedError: Before start() succeeded or after stop().
        """
        engine = self._engine
        if engine is None or self._state is not ConnectionState.CONNECTED:
            raise StorageNotConnectedError(self._state.value)
        return engine

    def _set_state(self, state: ConnectionState) -> None:
        with self._lock:
            previous, self._state = self._state, state
        logger.debug("Storage state %s -> %s", previous.value, state.value)

    def _engine_options(self) -> dict[str, Any]:
        """Pool and timeout options for the configured backend."""
        options: dict[str, Any] = {"pool_pre_ping": True}
        if self._url.get_backend_name() == "postgresql":
            options.update(
                pool_size=self._pool_size,
                max_overflow=self._max_overflow,
                pool_timeout=self._pool_timeout_seconds,
                pool_recycle=POOL_RECYCLE_SECONDS,
                connect_args={
                    "connect_timeout": self._connect_timeout_seconds,
                    "options": f"-c statement_timeout={self._statement_timeout_ms}",
                },
            )
        return options

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> BootstrapReport:
        """Open the pool, verify one round trip, then bootstrap.

        Returns:
            The bootstrap report.

        Raises:
            StorageConnectionError: If the store cannot be reached. Any
                partially created engine is disposed before raising.
        """
        if self._state is ConnectionState.CONNECTED:
            logger.warning("start() called on a connected manager; re-running bootstrap.")
            return self.bootstrap()

        self._set_state(ConnectionState.CONNECTING)
        engine: Optional[Engine] = None
        try:
            engine = self._engine_factory(self._url, **self._engine_options())
            with engine.connect() as conn:
                conn.execute(text(PING_SQL))
        except Exception as exc:
            if engine is not None:
                try:
                    engine.dispose()
                except Exception:
                    logger.exception("Error disposing engine after failed connect")
            self._set_state(ConnectionState.FAILED)
            logger.error("Failed to connect to database at %s", self.target)
            raise StorageConnectionError(self.target, str(exc)) from exc

        with self._lock:
            self._engine = engine
            self._state = ConnectionState.CONNECTED
        logger.info("Database connected at %s", self.target)

        return self.bootstrap()

    def stop(self) -> None:
        """Dispose the pool. Safe to call more than once."""
        with self._lock:
            engine, self._engine = self._engine, None
            if engine is not None:
                self._state = ConnectionState.DISCONNECTED

        if engine is None:
            return

        try:
            engine.dispose()
            logger.info("Database disconnected")
        except Exception:
            logger.exception("Error disconnecting from database")

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Check a connection out of the pool for application queries."""
        with self.engine.connect() as conn:
            yield conn

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def bootstrap(self) -> BootstrapReport:
        """Enable TimescaleDB, then create or verify the hypertable.

        Steps run strictly in order. A failed step is downgraded to a
        warning; the hypertable step is skipped when the extension is
        unavailable, since it depends on it.
        """
        engine = self.engine

        extension = self._enable_timescale(engine)
        if extension.outcome is BootstrapOutcome.SKIPPED:
            logger.warning(
                "Skipping hypertable '%s': TimescaleDB extension unavailable.",
                self._hypertable_name,
            )
            hypertable = BootstrapStepResult(
                step=BootstrapStep.HYPERTABLE_CREATE,
                outcome=BootstrapOutcome.SKIPPED,
                detail="TimescaleDB extension unavailable",
            )
        else:
            hypertable = self._create_hypertable(engine)

        return BootstrapReport(steps=[extension, hypertable])

    def _enable_timescale(self, engine: Engine) -> BootstrapStepResult:
        step = BootstrapStep.EXTENSION_ENABLE
        try:
            with engine.begin() as conn:
                installed = conn.execute(text(EXTENSION_VERSION_SQL)).scalar()
                if installed is not None:
                    logger.info("TimescaleDB extension already enabled (%s)", installed)
                    return BootstrapStepResult(step, BootstrapOutcome.ALREADY_PRESENT)
                conn.execute(text(ENABLE_EXTENSION_SQL))
        except Exception as exc:
            logger.warning(
                "TimescaleDB extension could not be enabled (may be unsupported "
                "on this backend): %s",
                exc,
            )
            return BootstrapStepResult(step, BootstrapOutcome.SKIPPED, str(exc))

        logger.info("TimescaleDB extension enabled")
        return BootstrapStepResult(step, BootstrapOutcome.APPLIED)

    def _create_hypertable(self, engine: Engine) -> BootstrapStepResult:
        step = BootstrapStep.HYPERTABLE_CREATE
        params = {"table": self._hypertable_name, "column": self._time_column}
        try:
            with engine.begin() as conn:
                exists = conn.execute(
                    text(HYPERTABLE_EXISTS_SQL), {"table": self._hypertable_name}
                ).first()
                if exists is not None:
                    logger.info("Hypertable '%s' verified", self._hypertable_name)
                    return BootstrapStepResult(step, BootstrapOutcome.ALREADY_PRESENT)
                conn.execute(text(CREATE_HYPERTABLE_SQL), params)
        except Exception as exc:
            logger.warning(
                "Hypertable '%s' may already exist or TimescaleDB is not available: %s",
                self._hypertable_name,
                exc,
            )
            return BootstrapStepResult(step, BootstrapOutcome.SKIPPED, str(exc))

        logger.info("Hypertable '%s' created on column '%s'", self._hypertable_name, self._time_column)
        return BootstrapStepResult(step, BootstrapOutcome.APPLIED)

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------

    def is_healthy(self) -> bool:
        """Round-trip ``SELECT 1`` on a pooled connection. Never raises."""
        engine = self._engine
        if engine is None or self._state is not ConnectionState.CONNECTED:
            return False
        try:
            with engine.connect() as conn:
                conn.execute(text(PING_SQL))
            return True
        except Exception as exc:
            logger.debug("Database round trip failed: %s", exc)
            return False

    def describe(self) -> DatabaseInfo:
        """Return the server version and the TimescaleDB version, if installed.

        Raises:
            StorageNotConnectedError: If the manager is not connected.
            StorageQueryError: If the server version cannot be read.
        """
        engine = self.engine
        try:
            with engine.connect() as conn:
                version = conn.execute(text(VERSION_SQL)).scalar()
        except SQLAlchemyError as exc:
            raise StorageQueryError(VERSION_SQL, str(exc)) from exc

        timescale_version: Optional[str] = None
        try:
            with engine.connect() as conn:
                timescale_version = conn.execute(text(EXTENSION_VERSION_SQL)).scalar()
        except SQLAlchemyError:
            logger.debug("TimescaleDB not available on this backend")

        return DatabaseInfo(version=str(version), timescale_version=timescale_version)
