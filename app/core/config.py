"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
Invalid or missing required values fail process startup with a
ConfigurationError; they never surface later as a health failure.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

POSTGRES_DRIVER = "postgresql+psycopg2"

Environment = Literal["development", "staging", "production", "test"]


class ConfigurationError(Exception):
    """Raised when the environment does not describe a valid configuration."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Environment validation failed: {message}")


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string, reported by /health.
        environment: Deployment environment, reported by /health.
        port: HTTP port used by ``python -m app``.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: Full SQLAlchemy URL. Built from postgres_* when unset.
        database_logging: Echo SQL statements through the sqlalchemy logger.
        redis_enabled: Wire a Redis client for the ``redis`` probe.
        probe_timeout_seconds: Upper bound for one run of all health probes.
        hypertable_name: Table converted to a TimescaleDB hypertable at startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"), env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Geass Trading Platform"
    version: str = "1.0.0"
    environment: Environment = "development"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"

    # Database connection (TimescaleDB)
    postgres_host: str = "localhost"
    postgres_port: int = Field(default=5432, ge=1, le=65535)
    postgres_db: str = Field(..., min_length=1)
    postgres_user: str = Field(..., min_length=1)
    postgres_password: str = Field(..., min_length=1)
    database_url: Optional[str] = None
    database_logging: bool = False

    db_connect_timeout_seconds: int = Field(default=10, ge=1)
    db_statement_timeout_ms: int = Field(default=5000, ge=1)
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)
    db_pool_timeout_seconds: float = Field(default=5.0, gt=0)

    hypertable_name: str = Field(default="market_data", pattern=r"^[a-z_][a-z0-9_]*$")
    hypertable_time_column: str = Field(default="time", pattern=r"^[a-z_][a-z0-9_]*$")

    # Redis connection
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = Field(default=6379, ge=1, le=65535)
    redis_password: Optional[str] = None
    redis_connect_timeout_seconds: float = Field(default=10.0, gt=0)

    # Health probes
    probe_timeout_seconds: float = Field(default=3.0, gt=0)

    @field_validator("database_url")
    @classmethod
    def _validate_database_url(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            make_url(value)
        except ArgumentError as exc:
            raise ValueError(f"not a valid database URL ({exc})") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def get_database_url(self) -> URL:
        """Return the effective database URL.

        Priority:
        1. Explicit ``DATABASE_URL``. A bare ``postgresql://`` scheme is
           pinned to the psycopg2 driver.
        2. Built from postgres_* values (Docker Compose or local setups).
        """
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername == "postgresql":
                url = url.set(drivername=POSTGRES_DRIVER)
            return url
        return URL.create(
            POSTGRES_DRIVER,
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )


def _format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as ``field: message`` pairs."""
    return ", ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings once per process.

    Raises:
        ConfigurationError: If required values are missing or malformed.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_error(exc)) from exc
