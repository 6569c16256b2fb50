"""
Port interfaces (ABCs) for the storage bounded context.

The health context depends on this contract, never on the SQLAlchemy
adapter that implements it.
"""

from abc import ABC, abstractmethod

from app.domain.storage.entities import BootstrapReport, ConnectionState, DatabaseInfo


class StorageConnection(ABC):
    """Port owning the lifecycle of the primary data store connection."""

    @property
    @abstractmethod
    def state(self) -> ConnectionState:
        """Current lifecycle state."""
        raise NotImplementedError

    @abstractmethod
    def start(self) -> BootstrapReport:
        """Connect, then run the idempotent bootstrap.

        Raises:
            StorageConnectionError: If the connection cannot be established.
        """
        raise NotImplementedError

    @abstractmethod
    def bootstrap(self) -> BootstrapReport:
        """Enable the time-series extension, then create or verify the hypertable.

        Never raises for conflicts or a missing extension.
        """
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Release the connection. Errors are logged, never raised."""
        raise NotImplementedError

    @abstractmethod
    def is_healthy(self) -> bool:
        """Run a side-effect free round trip. Never raises."""
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> DatabaseInfo:
        """Return the backend version and TimescaleDB version, if installed."""
        raise NotImplementedError

    def __enter__(self) -> "StorageConnection":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
