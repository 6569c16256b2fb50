"""
Domain-specific errors for the storage bounded context.

Only connection establishment failures are fatal. Bootstrap conflicts and
probe failures are reported as data, never raised.
No framework imports allowed.
"""


class StorageDomainError(Exception):
    """Base error for all storage domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class StorageConnectionError(StorageDomainError):
    """Raised when the primary data store cannot be reached at startup."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Cannot connect to database at {target}: {reason}")
        self.target = target
        self.reason = reason


class StorageNotConnectedError(StorageDomainError):
    """Raised when a connection is requested before start() or after stop()."""

    def __init__(self, state: str) -> None:
        super().__init__(f"Storage is not connected (state: {state})")
        self.state = state


class StorageQueryError(StorageDomainError):
    """Raised when a metadata query against the store fails."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Query '{query}' failed: {reason}")
        self.query = query
        self.reason = reason
