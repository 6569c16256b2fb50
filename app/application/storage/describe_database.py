"""
Use case: Describe the primary data store.

Input: None
Output: DatabaseInfo
Side effects: None. Read-only metadata queries.
Failure cases: StorageNotConnectedError, StorageQueryError.
"""

import logging

from app.domain.storage.entities import DatabaseInfo
from app.domain.storage.ports import StorageConnection

logger = logging.getLogger(__name__)


class DescribeDatabaseUseCase:
    """Reports the backend version and TimescaleDB version, if installed."""

    def __init__(self, storage: StorageConnection) -> None:
        self._storage = storage

    def execute(self) -> DatabaseInfo:
        info = self._storage.describe()
        logger.debug(
            "Database %s, TimescaleDB %s",
            info.version,
            info.timescale_version or "not installed",
        )
        return info
