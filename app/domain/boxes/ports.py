"""
Port interfaces (ABCs) for the boxes bounded context.

Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

import time
from abc import ABC, abstractmethod

from app.domain.boxes.entities import FindFilter, Record


class RecordStore(ABC):
    """Port for persisting and looking up box records.

    Every call reads or writes persisted state directly; implementations
    keep no cache. Absence is an empty list or a zero row count, never
    an error. Failures raise StorageFault.
    """

    @staticmethod
    def now() -> int:
        """Return the current wall-clock time in seconds since the epoch."""
        return int(time.time())

    @abstractmethod
    def find(self, find_filter: FindFilter) -> list[Record]:
        """Return every record matching the filter, in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def add(self, record: Record) -> int:
        """Insert a record without checking for duplicates.

        Returns:
            Number of rows written.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, record: Record) -> int:
        """Overwrite rows matching the record's (public_ip, message).

        Returns:
            Number of rows written. Zero means nothing matched.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_older_than(self, timestamp: int) -> int:
        """Remove rows whose timestamp is strictly less than the threshold.

        Returns:
            Number of rows removed.
        """
        raise NotImplementedError
