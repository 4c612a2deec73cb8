"""
Use case: List the boxes registered behind a public IP.

Input: PingBoxesQuery (public IP)
Output: list[BoxResult]
Side effects: Evicts every registration older than the TTL.
Failure cases: StorageFault from the record store.
"""

import logging

from app.application.boxes.dtos import BoxResult, PingBoxesQuery
from app.domain.boxes.entities import ByPublicIp
from app.domain.boxes.ports import RecordStore

logger = logging.getLogger(__name__)


class PingBoxesUseCase:
    """Orchestrates eviction followed by lookup.

    Eviction runs on every ping, so a listing never contains a box that
    stopped re-registering more than ttl_seconds ago.
    """

    def __init__(self, store: RecordStore, ttl_seconds: int) -> None:
        """Initialize the use case.

        Args:
            store: Record store holding the registrations.
            ttl_seconds: Maximum age of a registration, in seconds.
        """
        self._store = store
        self._ttl_seconds = ttl_seconds

    def execute(self, query: PingBoxesQuery) -> list[BoxResult]:
        """Run the ping use case.

        Args:
            query: The address to list registrations for.

        Returns:
            Live registrations for the address, in insertion order.
        """
        evicted = self._store.delete_older_than(self._store.now() - self._ttl_seconds)
        if evicted:
            logger.info("Evicted %d stale box registrations", evicted)

        records = self._store.find(ByPublicIp(query.public_ip))
        return [BoxResult.from_record(record) for record in records]
