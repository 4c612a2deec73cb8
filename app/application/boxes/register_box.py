"""
Use case: Register a box, or refresh an existing registration.

Input: RegisterBoxCommand (public IP, message, tunnel flag)
Output: BoxResult
Side effects: Updates the matching row, or inserts one if none matched.
Failure cases: StorageFault from the record store.
"""

import logging

from app.application.boxes.dtos import BoxResult, RegisterBoxCommand
from app.domain.boxes.entities import Record
from app.domain.boxes.ports import RecordStore

logger = logging.getLogger(__name__)


class RegisterBoxUseCase:
    """Orchestrates box registration.

    Re-registering the same (public_ip, message) pair refreshes its
    timestamp and tunnel flag instead of adding a row. The update and the
    fallback insert are separate store calls, so two first-time
    registrations racing for the same pair can both insert. The store
    permits duplicates; later refreshes update every copy, and all of
    them age out together.
    """

    def __init__(self, store: RecordStore) -> None:
        """Initialize the use case.

        Args:
            store: Record store holding the registrations.
        """
        self._store = store

    def execute(self, command: RegisterBoxCommand) -> BoxResult:
        """Run the register use case.

        Args:
            command: The registration to record.

        Returns:
            The registration as persisted.
        """
        record = Record(
            public_ip=command.public_ip,
            message=command.message,
            tunnel_configured=command.tunnel_configured,
            timestamp=self._store.now(),
        )

        if self._store.update(record) == 0:
            self._store.add(record)
            logger.info("Registered new box: message=%s", record.message)
        else:
            logger.debug("Refreshed box registration: message=%s", record.message)

        return BoxResult.from_record(record)
