"""
Adapter: Box record store.

Implements the RecordStore port on top of SQLAlchemy Core.
Reads/writes the boxes table. SQLite is the default engine; any
SQLAlchemy URL with the same schema works.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    Table,
    Text,
    and_,
    create_engine,
    delete,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateTable

from app.domain.boxes.entities import ByPublicIp, FindFilter, Record
from app.domain.boxes.errors import MaintenanceDisabledError, StorageFault
from app.domain.boxes.ports import RecordStore

logger = logging.getLogger(__name__)

metadata = MetaData()

boxes = Table(
    "boxes",
    metadata,
    Column("public_ip", Text, nullable=False),
    Column("message", Text),
    Column("tunnel_configured", Integer),
    Column("timestamp", Integer),
)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy failure as a StorageFault."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageFault(operation, exc) from exc


def _message_clause(message: Optional[str]):
    if message is None:
        return boxes.c.message.is_(None)
    return boxes.c.message == message


def _row_to_record(row) -> Record:
    return Record(
        public_ip=row.public_ip,
        message=row.message,
        tunnel_configured=bool(row.tunnel_configured),
        timestamp=row.timestamp,
    )


def _build_engine(database_url: str) -> Engine:
    """Create an engine, preparing the SQLite file location if needed."""
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Sync routes run in a threadpool.
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


class SqlRecordStore(RecordStore):
    """SQLAlchemy adapter for the boxes table.

    Owns its engine for its whole lifetime. Use it as a context manager,
    or call close(), to release the underlying connections.
    """

    def __init__(self, database_url: str, *, allow_clear: bool = False) -> None:
        """Open the store and create the boxes table if it is missing.

        Args:
            database_url: SQLAlchemy URL of the backing store.
            allow_clear: Enable the maintenance-only clear() operation.

        Raises:
            StorageFault: If the store cannot be opened or bootstrapped.
        """
        self._allow_clear = allow_clear
        try:
            self._engine = _build_engine(database_url)
        except (OSError, SQLAlchemyError) as exc:
            raise StorageFault("open", exc) from exc
        try:
            with self._engine.begin() as conn:
                conn.execute(CreateTable(boxes, if_not_exists=True))
        except SQLAlchemyError as exc:
            self._engine.dispose()
            raise StorageFault("create table", exc) from exc
        logger.debug("Record store ready: url=%s", self._engine.url)

    def __enter__(self) -> "SqlRecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release every pooled connection held by the engine."""
        self._engine.dispose()

    def find(self, find_filter: FindFilter) -> list[Record]:
        """Return records matching the filter, in natural scan order."""
        if isinstance(find_filter, ByPublicIp):
            condition = boxes.c.public_ip == find_filter.public_ip
        else:
            condition = and_(
                boxes.c.public_ip == find_filter.public_ip,
                _message_clause(find_filter.message),
            )
        query = select(
            boxes.c.public_ip,
            boxes.c.message,
            boxes.c.tunnel_configured,
            boxes.c.timestamp,
        ).where(condition)

        with _storage_errors("find"):
            with self._engine.connect() as conn:
                rows = conn.execute(query).fetchall()

        return [_row_to_record(row) for row in rows]

    def add(self, record: Record) -> int:
        """Insert a record. Existing matching rows are left untouched."""
        statement = insert(boxes).values(
            public_ip=record.public_ip,
            message=record.message,
            tunnel_configured=int(record.tunnel_configured),
            timestamp=record.timestamp,
        )
        with _storage_errors("add"):
            with self._engine.begin() as conn:
                return conn.execute(statement).rowcount

    def update(self, record: Record) -> int:
        """Overwrite rows whose (public_ip, message) equal the record's own."""
        statement = (
            update(boxes)
            .where(
                and_(
                    boxes.c.public_ip == record.public_ip,
                    _message_clause(record.message),
                )
            )
            .values(
                public_ip=record.public_ip,
                message=record.message,
                tunnel_configured=int(record.tunnel_configured),
                timestamp=record.timestamp,
            )
        )
        with _storage_errors("update"):
            with self._engine.begin() as conn:
                return conn.execute(statement).rowcount

    def delete_older_than(self, timestamp: int) -> int:
        """Evict rows with a timestamp strictly below the threshold."""
        statement = delete(boxes).where(boxes.c.timestamp < timestamp)
        with _storage_errors("delete_older_than"):
            with self._engine.begin() as conn:
                return conn.execute(statement).rowcount

    def clear(self) -> None:
        """Delete every row and reclaim the file space.

        Maintenance only: the store must be built with allow_clear=True.

        Raises:
            MaintenanceDisabledError: If clearing was not enabled.
        """
        if not self._allow_clear:
            raise MaintenanceDisabledError("clear")
        with _storage_errors("clear"):
            with self._engine.begin() as conn:
                conn.execute(delete(boxes))
            # VACUUM cannot run inside a transaction.
            with self._engine.connect().execution_options(
                isolation_level="AUTOCOMMIT"
            ) as conn:
                if self._engine.dialect.name == "sqlite":
                    conn.execute(text("VACUUM"))
        logger.info("Record store cleared")
