"""
Tests for the SQLAlchemy record store adapter.

Runs against a real SQLite file per test. Validates lookup filters,
insert/update row counts, strict eviction boundary, quoting, table
bootstrap and fault wrapping.
"""

import time

import pytest
from sqlalchemy import create_engine, text

from app.domain.boxes.entities import ByPublicIp, ByPublicIpAndMessage, Record
from app.domain.boxes.errors import MaintenanceDisabledError, StorageFault
from app.infrastructure.boxes.record_store import SqlRecordStore

IP = "127.0.0.1"
FINGERPRINT = "<fingerprint>.knilxof.org"
OTHER_FINGERPRINT = "<another_fingerprint>.knilxof.org"


def _record(message=FINGERPRINT, tunnel_configured=False, timestamp=1_000, ip=IP):
    return Record(
        public_ip=ip,
        message=message,
        tunnel_configured=tunnel_configured,
        timestamp=timestamp,
    )


class TestFind:
    """Tests for find() with both filter variants."""

    def test_empty_store_returns_empty_list(self, store) -> None:
        assert store.find(ByPublicIpAndMessage(IP, FINGERPRINT)) == []
        assert store.find(ByPublicIp(IP)) == []

    def test_add_then_find_round_trip(self, store) -> None:
        now = store.now()
        assert store.add(_record(timestamp=now)) == 1

        records = store.find(ByPublicIpAndMessage(IP, FINGERPRINT))

        assert len(records) == 1
        assert records[0].timestamp == now
        assert records[0] == _record(timestamp=now)

    def test_same_ip_returns_all_in_insertion_order(self, store) -> None:
        store.add(_record(FINGERPRINT, tunnel_configured=False))
        store.add(_record(OTHER_FINGERPRINT, tunnel_configured=True))

        records = store.find(ByPublicIp(IP))

        assert [r.message for r in records] == [FINGERPRINT, OTHER_FINGERPRINT]
        assert [r.tunnel_configured for r in records] == [False, True]

    def test_concrete_scenario(self, store) -> None:
        """Two boxes behind 127.0.0.1 keep their own tunnel flags."""
        t = store.now()
        store.add(Record("127.0.0.1", "abc.example.org", False, t))
        store.add(Record("127.0.0.1", "xyz.example.org", True, t))

        records = store.find(ByPublicIp("127.0.0.1"))

        assert len(records) == 2
        assert [r.tunnel_configured for r in records] == [False, True]

    def test_filters_do_not_leak_across_keys(self, store) -> None:
        store.add(_record(ip="10.0.0.1"))
        store.add(_record(ip="10.0.0.2"))
        store.add(_record(ip="10.0.0.1", message=OTHER_FINGERPRINT))

        assert len(store.find(ByPublicIp("10.0.0.1"))) == 2
        assert len(store.find(ByPublicIpAndMessage("10.0.0.1", FINGERPRINT))) == 1
        assert store.find(ByPublicIpAndMessage("10.0.0.2", OTHER_FINGERPRINT)) == []

    def test_duplicates_are_permitted(self, store) -> None:
        store.add(_record())
        store.add(_record())

        assert len(store.find(ByPublicIpAndMessage(IP, FINGERPRINT))) == 2

    def test_single_quotes_round_trip(self, store) -> None:
        message = "o'brien's box'; DELETE FROM boxes; --"
        store.add(_record(message=message))
        store.add(_record(message="untouched.knilxof.org"))

        records = store.find(ByPublicIpAndMessage(IP, message))

        assert len(records) == 1
        assert records[0].message == message
        assert len(store.find(ByPublicIp(IP))) == 2

    def test_null_message_matches_null_rows(self, store) -> None:
        store.add(_record(message=None))

        records = store.find(ByPublicIpAndMessage(IP, None))

        assert len(records) == 1
        assert records[0].message is None


class TestUpdate:
    """Tests for update() row counts and overwritten fields."""

    def test_update_overwrites_matching_row(self, store) -> None:
        store.add(_record(tunnel_configured=False, timestamp=1_000))
        store.add(_record(OTHER_FINGERPRINT, tunnel_configured=False, timestamp=1_000))

        count = store.update(_record(tunnel_configured=True, timestamp=2_000))

        assert count == 1
        updated = store.find(ByPublicIpAndMessage(IP, FINGERPRINT))[0]
        assert updated.tunnel_configured is True
        assert updated.timestamp == 2_000
        untouched = store.find(ByPublicIpAndMessage(IP, OTHER_FINGERPRINT))[0]
        assert untouched.timestamp == 1_000

    def test_update_without_match_returns_zero(self, store) -> None:
        store.add(_record())

        assert store.update(_record(message="missing.knilxof.org")) == 0
        assert len(store.find(ByPublicIp(IP))) == 1

    def test_update_rewrites_every_duplicate(self, store) -> None:
        store.add(_record(timestamp=1))
        store.add(_record(timestamp=2))

        assert store.update(_record(timestamp=3)) == 2
        assert {r.timestamp for r in store.find(ByPublicIp(IP))} == {3}


class TestDeleteOlderThan:
    """Tests for TTL eviction."""

    def test_evicts_rows_below_threshold(self, store) -> None:
        now = store.now()
        store.add(_record(FINGERPRINT, timestamp=now))
        store.add(_record(OTHER_FINGERPRINT, timestamp=now))

        assert store.delete_older_than(now + 2) == 2
        assert store.find(ByPublicIp(IP)) == []

    def test_boundary_is_exclusive(self, store) -> None:
        now = store.now()
        store.add(_record(timestamp=now))

        assert store.delete_older_than(now) == 0
        assert len(store.find(ByPublicIp(IP))) == 1

    def test_nothing_eligible_returns_zero(self, store) -> None:
        assert store.delete_older_than(store.now()) == 0
        assert store.delete_older_than(store.now()) == 0

    def test_keeps_fresh_rows(self, store) -> None:
        store.add(_record(FINGERPRINT, timestamp=100))
        store.add(_record(OTHER_FINGERPRINT, timestamp=200))

        assert store.delete_older_than(150) == 1
        assert [r.message for r in store.find(ByPublicIp(IP))] == [OTHER_FINGERPRINT]


class TestLifecycle:
    """Tests for bootstrap, clear, close and now()."""

    def test_bootstrap_is_idempotent(self, db_url) -> None:
        with SqlRecordStore(db_url) as first:
            first.add(_record())
        with SqlRecordStore(db_url) as second:
            assert len(second.find(ByPublicIp(IP))) == 1

    def test_creates_missing_parent_directory(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "boxes.sqlite"
        with SqlRecordStore(f"sqlite:///{path}") as record_store:
            assert record_store.find(ByPublicIp(IP)) == []
        assert path.exists()

    def test_clear_empties_table(self, store) -> None:
        store.add(_record())
        store.add(_record(OTHER_FINGERPRINT))

        store.clear()

        assert store.find(ByPublicIp(IP)) == []

    def test_clear_is_guarded(self, db_url) -> None:
        with SqlRecordStore(db_url) as record_store:
            record_store.add(_record())
            with pytest.raises(MaintenanceDisabledError):
                record_store.clear()
            assert len(record_store.find(ByPublicIp(IP))) == 1

    def test_now_tracks_wall_clock(self) -> None:
        before = int(time.time())
        now = SqlRecordStore.now()
        after = int(time.time())

        assert isinstance(now, int)
        assert before <= now <= after


class TestStorageFaults:
    """Tests that engine failures surface as StorageFault."""

    def test_unopenable_location_fails_loudly(self, tmp_path) -> None:
        # A directory cannot be opened as a database file.
        with pytest.raises(StorageFault) as exc_info:
            SqlRecordStore(f"sqlite:///{tmp_path}")
        assert exc_info.value.operation == "create table"

    def test_query_failure_is_wrapped(self, db_url) -> None:
        with SqlRecordStore(db_url) as record_store:
            engine = create_engine(db_url)
            with engine.begin() as conn:
                conn.execute(text("DROP TABLE boxes"))
            engine.dispose()

            with pytest.raises(StorageFault) as exc_info:
                record_store.find(ByPublicIp(IP))
            assert exc_info.value.operation == "find"

            with pytest.raises(StorageFault):
                record_store.add(_record())
            with pytest.raises(StorageFault):
                record_store.update(_record())
            with pytest.raises(StorageFault):
                record_store.delete_older_than(0)
