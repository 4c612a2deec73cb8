"""
Shared fixtures for the box registration tests.

Every test gets its own SQLite file under pytest's tmp_path, so
nothing touches the production database location.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.infrastructure.boxes.record_store import SqlRecordStore
from app.main import create_app


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'boxes_test.sqlite'}"


@pytest.fixture
def store(db_url):
    with SqlRecordStore(db_url, allow_clear=True) as record_store:
        record_store.clear()
        yield record_store


@pytest.fixture
def app_settings(db_url) -> Settings:
    return Settings(database_url=db_url, box_ttl_seconds=60, log_level="WARNING")


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
