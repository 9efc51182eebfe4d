# tests/integration/conftest.py
"""
Integration test fixtures.

These tests need a real PostgreSQL server. Configure it with:
    - DOCSTORE_TEST_PG_HOST: server host (required)
    - DOCSTORE_TEST_PG_USER / DOCSTORE_TEST_PG_PASSWORD: credentials
    - DOCSTORE_TEST_PG_NAME: database name (default: postgres)
    - DOCSTORE_TEST_PG_PORT: server port (optional)
"""

from __future__ import annotations

import os
import uuid

import pytest

from docstore.core.config import Driver, StoreConfig
from docstore.store import DocumentStore


def pytest_collection_modifyitems(items):
    """Add tier3, integration and postgres markers to all tests in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath) or "\\integration\\" in str(item.fspath):
            item.add_marker(pytest.mark.tier3)
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.postgres)


@pytest.fixture
def pg_config() -> StoreConfig:
    port = os.environ.get("DOCSTORE_TEST_PG_PORT")
    return StoreConfig(
        host=os.environ.get("DOCSTORE_TEST_PG_HOST", "127.0.0.1"),
        user=os.environ.get("DOCSTORE_TEST_PG_USER", ""),
        password=os.environ.get("DOCSTORE_TEST_PG_PASSWORD", ""),
        name=os.environ.get("DOCSTORE_TEST_PG_NAME", "postgres"),
        driver=Driver.POSTGRES,
        port=int(port) if port else None,
    )


@pytest.fixture
def pg_store(pg_config):
    """Connected store; tables created through it are dropped afterwards."""
    store = DocumentStore(pg_config)
    assert store.connect(), store.error()
    created: list[str] = []
    yield store, created
    for table in created:
        store.backend.prepare(f"DROP TABLE IF EXISTS {store.backend.escape(table)}").execute()
    store.disconnect()


@pytest.fixture
def table_name() -> str:
    return f"docstore_test_{uuid.uuid4().hex[:8]}"
