# tests/conftest.py
"""
Root conftest - shared fixtures for all docstore tests.

Most tests run against SQLite on ":memory:", so no server is needed.

Test Tiers:
=====================================
- tier1: Pure logic - types, predicates, statement text, config (<10s)
         Run: pytest -m tier1
- tier2: In-memory SQLite and scripted fake backends (<30s)
         Run: pytest -m "tier1 or tier2"
- tier3: Real PostgreSQL server
         Run: DOCSTORE_TEST_PG_HOST=localhost pytest -m tier3

Feature Markers:
- postgres: needs a reachable PostgreSQL server
- integration: needs real services
"""

from __future__ import annotations

import os

import pytest

from docstore.core.config import Driver, StoreConfig
from docstore.storage.sqlite import SqliteBackend
from docstore.store import DocumentStore

# =============================================================================
# Dependency Availability Checks
# =============================================================================


def postgres_available() -> bool:
    """True if psycopg is installed and a test server is configured."""
    try:
        import psycopg  # noqa: F401
    except ImportError:
        return False
    return bool(os.environ.get("DOCSTORE_TEST_PG_HOST"))


POSTGRES_AVAILABLE = postgres_available()
SKIP_POSTGRES_REASON = "psycopg not installed or DOCSTORE_TEST_PG_HOST not set"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sqlite_config() -> StoreConfig:
    """Config for a private in-memory SQLite database."""
    return StoreConfig(name=":memory:", driver=Driver.SQLITE)


@pytest.fixture
def backend(sqlite_config):
    """Connected SQLite backend, closed after the test."""
    b = SqliteBackend(sqlite_config)
    b.connect()
    yield b
    b.close()


@pytest.fixture
def store(sqlite_config):
    """Connected DocumentStore on in-memory SQLite."""
    s = DocumentStore(sqlite_config)
    assert s.connect()
    yield s
    s.disconnect()
