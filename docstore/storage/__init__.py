# docstore/storage/__init__.py
"""Relational backends."""

from __future__ import annotations

from docstore.core.config import Driver, StoreConfig
from docstore.storage.base import (
    Backend,
    PreparedStatement,
    Result,
    count_rows,
    fetch_rows,
    quote_identifier,
    run_statement,
)
from docstore.storage.postgres import PostgresBackend
from docstore.storage.sqlite import SqliteBackend

__all__ = [
    "Backend",
    "PreparedStatement",
    "Result",
    "PostgresBackend",
    "SqliteBackend",
    "count_rows",
    "fetch_rows",
    "quote_identifier",
    "run_statement",
    "get_backend",
]


def get_backend(config: StoreConfig) -> Backend:
    """
    Get the backend for a config's driver.

    Returns:
        PostgresBackend for "postgres", SqliteBackend for "sqlite"
    """
    if config.driver == Driver.SQLITE:
        return SqliteBackend(config)
    return PostgresBackend(config)
