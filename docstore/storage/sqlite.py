# docstore/storage/sqlite.py
"""SQLite backend for local mode and tests."""

from __future__ import annotations

import sqlite3

from docstore.core.config import StoreConfig
from docstore.core.exceptions import ExtensionUnavailableError, StoreConnectionError
from docstore.logging.logger import get_logger
from docstore.logging.tags import STORAGE

from .base import DBAPIStatement, check_prepared, quote_identifier

logger = get_logger(__name__)

# pragma_table_info() as a table-valued function
MIN_SQLITE_VERSION = (3, 16, 0)


class SqliteBackend:
    """
    Local storage using SQLite.

    The config `name` is the database file path (":memory:" for a private
    in-memory database). host, user and password are ignored. Runs in
    autocommit mode so each statement stands alone.
    """

    dialect = "sqlite"
    multi_column_alter = False
    table_exists_sql = "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?"
    column_exists_sql = "SELECT name FROM pragma_table_info(?) WHERE name = ?"

    def __init__(self, config: StoreConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None

    def check_driver(self) -> None:
        if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
            raise ExtensionUnavailableError(
                f"SQLite {sqlite3.sqlite_version} is too old, "
                f"{'.'.join(map(str, MIN_SQLITE_VERSION))} or newer is required"
            )

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = sqlite3.connect(
                self.config.name,
                timeout=self.config.connect_timeout,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            raise StoreConnectionError(f"Could not connect to database: [{e}]") from e
        logger.debug(f"{STORAGE} Opened sqlite database '{self.config.name}'")

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def escape(self, raw: str) -> str:
        return quote_identifier(raw)

    def prepare(self, sql: str) -> DBAPIStatement:
        check_prepared(self._conn, sql)
        return DBAPIStatement(self._conn, sql, sql, (sqlite3.Error,))


__all__ = ["SqliteBackend"]
