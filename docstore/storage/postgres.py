# docstore/storage/postgres.py
"""
PostgreSQL backend.

Uses psycopg 3 over a single autocommit connection per store. Statements are
written with `?` placeholders and translated to psycopg's `%s` paramstyle
here; metadata lookups go through information_schema in the current schema.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from docstore.core.config import StoreConfig
from docstore.core.exceptions import ExtensionUnavailableError, StoreConnectionError
from docstore.logging.logger import get_logger
from docstore.logging.tags import STORAGE

from .base import DBAPIStatement, check_prepared, quote_identifier

if TYPE_CHECKING:
    from psycopg import Connection

# Lazy import for psycopg (done once at module level when first needed)
_psycopg = None


def _get_psycopg():
    """Lazy import psycopg once."""
    global _psycopg
    if _psycopg is None:
        import psycopg

        _psycopg = psycopg
    return _psycopg


logger = get_logger(__name__)


# Quoted identifier, string literal, placeholder or percent sign.
_PLACEHOLDER_TOKEN = re.compile(r'''"(?:[^"]|"")*"|'(?:[^']|'')*'|\?|%''')


def _translate_token(match: re.Match) -> str:
    token = match.group(0)
    if token == "?":
        return "%s"
    return token.replace("%", "%%")


def translate_placeholders(sql: str) -> str:
    """
    Rewrite `?` placeholders as `%s` and escape every literal `%`.

    A `?` inside a quoted identifier or a string literal is left alone.
    """
    return _PLACEHOLDER_TOKEN.sub(_translate_token, sql)


class PostgresBackend:
    """Relational backend on a PostgreSQL server."""

    dialect = "postgres"
    multi_column_alter = True
    table_exists_sql = (
        "SELECT 1 FROM information_schema.tables "
        "WHERE table_schema = current_schema() AND table_name = ?"
    )
    column_exists_sql = (
        "SELECT 1 FROM information_schema.columns "
        "WHERE table_schema = current_schema() AND table_name = ? AND column_name = ?"
    )

    def __init__(self, config: StoreConfig):
        self.config = config
        self._conn: "Connection | None" = None

    def check_driver(self) -> None:
        try:
            _get_psycopg()
        except ImportError as e:
            raise ExtensionUnavailableError(
                "psycopg is not installed. Install with: pip install 'psycopg[binary]'"
            ) from e

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and not self._conn.closed

    def _connect_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "host": self.config.host,
            "dbname": self.config.name,
            "connect_timeout": self.config.connect_timeout,
            "autocommit": True,
        }
        if self.config.user:
            kwargs["user"] = self.config.user
        if self.config.password:
            kwargs["password"] = self.config.password
        if self.config.port is not None:
            kwargs["port"] = self.config.port
        return kwargs

    def connect(self) -> None:
        if self.is_connected:
            return
        psycopg = _get_psycopg()
        try:
            self._conn = psycopg.connect(**self._connect_kwargs())
        except psycopg.Error as e:
            raise StoreConnectionError(f"Could not connect to database: [{e}]") from e
        logger.debug(
            f"{STORAGE} Connected to postgres database '{self.config.name}' "
            f"on {self.config.host}"
        )

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def escape(self, raw: str) -> str:
        return quote_identifier(raw)

    def prepare(self, sql: str) -> DBAPIStatement:
        check_prepared(self._conn if self.is_connected else None, sql)
        return DBAPIStatement(
            self._conn,
            sql,
            translate_placeholders(sql),
            (_get_psycopg().Error,),
        )


__all__ = ["PostgresBackend", "translate_placeholders"]
