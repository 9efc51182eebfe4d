# tests/unit/fakes.py
"""Scripted backend for failure-path tests."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from docstore.core.exceptions import (
    ExtensionUnavailableError,
    StatementExecuteError,
    StatementPrepareError,
    StoreConnectionError,
)
from docstore.storage.base import Result, quote_identifier


class FakeStatement:
    """Records its binding and answers from the backend's script."""

    def __init__(self, backend: "FakeBackend", sql: str):
        self.backend = backend
        self.sql = sql
        self.params: list[Any] = []

    def bind(self, params: Sequence[Any]) -> None:
        self.params = list(params)

    def execute(self) -> Result:
        self.backend.executed.append((self.sql, [p.value for p in self.params]))
        if self.backend.execute_error and self.backend.execute_error in self.sql:
            raise StatementExecuteError("Could not run query [scripted]", sql=self.sql)
        rows = self.backend.responder(self.sql, [p.value for p in self.params])
        return Result(rows or [])


class FakeBackend:
    """
    Backend whose behavior is set per test.

    Args:
        responder: (sql, values) -> rows for every executed statement
        connect_error: Raise StoreConnectionError from connect()
        driver_missing: Raise ExtensionUnavailableError from check_driver()
        prepare_error: Substring of SQL that fails to prepare
        execute_error: Substring of SQL that fails to execute
    """

    dialect = "fake"
    multi_column_alter = True
    table_exists_sql = "TABLE EXISTS ?"
    column_exists_sql = "COLUMN EXISTS ? ?"

    def __init__(
        self,
        responder: Optional[Callable[[str, list[Any]], list[dict[str, Any]]]] = None,
        connect_error: bool = False,
        driver_missing: bool = False,
        prepare_error: str = "",
        execute_error: str = "",
    ):
        self.responder = responder or (lambda sql, values: [])
        self.connect_error = connect_error
        self.driver_missing = driver_missing
        self.prepare_error = prepare_error
        self.execute_error = execute_error
        self.connected = False
        self.close_calls = 0
        self.executed: list[tuple[str, list[Any]]] = []

    def check_driver(self) -> None:
        if self.driver_missing:
            raise ExtensionUnavailableError("fake driver is not installed")

    def connect(self) -> None:
        if self.connect_error:
            raise StoreConnectionError("Could not connect to database: [refused]")
        self.connected = True

    def close(self) -> None:
        self.close_calls += 1
        self.connected = False

    @property
    def is_connected(self) -> bool:
        return self.connected

    def escape(self, raw: str) -> str:
        return quote_identifier(raw)

    def prepare(self, sql: str) -> FakeStatement:
        if self.prepare_error and self.prepare_error in sql:
            raise StatementPrepareError("Could not prepare statement [scripted]", sql=sql)
        return FakeStatement(self, sql)

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.executed]
