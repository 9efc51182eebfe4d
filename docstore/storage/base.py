# docstore/storage/base.py
"""
Backend protocol and shared DB-API plumbing.

A backend is the relational collaborator the store talks to. It exposes the
primitives the core needs and nothing more:

    escape(raw)                  -> quoted identifier
    prepare(sql)                 -> PreparedStatement
    PreparedStatement.bind(...)  -> ordered, type-tagged parameters
    PreparedStatement.execute()  -> Result (row_count, fetch(), free())

Statements use `?` placeholders; each backend translates to its paramstyle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, runtime_checkable

from docstore.core.exceptions import (
    InvalidInputError,
    StatementExecuteError,
    StatementPrepareError,
)
from docstore.logging.logger import get_logger
from docstore.logging.tags import STORAGE

if TYPE_CHECKING:
    from docstore.query.statement import Statement
    from docstore.schema.types import BindValue

logger = get_logger(__name__)


class Result:
    """
    Rows returned by an executed statement.

    Rows are read sequentially with fetch(); free() releases them.
    """

    def __init__(self, rows: list[dict[str, Any]], affected: int = -1):
        self._rows = rows
        self._position = 0
        self.row_count = len(rows)
        self.affected = affected  # rows changed by DML, -1 if unknown

    def fetch(self) -> Optional[dict[str, Any]]:
        """Next row as a column -> value mapping, or None when exhausted."""
        if self._position >= len(self._rows):
            return None
        row = self._rows[self._position]
        self._position += 1
        return row

    def fetch_all(self) -> list[dict[str, Any]]:
        """All remaining rows."""
        rows = self._rows[self._position :]
        self._position = len(self._rows)
        return rows

    def free(self) -> None:
        self._rows = []
        self._position = 0


@runtime_checkable
class PreparedStatement(Protocol):
    """A statement ready to take parameters."""

    sql: str

    def bind(self, params: Sequence[BindValue]) -> None:
        """Bind ordered, type-tagged parameters."""
        ...

    def execute(self) -> Result:
        """Run the statement."""
        ...


@runtime_checkable
class Backend(Protocol):
    """Protocol for relational backends."""

    dialect: str
    multi_column_alter: bool  # several ADD COLUMN clauses in one ALTER TABLE
    table_exists_sql: str  # params: (table,)
    column_exists_sql: str  # params: (table, column)

    def check_driver(self) -> None:
        """Raise ExtensionUnavailableError if the driver cannot be used."""
        ...

    def connect(self) -> None:
        """Open the connection. Raises StoreConnectionError."""
        ...

    def close(self) -> None:
        """Close the connection if open."""
        ...

    @property
    def is_connected(self) -> bool:
        ...

    def escape(self, raw: str) -> str:
        """Quote a raw name for interpolation into an identifier position."""
        ...

    def prepare(self, sql: str) -> PreparedStatement:
        """Prepare a statement with `?` placeholders."""
        ...


def quote_identifier(raw: str) -> str:
    """
    Quote an identifier with double quotes, doubling embedded quotes.

    Raises:
        InvalidInputError: If the name is empty or contains a NUL byte
    """
    if not raw or "\x00" in raw:
        raise InvalidInputError(f"Invalid identifier {raw!r}")
    return '"' + raw.replace('"', '""') + '"'


# Raised by DB-API drivers on values they cannot convert (sqlite3 on ints
# above 64 bits or lone surrogates in strings).
VALUE_ERRORS: tuple[type[BaseException], ...] = (
    OverflowError,
    ValueError,
    TypeError,
    UnicodeError,
)


class DBAPIStatement:
    """
    PreparedStatement over a DB-API 2.0 connection.

    Binding coerces each value to the type its tag asks for; rows are mapped
    to dicts through cursor.description so any driver row format works.
    """

    def __init__(
        self,
        conn: Any,
        sql: str,
        driver_sql: str,
        driver_errors: tuple[type[BaseException], ...],
    ):
        self.sql = sql
        self._conn = conn
        self._driver_sql = driver_sql
        self._driver_errors = driver_errors
        self._params: tuple[Any, ...] = ()

    def bind(self, params: Sequence[BindValue]) -> None:
        self._params = tuple(p.coerced() for p in params)

    def execute(self) -> Result:
        logger.debug(f"{STORAGE} {self.sql} {list(self._params)}")
        try:
            cursor = self._conn.cursor()
            try:
                cursor.execute(self._driver_sql, self._params)
                if cursor.description:
                    names = [d[0] for d in cursor.description]
                    rows = [dict(zip(names, row)) for row in cursor.fetchall()]
                else:
                    rows = []
                affected = cursor.rowcount
            finally:
                cursor.close()
        except self._driver_errors + VALUE_ERRORS as e:
            raise StatementExecuteError(f"Could not run query [{e}]", sql=self.sql) from e
        return Result(rows, affected)


def check_prepared(conn: Any, sql: str) -> None:
    """Shared prepare() preconditions."""
    if conn is None:
        raise StatementPrepareError(
            "Could not prepare statement [no open connection]", sql=sql
        )
    if not sql or not sql.strip():
        raise StatementPrepareError("Could not prepare statement [empty statement]", sql=sql)


def run_statement(backend: Backend, statement: "Statement") -> Result:
    """Prepare, bind and execute a built statement."""
    prepared = backend.prepare(statement.sql)
    prepared.bind(statement.params)
    return prepared.execute()


def fetch_rows(backend: Backend, statement: "Statement") -> list[dict[str, Any]]:
    """Run a query and return all rows, freeing the result."""
    result = run_statement(backend, statement)
    try:
        return result.fetch_all()
    finally:
        result.free()


def count_rows(backend: Backend, statement: "Statement") -> int:
    """Run a query and return only its row count."""
    result = run_statement(backend, statement)
    num_rows = result.row_count
    result.free()
    return num_rows


__all__ = [
    "Backend",
    "PreparedStatement",
    "Result",
    "DBAPIStatement",
    "VALUE_ERRORS",
    "quote_identifier",
    "check_prepared",
    "run_statement",
    "fetch_rows",
    "count_rows",
]
