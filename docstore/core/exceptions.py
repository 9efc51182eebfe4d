# docstore/core/exceptions.py
"""
All exceptions raised inside docstore.

Hierarchy:
    DocStoreError
    ├── ExtensionUnavailableError - database driver not installed
    ├── StoreConnectionError - connect failure / no open connection
    ├── StatementError - a statement could not run
    │   ├── StatementPrepareError - statement rejected before execution
    │   └── StatementExecuteError - statement failed while executing
    ├── TableNotFoundError - read against a table that does not exist
    ├── InvalidInputError - malformed attribute map, type or predicate
    └── IdSpaceExhaustedError - push could not find a free id

DocumentStore catches these at its public boundary, records them in its
error log and returns a failure value instead of raising.
"""

from __future__ import annotations


class DocStoreError(Exception):
    """Base exception for all docstore errors."""

    pass


class ExtensionUnavailableError(DocStoreError):
    """The database driver for the configured backend is not importable."""

    pass


class StoreConnectionError(DocStoreError):
    """Could not connect to the database, or no connection is open."""

    pass


# =============================================================================
# Statement Errors
# =============================================================================


class StatementError(DocStoreError):
    """
    A statement could not be run.

    Carries the SQL text so the error log shows what was attempted.
    """

    def __init__(self, message: str, sql: str | None = None):
        self.sql = sql
        super().__init__(message)


class StatementPrepareError(StatementError):
    """Could not prepare statement."""

    pass


class StatementExecuteError(StatementError):
    """Could not run query."""

    pass


# =============================================================================
# Input / Lookup Errors
# =============================================================================


class TableNotFoundError(DocStoreError):
    """Raised when reading from a table that does not exist."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"Table '{table}' does not exist in database")


class InvalidInputError(DocStoreError):
    """Malformed value, type declaration, identifier or predicate."""

    pass


class IdSpaceExhaustedError(DocStoreError):
    """Raised when push hits its retry cap without finding an unused id."""

    def __init__(self, table: str, attempts: int, length: int):
        self.table = table
        self.attempts = attempts
        self.length = length
        super().__init__(
            f"No unused id of length {length} found in table '{table}' "
            f"after {attempts} attempts"
        )
