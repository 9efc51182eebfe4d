"""
Docstore - Schema-Flexible Documents on a Relational Database

Write arbitrary attribute sets to named tables without declaring a schema.
Tables and columns are created on first write, column types are inferred
from values (or given explicitly), and push() generates collision-free ids.

Quick Start:
    >>> from docstore import DocumentStore
    >>> store = DocumentStore(name=":memory:", driver="sqlite")
    >>> store.connect()
    True
    >>> store.set("users", "u1", {"name": "Joe", "age": 26})
    True
    >>> store.get("users", "u1")
    {'id': 'u1', 'name': 'Joe', 'age': 26}

Public API:
    Store:
        - DocumentStore: connect, disconnect, set, push, get, error
        - StoreConfig: connection settings (host, user, password, name)

    Filtered reads:
        - Simple, Comparison, Condition, Query

Architecture:
    docstore/
    ├── core/      # Config, exceptions, error log, ids
    ├── schema/    # Type inference and schema reconciliation
    ├── query/     # Statement builder, predicate DSL, result shaping
    ├── storage/   # PostgreSQL and SQLite backends
    ├── cli/       # `docstore` command
    └── store.py   # DocumentStore facade
"""

__version__ = "0.1.0"

from docstore.core import (
    ConfigError,
    DocStoreError,
    ExtensionUnavailableError,
    IdSpaceExhaustedError,
    InvalidInputError,
    LogEntry,
    LogLevel,
    StatementError,
    StatementExecuteError,
    StatementPrepareError,
    StoreConfig,
    StoreConnectionError,
    TableNotFoundError,
    load_store_config,
)
from docstore.query import Comparison, Condition, Query, Simple
from docstore.schema import TypedValue
from docstore.store import DocumentStore, StoreState

__all__ = [
    "__version__",
    # Store
    "DocumentStore",
    "StoreState",
    "StoreConfig",
    "load_store_config",
    # Values and predicates
    "TypedValue",
    "Simple",
    "Comparison",
    "Condition",
    "Query",
    # Error log
    "LogEntry",
    "LogLevel",
    # Exceptions
    "ConfigError",
    "DocStoreError",
    "ExtensionUnavailableError",
    "StoreConnectionError",
    "StatementError",
    "StatementPrepareError",
    "StatementExecuteError",
    "TableNotFoundError",
    "InvalidInputError",
    "IdSpaceExhaustedError",
]
