# docstore/core/__init__.py
"""Exceptions, configuration and the error log."""

from docstore.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    Driver,
    StoreConfig,
    load_store_config,
    load_yaml,
    validate_store_config,
)
from docstore.core.error_log import ErrorLog, LogEntry, LogLevel
from docstore.core.exceptions import (
    DocStoreError,
    ExtensionUnavailableError,
    IdSpaceExhaustedError,
    InvalidInputError,
    StatementError,
    StatementExecuteError,
    StatementPrepareError,
    StoreConnectionError,
    TableNotFoundError,
)

__all__ = [
    # Config
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "Driver",
    "StoreConfig",
    "load_store_config",
    "load_yaml",
    "validate_store_config",
    # Error log
    "ErrorLog",
    "LogEntry",
    "LogLevel",
    # Exceptions
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
