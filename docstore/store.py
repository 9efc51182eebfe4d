# docstore/store.py
"""
DocumentStore - schema-flexible documents on a relational database.

Tables and columns are created on first write; callers never declare a
schema. Every public method catches docstore errors, records them in the
store's error log and returns a failure value instead of raising:

    store = DocumentStore(host="127.0.0.1", user="app", password="secret", name="app")
    if not store.connect():
        print(store.error())

    store.set("users", "u1", {"name": "Joe", "age": 26})
    store.get("users", "u1")             # {"id": "u1", "name": "Joe", "age": 26}
    store.get("users", "u1", "name")     # "Joe"
    store.get("users")                   # ["u1"]
    new_id = store.push("users", {"name": "Ann"})

    store.disconnect()
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from docstore.core import ids
from docstore.core.config import StoreConfig, validate_store_config
from docstore.core.error_log import ErrorLog, LogEntry, LogLevel
from docstore.core.exceptions import (
    DocStoreError,
    ExtensionUnavailableError,
    IdSpaceExhaustedError,
    InvalidInputError,
    StoreConnectionError,
    TableNotFoundError,
)
from docstore.logging.logger import get_logger
from docstore.logging.tags import STORE
from docstore.query import builder
from docstore.query.predicates import is_query_spec, parse_query
from docstore.query.shaping import shape_ids, shape_keyed, shape_rows
from docstore.schema import reconciler
from docstore.schema.types import Attribute, resolve_attributes
from docstore.storage import Backend, count_rows, fetch_rows, get_backend, run_statement

logger = get_logger(__name__)


def _lists_ids(child: Any) -> bool:
    """True for the get() selectors that mean "no child"."""
    if child is None or child is False:
        return True
    return isinstance(child, (str, Mapping, list, tuple)) and len(child) == 0


class StoreState(str, Enum):
    """Lifecycle of a store's connection."""

    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    FAILED = "failed"  # terminal


class DocumentStore:
    """
    Document facade over one relational connection.

    Not thread-safe: one store, one connection, one caller at a time.

    Args:
        config: StoreConfig or a mapping of its fields. Keyword fields
            (host, user, password, name, ...) are merged on top.
        backend: Backend to use instead of the one the config's driver picks.

    Raises:
        ConfigValidationError: If the connection fields are invalid
    """

    def __init__(
        self,
        config: Union[StoreConfig, Mapping[str, Any], None] = None,
        backend: Optional[Backend] = None,
        **fields: Any,
    ):
        self._errors = ErrorLog()
        self._state = StoreState.UNCONNECTED
        self.config = self._build_config(config, fields)
        self._backend: Backend = backend if backend is not None else get_backend(self.config)

        try:
            self._backend.check_driver()
        except ExtensionUnavailableError as e:
            self._state = StoreState.FAILED
            self._fail(e)

    @staticmethod
    def _build_config(
        config: Union[StoreConfig, Mapping[str, Any], None],
        fields: Mapping[str, Any],
    ) -> StoreConfig:
        if isinstance(config, StoreConfig):
            if not fields:
                return config
            data = config.model_dump()
        else:
            data = dict(config or {})
        data.update(fields)
        return validate_store_config(data)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == StoreState.CONNECTED

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def errors(self) -> list[LogEntry]:
        """All log entries, oldest first."""
        return list(self._errors)

    # =========================================================================
    # Connection
    # =========================================================================

    def connect(self) -> bool:
        """
        Open the database connection.

        Returns:
            True on success. False if the connection failed or the store is
            unusable; the reason is in the error log.
        """
        if self._state == StoreState.FAILED:
            return self._fail(
                StoreConnectionError("Store is unusable after an earlier failure")
            )
        if self._state == StoreState.CONNECTED:
            return True

        try:
            self._backend.connect()
        except DocStoreError as e:
            self._state = StoreState.FAILED
            return self._fail(e)

        self._state = StoreState.CONNECTED
        logger.info(f"{STORE} Connected to '{self.config.name}' ({self._backend.dialect})")
        return True

    def disconnect(self) -> None:
        """Close the connection if one is open. Never raises."""
        try:
            self._backend.close()
        except Exception as e:
            logger.debug(f"{STORE} Ignoring error while disconnecting: {e}")
        if self._state == StoreState.CONNECTED:
            self._state = StoreState.UNCONNECTED
            logger.debug(f"{STORE} Disconnected from '{self.config.name}'")

    def __enter__(self) -> "DocumentStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def __del__(self):
        if getattr(self, "_backend", None) is None:
            return
        try:
            self.disconnect()
        except Exception:
            pass

    # =========================================================================
    # Writes
    # =========================================================================

    def set(self, table: Any, child: Any, data: Any = None) -> bool:
        """
        Create or update one document.

        Missing tables and columns are created first. Without attributes the
        document is only created if it does not exist yet.

        Args:
            table: Table name
            child: Document id
            data: Attribute map. Values are scalars or
                {"val": value, "type": "<column type>"} wrappers.

        Returns:
            True on success, False at the first failing step
        """
        try:
            self._require_connection()
            table = self._identifier(table, "table name")
            child = self._identifier(child, "child id")
            attributes = self._attributes(data)
            self._write(table, child, attributes)
        except DocStoreError as e:
            return self._fail(e)
        return True

    def push(self, table: Any, data: Any = None, id_length: Optional[int] = None) -> Union[str, bool]:
        """
        Create a document under a new random id.

        Args:
            table: Table name
            data: Attribute map, as for set()
            id_length: Length of the generated id. Defaults to config.id_length.

        Returns:
            The new id, or False on failure
        """
        try:
            self._require_connection()
            table = self._identifier(table, "table name")
            length = self.config.id_length if id_length is None else id_length
            if isinstance(length, bool) or not isinstance(length, int) or length < 1:
                raise InvalidInputError(f"id length must be a positive integer, got {length!r}")
            child = self._unused_id(table, length)
        except DocStoreError as e:
            return self._fail(e)

        if not self.set(table, child, data):
            return False
        return child

    def _write(self, table: str, child: str, attributes: list[Attribute]) -> None:
        added = reconciler.reconcile(self._backend, table, attributes)

        if count_rows(self._backend, builder.select_id(self._backend, table, child)) <= 0:
            run_statement(self._backend, builder.insert_id(self._backend, table, child)).free()

        if attributes:
            statement = builder.update_attributes(self._backend, table, child, attributes)
            run_statement(self._backend, statement).free()

        logger.debug(
            f"{STORE} Wrote '{table}/{child}' "
            f"({len(attributes)} attributes, {len(added)} new columns)"
        )

    def _unused_id(self, table: str, length: int) -> str:
        child = ids.generate_id(length)

        # nothing to collide with
        if not reconciler.table_exists(self._backend, table):
            return child
        if count_rows(self._backend, builder.select_any(self._backend, table)) <= 0:
            return child

        max_attempts = self.config.max_id_attempts
        attempts = 1
        while count_rows(self._backend, builder.select_id(self._backend, table, child)) > 0:
            if max_attempts is not None and attempts >= max_attempts:
                raise IdSpaceExhaustedError(table, attempts, length)
            child = ids.generate_id(length)
            attempts += 1
        return child

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, table: Any, child: Any = None, columns: Any = None) -> Any:
        """
        Read from a table.

        child selects the mode:
            None, False, "", empty list or dict -> list of ids
            True                -> {id: row} for every row
            str                 -> one document
            Query, list, dict   -> rows matching the predicates

        columns (a name or a list of names) projects the result. A single
        matching row with a single projected column collapses to its value.

        Returns:
            The shaped result, None if there is no data, False on failure
        """
        try:
            self._require_connection()
            table = self._identifier(table, "table name")
            projection = self._columns(columns)

            if not reconciler.table_exists(self._backend, table):
                raise TableNotFoundError(table)

            if _lists_ids(child):
                rows = fetch_rows(self._backend, builder.select_ids(self._backend, table))
                return shape_ids(rows)

            if child is True:
                rows = fetch_rows(
                    self._backend, builder.select_all(self._backend, table, projection)
                )
                return shape_keyed(rows)

            if is_query_spec(child):
                query = parse_query(child)
                statement = builder.select_where(self._backend, table, query, projection)
                return shape_rows(fetch_rows(self._backend, statement), projection)

            child = self._identifier(child, "child id")
            statement = builder.select_by_id(self._backend, table, child, projection)
            return shape_rows(fetch_rows(self._backend, statement), projection)
        except DocStoreError as e:
            return self._fail(e)

    # =========================================================================
    # Error Log
    # =========================================================================

    def error(self, selector: Union[int, bool] = 0) -> Union[LogEntry, int, None]:
        """
        Look up the error log.

        Args:
            selector: True for the number of entries, otherwise how many
                entries back from the most recent (0 = most recent)

        Returns:
            The entry count, the selected LogEntry, or None if out of range
        """
        if selector is True:
            return len(self._errors)
        if not isinstance(selector, int):
            return None
        return self._errors.recent(selector)

    def _fail(self, error: DocStoreError) -> bool:
        kind = type(error).__name__
        self._errors.append(LogLevel.ERROR, str(error), kind=kind, skip_frames=2)
        logger.error(f"{STORE} {kind}: {error}")
        return False

    def _warn(self, message: str) -> None:
        self._errors.append(LogLevel.WARNING, message, skip_frames=2)
        logger.warning(f"{STORE} {message}")

    # =========================================================================
    # Input Checks
    # =========================================================================

    def _require_connection(self) -> None:
        if self._state != StoreState.CONNECTED:
            raise StoreConnectionError(
                f"Not connected to database (store is {self._state.value})"
            )

    def _identifier(self, value: Any, what: str) -> str:
        if value is None or value == "":
            raise InvalidInputError(f"The {what} must be a non-empty string")
        if isinstance(value, str):
            return value
        if isinstance(value, (bool, Mapping, list, tuple, set)):
            raise InvalidInputError(
                f"The {what} must be a string, got {type(value).__name__}"
            )
        self._warn(f"The {what} {value!r} is not a string; using '{value}'")
        return str(value)

    def _attributes(self, data: Any) -> list[Attribute]:
        if data is None:
            return []
        if not isinstance(data, Mapping):
            self._warn(
                f"Attributes must be a mapping, got {type(data).__name__}; "
                "writing without attributes"
            )
            return []
        return resolve_attributes(data)

    def _columns(self, columns: Any) -> Optional[list[str]]:
        if columns is None:
            return None
        if isinstance(columns, str):
            return [columns]
        if isinstance(columns, Sequence) and all(isinstance(c, str) for c in columns):
            return list(columns) or None
        self._warn(f"Ignoring columns of type {type(columns).__name__}; reading all columns")
        return None


__all__ = ["DocumentStore", "StoreState"]
