# tests/unit/test_store.py
"""End-to-end DocumentStore tests on in-memory SQLite."""

from __future__ import annotations

import re

import pytest

from docstore import DocumentStore, StoreState
from docstore.core import ids
from docstore.core.config import ConfigValidationError, Driver
from docstore.core.error_log import LogLevel
from docstore.query.predicates import Comparison, Condition, Query, Simple
from docstore.query.statement import Statement
from docstore.schema import reconciler
from docstore.storage.base import fetch_rows


def column_type(store: DocumentStore, table: str, column: str) -> str:
    rows = fetch_rows(store.backend, Statement(f'PRAGMA table_info("{table}")'))
    return {row["name"]: row["type"] for row in rows}[column]


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    """Tests for construction, connect and disconnect."""

    def test_keyword_construction(self):
        """The four credential fields can be passed as keywords."""
        store = DocumentStore(name=":memory:", driver="sqlite", user="ignored")
        assert store.config.driver == Driver.SQLITE
        assert store.state == StoreState.UNCONNECTED

    def test_mapping_construction_accepts_pass(self):
        store = DocumentStore({"name": ":memory:", "driver": "sqlite", "pass": "x"})
        assert store.config.password == "x"

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigValidationError):
            DocumentStore({"host": "db"})

    def test_connect_and_disconnect(self, sqlite_config):
        store = DocumentStore(sqlite_config)
        assert store.connect() is True
        assert store.state == StoreState.CONNECTED
        assert store.connect() is True
        store.disconnect()
        assert store.state == StoreState.UNCONNECTED
        store.disconnect()

    def test_context_manager(self, sqlite_config):
        with DocumentStore(sqlite_config) as store:
            assert store.is_connected
            assert store.set("t", "a")
        assert store.state == StoreState.UNCONNECTED

    def test_operations_need_a_connection(self, sqlite_config):
        store = DocumentStore(sqlite_config)
        assert store.set("users", "u1", {"a": 1}) is False
        assert store.error().kind == "StoreConnectionError"
        assert store.get("users") is False
        assert store.push("users") is False


# =============================================================================
# Writes
# =============================================================================


class TestSet:
    """Tests for upsert, touch writes and schema growth."""

    def test_end_to_end_scenario(self, store):
        assert store.set("users", "u1", {"name": "Joe", "age": 26})
        assert store.get("users", "u1") == {"id": "u1", "name": "Joe", "age": 26}
        assert store.get("users") == ["u1"]
        assert store.get("users", True, ["name"]) == {"u1": {"id": "u1", "name": "Joe"}}

    def test_upsert_updates_existing_document(self, store):
        store.set("users", "u1", {"name": "Joe", "age": 26})
        store.set("users", "u1", {"age": 27})
        assert store.get("users", "u1") == {"id": "u1", "name": "Joe", "age": 27}
        assert store.get("users") == ["u1"]

    def test_touch_write_creates_empty_document(self, store):
        assert store.set("users", "u1")
        assert store.get("users", "u1") == {"id": "u1"}
        assert store.set("users", "u1")
        assert store.get("users") == ["u1"]

    def test_touch_write_keeps_attributes(self, store):
        store.set("users", "u1", {"name": "Joe"})
        store.set("users", "u1", {})
        assert store.get("users", "u1", "name") == "Joe"

    def test_inferred_column_types(self, store):
        store.set("users", "u1", {"age": 26, "score": 1.5, "name": "Joe", "flag": True})
        assert column_type(store, "users", "age") == "integer"
        assert column_type(store, "users", "score") == "double precision"
        assert column_type(store, "users", "name") == "varchar(255)"
        assert column_type(store, "users", "flag") == "varchar(255)"

    def test_explicit_type_is_used_exactly(self, store):
        store.set("users", "u1", {"age": {"val": 26, "type": "integer"}})
        store.set("users", "u2", {"bio": {"val": "long", "type": "text"}})
        assert column_type(store, "users", "age") == "integer"
        assert column_type(store, "users", "bio") == "text"

    def test_column_creation_is_idempotent(self, store):
        store.set("users", "u1", {"age": 26})
        store.set("users", "u2", {"age": "not a number", "extra": 1})
        cols = fetch_rows(store.backend, Statement('PRAGMA table_info("users")'))
        assert [c["name"] for c in cols] == ["id", "age", "extra"]
        assert column_type(store, "users", "age") == "integer"

    def test_null_value(self, store):
        store.set("users", "u1", {"nick": None})
        assert store.get("users", "u1") == {"id": "u1", "nick": None}

    def test_value_the_driver_cannot_store_fails(self, store):
        """Driver conversion errors come back as a logged failure."""
        assert store.set("t", "a", {"n": 2**70}) is False
        entry = store.error()
        assert entry.kind == "StatementExecuteError"
        assert entry.level == LogLevel.ERROR

    def test_lone_surrogate_fails(self, store):
        assert store.set("t", "a", {"s": "\ud800"}) is False
        assert store.error().kind == "StatementExecuteError"

    def test_bad_type_wrapper_fails_before_any_statement(self, store):
        assert store.set("users", "u1", {"age": {"val": 26}}) is False
        assert store.error().message == "Invalid value type format"
        assert not reconciler.table_exists(store.backend, "users")

    def test_empty_identifiers_fail(self, store):
        assert store.set("", "u1") is False
        assert store.set("users", None) is False
        assert store.error().kind == "InvalidInputError"

    def test_non_string_id_is_coerced_with_warning(self, store):
        assert store.set("users", 42, {"a": "x"})
        assert store.get("users") == ["42"]
        warning = store.errors[0]
        assert warning.level == LogLevel.WARNING
        assert "not a string" in warning.message

    def test_non_mapping_attributes_are_a_touch(self, store):
        assert store.set("users", "u1", ["not", "a", "map"])
        assert store.get("users", "u1") == {"id": "u1"}
        assert store.error().level == LogLevel.WARNING


class TestPush:
    """Tests for id generation on insert."""

    def test_returns_generated_id(self, store):
        child = store.push("users", {"name": "Ann"})
        assert re.fullmatch(r"[0-9a-zA-Z]{10}", child)
        assert store.get("users", child, "name") == "Ann"

    def test_custom_id_length(self, store):
        assert len(store.push("users", None, id_length=4)) == 4

    def test_invalid_id_length_fails(self, store):
        assert store.push("users", {}, id_length=0) is False
        assert store.error().kind == "InvalidInputError"

    def test_empty_table_skips_collision_check(self, store, monkeypatch):
        """The first generated id is used when there is nothing to collide with."""
        generated = iter(["AAAA", "BBBB"])
        monkeypatch.setattr(ids, "generate_id", lambda length: next(generated))
        assert store.push("users") == "AAAA"

    def test_collision_regenerates(self, store, monkeypatch):
        store.set("users", "AAAA")
        generated = iter(["AAAA", "AAAA", "CCCC"])
        monkeypatch.setattr(ids, "generate_id", lambda length: next(generated))
        assert store.push("users", {"n": 1}) == "CCCC"
        assert sorted(store.get("users")) == ["AAAA", "CCCC"]

    def test_retry_cap(self, sqlite_config, monkeypatch):
        config = sqlite_config.model_copy(update={"max_id_attempts": 3})
        store = DocumentStore(config)
        store.connect()
        store.set("users", "AAAA")
        monkeypatch.setattr(ids, "generate_id", lambda length: "AAAA")

        assert store.push("users") is False
        entry = store.error()
        assert entry.kind == "IdSpaceExhaustedError"
        assert "after 3 attempts" in entry.message
        store.disconnect()


# =============================================================================
# Reads
# =============================================================================


class TestGet:
    """Tests for the read modes and result shapes."""

    @pytest.fixture
    def people(self, store):
        store.set("people", "p1", {"firstname": "Joe", "lastname": "Doe", "age": 26})
        store.set("people", "p2", {"firstname": "Ann", "lastname": "Doe", "age": 31})
        store.set("people", "p3", {"firstname": "Bob", "lastname": "Roe", "age": 19})
        return store

    def test_missing_table_fails_without_side_effects(self, store):
        assert store.get("ghosts") is False
        entry = store.error()
        assert entry.kind == "TableNotFoundError"
        assert entry.message == "Table 'ghosts' does not exist in database"
        assert not reconciler.table_exists(store.backend, "ghosts")

    def test_empty_table_is_none(self, store):
        store.set("t", "x")
        store.backend.prepare('DELETE FROM "t"').execute()
        assert store.get("t") is None
        assert store.get("t", True) is None

    def test_unknown_id_is_none(self, people):
        assert people.get("people", "nobody") is None

    def test_projection_collapses_to_scalar(self, people):
        assert people.get("people", "p1", ["firstname"]) == "Joe"
        assert people.get("people", "p1", "firstname") == "Joe"

    def test_projection_with_several_columns(self, people):
        assert people.get("people", "p1", ["firstname", "age"]) == {
            "id": "p1",
            "firstname": "Joe",
            "age": 26,
        }

    def test_read_all_keyed_by_id(self, people):
        rows = people.get("people", True)
        assert list(rows) == ["p1", "p2", "p3"]
        assert rows["p2"]["firstname"] == "Ann"

    def test_false_child_lists_ids(self, people):
        assert people.get("people", False) == ["p1", "p2", "p3"]

    def test_empty_child_lists_ids(self, people):
        """Empty string, dict and list select nothing, like None."""
        for child in ("", {}, []):
            assert people.get("people", child) == ["p1", "p2", "p3"]
        assert people.error() is None

    def test_simple_predicates(self, people):
        rows = people.get("people", {"lastname": "Doe", "firstname": "Ann"})
        assert rows["id"] == "p2"

    def test_predicates_with_projection(self, people):
        names = people.get("people", {"lastname": "Doe"}, ["firstname"])
        assert sorted(names) == ["Ann", "Joe"]

    def test_condition_with_typed_values(self, people):
        query = {
            "age": {
                "condition": "BETWEEN ? AND ?",
                "expected": [{"val": 20, "type": "i"}, {"val": 40, "type": "i"}],
            }
        }
        rows = people.get("people", query)
        assert sorted(r["id"] for r in rows) == ["p1", "p2"]

    def test_predicate_objects(self, people):
        query = Query(
            [
                Condition("age", "> ?", [{"val": 20, "type": "i"}], next_operator="AND"),
                Comparison("firstname", "Joe", operator="<>"),
            ]
        )
        assert people.get("people", query, "firstname") == "Ann"

    def test_or_joined_list_form(self, people):
        query = [
            {"attribute": "firstname", "expected": "Joe", "nextOperator": "OR"},
            {"attribute": "firstname", "expected": "Bob"},
        ]
        assert sorted(people.get("people", query, ["id"])) == ["p1", "p3"]

    def test_inline_comparison(self, people):
        query = {"age": {"expected": 30, "whereOperator": ">", "prepare": False}}
        assert people.get("people", query, "firstname") == "Ann"

    def test_where_keyword_override(self, people):
        query = {"where": "WHERE NOT", "lastname": "Doe"}
        assert people.get("people", query, "firstname") == "Bob"

    def test_no_matches_is_none(self, people):
        assert people.get("people", [Simple("firstname", "Zed")]) is None

    def test_malformed_predicate_fails(self, people):
        assert people.get("people", [{"expected": 1}]) is False
        assert people.error().kind == "InvalidInputError"
        assert "no attribute name" in people.error().message

    def test_bad_sql_fragment_fails(self, people):
        assert people.get("people", {"age": {"condition": "IS BROKEN ?", "expected": 1}}) is False
        assert people.error().kind == "StatementExecuteError"

    def test_bad_columns_are_ignored_with_warning(self, people):
        assert people.get("people", "p1", 5) == people.get("people", "p1")
        assert any(e.level == LogLevel.WARNING for e in people.errors)


# =============================================================================
# Error Log
# =============================================================================


class TestErrorLog:
    """Tests for error() lookups."""

    def test_count_and_order(self, store):
        assert store.error(True) == 0
        assert store.error() is None

        store.get("first")
        store.get("second")
        assert store.error(True) == 2
        assert "second" in store.error().message
        assert "first" in store.error(1).message
        assert store.error(2) is None

    def test_entries_carry_call_stack(self, store):
        store.get("missing")
        assert "test_entries_carry_call_stack" in store.error().format_trace()

    def test_failures_are_logged(self, store, caplog):
        store.get("missing")
        assert "TableNotFoundError" in caplog.text
