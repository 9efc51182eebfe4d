# docstore/cli/commands/data.py
"""
Document commands.

Commands:
    docstore set <table> <id> -a name=Joe -a age=26      - Create or update a document
    docstore push <table> -a name=Ann                    - Create a document under a new id
    docstore get <table> [id] [--all] [-c col] [-w a=v]  - Read ids, documents or matches
    docstore errors                                      - Connect and show the error log

Attribute values are parsed as integers or floats where possible; a
`:type` suffix (age=26:integer) sets the column type explicitly.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from docstore.cli.context import CLIContext, fail
from docstore.cli.ui import console, ui
from docstore.core.exceptions import InvalidInputError
from docstore.logging.logger import get_logger
from docstore.logging.tags import CLI
from docstore.schema.types import COLUMN_TYPE_PATTERN

logger = get_logger(__name__)


# =============================================================================
# Argument Parsing
# =============================================================================


def parse_scalar(text: str) -> Any:
    """Read "26" as 26 and "2.5" as 2.5; anything else stays a string."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_assignment(text: str) -> tuple[str, Any]:
    """
    Parse `key=value` or `key=value:type`.

    Raises:
        InvalidInputError: If there is no `=` or the key is empty
    """
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise InvalidInputError(f"Expected key=value, got '{text}'")

    value, colon, type_ = raw.rpartition(":")
    if colon and value and COLUMN_TYPE_PATTERN.match(type_.strip()):
        return key, {"val": parse_scalar(value), "type": type_.strip()}
    return key, parse_scalar(raw)


def parse_assignments(items: Optional[list[str]]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for item in items or []:
        try:
            key, value = parse_assignment(item)
        except InvalidInputError as e:
            ui.error(str(e))
            raise typer.Exit(1)
        data[key] = value
    return data


# =============================================================================
# Commands
# =============================================================================


def set_command(ctx: CLIContext, table: str, child: str, attributes: Optional[list[str]]) -> None:
    data = parse_assignments(attributes)
    store = ctx.open_store()
    if not store.set(table, child, data):
        fail(store, ctx.verbose)
    store.disconnect()
    ui.success(f"Wrote {table}/{child}")


def push_command(
    ctx: CLIContext,
    table: str,
    attributes: Optional[list[str]],
    id_length: Optional[int],
) -> None:
    data = parse_assignments(attributes)
    store = ctx.open_store()
    child = store.push(table, data, id_length=id_length)
    if child is False:
        fail(store, ctx.verbose)
    store.disconnect()
    ui.success(f"Created {table}/{child}")
    console.print(child)


def get_command(
    ctx: CLIContext,
    table: str,
    child: Optional[str],
    all_rows: bool,
    columns: Optional[list[str]],
    where: Optional[list[str]],
) -> None:
    if child is not None and (all_rows or where):
        ui.error("Give either an id, --all or --where")
        raise typer.Exit(1)

    selector: Any = child
    if all_rows:
        selector = True
    elif where:
        selector = parse_assignments(where)

    store = ctx.open_store()
    result = store.get(table, selector, columns or None)
    if result is False:
        fail(store, ctx.verbose)
    store.disconnect()

    logger.debug(f"{CLI} get {table} -> {type(result).__name__}")
    ui.result(result)


def check_command(ctx: CLIContext) -> None:
    """Open a connection with the configured credentials and close it again."""
    store = ctx.open_store()
    config = store.config
    store.disconnect()
    ui.success(f"Connected to {config.driver.value} database '{config.name}'")


__all__ = [
    "parse_scalar",
    "parse_assignment",
    "parse_assignments",
    "set_command",
    "push_command",
    "get_command",
    "check_command",
]
