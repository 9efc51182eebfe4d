# docstore/schema/types.py
"""
Type inference and coercion for document attributes.

Two independent decisions are made from every attribute value:
- the column type used if the column has to be created
- the coarse bind tag (integer/float/string) used when the value is bound

An explicit type hint only overrides the column type; the bind tag always
comes from the value itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from docstore.core.exceptions import InvalidInputError

# Column type constants
TYPE_ID = "varchar(255)"
TYPE_STRING = "varchar(255)"
TYPE_INTEGER = "integer"
TYPE_FLOAT = "double precision"

# e.g. "text", "varchar(100)", "double precision", "numeric(10, 2)"
COLUMN_TYPE_PATTERN = re.compile(
    r"^[A-Za-z][A-Za-z0-9_]*( [A-Za-z][A-Za-z0-9_]*)*\s*(\(\s*\d+\s*(,\s*\d+\s*)?\))?$"
)

# Keys of a typed-value wrapper: {"val": 26, "type": "integer"}
WRAPPER_VALUE_KEYS = ("val", "value")
WRAPPER_TYPE_KEY = "type"


class BindType(str, Enum):
    """Coarse parameter type tag used by the binding protocol."""

    INTEGER = "i"
    FLOAT = "d"
    STRING = "s"

    @classmethod
    def parse(cls, tag: Any) -> "BindType":
        """Accept a BindType, a one-letter tag or a spelled-out name."""
        if isinstance(tag, BindType):
            return tag
        if isinstance(tag, str):
            key = tag.strip().lower()
            if key in _BIND_ALIASES:
                return _BIND_ALIASES[key]
        raise InvalidInputError(f"Unknown bind type '{tag}'")


_BIND_ALIASES = {
    "i": BindType.INTEGER,
    "int": BindType.INTEGER,
    "integer": BindType.INTEGER,
    "d": BindType.FLOAT,
    "double": BindType.FLOAT,
    "float": BindType.FLOAT,
    "s": BindType.STRING,
    "str": BindType.STRING,
    "string": BindType.STRING,
}


@dataclass(frozen=True)
class BindValue:
    """One positional statement parameter."""

    bind_type: BindType
    value: Any

    @classmethod
    def of(cls, value: Any) -> "BindValue":
        """Bind a value with its inferred tag."""
        return cls(infer_bind_type(value), value)

    def coerced(self) -> Any:
        """Value converted to the Python type matching the tag."""
        return coerce_bind_value(self.value, self.bind_type)


@dataclass(frozen=True)
class TypedValue:
    """An attribute value with an optional explicit column type."""

    value: Any
    type: Optional[str] = None

    @property
    def column_type(self) -> str:
        """Explicit type if given, otherwise inferred from the value."""
        if self.type is not None:
            return self.type
        return infer_column_type(self.value)

    @property
    def bind_value(self) -> BindValue:
        return BindValue.of(self.value)


@dataclass(frozen=True)
class Attribute:
    """A resolved attribute of a write: column name plus typed value."""

    name: str
    typed_value: TypedValue

    @property
    def column_type(self) -> str:
        return self.typed_value.column_type

    @property
    def bind_value(self) -> BindValue:
        return self.typed_value.bind_value


# =============================================================================
# Inference
# =============================================================================


def infer_column_type(value: Any) -> str:
    """
    Infer the column type for a value.

    int -> integer, float -> double precision, everything else
    (including str, bool and None) -> varchar(255).
    """
    if isinstance(value, bool):
        return TYPE_STRING
    if isinstance(value, int):
        return TYPE_INTEGER
    if isinstance(value, float):
        return TYPE_FLOAT
    return TYPE_STRING


def infer_bind_type(value: Any) -> BindType:
    """Infer the bind tag for a value (bool binds as string)."""
    if isinstance(value, bool):
        return BindType.STRING
    if isinstance(value, int):
        return BindType.INTEGER
    if isinstance(value, float):
        return BindType.FLOAT
    return BindType.STRING


def coerce_bind_value(value: Any, bind_type: BindType) -> Any:
    """
    Convert a value to the Python type its tag asks for.

    None stays None (NULL). Booleans bound as strings become "1"/"0".

    Raises:
        InvalidInputError: If the value cannot be converted
    """
    if value is None:
        return None

    try:
        if bind_type == BindType.INTEGER:
            return int(value)
        if bind_type == BindType.FLOAT:
            return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Cannot bind {value!r} as {bind_type.name.lower()}"
        ) from e

    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def validate_column_type(type_name: Any) -> str:
    """
    Check an explicit column type before it is interpolated into DDL.

    Raises:
        InvalidInputError: If the type is not a plain SQL type name
    """
    if not isinstance(type_name, str) or not COLUMN_TYPE_PATTERN.match(type_name.strip()):
        raise InvalidInputError(f"Invalid column type '{type_name}'")
    return type_name.strip()


# =============================================================================
# Input Resolution
# =============================================================================


def resolve_value(raw: Any) -> TypedValue:
    """
    Turn one raw attribute value into a TypedValue.

    Accepts a TypedValue, a wrapper mapping {"val": ..., "type": ...}, or a
    bare scalar.

    Raises:
        InvalidInputError: If a wrapper is missing its value or type
    """
    if isinstance(raw, TypedValue):
        if raw.type is not None:
            return TypedValue(raw.value, validate_column_type(raw.type))
        return raw

    if isinstance(raw, Mapping):
        if WRAPPER_TYPE_KEY not in raw:
            raise InvalidInputError("Invalid value type format")
        value_key = next((k for k in WRAPPER_VALUE_KEYS if k in raw), None)
        if value_key is None:
            raise InvalidInputError("Invalid value val format")
        return TypedValue(raw[value_key], validate_column_type(raw[WRAPPER_TYPE_KEY]))

    return TypedValue(raw)


def resolve_attributes(data: Mapping[Any, Any]) -> list[Attribute]:
    """
    Resolve a write's attribute map, keeping input order.

    Raises:
        InvalidInputError: On an empty attribute name or malformed value
    """
    attributes = []
    for name, raw in data.items():
        name = str(name)
        if not name:
            raise InvalidInputError("Attribute names must be non-empty")
        if name == "id":
            raise InvalidInputError("Attribute 'id' is the identity column and cannot be set")
        attributes.append(Attribute(name, resolve_value(raw)))
    return attributes


__all__ = [
    "TYPE_ID",
    "TYPE_STRING",
    "TYPE_INTEGER",
    "TYPE_FLOAT",
    "BindType",
    "BindValue",
    "TypedValue",
    "Attribute",
    "infer_column_type",
    "infer_bind_type",
    "coerce_bind_value",
    "validate_column_type",
    "resolve_value",
    "resolve_attributes",
]
