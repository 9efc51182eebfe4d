# docstore/schema/__init__.py
"""
Column types, value resolution and schema reconciliation.

The reconciler lives in docstore.schema.reconciler; it depends on the query
builder, which depends on the types exported here.
"""

from docstore.schema.types import (
    TYPE_FLOAT,
    TYPE_ID,
    TYPE_INTEGER,
    TYPE_STRING,
    Attribute,
    BindType,
    BindValue,
    TypedValue,
    coerce_bind_value,
    infer_bind_type,
    infer_column_type,
    resolve_attributes,
    resolve_value,
    validate_column_type,
)

__all__ = [
    "TYPE_FLOAT",
    "TYPE_ID",
    "TYPE_INTEGER",
    "TYPE_STRING",
    "Attribute",
    "BindType",
    "BindValue",
    "TypedValue",
    "coerce_bind_value",
    "infer_bind_type",
    "infer_column_type",
    "resolve_attributes",
    "resolve_value",
    "validate_column_type",
]
