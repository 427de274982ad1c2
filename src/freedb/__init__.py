"""FreeDB - An embedded store of schema-checked tables."""

from freedb.coercion import convert_value_to_type
from freedb.exceptions import (
    CoercionError,
    ConversionError,
    CorruptDatabaseError,
    DatabaseFileNotFound,
    FreeDBError,
    InvalidBoolean,
    SchemaError,
    SchemaMismatch,
    SchemaSyntaxError,
    TableExists,
    TableNotFound,
    TypeMismatch,
    UnsupportedConversion,
    UnsupportedType,
)
from freedb.registry import Registry
from freedb.schema import Schema
from freedb.table import Table
from freedb.types import Symbol, ValueKind, kind_from_name

__all__ = [
    # Main API
    "Registry",
    "Table",
    "Schema",
    # Types
    "ValueKind",
    "Symbol",
    "kind_from_name",
    "convert_value_to_type",
    # Errors
    "FreeDBError",
    "SchemaError",
    "SchemaMismatch",
    "SchemaSyntaxError",
    "UnsupportedType",
    "CoercionError",
    "TypeMismatch",
    "ConversionError",
    "InvalidBoolean",
    "UnsupportedConversion",
    "TableNotFound",
    "TableExists",
    "DatabaseFileNotFound",
    "CorruptDatabaseError",
]

__version__ = "0.1.0"
