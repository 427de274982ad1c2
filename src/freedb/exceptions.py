"""Exceptions raised by the freedb store."""

from __future__ import annotations

from typing import Any


class FreeDBError(Exception):
    """Base class for all freedb errors."""


class SchemaError(FreeDBError):
    """Base class for schema declaration and row shape errors."""


class SchemaMismatch(SchemaError):
    """Raised when a row's columns differ from the table's schema."""

    def __init__(self, expected: list[str], missing: list[str], extra: list[str]) -> None:
        self.expected = expected
        self.missing = missing
        self.extra = extra
        parts = [f"Column mismatch. Table expects: {expected}"]
        if missing:
            parts.append(f"missing: {missing}")
        if extra:
            parts.append(f"unexpected: {extra}")
        super().__init__("; ".join(parts))


class SchemaSyntaxError(SchemaError, SyntaxError):
    """Raised when a schema declaration string cannot be parsed."""


class UnsupportedType(SchemaError, ValueError):
    """Raised for a type name or kind that the store does not know."""

    def __init__(self, type_spec: Any) -> None:
        self.type_spec = type_spec
        super().__init__(f"Unsupported type: {type_spec!r}")


class CoercionError(FreeDBError, ValueError):
    """Base class for failures converting a value to a column's kind."""


class TypeMismatch(CoercionError):
    """Raised when a (converted) value is not of the column's kind."""

    def __init__(self, column: str, expected: Any, value: Any) -> None:
        self.column = column
        self.expected = expected
        self.value = value
        super().__init__(
            f"Type mismatch for '{column}'. Expected {expected}, "
            f"got {type(value).__name__}"
        )


class ConversionError(CoercionError):
    """Raised when text cannot be parsed into the requested kind."""


class InvalidBoolean(ConversionError):
    """Raised when a boolean column receives something other than true/false."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid boolean value: {value!r}")


class UnsupportedConversion(CoercionError):
    """Raised when a kind has no conversion rule for a mismatched value."""


class TableNotFound(FreeDBError, KeyError):
    """Raised when looking up a table name that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' does not exist.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class TableExists(FreeDBError):
    """Raised when creating a table whose name is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' already exists.")


class DatabaseFileNotFound(FreeDBError, FileNotFoundError):
    """Raised when loading from a database file that does not exist."""

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"File '{path}' does not exist.")

    def __str__(self) -> str:
        return str(self.args[0])


class CorruptDatabaseError(FreeDBError):
    """Raised when a database file cannot be decoded."""
