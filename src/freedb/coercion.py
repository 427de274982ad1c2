"""Conversion of raw input values to column kinds."""

from __future__ import annotations

import datetime as dt
from fractions import Fraction
from typing import Any, Callable

from freedb.exceptions import (
    ConversionError,
    InvalidBoolean,
    TypeMismatch,
    UnsupportedConversion,
)
from freedb.types import Symbol, ValueKind


def _to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise InvalidBoolean(value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ConversionError(f"Cannot convert boolean {value!r} to integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConversionError(f"Invalid integer value: {value!r}") from e


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ConversionError(f"Cannot convert boolean {value!r} to float")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConversionError(f"Invalid float value: {value!r}") from e


def _to_symbol(value: Any) -> Symbol:
    if not isinstance(value, str):
        raise ConversionError(f"Cannot convert {type(value).__name__} to symbol")
    return Symbol(value)


def _parse_text(parse: Callable[[str], Any], label: str) -> Callable[[Any], Any]:
    """Build a converter that applies ``parse`` to text values only."""

    def convert(value: Any) -> Any:
        if not isinstance(value, str):
            raise ConversionError(
                f"Cannot convert {type(value).__name__} to {label}: {value!r}"
            )
        try:
            return parse(value.strip())
        except (TypeError, ValueError, ZeroDivisionError) as e:
            raise ConversionError(f"Invalid {label} value: {value!r}") from e

    return convert


# Conversion rules by kind. Kinds missing here accept only values that
# already match.
CONVERTERS: dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.BOOLEAN: _to_boolean,
    ValueKind.INTEGER: _to_integer,
    ValueKind.FLOAT: _to_float,
    ValueKind.STRING: str,
    ValueKind.SYMBOL: _to_symbol,
    ValueKind.DATE: _parse_text(dt.date.fromisoformat, "date"),
    ValueKind.TIME: _parse_text(dt.time.fromisoformat, "time"),
    ValueKind.DATETIME: _parse_text(dt.datetime.fromisoformat, "datetime"),
    ValueKind.RATIONAL: _parse_text(Fraction, "rational"),
    ValueKind.COMPLEX: _parse_text(complex, "complex"),
}


def convert_value_to_type(value: Any, kind: ValueKind) -> Any:
    """Convert ``value`` to ``kind``.

    Values that already are of the requested kind are returned unchanged.

    Raises:
        InvalidBoolean: For boolean columns given anything but true/false text.
        ConversionError: When text cannot be parsed into the kind.
        UnsupportedConversion: When the kind has no conversion rule.
    """
    if kind.matches(value):
        return value

    converter = CONVERTERS.get(kind)
    if converter is None:
        raise UnsupportedConversion(
            f"Unsupported conversion for type: {kind.value} "
            f"(got {type(value).__name__})"
        )
    return converter(value)


def coerce_column(column: str, value: Any, kind: ValueKind) -> Any:
    """Convert one column value and verify the result has the column's kind."""
    converted = convert_value_to_type(value, kind)
    if not kind.matches(converted):
        raise TypeMismatch(column, kind.value, converted)
    return converted
