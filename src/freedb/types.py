"""Value kinds supported by freedb table columns."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from fractions import Fraction
from typing import Any

from freedb.exceptions import UnsupportedType


class Symbol(str):
    """An interned symbolic name.

    Symbols compare equal to their text, but a column of kind ``symbol``
    only accepts ``Symbol`` instances (text is converted on insert).
    """

    __slots__ = ()

    _interned: dict[str, Symbol] = {}

    def __new__(cls, name: Any) -> Symbol:
        text = str(name)
        existing = cls._interned.get(text)
        if existing is not None:
            return existing
        symbol = super().__new__(cls, text)
        return cls._interned.setdefault(text, symbol)

    def __repr__(self) -> str:
        return f":{str.__str__(self)}"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Symbol, (str.__str__(self),))


class ValueKind(Enum):
    """The kind of value a column holds."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"
    ARRAY = "array"
    HASH = "hash"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    NIL = "nil"
    RATIONAL = "rational"
    COMPLEX = "complex"

    @property
    def python_type(self) -> type:
        """Return the Python type that stores values of this kind."""
        return _PYTHON_TYPES[self]

    def matches(self, value: Any) -> bool:
        """Return whether ``value`` already is of this kind."""
        if self is ValueKind.INTEGER or self is ValueKind.FLOAT:
            if isinstance(value, bool):
                return False
        elif self is ValueKind.DATE:
            if isinstance(value, dt.datetime):
                return False
        elif self is ValueKind.RATIONAL:
            # int is not a Fraction even though it is a Rational
            return type(value) is Fraction
        return isinstance(value, _PYTHON_TYPES[self])


_PYTHON_TYPES: dict[ValueKind, type] = {
    ValueKind.STRING: str,
    ValueKind.INTEGER: int,
    ValueKind.FLOAT: float,
    ValueKind.BOOLEAN: bool,
    ValueKind.SYMBOL: Symbol,
    ValueKind.ARRAY: list,
    ValueKind.HASH: dict,
    ValueKind.DATE: dt.date,
    ValueKind.TIME: dt.time,
    ValueKind.DATETIME: dt.datetime,
    ValueKind.NIL: type(None),
    ValueKind.RATIONAL: Fraction,
    ValueKind.COMPLEX: complex,
}

# Mapping from type name tokens to ValueKind values
KIND_NAMES: dict[str, ValueKind] = {kind.value: kind for kind in ValueKind}

# Reverse mapping used when a schema is declared with Python types
_KINDS_BY_TYPE: dict[type, ValueKind] = {
    python_type: kind for kind, python_type in _PYTHON_TYPES.items()
}


def kind_from_name(name: str) -> ValueKind:
    """Look up a kind by its type name, ignoring case.

    Raises:
        UnsupportedType: If the name is not one of the known type names.
    """
    if not isinstance(name, str):
        raise UnsupportedType(name)
    kind = KIND_NAMES.get(name.strip().lower())
    if kind is None:
        raise UnsupportedType(name)
    return kind


def resolve_kind(spec: Any) -> ValueKind:
    """Resolve a column declaration to a ValueKind.

    Accepts a ValueKind, a type name (``"integer"``) or one of the Python
    types that store column values (``int``, ``datetime.date`` ...).
    """
    if isinstance(spec, ValueKind):
        return spec
    if isinstance(spec, str):
        return kind_from_name(spec)
    if isinstance(spec, type):
        kind = _KINDS_BY_TYPE.get(spec)
        if kind is not None:
            return kind
    raise UnsupportedType(spec)
