"""Tests for value kinds and type name lookup."""

import datetime as dt
import pickle
from fractions import Fraction

import pytest

from freedb.exceptions import UnsupportedType
from freedb.types import KIND_NAMES, Symbol, ValueKind, kind_from_name, resolve_kind


class TestKindFromName:
    """Tests for the type name lookup."""

    def test_all_names(self):
        """Every documented type name resolves."""
        names = [
            "string", "integer", "float", "boolean", "symbol", "array", "hash",
            "date", "time", "datetime", "nil", "rational", "complex",
        ]
        assert sorted(KIND_NAMES) == sorted(names)
        for name in names:
            assert kind_from_name(name).value == name

    def test_case_insensitive(self):
        """Lookup ignores case."""
        assert kind_from_name("Integer") is ValueKind.INTEGER
        assert kind_from_name("BOOLEAN") is ValueKind.BOOLEAN

    def test_unknown_name(self):
        """Unknown names raise UnsupportedType."""
        with pytest.raises(UnsupportedType):
            kind_from_name("uint8")

    def test_unsupported_type_is_value_error(self):
        """UnsupportedType can be caught as ValueError."""
        with pytest.raises(ValueError):
            kind_from_name("varchar")


class TestResolveKind:
    """Tests for resolving column declarations."""

    def test_resolve_python_types(self):
        """Python types map to their kinds."""
        assert resolve_kind(str) is ValueKind.STRING
        assert resolve_kind(int) is ValueKind.INTEGER
        assert resolve_kind(bool) is ValueKind.BOOLEAN
        assert resolve_kind(dt.datetime) is ValueKind.DATETIME
        assert resolve_kind(dt.date) is ValueKind.DATE
        assert resolve_kind(type(None)) is ValueKind.NIL
        assert resolve_kind(Fraction) is ValueKind.RATIONAL

    def test_resolve_kind_and_name(self):
        """Kinds pass through and names are looked up."""
        assert resolve_kind(ValueKind.FLOAT) is ValueKind.FLOAT
        assert resolve_kind("symbol") is ValueKind.SYMBOL

    def test_resolve_unknown(self):
        """Unsupported declarations raise."""
        with pytest.raises(UnsupportedType):
            resolve_kind(bytes)
        with pytest.raises(UnsupportedType):
            resolve_kind(42)


class TestMatches:
    """Tests for ValueKind.matches."""

    def test_bool_is_not_a_number(self):
        assert ValueKind.BOOLEAN.matches(True)
        assert not ValueKind.INTEGER.matches(True)
        assert not ValueKind.FLOAT.matches(False)

    def test_datetime_is_not_a_date(self):
        assert ValueKind.DATE.matches(dt.date(2024, 1, 1))
        assert not ValueKind.DATE.matches(dt.datetime(2024, 1, 1, 12, 0))
        assert ValueKind.DATETIME.matches(dt.datetime(2024, 1, 1, 12, 0))

    def test_nil(self):
        assert ValueKind.NIL.matches(None)
        assert not ValueKind.NIL.matches(0)

    def test_rational(self):
        assert ValueKind.RATIONAL.matches(Fraction(1, 3))
        assert not ValueKind.RATIONAL.matches(3)


class TestSymbol:
    """Tests for interned symbols."""

    def test_interned(self):
        """Equal names give the same object."""
        assert Symbol("active") is Symbol("active")

    def test_equals_text(self):
        assert Symbol("active") == "active"
        assert repr(Symbol("active")) == ":active"

    def test_pickle_keeps_identity(self):
        """Unpickled symbols are re-interned."""
        restored = pickle.loads(pickle.dumps(Symbol("status")))
        assert restored is Symbol("status")
        assert isinstance(restored, Symbol)
