"""Tests for converting raw values to column kinds."""

import datetime as dt
from fractions import Fraction

import pytest

from freedb.coercion import coerce_column, convert_value_to_type
from freedb.exceptions import (
    ConversionError,
    InvalidBoolean,
    TypeMismatch,
    UnsupportedConversion,
)
from freedb.types import Symbol, ValueKind


class TestIdempotence:
    """Values already of the right kind are returned unchanged."""

    @pytest.mark.parametrize(
        "value, kind",
        [
            ("text", ValueKind.STRING),
            (42, ValueKind.INTEGER),
            (1.5, ValueKind.FLOAT),
            (False, ValueKind.BOOLEAN),
            ([1, 2], ValueKind.ARRAY),
            ({"a": 1}, ValueKind.HASH),
            (dt.date(2024, 1, 1), ValueKind.DATE),
            (None, ValueKind.NIL),
            (Fraction(1, 3), ValueKind.RATIONAL),
            (1 + 2j, ValueKind.COMPLEX),
        ],
    )
    def test_same_object(self, value, kind):
        assert convert_value_to_type(value, kind) is value


class TestBoolean:
    """Tests for boolean conversion."""

    @pytest.mark.parametrize("text", ["true", "TRUE", "True"])
    def test_true(self, text):
        assert convert_value_to_type(text, ValueKind.BOOLEAN) is True

    @pytest.mark.parametrize("text", ["false", "FALSE", "False"])
    def test_false(self, text):
        assert convert_value_to_type(text, ValueKind.BOOLEAN) is False

    @pytest.mark.parametrize("value", ["yes", "1", "", 1])
    def test_invalid(self, value):
        """Anything but true/false text raises InvalidBoolean."""
        with pytest.raises(InvalidBoolean):
            convert_value_to_type(value, ValueKind.BOOLEAN)

    def test_invalid_boolean_is_conversion_error(self):
        with pytest.raises(ConversionError):
            convert_value_to_type("maybe", ValueKind.BOOLEAN)


class TestNumbers:
    """Tests for integer and float conversion."""

    def test_integer_from_text(self):
        assert convert_value_to_type("123", ValueKind.INTEGER) == 123
        assert convert_value_to_type("-7", ValueKind.INTEGER) == -7
        assert convert_value_to_type("1_000", ValueKind.INTEGER) == 1000

    def test_integer_malformed(self):
        with pytest.raises(ConversionError):
            convert_value_to_type("12abc", ValueKind.INTEGER)
        with pytest.raises(ConversionError):
            convert_value_to_type("1.5", ValueKind.INTEGER)

    def test_integer_rejects_boolean(self):
        with pytest.raises(ConversionError):
            convert_value_to_type(True, ValueKind.INTEGER)

    def test_float_from_text(self):
        assert convert_value_to_type("3.25", ValueKind.FLOAT) == 3.25
        assert convert_value_to_type("1e3", ValueKind.FLOAT) == 1000.0

    def test_float_from_int(self):
        result = convert_value_to_type(5, ValueKind.FLOAT)
        assert result == 5.0
        assert isinstance(result, float)

    def test_float_malformed(self):
        with pytest.raises(ConversionError):
            convert_value_to_type("three", ValueKind.FLOAT)


class TestTextAndSymbols:
    """Tests for string and symbol conversion."""

    def test_string_stringifies(self):
        assert convert_value_to_type(42, ValueKind.STRING) == "42"
        assert convert_value_to_type(None, ValueKind.STRING) == "None"

    def test_symbol_from_text(self):
        result = convert_value_to_type("admin", ValueKind.SYMBOL)
        assert isinstance(result, Symbol)
        assert result is Symbol("admin")

    def test_symbol_from_non_text(self):
        with pytest.raises(ConversionError):
            convert_value_to_type(5, ValueKind.SYMBOL)


class TestCalendar:
    """Tests for date, time and datetime conversion."""

    def test_date(self):
        assert convert_value_to_type("2024-01-31", ValueKind.DATE) == dt.date(2024, 1, 31)

    def test_time(self):
        assert convert_value_to_type("10:30:00", ValueKind.TIME) == dt.time(10, 30)

    def test_datetime(self):
        result = convert_value_to_type("2024-01-31T10:30:00", ValueKind.DATETIME)
        assert result == dt.datetime(2024, 1, 31, 10, 30)

    def test_unparsable_date(self):
        with pytest.raises(ConversionError):
            convert_value_to_type("not a date", ValueKind.DATE)
        with pytest.raises(ConversionError):
            convert_value_to_type("2024-02-30", ValueKind.DATE)

    def test_date_from_datetime_is_not_converted(self):
        """A datetime is not silently accepted as a date."""
        with pytest.raises(ConversionError):
            convert_value_to_type(dt.datetime(2024, 1, 1), ValueKind.DATE)


class TestOtherKinds:
    """Tests for rational, complex and kinds without conversion rules."""

    def test_rational(self):
        assert convert_value_to_type("3/4", ValueKind.RATIONAL) == Fraction(3, 4)

    def test_complex(self):
        assert convert_value_to_type("1+2j", ValueKind.COMPLEX) == 1 + 2j

    @pytest.mark.parametrize("kind", [ValueKind.ARRAY, ValueKind.HASH, ValueKind.NIL])
    def test_unsupported_conversion(self, kind):
        with pytest.raises(UnsupportedConversion):
            convert_value_to_type("text", kind)


class TestCoerceColumn:
    """Tests for convert-and-check of a single column."""

    def test_converts(self):
        assert coerce_column("age", "30", ValueKind.INTEGER) == 30

    def test_type_mismatch_after_conversion(self, monkeypatch):
        """A converter producing the wrong kind raises TypeMismatch."""
        from freedb import coercion

        monkeypatch.setitem(coercion.CONVERTERS, ValueKind.INTEGER, lambda value: "oops")
        with pytest.raises(TypeMismatch) as exc_info:
            coerce_column("age", "30", ValueKind.INTEGER)
        assert exc_info.value.column == "age"
        assert "age" in str(exc_info.value)
