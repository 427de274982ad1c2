"""Schema class binding column names to value kinds."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator

from freedb.coercion import coerce_column
from freedb.exceptions import SchemaMismatch
from freedb.parsing import SchemaParser
from freedb.types import ValueKind, kind_from_name, resolve_kind


class Schema(Mapping):
    """Immutable mapping from column name to ValueKind."""

    def __init__(self, columns: Mapping[Any, ValueKind]) -> None:
        """Initialize a schema from already resolved kinds.

        Use ``from_columns`` or ``parse`` to build a schema from type names.
        """
        self._columns: Mapping[str, ValueKind] = MappingProxyType(
            {str(name): kind for name, kind in columns.items()}
        )

    @classmethod
    def from_columns(cls, columns: Mapping[Any, Any]) -> Schema:
        """Create a schema from column declarations.

        Args:
            columns: Mapping of column name to a ValueKind, a type name such
                as ``"integer"``, or a Python type such as ``int``.

        Raises:
            UnsupportedType: If any column declares an unknown kind.
        """
        if isinstance(columns, Schema):
            return columns
        return cls({name: resolve_kind(spec) for name, spec in columns.items()})

    @classmethod
    def parse(cls, declaration: str) -> Schema:
        """Parse a declaration like ``"name: string, age: integer"``.

        Raises:
            SchemaSyntaxError: If the declaration is malformed.
            UnsupportedType: If a type name is unknown.
        """
        parser = SchemaParser()
        specs = parser.parse(declaration)
        return cls({spec.name: kind_from_name(spec.type_name) for spec in specs})

    @classmethod
    def coerce_schema(cls, schema: Schema | Mapping[Any, Any] | str) -> Schema:
        """Accept any supported schema form and return a Schema."""
        if isinstance(schema, str):
            return cls.parse(schema)
        return cls.from_columns(schema)

    def coerce(self, record: Mapping[Any, Any]) -> dict[str, Any]:
        """Validate a record against the schema and return the converted row.

        Raises:
            SchemaMismatch: If the record's columns differ from the schema's.
            CoercionError: If any value cannot be converted to its column's kind.
        """
        row = {str(name): value for name, value in record.items()}
        if row.keys() != self._columns.keys():
            raise SchemaMismatch(
                expected=sorted(self._columns),
                missing=sorted(self._columns.keys() - row.keys()),
                extra=sorted(row.keys() - self._columns.keys()),
            )
        return {
            name: coerce_column(name, value, self._columns[name])
            for name, value in row.items()
        }

    def declaration(self) -> str:
        """Render the schema in declaration syntax."""
        return ", ".join(f"{name}: {kind.value}" for name, kind in self._columns.items())

    def __getitem__(self, name: str) -> ValueKind:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Schema):
            return dict(self._columns) == dict(other._columns)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._columns.items()))

    def __repr__(self) -> str:
        return f"Schema({self.declaration()!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Schema, (dict(self._columns),))
