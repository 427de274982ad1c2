"""In-memory table storage for schema-checked rows."""

from __future__ import annotations

import copy
import threading
from collections.abc import Mapping
from typing import Any

from freedb.schema import Schema

ASCENDING = "asc"
DESCENDING = "desc"


class _Absent:
    """Sort key for rows lacking the ordered column; sorts below everything."""

    def __lt__(self, other: object) -> bool:
        return not isinstance(other, _Absent)

    def __gt__(self, other: object) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Absent)

    def __hash__(self) -> int:
        return 0


_ABSENT = _Absent()


def row_matches(
    row: Mapping[str, Any], conditions: Mapping[str, Any], schema: Schema | None = None
) -> bool:
    """Return whether every condition column in ``row`` equals its value.

    When a schema is given, a condition on one of its columns only matches
    values of the column's kind, so ``True`` never matches a stored ``1``.
    """
    for col, value in conditions.items():
        if schema is not None and col in schema and not schema[col].matches(value):
            return False
        if row.get(col, _ABSENT) != value:
            return False
    return True


def sort_rows(rows: list[dict[str, Any]], column: Any, direction: str = ASCENDING) -> list[dict[str, Any]]:
    """Return ``rows`` sorted by a column.

    Rows without the column sort first. Ties keep their order in both
    directions.

    Raises:
        ValueError: If direction is neither "asc" nor "desc".
    """
    direction = str(direction).lower()
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Unknown sort direction: {direction!r}")

    column = str(column)
    return sorted(
        rows,
        key=lambda row: row.get(column, _ABSENT),
        reverse=direction == DESCENDING,
    )


def take_rows(rows: list[dict[str, Any]], count: int) -> list[dict[str, Any]]:
    """Return the first ``count`` rows.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"limit must be >= 0, got {count}")
    return rows[:count]


class Table:
    """Holds the rows of one schema, in insertion order.

    Inserts and reads both take the table's lock. Rows are deep-copied on
    the way in and on the way out, so neither the inserted record nor a
    query result shares any container with the stored rows.
    """

    def __init__(self, schema: Schema | Mapping[Any, Any] | str) -> None:
        """Initialize an empty table.

        Args:
            schema: A Schema, a mapping of column name to kind (or type name),
                or a declaration string such as ``"name: string, age: integer"``.
        """
        self.schema = Schema.coerce_schema(schema)
        self._rows: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    @property
    def columns(self) -> list[str]:
        """Return the column names."""
        return list(self.schema)

    def insert(self, record: Mapping[Any, Any]) -> dict[str, Any]:
        """Insert a record and return a copy of the stored row.

        The row is converted column by column; if any column fails nothing
        is stored.

        Raises:
            SchemaMismatch: If the record's columns differ from the schema's.
            CoercionError: If a value cannot be converted to its column's kind.
        """
        with self._lock:
            row = copy.deepcopy(self.schema.coerce(record))
            self._rows.append(row)
            return copy.deepcopy(row)

    def all(self) -> list[dict[str, Any]]:
        """Return every row in insertion order."""
        return self._snapshot()

    def order_by(self, column: Any, direction: str = ASCENDING) -> list[dict[str, Any]]:
        """Return rows sorted by a column without changing the table.

        Raises:
            ValueError: If direction is neither "asc" nor "desc".
        """
        return sort_rows(self._snapshot(), column, direction)

    def limit(self, count: int) -> list[dict[str, Any]]:
        """Return the first ``count`` rows.

        Raises:
            ValueError: If count is negative.
        """
        with self._lock:
            return copy.deepcopy(take_rows(self._rows, count))

    def where(self, conditions: Mapping[Any, Any] | None = None, **kwargs: Any) -> list[dict[str, Any]]:
        """Return rows whose columns equal all the given values.

        Conditions may be passed as a mapping, as keyword arguments, or both.
        A condition value must be of its column's kind to match.
        """
        wanted = {str(k): v for k, v in (conditions or {}).items()}
        wanted.update(kwargs)
        return [row for row in self._snapshot() if row_matches(row, wanted, self.schema)]

    def _snapshot(self) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Table({self.schema.declaration()!r}, rows={len(self._rows)})"

    def __getstate__(self) -> dict[str, Any]:
        with self._lock:
            return {"schema": self.schema, "rows": [dict(row) for row in self._rows]}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.schema = state["schema"]
        self._rows = state["rows"]
        self._lock = threading.Lock()
