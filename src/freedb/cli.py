"""Command line access to a freedb database file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from freedb.coercion import coerce_column
from freedb.config import get_settings
from freedb.exceptions import FreeDBError
from freedb.logging import setup_logging
from freedb.registry import Registry
from freedb.table import Table, sort_rows, take_rows


def parse_assignments(pairs: list[str]) -> dict[str, str]:
    """Parse ``column=value`` arguments into a dict."""
    result: dict[str, str] = {}
    for pair in pairs:
        column, sep, value = pair.partition("=")
        if not sep or not column:
            raise ValueError(f"Expected column=value, got {pair!r}")
        result[column.strip()] = value
    return result


def format_value(value: Any) -> str:
    """Format a stored value for display."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def print_rows(table: Table, rows: list[dict[str, Any]]) -> None:
    """Print rows as an aligned text table."""
    columns = table.columns
    if not columns:
        print(f"({len(rows)} rows)")
        return

    cells = [[format_value(row.get(col)) for col in columns] for row in rows]
    widths = [
        max([len(col)] + [len(line[i]) for line in cells])
        for i, col in enumerate(columns)
    ]

    print("  ".join(col.ljust(w) for col, w in zip(columns, widths)))
    print("  ".join("-" * w for w in widths))
    for line in cells:
        print("  ".join(cell.ljust(w) for cell, w in zip(line, widths)))
    print(f"({len(rows)} rows)")


def _select(table: Table, args: argparse.Namespace) -> list[dict[str, Any]]:
    conditions = {
        column: coerce_column(column, value, table.schema[column])
        if column in table.schema
        else value
        for column, value in parse_assignments(args.where or []).items()
    }

    rows = table.where(conditions)
    if args.order_by:
        rows = sort_rows(rows, args.order_by, "desc" if args.desc else "asc")
    if args.limit is not None:
        rows = take_rows(rows, args.limit)
    return rows


def run_command(registry: Registry, args: argparse.Namespace) -> int:
    """Execute one parsed command against a registry."""
    if args.command == "tables":
        for name in sorted(registry.tables()):
            print(name)
    elif args.command == "schema":
        table = registry.table(args.name)
        for column, kind in table.schema.items():
            print(f"{column}: {kind.value}")
    elif args.command == "create":
        if not registry.create_table(args.name, args.declaration):
            print(f"Table '{args.name}' already exists.", file=sys.stderr)
            return 1
        registry.flush()
        print(f"Created table '{args.name}'")
    elif args.command == "insert":
        table = registry.table(args.name)
        table.insert(parse_assignments(args.values))
        registry.flush()
        print(f"Inserted 1 row into '{args.name}'")
    elif args.command == "rows":
        table = registry.table(args.name)
        print_rows(table, _select(table, args))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    arg_parser = argparse.ArgumentParser(
        prog="freedb",
        description="Inspect and edit a freedb database file",
    )
    arg_parser.add_argument(
        "-d", "--database",
        type=Path,
        default=None,
        help="Path to the database file (default: FREEDB_DB_FILE or free.db)",
    )
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("tables", help="List table names")

    schema_parser = subparsers.add_parser("schema", help="Show a table's columns")
    schema_parser.add_argument("name")

    create_parser = subparsers.add_parser("create", help="Create a table")
    create_parser.add_argument("name")
    create_parser.add_argument(
        "declaration",
        help='Column declaration, e.g. "name: string, age: integer"',
    )

    insert_parser = subparsers.add_parser("insert", help="Insert one row")
    insert_parser.add_argument("name")
    insert_parser.add_argument("values", nargs="*", metavar="column=value")

    rows_parser = subparsers.add_parser("rows", help="Print rows of a table")
    rows_parser.add_argument("name")
    rows_parser.add_argument(
        "-w", "--where",
        action="append",
        metavar="column=value",
        help="Only rows whose column equals value (repeatable)",
    )
    rows_parser.add_argument("-o", "--order-by", metavar="COLUMN")
    rows_parser.add_argument("--desc", action="store_true", help="Sort descending")
    rows_parser.add_argument("-n", "--limit", type=int)

    return arg_parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    path = args.database if args.database is not None else Path(settings.db_file)
    registry = Registry(path, autoload=False, settings=settings)
    try:
        if path.exists():
            registry.load_from_file(path)
        return run_command(registry, args)
    except (FreeDBError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
