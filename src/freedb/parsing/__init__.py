"""Parsing module for the schema declaration DSL."""

from freedb.parsing.schema_parser import ColumnSpec, SchemaParser

__all__ = [
    "ColumnSpec",
    "SchemaParser",
]
