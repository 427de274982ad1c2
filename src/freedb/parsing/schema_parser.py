"""Parser for the schema declaration DSL.

A declaration lists ``column: type`` pairs separated by commas or newlines::

    name: string
    age: integer,   # trailing comments are allowed
    active: boolean
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from freedb.exceptions import SchemaSyntaxError
from freedb.parsing.schema_lexer import SchemaLexer


@dataclass
class ColumnSpec:
    """A column declaration before its type name is resolved."""

    name: str
    type_name: str
    lineno: int = 0


class SchemaParser:
    """Parser for schema declarations."""

    tokens = SchemaLexer.tokens

    def __init__(self) -> None:
        self.lexer = SchemaLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_declaration(self, p: yacc.YaccProduction) -> None:
        """declaration : column_list
                       | column_list COMMA"""
        p[0] = p[1]

    def p_declaration_empty(self, p: yacc.YaccProduction) -> None:
        """declaration : """
        p[0] = []

    def p_column_list_single(self, p: yacc.YaccProduction) -> None:
        """column_list : column"""
        p[0] = [p[1]]

    def p_column_list_comma(self, p: yacc.YaccProduction) -> None:
        """column_list : column_list COMMA column"""
        p[0] = p[1] + [p[3]]

    def p_column_list_newline(self, p: yacc.YaccProduction) -> None:
        """column_list : column_list column"""
        p[0] = p[1] + [p[2]]

    def p_column(self, p: yacc.YaccProduction) -> None:
        """column : IDENTIFIER COLON IDENTIFIER"""
        p[0] = ColumnSpec(name=p[1], type_name=p[3], lineno=p.lineno(1))

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SchemaSyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SchemaSyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> list[ColumnSpec]:
        """Parse a declaration and return its columns in declaration order."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.lexer.input(data)
        columns = self.parser.parse(lexer=self.lexer.lexer)
        if columns is None:
            columns = []

        seen: set[str] = set()
        for column in columns:
            if column.name in seen:
                raise SchemaSyntaxError(
                    f"Duplicate column '{column.name}' (line {column.lineno})"
                )
            seen.add(column.name)
        return columns
