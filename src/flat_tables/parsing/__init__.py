"""Parsing module for queries and WHERE set expressions."""

from flat_tables.parsing.errors import ParseError
from flat_tables.parsing.query_parser import ClauseParser, Query
from flat_tables.parsing.set_parser import SetExpressionParser

__all__ = [
    "ClauseParser",
    "ParseError",
    "Query",
    "SetExpressionParser",
]
