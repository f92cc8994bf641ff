"""Flat Tables - SQL-style queries over flat delimited text files."""

from flat_tables.parsing import ClauseParser, ParseError, Query, SetExpressionParser
from flat_tables.query_executor import NoRowsMatched, QueryExecutor, QueryResult
from flat_tables.search import Operator, search
from flat_tables.table import Table, TableNotFoundError, UnknownFieldError, load_table

__all__ = [
    # Main API
    "ClauseParser",
    "QueryExecutor",
    "QueryResult",
    "Query",
    # Primitives
    "Table",
    "load_table",
    "Operator",
    "search",
    "SetExpressionParser",
    # Errors
    "ParseError",
    "TableNotFoundError",
    "UnknownFieldError",
    "NoRowsMatched",
]

__version__ = "0.1.0"
