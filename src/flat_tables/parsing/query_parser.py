"""Clause parser for SELECT/FROM/WHERE queries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from flat_tables.parsing.errors import ParseError
from flat_tables.parsing.query_lexer import QueryLexer


class Clause(Enum):
    """The clause currently collecting tokens."""

    NONE = "none"
    SELECT = "select"
    FROM = "from"
    WHERE = "where"


CLAUSE_KEYWORDS: dict[str, Clause] = {
    "select": Clause.SELECT,
    "from": Clause.FROM,
    "where": Clause.WHERE,
}

_FIELD_SPLIT = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class Query:
    """A parsed query."""

    selected_fields: tuple[str, ...] = ()
    table: str = ""
    where: tuple[str, ...] = ()


class ClauseParser:
    """Parser that sorts query words into their clauses."""

    def __init__(self) -> None:
        self.lexer: QueryLexer | None = None

    def parse(self, args: list[str]) -> Query:
        """Parse a query already split into words, as on a command line."""
        clause = Clause.NONE
        selected_fields: list[str] = []
        table = ""
        where: list[str] = []

        for arg in args:
            keyword = CLAUSE_KEYWORDS.get(arg.lower())
            if keyword is not None:
                clause = keyword
                continue

            if clause is Clause.SELECT:
                selected_fields.extend(name for name in _FIELD_SPLIT.split(arg) if name)
            elif clause is Clause.FROM:
                table = arg
            elif clause is Clause.WHERE:
                where.append(arg)
            else:
                raise ParseError(f"Unexpected '{arg}' before SELECT, FROM or WHERE")

        if not selected_fields:
            raise ParseError("No fields given in SELECT clause")
        if not table:
            raise ParseError("No table given in FROM clause")

        return Query(selected_fields=tuple(selected_fields), table=table, where=tuple(where))

    def parse_string(self, data: str) -> Query:
        """Parse a query given as one string."""
        if self.lexer is None:
            self.lexer = QueryLexer()
            self.lexer.build()
        return self.parse(self.lexer.split(data))
