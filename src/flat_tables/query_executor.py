"""Query executor: WHERE translation, evaluation and projection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from flat_tables.parsing.query_parser import Query
from flat_tables.parsing.set_parser import SetExpressionParser, SetToken
from flat_tables.search import Operator, search
from flat_tables.table import DEFAULT_INPUT_FS, Table, UnknownFieldError, load_table

DEFAULT_OUTPUT_FS = "\t"
DEFAULT_INTERNAL_FS = ""

CONNECTORS = {
    "and": "&",
    "or": "|",
}
GROUPING = ("(", ")")


class NoRowsMatched(Exception):
    """Raised when a query selects no rows. This is not a failure."""

    def __init__(self, query: Query) -> None:
        super().__init__(f"No rows selected from {query.table}")
        self.query = query


class PredicatePart(Enum):
    """The role of the next non-grouping token in a WHERE clause."""

    FIELD = "field"
    OPERATOR = "operator"
    LITERAL = "literal"
    CONNECTOR = "connector"

    @property
    def next(self) -> PredicatePart:
        return _PREDICATE_CYCLE[self]


_PREDICATE_CYCLE = {
    PredicatePart.FIELD: PredicatePart.OPERATOR,
    PredicatePart.OPERATOR: PredicatePart.LITERAL,
    PredicatePart.LITERAL: PredicatePart.CONNECTOR,
    PredicatePart.CONNECTOR: PredicatePart.FIELD,
}


def format_row_indices(indices: frozenset[int] | list[int], internal_fs: str = DEFAULT_INTERNAL_FS) -> str:
    """Render row indices in ascending order for diagnostics."""
    return (internal_fs or " ").join(str(i) for i in sorted(indices))


@dataclass
class QueryResult:
    """Result of a query execution."""

    query: Query
    table: Table
    selected_row_indices: list[int]
    diagnostics: list[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.selected_row_indices)

    def format_rows(self, output_fs: str = DEFAULT_OUTPUT_FS, header: bool = False) -> list[str]:
        """Project the selected fields of every selected row.

        Raises NoRowsMatched when nothing was selected, so a header line
        is never produced on its own.
        """
        if not self.selected_row_indices:
            raise NoRowsMatched(self.query)

        row_indices = [0] if header else []
        row_indices.extend(self.selected_row_indices)

        return [
            output_fs.join(self.table.cell(name, index) for name in self.query.selected_fields)
            for index in row_indices
        ]


class QueryExecutor:
    """Executes parsed queries against table files.

    Every call to execute() loads the table afresh.
    """

    def __init__(
        self,
        input_fs: str = DEFAULT_INPUT_FS,
        internal_fs: str = DEFAULT_INTERNAL_FS,
    ) -> None:
        self.input_fs = input_fs
        self.internal_fs = internal_fs
        self.set_parser = SetExpressionParser()

    def execute(self, query: Query) -> QueryResult:
        """Load the query's table and select the matching rows."""
        table = load_table(query.table, self.input_fs)
        diagnostics: list[str] = []

        if query.where:
            set_tokens = self.translate_where(table, query.where, diagnostics)
            selected = sorted(self.set_parser.evaluate(set_tokens))
        else:
            selected = list(range(1, table.row_count + 1))

        diagnostics.append(f"{len(selected)} row(s) selected from {table.path}")
        return QueryResult(query=query, table=table, selected_row_indices=selected, diagnostics=diagnostics)

    def translate_where(
        self, table: Table, where: Sequence[str], diagnostics: list[str] | None = None
    ) -> list[SetToken]:
        """Turn WHERE tokens into row index sets joined by set operators.

        Non-grouping tokens are read as repeating (field, operator,
        literal, connector) groups. Token counts are not validated, and
        connectors other than and/or are dropped.
        """
        if diagnostics is None:
            diagnostics = []
        set_tokens: list[SetToken] = []
        part = PredicatePart.FIELD
        field_name = ""
        operator_text = ""

        for token in where:
            if token in GROUPING:
                set_tokens.append(token)
                continue

            if part is PredicatePart.FIELD:
                field_name = token
            elif part is PredicatePart.OPERATOR:
                operator_text = token
            elif part is PredicatePart.LITERAL:
                set_tokens.append(self._candidate_set(table, field_name, operator_text, token, diagnostics))
            else:
                connector = CONNECTORS.get(token.lower())
                if connector is not None:
                    set_tokens.append(connector)
                else:
                    diagnostics.append(f"Ignoring '{token}' where AND or OR was expected")
            part = part.next

        return set_tokens

    def _candidate_set(
        self, table: Table, field_name: str, operator_text: str, literal: str, diagnostics: list[str]
    ) -> frozenset[int]:
        """Rows matching one predicate; unknown fields and operators match nothing."""
        predicate = f"{field_name} {operator_text} {literal}"
        try:
            operator = Operator.parse(operator_text)
            candidates = search(operator, table.column(field_name), literal)
        except (UnknownFieldError, ValueError) as e:
            diagnostics.append(f"{e} in predicate '{predicate}', no rows match")
            return frozenset()

        diagnostics.append(f"'{predicate}' matches rows: {format_row_indices(candidates, self.internal_fs)}")
        return candidates
