"""Column-oriented tables loaded from flat delimited text files."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_INPUT_FS = " "


class TableNotFoundError(FileNotFoundError):
    """Raised when the FROM target is not a readable regular file."""


class UnknownFieldError(KeyError):
    """Raised when a field is not part of the table header."""

    def __init__(self, field_name: str) -> None:
        super().__init__(field_name)
        self.field_name = field_name

    def __str__(self) -> str:
        return f"Unknown field '{self.field_name}'"


@dataclass
class Table:
    """A table loaded fully into memory.

    Each column is a list whose index 0 holds the header value and whose
    indices 1..row_count hold the data rows in file order.
    """

    path: Path
    fields: list[str] = field(default_factory=list)
    rows: dict[str, list[str]] = field(default_factory=dict)
    row_count: int = 0

    def has_field(self, name: str) -> bool:
        return name in self.rows

    def column(self, name: str) -> list[str]:
        """Return the cell values of a field, header first."""
        try:
            return self.rows[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def cell(self, name: str, index: int) -> str:
        """Return a single cell, or an empty string if the field is unknown."""
        values = self.rows.get(name)
        if values is None:
            return ""
        return values[index]


def split_line(line: str, input_fs: str = DEFAULT_INPUT_FS) -> list[str]:
    """Split one line of a table file into cells."""
    if input_fs == " " or input_fs == "":
        return line.split()
    if len(input_fs) == 1:
        # csv keeps quoted cells that contain the separator intact
        return next(csv.reader(io.StringIO(line), delimiter=input_fs), [])
    return line.split(input_fs)


def load_table(path: str | Path, input_fs: str = DEFAULT_INPUT_FS) -> Table:
    """Load a delimited text file into a Table.

    The first non-blank line is the header. Short rows are padded with
    empty cells and surplus cells are dropped so that every column has
    the same length.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise TableNotFoundError(f"Table not found: {file_path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TableNotFoundError(f"Cannot read table {file_path}: {e}") from e

    lines = [line for line in content.splitlines() if line.strip()]
    table = Table(path=file_path)
    if not lines:
        return table

    header = split_line(lines[0], input_fs)
    columns: list[tuple[str, int]] = []
    for position, name in enumerate(header):
        if name in table.rows:
            continue  # first column with a given name wins
        table.fields.append(name)
        table.rows[name] = [name]
        columns.append((name, position))

    for line in lines[1:]:
        cells = split_line(line, input_fs)
        for name, position in columns:
            table.rows[name].append(cells[position] if position < len(cells) else "")
    table.row_count = len(lines) - 1

    return table
