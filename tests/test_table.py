"""Tests for loading tables from text files."""

from pathlib import Path

import pytest

from flat_tables.table import Table, TableNotFoundError, UnknownFieldError, load_table, split_line


class TestSplitLine:
    """Tests for splitting a line into cells."""

    def test_default_splits_on_whitespace_runs(self):
        """Test that the default separator collapses runs of blanks."""
        assert split_line("1   4\t7") == ["1", "4", "7"]

    def test_single_character_separator_respects_quotes(self):
        """Test that quoted cells keep the separator."""
        assert split_line('1,"a,b",3', ",") == ["1", "a,b", "3"]

    def test_single_character_separator_keeps_empty_cells(self):
        """Test that adjacent separators produce empty cells."""
        assert split_line("1,,3", ",") == ["1", "", "3"]

    def test_multi_character_separator(self):
        """Test splitting on a longer separator."""
        assert split_line("1::2::3", "::") == ["1", "2", "3"]


class TestLoadTable:
    """Tests for load_table."""

    def test_load_columns(self, tmp_path: Path):
        """Test that columns hold the header at index 0 and rows after."""
        path = tmp_path / "A"
        path.write_text("a b c\n1 4 7\n2 5 8\n3 6 9\n")

        table = load_table(path)

        assert table.fields == ["a", "b", "c"]
        assert table.row_count == 3
        assert table.column("a") == ["a", "1", "2", "3"]
        assert table.column("c") == ["c", "7", "8", "9"]

    def test_load_with_input_separator(self, tmp_path: Path):
        """Test loading a comma separated file."""
        path = tmp_path / "people.csv"
        path.write_text("name,city\nAda,London\nGrace,New York\n")

        table = load_table(path, ",")

        assert table.column("city") == ["city", "London", "New York"]

    def test_short_rows_are_padded(self, tmp_path: Path):
        """Test that every column has row_count + 1 entries."""
        path = tmp_path / "ragged"
        path.write_text("a b c\n1 2\n3 4 5 6\n")

        table = load_table(path)

        assert table.column("c") == ["c", "", "5"]
        assert all(len(table.column(name)) == table.row_count + 1 for name in table.fields)

    def test_blank_lines_are_skipped(self, tmp_path: Path):
        """Test that blank lines do not count as rows."""
        path = tmp_path / "blank"
        path.write_text("a\n1\n\n2\n   \n")

        table = load_table(path)

        assert table.row_count == 2
        assert table.column("a") == ["a", "1", "2"]

    def test_header_only(self, tmp_path: Path):
        """Test a table with no data rows."""
        path = tmp_path / "empty"
        path.write_text("a b\n")

        table = load_table(path)

        assert table.row_count == 0
        assert table.column("b") == ["b"]

    def test_duplicate_header_keeps_first_column(self, tmp_path: Path):
        """Test that the first column with a repeated name wins."""
        path = tmp_path / "dup"
        path.write_text("a a\n1 2\n")

        table = load_table(path)

        assert table.fields == ["a"]
        assert table.column("a") == ["a", "1"]

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing table raises TableNotFoundError."""
        with pytest.raises(TableNotFoundError):
            load_table(tmp_path / "nope")

    def test_undecodable_file(self, tmp_path: Path):
        """Test that a file that is not UTF-8 is reported as unreadable."""
        path = tmp_path / "latin1"
        path.write_bytes(b"name city\nJos\xe9 Paris\n")

        with pytest.raises(TableNotFoundError, match="Cannot read table"):
            load_table(path)

    def test_utf8_cells(self, tmp_path: Path):
        """Test that UTF-8 cells load unchanged."""
        path = tmp_path / "utf8"
        path.write_text("name city\nJosé Paris\n", encoding="utf-8")

        assert load_table(path).column("name") == ["name", "José"]

    def test_directory_is_not_a_table(self, tmp_path: Path):
        """Test that a directory is rejected."""
        with pytest.raises(TableNotFoundError):
            load_table(tmp_path)


class TestTable:
    """Tests for Table lookups."""

    def test_unknown_column_raises(self):
        """Test that column() distinguishes unknown fields."""
        table = Table(path=Path("t"), fields=["a"], rows={"a": ["a", "1"]}, row_count=1)

        with pytest.raises(UnknownFieldError) as exc_info:
            table.column("b")
        assert exc_info.value.field_name == "b"
        assert "Unknown field 'b'" in str(exc_info.value)

    def test_cell_of_unknown_field_is_empty(self):
        """Test that cell() degrades to an empty value."""
        table = Table(path=Path("t"), fields=["a"], rows={"a": ["a", "1"]}, row_count=1)

        assert table.cell("a", 1) == "1"
        assert table.cell("b", 1) == ""
        assert table.has_field("a")
        assert not table.has_field("b")
