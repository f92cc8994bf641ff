"""Command-line interface for querying flat text tables."""

from __future__ import annotations

import argparse
import sys

from flat_tables.parsing import ClauseParser, ParseError
from flat_tables.query_executor import (
    DEFAULT_INTERNAL_FS,
    DEFAULT_OUTPUT_FS,
    NoRowsMatched,
    QueryExecutor,
)
from flat_tables.table import DEFAULT_INPUT_FS, TableNotFoundError

EXIT_OK = 0
EXIT_NO_ROWS = 100
EXIT_ERROR = 255


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="flat-query",
        description="Run a SELECT query against a delimited text file",
        epilog=(
            "Exit status is 0 when rows were printed, 100 when no rows matched "
            "and 255 on error. Quote or escape '(', ')', '<' and '>' in the shell."
        ),
    )
    arg_parser.add_argument(
        "-F",
        dest="internal_fs",
        default=DEFAULT_INTERNAL_FS,
        help="Internal field separator used when listing row indices (default: a space)",
    )
    arg_parser.add_argument(
        "-I",
        dest="input_fs",
        default=DEFAULT_INPUT_FS,
        help="Field separator of the table file (default: whitespace)",
    )
    arg_parser.add_argument(
        "-O",
        dest="output_fs",
        default=DEFAULT_OUTPUT_FS,
        help="Field separator of the output (default: tab)",
    )
    arg_parser.add_argument(
        "-H",
        dest="header",
        action="store_true",
        help="Print the table header before the selected rows",
    )
    arg_parser.add_argument(
        "-c", "--command",
        type=str,
        help="The whole query as a single string",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print how each predicate was evaluated to stderr",
    )
    arg_parser.add_argument(
        "query",
        nargs=argparse.REMAINDER,
        help="SELECT f1[,f2...] FROM <path> [WHERE <predicates>]",
    )
    return arg_parser


def run_query(
    args: list[str] | str,
    input_fs: str = DEFAULT_INPUT_FS,
    output_fs: str = DEFAULT_OUTPUT_FS,
    internal_fs: str = DEFAULT_INTERNAL_FS,
    header: bool = False,
    verbose: bool = False,
) -> int:
    """Parse, execute and print one query.

    Args:
        args: The query as command-line words, or as one string
        input_fs: Field separator of the table file
        output_fs: Field separator of the printed rows
        internal_fs: Separator used when listing row indices
        header: If True, print the header row first
        verbose: If True, print diagnostics to stderr

    Returns:
        0 when rows were printed, 100 when none matched, 255 on error
    """
    parser = ClauseParser()
    executor = QueryExecutor(input_fs=input_fs, internal_fs=internal_fs)

    try:
        if isinstance(args, str):
            query = parser.parse_string(args)
        else:
            query = parser.parse(args)
        result = executor.execute(query)
    except ParseError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except TableNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if verbose:
        for line in result.diagnostics:
            print(line, file=sys.stderr)

    try:
        lines = result.format_rows(output_fs, header)
    except NoRowsMatched:
        return EXIT_NO_ROWS

    for line in lines:
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if args.command and args.query:
        print("Error: Give the query either with -c/--command or as arguments, not both", file=sys.stderr)
        return EXIT_ERROR

    query: list[str] | str = args.command if args.command else args.query
    if not query:
        arg_parser.print_usage(sys.stderr)
        return EXIT_ERROR

    return run_query(
        query,
        input_fs=args.input_fs,
        output_fs=args.output_fs,
        internal_fs=args.internal_fs,
        header=args.header,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    sys.exit(main())
