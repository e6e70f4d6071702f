"""Command-line interface for autotab.

This module provides a small inspection CLI: for every input file it prints
the detected format and structure followed by the first rows.

Usage
-----
    autotab data.csv
    autotab -n 10 --convert-numbers --associative report.xlsx
    autotab --rich --separator ";" --no-header export.csv
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import argparse
import logging
import sys

from autotab import __version__
from autotab.api import open_reader
from autotab.cli.output import render_plain, render_rich, should_use_rich_output
from autotab.exceptions import (
    ArchiveError,
    AutotabError,
    FileError,
    FormatDetectionError,
    FormatError,
    StructuralError,
    ValidationError,
    XMLError,
)
from autotab.logging_utils import configure_logging
from autotab.options.csv import CsvOptions
from autotab.rows import Row

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_PARSING_ERROR = 6

_SEPARATOR_ARGS = {",": ",", ";": ";", "tab": "\t"}
_ENCLOSURE_ARGS = {'"': '"', "'": "'", "none": ""}


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, (FormatError, FormatDetectionError)):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, (StructuralError, ArchiveError, XMLError)):
        return EXIT_PARSING_ERROR

    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="autotab",
        description="Detect the format and structure of CSV and XLSX files and show their first rows.",
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="CSV or XLSX files to inspect")
    parser.add_argument(
        "-n",
        "--rows",
        type=int,
        default=5,
        metavar="N",
        help="Number of rows to show (default: 5)",
    )
    parser.add_argument("--convert-numbers", action="store_true", help="Convert numeric-looking fields to numbers")
    parser.add_argument("--associative", action="store_true", help="Show rows keyed by column name")
    parser.add_argument("--no-counts", action="store_true", help="Skip the lines and rows counts")

    structure = parser.add_argument_group("structure overrides")
    structure.add_argument("--separator", choices=list(_SEPARATOR_ARGS), help="Field separator instead of detection")
    structure.add_argument("--enclosure", choices=list(_ENCLOSURE_ARGS), help="Enclosure instead of detection")
    structure.add_argument(
        "--header",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether the first line is a header, instead of detection",
    )

    output = parser.add_argument_group("output")
    output.add_argument("--rich", action="store_true", help="Render tables with Rich when writing to a terminal")
    output.add_argument("--force-rich", action="store_true", help="Render with Rich even when not writing to a TTY")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument("--trace", action="store_true", help="Enable trace mode with timestamped logging")
    parser.add_argument("--version", action="version", version=f"autotab {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace) -> CsvOptions:
    """Build reader options from parsed arguments.

    Raises
    ------
    ValueError
        If an option value is out of range

    """
    return CsvOptions(
        separator=_SEPARATOR_ARGS[parsed_args.separator] if parsed_args.separator else None,
        enclosure=_ENCLOSURE_ARGS[parsed_args.enclosure] if parsed_args.enclosure else None,
        has_header=parsed_args.header,
        convert_numbers=parsed_args.convert_numbers,
        associative=parsed_args.associative,
    )


def inspect_file(path: str, options: CsvOptions, parsed_args: argparse.Namespace) -> int:
    """Print the descriptor and first rows of one file.

    Rows with the wrong field count are reported and skipped.

    Returns
    -------
    int
        Exit code for this file

    """
    exit_code = EXIT_SUCCESS
    with open_reader(path, options) as reader:
        rows: list[Row] = []
        while len(rows) < parsed_args.rows:
            try:
                row = reader.read_next_row()
            except StructuralError as e:
                logger.warning(f"{path}: skipping row: {e}")
                exit_code = EXIT_PARSING_ERROR
                continue
            if row is None:
                break
            rows.append(row)

        include_counts = not parsed_args.no_counts
        if should_use_rich_output(parsed_args):
            render_rich(reader, rows, include_counts=include_counts)
        else:
            render_plain(reader, rows, include_counts=include_counts)
    return exit_code


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.rows < 0:
        print("Error: --rows must not be negative", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        options = build_options(parsed_args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    exit_code = EXIT_SUCCESS
    for index, path in enumerate(parsed_args.files):
        if index:
            print()
        try:
            file_code = inspect_file(path, options, parsed_args)
        except AutotabError as e:
            logger.debug("Failure details", exc_info=True)
            print(f"Error: {path}: {e}", file=sys.stderr)
            file_code = get_exit_code_for_exception(e)
        if file_code != EXIT_SUCCESS:
            exit_code = file_code

    return exit_code
