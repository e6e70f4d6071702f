"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/autotab/cli/output.py
from __future__ import annotations

import argparse
import sys
from typing import IO, Sequence

from autotab.reader import TabularReader
from autotab.rows import Row


def should_use_rich_output(args: argparse.Namespace, stream: IO[str] | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when the --rich flag is set and either --force-rich
    is set or the output stream is a TTY.

    """
    if not args.rich:
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def _row_values(row: Row) -> list[str]:
    values = row.values() if isinstance(row, dict) else row
    return [str(value) for value in values]


def render_plain(
    reader: TabularReader,
    rows: Sequence[Row],
    include_counts: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Print the descriptor followed by one row per line."""
    out = stream or sys.stdout
    print(reader.describe(include_counts=include_counts), file=out)
    print(file=out)
    for index, row in enumerate(rows):
        print(f"{index}: {row}", file=out)


def render_rich(reader: TabularReader, rows: Sequence[Row], include_counts: bool = True) -> None:
    """Print the descriptor and rows as Rich tables."""
    from rich.console import Console
    from rich.table import Table

    console = Console()

    summary = Table(title="Detected Format", show_header=False)
    summary.add_column("Property", style="cyan")
    summary.add_column("Value", style="yellow")
    for line in reader.describe(include_counts=include_counts).splitlines():
        key, _, value = line.partition(": ")
        summary.add_row(key, value)
    console.print(summary)

    table = Table(title=f"First {len(rows)} rows")
    for column in reader.columns:
        table.add_column(column, no_wrap=False)
    for row in rows:
        table.add_row(*_row_values(row))
    console.print(table)
