#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/reader.py
"""Auto-detecting reader for delimited text files.

:class:`TabularReader` composes the byte, line and row layers: it owns one
:class:`~autotab.bytefile.ByteFile`, one :class:`~autotab.lines.LineCursor`
and, once :meth:`TabularReader.auto_detect` has run, one immutable
:class:`~autotab.detection.tabular.TabularDescriptor`. The XLSX adapter
produces the same reader over its canonical CSV output.

Examples
--------
    >>> with TabularReader("samples/data.csv").auto_detect() as reader:
    ...     print(reader)
    ...     for row in reader:
    ...         print(row)

"""

from __future__ import annotations

import logging
import sys
import tempfile
from pathlib import Path
from typing import Iterator

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from autotab.bytefile import ByteFile
from autotab.constants import BOM, LineEnding
from autotab.detection.format import FileFormat, detect_format
from autotab.detection.tabular import (
    TabularDescriptor,
    detect_enclosure,
    detect_header,
    detect_separator,
    synthetic_columns,
)
from autotab.exceptions import FormatDetectionError, StructuralError, ValidationError
from autotab.lines import LineCursor
from autotab.options.csv import CsvOptions
from autotab.rows import Row, line_to_row, split_line

logger = logging.getLogger(__name__)


def _is_blank(line: str) -> bool:
    return not line.strip()


class TabularReader:
    """Detect and read rows of a delimited text file.

    Parameters
    ----------
    path : str or Path
        File to read
    options : CsvOptions, optional
        Detection settings, structural overrides and initial output toggles
    scratch : tempfile.TemporaryDirectory, optional
        Directory owned by the reader and removed when it is closed

    Attributes
    ----------
    convert_numbers : bool
        Convert numeric-looking fields to int or float. Freely toggled.
    associative : bool
        Return rows as dicts keyed by column name. Freely toggled.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist

    """

    def __init__(
        self,
        path: str | Path,
        options: CsvOptions | None = None,
        scratch: tempfile.TemporaryDirectory | None = None,
    ):
        """Bind the reader to a file; nothing is read until auto_detect()."""
        self.options = options or CsvOptions()
        self.convert_numbers = self.options.convert_numbers
        self.associative = self.options.associative

        self._scratch = scratch
        self._file = ByteFile(path)
        self._format: FileFormat | None = None
        self._cursor: LineCursor | None = None
        self._descriptor: TabularDescriptor | None = None
        self._rows_count: int | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the file handle and any scratch directory."""
        self._file.close()
        if self._scratch is not None:
            self._scratch.cleanup()
            self._scratch = None

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def auto_detect(self) -> Self:
        """Detect file format and tabular structure.

        Must run once before any row or line access. On return the cursor is
        positioned on the first data row (past the header, if any).

        Returns
        -------
        TabularReader
            This reader, for chaining

        Raises
        ------
        ValidationError
            If detection already ran
        FileAccessError
            If the file cannot be opened or read
        FormatDetectionError
            If the encoding, line ending or structure cannot be determined

        """
        if self._descriptor is not None:
            raise ValidationError("Structure already detected; a descriptor cannot be re-established")

        try:
            self._file.open()
            self._format = detect_format(self._file, self.options)
            self._cursor = LineCursor(self._file, self._format, chunk_size=self.options.chunk_size)
            self._descriptor = self._detect_descriptor(self._cursor)
        except Exception:
            self._format = None
            self._cursor = None
            self.close()
            raise

        if self._descriptor.header:
            self._cursor.read_next_line()

        logger.debug(
            f"Detected separator={self._descriptor.separator!r}, enclosure={self._descriptor.enclosure!r}, "
            f"header={self._descriptor.header}, columns={self._descriptor.columns_count} for {self.path}"
        )
        return self

    def _detect_descriptor(self, cursor: LineCursor) -> TabularDescriptor:
        first, next_offset = cursor.scan_line(cursor.data_start)
        if first is None or _is_blank(first):
            raise FormatDetectionError(f"No columns found in {self.path}")

        separator = self.options.separator or detect_separator(first)
        enclosure = self.options.enclosure if self.options.enclosure is not None else detect_enclosure(first)
        escape = TabularDescriptor.escape

        first_fields = split_line(first, separator, enclosure, escape)

        if self.options.has_header is not None:
            header = self.options.has_header
        else:
            second, _ = cursor.scan_line(next_offset)
            second_fields = split_line(second, separator, enclosure, escape) if second is not None else None
            header = detect_header(first_fields, second_fields)

        columns = tuple(first_fields) if header else synthetic_columns(len(first_fields))
        return TabularDescriptor(separator=separator, enclosure=enclosure, header=header, columns=columns)

    # ------------------------------------------------------------------
    # Established state
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Path of the file being read."""
        return self._file.path

    @property
    def descriptor(self) -> TabularDescriptor:
        """The established structure.

        Raises
        ------
        ValidationError
            If auto_detect() has not run

        """
        if self._descriptor is None:
            raise ValidationError("auto_detect() must run before reading")
        return self._descriptor

    @property
    def file_format(self) -> FileFormat:
        """The detected byte-level format."""
        if self._format is None:
            raise ValidationError("auto_detect() must run before reading")
        return self._format

    @property
    def cursor(self) -> LineCursor:
        """The line cursor."""
        if self._cursor is None:
            raise ValidationError("auto_detect() must run before reading")
        return self._cursor

    @property
    def size(self) -> int:
        return self.file_format.size

    @property
    def bom(self) -> BOM:
        return self.file_format.bom

    @property
    def encoding(self) -> str:
        return self.file_format.encoding

    @property
    def line_ending(self) -> LineEnding:
        return self.file_format.line_ending

    @property
    def separator(self) -> str:
        return self.descriptor.separator

    @property
    def enclosure(self) -> str:
        return self.descriptor.enclosure

    @property
    def escape(self) -> str:
        return self.descriptor.escape

    @property
    def header(self) -> bool:
        return self.descriptor.header

    @property
    def columns(self) -> list[str]:
        return list(self.descriptor.columns)

    @property
    def columns_count(self) -> int:
        return self.descriptor.columns_count

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def read_line(self, index: int) -> str:
        """Read raw line ``index`` counted from the data start (header included)."""
        return self.cursor.read_line(index)

    def read_next_line(self) -> str | None:
        """Read the raw line at the cursor and advance past it."""
        return self.cursor.read_next_line()

    def lines_count(self) -> int:
        """Number of non-empty lines, header included. Cached."""
        return self.cursor.lines_count()

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def line_to_row(self, line: str) -> Row:
        """Convert a line using the established structure and current toggles."""
        return line_to_row(line, self.descriptor, self.convert_numbers, self.associative)

    def read_row(self, index: int) -> Row:
        """Read data row ``index`` (0-based, header excluded).

        The cursor used by :meth:`read_next_row` is unchanged.

        Raises
        ------
        StructuralError
            If the index is out of bounds or the row has the wrong field count

        """
        descriptor = self.descriptor
        if index < 0 or (self._rows_count is not None and index >= self._rows_count):
            raise StructuralError(
                f"Row index out of bounds {index} / {self._rows_count}", expected=self._rows_count, actual=index
            )

        line = self.cursor.read_line(index + 1 if descriptor.header else index)
        return self.line_to_row(line)

    def read_next_row(self) -> Row | None:
        """Read the next non-blank row and advance past it.

        Returns
        -------
        list, dict or None
            The row, or None at end-of-file

        Raises
        ------
        StructuralError
            If the row has the wrong field count; the cursor has already moved
            past it

        """
        cursor = self.cursor
        while True:
            line = cursor.read_next_line()
            if line is None:
                return None
            if not _is_blank(line):
                return self.line_to_row(line)

    def rows_count(self) -> int:
        """Number of non-blank data lines, header excluded. Cached.

        The cursor used by :meth:`read_next_row` is unchanged.
        """
        if self._rows_count is not None:
            return self._rows_count

        cursor = self.cursor
        count = 0
        offset = cursor.data_start
        while True:
            line, offset = cursor.scan_line(offset)
            if line is None:
                break
            if not _is_blank(line):
                count += 1

        self._rows_count = count - (1 if self.descriptor.header else 0)
        return self._rows_count

    def iter_rows(self) -> Iterator[Row]:
        """Yield the remaining rows, advancing the cursor."""
        while True:
            row = self.read_next_row()
            if row is None:
                return
            yield row

    def __iter__(self) -> Iterator[Row]:
        return self.iter_rows()

    def rewind(self) -> None:
        """Move the cursor back to the first data row."""
        self.cursor.rewind()
        if self.descriptor.header:
            self.cursor.read_next_line()

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def describe(self, include_counts: bool = True) -> str:
        """Human-readable summary of the detected format and structure.

        Parameters
        ----------
        include_counts : bool, default True
            Include the lines and rows counts (computed once, then cached)

        """
        file_format = self.file_format
        descriptor = self.descriptor

        lines = [
            f"file: {self.path}",
            f"size: {file_format.size}",
            f"BOM: {file_format.bom}",
            f"encoding: {file_format.encoding}",
            f"line ending: {file_format.line_ending}",
        ]
        if include_counts:
            lines.append(f"lines count: {self.lines_count()}")
        lines += [
            f"separator: {descriptor.separator_label}",
            f"enclosure: {descriptor.enclosure_label}",
            f"header: {'true' if descriptor.header else 'false'}",
        ]
        if include_counts:
            lines.append(f"rows count: {self.rows_count()}")
        lines.append(f"columns ({descriptor.columns_count}): {', '.join(descriptor.columns)}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        state = "detected" if self._descriptor is not None else "undetected"
        return f"TabularReader(path={self.path!r}, {state})"
