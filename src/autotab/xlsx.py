#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/xlsx.py
"""Streaming extraction of the first worksheet of an XLSX workbook.

The workbook is read as a ZIP archive: the shared-string table and the
first worksheet are parsed with a streaming ``iterparse`` loop, so neither
part is ever loaded into a tree. The resulting rectangular table is written
as a canonical CSV (UTF-8 BOM, ``,`` separator, ``"`` enclosure, ``\\``
escape, ``\\n`` line ending) into a scratch directory, and a
:class:`~autotab.reader.TabularReader` is opened over it.

Only cell values are extracted. Formulas, styles, dates and any sheet
other than the first are ignored.
"""

from __future__ import annotations

import codecs
import logging
import tempfile
import zipfile
from dataclasses import fields
from pathlib import Path
from typing import IO, Iterable, Sequence

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, iterparse

from autotab.constants import (
    ARCHIVE_ERROR_REASONS,
    CANONICAL_CSV_ENCLOSURE,
    CANONICAL_CSV_ENCODING,
    CANONICAL_CSV_ESCAPE,
    CANONICAL_CSV_LINE_TERMINATOR,
    CANONICAL_CSV_SEPARATOR,
)
from autotab.exceptions import ArchiveError, XMLError
from autotab.options.csv import CsvOptions
from autotab.options.xlsx import XlsxOptions
from autotab.reader import TabularReader
from autotab.utils.security import archive_error_for, validate_zip_archive
from autotab.utils.spreadsheet import column_index, sanitize_cell_text

logger = logging.getLogger(__name__)

_XML_EVENTS = ("start", "end")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _iter_xml(stream: IO[bytes], part_name: str) -> Iterable[tuple[str, object]]:
    try:
        yield from iterparse(stream, events=_XML_EVENTS)
    except (ParseError, DefusedXmlException) as e:
        raise XMLError(f"Malformed XML in {part_name}: {e}", part_name=part_name, original_error=e) from e


def read_shared_strings(stream: IO[bytes], part_name: str = "sharedStrings.xml") -> list[str]:
    """Parse a shared-string table.

    Each ``si`` item yields one string: the concatenation of its direct
    ``t`` text and its rich-text ``r/t`` runs. Phonetic runs (``rPh``) are
    skipped and an empty ``t`` yields ``""``.

    Parameters
    ----------
    stream : IO[bytes]
        The ``sharedStrings.xml`` entry
    part_name : str
        Entry name, for error messages

    Returns
    -------
    list[str]
        Strings in index order

    Raises
    ------
    XMLError
        If the XML is malformed

    """
    strings: list[str] = []
    path: list[str] = []
    parts: list[str] | None = None

    for event, elem in _iter_xml(stream, part_name):
        name = _local_name(elem.tag)  # type: ignore[attr-defined]

        if event == "start":
            path.append(name)
            if name == "si":
                parts = []
            continue

        # end events also fire for self-closing elements, keeping the path balanced
        if name == "t" and parts is not None and "rPh" not in path:
            if path[-2] == "si" or path[-3:-1] == ["si", "r"]:
                parts.append(elem.text or "")  # type: ignore[attr-defined]
        elif name == "si" and parts is not None:
            strings.append("".join(parts))
            parts = None
            elem.clear()  # type: ignore[attr-defined]
        path.pop()

    logger.debug(f"Read {len(strings)} shared strings from {part_name}")
    return strings


def _resolve_value(text: str | None, cell_type: str | None, shared_strings: Sequence[str], part_name: str) -> str:
    if cell_type != "s":
        return text or ""

    try:
        index = int((text or "").strip())
    except ValueError as e:
        raise XMLError(f"Invalid shared string index {text!r}", part_name=part_name, original_error=e) from e

    if not 0 <= index < len(shared_strings):
        raise XMLError(
            f"Shared string index out of range {index} / {len(shared_strings)}",
            part_name=part_name,
        )
    return shared_strings[index]


def _finish_row(row: list[str], width: int, part_name: str) -> list[str]:
    if len(row) < width:
        return row + [""] * (width - len(row))
    if len(row) > width:
        overflow = row[width:]
        if any(overflow):
            raise XMLError(f"Row wider than the first row - {len(row)} / {width}", part_name=part_name)
        return row[:width]
    return row


def read_sheet_table(
    stream: IO[bytes],
    shared_strings: Sequence[str],
    part_name: str = "sheet1.xml",
) -> list[list[str]]:
    """Parse a worksheet into a rectangular table of strings.

    Cells are placed by the column letters of their ``r`` reference; gaps
    are filled with ``""`` and a cell without a reference follows the
    previous one. The first row fixes the width: shorter rows are padded,
    and wider rows may only overflow with empty cells, which are dropped.

    Parameters
    ----------
    stream : IO[bytes]
        The worksheet entry
    shared_strings : Sequence[str]
        Strings referenced by cells of type ``s``
    part_name : str
        Entry name, for error messages

    Returns
    -------
    list[list[str]]
        Rows of cell text, newlines replaced with spaces

    Raises
    ------
    XMLError
        If the XML is malformed, a reference is invalid or out of order, a
        shared-string index is invalid, a row overflows with data, or the
        sheet has no rows

    """
    table: list[list[str]] = []
    path: list[str] = []
    row: list[str] | None = None
    cell_type: str | None = None
    width: int | None = None

    for event, elem in _iter_xml(stream, part_name):
        name = _local_name(elem.tag)  # type: ignore[attr-defined]

        if event == "start":
            path.append(name)
            if name == "row" and path[-2:] == ["sheetData", "row"]:
                row = []
            elif name == "c" and row is not None and path[-2] == "row":
                cell_type = elem.get("t")  # type: ignore[attr-defined]
                reference = elem.get("r")  # type: ignore[attr-defined]
                if reference:
                    try:
                        index = column_index(reference)
                    except ValueError as e:
                        raise XMLError(str(e), part_name=part_name, original_error=e) from e
                    if index < len(row):
                        raise XMLError(f"Cell {reference} is out of order", part_name=part_name)
                    row.extend([""] * (index - len(row)))
                row.append("")
            continue

        if row is not None and name == "v" and path[-3:-1] == ["row", "c"]:
            row[-1] = _resolve_value(elem.text, cell_type, shared_strings, part_name)  # type: ignore[attr-defined]
        elif row is not None and name == "t" and "is" in path and "rPh" not in path:
            # inline string, plain or rich-text run
            row[-1] += elem.text or ""  # type: ignore[attr-defined]
        elif name == "row" and row is not None:
            cells = [sanitize_cell_text(value) for value in row]
            if width is None:
                if cells:
                    width = len(cells)
                    table.append(cells)
                else:
                    logger.debug(f"Skipping empty leading row in {part_name}")
            else:
                table.append(_finish_row(cells, width, part_name))
            row = None
            elem.clear()  # type: ignore[attr-defined]
        path.pop()

    if not table:
        raise XMLError("Worksheet has no rows", part_name=part_name)

    logger.debug(f"Read {len(table)} rows x {width} columns from {part_name}")
    return table


def extract_table(path: str | Path, options: XlsxOptions | None = None) -> list[list[str]]:
    """Extract the worksheet of an XLSX workbook as a rectangular table.

    Parameters
    ----------
    path : str or Path
        Workbook path
    options : XlsxOptions, optional
        Entry names and archive limits

    Raises
    ------
    ArchiveSecurityError
        If the archive fails validation
    ArchiveError
        If the archive cannot be opened, or the worksheet entry is missing
    XMLError
        If the worksheet or shared strings are malformed

    """
    options = options or XlsxOptions()

    validate_zip_archive(
        path,
        max_compression_ratio=options.max_compression_ratio,
        max_uncompressed_size=options.max_uncompressed_size,
        max_entries=options.max_zip_entries,
    )

    try:
        with zipfile.ZipFile(path, "r") as zf:
            names = set(zf.namelist())
            if options.sheet_entry not in names:
                raise ArchiveError(
                    f"Cannot find {options.sheet_entry} in {path}",
                    reason=ARCHIVE_ERROR_REASONS["missing_entry"],
                    file_path=str(path),
                )

            shared_strings: list[str] = []
            if options.shared_strings_entry in names:
                with zf.open(options.shared_strings_entry) as stream:
                    shared_strings = read_shared_strings(stream, options.shared_strings_entry)
            else:
                logger.debug(f"No {options.shared_strings_entry} in {path}")

            with zf.open(options.sheet_entry) as stream:
                return read_sheet_table(stream, shared_strings, options.sheet_entry)

    except (zipfile.BadZipFile, zipfile.LargeZipFile, RuntimeError, NotImplementedError, OSError) as e:
        raise archive_error_for(e, path, message="Cannot read archive") from e


def escape_csv_field(
    value: str,
    separator: str = CANONICAL_CSV_SEPARATOR,
    enclosure: str = CANONICAL_CSV_ENCLOSURE,
    escape: str = CANONICAL_CSV_ESCAPE,
) -> str:
    r"""Format one cell for the canonical CSV.

    Fields containing the enclosure, separator or escape character are
    enclosed, with the enclosure and escape characters escaped.

    Examples
    --------
    >>> escape_csv_field("plain")
    'plain'
    >>> escape_csv_field('say "hi", then go')
    '"say \\"hi\\", then go"'

    """
    value = sanitize_cell_text(value)
    if enclosure in value or separator in value or escape in value:
        value = value.replace(escape, escape + escape).replace(enclosure, escape + enclosure)
        return f"{enclosure}{value}{enclosure}"
    return value


def table_to_csv_bytes(table: Iterable[Sequence[str]]) -> bytes:
    """Serialize a table as canonical CSV bytes, BOM included."""
    text = "".join(
        CANONICAL_CSV_SEPARATOR.join(escape_csv_field(value) for value in row) + CANONICAL_CSV_LINE_TERMINATOR
        for row in table
    )
    return codecs.BOM_UTF8 + text.encode(CANONICAL_CSV_ENCODING)


def convert_xlsx_to_csv(path: str | Path, output_path: str | Path, options: XlsxOptions | None = None) -> Path:
    """Write the worksheet of ``path`` to ``output_path`` as canonical CSV.

    Returns
    -------
    Path
        The written file

    """
    table = extract_table(path, options)
    output = Path(output_path)
    output.write_bytes(table_to_csv_bytes(table))
    logger.debug(f"Converted {path} to {output} ({len(table)} rows)")
    return output


def _as_xlsx_options(options: CsvOptions | None) -> XlsxOptions:
    if options is None:
        return XlsxOptions()
    if isinstance(options, XlsxOptions):
        return options
    return XlsxOptions(**{f.name: getattr(options, f.name) for f in fields(options)})


def open_xlsx(path: str | Path, options: CsvOptions | None = None) -> TabularReader:
    """Open an XLSX workbook as a detected :class:`~autotab.reader.TabularReader`.

    The canonical CSV lives in a scratch directory owned by the returned
    reader and removed when the reader is closed. On any failure the scratch
    directory is removed before the error propagates.

    The whole sheet is extracted up front, so a single row with data beyond
    the width of the first row fails the call with :class:`XMLError`; no row
    of that sheet can be read.

    Parameters
    ----------
    path : str or Path
        Workbook path
    options : CsvOptions or XlsxOptions, optional
        Reader options; unless overridden, the separator and enclosure are
        those of the canonical CSV (``,`` and ``"``) rather than detected

    Returns
    -------
    TabularReader
        A reader on which auto_detect() has already run

    Raises
    ------
    ArchiveError
        If the package cannot be opened or lacks the worksheet
    XMLError
        If a part is malformed, the sheet is empty or a row is too wide

    """
    xlsx_options = _as_xlsx_options(options)
    csv_options = xlsx_options.create_updated(
        separator=xlsx_options.separator or CANONICAL_CSV_SEPARATOR,
        enclosure=xlsx_options.enclosure if xlsx_options.enclosure is not None else CANONICAL_CSV_ENCLOSURE,
    )

    scratch = tempfile.TemporaryDirectory(prefix="autotab-")
    try:
        csv_path = convert_xlsx_to_csv(path, Path(scratch.name) / f"{Path(path).stem}.csv", xlsx_options)
        reader = TabularReader(csv_path, csv_options, scratch=scratch)
        return reader.auto_detect()
    except BaseException:
        scratch.cleanup()
        raise
