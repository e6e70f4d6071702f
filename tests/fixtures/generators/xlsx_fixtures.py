"""XLSX fixture generators for spreadsheet extraction scenarios.

Regular workbooks are produced with openpyxl. Edge cases that openpyxl never
writes (sparse references, inline strings, rich text, broken parts) are
built by hand as minimal ZIP packages holding only the parts the extractor
reads.
"""

from __future__ import annotations

import zipfile
from io import BytesIO
from typing import Iterable, Sequence
from xml.sax.saxutils import escape

import openpyxl

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

MEASUREMENT_COLUMNS = ["name", "class", "weight", "empty", "height"]

MEASUREMENT_ROWS = [
    ["Alice", "A", 55.5, None, 1.62],
    ["Bob", "B", 72, None, 1.80],
    ["Carol", "A", 61.2, None, 1.71],
    ["Dave", "C", 90, None, 1.88],
    ["Eve", "B", 48.9, None, 1.55],
    ["Frank", "C", 80.1, None, 1.77],
    ["Grace", "A", 58, None, 1.66],
]


def _save_workbook_to_bytes(wb: openpyxl.Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def create_xlsx_measurements() -> bytes:
    """Create a workbook with 5 columns, one of them always empty, and 7 rows."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Measurements"
    ws.append(MEASUREMENT_COLUMNS)
    for row in MEASUREMENT_ROWS:
        ws.append(row)
    return _save_workbook_to_bytes(wb)


def create_xlsx_from_rows(rows: Iterable[Sequence[object]]) -> bytes:
    """Create a single-sheet workbook holding ``rows``."""
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(list(row))
    return _save_workbook_to_bytes(wb)


def sheet_xml(rows: str) -> str:
    """Wrap ``<row>`` elements in a minimal worksheet document."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<worksheet xmlns="{SPREADSHEET_NS}"><sheetData>{rows}</sheetData></worksheet>'
    )


def shared_strings_xml(strings: Sequence[str]) -> str:
    """Build a plain shared-string table."""
    items = "".join(f"<si><t>{escape(value)}</t></si>" for value in strings)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<sst xmlns="{SPREADSHEET_NS}" count="{len(strings)}" uniqueCount="{len(strings)}">{items}</sst>'
    )


def build_xlsx_package(
    sheet: str | None,
    shared_strings: str | None = None,
    extra_entries: dict[str, bytes] | None = None,
) -> bytes:
    """Build a minimal XLSX package.

    Parameters
    ----------
    sheet : str or None
        Content of ``xl/worksheets/sheet1.xml``; None omits the entry
    shared_strings : str, optional
        Content of ``xl/sharedStrings.xml``; None omits the entry
    extra_entries : dict, optional
        Additional entries by name

    """
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", '<?xml version="1.0" encoding="UTF-8"?><Types/>')
        if sheet is not None:
            zf.writestr("xl/worksheets/sheet1.xml", sheet)
        if shared_strings is not None:
            zf.writestr("xl/sharedStrings.xml", shared_strings)
        for name, data in (extra_entries or {}).items():
            zf.writestr(name, data)
    return buffer.getvalue()
