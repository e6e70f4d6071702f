#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/utils/spreadsheet.py
"""Shared utilities for tabular data (CSV rows and XLSX cells).

This module holds the numeric-looking checks used by header detection and
number conversion, and the cell reference helpers used by XLSX extraction.
"""

from __future__ import annotations

import re
from typing import Any

_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_INT_PATTERN = re.compile(r"^[+-]?(?:0|[1-9]\d*)$")
_COLUMN_PATTERN = re.compile(r"^([A-Za-z]+)")


def is_numeric(value: Any) -> bool:
    """Check whether a field looks like a number.

    Accepts an optional sign, decimal digits with an optional fraction, an
    optional exponent, and surrounding whitespace. ``int`` and ``float``
    values are numeric; booleans are not.

    Examples
    --------
    >>> is_numeric(" 0.1")
    True
    >>> is_numeric("1e5")
    True
    >>> is_numeric("2005a")
    False

    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if not isinstance(value, str):
        return False
    return bool(_NUMERIC_PATTERN.match(value))


def coerce_number(value: str) -> int | float | str:
    """Convert a numeric-looking field to ``int`` or ``float``.

    A field is an integer if it is a plain signed integer without leading
    zeros, else a float if it is numeric-looking, else it is returned as-is.

    Examples
    --------
    >>> coerce_number("8102")
    8102
    >>> coerce_number("9.33")
    9.33
    >>> coerce_number("Fruits")
    'Fruits'

    """
    text = value.strip()
    if _INT_PATTERN.match(text):
        return int(text)
    if is_numeric(text):
        return float(text)
    return value


def column_index(reference: str) -> int:
    """Return the 0-based column index of a cell reference.

    Parameters
    ----------
    reference : str
        Cell reference such as ``"C7"`` or ``"AB12"``

    Raises
    ------
    ValueError
        If the reference does not start with column letters

    Examples
    --------
    >>> column_index("A1")
    0
    >>> column_index("AB12")
    27

    """
    match = _COLUMN_PATTERN.match(reference)
    if not match:
        raise ValueError(f"Invalid cell reference: {reference!r}")

    index = 0
    for letter in match.group(1).upper():
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def sanitize_cell_text(text: Any) -> str:
    """Convert a cell value to single-line text.

    Line breaks inside a cell are replaced with spaces so that every table
    row stays on one line of the canonical CSV.
    """
    if text is None:
        return ""
    s = str(text)
    return s.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
