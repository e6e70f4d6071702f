#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/utils/__init__.py
"""Utility modules for autotab.

This package contains the encoding helpers used by format detection, the
numeric and cell-reference helpers shared by CSV and XLSX reading, and the
archive security checks.
"""

from autotab.utils.encoding import decode_sample, decodes_strictly, detect_encoding
from autotab.utils.spreadsheet import coerce_number, column_index, is_numeric, sanitize_cell_text

__all__ = [
    "coerce_number",
    "column_index",
    "decode_sample",
    "decodes_strictly",
    "detect_encoding",
    "is_numeric",
    "sanitize_cell_text",
]
