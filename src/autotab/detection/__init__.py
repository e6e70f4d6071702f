#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Format and structure detection for tabular files."""

from autotab.detection.format import (
    FileFormat,
    detect_bom,
    detect_format,
    detect_line_ending,
    guess_encoding,
)
from autotab.detection.tabular import (
    TabularDescriptor,
    detect_enclosure,
    detect_header,
    detect_separator,
    synthetic_columns,
)

__all__ = [
    "FileFormat",
    "TabularDescriptor",
    "detect_bom",
    "detect_enclosure",
    "detect_format",
    "detect_header",
    "detect_line_ending",
    "detect_separator",
    "guess_encoding",
    "synthetic_columns",
]
