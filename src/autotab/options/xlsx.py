#  Copyright (c) 2025 Tom Villani, Ph.D.

# autotab/options/xlsx.py
"""Configuration options for XLSX extraction.

This module defines options for locating sheet data inside the package and
for the archive safety limits applied before extraction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from autotab.constants import (
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
    XLSX_SHARED_STRINGS_ENTRY,
    XLSX_SHEET_ENTRY,
)
from autotab.options.csv import CsvOptions


@dataclass(frozen=True)
class XlsxOptions(CsvOptions):
    """Configuration options for reading XLSX workbooks.

    Inherits the CSV options, which apply to the canonical CSV produced by
    extraction.

    Parameters
    ----------
    sheet_entry : str, default "xl/worksheets/sheet1.xml"
        Archive entry holding the worksheet.
    shared_strings_entry : str, default "xl/sharedStrings.xml"
        Archive entry holding the shared-string table.
    max_zip_entries : int, default 10000
        Maximum number of entries accepted in the package.
    max_uncompressed_size : int, default 1GB
        Maximum total uncompressed size in bytes.
    max_compression_ratio : float, default 100.0
        Maximum allowed compression ratio.

    """

    sheet_entry: str = field(
        default=XLSX_SHEET_ENTRY,
        metadata={"help": "Archive entry holding the worksheet", "importance": "advanced"},
    )
    shared_strings_entry: str = field(
        default=XLSX_SHARED_STRINGS_ENTRY,
        metadata={"help": "Archive entry holding the shared strings", "importance": "advanced"},
    )
    max_zip_entries: int = field(
        default=DEFAULT_MAX_ZIP_ENTRIES,
        metadata={"help": "Maximum number of archive entries", "type": int, "importance": "security"},
    )
    max_uncompressed_size: int = field(
        default=DEFAULT_MAX_UNCOMPRESSED_SIZE,
        metadata={"help": "Maximum total uncompressed size in bytes", "type": int, "importance": "security"},
    )
    max_compression_ratio: float = field(
        default=DEFAULT_MAX_COMPRESSION_RATIO,
        metadata={"help": "Maximum compression ratio", "type": float, "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate archive limits.

        Raises
        ------
        ValueError
            If any limit is not positive.

        """
        super().__post_init__()

        if self.max_zip_entries <= 0:
            raise ValueError(f"max_zip_entries must be positive, got {self.max_zip_entries}")

        if self.max_uncompressed_size <= 0:
            raise ValueError(f"max_uncompressed_size must be positive, got {self.max_uncompressed_size}")

        if self.max_compression_ratio <= 0:
            raise ValueError(f"max_compression_ratio must be positive, got {self.max_compression_ratio}")
