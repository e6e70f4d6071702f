#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the autotab library.

This module centralizes the byte patterns, candidate tables, heuristic
dictionaries and default configuration values used across autotab.

Constants are organized by category:
1. Type Definitions - Literal types and enumerations
2. Format Detection - BOM and line ending tables, sampling defaults
3. Tabular Detection - separator/enclosure candidates, header keywords
4. Spreadsheet Extraction - OOXML entries and canonical CSV settings
5. Archive Security - ZIP validation limits
"""

from __future__ import annotations

import codecs
from enum import Enum
from typing import Literal

from autotab.exceptions import ValidationError

# =============================================================================
# Type Definitions
# =============================================================================

SeparatorChar = Literal[",", ";", "\t"]
EnclosureChar = Literal['"', "'", ""]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class BOM(Enum):
    """Byte order mark variants recognized at the start of a file.

    Each member's value is its display label. The byte prefix, the offset
    where data starts and the implied encoding are exposed as properties.
    """

    NONE = "None"
    UTF8 = "UTF-8"
    UTF16LE = "UTF-16LE"
    UTF16BE = "UTF-16BE"

    @property
    def prefix(self) -> bytes:
        """Byte sequence identifying this BOM (empty for NONE)."""
        return _BOM_PREFIXES[self]

    @property
    def start_offset(self) -> int:
        """Offset of the first data byte after the BOM."""
        return len(self.prefix)

    @property
    def encoding(self) -> str:
        """Encoding implied by the BOM, or an empty string for NONE."""
        return "" if self is BOM.NONE else self.value

    @classmethod
    def from_str(cls, name: str) -> BOM:
        """Resolve a BOM from a case-insensitive name such as ``utf-16le``.

        Raises
        ------
        ValidationError
            If the name does not designate a known BOM.

        """
        key = name.strip().lower()
        for member, aliases in _BOM_ALIASES.items():
            if key in aliases:
                return member
        raise ValidationError(f"Unknown BOM: {name!r}", parameter_name="bom", parameter_value=name)

    def __str__(self) -> str:
        return self.value


_BOM_PREFIXES: dict[BOM, bytes] = {
    BOM.NONE: b"",
    BOM.UTF8: codecs.BOM_UTF8,
    BOM.UTF16LE: codecs.BOM_UTF16_LE,
    BOM.UTF16BE: codecs.BOM_UTF16_BE,
}

_BOM_ALIASES: dict[BOM, tuple[str, ...]] = {
    BOM.NONE: ("none",),
    BOM.UTF8: ("utf8", "utf-8"),
    BOM.UTF16LE: ("utf16le", "utf-16le"),
    BOM.UTF16BE: ("utf16be", "utf-16be"),
}


class LineEnding(Enum):
    """Line ending conventions, valued by their character sequence."""

    LINUX = "\n"
    WINDOWS = "\r\n"
    MAC = "\r"

    @property
    def label(self) -> str:
        """Human-readable name (``Linux``, ``Windows`` or ``Mac``)."""
        return self.name.capitalize()

    def encoded(self, encoding: str) -> bytes:
        """Return the ending as bytes in ``encoding``.

        The result is 1 or 2 bytes long for single-byte encodings and twice
        that for UTF-16 variants.
        """
        return self.value.encode(encoding)

    @classmethod
    def from_str(cls, name: str) -> LineEnding:
        """Resolve a line ending from ``linux``, ``windows`` or ``mac``.

        Raises
        ------
        ValidationError
            If the name does not designate a known line ending.

        """
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            raise ValidationError(
                f"Unknown line ending: {name!r}", parameter_name="line_ending", parameter_value=name, original_error=e
            ) from e

    def __str__(self) -> str:
        return self.label


# =============================================================================
# Format Detection
# =============================================================================

# First full prefix match wins, so the 3-byte UTF-8 mark is tried first
BOM_DETECTION_ORDER: tuple[BOM, ...] = (BOM.UTF8, BOM.UTF16LE, BOM.UTF16BE)
BOM_PROBE_SIZE = 3

# CR is tried last so the CR half of CRLF never wins
LINE_ENDING_DETECTION_ORDER: tuple[LineEnding, ...] = (LineEnding.WINDOWS, LineEnding.LINUX, LineEnding.MAC)

DEFAULT_SAMPLE_SIZE = 1000
DEFAULT_CHUNK_SIZE = 100
DEFAULT_ENCODING_CANDIDATES: tuple[str, ...] = ("ASCII", "UTF-8", "Windows-1252", "ISO-8859-1")
DEFAULT_CHARDET_CONFIDENCE_THRESHOLD = 0.7

# Codec name (as returned by codecs.lookup) -> display name
ENCODING_DISPLAY_NAMES: dict[str, str] = {
    "ascii": "ASCII",
    "utf-8": "UTF-8",
    "utf-16-le": "UTF-16LE",
    "utf-16-be": "UTF-16BE",
    "cp1252": "Windows-1252",
    "iso8859-1": "ISO-8859-1",
    "iso8859-15": "ISO-8859-15",
    "cp1251": "Windows-1251",
    "cp1250": "Windows-1250",
}

# =============================================================================
# Tabular Detection
# =============================================================================

# Declaration order is the tie-break order
SEPARATOR_CANDIDATES: tuple[str, ...] = (",", ";", "\t")
ENCLOSURE_CANDIDATES: tuple[str, ...] = ('"', "'")
DEFAULT_SEPARATOR = ","
DEFAULT_ESCAPE_CHAR = "\\"
NO_ENCLOSURE = ""
SEPARATOR_DISPLAY_NAMES: dict[str, str] = {"\t": "tab"}

HEADER_KEYWORDS: frozenset[str] = frozenset(
    {
        "name",
        "firstname",
        "lastname",
        "date",
        "year",
        "month",
        "day",
        "hour",
        "time",
        "time zone",
        "length",
        "size",
        "average",
        "description",
        "currency",
        "gross",
        "fee",
        "net",
        "balance",
        "type",
        "status",
        "title",
        "phone",
        "phone number",
        "start date",
        "end date",
    }
)

SYNTHETIC_COLUMN_TEMPLATE = "column {index}"

# =============================================================================
# Spreadsheet Extraction
# =============================================================================

XLSX_SHEET_ENTRY = "xl/worksheets/sheet1.xml"
XLSX_SHARED_STRINGS_ENTRY = "xl/sharedStrings.xml"

CANONICAL_CSV_SEPARATOR = ","
CANONICAL_CSV_ENCLOSURE = '"'
CANONICAL_CSV_ESCAPE = "\\"
CANONICAL_CSV_LINE_TERMINATOR = "\n"
CANONICAL_CSV_ENCODING = "utf-8"

# Failure kind -> human-readable reason for ArchiveError
ARCHIVE_ERROR_REASONS: dict[str, str] = {
    "not_found": "no such file",
    "permission": "read permission denied",
    "bad_zip": "not a zip archive",
    "zip64": "archive requires ZIP64 support",
    "encrypted": "archive entry is encrypted",
    "missing_entry": "required archive entry is missing",
    "unsafe": "archive failed security validation",
    "read": "archive could not be read",
}

# =============================================================================
# Archive Security
# =============================================================================

DEFAULT_MAX_COMPRESSION_RATIO = 100.0  # Maximum compression ratio (uncompressed/compressed)
DEFAULT_MAX_UNCOMPRESSED_SIZE = 1024 * 1024 * 1024  # 1GB maximum uncompressed size
DEFAULT_MAX_ZIP_ENTRIES = 10000  # Maximum number of entries in a ZIP archive

# =============================================================================
# File Extensions
# =============================================================================

CSV_EXTENSIONS: tuple[str, ...] = (".csv",)
XLSX_EXTENSIONS: tuple[str, ...] = (".xlsx",)
