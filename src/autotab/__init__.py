"""autotab - An auto-detecting reader for CSV files and XLSX worksheets.

autotab determines a file's byte-order mark, text encoding and line-ending
convention, then infers its tabular structure (separator, enclosure, header
presence and column names) and serves rows either as a forward stream or by
random access. XLSX workbooks are streamed from their ZIP package, the first
worksheet is normalized to a canonical CSV, and read through the same path.

Key Features
------------
- BOM detection for UTF-8, UTF-16LE and UTF-16BE
- Encoding detection over a bounded sample, ranked with chardet
- Line-ending detection (Windows, Linux, classic Mac)
- Heuristic separator, enclosure and header detection
- Random-access and streaming row reads with optional number conversion
  and column-keyed rows
- Streaming XLSX extraction with archive safety checks

Requirements
------------
- Python 3.10+

Examples
--------
    >>> from autotab import open_reader
    >>> with open_reader("sales.csv") as reader:
    ...     print(reader)
    ...     reader.associative = True
    ...     for row in reader:
    ...         print(row)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}. autotab requires Python 3.10 or later."
    )

__version__ = "1.0.0"

from autotab.api import open_reader
from autotab.bytefile import ByteFile
from autotab.constants import BOM, LineEnding
from autotab.detection import FileFormat, TabularDescriptor
from autotab.exceptions import (
    ArchiveError,
    ArchiveSecurityError,
    AutotabError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    FormatDetectionError,
    FormatError,
    StructuralError,
    ValidationError,
    XMLError,
)
from autotab.lines import LineCursor
from autotab.options import CsvOptions, DetectionOptions, XlsxOptions
from autotab.reader import TabularReader
from autotab.xlsx import convert_xlsx_to_csv, extract_table, open_xlsx, table_to_csv_bytes

__all__ = [
    "__version__",
    "open_reader",
    "open_xlsx",
    "extract_table",
    "table_to_csv_bytes",
    "convert_xlsx_to_csv",
    "TabularReader",
    "ByteFile",
    "LineCursor",
    "FileFormat",
    "TabularDescriptor",
    "BOM",
    "LineEnding",
    "DetectionOptions",
    "CsvOptions",
    "XlsxOptions",
    "AutotabError",
    "ValidationError",
    "FileError",
    "FileAccessError",
    "FileNotFoundError",
    "FormatError",
    "FormatDetectionError",
    "StructuralError",
    "ArchiveError",
    "ArchiveSecurityError",
    "XMLError",
]
