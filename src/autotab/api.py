#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/api.py
"""Entry point choosing the reading path by file extension."""

from __future__ import annotations

import logging
from pathlib import Path

from autotab.constants import CSV_EXTENSIONS, XLSX_EXTENSIONS
from autotab.exceptions import FormatError
from autotab.options.csv import CsvOptions
from autotab.reader import TabularReader
from autotab.xlsx import open_xlsx

logger = logging.getLogger(__name__)


def open_reader(path: str | Path, options: CsvOptions | None = None) -> TabularReader:
    """Open a ``.csv`` or ``.xlsx`` file as a detected reader.

    The extension is matched case-insensitively. The returned reader has
    already run :meth:`~autotab.reader.TabularReader.auto_detect` and should
    be closed, preferably by using it as a context manager.

    Parameters
    ----------
    path : str or Path
        File to open
    options : CsvOptions or XlsxOptions, optional
        Reader options

    Returns
    -------
    TabularReader
        Detected reader

    Raises
    ------
    FormatError
        If the extension is neither ``.csv`` nor ``.xlsx``

    Examples
    --------
    >>> with open_reader("report.xlsx") as reader:  # doctest: +SKIP
    ...     print(reader.columns)

    """
    extension = Path(path).suffix.lower()

    if extension in CSV_EXTENSIONS:
        logger.debug(f"Opening {path} as CSV")
        return TabularReader(path, options).auto_detect()

    if extension in XLSX_EXTENSIONS:
        logger.debug(f"Opening {path} as XLSX")
        return open_xlsx(path, options)

    raise FormatError(
        f"Unsupported file extension {extension or '(none)'!r} for {path}",
        format_type=extension,
        supported_formats=[*CSV_EXTENSIONS, *XLSX_EXTENSIONS],
    )
