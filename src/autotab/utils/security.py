#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/utils/security.py
"""Archive validation for spreadsheet packages.

XLSX workbooks are ZIP archives. Before any entry is parsed the archive is
checked for zip bombs, path traversal and excessive entry counts, and every
low-level archive failure is mapped onto :class:`~autotab.exceptions.ArchiveError`
with a human-readable reason.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath

from autotab.constants import (
    ARCHIVE_ERROR_REASONS,
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
)
from autotab.exceptions import ArchiveError, ArchiveSecurityError

logger = logging.getLogger(__name__)


def archive_failure_kind(error: BaseException) -> str:
    """Classify a low-level archive exception.

    Returns
    -------
    str
        A key of :data:`~autotab.constants.ARCHIVE_ERROR_REASONS`

    """
    if isinstance(error, FileNotFoundError):
        return "not_found"
    if isinstance(error, PermissionError):
        return "permission"
    if isinstance(error, zipfile.LargeZipFile):
        return "zip64"
    if isinstance(error, zipfile.BadZipFile):
        return "bad_zip"
    if isinstance(error, RuntimeError) and "encrypted" in str(error):
        return "encrypted"
    return "read"


def archive_error_for(error: BaseException, file_path: str | Path, message: str = "Cannot open archive") -> ArchiveError:
    """Wrap a low-level archive exception in an ArchiveError."""
    kind = archive_failure_kind(error)
    return ArchiveError(
        f"{message} {file_path}",
        reason=ARCHIVE_ERROR_REASONS[kind],
        file_path=str(file_path),
        original_error=error if isinstance(error, Exception) else None,
    )


def validate_zip_archive(
    file_path: str | Path,
    max_compression_ratio: float = DEFAULT_MAX_COMPRESSION_RATIO,
    max_uncompressed_size: int = DEFAULT_MAX_UNCOMPRESSED_SIZE,
    max_entries: int = DEFAULT_MAX_ZIP_ENTRIES,
) -> None:
    """Validate a ZIP archive for security threats before processing.

    Parameters
    ----------
    file_path : str or Path
        Path to the ZIP archive to validate
    max_compression_ratio : float, default 100.0
        Maximum allowed compression ratio (uncompressed/compressed)
    max_uncompressed_size : int, default 1073741824
        Maximum total uncompressed size in bytes (default: 1GB)
    max_entries : int, default 10000
        Maximum number of entries in the archive

    Raises
    ------
    ArchiveSecurityError
        If the archive fails security validation
    ArchiveError
        If the archive cannot be opened or read

    Examples
    --------
    >>> validate_zip_archive("workbook.xlsx")  # doctest: +SKIP

    """
    unsafe = ARCHIVE_ERROR_REASONS["unsafe"]
    path = str(file_path)

    try:
        with zipfile.ZipFile(file_path, "r") as zf:
            entries = zf.infolist()

            if len(entries) > max_entries:
                raise ArchiveSecurityError(
                    f"ZIP archive contains too many entries: {len(entries)} > {max_entries}",
                    reason=unsafe,
                    file_path=path,
                )

            total_uncompressed = 0
            total_compressed = 0

            for entry in entries:
                name = entry.filename.replace("\\", "/")

                # Windows drive letters
                if len(name) >= 2 and name[1] == ":":
                    raise ArchiveSecurityError(
                        f"ZIP archive contains Windows absolute path: {entry.filename}", reason=unsafe, file_path=path
                    )

                if name.startswith("/") or any(part == ".." for part in PurePosixPath(name).parts):
                    raise ArchiveSecurityError(
                        f"ZIP archive contains suspicious path: {entry.filename}", reason=unsafe, file_path=path
                    )

                total_uncompressed += entry.file_size
                total_compressed += entry.compress_size

                if total_uncompressed > max_uncompressed_size:
                    raise ArchiveSecurityError(
                        f"ZIP archive uncompressed size too large: "
                        f"{total_uncompressed / (1024 * 1024):.1f}MB > "
                        f"{max_uncompressed_size / (1024 * 1024):.1f}MB",
                        reason=unsafe,
                        file_path=path,
                    )

            if total_compressed > 0:
                compression_ratio = total_uncompressed / total_compressed
                if compression_ratio > max_compression_ratio:
                    raise ArchiveSecurityError(
                        f"ZIP archive has suspicious compression ratio: {compression_ratio:.1f}:1",
                        reason=unsafe,
                        file_path=path,
                    )

    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
        raise archive_error_for(e, file_path) from e

    logger.debug(f"Archive {path} passed validation ({len(entries)} entries)")
