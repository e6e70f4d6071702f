#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/bytefile.py
"""Bounded byte access to a file with a single persisted cursor.

Every successful ``read`` or ``seek`` moves the cursor. Callers that need a
non-destructive read wrap it in :meth:`ByteFile.checkpoint`, which restores
the cursor on every exit path.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from autotab.exceptions import FileAccessError, FileNotFoundError

logger = logging.getLogger(__name__)


class ByteFile:
    """Random-access binary file with size tracking and a mutable cursor.

    Parameters
    ----------
    path : str or Path
        Path to the file. It must exist.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.

    """

    def __init__(self, path: str | Path):
        """Store the path after checking the file exists."""
        self.path = str(path)
        if not os.path.isfile(self.path):
            raise FileNotFoundError(self.path)

        self._handle: BinaryIO | None = None
        self._size = 0
        self._offset = 0

    def __enter__(self) -> ByteFile:
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def size(self) -> int:
        """File size in bytes, as stat'ed when opened."""
        return self._size

    @property
    def offset(self) -> int:
        """Persisted cursor position."""
        return self._offset

    @property
    def closed(self) -> bool:
        """Whether the underlying handle is closed (or was never opened)."""
        return self._handle is None

    def open(self) -> ByteFile:
        """Open the file in binary mode and record its size.

        Returns
        -------
        ByteFile
            This instance, with the cursor at 0

        Raises
        ------
        FileAccessError
            If the file cannot be opened or stat'ed

        """
        if self._handle is not None:
            return self

        try:
            handle = open(self.path, "rb")
        except OSError as e:
            raise FileAccessError(self.path, f"Cannot open file: {self.path}", original_error=e) from e

        try:
            self._size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            handle.close()
            raise FileAccessError(self.path, f"Cannot stat file: {self.path}", original_error=e) from e

        self._handle = handle
        self._offset = 0
        logger.debug(f"Opened {self.path} ({self._size} bytes)")
        return self

    def close(self) -> None:
        """Close the handle. Calling it again is a no-op."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def seek(self, offset: int) -> None:
        """Move the persisted cursor to ``offset``.

        Raises
        ------
        FileAccessError
            If the file is not open, the offset lies outside ``[0, size]`` or
            the underlying seek fails

        """
        handle = self._require_handle()
        if offset < 0 or offset > self._size:
            raise FileAccessError(self.path, f"Seek out of bounds {offset} / {self._size}")

        try:
            handle.seek(offset, os.SEEK_SET)
        except OSError as e:
            raise FileAccessError(self.path, f"Seek to {offset} failed", original_error=e) from e

        self._offset = offset

    def read(self, length: int) -> bytes:
        """Read exactly ``length`` bytes at the cursor and advance it.

        Raises
        ------
        FileAccessError
            If ``length <= 0``, the read would cross end-of-file, or the
            underlying read fails

        """
        handle = self._require_handle()
        if length <= 0:
            raise FileAccessError(self.path, f"Invalid read length {length}")

        end = self._offset + length
        if end > self._size:
            raise FileAccessError(self.path, f"Read out of bounds {end} / {self._size}")

        try:
            data = handle.read(length)
        except OSError as e:
            raise FileAccessError(self.path, f"Read at {self._offset} failed", original_error=e) from e

        if len(data) != length:
            raise FileAccessError(self.path, f"Short read at {self._offset}: {len(data)} / {length} bytes")

        self._offset = end
        return data

    @contextmanager
    def checkpoint(self) -> Iterator[int]:
        """Save the cursor and restore it when the block exits.

        Yields
        ------
        int
            The saved offset

        """
        saved = self._offset
        try:
            yield saved
        finally:
            if self._handle is not None:
                self.seek(saved)

    def _require_handle(self) -> BinaryIO:
        if self._handle is None:
            raise FileAccessError(self.path, f"File is not open: {self.path}")
        return self._handle

    def __repr__(self) -> str:
        return f"ByteFile(path={self.path!r}, size={self._size}, offset={self._offset})"
