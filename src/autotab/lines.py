#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/lines.py
"""Line-oriented reading on top of a :class:`~autotab.bytefile.ByteFile`.

Lines are found by scanning fixed-size chunks for the encoded line ending,
then decoded to ``str``. The scanning primitive :meth:`LineCursor.scan_line`
takes an offset and returns ``(line, next_offset)`` without moving the
persisted cursor; sequential reads advance the cursor explicitly.

Random access replays lines from the start of the data. No line-offset
index is kept, so ``read_line(n)`` costs O(n).
"""

from __future__ import annotations

import logging
from typing import Iterator

from autotab.bytefile import ByteFile
from autotab.constants import DEFAULT_CHUNK_SIZE
from autotab.detection.format import FileFormat
from autotab.exceptions import StructuralError

logger = logging.getLogger(__name__)


def find_aligned(buffer: bytes, needle: bytes, start: int = 0, unit: int = 1) -> int:
    """Find ``needle`` in ``buffer`` at an offset that is a multiple of ``unit``.

    For UTF-16 data a line ending must start on a code unit boundary; a match
    straddling two code units is skipped.

    Returns
    -------
    int
        Offset of the first aligned match, or -1

    """
    position = buffer.find(needle, start)
    while position != -1 and position % unit:
        position = buffer.find(needle, position + 1)
    return position


class LineCursor:
    """Decoded line access for a file whose format is known.

    Parameters
    ----------
    byte_file : ByteFile
        Open file
    file_format : FileFormat
        Detected BOM, encoding and line ending
    chunk_size : int, default 100
        Bytes read per step while scanning for a line ending

    """

    def __init__(self, byte_file: ByteFile, file_format: FileFormat, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """Bind the cursor to a file and position it at the data start."""
        self.file = byte_file
        self.format = file_format
        self.chunk_size = chunk_size
        self._ending = file_format.line_ending_bytes
        self._lines_count: int | None = None

        if self.file.offset < self.data_start:
            self.file.seek(self.data_start)

    @property
    def data_start(self) -> int:
        """Offset of the first data byte, just past the BOM."""
        return self.format.start_offset

    @property
    def offset(self) -> int:
        """Persisted cursor position."""
        return self.file.offset

    def scan_line(self, offset: int) -> tuple[str | None, int]:
        """Read the line starting at ``offset``.

        The persisted cursor is unchanged.

        Parameters
        ----------
        offset : int
            Byte offset of the start of a line

        Returns
        -------
        tuple[str | None, int]
            The decoded line without its ending (None at end-of-file) and the
            offset just past the line ending

        """
        size = self.file.size
        if offset >= size:
            return None, offset

        unit = self.format.code_unit
        buffer = b""
        search_from = 0

        with self.file.checkpoint():
            self.file.seek(offset)
            while True:
                length = min(self.chunk_size, size - offset - len(buffer))
                buffer += self.file.read(length)

                position = find_aligned(buffer, self._ending, search_from, unit)
                if position != -1:
                    raw = buffer[:position]
                    next_offset = offset + position + len(self._ending)
                    break

                if offset + len(buffer) >= size:
                    raw = buffer
                    next_offset = size
                    break

                # an ending may straddle the chunk boundary
                search_from = max(0, len(buffer) - len(self._ending) + 1)
                search_from -= search_from % unit

        try:
            line = raw.decode(self.format.decoding)
        except UnicodeDecodeError:
            logger.warning(f"Line at offset {offset} is not valid {self.format.encoding}, replacing bad bytes")
            line = raw.decode(self.format.decoding, errors="replace")

        return line.rstrip("\r\n"), next_offset

    def read_current_line(self, reset_offset: bool = False) -> str | None:
        """Read the line at the persisted cursor.

        Parameters
        ----------
        reset_offset : bool, default False
            Leave the cursor where it was (peek) instead of advancing it past
            the line and its ending

        Returns
        -------
        str | None
            The line, or None at end-of-file

        """
        line, next_offset = self.scan_line(self.file.offset)
        if line is not None and not reset_offset:
            self.file.seek(next_offset)
        return line

    def read_next_line(self) -> str | None:
        """Read the line at the cursor and advance past it."""
        return self.read_current_line(False)

    def read_line(self, index: int) -> str:
        """Read line ``index`` (0-based, counted from the data start).

        The persisted cursor is unchanged.

        Raises
        ------
        StructuralError
            If ``index`` is negative or past the last line

        """
        if index < 0:
            raise StructuralError(f"Line index out of bounds {index}", actual=index)

        offset = self.data_start
        for current in range(index + 1):
            line, offset = self.scan_line(offset)
            if line is None:
                raise StructuralError(f"Line index out of bounds {index} / {current}", expected=current, actual=index)
            if current == index:
                return line

        raise StructuralError(f"Line index out of bounds {index}", actual=index)

    def lines_count(self) -> int:
        """Count the non-empty lines of the data, caching the result.

        The persisted cursor is unchanged.
        """
        if self._lines_count is not None:
            return self._lines_count

        count = 0
        offset = self.data_start
        while True:
            line, offset = self.scan_line(offset)
            if line is None:
                break
            if line:
                count += 1

        self._lines_count = count
        logger.debug(f"Counted {count} lines in {self.file.path}")
        return count

    def rewind(self) -> None:
        """Move the cursor back to the data start."""
        self.file.seek(self.data_start)

    def __iter__(self) -> Iterator[str]:
        """Yield the remaining lines, advancing the cursor."""
        while True:
            line = self.read_next_line()
            if line is None:
                return
            yield line
