#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_bytefile.py
"""Unit tests for bounded byte access.

Tests cover:
- Opening, size tracking and idempotent close
- Bounded reads and seeks
- Cursor restoration with checkpoint()

"""

from pathlib import Path

import pytest

from autotab.bytefile import ByteFile
from autotab.exceptions import FileAccessError, FileNotFoundError


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.bin"
    path.write_bytes(b"0123456789")
    return path


@pytest.mark.unit
class TestByteFileLifecycle:
    """Tests for opening and closing."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing path is rejected at construction."""
        with pytest.raises(FileNotFoundError) as exc_info:
            ByteFile(tmp_path / "missing.csv")
        assert isinstance(exc_info.value, FileAccessError)
        assert exc_info.value.file_path.endswith("missing.csv")

    def test_open_records_size(self, data_file: Path) -> None:
        """Test that opening stats the file and starts at offset 0."""
        with ByteFile(data_file) as f:
            assert f.size == 10
            assert f.offset == 0
            assert not f.closed

    def test_close_is_idempotent(self, data_file: Path) -> None:
        """Test that close() can be called repeatedly."""
        f = ByteFile(data_file).open()
        f.close()
        f.close()
        assert f.closed

    def test_read_requires_open_file(self, data_file: Path) -> None:
        """Test that reading an unopened file fails."""
        with pytest.raises(FileAccessError):
            ByteFile(data_file).read(1)


@pytest.mark.unit
class TestByteFileReads:
    """Tests for read() and seek()."""

    def test_read_advances_cursor(self, data_file: Path) -> None:
        """Test sequential reads."""
        with ByteFile(data_file) as f:
            assert f.read(3) == b"012"
            assert f.offset == 3
            assert f.read(7) == b"3456789"
            assert f.offset == 10

    @pytest.mark.parametrize("length", [0, -1])
    def test_read_rejects_non_positive_length(self, data_file: Path, length: int) -> None:
        """Test that empty or negative reads are errors."""
        with ByteFile(data_file) as f:
            with pytest.raises(FileAccessError):
                f.read(length)

    def test_read_past_end(self, data_file: Path) -> None:
        """Test that a read crossing end-of-file fails and keeps the cursor."""
        with ByteFile(data_file) as f:
            f.seek(8)
            with pytest.raises(FileAccessError):
                f.read(3)
            assert f.offset == 8

    def test_seek_bounds(self, data_file: Path) -> None:
        """Test that seek accepts [0, size] only."""
        with ByteFile(data_file) as f:
            f.seek(10)
            assert f.offset == 10
            with pytest.raises(FileAccessError):
                f.seek(11)
            with pytest.raises(FileAccessError):
                f.seek(-1)
            assert f.offset == 10


@pytest.mark.unit
class TestCheckpoint:
    """Tests for the checkpoint() context manager."""

    def test_restores_cursor(self, data_file: Path) -> None:
        """Test that reads inside a checkpoint do not move the cursor."""
        with ByteFile(data_file) as f:
            f.seek(4)
            with f.checkpoint() as saved:
                assert saved == 4
                f.seek(0)
                f.read(9)
            assert f.offset == 4

    def test_restores_cursor_on_error(self, data_file: Path) -> None:
        """Test that the cursor is restored when the block raises."""
        with ByteFile(data_file) as f:
            f.seek(2)
            with pytest.raises(FileAccessError):
                with f.checkpoint():
                    f.seek(9)
                    f.read(5)
            assert f.offset == 2
