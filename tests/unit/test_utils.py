#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_utils.py
"""Unit tests for encoding and spreadsheet helpers.

Tests cover:
- Numeric-looking checks and number conversion
- Cell reference parsing
- Strict and tolerant decoding
- chardet-based guessing

"""

import pytest

from autotab.utils.encoding import (
    canonical_codec_name,
    decode_sample,
    decodes_strictly,
    detect_encoding,
    display_encoding_name,
)
from autotab.utils.spreadsheet import coerce_number, column_index, is_numeric, sanitize_cell_text


@pytest.mark.unit
class TestNumeric:
    """Tests for is_numeric() and coerce_number()."""

    @pytest.mark.parametrize("value", ["0", "-1", "+2.5", ".5", "5.", "1e5", "1.5E-3", " 42 ", 3, 2.0])
    def test_numeric(self, value) -> None:
        """Test values that look like numbers."""
        assert is_numeric(value)

    @pytest.mark.parametrize("value", ["", " ", "abc", "1,5", "1e", "0x1A", "2005a", None, True])
    def test_not_numeric(self, value) -> None:
        """Test values that do not look like numbers."""
        assert not is_numeric(value)

    @pytest.mark.parametrize(
        "value,expected,kind",
        [
            ("8102", 8102, int),
            ("-3", -3, int),
            ("0", 0, int),
            ("9.33", 9.33, float),
            ("007", 7.0, float),
            ("1e3", 1000.0, float),
            ("Fruits", "Fruits", str),
            ("", "", str),
        ],
    )
    def test_coerce(self, value: str, expected, kind: type) -> None:
        """Test int, float and text results."""
        result = coerce_number(value)
        assert result == expected
        assert type(result) is kind


@pytest.mark.unit
class TestCellReferences:
    """Tests for column_index() and sanitize_cell_text()."""

    @pytest.mark.parametrize(
        "reference,index",
        [("A1", 0), ("C7", 2), ("Z9", 25), ("AA1", 26), ("AB12", 27), ("ab3", 27)],
    )
    def test_column_index(self, reference: str, index: int) -> None:
        """Test single and multi-letter columns."""
        assert column_index(reference) == index

    @pytest.mark.parametrize("reference", ["", "12", "$A$1"])
    def test_invalid_reference(self, reference: str) -> None:
        """Test references without leading letters."""
        with pytest.raises(ValueError):
            column_index(reference)

    def test_sanitize(self) -> None:
        """Test line break replacement."""
        assert sanitize_cell_text("a\r\nb\nc\rd") == "a b c d"
        assert sanitize_cell_text(None) == ""
        assert sanitize_cell_text(1.5) == "1.5"


@pytest.mark.unit
class TestEncodingHelpers:
    """Tests for decoding helpers."""

    def test_canonical_names(self) -> None:
        """Test codec name normalization."""
        assert canonical_codec_name("UTF-16LE") == "utf-16-le"
        assert canonical_codec_name("Windows-1252") == "cp1252"

    def test_display_names(self) -> None:
        """Test display names for reader descriptions."""
        assert display_encoding_name("cp1252") == "Windows-1252"
        assert display_encoding_name("latin_1") == "ISO-8859-1"
        assert display_encoding_name("unknown-codec") == "unknown-codec"

    def test_decodes_strictly(self) -> None:
        """Test strict decoding with a cut trailing sequence."""
        assert decodes_strictly("é".encode("utf-8"), "UTF-8")
        assert decodes_strictly("aé".encode("utf-8")[:-1], "UTF-8")
        assert not decodes_strictly(b"\xe9t\xe9", "UTF-8")
        assert not decodes_strictly(b"abc", "no-such-codec")

    def test_decode_sample(self) -> None:
        """Test tolerant decoding."""
        assert decode_sample("a\r\nb".encode("utf-16-le")[:-1], "UTF-16LE") == "a\r\n"
        assert decode_sample(b"a\xffb", "ASCII") == "a�b"

    def test_detect_encoding(self) -> None:
        """Test chardet guessing and thresholds."""
        assert detect_encoding(b"") is None
        assert detect_encoding(b"plain ascii text", confidence_threshold=1.1) is None
        text = "Le cœur a ses raisons que la raison ne connaît point. " * 20
        assert canonical_codec_name(detect_encoding(text.encode("utf-8"))) == "utf-8"
