#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tabular_detection.py
"""Unit tests for separator, enclosure and header heuristics.

Tests cover:
- Separator and enclosure counting with declaration-order tie-breaks
- Header scoring
- Descriptor validation and display labels

"""

import dataclasses

import pytest

from autotab.detection.tabular import (
    TabularDescriptor,
    count_header_keywords,
    count_numeric,
    detect_enclosure,
    detect_header,
    detect_separator,
    synthetic_columns,
)
from autotab.exceptions import ValidationError


@pytest.mark.unit
class TestDetectSeparator:
    """Tests for detect_separator()."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("a,b,c", ","),
            ("a;b;c", ";"),
            ("a\tb\tc", "\t"),
            ("a;b;c,d", ";"),
            ("a,b;c", ","),
            ("a;b\tc", ";"),
            ("abc", ","),
            ("", ","),
        ],
    )
    def test_most_frequent_wins(self, line: str, expected: str) -> None:
        """Test counting, ties and the default."""
        assert detect_separator(line) == expected


@pytest.mark.unit
class TestDetectEnclosure:
    """Tests for detect_enclosure()."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ('"a","b"', '"'),
            ("'a','b'", "'"),
            ("\"it's\",\"b\"", '"'),
            ("'a',\"b\"", '"'),
            ("a,b", ""),
        ],
    )
    def test_most_frequent_wins(self, line: str, expected: str) -> None:
        """Test counting, ties and the no-enclosure case."""
        assert detect_enclosure(line) == expected


@pytest.mark.unit
class TestDetectHeader:
    """Tests for the header heuristic."""

    def test_keywords(self) -> None:
        """Test case-insensitive keyword matching."""
        assert count_header_keywords(["Name", "Phone Number", "foo", 3]) == 2

    def test_numeric_count(self) -> None:
        """Test numeric-looking fields, including converted values."""
        assert count_numeric(["1", " 2.5", "1e3", "x", 4, 1.5, True]) == 5

    def test_more_numbers_in_second_row(self) -> None:
        """Test a header inferred from numbers below text."""
        assert detect_header(["a", "b"], ["1", "2"]) is True

    def test_keywords_without_numbers(self) -> None:
        """Test a header inferred from keywords alone."""
        assert detect_header(["Name", "Title"], ["x", "y"]) is True

    def test_data_first_row(self) -> None:
        """Test that numeric first rows are not headers."""
        assert detect_header(["10", "20"], ["11", "21"]) is False

    def test_plain_text_rows(self) -> None:
        """Test that text rows without keywords are not headers."""
        assert detect_header(["foo", "bar"], ["baz", "qux"]) is False

    def test_single_line(self) -> None:
        """Test a file with only one line."""
        assert detect_header(["Name", "x"], None) is True
        assert detect_header(["1", "x"], None) is False

    def test_year_columns(self) -> None:
        """Test years in the header outweighed by numbers in the data."""
        first = ["Month", "Average", *(str(year) for year in range(2005, 2016))]
        second = ["May", "0.1", "0", "0", "1", "1", "0", "0", "0", "2", "0", "0", "0"]
        assert detect_header(first, second) is True


@pytest.mark.unit
class TestTabularDescriptor:
    """Tests for the immutable descriptor."""

    def test_labels(self) -> None:
        """Test display labels and column count."""
        descriptor = TabularDescriptor(separator="\t", enclosure="", header=False, columns=("a", "b"))
        assert descriptor.separator_label == "tab"
        assert descriptor.enclosure_label == "none"
        assert descriptor.columns_count == 2
        assert descriptor.escape == "\\"

    def test_is_frozen(self) -> None:
        """Test that fields cannot be reassigned."""
        descriptor = TabularDescriptor(separator=",", enclosure='"', header=True, columns=("a",))
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.separator = ";"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"separator": "|", "enclosure": "", "header": True, "columns": ("a",)},
            {"separator": ",", "enclosure": "`", "header": True, "columns": ("a",)},
            {"separator": ",", "enclosure": "", "header": True, "columns": ()},
        ],
    )
    def test_validation(self, kwargs: dict) -> None:
        """Test that invalid descriptors are rejected."""
        with pytest.raises(ValidationError):
            TabularDescriptor(**kwargs)

    def test_synthetic_columns(self) -> None:
        """Test generated names for header-less files."""
        assert synthetic_columns(3) == ("column 0", "column 1", "column 2")
