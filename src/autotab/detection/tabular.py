#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/detection/tabular.py
"""Heuristic detection of CSV structure.

Separator, enclosure and header presence are inferred from the first one or
two lines. All three are heuristics with no correctness guarantee:

- separator: the candidate occurring most often in the first line
- enclosure: the quote character occurring most often in the first line
- header: keyword matches and numeric-looking field counts of the first two rows

Ties always resolve to the candidate declared first in
:data:`~autotab.constants.SEPARATOR_CANDIDATES` /
:data:`~autotab.constants.ENCLOSURE_CANDIDATES`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from autotab.constants import (
    DEFAULT_ESCAPE_CHAR,
    DEFAULT_SEPARATOR,
    ENCLOSURE_CANDIDATES,
    HEADER_KEYWORDS,
    NO_ENCLOSURE,
    SEPARATOR_CANDIDATES,
    SEPARATOR_DISPLAY_NAMES,
    SYNTHETIC_COLUMN_TEMPLATE,
)
from autotab.exceptions import ValidationError
from autotab.utils.spreadsheet import is_numeric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TabularDescriptor:
    """Established structure of a tabular file.

    Instances are immutable: every field is validated once, at construction.

    Parameters
    ----------
    separator : str
        Field separator, one of ``,``, ``;`` or tab
    enclosure : str
        Enclosure character, ``"`` or ``'``, or ``""`` for none
    header : bool
        Whether the first line holds column names
    columns : tuple[str, ...]
        Column names in order; unique by position, not necessarily by value
    escape : str, default "\\\\"
        Escape character inside enclosed fields

    Raises
    ------
    ValidationError
        If a field is outside its allowed values

    """

    separator: str
    enclosure: str
    header: bool
    columns: tuple[str, ...]
    escape: str = DEFAULT_ESCAPE_CHAR

    def __post_init__(self) -> None:
        if self.separator not in SEPARATOR_CANDIDATES:
            raise ValidationError(
                f"Unsupported separator {self.separator!r}", parameter_name="separator", parameter_value=self.separator
            )
        if self.enclosure not in (*ENCLOSURE_CANDIDATES, NO_ENCLOSURE):
            raise ValidationError(
                f"Unsupported enclosure {self.enclosure!r}", parameter_name="enclosure", parameter_value=self.enclosure
            )
        if len(self.escape) != 1:
            raise ValidationError(
                "Escape must be a single character", parameter_name="escape", parameter_value=self.escape
            )
        if not self.columns:
            raise ValidationError("At least one column is required", parameter_name="columns")

    @property
    def columns_count(self) -> int:
        """Number of fields in every row."""
        return len(self.columns)

    @property
    def separator_label(self) -> str:
        """Separator as displayed (``tab`` for a tab)."""
        return SEPARATOR_DISPLAY_NAMES.get(self.separator, self.separator)

    @property
    def enclosure_label(self) -> str:
        """Enclosure as displayed (``none`` when there is none)."""
        return self.enclosure or "none"


def _most_frequent(line: str, candidates: Sequence[str]) -> tuple[str, int]:
    # max() keeps the first maximal item, giving declaration-order tie-breaks
    counts = [(candidate, line.count(candidate)) for candidate in candidates]
    return max(counts, key=lambda item: item[1])


def detect_separator(line: str, candidates: Sequence[str] = SEPARATOR_CANDIDATES) -> str:
    """Pick the separator occurring most often in ``line``.

    Ties resolve to the first candidate in declaration order; a line with no
    candidate at all yields ``,``.

    Examples
    --------
    >>> detect_separator("a;b;c,d")
    ';'
    >>> detect_separator("a,b;c")
    ','

    """
    separator, count = _most_frequent(line, candidates)
    if count == 0:
        logger.debug(f"No separator candidate found, defaulting to {DEFAULT_SEPARATOR!r}")
        return DEFAULT_SEPARATOR
    return separator


def detect_enclosure(line: str, candidates: Sequence[str] = ENCLOSURE_CANDIDATES) -> str:
    """Pick the enclosure occurring most often in ``line``.

    Ties resolve to the first candidate in declaration order; no occurrence of
    any candidate yields ``""`` (no enclosure).

    Examples
    --------
    >>> detect_enclosure('"a", "b"')
    '"'
    >>> detect_enclosure("a, b")
    ''

    """
    enclosure, count = _most_frequent(line, candidates)
    return enclosure if count else NO_ENCLOSURE


def count_header_keywords(fields: Sequence[object]) -> int:
    """Count fields whose lowercased text is a common header term."""
    return sum(1 for field in fields if isinstance(field, str) and field.lower() in HEADER_KEYWORDS)


def count_numeric(fields: Sequence[object]) -> int:
    """Count numeric-looking fields."""
    return sum(1 for field in fields if is_numeric(field))


def detect_header(first_row: Sequence[object], second_row: Sequence[object] | None) -> bool:
    """Guess whether ``first_row`` holds column names.

    A header is assumed when the second row has more numeric-looking fields
    than the first, or when the first row has more header keywords than
    numeric-looking fields.

    Parameters
    ----------
    first_row : Sequence
        Fields of the first line
    second_row : Sequence or None
        Fields of the second line, None when the file has a single line

    """
    keywords = count_header_keywords(first_row)
    numeric_first = count_numeric(first_row)
    numeric_second = count_numeric(second_row) if second_row is not None else 0

    logger.debug(f"Header scoring: keywords={keywords}, numeric first={numeric_first}, second={numeric_second}")

    if numeric_second > numeric_first:
        return True
    return keywords - numeric_first > 0


def synthetic_columns(count: int) -> tuple[str, ...]:
    """Generate ``column 0`` .. ``column N-1`` names for header-less files."""
    return tuple(SYNTHETIC_COLUMN_TEMPLATE.format(index=index) for index in range(count))
