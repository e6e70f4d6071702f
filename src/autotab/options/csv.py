#  Copyright (c) 2025 Tom Villani, Ph.D.

# autotab/options/csv.py
"""Configuration options for CSV reading.

This module defines options that override structural detection and toggle
row output behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from autotab.constants import ENCLOSURE_CANDIDATES, NO_ENCLOSURE, SEPARATOR_CANDIDATES
from autotab.options.base import DetectionOptions


@dataclass(frozen=True)
class CsvOptions(DetectionOptions):
    r"""Configuration options for CSV reading.

    Structural overrides replace the matching detection heuristic; behavioral
    toggles only seed the reader attributes of the same name, which stay
    freely mutable afterwards.

    Parameters
    ----------
    separator : str | None, default None
        Force the field separator (',', ';' or '\\t'). None = detect.
    enclosure : str | None, default None
        Force the enclosure ('"', "'" or '' for none). None = detect.
    has_header : bool | None, default None
        Force header presence. None = detect.
    convert_numbers : bool, default False
        Convert numeric-looking fields to int or float.
    associative : bool, default False
        Return rows as dicts keyed by column name.

    """

    separator: str | None = field(
        default=None,
        metadata={"help": "Override field separator (',', ';', '\\t')", "importance": "core"},
    )
    enclosure: str | None = field(
        default=None,
        metadata={"help": "Override enclosure ('\"', \"'\" or '' for none)", "importance": "core"},
    )
    has_header: bool | None = field(
        default=None,
        metadata={"help": "Override header detection", "importance": "core"},
    )
    convert_numbers: bool = field(
        default=False,
        metadata={"help": "Convert numeric-looking fields to int or float", "importance": "core"},
    )
    associative: bool = field(
        default=False,
        metadata={"help": "Return rows as dicts keyed by column name", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate structural overrides.

        Raises
        ------
        ValueError
            If an override is not one of the supported characters.

        """
        super().__post_init__()

        if self.separator is not None and self.separator not in SEPARATOR_CANDIDATES:
            raise ValueError(f"separator must be one of {SEPARATOR_CANDIDATES!r}, got {self.separator!r}")

        if self.enclosure is not None and self.enclosure not in (*ENCLOSURE_CANDIDATES, NO_ENCLOSURE):
            raise ValueError(f"enclosure must be one of {ENCLOSURE_CANDIDATES!r} or '', got {self.enclosure!r}")
