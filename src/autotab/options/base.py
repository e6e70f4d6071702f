"""Base classes for reader options.

This module defines the foundation classes for the options that drive
format detection and tabular reading.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from autotab.constants import (
    DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING_CANDIDATES,
    DEFAULT_SAMPLE_SIZE,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DetectionOptions(CloneFrozenMixin):
    """Options controlling byte-level format detection and line reading.

    Parameters
    ----------
    sample_size : int, default 1000
        Number of bytes after the BOM sampled for encoding and line ending detection.
    encoding_candidates : tuple[str, ...]
        Encodings tried, in order, when no BOM designates one.
    chardet_confidence_threshold : float, default 0.7
        Minimum chardet confidence for its guess to rank the single-byte candidates.
    chunk_size : int, default 100
        Number of bytes read per step while looking for a line ending.

    """

    sample_size: int = field(
        default=DEFAULT_SAMPLE_SIZE,
        metadata={"help": "Bytes sampled for encoding and line ending detection", "type": int},
    )
    encoding_candidates: tuple[str, ...] = field(
        default=DEFAULT_ENCODING_CANDIDATES,
        metadata={"help": "Encodings tried in order when the file has no BOM"},
    )
    chardet_confidence_threshold: float = field(
        default=DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
        metadata={"help": "Minimum chardet confidence (0.0-1.0)", "type": float},
    )
    chunk_size: int = field(
        default=DEFAULT_CHUNK_SIZE,
        metadata={"help": "Bytes read per step while scanning for a line ending", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate ranges and encoding names.

        Raises
        ------
        ValueError
            If any field value is outside its valid range or an encoding is unknown.

        """
        if self.sample_size <= 0:
            raise ValueError(f"sample_size must be positive, got {self.sample_size}")

        # UTF-16 line endings are 2 or 4 bytes, chunks must keep code units whole
        if self.chunk_size <= 0 or self.chunk_size % 2:
            raise ValueError(f"chunk_size must be a positive even number, got {self.chunk_size}")

        if not 0.0 <= self.chardet_confidence_threshold <= 1.0:
            raise ValueError(
                f"chardet_confidence_threshold must be between 0.0 and 1.0, got {self.chardet_confidence_threshold}"
            )

        if not self.encoding_candidates:
            raise ValueError("encoding_candidates must not be empty")

        for name in self.encoding_candidates:
            try:
                codecs.lookup(name)
            except LookupError as e:
                raise ValueError(f"Unknown encoding in encoding_candidates: {name!r}") from e
