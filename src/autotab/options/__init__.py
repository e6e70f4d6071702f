#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for autotab readers.

Options are frozen dataclasses. Detection options are shared by every
reader; CSV options add structural overrides and output toggles; XLSX
options add package layout and archive limits.
"""

from __future__ import annotations

from typing import Any

from autotab.options.base import CloneFrozenMixin, DetectionOptions
from autotab.options.csv import CsvOptions
from autotab.options.xlsx import XlsxOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a frozen options dataclass)
    **kwargs
        Field names and their new values

    Returns
    -------
    Any
        New options instance of the same type

    """
    return options.create_updated(**kwargs)


__all__ = [
    "CloneFrozenMixin",
    "CsvOptions",
    "DetectionOptions",
    "XlsxOptions",
    "create_updated_options",
]
