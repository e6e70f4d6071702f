#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/autotab/rows.py
"""Conversion of decoded lines into rows.

A line is split with the standard library ``csv`` module using a dialect
built from the established descriptor, then each field is trimmed of
surrounding whitespace and enclosure characters. Rows can optionally carry
converted numbers and be keyed by column name.
"""

from __future__ import annotations

import csv
import logging
from typing import Any, Union

from autotab.constants import ENCLOSURE_CANDIDATES, NO_ENCLOSURE
from autotab.detection.tabular import TabularDescriptor
from autotab.exceptions import StructuralError
from autotab.utils.spreadsheet import coerce_number

logger = logging.getLogger(__name__)

Field = Union[str, int, float]
Row = Union[list[Field], dict[str, Field]]


def make_dialect(separator: str, enclosure: str, escape: str) -> type[csv.Dialect]:
    r"""Create a CSV dialect class for one line of input.

    The dialect is a ``csv.excel`` subclass, so no dialect instance is mutated.
    Without an enclosure the double quote still acts as the quote character.

    Parameters
    ----------
    separator : str
        The delimiter character (',', ';' or '\\t')
    enclosure : str
        The quote character, or '' for none
    escape : str
        The escape character used inside quoted fields

    Returns
    -------
    type[csv.Dialect]
        A dialect class based on csv.excel

    """
    attrs: dict[str, Any] = {
        "delimiter": separator,
        "quotechar": enclosure or ENCLOSURE_CANDIDATES[0],
        "escapechar": escape,
        "doublequote": True,
        "skipinitialspace": False,
        "strict": False,
    }
    return type("LineDialect", (csv.excel,), attrs)


def trim_field(value: str, enclosure: str) -> str:
    """Strip surrounding whitespace, then one enclosure character at each end."""
    value = value.strip()
    if enclosure != NO_ENCLOSURE:
        if value.startswith(enclosure):
            value = value[len(enclosure) :]
        if value.endswith(enclosure):
            value = value[: -len(enclosure)]
    return value


def protect_unquoted_escapes(line: str, separator: str, quotechar: str, escape: str) -> str:
    r"""Double escape characters that sit outside quoted fields.

    The csv module honours ``escapechar`` everywhere and drops it, so an
    unquoted ``C:\data`` would lose its backslashes. Doubled, they read back
    as one literal character. Escapes inside quoted fields are left alone.
    A quoted field starts only with a quote right after a separator (or at
    the start of the line), as in the csv module.
    """
    if not escape or escape not in line:
        return line

    out: list[str] = []
    quoted = False
    field_start = True
    index = 0
    while index < len(line):
        char = line[index]
        following = line[index + 1] if index + 1 < len(line) else ""
        if quoted:
            if char == escape and following:
                out.append(char + following)
                index += 2
                continue
            if char == quotechar and following == quotechar:
                out.append(char + following)
                index += 2
                continue
            out.append(char)
            quoted = char != quotechar
        elif field_start and char == quotechar:
            out.append(char)
            quoted = True
        elif char == escape:
            out.append(escape * 2)
        else:
            out.append(char)
        field_start = not quoted and char == separator
        index += 1
    return "".join(out)


def split_line(line: str, separator: str, enclosure: str, escape: str) -> list[str]:
    """Split a single line into trimmed fields.

    Raises
    ------
    StructuralError
        If the csv module rejects the line

    """
    dialect = make_dialect(separator, enclosure, escape)
    line = protect_unquoted_escapes(line, separator, dialect.quotechar, escape)
    try:
        fields = next(csv.reader([line], dialect=dialect), [])
    except csv.Error as e:
        raise StructuralError(f"Cannot split line: {e}", original_error=e) from e

    return [trim_field(value, enclosure) for value in fields]


def line_to_row(
    line: str,
    descriptor: TabularDescriptor,
    convert_numbers: bool = False,
    associative: bool = False,
) -> Row:
    """Convert a decoded line into a row.

    Parameters
    ----------
    line : str
        Line without its ending
    descriptor : TabularDescriptor
        Established structure
    convert_numbers : bool, default False
        Convert numeric-looking fields to int or float
    associative : bool, default False
        Return a dict keyed by column name; with duplicate column names the
        last field wins

    Returns
    -------
    list or dict
        The row

    Raises
    ------
    StructuralError
        If the field count differs from the descriptor's column count

    """
    fields: list[Field] = list(split_line(line, descriptor.separator, descriptor.enclosure, descriptor.escape))

    if len(fields) != descriptor.columns_count:
        raise StructuralError(
            f"Columns count mismatch - {len(fields)} / {descriptor.columns_count}",
            expected=descriptor.columns_count,
            actual=len(fields),
        )

    if convert_numbers:
        fields = [coerce_number(value) if isinstance(value, str) else value for value in fields]

    if associative:
        return dict(zip(descriptor.columns, fields))

    return fields
