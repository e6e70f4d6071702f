"""CSV test fixture generators for format and structure detection scenarios.

These helpers build deterministic CSV payloads as raw bytes, so that the
byte-order mark, encoding and line endings are exactly what each test
expects.
"""

from __future__ import annotations

import codecs
from typing import Iterable

MAC_MONTHLY_HEADER = '"Month", "Average", ' + ", ".join(f'"{year}"' for year in range(2005, 2016))

MAC_MONTHLY_ROWS = [
    '"May",  0.1,  0,  0, 1, 1, 0, 0, 0, 2, 0,  0,  0  ',
    '"Jun",  0.5,  2,  1, 1, 0, 0, 1, 1, 2, 2,  0,  1',
    '"Jul",  0.7,  5,  1, 1, 2, 0, 1, 3, 0, 2,  2,  1',
    '"Aug",  2.3,  6,  3, 2, 4, 4, 4, 7, 8, 2,  2,  3',
    '"Sep",  3.5,  6,  4, 7, 4, 2, 8, 5, 2, 5,  2,  5',
    '"Oct",  2.0,  8,  0, 1, 3, 2, 5, 1, 5, 2,  3,  0',
    '"Nov",  0.5,  3,  0, 0, 1, 1, 0, 1, 0, 1,  0,  1',
    '"Dec",  0.0,  1,  0, 1, 0, 0, 0, 0, 0, 0,  0,  1',
]

PLAYERS_HEADER = "Name, Team, Position, Height(inches), Weight(lbs), Age"

PLAYERS_ROWS = [
    "小林 竜也, BAL, Catcher, 74, 180, 22.99",
    "Adam Donachie, BAL, Catcher, 74, 180, 22.99",
    "Paul Bako, BAL, Catcher, 74, 215, 34.69",
]


def join_lines(lines: Iterable[str], ending: str = "\n", trailing: bool = True) -> str:
    """Join lines with ``ending``, optionally terminating the last one."""
    text = ending.join(lines)
    return text + ending if trailing else text


def create_simple_csv() -> bytes:
    """Create a Linux/ASCII CSV with a header row and three data rows."""
    lines = [
        "name,age,city",
        "Alice,30,Boston",
        "Bob,25,Seattle",
        "Carol,41,Denver",
    ]
    return join_lines(lines).encode("ascii")


def create_mac_ascii_monthly() -> bytes:
    """Create a 13-column ASCII CSV with classic Mac (CR) line endings."""
    return join_lines([MAC_MONTHLY_HEADER, *MAC_MONTHLY_ROWS], ending="\r").encode("ascii")


def create_utf16le_players() -> bytes:
    """Create a UTF-16LE CSV with BOM, CRLF line endings and Japanese text."""
    text = join_lines([PLAYERS_HEADER, *PLAYERS_ROWS], ending="\r\n")
    return codecs.BOM_UTF16_LE + text.encode("utf-16-le")


def create_utf16be_players() -> bytes:
    """Create the same table as UTF-16BE with BOM and LF line endings."""
    text = join_lines([PLAYERS_HEADER, *PLAYERS_ROWS])
    return codecs.BOM_UTF16_BE + text.encode("utf-16-be")


def create_utf8_bom_csv() -> bytes:
    """Create a UTF-8 CSV with BOM and accented text."""
    text = join_lines(["name;city;size", "Zoë;Zürich;12", "José;Málaga;7"], ending="\r\n")
    return codecs.BOM_UTF8 + text.encode("utf-8")


def create_windows1252_csv() -> bytes:
    """Create a BOM-less single-byte CSV that is not valid UTF-8."""
    text = join_lines(
        [
            "description;currency;net",
            "Café crème;€;3,50",
            "Thé glacé;€;2,80",
            "Crêpe sucrée;€;4,20",
        ]
    )
    return text.encode("cp1252")


def create_headerless_tab_csv() -> bytes:
    """Create a tab-separated file whose first row is data."""
    return join_lines(["10\t20\t30", "11\t21\t31", "12\t22\t32"]).encode("ascii")


def create_csv_with_blank_lines() -> bytes:
    """Create a CSV whose data contains blank lines."""
    return join_lines(["name,value", "a,1", "", "b,2", "   ", "c,3"]).encode("ascii")


def create_csv_with_bad_row() -> bytes:
    """Create a CSV whose second data row has too many fields."""
    return join_lines(["name,value", "a,1", "b,2,extra", "c,3"]).encode("ascii")
