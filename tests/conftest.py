"""Pytest configuration and shared fixtures for the autotab test suite.

This module registers the test markers and provides fixtures that write
sample CSV and XLSX files into a per-test temporary directory.
"""

from pathlib import Path
from typing import Callable

import pytest
from fixtures.generators.csv_fixtures import (
    create_mac_ascii_monthly,
    create_simple_csv,
    create_utf16le_players,
)
from fixtures.generators.xlsx_fixtures import create_xlsx_measurements


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Return a helper writing bytes to a named file under ``tmp_path``."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def simple_csv(write_file) -> Path:
    """Linux/ASCII CSV with a header and three data rows."""
    return write_file("simple.csv", create_simple_csv())


@pytest.fixture
def mac_csv(write_file) -> Path:
    """Classic Mac line endings, ASCII, 13 columns, quoted header."""
    return write_file("monthly.csv", create_mac_ascii_monthly())


@pytest.fixture
def utf16_csv(write_file) -> Path:
    """UTF-16LE with BOM, Windows line endings, Japanese text."""
    return write_file("players.csv", create_utf16le_players())


@pytest.fixture
def measurements_xlsx(write_file) -> Path:
    """Workbook with 5 columns (one always empty) and 7 data rows."""
    return write_file("measurements.xlsx", create_xlsx_measurements())
