"""
Shared pytest fixtures and configuration for oraspine tests.

This module provides:
- ``driver_error()`` to build ``oracledb`` exceptions carrying ORA- codes
- Mock driver handle/cursor fixtures and a patched ``oracledb.connect``
- Isolation of ``ORACLE_*`` environment, cached settings and the
  process-wide persistent provider

Usage:
    def test_something(mock_connect, mock_handle):
        conn = Connection("scott", "tiger", "db/ORCLPDB1")
        assert mock_connect.called
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import oracledb
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from oraspine.core.settings import clear_settings_cache
from oraspine.oci import providers


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Driver helpers
# =============================================================================


def driver_error(
    full_code: str,
    message: str,
    offset: int = 0,
    cls: type[oracledb.Error] = oracledb.DatabaseError,
) -> oracledb.Error:
    """An ``oracledb`` exception shaped like the driver's own (``args[0]`` error object)."""
    return cls(SimpleNamespace(full_code=full_code, message=message, offset=offset))


@pytest.fixture
def make_driver_error():
    return driver_error


@pytest.fixture
def mock_cursor() -> MagicMock:
    cursor = MagicMock(name="cursor")
    cursor.description = None
    cursor.rowcount = 0
    cursor.fetchone.return_value = None
    cursor.fetchall.return_value = []
    return cursor


@pytest.fixture
def mock_handle(mock_cursor: MagicMock) -> MagicMock:
    handle = MagicMock(name="handle")
    handle.cursor.return_value = mock_cursor
    handle.version = "23.4.0.24.5"
    handle.warning = None
    return handle


@pytest.fixture
def mock_connect(mock_handle: MagicMock):
    """Patch ``oracledb.connect`` to return ``mock_handle``."""
    with patch("oracledb.connect", return_value=mock_handle) as connect:
        yield connect


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_environment(request, monkeypatch, tmp_path):
    """Unit tests see no ORACLE_* variables and no .env file; all get fresh settings and pools."""
    import os

    if request.node.get_closest_marker("integration") is None:
        for key in list(os.environ):
            if key.startswith("ORACLE_"):
                monkeypatch.delenv(key, raising=False)
        monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
    providers.persistent_provider._pools.clear()
    providers.persistent_provider._owners.clear()
