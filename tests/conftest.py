from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A deterministic server address for layout rendering.
3. Cleanup of the category loggers configured by each test.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from logweave.infra.logging.handlers import _remove_our_handlers  # noqa: E402

FAKE_SERVER_IP = "10.20.30.40"
TEST_CATEGORIES = ("app", "http", "audit")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def fake_server_ip(monkeypatch: pytest.MonkeyPatch) -> str:
    """Avoid touching the network stack when rendering `serverIp`."""
    monkeypatch.setattr("logweave.core.layout.get_server_ip", lambda: FAKE_SERVER_IP)
    monkeypatch.setattr("logweave.infra.logging.formatter.get_server_ip", lambda: FAKE_SERVER_IP)
    return FAKE_SERVER_IP


@pytest.fixture(autouse=True)
def release_category_loggers() -> Generator[None, None, None]:
    """Close every handler installed on the test categories after each test."""
    yield
    for name in TEST_CATEGORIES:
        _remove_our_handlers(logging.getLogger(name))


@pytest.fixture
def event_time() -> datetime:
    return datetime(2026, 10, 18, 9, 5, 7, 123456)


@pytest.fixture
def base_options(tmp_path: Any) -> Dict[str, Any]:
    """
    Return a base options document in the spirit of a real service setup.

    Returns:
        Dict[str, Any]: Options with hourly time-based rotation.
    """
    return {
        "directory": str(tmp_path),
        "file_name": "base",
        "enable_rotation": True,
        "extra_log_fields": ["level", "file", "function", "lineNumber", "serverIp", "category"],
        "rotation_options": {
            "type": "time",
            "backup_count": 2,
            "frequency": "hourly",
            "archive_backups": True,
        },
    }
