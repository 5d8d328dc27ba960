"""
================================================================================
Test Suite Configuration
================================================================================

Markers, shared fixtures and fakes for the e2e_kit test suite.

================================================================================
"""

import io
import os
from pathlib import Path
from typing import Iterator

import pytest

from e2e_kit.common import global_config


def pytest_configure(config):
    """Configure pytest with suite markers."""
    config.addinivalue_line(
        "markers", "unit: Fast tests without a browser"
    )
    config.addinivalue_line(
        "markers", "plugin: Tests that run pytest in-process through pytester"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the 'unit' marker to tests in the unit directory."""
    for item in items:
        if "unit" in Path(str(item.fspath)).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "E2E Kit - pytest + Playwright one-test-per-file framework",
        "=" * 60,
        "",
    ]


@pytest.fixture
def stream() -> io.StringIO:
    """In-memory stream for step logger output."""
    return io.StringIO()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> Iterator[Path]:
    """
    Load configuration from an empty temporary directory.

    Restores the previously loaded configuration afterwards.
    """
    for key in list(os.environ):
        if key.startswith("E2E__") or key in ("ENV", "ENVIRONMENT"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(global_config, "_config", {})
    monkeypatch.setattr(global_config, "_config_loaded", False)
    monkeypatch.setattr(global_config, "_logger_initialized", True)
    global_config._load_config(tmp_path)
    yield tmp_path
