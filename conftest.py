"""
Repository-level pytest configuration.

Loads the e2e plugin for the framework's own test suite and pytester for
the tests that run pytest in-process against generated test files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

pytest_plugins = ["pytester", "e2e_kit.plugin"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
