"""
Project-level pytest configuration for e2e tests.

Keeping a conftest.py in the project root puts the root on sys.path, so
test files can import from ``databuilders``.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return project root path."""
    return Path(__file__).parent
