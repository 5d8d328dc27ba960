"""
================================================================================
Single Test Enforcer
================================================================================

Keeps e2e suites at one test per file.

Tests opt in with the ``@e2e_test`` decorator. While pytest collects a
module, the plugin registers every e2e test with the enforcer before the
test item is built; a second registration in the same file raises
SingleTestViolation, which pytest reports as an error collecting that file.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import Callable, Dict, TypeVar

import pytest
from loguru import logger

E2E_MARKER = "e2e"
SESSION_FIXTURE = "e2e_session"

F = TypeVar("F", bound=Callable)


class SingleTestViolation(Exception):
    """Raised when a file registers more than one e2e test."""
    pass


class SingleTestEnforcer:
    """
    Counts test registrations per file.

    States per file: no registration, one registration (valid), two or more
    (violation). The count is cleared when the file starts collecting.
    """

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def count(self, path: str) -> int:
        return self._counts.get(path, 0)

    def reset(self, path: str) -> None:
        self._counts.pop(path, None)

    def register(self, path: str, name: str) -> None:
        """
        Record one test registration for ``path``.

        Raises:
            SingleTestViolation: if ``path`` already registered a test
        """
        current_count = self.count(path)
        self._counts[path] = current_count + 1

        if current_count >= 1:
            message = (
                "\n🚫 SINGLE TEST RULE VIOLATION 🚫\n\n"
                f"File: {os.path.basename(path)}\n"
                "Error: Only ONE test function is allowed per file.\n\n"
                f"This file already has {current_count + 1} test functions "
                f"(rejected: {name}).\n\n"
                "✅ CORRECT PATTERN:\n"
                "Each file should contain:\n"
                "- One E2ESetup() configuration\n"
                "- One @e2e_test function\n"
            )
            logger.error(message)
            raise SingleTestViolation(message)


def e2e_test(func: F) -> F:
    """
    Register an async function as the e2e test of its file.

    Applies the ``e2e`` and ``asyncio`` marks and the ``e2e_session`` fixture,
    which binds the module's E2ESetup devices to a fresh browser page.

    Usage:
        setup = E2ESetup(databuilder=AgentTestDataBuilder(),
                         devices={"device": create_chrome_e2e_api()})

        @e2e_test
        async def test_login_success():
            device = setup.get_device("device")
            await device.navigate("https://example.com/login")
    """
    func = pytest.mark.usefixtures(SESSION_FIXTURE)(func)
    func = pytest.mark.asyncio(func)
    return getattr(pytest.mark, E2E_MARKER)(func)


def is_e2e_test(obj: object) -> bool:
    return any(mark.name == E2E_MARKER for mark in getattr(obj, "pytestmark", []))


__all__ = [
    "E2E_MARKER",
    "SingleTestEnforcer",
    "SingleTestViolation",
    "e2e_test",
    "is_e2e_test",
]
