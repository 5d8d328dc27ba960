"""
================================================================================
Step Logger
================================================================================

Real-time, single-line progress output for a running e2e test. Each step
overwrites the previous one so the terminal shows only what the test is
doing right now, followed by a final success or failure line.

Enablement is decided once from the environment (see ``from_env``).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
import time
from typing import Callable, Mapping, Optional, TextIO

from loguru import logger

from e2e_kit.common import env

CLEAR_LINE = "\r\x1b[K"
RULE = "━" * 50


class StepLogger:
    """
    Shows the current step only, overwriting the previous one.

    One instance exists per test run; it is owned by the run context and
    handed to every device facade. Not thread-safe: one test runs at a time
    per process.

    Usage:
        >>> steps = StepLogger(enabled=True)
        >>> steps.start("login succeeds")
        >>> steps.step("Clicking", '"submit-button"')
        >>> steps.success()
    """

    def __init__(
        self,
        enabled: bool = True,
        stream: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize step logger.

        Args:
            enabled: Whether anything is written at all
            stream: Output stream (defaults to sys.stdout at write time)
            clock: Monotonic clock in seconds, injectable for tests
        """
        self._enabled = enabled
        self._stream = stream
        self._clock = clock
        self.current_step = ""
        self.step_count = 0
        self.start_time: Optional[float] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> "StepLogger":
        """
        Build a logger whose enablement follows the environment.

        Priority order: explicit silence, explicit no-steps, CI mode
        without the force flag, enabled by default.
        """
        environ = os.environ if environ is None else environ
        return cls(enabled=cls.should_enable(environ), stream=stream)

    @staticmethod
    def should_enable(environ: Mapping[str, str]) -> bool:
        if env.env_flag(environ, env.SILENT):
            return False
        if env.env_flag(environ, env.NO_STEPS):
            return False
        if env.env_flag(environ, env.CI) and not environ.get(env.FORCE_STEPS):
            return False
        return True

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def start(self, test_name: str) -> None:
        """Reset counters and print the test banner."""
        if not self._enabled:
            return

        self.start_time = self._clock()
        self.step_count = 0
        self.current_step = ""
        self._write(f"\n🧪 Starting test: {test_name}\n{RULE}\n")

    def step(self, action: str, details: str = "") -> None:
        """Show the current step, overwriting the previous one."""
        if not self._enabled:
            return

        self.step_count += 1
        step_text = f"📍 {action}{f' {details}' if details else ''} [{self.elapsed()}]"
        self._write(CLEAR_LINE + step_text)
        self.current_step = step_text
        logger.debug(f"Step {self.step_count}: {action} {details}".rstrip())

    def success(self, message: str = "Test completed successfully") -> None:
        if not self._enabled:
            return

        self._write(f"{CLEAR_LINE}✅ {message} [{self.elapsed()}]\n{RULE}\n\n")

    def error(self, message: str) -> None:
        if not self._enabled:
            return

        self._write(f"{CLEAR_LINE}❌ {message} [{self.elapsed()}]\n{RULE}\n\n")

    def info(self, message: str) -> None:
        """Print an info line, then restore the current step below it."""
        if not self._enabled:
            return

        self._write(f"{CLEAR_LINE}ℹ️  {message}\n")
        if self.current_step:
            self._write(self.current_step)

    def elapsed(self) -> str:
        """Elapsed time since ``start`` as e.g. ``1.25s``."""
        if self.start_time is None:
            return "0.00s"
        return f"{self._clock() - self.start_time:.2f}s"


__all__ = [
    "StepLogger",
]
