"""
================================================================================
Run Context
================================================================================

Everything one pytest run shares: launch settings read from the environment
the CLI produced, the step logger and the single-test enforcer. Built once by
the pytest plugin and passed to fixtures and devices explicitly.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, TextIO, Tuple

from e2e_kit.common import env, get_config

from .single_test import SingleTestEnforcer
from .step_logger import StepLogger

BROWSER_TYPES = ("chromium", "firefox", "webkit")


def _split_args(value: Any) -> List[str]:
    """Launch args from config; a string (env override) splits on whitespace."""
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(arg) for arg in value]


@dataclass(frozen=True)
class RunSettings:
    """
    Browser and run settings for one test run.

    Attributes:
        headless: Run without a visible window (CI=true)
        repl: Pause the page after each test for manual inspection
        slow_mo: Delay between browser actions in milliseconds
        devtools: Open devtools with each tab (DEBUG=true, chromium only)
        screenshot_on_failure: Capture and attach a screenshot on failure
        timeout: Default Playwright timeout in milliseconds
        browser_type: chromium, firefox or webkit
        viewport: (width, height) for new contexts
        launch_args: Extra browser command-line arguments
    """
    headless: bool = True
    repl: bool = False
    slow_mo: int = 0
    devtools: bool = False
    screenshot_on_failure: bool = False
    timeout: int = env.DEFAULT_TIMEOUT_MS
    browser_type: str = "chromium"
    viewport: Tuple[int, int] = (1280, 720)
    launch_args: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.browser_type not in BROWSER_TYPES:
            raise ValueError(
                f"browser_type must be one of {BROWSER_TYPES}, got {self.browser_type!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunSettings":
        """
        Read settings from environment variables and e2e.yaml.

        Environment variables win over configuration file values.
        """
        environ = os.environ if environ is None else environ

        timeout = env.env_int(environ, env.TIMEOUT, env.DEFAULT_TIMEOUT_MS)
        if timeout <= 0:
            timeout = env.DEFAULT_TIMEOUT_MS

        browser_type = environ.get(env.BROWSER) or get_config("browser.type", "chromium")
        launch_args = _split_args(get_config("browser.args", []))

        return cls(
            headless=env.env_flag(environ, env.CI),
            repl=env.env_flag(environ, env.REPL),
            slow_mo=max(env.env_int(environ, env.SLOWMO, 0), 0),
            devtools=env.env_flag(environ, env.DEBUG),
            screenshot_on_failure=env.env_flag(environ, env.SCREENSHOT),
            timeout=timeout,
            browser_type=str(browser_type).lower(),
            viewport=(
                int(get_config("browser.viewport.width", 1280)),
                int(get_config("browser.viewport.height", 720)),
            ),
            launch_args=tuple(launch_args),
        )


@dataclass
class E2EContext:
    """Run-wide state handed to fixtures and devices."""

    settings: RunSettings
    step_logger: StepLogger
    enforcer: SingleTestEnforcer = field(default_factory=SingleTestEnforcer)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> "E2EContext":
        environ = os.environ if environ is None else environ
        return cls(
            settings=RunSettings.from_env(environ),
            step_logger=StepLogger.from_env(environ, stream=stream),
        )


__all__ = [
    "E2EContext",
    "RunSettings",
]
