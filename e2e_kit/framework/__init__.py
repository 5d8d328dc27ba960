"""
================================================================================
E2E Framework
================================================================================

Playwright-based building blocks for one-test-per-file e2e suites.

Components:
    - selector: data-testid / CSS selector resolution
    - step_logger: single-line live progress output
    - device: page-level facade (navigate, click, type, queries)
    - expectations: fluent ``expect(selector)`` checks with ``.not_``
    - chrome_api: Chrome defaults and capability helpers
    - browser_manager: browser lifecycle
    - e2e_setup: per-file data builder and device binding
    - single_test: one-test-per-file enforcement

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .chrome_api import ChromeE2EApi, ChromeOptions, DeviceNotAttachedError, create_chrome_e2e_api
from .context import E2EContext, RunSettings
from .device import CssDevice, Device, DeviceApi
from .e2e_setup import E2ESetup
from .expectations import ElementAssertionError, Expectation
from .options import ClickOptions, NavigateOptions, ScreenshotOptions, TypeOptions, WaitOptions
from .selector import is_css_selector, resolve_selector
from .single_test import SingleTestEnforcer, SingleTestViolation, e2e_test
from .step_logger import StepLogger

__all__ = [
    "BrowserManager",
    "ChromeE2EApi",
    "ChromeOptions",
    "ClickOptions",
    "CssDevice",
    "Device",
    "DeviceApi",
    "DeviceNotAttachedError",
    "E2EContext",
    "E2ESetup",
    "ElementAssertionError",
    "Expectation",
    "NavigateOptions",
    "RunSettings",
    "ScreenshotOptions",
    "SingleTestEnforcer",
    "SingleTestViolation",
    "StepLogger",
    "TypeOptions",
    "WaitOptions",
    "create_chrome_e2e_api",
    "e2e_test",
    "is_css_selector",
    "resolve_selector",
]
