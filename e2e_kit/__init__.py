"""
================================================================================
E2E Kit
================================================================================

One-test-per-file end-to-end testing on pytest and Playwright.

Usage:
    from e2e_kit import E2ESetup, create_chrome_e2e_api, e2e_test
    from databuilders import AgentTestDataBuilder

    setup = E2ESetup(
        databuilder=AgentTestDataBuilder(),
        devices={"device": create_chrome_e2e_api()},
    )

    @e2e_test
    async def test_login_success():
        device = setup.get_device("device")
        await device.navigate("https://example.com/login")
        await device.type("email-input", setup.get_test_data()["user_email"])
        await device.click("login-button")
        await device.expect("dashboard").to_be_visible()

Run with ``pytest-e2e`` (see ``pytest-e2e --help``).

================================================================================
"""

from .common import ConfigurationError, get_config, init_logger, reload_config, set_config
from .databuilders import AgentTestDataBuilder, BaseDataBuilder
from .framework import (
    ChromeE2EApi,
    ChromeOptions,
    ClickOptions,
    CssDevice,
    Device,
    DeviceApi,
    DeviceNotAttachedError,
    E2ESetup,
    ElementAssertionError,
    Expectation,
    NavigateOptions,
    ScreenshotOptions,
    SingleTestViolation,
    StepLogger,
    TypeOptions,
    WaitOptions,
    create_chrome_e2e_api,
    e2e_test,
    is_css_selector,
    resolve_selector,
)

__version__ = "1.0.0"

__all__ = [
    "AgentTestDataBuilder",
    "BaseDataBuilder",
    "ChromeE2EApi",
    "ChromeOptions",
    "ClickOptions",
    "ConfigurationError",
    "CssDevice",
    "Device",
    "DeviceApi",
    "DeviceNotAttachedError",
    "E2ESetup",
    "ElementAssertionError",
    "Expectation",
    "NavigateOptions",
    "ScreenshotOptions",
    "SingleTestViolation",
    "StepLogger",
    "TypeOptions",
    "WaitOptions",
    "create_chrome_e2e_api",
    "e2e_test",
    "get_config",
    "init_logger",
    "is_css_selector",
    "reload_config",
    "set_config",
]
