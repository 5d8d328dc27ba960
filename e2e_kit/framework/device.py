"""
================================================================================
Device Facade
================================================================================

Page-level operations for e2e tests, built on Playwright's async Page.

Provides:
    - Navigation, clicking, typing and selecting
    - Element queries and state checks
    - Fluent expectations (``device.expect(selector)``)
    - Raw CSS variants under ``device.css``
    - Page utilities (url, title, content, evaluate, screenshot, waits)

Every selector goes through ``resolve_selector`` so tests can use plain
data-testid values ("submit-button") next to regular CSS (".error-banner").
Every operation is reported to the run's StepLogger.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Protocol, Union

import allure
from loguru import logger
from playwright.async_api import ElementHandle, Page, Response

from .expectations import VIEWPORT_INTERSECTION_JS, Expectation
from .options import ClickOptions, NavigateOptions, ScreenshotOptions, TypeOptions, WaitOptions
from .selector import resolve_selector, truncate
from .step_logger import StepLogger

SELECTOR_DISPLAY_LIMIT = 30
TEXT_DISPLAY_LIMIT = 20


class DeviceApi(Protocol):
    """Capability interface shared by Device and browser-specific facades."""

    async def navigate(self, url: str, options: Optional[NavigateOptions] = None) -> Optional[Response]: ...
    async def click(self, selector: str, options: Optional[ClickOptions] = None) -> None: ...
    async def type(self, selector: str, text: str, options: Optional[TypeOptions] = None) -> None: ...
    async def select(self, selector: str, value: Union[str, List[str]]) -> List[str]: ...
    async def wait_for(self, selector: str, options: Optional[WaitOptions] = None) -> Optional[ElementHandle]: ...
    async def get(self, selector: str) -> Optional[ElementHandle]: ...
    async def get_all(self, selector: str) -> List[ElementHandle]: ...
    async def get_text(self, selector: str) -> Optional[str]: ...
    async def get_value(self, selector: str) -> Any: ...
    async def exists(self, selector: str) -> bool: ...
    async def is_visible(self, selector: str) -> bool: ...
    def expect(self, selector: str) -> Expectation: ...
    def url(self) -> str: ...
    async def title(self) -> str: ...
    async def content(self) -> str: ...
    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...
    async def screenshot(self, options: Optional[ScreenshotOptions] = None) -> bytes: ...
    async def wait(self, ms: float) -> None: ...
    async def wait_for_navigation(
        self, url: Any = None, wait_until: str = "load", timeout: Optional[float] = None
    ) -> None: ...


class CssDevice:
    """
    Raw CSS selector operations.

    Selectors are passed to Playwright unchanged, for the rare case where a
    plain word must be treated as a tag or class rather than a test id.
    """

    def __init__(self, page: Page, step_logger: StepLogger):
        self.page = page
        self.steps = step_logger

    async def click(self, selector: str, options: Optional[ClickOptions] = None) -> None:
        self.steps.step("CSS Click", f'"{selector}"')
        await self.page.click(selector, **(options or ClickOptions()).to_kwargs())

    async def type(self, selector: str, text: str, options: Optional[TypeOptions] = None) -> None:
        self.steps.step("CSS Type", f'"{text}" into "{selector}"')
        await self.page.type(selector, text, **(options or TypeOptions()).to_kwargs())

    async def wait_for(
        self, selector: str, options: Optional[WaitOptions] = None
    ) -> Optional[ElementHandle]:
        self.steps.step("CSS Wait for", f'"{selector}"')
        return await self.page.wait_for_selector(selector, **(options or WaitOptions()).to_kwargs())

    async def get(self, selector: str) -> Optional[ElementHandle]:
        self.steps.step("CSS Get", f'"{selector}"')
        return await self.page.query_selector(selector)

    async def get_all(self, selector: str) -> List[ElementHandle]:
        self.steps.step("CSS Get All", f'"{selector}"')
        return await self.page.query_selector_all(selector)

    async def get_text(self, selector: str) -> Optional[str]:
        self.steps.step("CSS Get Text from", f'"{selector}"')
        return await self.page.eval_on_selector(selector, "element => element.textContent")

    async def exists(self, selector: str) -> bool:
        self.steps.step("CSS Check exists", f'"{selector}"')
        return await self.page.query_selector(selector) is not None


class Device:
    """
    Base device facade over one Playwright page.

    Usage:
        device = Device(page, StepLogger())
        await device.navigate("https://example.com/login")
        await device.type("email-input", "agent@example.com")
        await device.click("submit-button")
        await device.expect("body").to_contain("Dashboard")
    """

    def __init__(self, page: Page, step_logger: Optional[StepLogger] = None):
        """
        Initialize device.

        Args:
            page: Playwright Page object
            step_logger: Run-wide step logger (a disabled one if omitted)
        """
        self.page = page
        self.steps = step_logger or StepLogger(enabled=False)
        self.css = CssDevice(page, self.steps)

    # =========================================================================
    # Navigation and Interaction
    # =========================================================================

    async def navigate(
        self, url: str, options: Optional[NavigateOptions] = None
    ) -> Optional[Response]:
        self.steps.step("Navigating", f"to {url}")
        with allure.step(f"Navigate to {url}"):
            response = await self.page.goto(url, **(options or NavigateOptions()).to_kwargs())
        logger.debug(f"Navigated to: {url}")
        return response

    async def click(self, selector: str, options: Optional[ClickOptions] = None) -> None:
        self.steps.step("Clicking", f'"{truncate(selector, SELECTOR_DISPLAY_LIMIT)}"')
        with allure.step(f"Click: {selector}"):
            await self.page.click(
                resolve_selector(selector), **(options or ClickOptions()).to_kwargs()
            )

    async def type(self, selector: str, text: str, options: Optional[TypeOptions] = None) -> None:
        """Type text key by key into the element (real keystrokes, not fill)."""
        self.steps.step(
            "Typing",
            f'"{truncate(text, TEXT_DISPLAY_LIMIT)}" into '
            f'"{truncate(selector, SELECTOR_DISPLAY_LIMIT)}"',
        )
        with allure.step(f"Type into: {selector}"):
            await self.page.type(
                resolve_selector(selector), text, **(options or TypeOptions()).to_kwargs()
            )

    async def select(self, selector: str, value: Union[str, List[str]]) -> List[str]:
        """Select option(s) by value; returns the values that were selected."""
        self.steps.step(
            "Selecting", f'"{value}" from "{truncate(selector, SELECTOR_DISPLAY_LIMIT)}"'
        )
        with allure.step(f"Select {value} in: {selector}"):
            return await self.page.select_option(resolve_selector(selector), value)

    async def wait_for(
        self, selector: str, options: Optional[WaitOptions] = None
    ) -> Optional[ElementHandle]:
        self.steps.step("Waiting for", f'"{truncate(selector, SELECTOR_DISPLAY_LIMIT)}"')
        return await self.page.wait_for_selector(
            resolve_selector(selector), **(options or WaitOptions()).to_kwargs()
        )

    # =========================================================================
    # Element Queries
    # =========================================================================

    async def get(self, selector: str) -> Optional[ElementHandle]:
        self.steps.step("Getting element", f'"{selector}"')
        return await self.page.query_selector(resolve_selector(selector))

    async def get_all(self, selector: str) -> List[ElementHandle]:
        self.steps.step("Getting all elements", f'"{selector}"')
        return await self.page.query_selector_all(resolve_selector(selector))

    async def get_text(self, selector: str) -> Optional[str]:
        self.steps.step("Getting text from", f'"{selector}"')
        return await self.page.eval_on_selector(
            resolve_selector(selector), "element => element.textContent"
        )

    async def get_value(self, selector: str) -> Any:
        self.steps.step("Getting value from", f'"{selector}"')
        return await self.page.eval_on_selector(
            resolve_selector(selector), "element => element.value"
        )

    async def exists(self, selector: str) -> bool:
        self.steps.step("Checking if exists", f'"{selector}"')
        return await self.page.query_selector(resolve_selector(selector)) is not None

    async def is_visible(self, selector: str) -> bool:
        """True if the element exists and intersects the viewport."""
        self.steps.step("Checking if visible", f'"{selector}"')
        element = await self.page.query_selector(resolve_selector(selector))
        if element is None:
            return False
        return bool(await element.evaluate(VIEWPORT_INTERSECTION_JS))

    def expect(self, selector: str) -> Expectation:
        """
        Fluent expectation for ``selector``.

        Returns:
            Affirmative Expectation; use ``.not_`` for the negated checks
        """
        return Expectation(
            page=self.page,
            selector=selector,
            resolved_selector=resolve_selector(selector),
            step_logger=self.steps,
        )

    # =========================================================================
    # Page Utilities
    # =========================================================================

    def url(self) -> str:
        self.steps.step("Getting URL")
        return self.page.url

    async def title(self) -> str:
        self.steps.step("Getting title")
        return await self.page.title()

    async def content(self) -> str:
        self.steps.step("Getting page content")
        return await self.page.content()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.steps.step("Evaluating JavaScript")
        return await self.page.evaluate(expression, arg)

    async def screenshot(self, options: Optional[ScreenshotOptions] = None) -> bytes:
        self.steps.step("Taking screenshot")
        return await self.page.screenshot(**(options or ScreenshotOptions()).to_kwargs())

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait(self, ms: float) -> None:
        self.steps.step("Waiting", f"{ms}ms")
        await asyncio.sleep(ms / 1000)

    async def wait_for_navigation(
        self,
        url: Any = None,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> None:
        """
        Wait for the next main-frame navigation and its load state.

        Args:
            url: Optional glob pattern, regex or predicate; when given, waits
                until the page URL matches it instead (Page.wait_for_url)
            wait_until: Load state to wait for
            timeout: Timeout in milliseconds (page default if None)
        """
        self.steps.step("Waiting for navigation", "" if url is None else f"to {url}")
        options = NavigateOptions(wait_until, timeout)
        if url is not None:
            await self.page.wait_for_url(url, **options.to_kwargs())
            return

        timeout_kwargs = {} if timeout is None else {"timeout": timeout}
        await self.page.wait_for_event(
            "framenavigated",
            predicate=lambda frame: frame == self.page.main_frame,
            **timeout_kwargs,
        )
        # A committed navigation has no further load state to wait for
        if wait_until != "commit":
            await self.page.wait_for_load_state(wait_until, **timeout_kwargs)


__all__ = [
    "CssDevice",
    "Device",
    "DeviceApi",
]
