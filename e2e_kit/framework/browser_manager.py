"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for e2e tests.

Features:
    - Launch options derived from the run settings (headless, slow motion,
      devtools, extra arguments)
    - Context isolation with a shared default viewport
    - Page error reporting through loguru

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from .context import RunSettings


class BrowserManager:
    """
    Manages the browser and its contexts for one test.

    Usage:
        async with BrowserManager(RunSettings.from_env()) as manager:
            page = await manager.new_page()
            await page.goto("https://example.com")
    """

    DEVTOOLS_ARG = "--auto-open-devtools-for-tabs"

    def __init__(self, settings: Optional[RunSettings] = None):
        """
        Initialize browser manager.

        Args:
            settings: Run settings; defaults to a headless chromium run
        """
        self.settings = settings or RunSettings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def launch_options(self) -> Dict[str, Any]:
        """Build Playwright launch keyword arguments from the settings."""
        args = list(self.settings.launch_args)
        if self.settings.devtools and self.settings.browser_type == "chromium":
            args.append(self.DEVTOOLS_ARG)

        options: Dict[str, Any] = {
            "headless": self.settings.headless,
            "slow_mo": self.settings.slow_mo,
        }
        # Chromium switches are meaningless to firefox/webkit
        if args and self.settings.browser_type == "chromium":
            options["args"] = args
        return options

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.settings.browser_type)

        self._browser = await browser_launcher.launch(**self.launch_options())
        logger.debug(
            f"Browser started: {self.settings.browser_type} "
            f"(headless={self.settings.headless}, slow_mo={self.settings.slow_mo})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Args:
            **options: Context options overriding the default viewport

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        width, height = self.settings.viewport
        context_options = {"viewport": {"width": width, "height": height}, **options}
        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.settings.timeout)
        self._contexts.append(context)

        return context

    async def new_page(self, context: Optional[BrowserContext] = None, **context_options: Any) -> Page:
        """
        Create new page in new or existing context.

        Uncaught page errors are logged as warnings.
        """
        if context is None:
            context = await self.new_context(**context_options)

        page = await context.new_page()
        page.on("pageerror", lambda error: logger.warning(f"Page error: {error}"))
        return page

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
]
