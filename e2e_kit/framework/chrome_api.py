"""
================================================================================
Chrome E2E API
================================================================================

Browser-specific facade over the base Device.

Features:
    - Chrome defaults: navigation waits for network idle, typing delay
      follows slow motion, PNG screenshots
    - Capability helpers: performance metrics (CDP), cookies, network
      interception, device emulation, request/response waits
    - In-page debug logging and mobile helpers

Created without a page at import time (module-level E2ESetup) and bound to
a Playwright page by the pytest plugin through ``attach``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import ElementHandle, Page, Request, Response, Route

from .device import CssDevice, Device
from .expectations import Expectation
from .options import ClickOptions, NavigateOptions, ScreenshotOptions, TypeOptions, WaitOptions
from .step_logger import StepLogger

CONSOLE_LEVELS = ("log", "debug", "info", "warn", "error")


class DeviceNotAttachedError(RuntimeError):
    """Raised when a device facade is used before it is bound to a page."""
    pass


@dataclass(frozen=True)
class ChromeOptions:
    """
    Chrome facade settings.

    Attributes:
        headless: Informational; the launch mode comes from the run settings
        devtools: Informational; devtools follow the DEBUG flag at launch
        slow_mo: Default keystroke delay for ``type`` in milliseconds
        viewport: (width, height) applied on attach, None keeps the context's
        user_agent: User-Agent header applied on attach
    """
    headless: bool = False
    devtools: bool = False
    slow_mo: float = 0
    viewport: Optional[Tuple[int, int]] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        if self.slow_mo < 0:
            raise ValueError(f"slow_mo must be >= 0, got {self.slow_mo}")
        if self.viewport is not None and min(self.viewport) <= 0:
            raise ValueError(f"viewport must be positive, got {self.viewport}")


class ChromeE2EApi:
    """
    Chrome-flavoured device.

    Holds a base Device and overrides navigate, type and screenshot with
    Chrome defaults; every other device operation is delegated unchanged.

    Usage:
        device = create_chrome_e2e_api(slow_mo=50)
        await device.attach(page, step_logger)
        await device.navigate("https://example.com")
    """

    NAVIGATE_DEFAULTS = NavigateOptions(wait_until="networkidle", timeout=30000)
    JPEG_QUALITY = 90

    def __init__(self, options: Optional[ChromeOptions] = None):
        self.options = options or ChromeOptions()
        self._base: Optional[Device] = None

    # =========================================================================
    # Binding
    # =========================================================================

    async def attach(self, page: Page, step_logger: Optional[StepLogger] = None) -> "ChromeE2EApi":
        """
        Bind the facade to a page.

        Applies the configured viewport and user agent to the page.

        Returns:
            self, for chaining
        """
        self._base = Device(page, step_logger)
        if self.options.viewport is not None:
            width, height = self.options.viewport
            await page.set_viewport_size({"width": width, "height": height})
        if self.options.user_agent:
            await page.set_extra_http_headers({"User-Agent": self.options.user_agent})
        logger.debug(f"Chrome device attached (slow_mo={self.options.slow_mo})")
        return self

    def detach(self) -> None:
        self._base = None

    @property
    def attached(self) -> bool:
        return self._base is not None

    @property
    def base(self) -> Device:
        if self._base is None:
            raise DeviceNotAttachedError(
                "Device is not attached to a page. Use the e2e_session fixture "
                "(applied by @e2e_test) or call attach(page) first."
            )
        return self._base

    @property
    def page(self) -> Page:
        return self.base.page

    @property
    def css(self) -> CssDevice:
        return self.base.css

    # =========================================================================
    # Chrome Overrides
    # =========================================================================

    async def navigate(self, url: str, options: Optional[NavigateOptions] = None) -> Optional[Response]:
        """Navigate, waiting for network idle with a 30s timeout by default."""
        return await self.base.navigate(url, options or self.NAVIGATE_DEFAULTS)

    async def type(self, selector: str, text: str, options: Optional[TypeOptions] = None) -> None:
        return await self.base.type(selector, text, options or TypeOptions(delay=self.options.slow_mo))

    async def screenshot(self, options: Optional[ScreenshotOptions] = None) -> bytes:
        """PNG viewport screenshot by default; JPEG gets quality 90 unless set."""
        options = options or ScreenshotOptions(type="png", full_page=False)
        if options.type == "jpeg" and options.quality is None:
            options = replace(options, quality=self.JPEG_QUALITY)
        return await self.base.screenshot(options)

    # =========================================================================
    # Delegated Device Operations
    # =========================================================================

    async def click(self, selector: str, options: Optional[ClickOptions] = None) -> None:
        return await self.base.click(selector, options)

    async def select(self, selector: str, value: Union[str, List[str]]) -> List[str]:
        return await self.base.select(selector, value)

    async def wait_for(self, selector: str, options: Optional[WaitOptions] = None) -> Optional[ElementHandle]:
        return await self.base.wait_for(selector, options)

    async def get(self, selector: str) -> Optional[ElementHandle]:
        return await self.base.get(selector)

    async def get_all(self, selector: str) -> List[ElementHandle]:
        return await self.base.get_all(selector)

    async def get_text(self, selector: str) -> Optional[str]:
        return await self.base.get_text(selector)

    async def get_value(self, selector: str) -> Any:
        return await self.base.get_value(selector)

    async def exists(self, selector: str) -> bool:
        return await self.base.exists(selector)

    async def is_visible(self, selector: str) -> bool:
        return await self.base.is_visible(selector)

    def expect(self, selector: str) -> Expectation:
        return self.base.expect(selector)

    def url(self) -> str:
        return self.base.url()

    async def title(self) -> str:
        return await self.base.title()

    async def content(self) -> str:
        return await self.base.content()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self.base.evaluate(expression, arg)

    async def wait(self, ms: float) -> None:
        return await self.base.wait(ms)

    async def wait_for_navigation(
        self, url: Any = None, wait_until: str = "load", timeout: Optional[float] = None
    ) -> None:
        return await self.base.wait_for_navigation(url, wait_until, timeout)

    # =========================================================================
    # Chrome Capabilities
    # =========================================================================

    async def enable_dev_tools(self) -> None:
        await self.page.evaluate("() => console.log('Chrome DevTools enabled for E2E testing')")

    async def get_performance_metrics(self) -> Optional[Dict[str, float]]:
        """
        Read Chrome's Performance domain metrics over CDP.

        Returns:
            Metric name -> value (JSHeapUsedSize, JSHeapTotalSize, Nodes, ...),
            or None when the browser does not speak CDP
        """
        try:
            session = await self.page.context.new_cdp_session(self.page)
        except PlaywrightError as e:
            logger.debug(f"Performance metrics unavailable: {e}")
            return None

        try:
            await session.send("Performance.enable")
            result = await session.send("Performance.getMetrics")
        finally:
            await session.detach()

        return {metric["name"]: metric["value"] for metric in result.get("metrics", [])}

    async def intercept_network(self, patterns: Iterable[str] = ()) -> None:
        """Abort every request whose URL contains one of ``patterns``."""
        blocked = list(patterns)

        async def handle(route: Route) -> None:
            if any(pattern in route.request.url for pattern in blocked):
                logger.debug(f"Blocked request: {route.request.url}")
                await route.abort()
            else:
                await route.continue_()

        await self.page.route("**/*", handle)

    async def emulate_device(self, descriptor: Optional[Dict[str, Any]]) -> None:
        """
        Apply the viewport and user agent of a device descriptor.

        Accepts entries of ``playwright.devices``; touch and device scale
        factor are context-level settings and are not changed here.
        """
        if not descriptor:
            return
        viewport = descriptor.get("viewport")
        if viewport:
            await self.page.set_viewport_size(viewport)
        user_agent = descriptor.get("user_agent")
        if user_agent:
            await self.page.set_extra_http_headers({"User-Agent": user_agent})

    async def add_cookie(self, cookie: Dict[str, Any]) -> None:
        await self.page.context.add_cookies([cookie])

    async def get_cookies(self) -> List[Dict[str, Any]]:
        return await self.page.context.cookies()

    async def clear_cookies(self) -> None:
        await self.page.context.clear_cookies()

    async def wait_for_response(self, url_pattern: str, timeout: float = 30000) -> Response:
        return await self.page.wait_for_event(
            "response",
            predicate=lambda response: url_pattern in response.url,
            timeout=timeout,
        )

    async def wait_for_request(self, url_pattern: str, timeout: float = 30000) -> Request:
        return await self.page.wait_for_event(
            "request",
            predicate=lambda request: url_pattern in request.url,
            timeout=timeout,
        )

    async def debug(self, message: str) -> None:
        await self.page.evaluate("msg => console.log(`🐛 E2E Debug: ${msg}`)", message)

    async def log(self, level: str = "info", message: str = "") -> None:
        """Write to the page console at ``level`` (log, debug, info, warn, error)."""
        if level not in CONSOLE_LEVELS:
            raise ValueError(f"level must be one of {CONSOLE_LEVELS}, got {level!r}")
        await self.page.evaluate(
            "([lvl, msg]) => console[lvl](`📝 E2E Log [${lvl.toUpperCase()}]: ${msg}`)",
            [level, message],
        )

    async def set_mobile_viewport(self, width: int = 375, height: int = 667) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})

    async def simulate_touch(self) -> None:
        await self.page.evaluate(
            """() => {
                if (!('ontouchstart' in window)) {
                    window.TouchEvent = window.TouchEvent || class TouchEvent extends Event {};
                }
            }"""
        )


def create_chrome_e2e_api(**options: Any) -> ChromeE2EApi:
    """
    Build a Chrome device facade.

    Args:
        **options: ChromeOptions fields (headless, devtools, slow_mo,
            viewport, user_agent)
    """
    return ChromeE2EApi(ChromeOptions(**options))


__all__ = [
    "ChromeE2EApi",
    "ChromeOptions",
    "DeviceNotAttachedError",
    "create_chrome_e2e_api",
]
