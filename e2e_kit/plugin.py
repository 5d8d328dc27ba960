"""
================================================================================
E2E Pytest Plugin
================================================================================

Registered through the ``pytest11`` entry point. Provides:

- Browser, page and device fixtures
- ``e2e_session``: binds module-level E2ESetup devices to the test's page
  and runs their lifecycle hooks (applied automatically by ``@e2e_test``)
- One-test-per-file enforcement during collection
- Live step logging around each e2e test
- Screenshot on failure (JEST_E2E_SCREENSHOT=true), attached to Allure
- REPL mode (PUPPETEER_REPL=true): pause the page after the test

================================================================================
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, List

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from e2e_kit.common import init_logger
from e2e_kit.framework.browser_manager import BrowserManager
from e2e_kit.framework.chrome_api import ChromeE2EApi, create_chrome_e2e_api
from e2e_kit.framework.context import E2EContext
from e2e_kit.framework.e2e_setup import E2ESetup
from e2e_kit.framework.single_test import E2E_MARKER, is_e2e_test

CONTEXT_KEY = pytest.StashKey[E2EContext]()
CALL_REPORT_KEY = pytest.StashKey[pytest.TestReport]()

# Failure screenshots land here, relative to the working directory
SCREENSHOT_DIR = Path("screenshots")


class _TerminalStream:
    """Writes straight to the terminal, suspending pytest's output capture."""

    def __init__(self, config: pytest.Config):
        self._config = config

    def write(self, text: str) -> None:
        capman = self._config.pluginmanager.getplugin("capturemanager")
        if capman is None:
            sys.stdout.write(text)
            return
        with capman.global_and_fixture_disabled():
            sys.stdout.write(text)
            sys.stdout.flush()

    def flush(self) -> None:
        pass


def _context(config: pytest.Config) -> E2EContext:
    return config.stash[CONTEXT_KEY]


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register the e2e marker and build the run context."""
    config.addinivalue_line(
        "markers", f"{E2E_MARKER}: single end-to-end test of its file (use @e2e_test)"
    )
    init_logger()
    config.stash[CONTEXT_KEY] = E2EContext.from_env(stream=_TerminalStream(config))


def pytest_report_header(config: pytest.Config) -> List[str]:
    settings = _context(config).settings
    return [
        f"e2e: browser={settings.browser_type} headless={settings.headless} "
        f"slow_mo={settings.slow_mo}ms timeout={settings.timeout}ms"
    ]


# ================================================================================
# Single Test Enforcement
# ================================================================================

def pytest_collectstart(collector: pytest.Collector) -> None:
    """Clear the registration count when a test module starts collecting."""
    if isinstance(collector, pytest.Module):
        _context(collector.config).enforcer.reset(str(collector.path))


@pytest.hookimpl(tryfirst=True)
def pytest_pycollect_makeitem(collector: pytest.Collector, name: str, obj: object) -> None:
    """Register e2e tests before pytest builds their items."""
    if isinstance(collector, (pytest.Module, pytest.Class)):
        if collector.istestfunction(obj, name) and is_e2e_test(obj):
            _context(collector.config).enforcer.register(str(collector.path), name)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item: pytest.Item) -> None:
    """Start the step logger before fixtures run, so setup hooks log under the banner."""
    if item.get_closest_marker(E2E_MARKER) is not None:
        _context(item.config).step_logger.start(item.name)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    """
    Close the step logger with the outcome of an e2e test.

    Also keeps the call-phase report so fixture teardown can react to failures.
    """
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[CALL_REPORT_KEY] = report

    if item.get_closest_marker(E2E_MARKER) is None or report.when == "teardown":
        return

    steps = _context(item.config).step_logger
    if report.failed and call.excinfo is not None:
        steps.error(str(call.excinfo.value))
    elif report.when == "call" and report.passed:
        steps.success()


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def e2e_context(pytestconfig: pytest.Config) -> E2EContext:
    """Run-wide settings, step logger and enforcer."""
    return _context(pytestconfig)


@pytest_asyncio.fixture
async def e2e_browser(e2e_context: E2EContext) -> AsyncGenerator[BrowserManager, None]:
    """Browser launched with the run settings, closed after the test."""
    async with BrowserManager(e2e_context.settings) as manager:
        yield manager


@pytest_asyncio.fixture
async def e2e_page(e2e_browser: BrowserManager) -> Page:
    """Fresh page in its own context."""
    return await e2e_browser.new_page()


@pytest_asyncio.fixture
async def e2e_device(e2e_page: Page, e2e_context: E2EContext) -> ChromeE2EApi:
    """Chrome device facade bound to ``e2e_page``."""
    return await create_chrome_e2e_api().attach(e2e_page, e2e_context.step_logger)


async def _capture_failure(request: pytest.FixtureRequest, page: Page) -> None:
    report = request.node.stash.get(CALL_REPORT_KEY, None)
    if report is None or not report.failed:
        return

    SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = SCREENSHOT_DIR / f"failure_{request.node.name}_{timestamp}.png"
    try:
        screenshot = await page.screenshot(path=str(filepath), full_page=True)
    except PlaywrightError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
        return

    allure.attach(
        screenshot,
        name="failure_screenshot",
        attachment_type=allure.attachment_type.PNG,
    )
    logger.info(f"Failure screenshot saved: {filepath}")


@pytest_asyncio.fixture
async def e2e_session(
    request: pytest.FixtureRequest,
    e2e_page: Page,
    e2e_context: E2EContext,
) -> AsyncGenerator[Page, None]:
    """
    Bind the module's E2ESetup objects to the page around one e2e test.

    Runs before_all/before_each hooks before the test and
    after_each/after_all hooks after it.
    """
    setups = []
    for value in vars(request.module).values():
        if isinstance(value, E2ESetup) and value not in setups:
            setups.append(value)

    settings = e2e_context.settings
    try:
        for setup in setups:
            await setup.attach(e2e_page, e2e_context.step_logger)
            await setup.run_before_all()
            await setup.run_before_each()

        yield e2e_page

        if settings.screenshot_on_failure:
            await _capture_failure(request, e2e_page)
        for setup in setups:
            await setup.run_after_each()
            await setup.run_after_all()
        if settings.repl:
            logger.info("REPL mode: page paused for inspection, resume from the inspector")
            await e2e_page.pause()
    finally:
        for setup in setups:
            setup.detach()
