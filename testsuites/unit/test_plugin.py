import pytest

pytestmark = pytest.mark.plugin

FAKE_BROWSER = """
CALLS = []


class FakePage:
    url = "about:blank"

    async def goto(self, url, **kwargs):
        CALLS.append(("goto", kwargs))
        self.url = url

    async def screenshot(self, **kwargs):
        CALLS.append(("screenshot", kwargs))
        return b"png"

    async def pause(self):
        CALLS.append(("pause", {}))
"""

FAKE_PAGE_CONFTEST = """
import pytest

from fake_browser import FakePage


@pytest.fixture
def e2e_page():
    return FakePage()
"""

LOGIN_SETUP = """
import fake_browser
from e2e_kit import E2ESetup, create_chrome_e2e_api, e2e_test

setup = E2ESetup(devices={"device": create_chrome_e2e_api()})


@setup.before_each
async def open_login(devices, data):
    await devices["device"].navigate("https://example.com/login")
"""


@pytest.fixture
def e2e_project(pytester, monkeypatch):
    for name in ("CI", "JEST_SILENT", "JEST_NO_STEPS", "PUPPETEER_REPL", "JEST_E2E_SCREENSHOT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JEST_FORCE_STEPS", "true")
    pytester.makepyfile(fake_browser=FAKE_BROWSER)
    pytester.makeconftest(FAKE_PAGE_CONFTEST)
    return pytester


def test_failure_takes_screenshot_and_pauses_in_repl_mode(e2e_project, monkeypatch):
    monkeypatch.setenv("JEST_E2E_SCREENSHOT", "true")
    monkeypatch.setenv("PUPPETEER_REPL", "true")
    e2e_project.makepyfile(test_login_fails=LOGIN_SETUP + """

@e2e_test
async def test_fails():
    assert setup.get_device("device").url() == "https://example.com/dashboard"


def test_failure_was_captured():
    assert [name for name, _ in fake_browser.CALLS] == ["goto", "screenshot", "pause"]
    screenshot = fake_browser.CALLS[1][1]
    assert screenshot["path"].startswith("screenshots")
    assert "failure_test_fails_" in screenshot["path"]
    assert screenshot["full_page"] is True
""")

    result = e2e_project.runpytest("-p", "e2e_kit.plugin")

    result.assert_outcomes(failed=1, passed=1)
    assert "❌" in result.stdout.str()
    assert (e2e_project.path / "screenshots").is_dir()


def test_passing_test_takes_no_screenshot_and_does_not_pause(e2e_project, monkeypatch):
    monkeypatch.setenv("JEST_E2E_SCREENSHOT", "true")
    e2e_project.makepyfile(test_login_passes=LOGIN_SETUP + """

@e2e_test
async def test_passes():
    assert setup.get_device("device").url() == "https://example.com/login"


def test_nothing_was_captured():
    assert [name for name, _ in fake_browser.CALLS] == ["goto"]
""")

    result = e2e_project.runpytest("-p", "e2e_kit.plugin")

    result.assert_outcomes(passed=2)
    assert "✅ Test completed successfully" in result.stdout.str()


def test_setup_steps_are_logged_after_the_banner(e2e_project):
    e2e_project.makepyfile(test_login_steps=LOGIN_SETUP + """

@e2e_test
async def test_logs_steps():
    assert setup.get_device("device").url() == "https://example.com/dashboard"
""")

    result = e2e_project.runpytest("-p", "e2e_kit.plugin")

    output = result.stdout.str()
    result.assert_outcomes(failed=1)
    assert (
        output.index("Starting test: test_logs_steps")
        < output.index("Navigating to https://example.com/login")
        < output.index("❌")
    )


def test_failing_before_hook_still_detaches_devices(e2e_project):
    e2e_project.makepyfile(test_broken_setup="""
from e2e_kit import E2ESetup, create_chrome_e2e_api, e2e_test

setup = E2ESetup(devices={"device": create_chrome_e2e_api()})


@setup.before_each
def break_setup(devices, data):
    raise RuntimeError("before hook broke")


@e2e_test
async def test_never_runs():
    pass


def test_device_is_detached():
    assert setup.get_device("device").attached is False
""")

    result = e2e_project.runpytest("-p", "e2e_kit.plugin")

    result.assert_outcomes(errors=1, passed=1)
    assert "❌ before hook broke" in result.stdout.str()
