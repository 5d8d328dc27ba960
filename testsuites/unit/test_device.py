import pytest

from e2e_kit.framework.device import Device
from e2e_kit.framework.options import ClickOptions, NavigateOptions, ScreenshotOptions
from e2e_kit.framework.step_logger import StepLogger

from testsuites.unit.fakes import FakeElement, FakePage

SUBMIT = '[data-testid="submit-button"]'


@pytest.mark.asyncio
async def test_interactions_resolve_test_ids():
    page = FakePage()
    device = Device(page)

    await device.click("submit-button")
    await device.type("email-input", "agent@example.com")
    await device.select("country", "FR")

    assert page.calls_to("click") == [("click", SUBMIT, {"button": "left", "click_count": 1, "delay": 0})]
    assert page.calls_to("type") == [
        ("type", '[data-testid="email-input"]', "agent@example.com", {"delay": 0})
    ]
    assert page.calls_to("select_option") == [("select_option", '[data-testid="country"]', "FR", {})]


@pytest.mark.asyncio
async def test_css_variant_passes_selector_unchanged():
    page = FakePage()
    device = Device(page)

    await device.css.click("submit")
    await device.css.type("search", "query")

    assert page.calls_to("click")[0][1] == "submit"
    assert page.calls_to("type")[0][1] == "search"


@pytest.mark.asyncio
async def test_navigate_uses_given_options():
    page = FakePage()
    device = Device(page)

    await device.navigate("https://example.com")
    await device.navigate("https://example.com/login", NavigateOptions("domcontentloaded", 5000))

    assert page.calls_to("goto") == [
        ("goto", "https://example.com", {"wait_until": "load"}),
        ("goto", "https://example.com/login", {"wait_until": "domcontentloaded", "timeout": 5000}),
    ]
    assert device.url() == "https://example.com/login"


@pytest.mark.asyncio
async def test_click_options_are_forwarded():
    page = FakePage()
    await Device(page).click("#menu", ClickOptions(button="right", timeout=100))
    assert page.calls_to("click")[0][2] == {
        "button": "right",
        "click_count": 1,
        "delay": 0,
        "timeout": 100,
    }


@pytest.mark.asyncio
async def test_queries():
    element = FakeElement(text="Hello", value="42", visible=False)
    page = FakePage({SUBMIT: [element], "li": [FakeElement(), FakeElement()]})
    device = Device(page)

    assert await device.get("submit-button") is element
    assert len(await device.get_all("li")) == 2
    assert await device.get_text("submit-button") == "Hello"
    assert await device.get_value("submit-button") == "42"
    assert await device.exists("submit-button") is True
    assert await device.exists("missing") is False
    assert await device.is_visible("submit-button") is False
    assert await device.is_visible("missing") is False


@pytest.mark.asyncio
async def test_page_utilities():
    page = FakePage()
    device = Device(page)

    assert await device.title() == "Fake Title"
    assert "<body>" in await device.content()
    assert await device.evaluate("x => x * 2", 21) == 21
    assert await device.screenshot(ScreenshotOptions(full_page=True)) == b"\x89PNG"
    assert page.calls_to("screenshot")[0][1]["full_page"] is True

    await device.wait(1)
    await device.wait_for_navigation("**/dashboard", timeout=1000)
    assert page.calls_to("wait_for_url") == [
        ("wait_for_url", "**/dashboard", {"wait_until": "load", "timeout": 1000})
    ]


@pytest.mark.asyncio
async def test_wait_for_navigation_waits_for_next_main_frame_navigation():
    page = FakePage()
    device = Device(page)

    await device.wait_for_navigation(wait_until="domcontentloaded", timeout=2000)

    assert page.calls_to("wait_for_url") == []
    assert page.calls_to("wait_for_event") == [("wait_for_event", "framenavigated", {"timeout": 2000})]
    assert page.calls_to("wait_for_load_state") == [
        ("wait_for_load_state", "domcontentloaded", {"timeout": 2000})
    ]
    assert page.event_predicate(page.main_frame) is True
    assert page.event_predicate(object()) is False


@pytest.mark.asyncio
async def test_wait_for_committed_navigation_skips_load_state():
    page = FakePage()
    await Device(page).wait_for_navigation(wait_until="commit")

    assert page.calls_to("wait_for_event") == [("wait_for_event", "framenavigated", {})]
    assert page.calls_to("wait_for_load_state") == []


@pytest.mark.asyncio
async def test_operations_are_reported_as_steps(stream):
    steps = StepLogger(stream=stream)
    device = Device(FakePage(), steps)
    steps.start("t")

    await device.click("a-very-long-selector-name-that-is-truncated")
    await device.type("email-input", "a long text that will be cut")

    output = stream.getvalue()
    assert 'Clicking "a-very-long-selector-name-that..."' in output
    assert 'Typing "a long text that wil..." into "email-input"' in output
    assert steps.step_count == 2


def test_device_without_step_logger_is_silent():
    device = Device(FakePage())
    assert device.steps.enabled is False
