import pytest

from e2e_kit.framework.selector import is_css_selector, resolve_selector, truncate


@pytest.mark.parametrize(
    "selector",
    [".error-banner", "#main", "[name='email']", "form > button", "a:hover", "*", "body", "BUTTON"],
)
def test_css_selectors_pass_through(selector):
    assert is_css_selector(selector)
    assert resolve_selector(selector) == selector


@pytest.mark.parametrize("test_id", ["login-button", "email-input", "submit_button", "dashboard"])
def test_test_ids_become_attribute_selectors(test_id):
    assert not is_css_selector(test_id)
    assert resolve_selector(test_id) == f'[data-testid="{test_id}"]'


def test_resolution_is_stable_for_resolved_selectors():
    resolved = resolve_selector("login-button")
    assert resolve_selector(resolved) == resolved


def test_truncate_only_long_text():
    assert truncate("short", 20) == "short"
    assert truncate("a" * 25, 20) == "a" * 20 + "..."
