"""
================================================================================
Smart Selector Resolution
================================================================================

Turns the selector strings used in tests into something the browser can
query:
    - Literal CSS (classes, ids, attributes, combinators, pseudo selectors,
      plain tag names) is passed through unchanged
    - Anything else is a symbolic test id and becomes
      [data-testid="<token>"]

Resolution is a pure function so it can be unit tested without a browser.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

# Common HTML element names that should be treated as CSS selectors
HTML_ELEMENTS: FrozenSet[str] = frozenset({
    "html", "body", "head", "div", "span", "p", "a", "img", "ul", "li", "ol",
    "table", "tr", "td", "th", "form", "input", "button", "textarea", "select",
    "option", "label", "h1", "h2", "h3", "h4", "h5", "h6", "nav", "header",
    "footer", "section", "article", "main", "aside",
})

CSS_PREFIXES: Tuple[str, ...] = (".", "#", "[")
CSS_MARKERS: Tuple[str, ...] = (">", " ", ":", "*")

TEST_ID_ATTRIBUTE = "data-testid"


def is_css_selector(selector: str) -> bool:
    """
    Check whether a selector should be used as literal CSS.

    Args:
        selector: Raw selector as written in the test

    Returns:
        True for class/id/attribute selectors, combinators, pseudo
        selectors, the universal selector and bare HTML tag names
    """
    return (
        selector.startswith(CSS_PREFIXES)
        or any(marker in selector for marker in CSS_MARKERS)
        or selector.lower() in HTML_ELEMENTS
    )


def resolve_selector(selector: str) -> str:
    """
    Resolve a selector or test id into a CSS selector.

    Quotes inside a test id are not escaped; test ids must not contain
    a double quote.

    Usage:
        >>> resolve_selector("login-button")
        '[data-testid="login-button"]'
        >>> resolve_selector("form > button")
        'form > button'
    """
    if is_css_selector(selector):
        return selector
    return f'[{TEST_ID_ATTRIBUTE}="{selector}"]'


def truncate(text: str, limit: int) -> str:
    """Shorten text for single-line step output."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


__all__ = [
    "HTML_ELEMENTS",
    "is_css_selector",
    "resolve_selector",
    "truncate",
]
