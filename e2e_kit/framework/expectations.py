"""
================================================================================
Fluent Element Expectations
================================================================================

``device.expect(selector)`` returns an Expectation exposing async predicate
checks; ``.not_`` returns the same checks negated:

    await device.expect("email-input").to_have_value("agent@example.com")
    await device.expect(".error-banner").not_.to_be_visible()

Each predicate queries the page once, compares, and raises
ElementAssertionError (an AssertionError, so pytest reports a plain test
failure) on mismatch.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ContextManager, List, Optional

import allure
from playwright.async_api import ElementHandle, Page

from .step_logger import StepLogger

# Resolves true when any part of the element intersects the viewport
VIEWPORT_INTERSECTION_JS = """element => new Promise(resolve => {
    const observer = new IntersectionObserver(entries => {
        resolve(entries[0].intersectionRatio > 0);
        observer.disconnect();
    });
    observer.observe(element);
})"""

TEXT_CONTENT_JS = "element => element.textContent"
TRIMMED_TEXT_JS = "element => element.textContent.trim()"
VALUE_JS = "element => element.value"
ATTRIBUTE_JS = "(element, name) => element.getAttribute(name)"
CLASS_LIST_JS = "element => Array.from(element.classList)"


class ElementAssertionError(AssertionError):
    """
    Raised when an element expectation does not hold.

    Attributes:
        selector: Selector as written in the test
        resolved_selector: CSS selector actually queried
        predicate: Name of the failed check, e.g. "to_have_text"
        expected: Expected value
        actual: Actual value; None when the element was not found
        negated: Whether the check was reached through ``.not_``
    """

    def __init__(
        self,
        selector: str,
        resolved_selector: str,
        predicate: str,
        expected: Any,
        actual: Any,
        negated: bool = False,
    ):
        self.selector = selector
        self.resolved_selector = resolved_selector
        self.predicate = predicate
        self.expected = expected
        self.actual = actual
        self.negated = negated

        chain = f"expect({selector!r}){'.not_' if negated else ''}.{predicate}"
        actual_text = "element not found" if actual is None else f"actual: {actual!r}"
        super().__init__(
            f"{chain} failed - expected: {expected!r}, {actual_text} "
            f"(selector: {resolved_selector})"
        )


@dataclass(frozen=True)
class Expectation:
    """
    Assertion handle for one selector.

    Immutable pairing of the selector as written, its resolved form and the
    negation flag. ``not_`` flips the flag and keeps the resolved selector.
    """

    page: Page = field(repr=False, compare=False)
    selector: str
    resolved_selector: str
    negate: bool = False
    step_logger: Optional[StepLogger] = field(default=None, repr=False, compare=False)

    @property
    def not_(self) -> "Expectation":
        return replace(self, negate=not self.negate)

    # =========================================================================
    # Internals
    # =========================================================================

    def _verify(self, action: str, details: str) -> ContextManager:
        if self.step_logger is not None:
            self.step_logger.step(action, details)
        return allure.step(f"{action} {details}")

    def _fail(self, predicate: str, expected: Any, actual: Any) -> None:
        raise ElementAssertionError(
            self.selector,
            self.resolved_selector,
            predicate,
            expected,
            actual,
            negated=self.negate,
        )

    def _check(self, passed: bool, predicate: str, expected: Any, actual: Any) -> None:
        if passed == self.negate:
            self._fail(predicate, expected, actual)

    async def _query(self) -> Optional[ElementHandle]:
        return await self.page.query_selector(self.resolved_selector)

    async def _extract(
        self,
        predicate: str,
        expected: Any,
        script: str,
        arg: Any = None,
    ) -> Any:
        """Evaluate ``script`` on the element; a missing element fails in both forms."""
        element = await self._query()
        if element is None:
            self._fail(predicate, expected, None)
        return await element.evaluate(script, arg)

    # =========================================================================
    # Predicates
    # =========================================================================

    async def to_exist(self) -> None:
        state = "does not exist" if self.negate else "exists"
        with self._verify("Verifying", f'"{self.selector}" {state}'):
            element = await self._query()
            self._check(element is not None, "to_exist", True, element)

    async def to_be_visible(self) -> None:
        """
        Element is present and intersects the viewport.

        The negated form passes for a missing element: an element that is
        not in the DOM is not visible.
        """
        state = "is not visible" if self.negate else "is visible"
        with self._verify("Verifying", f'"{self.selector}" {state}'):
            element = await self._query()
            if element is None:
                if not self.negate:
                    self._fail("to_be_visible", True, None)
                return
            visible = await element.evaluate(VIEWPORT_INTERSECTION_JS)
            self._check(bool(visible), "to_be_visible", True, visible)

    async def to_contain(self, expected_text: str) -> None:
        verb = "does not contain" if self.negate else "contains"
        with self._verify("Verifying text", f'"{self.selector}" {verb} "{expected_text}"'):
            text = await self._extract("to_contain", expected_text, TEXT_CONTENT_JS)
            self._check(expected_text in (text or ""), "to_contain", expected_text, text)

    async def to_have_text(self, expected_text: str) -> None:
        """Trimmed text content equals ``expected_text`` exactly."""
        verb = "does not equal" if self.negate else "equals"
        with self._verify("Verifying exact text", f'"{self.selector}" {verb} "{expected_text}"'):
            text = await self._extract("to_have_text", expected_text, TRIMMED_TEXT_JS)
            self._check(text == expected_text, "to_have_text", expected_text, text)

    async def to_have_value(self, expected_value: str) -> None:
        verb = "does not equal" if self.negate else "equals"
        with self._verify("Verifying value", f'"{self.selector}" {verb} "{expected_value}"'):
            value = await self._extract("to_have_value", expected_value, VALUE_JS)
            self._check(value == expected_value, "to_have_value", expected_value, value)

    async def to_have_attribute(self, attribute_name: str, expected_value: str) -> None:
        operator = "!=" if self.negate else "="
        with self._verify(
            "Verifying attribute",
            f'"{self.selector}" {attribute_name}{operator}{expected_value}',
        ):
            value = await self._extract(
                "to_have_attribute", expected_value, ATTRIBUTE_JS, attribute_name
            )
            self._check(value == expected_value, "to_have_attribute", expected_value, value)

    async def to_have_class(self, class_name: str) -> None:
        verb = "does not have" if self.negate else "has"
        with self._verify("Verifying class", f'"{self.selector}" {verb} class "{class_name}"'):
            classes: List[str] = await self._extract("to_have_class", class_name, CLASS_LIST_JS)
            self._check(class_name in classes, "to_have_class", class_name, " ".join(classes))

    async def to_have_count(self, expected_count: int) -> None:
        """Number of matching elements equals ``expected_count``; zero is valid."""
        verb = "does not have" if self.negate else "has"
        with self._verify("Verifying count", f'"{self.selector}" {verb} {expected_count} elements'):
            elements = await self.page.query_selector_all(self.resolved_selector)
            count = len(elements)
            self._check(count == expected_count, "to_have_count", expected_count, count)


__all__ = [
    "ElementAssertionError",
    "Expectation",
]
