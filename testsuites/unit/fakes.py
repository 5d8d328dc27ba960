"""
In-memory stand-ins for the Playwright page objects the device layer calls.

FakePage records every call as (method, *args, kwargs) in ``calls``;
FakeElement answers the evaluation scripts used by the expectations.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from e2e_kit.framework.expectations import (
    ATTRIBUTE_JS,
    CLASS_LIST_JS,
    TEXT_CONTENT_JS,
    TRIMMED_TEXT_JS,
    VALUE_JS,
    VIEWPORT_INTERSECTION_JS,
)


class FakeElement:
    def __init__(
        self,
        text: str = "",
        value: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
        classes: Iterable[str] = (),
        visible: bool = True,
    ):
        self.text = text
        self.value = value
        self.attributes = attributes or {}
        self.classes = list(classes)
        self.visible = visible

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if script == VIEWPORT_INTERSECTION_JS:
            return self.visible
        if script == TEXT_CONTENT_JS:
            return self.text
        if script == TRIMMED_TEXT_JS:
            return self.text.strip()
        if script == VALUE_JS:
            return self.value
        if script == ATTRIBUTE_JS:
            return self.attributes.get(arg)
        if script == CLASS_LIST_JS:
            return list(self.classes)
        raise AssertionError(f"unexpected script: {script}")


class FakeRequest:
    def __init__(self, url: str):
        self.url = url


class FakeRoute:
    def __init__(self, url: str):
        self.request = FakeRequest(url)
        self.outcome: Optional[str] = None

    async def abort(self) -> None:
        self.outcome = "aborted"

    async def continue_(self) -> None:
        self.outcome = "continued"


class FakeContext:
    def __init__(self):
        self.cookies_store: List[Dict[str, Any]] = []

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        self.cookies_store.extend(cookies)

    async def cookies(self) -> List[Dict[str, Any]]:
        return list(self.cookies_store)

    async def clear_cookies(self) -> None:
        self.cookies_store.clear()


class FakePage:
    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None):
        self.elements = elements or {}
        self.calls: List[tuple] = []
        self.url = "about:blank"
        self.viewport: Optional[Dict[str, int]] = None
        self.headers: Dict[str, str] = {}
        self.route_handler: Optional[Callable] = None
        self.context = FakeContext()
        self.main_frame = object()
        self.event_predicate: Optional[Callable] = None

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((method, *args, kwargs))

    def calls_to(self, method: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == method]

    async def query_selector(self, selector: str) -> Optional[FakeElement]:
        self._record("query_selector", selector)
        matches = self.elements.get(selector, [])
        return matches[0] if matches else None

    async def query_selector_all(self, selector: str) -> List[FakeElement]:
        self._record("query_selector_all", selector)
        return list(self.elements.get(selector, []))

    async def eval_on_selector(self, selector: str, script: str) -> Any:
        self._record("eval_on_selector", selector, script)
        matches = self.elements.get(selector, [])
        if not matches:
            raise LookupError(f"no element for {selector}")
        return await matches[0].evaluate(script)

    async def goto(self, url: str, **kwargs: Any) -> None:
        self._record("goto", url, **kwargs)
        self.url = url

    async def click(self, selector: str, **kwargs: Any) -> None:
        self._record("click", selector, **kwargs)

    async def type(self, selector: str, text: str, **kwargs: Any) -> None:
        self._record("type", selector, text, **kwargs)

    async def select_option(self, selector: str, value: Any) -> List[str]:
        self._record("select_option", selector, value)
        return [value] if isinstance(value, str) else list(value)

    async def wait_for_selector(self, selector: str, **kwargs: Any) -> Optional[FakeElement]:
        self._record("wait_for_selector", selector, **kwargs)
        matches = self.elements.get(selector, [])
        return matches[0] if matches else None

    async def wait_for_url(self, url: Any, **kwargs: Any) -> None:
        self._record("wait_for_url", url, **kwargs)

    async def wait_for_event(self, event: str, predicate: Optional[Callable] = None, **kwargs: Any) -> Any:
        self._record("wait_for_event", event, **kwargs)
        self.event_predicate = predicate
        return self.main_frame

    async def wait_for_load_state(self, state: Optional[str] = None, **kwargs: Any) -> None:
        self._record("wait_for_load_state", state, **kwargs)

    async def title(self) -> str:
        return "Fake Title"

    async def content(self) -> str:
        return "<html><body></body></html>"

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self._record("evaluate", expression, arg)
        return arg

    async def screenshot(self, **kwargs: Any) -> bytes:
        self._record("screenshot", **kwargs)
        return b"\x89PNG"

    async def set_viewport_size(self, size: Dict[str, int]) -> None:
        self.viewport = size

    async def set_extra_http_headers(self, headers: Dict[str, str]) -> None:
        self.headers.update(headers)

    async def route(self, pattern: str, handler: Callable) -> None:
        self._record("route", pattern)
        self.route_handler = handler
