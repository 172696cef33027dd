"""In-memory page handle used across the test-suite."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple


class FakePage:
    """Records every call; elements are ``selector -> [{"text", "visible"}]``."""

    def __init__(
        self,
        *,
        elements: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        url: str = "about:blank",
        title: str = "",
        eval_results: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.elements = elements or {}
        self.url = url
        self.page_title = title
        self.eval_results = eval_results or {}
        self.calls: List[Tuple[str, tuple, dict]] = []
        self._failures: Dict[Tuple[str, Optional[str]], str] = {}

    def fail(self, method: str, selector: Optional[str] = None, message: str = "forced failure") -> None:
        self._failures[(method, selector)] = message

    def called(self, method: str) -> List[Tuple[tuple, dict]]:
        return [(args, kwargs) for name, args, kwargs in self.calls if name == method]

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((method, args, kwargs))
        target = args[0] if args and isinstance(args[0], str) else None
        for key in ((method, target), (method, None)):
            if key in self._failures:
                raise RuntimeError(self._failures[key])

    async def goto(self, url: str, *, timeout: float, wait_until: str) -> None:
        self._record("goto", url, timeout=timeout, wait_until=wait_until)
        self.url = url

    async def go_back(self, *, timeout: float, wait_until: str) -> None:
        self._record("go_back", timeout=timeout, wait_until=wait_until)

    async def go_forward(self, *, timeout: float, wait_until: str) -> None:
        self._record("go_forward", timeout=timeout, wait_until=wait_until)

    async def reload(self, *, timeout: float, wait_until: str) -> None:
        self._record("reload", timeout=timeout, wait_until=wait_until)

    async def click(self, selector: str, *, button: str, click_count: int, delay: float) -> None:
        self._record("click", selector, button=button, click_count=click_count, delay=delay)

    async def type(self, selector: str, text: str, *, delay: float) -> None:
        self._record("type", selector, text, delay=delay)

    async def select(self, selector: str, values: List[str]) -> None:
        self._record("select", selector, values)

    async def hover(self, selector: str) -> None:
        self._record("hover", selector)

    async def focus(self, selector: str) -> None:
        self._record("focus", selector)

    async def press(self, key: str, *, delay: float) -> None:
        self._record("press", key, delay=delay)

    async def wait_for_selector(
        self,
        selector: str,
        *,
        timeout: float,
        visible: Optional[bool] = None,
        hidden: Optional[bool] = None,
    ) -> None:
        self._record("wait_for_selector", selector, timeout=timeout, visible=visible, hidden=hidden)
        if not hidden and not self.elements.get(selector):
            raise TimeoutError(f"Waiting for selector `{selector}` failed: timeout {timeout}ms exceeded")

    async def wait_for_navigation(self, *, timeout: float, wait_until: str) -> None:
        self._record("wait_for_navigation", timeout=timeout, wait_until=wait_until)

    async def wait_for_function(self, script: str, *, timeout: float, polling: Any) -> None:
        self._record("wait_for_function", script, timeout=timeout, polling=polling)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self._record("evaluate", script, arg)
        value = self.eval_results.get(script)
        if callable(value):
            return value(arg)
        return value

    async def current_url(self) -> str:
        return self.url

    async def title(self) -> str:
        return self.page_title

    async def set_viewport(
        self,
        width: int,
        height: int,
        *,
        device_scale_factor: float = 1,
        is_mobile: bool = False,
        has_touch: bool = False,
    ) -> None:
        self._record(
            "set_viewport",
            width,
            height,
            device_scale_factor=device_scale_factor,
            is_mobile=is_mobile,
            has_touch=has_touch,
        )

    async def count(self, selector: str) -> int:
        return len(self.elements.get(selector, []))

    async def is_visible(self, selector: str) -> bool:
        matches = self.elements.get(selector) or []
        return bool(matches) and matches[0].get("visible", True)

    async def text_content(self, selector: str) -> Optional[str]:
        matches = self.elements.get(selector) or []
        if not matches:
            return None
        return matches[0].get("text", "")
