"""Page handle contract and its Playwright-backed implementation.

The engine only ever talks to a :class:`PageHandle`.  Acquiring, preparing
and releasing the underlying browser page is the caller's job; the adapter
below wraps a page it is given and never launches or closes anything.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Union, runtime_checkable

from playwright.async_api import Error as PlaywrightError, Page

from .page_scripts import FIRST_MATCH_VISIBLE_SCRIPT

log = logging.getLogger(__name__)

_WAIT_UNTIL_ALIASES = {
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
}
_WAIT_UNTIL_STATES = {"load", "domcontentloaded", "networkidle", "commit"}


@runtime_checkable
class PageHandle(Protocol):
    """Capabilities the executor needs from a live page."""

    async def goto(self, url: str, *, timeout: float, wait_until: str) -> None: ...

    async def go_back(self, *, timeout: float, wait_until: str) -> None: ...

    async def go_forward(self, *, timeout: float, wait_until: str) -> None: ...

    async def reload(self, *, timeout: float, wait_until: str) -> None: ...

    async def click(self, selector: str, *, button: str, click_count: int, delay: float) -> None: ...

    async def type(self, selector: str, text: str, *, delay: float) -> None: ...

    async def select(self, selector: str, values: List[str]) -> None: ...

    async def hover(self, selector: str) -> None: ...

    async def focus(self, selector: str) -> None: ...

    async def press(self, key: str, *, delay: float) -> None: ...

    async def wait_for_selector(
        self,
        selector: str,
        *,
        timeout: float,
        visible: Optional[bool] = None,
        hidden: Optional[bool] = None,
    ) -> None: ...

    async def wait_for_navigation(self, *, timeout: float, wait_until: str) -> None: ...

    async def wait_for_function(self, script: str, *, timeout: float, polling: Union[str, float]) -> None: ...

    async def evaluate(self, script: str, arg: Any = None) -> Any: ...

    async def current_url(self) -> str: ...

    async def title(self) -> str: ...

    async def set_viewport(
        self,
        width: int,
        height: int,
        *,
        device_scale_factor: float = 1,
        is_mobile: bool = False,
        has_touch: bool = False,
    ) -> None: ...

    async def count(self, selector: str) -> int: ...

    async def is_visible(self, selector: str) -> bool: ...

    async def text_content(self, selector: str) -> Optional[str]: ...


def normalize_wait_until(value: str) -> str:
    state = _WAIT_UNTIL_ALIASES.get(value, value)
    if state not in _WAIT_UNTIL_STATES:
        log.debug("Unsupported waitUntil %r, falling back to 'load'", value)
        return "load"
    return state


def selector_state(visible: Optional[bool], hidden: Optional[bool]) -> str:
    if hidden:
        return "hidden"
    if visible:
        return "visible"
    return "attached"


class PlaywrightPage:
    """:class:`PageHandle` over a ``playwright.async_api.Page``."""

    def __init__(self, page: Page) -> None:
        self.page = page

    async def goto(self, url: str, *, timeout: float, wait_until: str) -> None:
        await self.page.goto(url, timeout=timeout, wait_until=normalize_wait_until(wait_until))

    async def go_back(self, *, timeout: float, wait_until: str) -> None:
        await self.page.go_back(timeout=timeout, wait_until=normalize_wait_until(wait_until))

    async def go_forward(self, *, timeout: float, wait_until: str) -> None:
        await self.page.go_forward(timeout=timeout, wait_until=normalize_wait_until(wait_until))

    async def reload(self, *, timeout: float, wait_until: str) -> None:
        await self.page.reload(timeout=timeout, wait_until=normalize_wait_until(wait_until))

    async def click(self, selector: str, *, button: str, click_count: int, delay: float) -> None:
        await self.page.click(selector, button=button, click_count=click_count, delay=delay)

    async def type(self, selector: str, text: str, *, delay: float) -> None:
        await self.page.locator(selector).first.press_sequentially(text, delay=delay)

    async def select(self, selector: str, values: List[str]) -> None:
        await self.page.select_option(selector, value=values)

    async def hover(self, selector: str) -> None:
        await self.page.hover(selector)

    async def focus(self, selector: str) -> None:
        await self.page.focus(selector)

    async def press(self, key: str, *, delay: float) -> None:
        await self.page.keyboard.press(key, delay=delay)

    async def wait_for_selector(
        self,
        selector: str,
        *,
        timeout: float,
        visible: Optional[bool] = None,
        hidden: Optional[bool] = None,
    ) -> None:
        await self.page.wait_for_selector(selector, state=selector_state(visible, hidden), timeout=timeout)

    async def wait_for_navigation(self, *, timeout: float, wait_until: str) -> None:
        async with self.page.expect_navigation(wait_until=normalize_wait_until(wait_until), timeout=timeout):
            pass

    async def wait_for_function(self, script: str, *, timeout: float, polling: Union[str, float]) -> None:
        if polling != "raf" and not isinstance(polling, (int, float)):
            log.debug("Unsupported polling mode %r, using 'raf'", polling)
            polling = "raf"
        await self.page.wait_for_function(script, polling=polling, timeout=timeout)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if arg is None:
            return await self.page.evaluate(script)
        return await self.page.evaluate(script, arg)

    async def current_url(self) -> str:
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    async def set_viewport(
        self,
        width: int,
        height: int,
        *,
        device_scale_factor: float = 1,
        is_mobile: bool = False,
        has_touch: bool = False,
    ) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})
        if device_scale_factor == 1 and not is_mobile and not has_touch:
            return
        # Scale, mobile and touch are context options in Playwright; only
        # Chromium lets us change them on a live page.
        try:
            session = await self.page.context.new_cdp_session(self.page)
        except PlaywrightError as exc:
            log.warning("Device emulation flags ignored, CDP unavailable: %s", exc)
            return
        try:
            await session.send(
                "Emulation.setDeviceMetricsOverride",
                {
                    "width": width,
                    "height": height,
                    "deviceScaleFactor": device_scale_factor,
                    "mobile": is_mobile,
                },
            )
            await session.send("Emulation.setTouchEmulationEnabled", {"enabled": has_touch})
        finally:
            await session.detach()

    async def count(self, selector: str) -> int:
        return await self.page.locator(selector).count()

    async def is_visible(self, selector: str) -> bool:
        return bool(await self.page.evaluate(FIRST_MATCH_VISIBLE_SCRIPT, selector))

    async def text_content(self, selector: str) -> Optional[str]:
        element = await self.page.query_selector(selector)
        if element is None:
            return None
        return await element.text_content() or ""
