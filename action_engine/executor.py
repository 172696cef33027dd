"""Execute a single action against a page handle.

Dispatch goes through ``_HANDLERS``, keyed by the typed model class.  An
import-time check refuses to load the module if any registered action type
lacks a handler, so adding a model without wiring it up fails immediately.

Scripts carried by ``evaluate``, ``assert`` and ``waitForFunction`` are run
verbatim inside the page.  They are trusted input: authored by operators or
produced by the sequence generator, never by visitors of the target site.
The engine does not sandbox or rewrite them.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from .config import EngineConfig, load_config
from .dsl import models
from .dsl.models import ActionBase
from .dsl.registry import registry
from .dsl.schemas import default_timeout
from .errors import InvalidActionError, UnknownActionError
from .page import PageHandle
from .page_scripts import (
    CLEAR_VALUE_SCRIPT,
    SCROLL_ELEMENT_SCRIPT,
    SCROLL_INTO_VIEW_SCRIPT,
    SCROLL_WINDOW_SCRIPT,
)

log = logging.getLogger(__name__)

ExecutionContext = Dict[str, Any]
Handler = Callable[[PageHandle, Any, ExecutionContext, EngineConfig], Awaitable[Any]]
H = TypeVar("H", bound=Handler)

_HANDLERS: Dict[Type[ActionBase], Handler] = {}
# Hard ceiling for waitForTimeout; config may only lower it.
MAX_WAIT_CEILING_MS = 30000

_sleep = asyncio.sleep


@dataclass(slots=True)
class StepResult:
    """Outcome of one executed action."""

    success: bool
    action: str
    duration: int
    result: Any = None
    error: Optional[str] = None
    step_index: Optional[int] = None
    label: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"action": self.action}
        if self.step_index is not None:
            payload["stepIndex"] = self.step_index
        if self.label is not None:
            payload["label"] = self.label
        payload["success"] = self.success
        payload["duration"] = self.duration
        if self.result is not None:
            payload["result"] = self.result
        if self.error is not None:
            payload["error"] = self.error
        return payload


def _handles(model: Type[ActionBase]) -> Callable[[H], H]:
    def decorator(func: H) -> H:
        _HANDLERS[model] = func
        return func

    return decorator


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _action_name(action: Any) -> str:
    if isinstance(action, ActionBase):
        return action.action_name
    if isinstance(action, Mapping) and isinstance(action.get("action"), str):
        return action["action"]
    return "unknown"


def _coerce(action: Any) -> ActionBase:
    if isinstance(action, ActionBase):
        return action
    name = _action_name(action)
    if not isinstance(action, Mapping) or name not in registry:
        raise UnknownActionError(action.get("action") if isinstance(action, Mapping) else None)
    try:
        return registry.parse_action(action)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'][1:]) or 'action'}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidActionError(name, reasons) from exc


def _timeout(action: Any, name: Optional[str] = None) -> float:
    return action.timeout or default_timeout(name or action.action_name)


def _verdict(passed: bool, message: str) -> Dict[str, Any]:
    return {"passed": passed, "message": message}


def _js_typeof(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def _matches(actual: str, pattern: str, exact: Optional[bool]) -> bool:
    if exact:
        return actual == pattern
    # TODO: decide whether an uncompilable pattern should fail the assertion
    # instead of degrading to a substring check.
    # Python `re` is not JS RegExp: JS-only syntax such as `(?<name>...)` groups
    # fails to compile here and so also lands in the substring branch.
    try:
        return re.search(pattern, actual) is not None
    except re.error:
        return pattern in actual


async def execute_action(
    page: PageHandle,
    action: Union[Mapping[str, Any], ActionBase],
    context: Optional[ExecutionContext] = None,
    *,
    config: Optional[EngineConfig] = None,
) -> StepResult:
    """Run ``action`` and report the outcome; never raises for page failures."""

    start = time.monotonic()
    name = _action_name(action)
    context = context if context is not None else {}
    try:
        typed = _coerce(action)
        result = await _HANDLERS[type(typed)](page, typed, context, config or load_config())
    except Exception as exc:
        log.debug("Action %s failed", name, exc_info=True)
        return StepResult(False, name, _elapsed_ms(start), error=str(exc) or exc.__class__.__name__)
    return StepResult(True, name, _elapsed_ms(start), result=result)


# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------
@_handles(models.ClickAction)
async def _click(page: PageHandle, action: models.ClickAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action), visible=True)
    await page.click(
        action.selector,
        button=action.button or "left",
        click_count=action.click_count or 1,
        delay=action.delay or 0,
    )


@_handles(models.TypeAction)
async def _type(page: PageHandle, action: models.TypeAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action), visible=True)
    await page.type(action.selector, action.text, delay=action.delay or 0)


@_handles(models.ClearAction)
async def _clear(page: PageHandle, action: models.ClearAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action, "type"), visible=True)
    await page.evaluate(CLEAR_VALUE_SCRIPT, action.selector)


@_handles(models.SelectAction)
async def _select(page: PageHandle, action: models.SelectAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action), visible=True)
    await page.select(action.selector, action.values())


@_handles(models.HoverAction)
async def _hover(page: PageHandle, action: models.HoverAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action), visible=True)
    await page.hover(action.selector)


@_handles(models.FocusAction)
async def _focus(page: PageHandle, action: models.FocusAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.wait_for_selector(action.selector, timeout=_timeout(action), visible=True)
    await page.focus(action.selector)


@_handles(models.PressAction)
async def _press(page: PageHandle, action: models.PressAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.press(action.key, delay=action.delay or 0)


# ---------------------------------------------------------------------------
# Waiting
# ---------------------------------------------------------------------------
@_handles(models.WaitForSelectorAction)
async def _wait_for_selector(
    page: PageHandle, action: models.WaitForSelectorAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.wait_for_selector(
        action.selector,
        timeout=_timeout(action),
        visible=action.visible,
        hidden=action.hidden,
    )


@_handles(models.WaitForNavigationAction)
async def _wait_for_navigation(
    page: PageHandle, action: models.WaitForNavigationAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.wait_for_navigation(
        timeout=_timeout(action),
        wait_until=action.wait_until or config.default_wait_until,
    )


@_handles(models.WaitForTimeoutAction)
async def _wait_for_timeout(
    page: PageHandle, action: models.WaitForTimeoutAction, context: ExecutionContext, config: EngineConfig
) -> None:
    ms = min(action.ms, config.max_wait_ms, MAX_WAIT_CEILING_MS)
    await _sleep(ms / 1000)


@_handles(models.WaitForFunctionAction)
async def _wait_for_function(
    page: PageHandle, action: models.WaitForFunctionAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.wait_for_function(
        action.script,
        timeout=_timeout(action),
        polling=action.polling or config.default_polling,
    )


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
@_handles(models.GotoAction)
async def _goto(page: PageHandle, action: models.GotoAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.goto(action.url, timeout=_timeout(action), wait_until=action.wait_until or config.default_wait_until)


@_handles(models.GoBackAction)
async def _go_back(page: PageHandle, action: models.GoBackAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.go_back(timeout=_timeout(action), wait_until=action.wait_until or config.default_wait_until)


@_handles(models.GoForwardAction)
async def _go_forward(
    page: PageHandle, action: models.GoForwardAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.go_forward(timeout=_timeout(action), wait_until=action.wait_until or config.default_wait_until)


@_handles(models.ReloadAction)
async def _reload(page: PageHandle, action: models.ReloadAction, context: ExecutionContext, config: EngineConfig) -> None:
    await page.reload(timeout=_timeout(action), wait_until=action.wait_until or config.default_wait_until)


# ---------------------------------------------------------------------------
# Scrolling
# ---------------------------------------------------------------------------
@_handles(models.ScrollAction)
async def _scroll(page: PageHandle, action: models.ScrollAction, context: ExecutionContext, config: EngineConfig) -> None:
    arg = {"x": action.x, "y": action.y, "behavior": action.behavior}
    if action.selector:
        await page.evaluate(SCROLL_ELEMENT_SCRIPT, {"selector": action.selector, **arg})
    else:
        await page.evaluate(SCROLL_WINDOW_SCRIPT, arg)


@_handles(models.ScrollToElementAction)
async def _scroll_to_element(
    page: PageHandle, action: models.ScrollToElementAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.evaluate(
        SCROLL_INTO_VIEW_SCRIPT,
        {
            "selector": action.selector,
            "block": action.block,
            "inline": action.inline,
            "behavior": action.behavior,
        },
    )


# ---------------------------------------------------------------------------
# Page manipulation
# ---------------------------------------------------------------------------
@_handles(models.EvaluateAction)
async def _evaluate(page: PageHandle, action: models.EvaluateAction, context: ExecutionContext, config: EngineConfig) -> Any:
    return await page.evaluate(action.script)


@_handles(models.SetViewportAction)
async def _set_viewport(
    page: PageHandle, action: models.SetViewportAction, context: ExecutionContext, config: EngineConfig
) -> None:
    await page.set_viewport(
        action.width,
        action.height,
        device_scale_factor=action.device_scale_factor or 1,
        is_mobile=bool(action.is_mobile),
        has_touch=bool(action.has_touch),
    )


# ---------------------------------------------------------------------------
# Assertions
# ---------------------------------------------------------------------------
@_handles(models.AssertAction)
async def _assert(page: PageHandle, action: models.AssertAction, context: ExecutionContext, config: EngineConfig) -> Any:
    value = await page.evaluate(action.script)
    if isinstance(value, dict) and isinstance(value.get("passed"), bool):
        return value
    if isinstance(value, bool):
        return _verdict(value, action.message or ("Assertion passed" if value else "Assertion failed"))
    return _verdict(
        False,
        f"Assertion script must return boolean or {{ passed, message }}. Got: {_js_typeof(value)}",
    )


@_handles(models.AssertSelectorAction)
async def _assert_selector(
    page: PageHandle, action: models.AssertSelectorAction, context: ExecutionContext, config: EngineConfig
) -> Dict[str, Any]:
    selector = action.selector
    count = await page.count(selector)

    if action.count is not None:
        if count == action.count:
            return _verdict(True, f'Found expected {action.count} element(s) for "{selector}"')
        return _verdict(False, f'Expected {action.count} element(s) for "{selector}", found {count}')

    if action.visible:
        visible = count > 0 and await page.is_visible(selector)
        if visible:
            return _verdict(True, f'Element "{selector}" is visible')
        return _verdict(False, f'Element "{selector}" is not visible')

    if count > 0:
        return _verdict(True, f'Found {count} element(s) matching "{selector}"')
    return _verdict(False, action.message or f'No elements found for "{selector}"')


@_handles(models.AssertTextAction)
async def _assert_text(
    page: PageHandle, action: models.AssertTextAction, context: ExecutionContext, config: EngineConfig
) -> Dict[str, Any]:
    content = await page.text_content(action.selector)
    if content is None:
        return _verdict(False, action.message or f'Element "{action.selector}" not found')

    actual = content.strip()
    if action.exact:
        if actual == action.text:
            return _verdict(True, f'Text matches exactly: "{action.text}"')
        return _verdict(False, f'Text mismatch. Expected: "{action.text}", Found: "{actual}"')

    if action.text in actual:
        return _verdict(True, f'Text contains: "{action.text}"')
    return _verdict(False, f'Text does not contain "{action.text}". Found: "{actual}"')


@_handles(models.AssertUrlAction)
async def _assert_url(
    page: PageHandle, action: models.AssertUrlAction, context: ExecutionContext, config: EngineConfig
) -> Dict[str, Any]:
    url = await page.current_url()
    if _matches(url, action.pattern, action.exact):
        return _verdict(True, f'URL matches pattern: "{action.pattern}"')
    return _verdict(False, action.message or f'URL "{url}" does not match pattern "{action.pattern}"')


@_handles(models.AssertTitleAction)
async def _assert_title(
    page: PageHandle, action: models.AssertTitleAction, context: ExecutionContext, config: EngineConfig
) -> Dict[str, Any]:
    title = await page.title()
    if _matches(title, action.pattern, action.exact):
        return _verdict(True, f'Title matches pattern: "{action.pattern}"')
    return _verdict(False, action.message or f'Title "{title}" does not match pattern "{action.pattern}"')


_unhandled = [spec.name for spec in registry if spec.model not in _HANDLERS]
if _unhandled:
    raise RuntimeError(f"No executor handler for action type(s): {', '.join(_unhandled)}")
