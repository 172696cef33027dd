"""Static table of known action types and their parameter names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class ActionSchema:
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()

    def known_fields(self) -> Tuple[str, ...]:
        return ("action", "label") + self.required + self.optional


ACTION_SCHEMAS: Dict[str, ActionSchema] = {
    # Interaction
    "click": ActionSchema(("selector",), ("timeout", "button", "clickCount", "delay")),
    "type": ActionSchema(("selector", "text"), ("timeout", "delay")),
    "clear": ActionSchema(("selector",), ("timeout",)),
    "select": ActionSchema(("selector", "value"), ("timeout",)),
    "hover": ActionSchema(("selector",), ("timeout",)),
    "focus": ActionSchema(("selector",), ("timeout",)),
    "press": ActionSchema(("key",), ("delay",)),
    # Waiting
    "waitForSelector": ActionSchema(("selector",), ("timeout", "visible", "hidden")),
    "waitForNavigation": ActionSchema((), ("timeout", "waitUntil")),
    "waitForTimeout": ActionSchema(("ms",), ()),
    "waitForFunction": ActionSchema(("script",), ("timeout", "polling")),
    # Navigation
    "goto": ActionSchema(("url",), ("timeout", "waitUntil")),
    "goBack": ActionSchema((), ("timeout", "waitUntil")),
    "goForward": ActionSchema((), ("timeout", "waitUntil")),
    "reload": ActionSchema((), ("timeout", "waitUntil")),
    # Scrolling
    "scroll": ActionSchema((), ("selector", "x", "y", "behavior")),
    "scrollToElement": ActionSchema(("selector",), ("block", "inline", "behavior")),
    # Page manipulation
    "evaluate": ActionSchema(("script",), ()),
    "setViewport": ActionSchema(("width", "height"), ("deviceScaleFactor", "isMobile", "hasTouch")),
    # Assertions
    "assert": ActionSchema(("script",), ("message",)),
    "assertSelector": ActionSchema(("selector",), ("message", "visible", "count")),
    "assertText": ActionSchema(("selector", "text"), ("message", "contains", "exact")),
    "assertUrl": ActionSchema(("pattern",), ("message", "exact")),
    "assertTitle": ActionSchema(("pattern",), ("message", "exact")),
}

DEFAULT_TIMEOUTS: Dict[str, int] = {
    "click": 5000,
    "type": 5000,
    "select": 5000,
    "hover": 5000,
    "focus": 5000,
    "waitForSelector": 10000,
    "waitForNavigation": 30000,
    "waitForFunction": 10000,
    "goto": 30000,
    "goBack": 30000,
    "goForward": 30000,
    "reload": 30000,
}


def known_action_types() -> List[str]:
    return list(ACTION_SCHEMAS)


def get_schema(name: str) -> Optional[ActionSchema]:
    return ACTION_SCHEMAS.get(name)


def default_timeout(name: str) -> Optional[int]:
    return DEFAULT_TIMEOUTS.get(name)


def describe_action_schemas() -> str:
    """Render the catalogue handed to sequence generators, one line per type."""

    lines = []
    for name, schema in ACTION_SCHEMAS.items():
        required = ", ".join(schema.required) if schema.required else "none"
        optional = ", ".join(schema.optional) if schema.optional else "none"
        lines.append(f"  - {name}: required=[{required}], optional=[{optional}]")
    return "\n".join(lines)
