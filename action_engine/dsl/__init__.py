"""Typed action definitions and the schema table they are validated against."""

from .models import ActionBase, ActionTypes
from .registry import ActionRegistry, ActionSpec, registry
from .schemas import (
    ACTION_SCHEMAS,
    DEFAULT_TIMEOUTS,
    ActionSchema,
    default_timeout,
    describe_action_schemas,
    get_schema,
    known_action_types,
)

__all__ = [
    "ACTION_SCHEMAS",
    "DEFAULT_TIMEOUTS",
    "ActionBase",
    "ActionRegistry",
    "ActionSchema",
    "ActionSpec",
    "ActionTypes",
    "default_timeout",
    "describe_action_schemas",
    "get_schema",
    "known_action_types",
    "registry",
]
