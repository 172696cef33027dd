"""Typed action registry pairing each schema entry with its pydantic model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Dict, Iterator, Mapping, Optional, Type, TypeVar, Union

from pydantic import Field, TypeAdapter

from . import models
from .models import ActionBase
from .schemas import ActionSchema, default_timeout, get_schema


@dataclass(slots=True)
class ActionSpec:
    name: str
    model: Type[ActionBase]
    schema: ActionSchema
    default_timeout: Optional[int] = None
    description: str | None = None

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "required": list(self.schema.required),
            "optional": list(self.schema.optional),
            "defaultTimeout": self.default_timeout,
            "description": self.description or "",
        }


A = TypeVar("A", bound=ActionBase)


class ActionRegistry:
    """Central registry mapping action names to typed models."""

    def __init__(self) -> None:
        self._actions: Dict[str, ActionSpec] = {}
        self._adapter: Optional[TypeAdapter[Any]] = None

    def register(self, model: Type[A], *, description: str | None = None) -> Type[A]:
        if not issubclass(model, ActionBase):
            raise TypeError("model must subclass ActionBase")
        name = model.__action_name__
        schema = get_schema(name)
        if schema is None:
            raise KeyError(f"No schema declared for action '{name}'")
        self._actions[name] = ActionSpec(
            name=name,
            model=model,
            schema=schema,
            default_timeout=default_timeout(name),
            description=description,
        )
        self._adapter = None
        return model

    def get(self, name: str) -> ActionSpec:
        try:
            return self._actions[name]
        except KeyError as exc:
            raise KeyError(f"Unknown action '{name}'") from exc

    def __contains__(self, name: str) -> bool:  # pragma: no cover - trivial
        return name in self._actions

    def __iter__(self) -> Iterator[ActionSpec]:  # pragma: no cover - trivial
        return iter(self._actions.values())

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._actions)

    def _ensure_adapter(self) -> TypeAdapter[Any]:
        if self._adapter is None:
            if not self._actions:
                raise RuntimeError("No actions registered")
            action_types = tuple(spec.model for spec in self._actions.values())
            union = Annotated[Union[action_types], Field(discriminator="action")]  # type: ignore[valid-type]
            self._adapter = TypeAdapter(union)
        return self._adapter

    def parse_action(self, data: Union[Mapping[str, Any], ActionBase]) -> ActionBase:
        if isinstance(data, ActionBase):
            return data
        adapter = self._ensure_adapter()
        return adapter.validate_python(dict(data))

    def schema(self) -> Dict[str, Any]:
        return {name: spec.to_metadata() for name, spec in self._actions.items()}


registry = ActionRegistry()

registry.register(models.ClickAction, description="Click an element once it is visible")
registry.register(models.TypeAction, description="Type text into an element")
registry.register(models.ClearAction, description="Empty an input and fire input/change events")
registry.register(models.SelectAction, description="Choose one or more options of a <select>")
registry.register(models.HoverAction, description="Move the pointer over an element")
registry.register(models.FocusAction, description="Focus an element")
registry.register(models.PressAction, description="Send a raw key press")
registry.register(models.WaitForSelectorAction, description="Wait for a selector to appear or disappear")
registry.register(models.WaitForNavigationAction, description="Wait for the next navigation")
registry.register(models.WaitForTimeoutAction, description="Sleep for a bounded number of milliseconds")
registry.register(models.WaitForFunctionAction, description="Poll an in-page predicate until truthy")
registry.register(models.GotoAction, description="Navigate to a URL")
registry.register(models.GoBackAction, description="Navigate back in history")
registry.register(models.GoForwardAction, description="Navigate forward in history")
registry.register(models.ReloadAction, description="Reload the current page")
registry.register(models.ScrollAction, description="Scroll the window or an element to an offset")
registry.register(models.ScrollToElementAction, description="Bring an element into view")
registry.register(models.EvaluateAction, description="Run a script in the page and return its value")
registry.register(models.SetViewportAction, description="Resize the viewport")
registry.register(models.AssertAction, description="Assert on the value returned by a script")
registry.register(models.AssertSelectorAction, description="Assert on the presence, count or visibility of matches")
registry.register(models.AssertTextAction, description="Assert on the text content of the first match")
registry.register(models.AssertUrlAction, description="Assert on the current URL")
registry.register(models.AssertTitleAction, description="Assert on the document title")
