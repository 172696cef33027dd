"""Typed models for each step of an action sequence.

Every model carries a ``Literal`` discriminant on ``action`` so the full set
forms a closed tagged union.  Attribute names are snake_case; the camelCase
names used on the wire are accepted through aliases.  Unknown keys are
ignored here because the validator already reports them as warnings.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _positive_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return value


def _non_negative_or_zero(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(value, 0)


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _scalar_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


Timeout = Annotated[Optional[float], BeforeValidator(_positive_or_none)]
Label = Annotated[Optional[str], BeforeValidator(_optional_text)]
Text = Annotated[str, BeforeValidator(_scalar_text)]
OptionalText = Annotated[Optional[str], BeforeValidator(_scalar_text)]


class ActionBase(BaseModel):
    """Base class for all sequence steps."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    __action_name__: ClassVar[str]

    label: Label = None

    @property
    def action_name(self) -> str:
        return self.__action_name__

    def payload(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True)
        data["action"] = self.__action_name__
        return data


# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------
class ClickAction(ActionBase):
    __action_name__ = "click"

    action: Literal["click"] = "click"
    selector: str
    timeout: Timeout = None
    button: Optional[str] = None
    click_count: Optional[int] = Field(default=None, alias="clickCount")
    delay: Optional[float] = None


class TypeAction(ActionBase):
    __action_name__ = "type"

    action: Literal["type"] = "type"
    selector: str
    text: Text
    timeout: Timeout = None
    delay: Optional[float] = None


class ClearAction(ActionBase):
    __action_name__ = "clear"

    action: Literal["clear"] = "clear"
    selector: str
    timeout: Timeout = None


class SelectAction(ActionBase):
    __action_name__ = "select"

    action: Literal["select"] = "select"
    selector: str
    value: Union[str, List[str]]
    timeout: Timeout = None

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def values(self) -> List[str]:
        return list(self.value) if isinstance(self.value, list) else [self.value]


class HoverAction(ActionBase):
    __action_name__ = "hover"

    action: Literal["hover"] = "hover"
    selector: str
    timeout: Timeout = None


class FocusAction(ActionBase):
    __action_name__ = "focus"

    action: Literal["focus"] = "focus"
    selector: str
    timeout: Timeout = None


class PressAction(ActionBase):
    __action_name__ = "press"

    action: Literal["press"] = "press"
    key: Text
    delay: Optional[float] = None


# ---------------------------------------------------------------------------
# Waiting
# ---------------------------------------------------------------------------
class WaitForSelectorAction(ActionBase):
    __action_name__ = "waitForSelector"

    action: Literal["waitForSelector"] = "waitForSelector"
    selector: str
    timeout: Timeout = None
    visible: Optional[bool] = None
    hidden: Optional[bool] = None


class WaitForNavigationAction(ActionBase):
    __action_name__ = "waitForNavigation"

    action: Literal["waitForNavigation"] = "waitForNavigation"
    timeout: Timeout = None
    wait_until: Optional[str] = Field(default=None, alias="waitUntil")


class WaitForTimeoutAction(ActionBase):
    __action_name__ = "waitForTimeout"

    action: Literal["waitForTimeout"] = "waitForTimeout"
    ms: Annotated[float, BeforeValidator(_non_negative_or_zero)]


class WaitForFunctionAction(ActionBase):
    __action_name__ = "waitForFunction"

    action: Literal["waitForFunction"] = "waitForFunction"
    script: str
    timeout: Timeout = None
    polling: Optional[Union[float, str]] = None


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
class GotoAction(ActionBase):
    __action_name__ = "goto"

    action: Literal["goto"] = "goto"
    url: str
    timeout: Timeout = None
    wait_until: Optional[str] = Field(default=None, alias="waitUntil")


class GoBackAction(ActionBase):
    __action_name__ = "goBack"

    action: Literal["goBack"] = "goBack"
    timeout: Timeout = None
    wait_until: Optional[str] = Field(default=None, alias="waitUntil")


class GoForwardAction(ActionBase):
    __action_name__ = "goForward"

    action: Literal["goForward"] = "goForward"
    timeout: Timeout = None
    wait_until: Optional[str] = Field(default=None, alias="waitUntil")


class ReloadAction(ActionBase):
    __action_name__ = "reload"

    action: Literal["reload"] = "reload"
    timeout: Timeout = None
    wait_until: Optional[str] = Field(default=None, alias="waitUntil")


# ---------------------------------------------------------------------------
# Scrolling
# ---------------------------------------------------------------------------
class ScrollAction(ActionBase):
    __action_name__ = "scroll"

    action: Literal["scroll"] = "scroll"
    selector: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    behavior: Optional[str] = None


class ScrollToElementAction(ActionBase):
    __action_name__ = "scrollToElement"

    action: Literal["scrollToElement"] = "scrollToElement"
    selector: str
    block: Optional[str] = None
    inline: Optional[str] = None
    behavior: Optional[str] = None


# ---------------------------------------------------------------------------
# Page manipulation
# ---------------------------------------------------------------------------
class EvaluateAction(ActionBase):
    __action_name__ = "evaluate"

    action: Literal["evaluate"] = "evaluate"
    script: str


class SetViewportAction(ActionBase):
    __action_name__ = "setViewport"

    action: Literal["setViewport"] = "setViewport"
    width: int
    height: int
    device_scale_factor: Optional[float] = Field(default=None, alias="deviceScaleFactor")
    is_mobile: Optional[bool] = Field(default=None, alias="isMobile")
    has_touch: Optional[bool] = Field(default=None, alias="hasTouch")


# ---------------------------------------------------------------------------
# Assertions
# ---------------------------------------------------------------------------
class AssertAction(ActionBase):
    __action_name__ = "assert"

    action: Literal["assert"] = "assert"
    script: str
    message: OptionalText = None


class AssertSelectorAction(ActionBase):
    __action_name__ = "assertSelector"

    action: Literal["assertSelector"] = "assertSelector"
    selector: str
    message: OptionalText = None
    visible: Optional[bool] = None
    count: Optional[int] = None


class AssertTextAction(ActionBase):
    __action_name__ = "assertText"

    action: Literal["assertText"] = "assertText"
    selector: str
    text: Text
    message: OptionalText = None
    contains: Optional[bool] = None
    exact: Optional[bool] = None


class AssertUrlAction(ActionBase):
    __action_name__ = "assertUrl"

    action: Literal["assertUrl"] = "assertUrl"
    pattern: Text
    message: OptionalText = None
    exact: Optional[bool] = None


class AssertTitleAction(ActionBase):
    __action_name__ = "assertTitle"

    action: Literal["assertTitle"] = "assertTitle"
    pattern: Text
    message: OptionalText = None
    exact: Optional[bool] = None


ActionTypes = Union[
    ClickAction,
    TypeAction,
    ClearAction,
    SelectAction,
    HoverAction,
    FocusAction,
    PressAction,
    WaitForSelectorAction,
    WaitForNavigationAction,
    WaitForTimeoutAction,
    WaitForFunctionAction,
    GotoAction,
    GoBackAction,
    GoForwardAction,
    ReloadAction,
    ScrollAction,
    ScrollToElementAction,
    EvaluateAction,
    SetViewportAction,
    AssertAction,
    AssertSelectorAction,
    AssertTextAction,
    AssertUrlAction,
    AssertTitleAction,
]
