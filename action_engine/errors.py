"""Exceptions raised inside the executor and converted to step results."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ActionEngineError(Exception):
    def __init__(self, message: str, *, code: str = "EXECUTION_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class UnknownActionError(ActionEngineError):
    def __init__(self, name: Any):
        super().__init__(f"Unknown action type: {name}", code="UNKNOWN_ACTION", details={"action": name})


class InvalidActionError(ActionEngineError):
    def __init__(self, name: Any, reason: str):
        super().__init__(
            f"Invalid parameters for action \"{name}\": {reason}",
            code="INVALID_ACTION",
            details={"action": name},
        )
