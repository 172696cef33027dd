"""Structural validation of actions and action sequences.

Validation never touches a page.  Problems that block execution are
reported as errors; oddities that do not (unknown extra fields, implausible
numeric values) are reported as warnings.  Every message is prefixed with
the step's quoted ``label`` when it has one, otherwise with ``Step N``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .dsl.schemas import get_schema, known_action_types

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            payload["error"] = self.error
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return payload


@dataclass(slots=True)
class SequenceValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def step_label(action: Any, step_index: int) -> str:
    label = action.get("label") if isinstance(action, Mapping) else None
    if label:
        return f'"{label}"'
    return f"Step {step_index + 1}"


def validate_action(action: Any, step_index: int = 0) -> ValidationResult:
    """Validate one action against the schema table.

    ``step_index`` is 0-based and only used to label messages.
    """

    prefix = step_label(action, step_index)

    if not isinstance(action, Mapping):
        return ValidationResult(False, f"{prefix}: Action must be an object")

    name = action.get("action")
    if not name or not isinstance(name, str):
        return ValidationResult(False, f'{prefix}: Action must have an "action" field')

    schema = get_schema(name)
    if schema is None:
        known = ", ".join(known_action_types())
        return ValidationResult(False, f'{prefix}: Unknown action type "{name}". Known actions: {known}')

    missing = [field_name for field_name in schema.required if _is_missing(action.get(field_name))]
    if missing:
        return ValidationResult(
            False, f'{prefix}: Action "{name}" requires field(s): {", ".join(missing)}'
        )

    warnings: List[str] = []
    known_fields = schema.known_fields()
    unknown = [key for key in action if key not in known_fields]
    if unknown:
        warnings.append(f'{prefix}: Unknown field(s) for "{name}": {", ".join(map(str, unknown))}')

    if "timeout" in action and not (_is_number(action["timeout"]) and action["timeout"] > 0):
        warnings.append(f"{prefix}: timeout should be a positive number")
    if "ms" in action and not (_is_number(action["ms"]) and action["ms"] >= 0):
        warnings.append(f"{prefix}: ms should be a non-negative number")

    return ValidationResult(True, warnings=warnings)


def validate_action_sequence(sequence: Any) -> SequenceValidationResult:
    """Validate every step of ``sequence``; does not stop at the first failure."""

    if not isinstance(sequence, Mapping):
        return SequenceValidationResult(False, ["Action sequence must be an object"])

    steps = sequence.get("steps")
    if not isinstance(steps, list):
        return SequenceValidationResult(False, ['Action sequence must have a "steps" array'])

    if not steps:
        return SequenceValidationResult(False, ["Action sequence has no steps"])

    errors: List[str] = []
    warnings: List[str] = []
    for index, step in enumerate(steps):
        result = validate_action(step, index)
        if not result.valid and result.error:
            errors.append(result.error)
        warnings.extend(result.warnings)

    if errors or warnings:
        log.info("Validation found %d error(s) and %d warning(s)", len(errors), len(warnings))
        for message in errors:
            log.error("  ERROR: %s", message)
        for message in warnings:
            log.warning("  WARNING: %s", message)

    return SequenceValidationResult(not errors, errors, warnings)
