"""Execution-free, step-indexed validation reports for editors and generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .dsl.schemas import known_action_types
from .parser import parse_action_sequence
from .validation import validate_action


@dataclass(slots=True)
class StepReport:
    index: int
    action: str
    label: Optional[str]
    valid: bool
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "action": self.action,
            "label": self.label,
            "valid": self.valid,
            "error": self.error,
            "warnings": list(self.warnings),
        }


@dataclass(slots=True)
class ReportSummary:
    total: int = 0
    valid: int = 0
    invalid: int = 0
    errors: int = 0
    warnings: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "valid": self.valid,
            "invalid": self.invalid,
            "errors": self.errors,
            "warnings": self.warnings,
        }


@dataclass(slots=True)
class ValidationReport:
    valid: bool
    steps: List[StepReport] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=ReportSummary)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    parse_error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "valid": self.valid,
            "steps": [step.as_dict() for step in self.steps],
            "summary": self.summary.as_dict(),
        }
        if self.parse_error is not None:
            payload["parseError"] = self.parse_error
        else:
            payload["errors"] = list(self.errors)
            payload["warnings"] = list(self.warnings)
        return payload


def _unparseable(message: str) -> ValidationReport:
    return ValidationReport(valid=False, parse_error=message, summary=ReportSummary(errors=1))


def generate_validation_report(sequence_or_text: Any) -> ValidationReport:
    parsed = parse_action_sequence(sequence_or_text)
    if not parsed.success:
        return _unparseable(parsed.error or "Failed to parse action sequence")

    sequence = parsed.sequence
    steps = sequence.get("steps") if isinstance(sequence, Mapping) else None
    if not isinstance(steps, list):
        return _unparseable('Action sequence must have a "steps" array')

    reports: List[StepReport] = []
    for index, step in enumerate(steps):
        result = validate_action(step, index)
        mapping = step if isinstance(step, Mapping) else {}
        reports.append(
            StepReport(
                index=index + 1,
                action=mapping.get("action") or "unknown",
                label=mapping.get("label") or None,
                valid=result.valid,
                error=result.error,
                warnings=list(result.warnings),
            )
        )

    invalid = [step for step in reports if not step.valid]
    warnings = [warning for step in reports for warning in step.warnings]
    return ValidationReport(
        valid=not invalid,
        steps=reports,
        summary=ReportSummary(
            total=len(reports),
            valid=len(reports) - len(invalid),
            invalid=len(invalid),
            errors=len(invalid),
            warnings=len(warnings),
        ),
        errors=[step.error for step in invalid if step.error],
        warnings=warnings,
    )


def validation_error_message(report: ValidationReport) -> Optional[str]:
    """Editor-facing failure text for ``report``, or ``None`` when it is valid."""

    if report.parse_error is not None:
        return report.parse_error
    if report.valid:
        return None
    message = f"Script validation failed with {report.summary.invalid} error(s):\n" + "; ".join(report.errors)
    if any("Unknown action type" in error for error in report.errors):
        message += "\n\nKnown action types: " + ", ".join(known_action_types())
    return message
