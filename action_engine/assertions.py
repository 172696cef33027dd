"""Summarise the assertion steps of a finished sequence run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .executor import StepResult


@dataclass(slots=True)
class AssertionRecord:
    action: str
    passed: bool
    message: Optional[str]
    label: Optional[str]

    def as_dict(self) -> Dict[str, Any]:
        return {"action": self.action, "passed": self.passed, "message": self.message, "label": self.label}


@dataclass(slots=True)
class AssertionSummary:
    total_assertions: int = 0
    passed: int = 0
    failed: int = 0
    all_passed: bool = True
    results: List[AssertionRecord] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalAssertions": self.total_assertions,
            "passed": self.passed,
            "failed": self.failed,
            "allPassed": self.all_passed,
            "results": [record.as_dict() for record in self.results],
        }

    @property
    def first_failure(self) -> Optional[AssertionRecord]:
        return next((record for record in self.results if not record.passed), None)


def _fields(entry: Union[StepResult, Mapping[str, Any]]) -> tuple:
    if isinstance(entry, StepResult):
        return entry.action, entry.result, entry.label
    return entry.get("action"), entry.get("result"), entry.get("label")


def collect_assertion_results(results: Iterable[Union[StepResult, Mapping[str, Any]]]) -> AssertionSummary:
    """Pick out assertion steps that produced a verdict and count them.

    Accepts :class:`StepResult` objects or their ``as_dict()`` form.  Steps
    whose action does not start with ``assert`` are ignored, as are
    assertion steps that failed to execute and so carry no verdict.
    """

    records: List[AssertionRecord] = []
    for entry in results:
        action, verdict, label = _fields(entry)
        if not isinstance(action, str) or not action.startswith("assert"):
            continue
        if not isinstance(verdict, Mapping):
            continue
        records.append(
            AssertionRecord(
                action=action,
                passed=bool(verdict.get("passed")),
                message=verdict.get("message"),
                label=label,
            )
        )

    passed = sum(1 for record in records if record.passed)
    failed = len(records) - passed
    return AssertionSummary(
        total_assertions=len(records),
        passed=passed,
        failed=failed,
        all_passed=failed == 0,
        results=records,
    )
