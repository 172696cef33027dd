"""Entry points for the two callers of the engine: instructions and tests.

Instructions prepare a page before capture and only care whether the run
succeeded.  Tests care about the assertion verdicts.  Both go through
parse, then execute; acquiring and releasing the page stays with the
caller.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .assertions import AssertionSummary, collect_assertion_results
from .config import EngineConfig
from .page import PageHandle
from .parser import parse_action_sequence
from .runner import SequenceResult, execute_action_sequence

log = logging.getLogger(__name__)


@dataclass(slots=True)
class InstructionOutcome:
    success: bool
    error: Optional[str] = None
    sequence_result: Optional[SequenceResult] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success, "error": self.error}
        if self.sequence_result is not None:
            payload["execution"] = self.sequence_result.as_dict()
        return payload


@dataclass(slots=True)
class TestOutcome:
    __test__ = False

    passed: bool
    message: str
    execution_time_ms: int
    assertions: Optional[AssertionSummary] = None
    sequence_result: Optional[SequenceResult] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "passed": self.passed,
            "message": self.message,
            "executionTimeMs": self.execution_time_ms,
        }
        if self.assertions is not None:
            payload["assertions"] = self.assertions.as_dict()
        if self.sequence_result is not None:
            payload["execution"] = self.sequence_result.as_dict()
        return payload


def _failure_message(result: SequenceResult) -> str:
    if result.error:
        return result.error
    failed = result.failed_step
    if failed is not None:
        return f"[{failed.label}] {failed.error}"
    return "Action sequence failed"


async def run_instruction(page: PageHandle, script: Any, *, config: Optional[EngineConfig] = None) -> InstructionOutcome:
    parsed = parse_action_sequence(script)
    if not parsed.success:
        log.error("Instruction not run: %s", parsed.error)
        return InstructionOutcome(False, parsed.error)

    result = await execute_action_sequence(page, parsed.sequence, log_prefix="Instruction", config=config)
    if result.success:
        return InstructionOutcome(True, None, result)
    return InstructionOutcome(False, _failure_message(result), result)


async def run_test(page: PageHandle, script: Any, *, config: Optional[EngineConfig] = None) -> TestOutcome:
    start = time.monotonic()
    parsed = parse_action_sequence(script)
    if not parsed.success:
        log.error("Test not run: %s", parsed.error)
        return TestOutcome(False, parsed.error or "Failed to parse action sequence", 0)

    result = await execute_action_sequence(page, parsed.sequence, log_prefix="Test", config=config)
    summary = collect_assertion_results(result.results)
    elapsed = int((time.monotonic() - start) * 1000)

    if not result.success:
        return TestOutcome(False, _failure_message(result), elapsed, summary, result)

    failure = summary.first_failure
    if failure is not None:
        message = failure.message or "Assertion failed"
        return TestOutcome(False, f"[{failure.label}] {message}", elapsed, summary, result)

    if summary.total_assertions == 0:
        message = "Sequence completed with no assertions"
    else:
        message = f"{summary.passed}/{summary.total_assertions} assertion(s) passed"
    return TestOutcome(True, message, elapsed, summary, result)
