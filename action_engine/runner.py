"""Run a validated action sequence step by step against one page.

Steps execute strictly in array order, each fully awaited before the next
starts.  The runner assumes exclusive use of the page for the duration of
the call and does no locking; callers must not share a page between
concurrent runs.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import EngineConfig, load_config
from .executor import ExecutionContext, StepResult, execute_action
from .page import PageHandle
from .validation import validate_action_sequence

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SequenceResult:
    success: bool
    results: List[StepResult] = field(default_factory=list)
    total_steps: int = 0
    completed_steps: int = 0
    total_duration: int = 0
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "results": [entry.as_dict() for entry in self.results],
            "totalSteps": self.total_steps,
            "completedSteps": self.completed_steps,
            "totalDuration": self.total_duration,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload

    @property
    def failed_step(self) -> Optional[StepResult]:
        for entry in self.results:
            if not entry.success:
                return entry
        return None


async def execute_action_sequence(
    page: PageHandle,
    sequence: Any,
    *,
    stop_on_error: Optional[bool] = None,
    log_prefix: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> SequenceResult:
    """Validate ``sequence`` and execute its steps in order.

    Nothing touches the page when validation fails.  With ``stop_on_error``
    (the default) the first failed step ends the run and later steps are
    left out of ``results``; otherwise every step is attempted.
    """

    config = config or load_config()
    if stop_on_error is None:
        stop_on_error = config.stop_on_error
    prefix = log_prefix or config.log_prefix

    validation = validate_action_sequence(sequence)
    if not validation.valid:
        message = "Invalid action sequence: " + "; ".join(validation.errors)
        log.error("%s: %s", prefix, message)
        return SequenceResult(success=False, error=message)

    steps = sequence["steps"]
    context: ExecutionContext = {}
    results: List[StepResult] = []
    success = True

    log.info("%s: Executing %d action(s)", prefix, len(steps))

    for index, step in enumerate(steps):
        label = step.get("label") or f"Step {index + 1}"
        target = f' on "{step["selector"]}"' if step.get("selector") else ""
        log.info("%s: [%s] %s%s", prefix, label, step["action"], target)

        outcome = await execute_action(page, step, context, config=config)
        results.append(dataclasses.replace(outcome, step_index=index + 1, label=str(label)))

        if outcome.success:
            log.info("%s: [%s] Completed in %dms", prefix, label, outcome.duration)
            continue

        success = False
        log.error("%s: [%s] Failed: %s", prefix, label, outcome.error)
        if stop_on_error:
            log.info("%s: Stopping execution due to error", prefix)
            break

    return SequenceResult(
        success=success,
        results=results,
        total_steps=len(steps),
        completed_steps=len(results),
        total_duration=sum(entry.duration for entry in results),
    )
