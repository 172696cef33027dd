"""Schema-validated interpreter for declarative browser action sequences."""

from .assertions import AssertionRecord, AssertionSummary, collect_assertion_results
from .config import EngineConfig, load_config
from .dsl import ACTION_SCHEMAS, DEFAULT_TIMEOUTS, describe_action_schemas, known_action_types, registry
from .executor import StepResult, execute_action
from .page import PageHandle, PlaywrightPage
from .parser import ParseResult, parse_action_sequence
from .report import ValidationReport, generate_validation_report, validation_error_message
from .runner import SequenceResult, execute_action_sequence
from .service import InstructionOutcome, TestOutcome, run_instruction, run_test
from .validation import SequenceValidationResult, ValidationResult, validate_action, validate_action_sequence

__all__ = [
    "ACTION_SCHEMAS",
    "DEFAULT_TIMEOUTS",
    "AssertionRecord",
    "AssertionSummary",
    "EngineConfig",
    "InstructionOutcome",
    "PageHandle",
    "ParseResult",
    "PlaywrightPage",
    "SequenceResult",
    "SequenceValidationResult",
    "StepResult",
    "TestOutcome",
    "ValidationReport",
    "ValidationResult",
    "collect_assertion_results",
    "describe_action_schemas",
    "execute_action",
    "execute_action_sequence",
    "generate_validation_report",
    "known_action_types",
    "load_config",
    "parse_action_sequence",
    "registry",
    "run_instruction",
    "run_test",
    "validate_action",
    "validate_action_sequence",
    "validation_error_message",
]
