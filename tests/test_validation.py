import pytest

from action_engine.dsl import known_action_types
from action_engine.validation import validate_action, validate_action_sequence


def test_click_without_selector_names_the_missing_field():
    result = validate_action({"action": "click"})
    assert result.valid is False
    assert result.error == 'Step 1: Action "click" requires field(s): selector'


def test_all_missing_fields_are_reported_at_once():
    result = validate_action({"action": "assertText", "selector": ""}, 2)
    assert result.valid is False
    assert result.error.startswith("Step 3:")
    assert result.error.endswith("requires field(s): selector, text")


def test_null_counts_as_missing():
    result = validate_action({"action": "goto", "url": None})
    assert result.valid is False
    assert "url" in result.error


def test_unknown_action_lists_every_known_type():
    result = validate_action({"action": "frobnicate"})
    assert result.valid is False
    assert 'Unknown action type "frobnicate"' in result.error
    for name in known_action_types():
        assert name in result.error


@pytest.mark.parametrize("action", ["not a dict", 42, None, ["click"]])
def test_non_object_action_is_rejected(action):
    result = validate_action(action)
    assert result.valid is False
    assert result.error == "Step 1: Action must be an object"


@pytest.mark.parametrize("payload", [{}, {"action": ""}, {"action": 7}])
def test_missing_or_non_string_discriminant(payload):
    result = validate_action(payload)
    assert result.valid is False
    assert result.error == 'Step 1: Action must have an "action" field'


def test_label_prefixes_messages():
    result = validate_action({"action": "click", "label": "Open menu"}, 4)
    assert result.error.startswith('"Open menu": ')


def test_unknown_fields_are_warnings_not_errors():
    result = validate_action({"action": "click", "selector": "#a", "colour": "red", "size": 2})
    assert result.valid is True
    assert result.error is None
    assert result.warnings == ['Step 1: Unknown field(s) for "click": colour, size']


def test_suspicious_numbers_are_warnings():
    timeout = validate_action({"action": "click", "selector": "#a", "timeout": 0})
    assert timeout.valid is True
    assert timeout.warnings == ["Step 1: timeout should be a positive number"]

    ms = validate_action({"action": "waitForTimeout", "ms": -1})
    assert ms.valid is True
    assert ms.warnings == ["Step 1: ms should be a non-negative number"]

    boolean = validate_action({"action": "click", "selector": "#a", "timeout": True})
    assert boolean.warnings == ["Step 1: timeout should be a positive number"]


def test_zero_ms_is_accepted_without_warning():
    result = validate_action({"action": "waitForTimeout", "ms": 0})
    assert result.valid is True
    assert result.warnings == []


def test_sequence_shape_errors_are_distinct():
    assert validate_action_sequence("steps").errors == ["Action sequence must be an object"]
    assert validate_action_sequence({"steps": {}}).errors == ['Action sequence must have a "steps" array']
    assert validate_action_sequence({}).errors == ['Action sequence must have a "steps" array']
    empty = validate_action_sequence({"steps": []})
    assert empty.valid is False
    assert empty.errors == ["Action sequence has no steps"]


def test_sequence_validation_collects_every_step():
    result = validate_action_sequence(
        {
            "steps": [
                {"action": "click"},
                {"action": "goto", "url": "https://example.com", "bogus": True},
                {"action": "nope"},
            ]
        }
    )
    assert result.valid is False
    assert len(result.errors) == 2
    assert result.errors[0].startswith("Step 1:")
    assert result.errors[1].startswith("Step 3:")
    assert result.warnings == ['Step 2: Unknown field(s) for "goto": bogus']


def test_valid_sequence_with_warnings_is_still_valid():
    result = validate_action_sequence({"steps": [{"action": "waitForTimeout", "ms": 10, "note": "x"}]})
    assert result.valid is True
    assert result.errors == []
    assert result.as_dict() == {
        "valid": True,
        "errors": [],
        "warnings": ['Step 1: Unknown field(s) for "waitForTimeout": note'],
    }
