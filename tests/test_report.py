import json

from action_engine.report import generate_validation_report, validation_error_message

SEQUENCE = {
    "steps": [
        {"action": "goto", "url": "https://example.com", "label": "Open home"},
        {"action": "click"},
        {"action": "waitForTimeout", "ms": 100, "extra": True},
        "oops",
    ]
}


def test_object_and_json_text_produce_identical_summaries():
    from_object = generate_validation_report(SEQUENCE)
    from_text = generate_validation_report(json.dumps(SEQUENCE))
    assert from_object.summary == from_text.summary
    assert from_object.as_dict() == from_text.as_dict()


def test_report_is_step_indexed():
    report = generate_validation_report(SEQUENCE)
    assert report.valid is False
    assert [step.index for step in report.steps] == [1, 2, 3, 4]
    assert report.steps[0].label == "Open home"
    assert report.steps[1].valid is False
    assert report.steps[3].action == "unknown"
    assert report.summary.as_dict() == {"total": 4, "valid": 2, "invalid": 2, "errors": 2, "warnings": 1}
    assert len(report.errors) == 2
    assert report.warnings == ['Step 3: Unknown field(s) for "waitForTimeout": extra']


def test_missing_steps_array_is_a_parse_error():
    report = generate_validation_report({"actions": []})
    assert report.valid is False
    assert report.parse_error == 'Action sequence must have a "steps" array'
    assert report.steps == []
    assert report.summary.as_dict() == {"total": 0, "valid": 0, "invalid": 0, "errors": 1, "warnings": 0}


def test_unparseable_text_is_a_parse_error():
    report = generate_validation_report("{broken")
    assert report.parse_error.startswith("Failed to parse action sequence")
    assert report.as_dict()["parseError"] == report.parse_error


def test_empty_steps_report_is_valid_but_empty():
    report = generate_validation_report({"steps": []})
    assert report.valid is True
    assert report.summary.total == 0


def test_validation_error_message_hints_known_actions():
    report = generate_validation_report({"steps": [{"action": "tap", "selector": "#a"}]})
    message = validation_error_message(report)
    assert message.startswith("Script validation failed with 1 error(s):\n")
    assert "Known action types: click, type" in message


def test_validation_error_message_is_none_for_valid_report():
    report = generate_validation_report({"steps": [{"action": "reload"}]})
    assert validation_error_message(report) is None


def test_deeply_nested_text_is_a_parse_error():
    report = generate_validation_report('{"steps": ' + "[" * 100000)
    assert report.valid is False
    assert report.parse_error.startswith("Failed to parse action sequence")
