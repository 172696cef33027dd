from action_engine.assertions import collect_assertion_results
from action_engine.executor import StepResult


def _step(action, result=None, success=True, label=None):
    return StepResult(success, action, 5, result=result, label=label)


def test_counts_only_assertion_steps():
    results = [
        _step("goto"),
        _step("assertText", {"passed": True, "message": "ok"}, label="Heading"),
        _step("evaluate", {"passed": False, "message": "not an assertion"}),
        _step("assertUrl", {"passed": True, "message": "ok"}),
        _step("assertSelector", {"passed": False, "message": "missing"}, label="Cart"),
    ]
    summary = collect_assertion_results(results)

    assert summary.total_assertions == 3
    assert summary.passed == 2
    assert summary.failed == 1
    assert summary.all_passed is False
    assert summary.first_failure.label == "Cart"
    assert summary.as_dict()["results"][0] == {
        "action": "assertText",
        "passed": True,
        "message": "ok",
        "label": "Heading",
    }


def test_assertion_steps_without_verdict_are_skipped():
    results = [_step("assert", None, success=False), _step("assertTitle", {"passed": True, "message": "ok"})]
    summary = collect_assertion_results(results)
    assert summary.total_assertions == 1
    assert summary.all_passed is True


def test_accepts_wire_dicts():
    results = [
        {"action": "assertText", "success": True, "result": {"passed": False, "message": "nope"}, "label": "A"},
        {"action": "click", "success": True},
    ]
    summary = collect_assertion_results(results)
    assert summary.as_dict() == {
        "totalAssertions": 1,
        "passed": 0,
        "failed": 1,
        "allPassed": False,
        "results": [{"action": "assertText", "passed": False, "message": "nope", "label": "A"}],
    }


def test_empty_results_all_pass():
    summary = collect_assertion_results([])
    assert summary.total_assertions == 0
    assert summary.all_passed is True
    assert summary.first_failure is None
