"""Tests for AssertionReporter and the module-level helpers."""

import logging

import pytest

from softassert import (
    AssertionReporter,
    CheckResult,
    CollectingSink,
    ErrorKind,
    RecordingReporter,
    check,
    check_fails,
    current_reporter,
    make_error,
    use_reporter,
)


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def reporter(sink) -> AssertionReporter:
    return AssertionReporter(sink)


def _raise(kind: ErrorKind):
    def op():
        raise make_error(kind)

    return op


# --- check ---


@pytest.mark.parametrize("condition", [True, 1, "x", [0], object()])
def test_check_truthy_emits_nothing(reporter, sink, condition):
    result = reporter.check(condition)
    assert isinstance(result, CheckResult)
    assert result.passed is True
    assert sink.messages == []


@pytest.mark.parametrize("condition", [False, 0, "", [], None])
def test_check_falsy_emits_one_diagnostic(reporter, sink, condition):
    result = reporter.check(condition)
    assert result.passed is False
    assert len(sink.messages) == 1


def test_check_equal_values_is_silent(reporter, sink):
    reporter.check(3 == 3)
    assert sink.messages == []


def test_check_failure_contains_message(reporter, sink):
    result = reporter.check(3 == 4, "should be equal")
    assert len(sink.messages) == 1
    assert "should be equal" in sink.messages[0]
    assert result.message == "should be equal"


def test_check_failure_without_message_uses_default(reporter, sink):
    result = reporter.check(False)
    assert result.message == "Assertion failed"
    assert sink.messages[0].startswith("Assertion failed")


def test_check_records_caller_location(reporter, sink):
    result = reporter.check(False, "where")
    assert result.location is not None
    assert result.location.startswith("test_reporter.py:")
    assert result.location in sink.messages[0]


def test_check_without_location(sink):
    reporter = AssertionReporter(sink, with_location=False)
    result = reporter.check(False, "plain")
    assert result.location is None
    assert sink.messages == ["Assertion failed: plain"]


# --- check_fails ---


def test_check_fails_matching_kind_is_silent(reporter, sink):
    result = reporter.check_fails(
        ErrorKind.REFERENCE_ERROR, _raise(ErrorKind.REFERENCE_ERROR)
    )
    assert result.passed is True
    assert result.name == "check_fails:ReferenceError"
    assert sink.messages == []


def test_check_fails_kind_mismatch_names_both_kinds(reporter, sink):
    result = reporter.check_fails(ErrorKind.TYPE_ERROR, _raise(ErrorKind.REFERENCE_ERROR))
    assert result.passed is False
    assert len(sink.messages) == 1
    assert "expected error was TypeError" in sink.messages[0]
    assert "but got ReferenceError" in sink.messages[0]


def test_check_fails_mismatch_prefixes_message(reporter, sink):
    reporter.check_fails(
        ErrorKind.TYPE_ERROR,
        _raise(ErrorKind.REFERENCE_ERROR),
        "no let hoisting",
    )
    assert (
        "no let hoisting and expected error was TypeError, but got ReferenceError"
        in sink.messages[0]
    )


def test_check_fails_no_error_raised_is_reported(reporter, sink):
    result = reporter.check_fails(ErrorKind.TYPE_ERROR, lambda: None)
    assert result.passed is False
    assert len(sink.messages) == 1
    assert "expected error was TypeError, but got NoError" in sink.messages[0]


def test_check_fails_invokes_operation_exactly_once(reporter):
    calls = []

    def matching():
        calls.append("m")
        raise make_error(ErrorKind.TYPE_ERROR)

    def mismatching():
        calls.append("x")
        raise make_error(ErrorKind.RANGE_ERROR)

    def returning():
        calls.append("r")

    reporter.check_fails(ErrorKind.TYPE_ERROR, matching)
    reporter.check_fails(ErrorKind.TYPE_ERROR, mismatching)
    reporter.check_fails(ErrorKind.TYPE_ERROR, returning)
    assert calls == ["m", "x", "r"]


def test_check_fails_swallows_host_exceptions(reporter, sink):
    result = reporter.check_fails(ErrorKind.REFERENCE_ERROR, lambda: undefined_name)  # noqa: F821
    assert result.passed is True

    result = reporter.check_fails(ErrorKind.REFERENCE_ERROR, lambda: 1 / 0)
    assert result.passed is False
    assert "but got Error" in sink.messages[0]


def test_check_fails_accepts_kind_by_name(reporter, sink):
    result = reporter.check_fails("RangeError", lambda: [][1])
    assert result.passed is True
    assert sink.messages == []


def test_check_fails_rejects_no_error_kind(reporter, sink):
    calls = []
    with pytest.raises(ValueError, match="NoError is not a failure kind"):
        reporter.check_fails(ErrorKind.NO_ERROR, lambda: calls.append(1))
    with pytest.raises(ValueError):
        reporter.check_fails("NoError", lambda: calls.append(1))
    assert calls == []
    assert sink.messages == []


def test_check_fails_empty_message_keeps_prefix(reporter, sink):
    result = reporter.check_fails(ErrorKind.TYPE_ERROR, lambda: None, "")
    assert result.message == " and expected error was TypeError, but got NoError"


def test_check_fails_unknown_kind_name_raises(reporter):
    with pytest.raises(ValueError):
        reporter.check_fails("NotAKind", lambda: None)


def test_check_fails_lets_keyboard_interrupt_through(reporter):
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        reporter.check_fails(ErrorKind.ERROR, interrupt)


@pytest.mark.parametrize("raised", list(ErrorKind)[:-1])
@pytest.mark.parametrize("expected", list(ErrorKind)[:-1])
def test_check_fails_diagnostic_iff_kinds_differ(raised, expected):
    sink = CollectingSink()
    AssertionReporter(sink).check_fails(expected, _raise(raised))
    assert len(sink.messages) == (0 if raised == expected else 1)


# --- RecordingReporter ---


def test_recording_reporter_keeps_every_result(sink):
    reporter = RecordingReporter(sink)
    reporter.check(True)
    reporter.check(False, "nope")
    reporter.check_fails(ErrorKind.TYPE_ERROR, lambda: None)
    assert [r.passed for r in reporter.results] == [True, False, False]
    assert reporter.passed_count == 1
    assert reporter.failed_count == 2
    assert reporter.all_passed is False
    assert len(sink.messages) == 2


def test_plain_reporter_is_stateless(reporter):
    reporter.check(False)
    assert not hasattr(reporter, "results")


# --- module-level helpers ---


def test_use_reporter_routes_module_helpers(sink):
    reporter = RecordingReporter(sink)
    with use_reporter(reporter):
        assert current_reporter() is reporter
        check(1 == 2, "routed")
        check_fails(ErrorKind.TYPE_ERROR, lambda: None)
    assert current_reporter() is not reporter
    assert len(reporter.results) == 2
    assert "routed" in sink.messages[0]
    assert reporter.results[0].location.startswith("test_reporter.py:")


def test_use_reporter_nests(sink):
    outer = RecordingReporter(sink)
    inner = RecordingReporter(CollectingSink())
    with use_reporter(outer):
        with use_reporter(inner):
            check(False)
        check(True)
    assert len(inner.results) == 1
    assert len(outer.results) == 1


def test_default_reporter_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="softassert"):
        result = check(False, "default sink")
    assert result.passed is False
    assert any("default sink" in r.getMessage() for r in caplog.records)
