"""Non-fatal checks reported to an injected diagnostic sink."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator

from softassert.assertions.base import CheckResult
from softassert.errors import ErrorKind, kind_of
from softassert.sinks import DiagnosticSink, LoggerSink

DEFAULT_MESSAGE = "Assertion failed"

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _caller_location() -> str | None:
    """Return "file:line" of the first frame outside this package."""
    frame = sys._getframe(1)
    while frame is not None:
        filename = frame.f_code.co_filename
        if not os.path.abspath(filename).startswith(_PACKAGE_DIR + os.sep):
            return f"{os.path.basename(filename)}:{frame.f_lineno}"
        frame = frame.f_back
    return None


class AssertionReporter:
    """Evaluate checks and report mismatches without halting the caller.

    The reporter holds no state besides its sink: each call builds a
    CheckResult, emits at most one diagnostic and returns the result.
    """

    def __init__(self, sink: DiagnosticSink, with_location: bool = True):
        self.sink = sink
        self.with_location = with_location

    def check(self, condition: object, message: str | None = None) -> CheckResult:
        """Report a diagnostic if ``condition`` is falsy."""
        location = _caller_location() if self.with_location else None
        if condition:
            return self._record(CheckResult(name="check", passed=True, location=location))

        result = CheckResult(
            name="check",
            passed=False,
            message=message or DEFAULT_MESSAGE,
            location=location,
        )
        self._emit(result)
        return self._record(result)

    def check_fails(
        self,
        expected_kind: ErrorKind | str,
        operation: Callable[[], object],
        message: str | None = None,
    ) -> CheckResult:
        """Invoke ``operation`` once and check it fails with ``expected_kind``.

        A normal return counts as the kind ``NoError`` and is reported the
        same way as a kind mismatch. The operation's exception is never
        propagated.
        """
        expected = ErrorKind(expected_kind)
        if expected is ErrorKind.NO_ERROR:
            raise ValueError("NoError is not a failure kind")
        location = _caller_location() if self.with_location else None
        name = f"check_fails:{expected.value}"

        caught: Exception | None = None
        try:
            operation()
        except Exception as exc:
            caught = exc

        observed = kind_of(caught)
        if observed == expected:
            return self._record(CheckResult(name=name, passed=True, location=location))

        detail = f"expected error was {expected.value}, but got {observed.value}"
        if message is not None:
            detail = f"{message} and {detail}"
        result = CheckResult(name=name, passed=False, message=detail, location=location)
        self._emit(result)
        return self._record(result)

    def _emit(self, result: CheckResult) -> None:
        text = f"{DEFAULT_MESSAGE}: {result.message}"
        if result.message == DEFAULT_MESSAGE:
            text = DEFAULT_MESSAGE
        if result.location:
            text += f" ({result.location})"
        self.sink.report(text)

    def _record(self, result: CheckResult) -> CheckResult:
        return result


class RecordingReporter(AssertionReporter):
    """AssertionReporter that also keeps every result it produced."""

    def __init__(self, sink: DiagnosticSink, with_location: bool = True):
        super().__init__(sink, with_location=with_location)
        self.results: list[CheckResult] = []

    def _record(self, result: CheckResult) -> CheckResult:
        self.results.append(result)
        return result

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)


_default_reporter = AssertionReporter(LoggerSink(logging.getLogger("softassert")))
_active_reporter: ContextVar[AssertionReporter] = ContextVar(
    "softassert_reporter", default=_default_reporter
)


def current_reporter() -> AssertionReporter:
    return _active_reporter.get()


@contextmanager
def use_reporter(reporter: AssertionReporter) -> Iterator[AssertionReporter]:
    """Route module-level check()/check_fails() to ``reporter`` inside the block."""
    token = _active_reporter.set(reporter)
    try:
        yield reporter
    finally:
        _active_reporter.reset(token)


def check(condition: object, message: str | None = None) -> CheckResult:
    return current_reporter().check(condition, message)


def check_fails(
    expected_kind: ErrorKind | str,
    operation: Callable[[], object],
    message: str | None = None,
) -> CheckResult:
    return current_reporter().check_fails(expected_kind, operation, message)
