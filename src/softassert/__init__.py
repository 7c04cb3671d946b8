"""Non-fatal checks that report diagnostics to an injected sink."""

from softassert.assertions import (
    AssertionReporter,
    CheckResult,
    RecordingReporter,
    check,
    check_fails,
    current_reporter,
    use_reporter,
)
from softassert.errors import ErrorKind, KindedError, kind_of, make_error
from softassert.sinks import (
    CollectingSink,
    DiagnosticSink,
    LoggerSink,
    StreamSink,
    TeeSink,
)

__all__ = [
    "AssertionReporter",
    "CheckResult",
    "CollectingSink",
    "DiagnosticSink",
    "ErrorKind",
    "KindedError",
    "LoggerSink",
    "RecordingReporter",
    "StreamSink",
    "TeeSink",
    "check",
    "check_fails",
    "current_reporter",
    "kind_of",
    "make_error",
    "use_reporter",
]
