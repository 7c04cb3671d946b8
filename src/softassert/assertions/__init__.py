"""Check system: results, reporters and module-level helpers."""

from softassert.assertions.base import CheckResult
from softassert.assertions.reporter import (
    AssertionReporter,
    RecordingReporter,
    check,
    check_fails,
    current_reporter,
    use_reporter,
)

__all__ = [
    "AssertionReporter",
    "CheckResult",
    "RecordingReporter",
    "check",
    "check_fails",
    "current_reporter",
    "use_reporter",
]
