"""Base data structures for the check system."""

from dataclasses import dataclass


@dataclass
class CheckResult:
    """Outcome of a single check.

    Attributes:
        name: Identifier for the check (e.g. "check" or "check_fails:TypeError").
        passed: Whether the condition held or the expected failure kind was raised.
        message: Human-readable diagnostic detail; empty when the check passed.
        location: "file:line" of the call site, when it could be determined.
    """

    name: str
    passed: bool
    message: str = ""
    location: str | None = None
