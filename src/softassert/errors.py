"""Error-kind tags used to categorize failures raised by checked operations."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ERROR = "Error"
    REFERENCE_ERROR = "ReferenceError"
    TYPE_ERROR = "TypeError"
    RANGE_ERROR = "RangeError"
    SYNTAX_ERROR = "SyntaxError"
    # Implicit kind of an operation that returned normally
    NO_ERROR = "NoError"

    def __str__(self) -> str:
        return self.value


class KindedError(Exception):
    """Exception that carries its ErrorKind explicitly."""

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


# Ordered: the first matching entry wins, so subclasses precede their bases.
_HOST_KINDS: tuple[tuple[type[BaseException], ErrorKind], ...] = (
    (NameError, ErrorKind.REFERENCE_ERROR),
    (TypeError, ErrorKind.TYPE_ERROR),
    (AttributeError, ErrorKind.TYPE_ERROR),
    (IndexError, ErrorKind.RANGE_ERROR),
    (KeyError, ErrorKind.RANGE_ERROR),
    (ValueError, ErrorKind.RANGE_ERROR),
    (OverflowError, ErrorKind.RANGE_ERROR),
    (RecursionError, ErrorKind.RANGE_ERROR),
    (SyntaxError, ErrorKind.SYNTAX_ERROR),
)


def make_error(kind: ErrorKind | str, message: str = "") -> KindedError:
    """Build a failure tagged with ``kind``."""
    kind = ErrorKind(kind)
    if kind is ErrorKind.NO_ERROR:
        raise ValueError("NoError is not a failure kind")
    return KindedError(kind, message)


def kind_of(exc: BaseException | None) -> ErrorKind:
    """Return the ErrorKind tag of a caught failure.

    ``None`` stands for "nothing was raised" and maps to ``NO_ERROR``.
    KindedError instances report their own tag; host exceptions are
    translated once through a fixed table, falling back to ``ERROR``.
    """
    if exc is None:
        return ErrorKind.NO_ERROR
    if isinstance(exc, KindedError):
        return exc.kind
    for host_type, kind in _HOST_KINDS:
        if isinstance(exc, host_type):
            return kind
    return ErrorKind.ERROR
