"""Diagnostic sinks that receive failure messages from the reporter."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class DiagnosticSink(Protocol):
    def report(self, message: str) -> None: ...


class LoggerSink:
    """Write diagnostics to a logger at WARNING level."""

    def __init__(self, logger: logging.Logger, level: int = logging.WARNING):
        self.logger = logger
        self.level = level

    def report(self, message: str) -> None:
        self.logger.log(self.level, message)


class StreamSink:
    """Write one diagnostic per line to a text stream (stderr by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement of sys.stderr is honoured
        return self._stream if self._stream is not None else sys.stderr

    def report(self, message: str) -> None:
        self.stream.write(message + "\n")
        self.stream.flush()


class CollectingSink:
    """Keep diagnostics in memory, for test harnesses and the runner."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)


class TeeSink:
    """Fan each diagnostic out to several sinks, in order."""

    def __init__(self, *sinks: DiagnosticSink):
        self.sinks = list(sinks)

    def report(self, message: str) -> None:
        for sink in self.sinks:
            sink.report(message)
