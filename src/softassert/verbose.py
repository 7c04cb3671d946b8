"""Per-run and per-script debug logs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "softassert_run"
) -> logging.Logger:
    """Return a DEBUG logger writing ``[time] message`` lines to ``debug_file``.

    With ``verbose`` the same lines are echoed to stderr. Each run and each
    script gets its own name; asking for a name that still has handlers
    raises RuntimeError instead of mixing two logs into one file.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists with handlers attached; "
            "use a unique logger name per run and script"
        )

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )
    handlers: list[logging.Handler] = []

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    handlers.append(logging.FileHandler(debug_file, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def close_logger(logger: logging.Logger) -> None:
    """Flush, close and detach every handler of ``logger``."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
