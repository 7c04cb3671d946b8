from __future__ import annotations

import logging
import os
import runpy
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

import yaml

from softassert.assertions import RecordingReporter, use_reporter
from softassert.config import ScriptConfig, SuiteConfig
from softassert.errors import ErrorKind, make_error
from softassert.sinks import CollectingSink, DiagnosticSink, LoggerSink, TeeSink
from softassert.verbose import close_logger, setup_logger


@dataclass
class ScriptResult:
    name: str
    path: str
    checks: list[dict[str, Any]] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)
    error: str | None = None
    wall_clock_seconds: float = 0.0

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.checks if c["passed"])

    @property
    def failed_count(self) -> int:
        return sum(1 for c in self.checks if not c["passed"])

    @property
    def status(self) -> str:
        if self.error is not None:
            return "ERROR"
        return "PASS" if self.failed_count == 0 else "FAIL"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@contextmanager
def _script_environ(env: dict[str, str]) -> Iterator[None]:
    saved = {key: os.environ.get(key) for key in env}
    os.environ.update(env)
    try:
        yield
    finally:
        for key, value in saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


def run_script(
    path: str | Path,
    name: str | None = None,
    env: dict[str, str] | None = None,
    logger: logging.Logger | None = None,
    extra_sinks: tuple[DiagnosticSink, ...] = (),
) -> ScriptResult:
    """Run one check script in-process and collect every check it made.

    The script sees ``check``, ``check_fails``, ``ErrorKind``, ``make_error``
    and ``reporter`` as globals; module-level ``softassert.check`` calls are
    routed to the same reporter. An uncaught exception from the script is
    recorded, not raised.
    """
    script_path = Path(path)
    if not script_path.is_file():
        raise FileNotFoundError(f"check script not found: {script_path}")

    collected = CollectingSink()
    sinks: list[DiagnosticSink] = [collected, *extra_sinks]
    if logger is not None:
        sinks.append(LoggerSink(logger))
    reporter = RecordingReporter(TeeSink(*sinks))

    result = ScriptResult(name=name or script_path.stem, path=str(script_path))
    init_globals = {
        "check": reporter.check,
        "check_fails": reporter.check_fails,
        "ErrorKind": ErrorKind,
        "make_error": make_error,
        "reporter": reporter,
    }

    if logger is not None:
        logger.debug(f"Running check script {script_path}")

    start = time.monotonic()
    with _script_environ(env or {}), use_reporter(reporter):
        try:
            runpy.run_path(str(script_path), init_globals=init_globals, run_name="__main__")
        except SystemExit as e:
            # sys.exit(0) or sys.exit() ends the script normally
            if e.code not in (0, None):
                result.error = f"SystemExit: {e.code}"
                if logger is not None:
                    logger.error(f"Script '{result.name}' exited with code {e.code}")
        except Exception as e:
            result.error = f"{type(e).__name__}: {e}"
            if logger is not None:
                logger.error(f"Script '{result.name}' raised {result.error}")
    result.wall_clock_seconds = round(time.monotonic() - start, 4)

    result.checks = [
        {
            "name": r.name,
            "passed": r.passed,
            "message": r.message,
            "location": r.location,
        }
        for r in reporter.results
    ]
    result.diagnostics = list(collected.messages)

    if logger is not None:
        logger.debug(
            f"Script '{result.name}' completed: "
            f"{result.passed_count}/{len(result.checks)} checks passed"
        )
    return result


class Runner:
    """Runs every script of a suite and writes the run directory."""

    def __init__(
        self,
        config: SuiteConfig,
        output_dir: Path,
        script_filter: str | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.output_dir = output_dir
        self.script_filter = script_filter
        self.verbose = verbose
        self.results: list[ScriptResult] = []

    def _selected_scripts(self) -> list[ScriptConfig]:
        scripts = self.config.scripts
        if self.script_filter:
            scripts = [s for s in scripts if s.name == self.script_filter]
            if not scripts:
                available = ", ".join(s.name for s in self.config.scripts)
                raise ValueError(
                    f"Unknown script: {self.script_filter!r}. Available: {available}"
                )
        return scripts

    @property
    def has_failures(self) -> bool:
        return any(r.status != "PASS" for r in self.results)

    def execute(self) -> Path:
        """Run all selected scripts. Returns the run directory."""
        scripts = self._selected_scripts()

        run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
        run_dir = self.output_dir / run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        logger = setup_logger(
            run_dir / "debug.log", verbose=self.verbose, logger_name=f"softassert_{run_id}"
        )
        logger.debug("Starting check run")
        print(f"Running {len(scripts)} check script(s)...")

        self.results = []
        try:
            for index, script in enumerate(scripts, start=1):
                # note: logger name must be unique per run+script to avoid handler collision
                script_logger = setup_logger(
                    run_dir / script.name / "debug.log",
                    verbose=self.verbose,
                    logger_name=f"softassert_{run_id}_{script.name}",
                )
                try:
                    result = run_script(
                        script.path,
                        name=script.name,
                        env=script.resolved_env(),
                        logger=script_logger,
                    )
                finally:
                    close_logger(script_logger)

                self.results.append(result)
                dur = f", {result.wall_clock_seconds:.2f}s"
                print(
                    f"  [{index}/{len(scripts)}] {result.status}  {script.name} "
                    f"({result.passed_count}/{len(result.checks)} checks{dur})"
                )
                logger.debug(
                    f"Script '{script.name}' finished with status {result.status}"
                )

            self._write_results(run_dir)
        finally:
            close_logger(logger)

        return run_dir

    def _write_results(self, run_dir: Path) -> None:
        """Write junit.xml and meta.yaml to the run directory."""
        from softassert.reporting.junit import write_junit

        write_junit(run_dir, self.results)

        try:
            import importlib.metadata

            softassert_version = importlib.metadata.version("softassert")
        except Exception:
            softassert_version = "unknown"

        meta: dict[str, Any] = {
            "run_id": run_dir.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "scripts": [r.name for r in self.results],
            "softassert_version": softassert_version,
        }
        (run_dir / "meta.yaml").write_text(yaml.dump(meta, default_flow_style=False))
