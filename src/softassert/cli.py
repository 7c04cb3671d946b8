from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="softassert", help="Run non-fatal check scripts and report diagnostics")


@app.command()
def run(
    config: str = typer.Argument(help="Path to suite YAML config"),
    script: str | None = typer.Option(None, help="Run only this script"),
    output_dir: str = typer.Option("runs", help="Output directory for run results"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Do not render report.html after the run"
    ),
):
    """Run every check script of a suite."""
    from softassert.config import load_config
    from softassert.runner import Runner
    from softassert.reporting.junit import generate_report

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        suite_config = load_config(config_path)
    except ValueError as e:
        typer.echo(f"Error: invalid config {config}: {e}", err=True)
        raise typer.Exit(1)

    runner = Runner(
        config=suite_config,
        output_dir=Path(output_dir),
        script_filter=script,
        verbose=verbose,
    )

    try:
        run_dir = runner.execute()
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Run complete: {run_dir}")
    if not no_report:
        report_path = generate_report(run_dir)
        typer.echo(f"Report: {report_path}")
    if not verbose:
        typer.echo(f"Debug log: {run_dir / 'debug.log'}")

    # Exit with non-zero if any check failed or a script errored
    if runner.has_failures:
        raise typer.Exit(1)


@app.command()
def check(
    script: str = typer.Argument(help="Path to a check script"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also list passing checks"
    ),
):
    """Run a single check script and print its diagnostics to stderr."""
    from softassert.runner import run_script
    from softassert.sinks import StreamSink

    script_path = Path(script)
    if not script_path.is_file():
        typer.echo(f"Error: check script not found: {script}", err=True)
        raise typer.Exit(1)

    result = run_script(script_path, extra_sinks=(StreamSink(),))

    if verbose:
        for c in result.checks:
            if c["passed"]:
                typer.echo(f"  ok  {c['name']} ({c['location']})")
    if result.error is not None:
        typer.echo(f"Error: script raised {result.error}", err=True)

    typer.echo(
        f"{result.status}  {result.name} "
        f"({result.passed_count}/{len(result.checks)} checks passed)"
    )
    if result.status != "PASS":
        raise typer.Exit(1)


@app.command()
def report(
    run_dir: str = typer.Argument(help="Path to run output directory"),
    open_report: bool = typer.Option(
        False, "--open", help="Open report.html in browser after generating"
    ),
):
    """Regenerate HTML report from a previous run."""
    from softassert.reporting.junit import generate_report

    run_path = Path(run_dir)
    if not run_path.exists() or not (run_path / "junit.xml").exists():
        typer.echo(f"Error: not a valid run directory: {run_dir}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(run_path)
    typer.echo(f"Report generated: {report_path}")

    if open_report:
        import webbrowser

        webbrowser.open(report_path.resolve().as_uri())


@app.command()
def init(
    dir: str = typer.Option(
        "softassert", "--dir", help="Directory to initialize check suite in"
    ),
):
    """Initialize a new check suite with an example script."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    suite = project_dir / "suite.yaml"
    if suite.exists():
        typer.echo(f"suite.yaml already exists in {dir}, skipping.")
        return

    suite.write_text("""\
scripts:
  - name: arithmetic
    path: ./checks/arithmetic.py
""")

    checks = project_dir / "checks"
    checks.mkdir(parents=True, exist_ok=True)
    (checks / "arithmetic.py").write_text("""\
from softassert import ErrorKind, check, check_fails

check(3 == 3)
check(int("2") + 1 == 3, "int() parses decimal strings")
check_fails(ErrorKind.RANGE_ERROR, lambda: int("two"), "int() rejects words")
check_fails(ErrorKind.TYPE_ERROR, lambda: 3 + "s", "no implicit str coercion")
""")

    typer.echo(f"Initialized check suite in {dir}:")
    typer.echo("  suite.yaml            - example suite config")
    typer.echo("  checks/arithmetic.py  - example check script")
