from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

if TYPE_CHECKING:
    from softassert.runner import ScriptResult


def _case_name(check: dict) -> str:
    location = check.get("location")
    return f"{check['name']} @ {location}" if location else check["name"]


def write_junit(run_dir: Path, results: list[ScriptResult]) -> Path:
    """Write junit.xml from script results, return path."""
    xml = JUnitXml()

    for script_result in results:
        suite = TestSuite(script_result.name)
        suite.add_property("path", script_result.path)
        suite.add_property("status", script_result.status)

        # Test cases: one per check
        for check in script_result.checks:
            case = TestCase(_case_name(check))
            case.classname = script_result.name
            if not check.get("passed", True):
                case.result = [Failure(check.get("message", ""))]
            suite.add_testcase(case)

        if script_result.error is not None:
            case = TestCase("script")
            case.classname = script_result.name
            case.result = [Error(script_result.error)]
            suite.add_testcase(case)

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        suite.time = float(script_result.wall_clock_seconds or 0.0)

        # Use append (not +=) to preserve properties and time
        xml.append(suite)

    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path


def generate_report(run_dir: Path) -> Path:
    """Render junit.xml → report.html using Jinja2 template, return path."""
    import yaml
    from jinja2 import Environment, FileSystemLoader

    junit_path = run_dir / "junit.xml"
    report_path = run_dir / "report.html"

    meta: dict = {}
    meta_path = run_dir / "meta.yaml"
    if meta_path.exists():
        meta = yaml.safe_load(meta_path.read_text()) or {}

    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    for suite in xml:
        cases = []
        for case in suite:
            result = None
            if case.result:
                result = {
                    "status": type(case.result[0]).__name__,
                    "message": case.result[0].message or "",
                }
            cases.append({"name": case.name, "result": result})

        props = {p.name: p.value for p in suite.properties()}

        debug_log = ""
        debug_path = run_dir / suite.name / "debug.log"
        if debug_path.exists():
            debug_log = debug_path.read_text(encoding="utf-8", errors="replace")

        suites.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "errors": suite.errors,
                "time": suite.time,
                "properties": props,
                "cases": cases,
                "debug_log": debug_log,
            }
        )

    total_tests = sum(s["tests"] for s in suites)
    total_failures = sum(s["failures"] for s in suites)
    total_errors = sum(s["errors"] for s in suites)

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        total_tests=total_tests,
        total_failures=total_failures,
        total_errors=total_errors,
        run_dir=str(run_dir),
        meta=meta,
    )
    report_path.write_text(html, encoding="utf-8")
    return report_path
