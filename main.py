from __future__ import annotations

import argparse
import logging
import sys

from account_assertions.config_loader import SpecValidationError, load_scenario_spec
from account_assertions.invariant_checker import InvariantChecker
from account_assertions.reporter import Reporter
from account_assertions.scenario_runner import ScenarioRunner

logger = logging.getLogger(__name__)


def run(
    spec_path: str,
    report_file: str | None = None,
    *,
    debug_assertions: bool = False,
    use_color: bool = True,
) -> int:
    reporter = Reporter(use_color=use_color)

    try:
        spec = load_scenario_spec(spec_path)
    except SpecValidationError as exc:
        reporter.add_custom("setup", "scenario_file", False, f"Scenario file validation failed: {exc}")
        _emit(reporter, report_file)
        return 2

    if debug_assertions:
        spec.account.debug_assertions = True

    runner = ScenarioRunner(spec.account, invariant_checker=InvariantChecker())
    runner.run(spec.scenarios, reporter)

    _emit(reporter, report_file)
    return 1 if reporter.has_failures else 0


def _emit(reporter: Reporter, report_file: str | None) -> None:
    reporter.print()
    if report_file:
        reporter.write(report_file)
        logger.info("Report written to %s", report_file)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run withdrawal scenarios against a fresh account")
    parser.add_argument("spec", help="Path to YAML scenario file")
    parser.add_argument("--report-file", help="Optional output path for plain-text report")
    parser.add_argument(
        "--debug-assertions",
        action="store_true",
        help="Enable withdrawal precondition/postcondition checks unless a scenario sets its own",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured markers")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    exit_code = run(
        args.spec,
        report_file=args.report_file,
        debug_assertions=args.debug_assertions,
        use_color=not args.no_color,
    )
    sys.exit(exit_code)
