"""CLI command: csscomplexity check -- pass/fail thresholds for CI."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csscomplexity.analyzer import analyze_directory, check_thresholds
from csscomplexity.config import ConfigError, resolve_config
from csscomplexity.formatter import format_check_result
from csscomplexity.model.issue import Severity
from csscomplexity.model.report import ThresholdResult


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("--max-score", type=int, default=60, show_default=True, help="Maximum allowed score.")
@click.option(
    "--max-high-severity",
    type=int,
    default=0,
    show_default=True,
    help="Maximum allowed high severity issues.",
)
@click.option("-s", "--silent", is_flag=True, help="Suppress output; only set the exit code.")
@click.option("--config/--no-config", "use_config", default=True, help="Use config files.")
def check(path: str, max_score: int, max_high_severity: int, silent: bool, use_config: bool) -> None:
    """Check whether CSS under PATH passes complexity thresholds.

    Exits with code 0 when every threshold holds and 1 otherwise.
    """
    target = Path(path).resolve()
    try:
        config = resolve_config(target, use_config, {"maxScore": max_score})
        report = analyze_directory(target, config)
    except (ConfigError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    result = check_thresholds(report, config)
    reasons = list(result.reasons)
    high = report.summary.issues_by_severity.get(Severity.HIGH, 0)
    if high > max_high_severity:
        reasons.append(f"High severity issues ({high}) exceed maximum ({max_high_severity})")
    result = ThresholdResult(passed=not reasons, reasons=tuple(reasons))

    if not silent:
        click.echo(format_check_result(result, report.summary.overall_score))
    sys.exit(0 if result.passed else 1)
