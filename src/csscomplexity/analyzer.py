"""Core entry points: turn parse results into a scored report."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Sequence

from csscomplexity import __version__
from csscomplexity.files import find_css_files, parse_files
from csscomplexity.metrics import (
    TOP_SELECTOR_LIMIT,
    calculate_file_metrics,
    calculate_global_metrics,
    extract_top_selectors,
)
from csscomplexity.model.config import AnalyzerConfig, merge_config
from csscomplexity.model.issue import Severity
from csscomplexity.model.report import Report, ThresholdResult
from csscomplexity.model.stylesheet import ParseResult
from csscomplexity.rules import run_all_rules
from csscomplexity.scoring import generate_recommendations, generate_summary
from csscomplexity.stylesheet import DEFAULT_FILENAME, parse_css

logger = logging.getLogger(__name__)

ConfigInput = AnalyzerConfig | Mapping[str, Any] | None


def _timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def generate_report(
    results: Sequence[ParseResult],
    config: ConfigInput = None,
    timestamp: str | None = None,
) -> Report:
    """Build the full report for already-parsed stylesheets."""
    config = merge_config(config)
    file_metrics = [calculate_file_metrics(result) for result in results]
    global_metrics = calculate_global_metrics(file_metrics)
    issues = run_all_rules(results, config)
    summary = generate_summary(global_metrics, issues)
    logger.debug(
        "Analyzed %d file(s): score %d, %d issue(s)",
        len(results),
        summary.overall_score,
        len(issues),
    )
    return Report(
        version=__version__,
        timestamp=timestamp or _timestamp(),
        summary=summary,
        global_metrics=global_metrics,
        file_metrics=tuple(file_metrics),
        issues=tuple(issues),
        top_selectors=tuple(extract_top_selectors(results, TOP_SELECTOR_LIMIT)),
        recommendations=tuple(generate_recommendations(issues)),
    )


def analyze(results: Sequence[ParseResult], config: ConfigInput = None) -> Report:
    """Analyze parsed stylesheets. Never raises for well-formed results."""
    return generate_report(results, config)


def analyze_css(
    source: str, config: ConfigInput = None, filename: str = DEFAULT_FILENAME
) -> Report:
    """Parse and analyze a single stylesheet given as text."""
    return generate_report([parse_css(source, filename)], config)


def analyze_directory(path: str | Path, config: ConfigInput = None) -> Report:
    """Discover stylesheets under *path*, parse them, and analyze the lot."""
    config = merge_config(config)
    files = find_css_files(path, config)
    logger.debug("Found %d stylesheet(s) under %s", len(files), path)
    return generate_report(parse_files(files), config)


def check_thresholds(report: Report, config: ConfigInput = None) -> ThresholdResult:
    """Pass iff the overall score is within ``max_score`` and nothing is critical."""
    config = merge_config(config)
    reasons: list[str] = []

    score = report.summary.overall_score
    if score > config.max_score:
        reasons.append(f"Overall score ({score}) exceeds maximum allowed ({config.max_score})")

    critical = report.summary.issues_by_severity.get(Severity.CRITICAL, 0)
    if critical > 0:
        reasons.append(f"Found {critical} critical issue(s)")

    return ThresholdResult(passed=not reasons, reasons=tuple(reasons))


def format_report_as_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2)
