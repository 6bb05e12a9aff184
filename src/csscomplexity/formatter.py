"""Console rendering of reports and check verdicts."""

from __future__ import annotations

from typing import Sequence

import click

from csscomplexity.model.issue import Issue, Severity
from csscomplexity.model.metrics import TopSelector
from csscomplexity.model.report import Recommendation, Report, Summary, ThresholdResult

ISSUE_LIMIT = 10
SELECTOR_LIMIT = 5
WHY_PREVIEW = 100
SELECTOR_PREVIEW = 50

_HEAVY_RULE = "═" * 63
_LIGHT_RULE = "─" * 63

_GRADE_COLORS = {"A": "green", "B": "cyan", "C": "yellow", "D": "magenta", "F": "red"}
_PRIORITY_COLORS = {"high": "red", "medium": "yellow"}


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _dim(text: str) -> str:
    return click.style(text, dim=True)


def _bold(text: str) -> str:
    return click.style(text, bold=True)


def format_severity(severity: Severity) -> str:
    if severity is Severity.CRITICAL:
        return click.style(" CRITICAL ", fg="white", bg="red")
    if severity is Severity.HIGH:
        return click.style("HIGH", fg="red")
    if severity is Severity.MEDIUM:
        return click.style("MEDIUM", fg="yellow")
    return _dim("LOW")


def format_grade(grade: str) -> str:
    color = _GRADE_COLORS.get(grade)
    if color is None:
        return grade
    return click.style(grade, fg=color, bold=True)


def format_score(score: float) -> str:
    """Colour a 0-100 score by the grade band it falls in."""
    text = _number(score)
    for bound, color in ((20, "green"), (40, "cyan"), (60, "yellow"), (80, "magenta")):
        if score <= bound:
            return click.style(text, fg=color)
    return click.style(text, fg="red")


def _section(title: str) -> list[str]:
    return [_bold(_LIGHT_RULE), _bold(f"  {title}"), _bold(_LIGHT_RULE), ""]


def format_summary(summary: Summary) -> str:
    scores = summary.category_scores
    counts = summary.issues_by_severity
    lines = [
        "",
        _bold(_HEAVY_RULE),
        _bold("                    CSS COMPLEXITY REPORT                       "),
        _bold(_HEAVY_RULE),
        "",
        f"  {_bold('Overall Grade:')} {format_grade(summary.grade)}    "
        f"{_bold('Score:')} {format_score(summary.overall_score)}/100 {_dim('(lower is better)')}",
        "",
        _bold("  Category Scores:"),
        f"    Specificity:  {format_score(scores.specificity):>3}/100",
        f"    Cascade:      {format_score(scores.cascade):>3}/100",
        f"    Duplication:  {format_score(scores.duplication):>3}/100",
        f"    Layout Risk:  {format_score(scores.layout_risk):>3}/100",
        "",
        _bold("  Issues Found:"),
        f"    {format_severity(Severity.CRITICAL)} {counts.get(Severity.CRITICAL, 0)}   "
        f"{format_severity(Severity.HIGH)} {counts.get(Severity.HIGH, 0)}   "
        f"{format_severity(Severity.MEDIUM)} {counts.get(Severity.MEDIUM, 0)}   "
        f"{format_severity(Severity.LOW)} {counts.get(Severity.LOW, 0)}",
        "",
    ]
    return "\n".join(lines)


def format_issue(issue: Issue, index: int) -> str:
    evidence = issue.evidence
    location = _dim(evidence.file)
    if evidence.line:
        location += _dim(f":{evidence.line}")
    lines = [
        f"  {_dim(f'{index + 1}.')} {format_severity(issue.severity)} {_bold(issue.title)}",
        f"     {location}",
    ]
    if evidence.selector:
        lines.append(f"     {click.style(evidence.selector, fg='cyan')}")
    why = _dim(issue.why[:WHY_PREVIEW])
    if len(issue.why) > WHY_PREVIEW:
        why += "..."
    lines.append(f"     {why}")
    lines.append("")
    return "\n".join(lines)


def format_issues(issues: Sequence[Issue], limit: int = ISSUE_LIMIT) -> str:
    lines = _section(f"TOP ISSUES (showing {min(limit, len(issues))} of {len(issues)})")
    for index, issue in enumerate(issues[:limit]):
        lines.append(format_issue(issue, index))
    if len(issues) > limit:
        lines.append(_dim(f"  ... and {len(issues) - limit} more issues"))
        lines.append("")
    return "\n".join(lines)


def format_top_selector(selector: TopSelector, index: int) -> str:
    spec = selector.specificity
    spec_text = f"[{_number(spec.ids)},{_number(spec.classes)},{_number(spec.elements)}]"
    name = click.style(selector.selector[:SELECTOR_PREVIEW], fg="cyan")
    if len(selector.selector) > SELECTOR_PREVIEW:
        name += "..."
    location = _dim(selector.file)
    if selector.line:
        location += _dim(f":{selector.line}")
    return (
        f"  {_dim(f'{index + 1}.')} {name}\n"
        f"     {location}  "
        f"{click.style(f'Spec: {spec_text}', fg='yellow')}  "
        f"{click.style(f'Depth: {selector.depth}', fg='magenta')}\n"
    )


def format_top_selectors(selectors: Sequence[TopSelector], limit: int = SELECTOR_LIMIT) -> str:
    lines = _section("WORST SELECTORS (highest complexity)")
    for index, selector in enumerate(selectors[:limit]):
        lines.append(format_top_selector(selector, index))
    return "\n".join(lines)


def format_recommendation(recommendation: Recommendation, index: int) -> str:
    color = _PRIORITY_COLORS.get(recommendation.priority)
    label = f"[{recommendation.priority.upper()}]"
    label = click.style(label, fg=color) if color else _dim(label)
    return (
        f"  {_dim(f'{index + 1}.')} {label} {_bold(recommendation.title)}\n"
        f"     {_dim(recommendation.description)}\n"
    )


def format_recommendations(recommendations: Sequence[Recommendation]) -> str:
    lines = _section("RECOMMENDATIONS")
    for index, recommendation in enumerate(recommendations):
        lines.append(format_recommendation(recommendation, index))
    return "\n".join(lines)


def format_next_steps() -> str:
    lines = _section("NEXT STEPS")
    lines.extend([
        "  1. Address critical and high severity issues first",
        "  2. Consider adopting CSS methodology (BEM, utility-first)",
        "  3. Set up CI check: csscomplexity check --max-score 60",
        "  4. Re-run analysis after making changes to track progress",
        "",
        _dim("  For detailed JSON report: csscomplexity analyze --format json"),
        "",
    ])
    return "\n".join(lines)


def format_report(report: Report, silent: bool = False) -> str:
    """Render the full console report; empty when *silent*."""
    if silent:
        return ""
    parts = [format_summary(report.summary)]
    if report.issues:
        parts.append(format_issues(report.issues))
    if report.top_selectors:
        parts.append(format_top_selectors(report.top_selectors))
    if report.recommendations:
        parts.append(format_recommendations(report.recommendations))
    parts.append(format_next_steps())
    parts.append(_bold(_HEAVY_RULE))
    return "\n".join(parts)


def format_check_result(result: ThresholdResult, score: float) -> str:
    lines = [""]
    if result.passed:
        lines.append(click.style("✓ CSS complexity check PASSED", fg="green", bold=True))
        lines.append(f"  Score: {format_score(score)}/100")
        lines.append("")
        return "\n".join(lines)

    lines.append(click.style("✗ CSS complexity check FAILED", fg="red", bold=True))
    lines.append(f"  Score: {format_score(score)}/100")
    lines.append("")
    lines.append("  Reasons:")
    for reason in result.reasons:
        lines.append(f"    - {reason}")
    lines.append("")
    return "\n".join(lines)
