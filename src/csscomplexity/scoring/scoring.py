"""Category scores, the weighted overall score, and letter grades.

Every score runs 0-100 where higher is worse.
"""

from __future__ import annotations

from typing import Sequence

from csscomplexity._rounding import round_half_up
from csscomplexity.model.issue import Issue, IssueId, Severity
from csscomplexity.model.metrics import GlobalMetrics
from csscomplexity.model.report import CategoryScores, Summary
from csscomplexity.model.specificity import specificity_to_score

CATEGORY_WEIGHTS = {
    "specificity": 0.30,
    "cascade": 0.25,
    "duplication": 0.20,
    "layout_risk": 0.25,
}

# Upper bound (inclusive) of the overall score for each grade.
GRADE_BOUNDS = (
    (20, "A"),
    (40, "B"),
    (60, "C"),
    (80, "D"),
)

_CASCADE_PENALTY = {
    Severity.CRITICAL: 15,
    Severity.HIGH: 10,
    Severity.MEDIUM: 5,
    Severity.LOW: 2,
}

_LAYOUT_PENALTY = {
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
}


def _matching(issues: Sequence[Issue], *ids: IssueId) -> list[Issue]:
    return [issue for issue in issues if issue.id in ids]


def calculate_specificity_score(metrics: GlobalMetrics, issues: Sequence[Issue]) -> float:
    score: float = min(30, specificity_to_score(metrics.avg_specificity))

    max_spec = specificity_to_score(metrics.max_specificity)
    if max_spec > 100:
        score += 20
    elif max_spec > 50:
        score += 10

    if metrics.max_selector_depth > 6:
        score += 20
    elif metrics.max_selector_depth > 4:
        score += 10

    score += 2 * len(_matching(issues, IssueId.HIGH_SPECIFICITY, IssueId.DEEP_SELECTOR))
    return min(100, score)


def calculate_cascade_score(metrics: GlobalMetrics, issues: Sequence[Issue]) -> float:
    ratio = metrics.total_important_count / max(1, metrics.total_declarations)
    score: float = min(40, ratio * 500)
    for issue in _matching(issues, IssueId.IMPORTANT_ABUSE, IssueId.OVERRIDE_PRESSURE):
        score += _CASCADE_PENALTY[issue.severity]
    return min(100, score)


def calculate_duplication_score(metrics: GlobalMetrics, issues: Sequence[Issue]) -> float:
    ratio = metrics.total_duplicate_declarations / max(1, metrics.total_declarations)
    score: float = min(40, ratio * 200)
    for issue in _matching(issues, IssueId.DUPLICATE_DECLARATIONS):
        score += min(10, (issue.evidence.count or 0) / 2)
    return min(100, score)


def calculate_layout_risk_score(metrics: GlobalMetrics, issues: Sequence[Issue]) -> float:
    average_risk = metrics.overall_layout_risk_score / max(1, metrics.total_rules)
    score: float = min(40, average_risk * 10)
    for issue in _matching(issues, IssueId.LAYOUT_RISK_HOTSPOT):
        score += _LAYOUT_PENALTY.get(issue.severity, 3)
    return min(100, score)


def calculate_category_scores(metrics: GlobalMetrics, issues: Sequence[Issue]) -> CategoryScores:
    return CategoryScores(
        specificity=calculate_specificity_score(metrics, issues),
        cascade=calculate_cascade_score(metrics, issues),
        duplication=calculate_duplication_score(metrics, issues),
        layout_risk=calculate_layout_risk_score(metrics, issues),
    )


def calculate_overall_score(scores: CategoryScores) -> int:
    """Weighted mean of the category scores, clamped to 0-100 and rounded."""
    weighted = sum(getattr(scores, name) * weight for name, weight in CATEGORY_WEIGHTS.items())
    return int(round_half_up(min(100, max(0, weighted))))


def score_to_grade(score: float) -> str:
    for bound, grade in GRADE_BOUNDS:
        if score <= bound:
            return grade
    return "F"


def count_issues_by_severity(issues: Sequence[Issue]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


def generate_summary(metrics: GlobalMetrics, issues: Sequence[Issue]) -> Summary:
    category_scores = calculate_category_scores(metrics, issues)
    overall = calculate_overall_score(category_scores)
    return Summary(
        overall_score=overall,
        category_scores=category_scores,
        grade=score_to_grade(overall),
        total_issues=len(issues),
        issues_by_severity=count_issues_by_severity(issues),
    )
