"""Report model: scores, recommendations, and the complete analysis output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from csscomplexity.model.issue import Issue, IssueId, Severity
from csscomplexity.model.metrics import FileMetrics, GlobalMetrics, TopSelector


@dataclass(frozen=True)
class CategoryScores:
    """Per-category scores, each 0-100 where higher is worse."""

    specificity: float = 0
    cascade: float = 0
    duplication: float = 0
    layout_risk: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "specificity": self.specificity,
            "cascade": self.cascade,
            "duplication": self.duplication,
            "layoutRisk": self.layout_risk,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CategoryScores:
        return cls(
            specificity=data["specificity"],
            cascade=data["cascade"],
            duplication=data["duplication"],
            layout_risk=data["layoutRisk"],
        )


def _empty_severity_counts() -> dict[Severity, int]:
    return {severity: 0 for severity in Severity}


@dataclass(frozen=True)
class Summary:
    overall_score: int = 0
    category_scores: CategoryScores = field(default_factory=CategoryScores)
    grade: str = "A"
    total_issues: int = 0
    issues_by_severity: dict[Severity, int] = field(default_factory=_empty_severity_counts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "categoryScores": self.category_scores.to_dict(),
            "grade": self.grade,
            "totalIssues": self.total_issues,
            "issuesBySeverity": {s.value: n for s, n in self.issues_by_severity.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Summary:
        return cls(
            overall_score=data["overallScore"],
            category_scores=CategoryScores.from_dict(data["categoryScores"]),
            grade=data["grade"],
            total_issues=data["totalIssues"],
            issues_by_severity={
                Severity(k): v for k, v in data["issuesBySeverity"].items()
            },
        )


@dataclass(frozen=True)
class Recommendation:
    """Grouped advice for one category of issues."""

    category: str
    title: str
    description: str
    priority: str  # "high", "medium", "low"
    related_issue_ids: tuple[IssueId, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "relatedIssueIds": [i.value for i in self.related_issue_ids],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recommendation:
        return cls(
            category=data["category"],
            title=data["title"],
            description=data["description"],
            priority=data["priority"],
            related_issue_ids=tuple(IssueId(i) for i in data.get("relatedIssueIds", [])),
        )


@dataclass(frozen=True)
class Report:
    """The complete output of one analysis run."""

    version: str
    timestamp: str
    summary: Summary
    global_metrics: GlobalMetrics
    file_metrics: tuple[FileMetrics, ...] = ()
    issues: tuple[Issue, ...] = ()
    top_selectors: tuple[TopSelector, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "summary": self.summary.to_dict(),
            "globalMetrics": self.global_metrics.to_dict(),
            "fileMetrics": [m.to_dict() for m in self.file_metrics],
            "issues": [i.to_dict() for i in self.issues],
            "topSelectors": [s.to_dict() for s in self.top_selectors],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Report:
        return cls(
            version=data["version"],
            timestamp=data["timestamp"],
            summary=Summary.from_dict(data["summary"]),
            global_metrics=GlobalMetrics.from_dict(data["globalMetrics"]),
            file_metrics=tuple(FileMetrics.from_dict(m) for m in data.get("fileMetrics", [])),
            issues=tuple(Issue.from_dict(i) for i in data.get("issues", [])),
            top_selectors=tuple(TopSelector.from_dict(s) for s in data.get("topSelectors", [])),
            recommendations=tuple(
                Recommendation.from_dict(r) for r in data.get("recommendations", [])
            ),
        )


@dataclass(frozen=True)
class ThresholdResult:
    """Pass/fail verdict for CI use."""

    passed: bool
    reasons: tuple[str, ...] = ()
