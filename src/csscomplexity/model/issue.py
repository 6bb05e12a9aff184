"""Issue model: typed, severity-ranked findings produced by the rule engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from csscomplexity.model.specificity import Specificity


class Severity(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank: critical first, low last."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class IssueId(StrEnum):
    DEEP_SELECTOR = "DEEP_SELECTOR"
    HIGH_SPECIFICITY = "HIGH_SPECIFICITY"
    IMPORTANT_ABUSE = "IMPORTANT_ABUSE"
    DUPLICATE_DECLARATIONS = "DUPLICATE_DECLARATIONS"
    LAYOUT_RISK_HOTSPOT = "LAYOUT_RISK_HOTSPOT"
    OVERRIDE_PRESSURE = "OVERRIDE_PRESSURE"
    MISSING_LAYERS = "MISSING_LAYERS"


class IssueTag(StrEnum):
    SPECIFICITY = "specificity"
    CASCADE = "cascade"
    OVERRIDE = "override"
    LAYOUT_RISK = "layout-risk"
    DUPLICATION = "duplication"
    MAINTAINABILITY = "maintainability"
    LAYER = "layer"


# Evidence fields in serialization order, as (attribute, JSON key).
_EVIDENCE_FIELDS = (
    ("selector", "selector"),
    ("property", "property"),
    ("value", "value"),
    ("line", "line"),
    ("column", "column"),
    ("specificity", "specificity"),
    ("depth", "depth"),
    ("count", "count"),
)


@dataclass(frozen=True)
class Evidence:
    """Where and what triggered an issue. Unset fields are omitted on output."""

    file: str
    selector: str | None = None
    property: str | None = None
    value: str | None = None
    line: int | None = None
    column: int | None = None
    specificity: Specificity | None = None
    depth: int | None = None
    count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file}
        for attr, key in _EVIDENCE_FIELDS:
            value = getattr(self, attr)
            if value is None:
                continue
            data[key] = value.to_dict() if isinstance(value, Specificity) else value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Evidence:
        spec = data.get("specificity")
        return cls(
            file=data["file"],
            selector=data.get("selector"),
            property=data.get("property"),
            value=data.get("value"),
            line=data.get("line"),
            column=data.get("column"),
            specificity=Specificity.from_dict(spec) if spec is not None else None,
            depth=data.get("depth"),
            count=data.get("count"),
        )


@dataclass(frozen=True)
class Suggestion:
    action: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "description": self.description}


@dataclass(frozen=True)
class Issue:
    """A single actionable finding.

    Attributes:
        id: Which detector produced the issue.
        severity: How serious the issue is.
        confidence: Detector confidence in [0, 1].
        title: One-line summary.
        why: Explanation of the risk.
        evidence: Location and measurements behind the finding.
        suggestions: Remediation options.
        tags: Categories the issue belongs to.
    """

    id: IssueId
    severity: Severity
    confidence: float
    title: str
    why: str
    evidence: Evidence
    suggestions: tuple[Suggestion, ...] = ()
    tags: tuple[IssueTag, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "severity": self.severity.value,
            "confidence": self.confidence,
            "title": self.title,
            "why": self.why,
            "evidence": self.evidence.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
            "tags": [t.value for t in self.tags],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        return cls(
            id=IssueId(data["id"]),
            severity=Severity(data["severity"]),
            confidence=data["confidence"],
            title=data["title"],
            why=data["why"],
            evidence=Evidence.from_dict(data["evidence"]),
            suggestions=tuple(
                Suggestion(action=s["action"], description=s["description"])
                for s in data.get("suggestions", [])
            ),
            tags=tuple(IssueTag(t) for t in data.get("tags", [])),
        )

    def __str__(self) -> str:
        location = self.evidence.file
        if self.evidence.line is not None:
            location = f"{location}:{self.evidence.line}"
        return f"{self.severity.value.upper()} [{location}]: {self.title}"
