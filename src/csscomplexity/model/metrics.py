"""Metrics model: per-file and global statistics plus cross-file groupings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from csscomplexity.model.specificity import ZERO_SPECIFICITY, Specificity


@dataclass(frozen=True)
class FileMetrics:
    """Statistics for a single parsed stylesheet."""

    file: str
    total_rules: int = 0
    total_selectors: int = 0
    total_declarations: int = 0
    max_selector_depth: int = 0
    avg_selector_depth: float = 0
    max_specificity: Specificity = ZERO_SPECIFICITY
    avg_specificity: Specificity = ZERO_SPECIFICITY
    important_count: int = 0
    duplicate_declaration_count: int = 0
    layout_risk_score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "totalRules": self.total_rules,
            "totalSelectors": self.total_selectors,
            "totalDeclarations": self.total_declarations,
            "maxSelectorDepth": self.max_selector_depth,
            "avgSelectorDepth": self.avg_selector_depth,
            "maxSpecificity": self.max_specificity.to_dict(),
            "avgSpecificity": self.avg_specificity.to_dict(),
            "importantCount": self.important_count,
            "duplicateDeclarationCount": self.duplicate_declaration_count,
            "layoutRiskScore": self.layout_risk_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileMetrics:
        return cls(
            file=data["file"],
            total_rules=data["totalRules"],
            total_selectors=data["totalSelectors"],
            total_declarations=data["totalDeclarations"],
            max_selector_depth=data["maxSelectorDepth"],
            avg_selector_depth=data["avgSelectorDepth"],
            max_specificity=Specificity.from_dict(data["maxSpecificity"]),
            avg_specificity=Specificity.from_dict(data["avgSpecificity"]),
            important_count=data["importantCount"],
            duplicate_declaration_count=data["duplicateDeclarationCount"],
            layout_risk_score=data["layoutRiskScore"],
        )


@dataclass(frozen=True)
class GlobalMetrics:
    """Statistics aggregated over every file in one analysis run."""

    total_files: int = 0
    total_rules: int = 0
    total_selectors: int = 0
    total_declarations: int = 0
    max_selector_depth: int = 0
    avg_selector_depth: float = 0
    max_specificity: Specificity = ZERO_SPECIFICITY
    avg_specificity: Specificity = ZERO_SPECIFICITY
    total_important_count: int = 0
    total_duplicate_declarations: int = 0
    overall_layout_risk_score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalRules": self.total_rules,
            "totalSelectors": self.total_selectors,
            "totalDeclarations": self.total_declarations,
            "maxSelectorDepth": self.max_selector_depth,
            "avgSelectorDepth": self.avg_selector_depth,
            "maxSpecificity": self.max_specificity.to_dict(),
            "avgSpecificity": self.avg_specificity.to_dict(),
            "totalImportantCount": self.total_important_count,
            "totalDuplicateDeclarations": self.total_duplicate_declarations,
            "overallLayoutRiskScore": self.overall_layout_risk_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GlobalMetrics:
        return cls(
            total_files=data["totalFiles"],
            total_rules=data["totalRules"],
            total_selectors=data["totalSelectors"],
            total_declarations=data["totalDeclarations"],
            max_selector_depth=data["maxSelectorDepth"],
            avg_selector_depth=data["avgSelectorDepth"],
            max_specificity=Specificity.from_dict(data["maxSpecificity"]),
            avg_specificity=Specificity.from_dict(data["avgSpecificity"]),
            total_important_count=data["totalImportantCount"],
            total_duplicate_declarations=data["totalDuplicateDeclarations"],
            overall_layout_risk_score=data["overallLayoutRiskScore"],
        )


@dataclass(frozen=True)
class TopSelector:
    """A selector ranked among the worst offenders."""

    selector: str
    file: str
    specificity: Specificity
    depth: int
    score: float
    line: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"selector": self.selector, "file": self.file}
        if self.line is not None:
            data["line"] = self.line
        data["specificity"] = self.specificity.to_dict()
        data["depth"] = self.depth
        data["score"] = self.score
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopSelector:
        return cls(
            selector=data["selector"],
            file=data["file"],
            specificity=Specificity.from_dict(data["specificity"]),
            depth=data["depth"],
            score=data["score"],
            line=data.get("line"),
        )


# ---------------------------------------------------------------------------
# Cross-file groupings (never serialized into the report)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeclarationLocation:
    """Where a declaration was found: file, rule line, first rule selector."""

    file: str
    line: int | None
    selector: str


@dataclass(frozen=True)
class DuplicateDeclaration:
    """A normalized ``property:value`` key seen at least the minimum number of times."""

    key: str
    locations: tuple[DeclarationLocation, ...]

    @property
    def count(self) -> int:
        return len(self.locations)

    @property
    def value(self) -> str:
        parts = self.key.split(":", 1)
        return parts[1] if len(parts) > 1 else ""

    # Defined last: the name shadows the builtin for the rest of the class body.
    @property
    def property(self) -> str:
        return self.key.split(":", 1)[0]


@dataclass(frozen=True)
class DuplicateBlock:
    """A multi-property combination repeated across rules."""

    properties: tuple[str, ...]
    occurrences: tuple[DeclarationLocation, ...]


@dataclass(frozen=True)
class OverrideDefinition:
    """One rule defining a contested property."""

    selector: str
    file: str
    line: int | None
    specificity: Specificity


@dataclass(frozen=True)
class OverrideGroup:
    """A property defined by many rules, regardless of value."""

    property: str
    definitions: tuple[OverrideDefinition, ...]

    @property
    def override_count(self) -> int:
        return len(self.definitions)
