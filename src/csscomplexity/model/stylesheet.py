"""Parsed stylesheet model: selectors, declarations, rules, and per-file results."""

from __future__ import annotations

from dataclasses import dataclass

from csscomplexity.model.specificity import ZERO_SPECIFICITY, Specificity


@dataclass(frozen=True)
class ParsedSelector:
    """One comma-separated branch of a rule's selector list."""

    raw: str
    depth: int
    specificity: Specificity
    has_id: bool = False
    has_pseudo_class: bool = False
    has_pseudo_element: bool = False
    has_attribute: bool = False


@dataclass(frozen=True)
class ParsedDeclaration:
    """A ``property: value`` pair; *value* keeps its original case and spacing."""

    property: str
    value: str
    important: bool = False


@dataclass(frozen=True)
class ParsedRule:
    """A style rule: selectors sharing one declaration block.

    Attributes:
        selectors: Parsed selector branches, in source order.
        declarations: Declarations inside the block, including those of nested
            rules and at-rules, in source order.
        file: Source file name.
        line: 1-based line of the selector start, if known.
        column: 1-based column of the selector start, if known.
        layer: Name of the nearest enclosing ``@layer`` block, or None.
    """

    selectors: tuple[ParsedSelector, ...]
    declarations: tuple[ParsedDeclaration, ...]
    file: str
    line: int | None = None
    column: int | None = None
    layer: str | None = None

    @property
    def first_selector(self) -> str:
        return self.selectors[0].raw if self.selectors else ""

    @property
    def first_specificity(self) -> Specificity:
        return self.selectors[0].specificity if self.selectors else ZERO_SPECIFICITY

    @property
    def important_count(self) -> int:
        return sum(1 for d in self.declarations if d.important)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one stylesheet.

    A failed parse has no rules and exactly one error string.
    """

    file: str
    rules: tuple[ParsedRule, ...] = ()
    errors: tuple[str, ...] = ()
    layers: tuple[str, ...] = ()
    uses_layers: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def failure(cls, file: str, message: str) -> ParseResult:
        return cls(file=file, errors=(message,))
