"""Specificity model: the (ids, classes, elements) cascade precedence triple."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Specificity:
    """Cascade precedence of a selector.

    Attributes:
        ids: Number of id selectors.
        classes: Class, attribute, and pseudo-class selectors.
        elements: Type selectors and pseudo-elements.

    Averaged specificities carry fractional components.
    """

    ids: float = 0
    classes: float = 0
    elements: float = 0

    @property
    def score(self) -> float:
        """Scalar weight used for thresholds and ranking only."""
        return specificity_to_score(self)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.ids, self.classes, self.elements)

    def __str__(self) -> str:
        return f"{self.ids},{self.classes},{self.elements}"

    def to_dict(self) -> dict[str, Any]:
        return {"ids": self.ids, "classes": self.classes, "elements": self.elements}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Specificity:
        return cls(
            ids=data.get("ids", 0),
            classes=data.get("classes", 0),
            elements=data.get("elements", 0),
        )


ZERO_SPECIFICITY = Specificity(0, 0, 0)


def specificity_to_score(specificity: Specificity) -> float:
    """Collapse *specificity* into ``ids * 100 + classes * 10 + elements``."""
    return specificity.ids * 100 + specificity.classes * 10 + specificity.elements


def compare_specificity(a: Specificity, b: Specificity) -> float:
    """Lexicographic comparison of two specificities.

    Returns a positive number if *a* wins, negative if *b* wins, 0 if equal.
    Ids always dominate classes, which always dominate elements, whatever
    the scalar scores say.
    """
    if a.ids != b.ids:
        return a.ids - b.ids
    if a.classes != b.classes:
        return a.classes - b.classes
    return a.elements - b.elements
