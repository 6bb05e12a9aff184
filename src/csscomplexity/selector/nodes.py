"""Selector AST: a closed set of node variants produced by the selector grammar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Functional pseudo-classes whose argument is a selector list. They add no
# specificity themselves; their arguments are counted instead.
LOGICAL_PSEUDO_CLASSES = frozenset({"not", "is", "where", "has"})

# Pseudo-elements that are still commonly written with a single colon.
LEGACY_PSEUDO_ELEMENTS = frozenset(
    {"before", "after", "first-line", "first-letter", "selection", "placeholder"}
)


@dataclass(frozen=True)
class IdSelector:
    name: str


@dataclass(frozen=True)
class ClassSelector:
    name: str


@dataclass(frozen=True)
class AttributeSelector:
    raw: str  # including the brackets, e.g. "[data-active]"


@dataclass(frozen=True)
class PseudoClass:
    """A pseudo-class such as ``:hover``, ``:nth-child(2n)`` or ``:not(.a)``.

    ``arguments`` holds the parsed selector list of a logical pseudo-class;
    ``raw_argument`` holds the unparsed argument of any other function.
    """

    name: str
    arguments: tuple[ComplexSelector, ...] = ()
    raw_argument: str | None = None

    @property
    def is_logical(self) -> bool:
        return self.name.lower() in LOGICAL_PSEUDO_CLASSES


@dataclass(frozen=True)
class PseudoElement:
    name: str


@dataclass(frozen=True)
class TypeSelector:
    name: str


@dataclass(frozen=True)
class Universal:
    raw: str = "*"


@dataclass(frozen=True)
class Combinator:
    kind: str  # " ", ">", "+", "~"


SelectorNode = Union[
    IdSelector,
    ClassSelector,
    AttributeSelector,
    PseudoClass,
    PseudoElement,
    TypeSelector,
    Universal,
    Combinator,
]


@dataclass(frozen=True)
class ComplexSelector:
    """Compound selectors and the combinators between them, flattened in order."""

    nodes: tuple[SelectorNode, ...]

    @property
    def combinators(self) -> tuple[Combinator, ...]:
        return tuple(n for n in self.nodes if isinstance(n, Combinator))
