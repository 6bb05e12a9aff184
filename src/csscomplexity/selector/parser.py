"""Selector analysis: Lark parse into an AST, then depth, specificity and flags.

Malformed selectors never abort analysis. When the grammar rejects a
selector, a regex-based estimate is used instead (see ``_fallback_*``).
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from csscomplexity.model.specificity import Specificity
from csscomplexity.model.stylesheet import ParsedSelector
from csscomplexity.selector.nodes import (
    LEGACY_PSEUDO_ELEMENTS,
    AttributeSelector,
    ClassSelector,
    Combinator,
    ComplexSelector,
    IdSelector,
    PseudoClass,
    PseudoElement,
    SelectorNode,
    TypeSelector,
    Universal,
)

__all__ = [
    "SelectorSyntaxError",
    "calculate_selector_depth",
    "calculate_specificity",
    "parse_selector",
    "parse_selector_ast",
    "split_selector_list",
]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


class SelectorSyntaxError(ValueError):
    """Raised when a selector cannot be parsed by the grammar."""


def _function_name(token: Token, prefix: int) -> str:
    return str(token)[prefix:].split("(", 1)[0]


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into :mod:`selector.nodes` values."""

    def start(self, items: list[ComplexSelector]) -> ComplexSelector:
        return items[0]

    def complex_selector(self, items: list[object]) -> ComplexSelector:
        nodes: list[SelectorNode] = []
        for item in items:
            if isinstance(item, tuple):
                nodes.extend(item)
            else:
                nodes.append(item)  # type: ignore[arg-type]
        return ComplexSelector(nodes=tuple(nodes))

    def relative_selector(self, items: list[object]) -> ComplexSelector:
        if len(items) == 2:
            leading, rest = items
            return ComplexSelector(nodes=(leading,) + rest.nodes)  # type: ignore[operator, union-attr]
        return items[0]  # type: ignore[return-value]

    def selector_list(self, items: list[object]) -> list[ComplexSelector]:
        return [item for item in items if isinstance(item, ComplexSelector)]

    def combinator(self, items: list[Token]) -> Combinator:
        return Combinator(kind=str(items[0]).strip() or " ")

    def compound_selector(self, items: list[SelectorNode]) -> tuple[SelectorNode, ...]:
        return tuple(items)

    def element(self, items: list[Token]) -> TypeSelector:
        return TypeSelector(name=str(items[0]))

    def universal(self, items: list[Token]) -> Universal:
        return Universal(raw=str(items[0]))

    def id_selector(self, items: list[Token]) -> IdSelector:
        return IdSelector(name=str(items[0])[1:])

    def class_selector(self, items: list[Token]) -> ClassSelector:
        return ClassSelector(name=str(items[0])[1:])

    def attribute_selector(self, items: list[Token]) -> AttributeSelector:
        return AttributeSelector(raw=str(items[0]))

    def pseudo_class(self, items: list[Token]) -> PseudoClass | PseudoElement:
        name = _function_name(items[0], 1)
        if name.lower() in LEGACY_PSEUDO_ELEMENTS:
            return PseudoElement(name=name)
        raw_argument = None
        if len(items) == 3:
            raw_argument = str(items[1]).strip()
        elif len(items) == 2:
            raw_argument = ""
        return PseudoClass(name=name, raw_argument=raw_argument)

    def pseudo_element(self, items: list[Token]) -> PseudoElement:
        return PseudoElement(name=_function_name(items[0], 2))

    def logical_pseudo_class(self, items: list[object]) -> PseudoClass:
        name = _function_name(items[0], 1)  # type: ignore[arg-type]
        return PseudoClass(name=name, arguments=tuple(items[1]))  # type: ignore[arg-type]


@functools.lru_cache(maxsize=1)
def _selector_parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


@functools.lru_cache(maxsize=4096)
def parse_selector_ast(selector: str) -> ComplexSelector:
    """Parse one selector branch into a :class:`ComplexSelector`.

    Raises:
        SelectorSyntaxError: if the grammar rejects the selector.
    """
    try:
        tree = _selector_parser().parse(selector.strip())
        return SelectorTransformer().transform(tree)
    except LarkError as e:
        raise SelectorSyntaxError(f"Invalid selector {selector!r}: {e}") from e


# ---------------------------------------------------------------------------
# AST walkers
# ---------------------------------------------------------------------------


def _walk(selector: ComplexSelector) -> Iterator[SelectorNode]:
    """Yield every node, descending into logical pseudo-class arguments."""
    for node in selector.nodes:
        yield node
        if isinstance(node, PseudoClass):
            for argument in node.arguments:
                yield from _walk(argument)


def _specificity_of(selector: ComplexSelector) -> Specificity:
    ids = classes = elements = 0
    for node in _walk(selector):
        if isinstance(node, IdSelector):
            ids += 1
        elif isinstance(node, (ClassSelector, AttributeSelector)):
            classes += 1
        elif isinstance(node, PseudoClass):
            if not node.is_logical:
                classes += 1
        elif isinstance(node, (PseudoElement, TypeSelector)):
            elements += 1
        elif isinstance(node, (Universal, Combinator)):
            pass
        else:
            raise TypeError(f"Unknown selector node: {node!r}")
    return Specificity(ids=ids, classes=classes, elements=elements)


def _depth_of(selector: ComplexSelector) -> int:
    return 1 + len(selector.combinators)


@dataclass(frozen=True)
class _Flags:
    has_id: bool = False
    has_attribute: bool = False
    has_pseudo_class: bool = False
    has_pseudo_element: bool = False


def _flags_of(selector: ComplexSelector) -> _Flags:
    nodes = list(_walk(selector))
    return _Flags(
        has_id=any(isinstance(n, IdSelector) for n in nodes),
        has_attribute=any(isinstance(n, AttributeSelector) for n in nodes),
        has_pseudo_class=any(isinstance(n, PseudoClass) for n in nodes),
        has_pseudo_element=any(isinstance(n, PseudoElement) for n in nodes),
    )


# ---------------------------------------------------------------------------
# Regex fallback for selectors the grammar rejects
# ---------------------------------------------------------------------------

_ID_RE = re.compile(r"#[a-zA-Z_-][\w-]*")
_CLASS_RE = re.compile(r"\.[a-zA-Z_-][\w-]*")
_ATTRIBUTE_RE = re.compile(r"\[[^\]]+\]")
_ELEMENT_RE = re.compile(r"(?:^|[\s>+~])([a-zA-Z][\w-]*)")
_COMBINATOR_SPLIT_RE = re.compile(r"[\s>+~]")


def _fallback_depth(selector: str) -> int:
    parts = [p for p in _COMBINATOR_SPLIT_RE.split(selector) if p.strip()]
    return max(1, len(parts))


def _fallback_specificity(selector: str) -> Specificity:
    return Specificity(
        ids=len(_ID_RE.findall(selector)),
        classes=len(_CLASS_RE.findall(selector)) + len(_ATTRIBUTE_RE.findall(selector)),
        elements=len(_ELEMENT_RE.findall(selector)),
    )


def _fallback_flags(selector: str) -> _Flags:
    return _Flags(
        has_id=bool(_ID_RE.search(selector)),
        has_attribute=bool(_ATTRIBUTE_RE.search(selector)),
        has_pseudo_class=bool(re.search(r":(?!:)", selector)),
        has_pseudo_element="::" in selector,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_selector_depth(selector: str) -> int:
    """Number of compound selectors joined by top-level combinators."""
    try:
        return _depth_of(parse_selector_ast(selector))
    except SelectorSyntaxError:
        return _fallback_depth(selector)


def calculate_specificity(selector: str) -> Specificity:
    try:
        return _specificity_of(parse_selector_ast(selector))
    except SelectorSyntaxError:
        return _fallback_specificity(selector)


def parse_selector(selector: str) -> ParsedSelector:
    """Analyze one selector branch: depth, specificity, and structural flags."""
    try:
        ast = parse_selector_ast(selector)
    except SelectorSyntaxError as exc:
        logger.debug("Falling back to regex estimate: %s", exc)
        depth = _fallback_depth(selector)
        specificity = _fallback_specificity(selector)
        flags = _fallback_flags(selector)
    else:
        depth = _depth_of(ast)
        specificity = _specificity_of(ast)
        flags = _flags_of(ast)
    return ParsedSelector(
        raw=selector,
        depth=depth,
        specificity=specificity,
        has_id=flags.has_id,
        has_pseudo_class=flags.has_pseudo_class,
        has_pseudo_element=flags.has_pseudo_element,
        has_attribute=flags.has_attribute,
    )


def split_selector_list(text: str) -> list[str]:
    """Split a selector list on top-level commas, dropping empty branches.

    Commas inside parentheses, attribute brackets, or strings do not split.
    """
    branches: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False
    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\":
            current.append(ch)
            escaped = True
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            branches.append("".join(current))
            current = []
            continue
        current.append(ch)
    branches.append("".join(current))
    return [b.strip() for b in branches if b.strip()]
