"""Layout risk heuristics: layout-affecting properties and risky combinations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from csscomplexity._rounding import round_half_up
from csscomplexity.model.stylesheet import ParsedDeclaration

LAYOUT_PROPERTIES = frozenset({
    # dimensions
    "width",
    "height",
    "min-width",
    "min-height",
    "max-width",
    "max-height",
    # positioning
    "top",
    "left",
    "right",
    "bottom",
    "position",
    "float",
    "clear",
    "display",
    # box model
    "margin",
    "margin-top",
    "margin-right",
    "margin-bottom",
    "margin-left",
    "padding",
    "padding-top",
    "padding-right",
    "padding-bottom",
    "padding-left",
    "border",
    "border-width",
    "border-top-width",
    "border-right-width",
    "border-bottom-width",
    "border-left-width",
    "box-sizing",
    # flexbox
    "flex",
    "flex-basis",
    "flex-grow",
    "flex-shrink",
    "flex-direction",
    "flex-wrap",
    "justify-content",
    "align-items",
    "align-self",
    "align-content",
    "order",
    # grid
    "grid",
    "grid-template",
    "grid-template-columns",
    "grid-template-rows",
    "grid-template-areas",
    "grid-column",
    "grid-row",
    "grid-area",
    "grid-gap",
    "gap",
    "row-gap",
    "column-gap",
    # overflow and text flow
    "overflow",
    "overflow-x",
    "overflow-y",
    "white-space",
    "word-wrap",
    "word-break",
    "text-overflow",
    "table-layout",
    "vertical-align",
    "line-height",
    "font-size",
    "writing-mode",
    # multi-column and fragmentation
    "columns",
    "column-count",
    "column-width",
    "column-span",
    "break-before",
    "break-after",
    "break-inside",
})

OUT_OF_FLOW_POSITIONS = ("absolute", "fixed")


@dataclass(frozen=True)
class RiskyCombination:
    """Properties that are fragile together; the rule's risk is multiplied."""

    properties: frozenset[str]
    risk_multiplier: float


# Applied in this order; multipliers compound.
RISKY_COMBINATIONS: tuple[RiskyCombination, ...] = (
    RiskyCombination(frozenset({"position", "top", "left"}), 1.5),
    RiskyCombination(frozenset({"position", "top", "right"}), 1.5),
    RiskyCombination(frozenset({"position", "bottom", "left"}), 1.5),
    RiskyCombination(frozenset({"position", "bottom", "right"}), 1.5),
    RiskyCombination(frozenset({"float", "width"}), 1.3),
    RiskyCombination(frozenset({"display", "position"}), 1.2),
)


def is_layout_property(prop: str) -> bool:
    return prop in LAYOUT_PROPERTIES


def uses_out_of_flow_positioning(declarations: Iterable[ParsedDeclaration]) -> bool:
    return any(
        d.property == "position" and d.value in OUT_OF_FLOW_POSITIONS for d in declarations
    )


def calculate_layout_risk(declarations: Iterable[ParsedDeclaration]) -> int:
    """Score how likely a declaration block is to cause fragile layout.

    +1 per layout property, +2 more for absolute/fixed positioning, +1 more
    for a negative margin; then each fully present risky combination
    multiplies the running total (rounded half up).
    """
    declarations = list(declarations)
    present = {d.property for d in declarations}
    risk = 0
    for decl in declarations:
        if decl.property not in LAYOUT_PROPERTIES:
            continue
        risk += 1
        if decl.property == "position" and decl.value in OUT_OF_FLOW_POSITIONS:
            risk += 2
        if decl.property.startswith("margin") and "-" in decl.value:
            risk += 1

    for combo in RISKY_COMBINATIONS:
        if combo.properties <= present:
            risk = int(round_half_up(risk * combo.risk_multiplier))
    return risk
