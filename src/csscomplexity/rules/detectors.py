"""Issue detectors for parsed stylesheets.

Each detector is a function taking the parse results and the resolved
configuration and returning a list of Issue objects.
"""

from __future__ import annotations

import re
from typing import Sequence

from csscomplexity.metrics import (
    calculate_layout_risk,
    detect_duplicate_declarations,
    detect_override_pressure,
    is_layout_property,
    uses_out_of_flow_positioning,
)
from csscomplexity.model.config import AnalyzerConfig
from csscomplexity.model.issue import Evidence, Issue, IssueId, IssueTag, Severity, Suggestion
from csscomplexity.model.specificity import Specificity, specificity_to_score
from csscomplexity.model.stylesheet import ParsedRule, ParseResult

LAYOUT_RISK_THRESHOLD = 5
OVERRIDE_MIN_DEFINITIONS = 5
LAYERS_MIN_RULES = 50
LAYERS_MIN_IMPORTANT = 5
LAYERS_LARGE_FILE_RULES = 20
LAYERS_MIN_LARGE_FILES = 3


# ---------------------------------------------------------------------------
# Severity grading
# ---------------------------------------------------------------------------


def severity_for_depth(depth: int, max_depth: int) -> Severity:
    excess = depth - max_depth
    if excess >= 4:
        return Severity.CRITICAL
    if excess >= 2:
        return Severity.HIGH
    return Severity.MEDIUM


def severity_for_specificity(specificity: Specificity, max_score: float) -> Severity:
    if specificity.ids >= 2:
        return Severity.CRITICAL
    if specificity.ids >= 1:
        return Severity.HIGH
    score = specificity_to_score(specificity)
    if score > max_score * 2:
        return Severity.HIGH
    if score > max_score * 1.5:
        return Severity.MEDIUM
    return Severity.LOW


def severity_for_important_count(count: int, max_per_file: int) -> Severity:
    ratio = count / max_per_file
    if ratio >= 4:
        return Severity.CRITICAL
    if ratio >= 2.5:
        return Severity.HIGH
    if ratio >= 1.5:
        return Severity.MEDIUM
    return Severity.LOW


def severity_for_duplicate_count(count: int, min_count: int) -> Severity:
    if count >= min_count * 5:
        return Severity.HIGH
    if count >= min_count * 3:
        return Severity.MEDIUM
    return Severity.LOW


def severity_for_layout_risk(risk: int) -> Severity:
    if risk >= 15:
        return Severity.HIGH
    if risk >= 10:
        return Severity.MEDIUM
    return Severity.LOW


def severity_for_override_pressure(count: int, variance: float) -> Severity:
    if count >= 15 and variance >= 50:
        return Severity.HIGH
    if count >= 10 or variance >= 30:
        return Severity.MEDIUM
    return Severity.LOW


def severity_for_missing_layers(total_rules: int, total_important: int) -> Severity:
    if total_rules >= 200 or total_important >= 20:
        return Severity.MEDIUM
    return Severity.LOW


# ---------------------------------------------------------------------------
# Specificity detectors
# ---------------------------------------------------------------------------


def check_deep_selectors(results: Sequence[ParseResult], config: AnalyzerConfig) -> list[Issue]:
    """Selectors nested deeper than ``max_selector_depth``."""
    max_depth = config.thresholds.max_selector_depth
    issues: list[Issue] = []
    for result in results:
        for rule in result.rules:
            for selector in rule.selectors:
                if selector.depth <= max_depth:
                    continue
                issues.append(
                    Issue(
                        id=IssueId.DEEP_SELECTOR,
                        severity=severity_for_depth(selector.depth, max_depth),
                        confidence=0.9,
                        title=f"Deeply nested selector (depth: {selector.depth})",
                        why=(
                            f"Selectors with depth > {max_depth} are harder to maintain, "
                            "increase specificity pressure, and create tight coupling to DOM "
                            f"structure. This selector has {selector.depth} levels of nesting."
                        ),
                        evidence=Evidence(
                            file=result.file,
                            selector=selector.raw,
                            line=rule.line,
                            column=rule.column,
                            depth=selector.depth,
                        ),
                        suggestions=(
                            Suggestion(
                                "Flatten selector",
                                "Replace with a single class that describes the "
                                "component/element purpose",
                            ),
                            Suggestion(
                                "Use BEM naming",
                                "Adopt BEM (Block__Element--Modifier) naming to flatten hierarchy",
                            ),
                        ),
                        tags=(IssueTag.SPECIFICITY, IssueTag.MAINTAINABILITY),
                    )
                )
    return issues


_ID_SUGGESTIONS = (
    Suggestion("Replace ID with class", "Convert #id selectors to .class selectors for lower specificity"),
    Suggestion(
        "Use data attributes",
        'Consider [data-component="name"] for JavaScript hooks instead of IDs',
    ),
)
_CHAIN_SUGGESTIONS = (
    Suggestion("Simplify selector", "Reduce the number of classes/elements in the selector chain"),
    Suggestion(
        "Use single class",
        "Prefer single-purpose utility classes over complex selector chains",
    ),
)


def check_high_specificity(results: Sequence[ParseResult], config: AnalyzerConfig) -> list[Issue]:
    """Selectors containing an id or scoring above ``max_specificity_score``."""
    max_score = config.thresholds.max_specificity_score
    issues: list[Issue] = []
    for result in results:
        for rule in result.rules:
            for selector in rule.selectors:
                score = specificity_to_score(selector.specificity)
                if score <= max_score and not selector.has_id:
                    continue
                reasons: list[str] = []
                if selector.has_id:
                    reasons.append("uses ID selector")
                if score > max_score:
                    reasons.append(f"specificity score ({score}) exceeds threshold ({max_score})")
                issues.append(
                    Issue(
                        id=IssueId.HIGH_SPECIFICITY,
                        severity=severity_for_specificity(selector.specificity, max_score),
                        confidence=0.95,
                        title=f"High specificity selector ({selector.specificity})",
                        why=(
                            f"High specificity selectors {' and '.join(reasons)}. This makes "
                            "styles harder to override without resorting to !important or "
                            "equally high specificity, leading to specificity wars."
                        ),
                        evidence=Evidence(
                            file=result.file,
                            selector=selector.raw,
                            line=rule.line,
                            column=rule.column,
                            specificity=selector.specificity,
                        ),
                        suggestions=_ID_SUGGESTIONS if selector.has_id else _CHAIN_SUGGESTIONS,
                        tags=(IssueTag.SPECIFICITY, IssueTag.CASCADE, IssueTag.MAINTAINABILITY),
                    )
                )
    return issues


# ---------------------------------------------------------------------------
# Cascade detectors
# ---------------------------------------------------------------------------


def check_important_abuse(results: Sequence[ParseResult], config: AnalyzerConfig) -> list[Issue]:
    """Too many ``!important`` per file, plus every ``!important`` on a layout property."""
    max_per_file = config.thresholds.max_important_per_file
    issues: list[Issue] = []

    per_file: dict[str, tuple[int, ParsedRule]] = {}
    for result in results:
        for rule in result.rules:
            count = rule.important_count
            if not count:
                continue
            if result.file in per_file:
                total, first_rule = per_file[result.file]
                per_file[result.file] = (total + count, first_rule)
            else:
                per_file[result.file] = (count, rule)

    for file, (count, first_rule) in per_file.items():
        if count <= max_per_file:
            continue
        issues.append(
            Issue(
                id=IssueId.IMPORTANT_ABUSE,
                severity=severity_for_important_count(count, max_per_file),
                confidence=0.85,
                title=f"Excessive !important usage ({count} occurrences)",
                why=(
                    f"This file contains {count} !important declarations, exceeding the "
                    f"threshold of {max_per_file}. Overuse of !important indicates specificity "
                    "wars and makes styles unpredictable and hard to maintain."
                ),
                evidence=Evidence(
                    file=file,
                    selector=first_rule.first_selector or None,
                    line=first_rule.line,
                    count=count,
                ),
                suggestions=(
                    Suggestion(
                        "Reduce base specificity",
                        "Lower the specificity of selectors so !important becomes unnecessary",
                    ),
                    Suggestion(
                        "Use CSS layers",
                        "Consider @layer to establish a predictable cascade order without "
                        "!important",
                    ),
                    Suggestion(
                        "Consolidate styles",
                        "Merge competing rules into a single source of truth",
                    ),
                ),
                tags=(IssueTag.CASCADE, IssueTag.OVERRIDE, IssueTag.MAINTAINABILITY),
            )
        )

    for result in results:
        for rule in result.rules:
            for decl in rule.declarations:
                if not (decl.important and is_layout_property(decl.property)):
                    continue
                issues.append(
                    Issue(
                        id=IssueId.IMPORTANT_ABUSE,
                        severity=Severity.MEDIUM,
                        confidence=0.8,
                        title=f"!important on layout property: {decl.property}",
                        why=(
                            "Using !important on layout-affecting properties like "
                            f"{decl.property} can cause unexpected layout behavior and makes "
                            "responsive adjustments difficult."
                        ),
                        evidence=Evidence(
                            file=result.file,
                            selector=rule.first_selector or None,
                            property=decl.property,
                            value=decl.value,
                            line=rule.line,
                        ),
                        suggestions=(
                            Suggestion(
                                "Remove !important",
                                f"Fix the cascade issue for {decl.property} instead of "
                                "forcing with !important",
                            ),
                        ),
                        tags=(IssueTag.CASCADE, IssueTag.LAYOUT_RISK),
                    )
                )
    return issues


def check_override_pressure(results: Sequence[ParseResult], config: AnalyzerConfig) -> list[Issue]:
    """Properties redefined by many rules, graded by count and specificity spread."""
    issues: list[Issue] = []
    for group in detect_override_pressure(results, OVERRIDE_MIN_DEFINITIONS):
        scores = [specificity_to_score(d.specificity) for d in group.definitions]
        low, high = min(scores), max(scores)
        variance = high - low
        first = group.definitions[0]
        prop = group.property
        issues.append(
            Issue(
                id=IssueId.OVERRIDE_PRESSURE,
                severity=severity_for_override_pressure(group.override_count, variance),
                confidence=0.7,
                title=f"High override pressure: {prop} ({group.override_count} definitions)",
                why=(
                    f'The property "{prop}" is defined {group.override_count} times across '
                    f"different selectors with specificity ranging from {low} to {high}. "
                    "This suggests competing styles and potential cascade conflicts."
                ),
                evidence=Evidence(
                    file=first.file,
                    property=prop,
                    selector=first.selector,
                    line=first.line,
                    count=group.override_count,
                ),
                suggestions=(
                    Suggestion(
                        "Consolidate base styles",
                        f"Define {prop} once in a base rule and use modifiers for variations",
                    ),
                    Suggestion(
                        "Review cascade order",
                        "Ensure styles follow a logical cascade from general to specific",
                    ),
                    Suggestion(
                        "Use CSS custom properties",
                        f"Consider using --{prop} custom property that can be overridden at "
                        "component level",
                    ),
                ),
                tags=(IssueTag.CASCADE, IssueTag.OVERRIDE, IssueTag.MAINTAINABILITY),
            )
        )
    return issues


def check_missing_layers(results: Sequence[ParseResult], config: AnalyzerConfig) -> list[Issue]:
    """Suggest ``@layer`` once for sizeable codebases that never use it."""
    if any(r.uses_layers for r in results):
        return []

    total_rules = sum(len(r.rules) for r in results)
    total_important = sum(rule.important_count for r in results for rule in r.rules)
    large_files = sum(1 for r in results if len(r.rules) >= LAYERS_LARGE_FILE_RULES)

    if not (
        total_rules >= LAYERS_MIN_RULES
        or total_important >= LAYERS_MIN_IMPORTANT
        or large_files >= LAYERS_MIN_LARGE_FILES
    ):
        return []

    important_note = (
        f" and {total_important} !important declarations" if total_important > 0 else ""
    )
    return [
        Issue(
            id=IssueId.MISSING_LAYERS,
            severity=severity_for_missing_layers(total_rules, total_important),
            confidence=0.7,
            title="CSS @layer not used for cascade management",
            why=(
                f"Your CSS has {total_rules} rules{important_note}, but doesn't use @layer "
                "for cascade control. CSS Cascade Layers (@layer) provide a cleaner way to "
                "manage style precedence without specificity battles or !important."
            ),
            evidence=Evidence(
                file=results[0].file if results else "unknown",
                count=total_rules,
            ),
            suggestions=(
                Suggestion(
                    "Organize styles into layers",
                    "Structure CSS with @layer reset, base, components, utilities for "
                    "predictable cascade order",
                ),
                Suggestion(
                    "Define layer order upfront",
                    "Use @layer reset, base, components, utilities; at the top of your CSS "
                    "to establish precedence",
                ),
                Suggestion(
                    "Replace !important with layers",
                    "Styles in later layers automatically override earlier layers without "
                    "needing !important",
                ),
            ),
            tags=(IssueTag.CASCADE, IssueTag.LAYER, IssueTag.MAINTAINABILITY),
        )
    ]


# ---------------------------------------------------------------------------
# Duplication and layout detectors
# ---------------------------------------------------------------------------


def check_duplicate_declarations(
    results: Sequence[ParseResult], config: AnalyzerConfig
) -> list[Issue]:
    """One issue per ``property:value`` pair repeated at least the threshold."""
    min_count = config.thresholds.max_duplicate_declarations
    issues: list[Issue] = []
    for duplicate in detect_duplicate_declarations(results, min_count):
        prop, value, count = duplicate.property, duplicate.value, duplicate.count
        first = duplicate.locations[0]
        utility = f".{re.sub(r'[^a-zA-Z]', '-', prop)}-{re.sub(r'[^a-zA-Z0-9]', '-', value)}"
        issues.append(
            Issue(
                id=IssueId.DUPLICATE_DECLARATIONS,
                severity=severity_for_duplicate_count(count, min_count),
                confidence=0.75,
                title=f"Duplicate declaration: {prop} ({count} times)",
                why=(
                    f'The declaration "{prop}: {value}" appears {count} times across your '
                    "CSS. This indicates potential for consolidation into a utility class or "
                    "CSS custom property."
                ),
                evidence=Evidence(
                    file=first.file,
                    property=prop,
                    value=value,
                    line=first.line,
                    selector=first.selector,
                    count=count,
                ),
                suggestions=(
                    Suggestion(
                        "Create utility class",
                        f"Extract to a reusable utility class like {utility}",
                    ),
                    Suggestion(
                        "Use CSS custom property",
                        f"Define --{prop}: {value} and reference with var(--{prop})",
                    ),
                ),
                tags=(IssueTag.DUPLICATION, IssueTag.MAINTAINABILITY),
            )
        )
    return issues


_POSITIONING_SUGGESTIONS = (
    Suggestion(
        "Use relative positioning",
        "Consider using flexbox/grid with relative positioning instead of absolute",
    ),
    Suggestion(
        "Isolate positioning",
        "Split positioning rules from other layout properties for better maintainability",
    ),
)
_LAYOUT_SUGGESTIONS = (
    Suggestion(
        "Simplify layout",
        "Consider using modern layout techniques (flexbox/grid) to reduce property count",
    ),
    Suggestion("Component isolation", "Ensure layout rules are scoped to specific components"),
)


def check_layout_risk_hotspot(
    results: Sequence[ParseResult], config: AnalyzerConfig
) -> list[Issue]:
    """Rules whose layout risk score reaches the fixed hotspot threshold."""
    issues: list[Issue] = []
    for result in results:
        for rule in result.rules:
            risk = calculate_layout_risk(rule.declarations)
            if risk < LAYOUT_RISK_THRESHOLD:
                continue
            layout_props = [d.property for d in rule.declarations if is_layout_property(d.property)]
            positioned = uses_out_of_flow_positioning(rule.declarations)
            positioning_note = " including absolute/fixed positioning" if positioned else ""
            issues.append(
                Issue(
                    id=IssueId.LAYOUT_RISK_HOTSPOT,
                    severity=severity_for_layout_risk(risk),
                    confidence=0.7,
                    title=f"Layout risk hotspot (risk score: {risk})",
                    why=(
                        f"This rule contains {len(layout_props)} layout-affecting properties"
                        f"{positioning_note}. Complex layout rules are fragile and can cause "
                        "unexpected behavior across different viewport sizes."
                    ),
                    evidence=Evidence(
                        file=result.file,
                        selector=rule.first_selector or None,
                        line=rule.line,
                        count=len(layout_props),
                    ),
                    suggestions=_POSITIONING_SUGGESTIONS if positioned else _LAYOUT_SUGGESTIONS,
                    tags=(IssueTag.LAYOUT_RISK, IssueTag.MAINTAINABILITY),
                )
            )
    return issues
