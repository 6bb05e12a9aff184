"""Cross-file duplication and override detection."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from csscomplexity.model.metrics import (
    DeclarationLocation,
    DuplicateBlock,
    DuplicateDeclaration,
    OverrideDefinition,
    OverrideGroup,
)
from csscomplexity.model.stylesheet import ParsedDeclaration, ParsedRule, ParseResult

MIN_DUPLICATE_COUNT = 3
MIN_BLOCK_PROPERTIES = 3
MIN_BLOCK_OCCURRENCES = 2
MIN_OVERRIDES = 5


def declaration_key(decl: ParsedDeclaration) -> str:
    """Normalized ``property:value`` key; only the value is trimmed and lowercased."""
    return f"{decl.property}:{decl.value.strip().lower()}"


def _location(result: ParseResult, rule: ParsedRule) -> DeclarationLocation:
    return DeclarationLocation(file=result.file, line=rule.line, selector=rule.first_selector)


def detect_duplicate_declarations(
    results: Sequence[ParseResult], min_count: int = MIN_DUPLICATE_COUNT
) -> list[DuplicateDeclaration]:
    """Declarations repeated at least *min_count* times, in first-seen order."""
    groups: dict[str, list[DeclarationLocation]] = defaultdict(list)
    for result in results:
        for rule in result.rules:
            for decl in rule.declarations:
                groups[declaration_key(decl)].append(_location(result, rule))

    return [
        DuplicateDeclaration(key=key, locations=tuple(locations))
        for key, locations in groups.items()
        if len(locations) >= min_count
    ]


def detect_duplicate_blocks(
    results: Sequence[ParseResult],
    min_properties: int = MIN_BLOCK_PROPERTIES,
    min_occurrences: int = MIN_BLOCK_OCCURRENCES,
) -> list[DuplicateBlock]:
    """Multi-property combinations repeated across rules, most frequent first.

    Each qualifying rule contributes every prefix (of size *min_properties*
    up to all of its declarations) of its alphabetically sorted normalized
    pairs.
    """
    blocks: dict[str, tuple[tuple[str, ...], list[DeclarationLocation]]] = {}
    for result in results:
        for rule in result.rules:
            if len(rule.declarations) < min_properties:
                continue
            pairs = sorted(declaration_key(d) for d in rule.declarations)
            for size in range(min_properties, len(pairs) + 1):
                combination = tuple(pairs[:size])
                key = "|".join(combination)
                if key not in blocks:
                    blocks[key] = (combination, [])
                blocks[key][1].append(_location(result, rule))

    duplicated = [
        DuplicateBlock(properties=combination, occurrences=tuple(occurrences))
        for combination, occurrences in blocks.values()
        if len(occurrences) >= min_occurrences
    ]
    duplicated.sort(key=lambda b: len(b.occurrences), reverse=True)
    return duplicated


def detect_override_pressure(
    results: Sequence[ParseResult], min_overrides: int = MIN_OVERRIDES
) -> list[OverrideGroup]:
    """Properties defined by at least *min_overrides* rules, whatever the value."""
    groups: dict[str, list[OverrideDefinition]] = defaultdict(list)
    for result in results:
        for rule in result.rules:
            for decl in rule.declarations:
                groups[decl.property].append(
                    OverrideDefinition(
                        selector=rule.first_selector,
                        file=result.file,
                        line=rule.line,
                        specificity=rule.first_specificity,
                    )
                )

    return [
        OverrideGroup(property=prop, definitions=tuple(definitions))
        for prop, definitions in groups.items()
        if len(definitions) >= min_overrides
    ]
