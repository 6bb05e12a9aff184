"""Per-file and global metrics, plus the worst-offender selector ranking."""

from __future__ import annotations

from typing import Iterable, Sequence

from csscomplexity._rounding import round_half_up
from csscomplexity.metrics.layout import calculate_layout_risk
from csscomplexity.model.metrics import FileMetrics, GlobalMetrics, TopSelector
from csscomplexity.model.specificity import (
    ZERO_SPECIFICITY,
    Specificity,
    compare_specificity,
    specificity_to_score,
)
from csscomplexity.model.stylesheet import ParseResult

TOP_SELECTOR_LIMIT = 10


def calculate_average(numbers: Sequence[float]) -> float:
    if not numbers:
        return 0
    return sum(numbers) / len(numbers)


def calculate_average_specificity(specificities: Sequence[Specificity]) -> Specificity:
    """Component-wise mean, each component rounded to 2 decimals."""
    if not specificities:
        return ZERO_SPECIFICITY
    count = len(specificities)
    return Specificity(
        ids=round_half_up(sum(s.ids for s in specificities) / count, 2),
        classes=round_half_up(sum(s.classes for s in specificities) / count, 2),
        elements=round_half_up(sum(s.elements for s in specificities) / count, 2),
    )


def find_max_specificity(specificities: Iterable[Specificity]) -> Specificity:
    """Lexicographic maximum; the first of equal maxima wins."""
    best: Specificity | None = None
    for spec in specificities:
        if best is None or compare_specificity(spec, best) > 0:
            best = spec
    return best if best is not None else ZERO_SPECIFICITY


def calculate_file_metrics(result: ParseResult) -> FileMetrics:
    total_selectors = 0
    total_declarations = 0
    max_depth = 0
    important_count = 0
    layout_risk = 0
    depths: list[int] = []
    specificities: list[Specificity] = []

    for rule in result.rules:
        total_declarations += len(rule.declarations)
        important_count += rule.important_count
        layout_risk += calculate_layout_risk(rule.declarations)
        for selector in rule.selectors:
            total_selectors += 1
            depths.append(selector.depth)
            specificities.append(selector.specificity)
            max_depth = max(max_depth, selector.depth)

    return FileMetrics(
        file=result.file,
        total_rules=len(result.rules),
        total_selectors=total_selectors,
        total_declarations=total_declarations,
        max_selector_depth=max_depth,
        avg_selector_depth=round_half_up(calculate_average(depths), 2),
        max_specificity=find_max_specificity(specificities),
        avg_specificity=calculate_average_specificity(specificities),
        important_count=important_count,
        # Duplicates are detected across files, not per file.
        duplicate_declaration_count=0,
        layout_risk_score=layout_risk,
    )


def calculate_global_metrics(file_metrics: Sequence[FileMetrics]) -> GlobalMetrics:
    """Aggregate file metrics.

    Averages are means of the per-file averages, not of all selectors
    pooled together; historical scores depend on this.
    """
    if not file_metrics:
        return GlobalMetrics()

    return GlobalMetrics(
        total_files=len(file_metrics),
        total_rules=sum(m.total_rules for m in file_metrics),
        total_selectors=sum(m.total_selectors for m in file_metrics),
        total_declarations=sum(m.total_declarations for m in file_metrics),
        max_selector_depth=max(m.max_selector_depth for m in file_metrics),
        avg_selector_depth=round_half_up(
            calculate_average([m.avg_selector_depth for m in file_metrics]), 2
        ),
        max_specificity=find_max_specificity(m.max_specificity for m in file_metrics),
        avg_specificity=calculate_average_specificity(
            [m.avg_specificity for m in file_metrics]
        ),
        total_important_count=sum(m.important_count for m in file_metrics),
        total_duplicate_declarations=sum(m.duplicate_declaration_count for m in file_metrics),
        overall_layout_risk_score=sum(m.layout_risk_score for m in file_metrics),
    )


def extract_top_selectors(
    results: Sequence[ParseResult], limit: int = TOP_SELECTOR_LIMIT
) -> list[TopSelector]:
    """Rank every selector by ``specificity score * 2 + depth * 3``, worst first."""
    selectors: list[TopSelector] = []
    for result in results:
        for rule in result.rules:
            for selector in rule.selectors:
                selectors.append(
                    TopSelector(
                        selector=selector.raw,
                        file=result.file,
                        line=rule.line,
                        specificity=selector.specificity,
                        depth=selector.depth,
                        score=specificity_to_score(selector.specificity) * 2
                        + selector.depth * 3,
                    )
                )
    selectors.sort(key=lambda s: s.score, reverse=True)
    return selectors[:limit]
