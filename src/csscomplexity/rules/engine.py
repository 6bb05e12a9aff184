"""Rule engine: runs the enabled detectors and orders the resulting issues."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from csscomplexity.model.config import AnalyzerConfig, merge_config
from csscomplexity.model.issue import Issue
from csscomplexity.model.stylesheet import ParseResult
from csscomplexity.rules.detectors import (
    check_deep_selectors,
    check_duplicate_declarations,
    check_high_specificity,
    check_important_abuse,
    check_layout_risk_hotspot,
    check_missing_layers,
    check_override_pressure,
)

logger = logging.getLogger(__name__)

RuleFunc = Callable[[Sequence[ParseResult], AnalyzerConfig], list[Issue]]

# (toggle name on RuleToggles, detector) in execution order.
ALL_RULES: tuple[tuple[str, RuleFunc], ...] = (
    ("deep_selectors", check_deep_selectors),
    ("high_specificity", check_high_specificity),
    ("important_abuse", check_important_abuse),
    ("duplicate_declarations", check_duplicate_declarations),
    ("layout_risk_hotspot", check_layout_risk_hotspot),
    ("override_pressure", check_override_pressure),
    ("missing_layers", check_missing_layers),
)


def run_all_rules(
    results: Sequence[ParseResult],
    config: AnalyzerConfig | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Issue]:
    """Run every enabled detector against *results*.

    Issues are returned sorted by severity, critical first. The sort is
    stable, so issues of equal severity keep detector order and, within
    a detector, source order.
    """
    config = merge_config(config)
    rules: list[RuleFunc] = [
        rule for name, rule in ALL_RULES if getattr(config.rules, name)
    ]
    if extra_rules:
        rules.extend(extra_rules)

    issues: list[Issue] = []
    for rule in rules:
        found = rule(results, config)
        logger.debug("%s produced %d issue(s)", rule.__name__, len(found))
        issues.extend(found)
    return sorted(issues, key=lambda issue: issue.severity.rank)
