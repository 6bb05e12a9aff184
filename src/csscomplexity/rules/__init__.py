"""Rule engine -- issue detectors and the runner that orders their output."""

from csscomplexity.rules.detectors import (
    check_deep_selectors,
    check_duplicate_declarations,
    check_high_specificity,
    check_important_abuse,
    check_layout_risk_hotspot,
    check_missing_layers,
    check_override_pressure,
    severity_for_depth,
    severity_for_duplicate_count,
    severity_for_important_count,
    severity_for_layout_risk,
    severity_for_missing_layers,
    severity_for_override_pressure,
    severity_for_specificity,
)
from csscomplexity.rules.engine import ALL_RULES, RuleFunc, run_all_rules

__all__ = [
    "ALL_RULES",
    "RuleFunc",
    "run_all_rules",
    "check_deep_selectors",
    "check_duplicate_declarations",
    "check_high_specificity",
    "check_important_abuse",
    "check_layout_risk_hotspot",
    "check_missing_layers",
    "check_override_pressure",
    "severity_for_depth",
    "severity_for_duplicate_count",
    "severity_for_important_count",
    "severity_for_layout_risk",
    "severity_for_missing_layers",
    "severity_for_override_pressure",
    "severity_for_specificity",
]
