"""Metrics aggregation over parsed stylesheets."""

from csscomplexity.metrics.aggregate import (
    TOP_SELECTOR_LIMIT,
    calculate_average,
    calculate_average_specificity,
    calculate_file_metrics,
    calculate_global_metrics,
    extract_top_selectors,
    find_max_specificity,
)
from csscomplexity.metrics.duplication import (
    declaration_key,
    detect_duplicate_blocks,
    detect_duplicate_declarations,
    detect_override_pressure,
)
from csscomplexity.metrics.layout import (
    LAYOUT_PROPERTIES,
    RISKY_COMBINATIONS,
    RiskyCombination,
    calculate_layout_risk,
    is_layout_property,
    uses_out_of_flow_positioning,
)

__all__ = [
    "TOP_SELECTOR_LIMIT",
    "calculate_average",
    "calculate_average_specificity",
    "calculate_file_metrics",
    "calculate_global_metrics",
    "extract_top_selectors",
    "find_max_specificity",
    "declaration_key",
    "detect_duplicate_blocks",
    "detect_duplicate_declarations",
    "detect_override_pressure",
    "LAYOUT_PROPERTIES",
    "RISKY_COMBINATIONS",
    "RiskyCombination",
    "calculate_layout_risk",
    "is_layout_property",
    "uses_out_of_flow_positioning",
]
