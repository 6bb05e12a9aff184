"""Scoring model -- category scores, grades, and recommendations."""

from csscomplexity.scoring.recommendations import PRIORITY_ORDER, generate_recommendations
from csscomplexity.scoring.scoring import (
    CATEGORY_WEIGHTS,
    calculate_cascade_score,
    calculate_category_scores,
    calculate_duplication_score,
    calculate_layout_risk_score,
    calculate_overall_score,
    calculate_specificity_score,
    count_issues_by_severity,
    generate_summary,
    score_to_grade,
)

__all__ = [
    "CATEGORY_WEIGHTS",
    "PRIORITY_ORDER",
    "calculate_cascade_score",
    "calculate_category_scores",
    "calculate_duplication_score",
    "calculate_layout_risk_score",
    "calculate_overall_score",
    "calculate_specificity_score",
    "count_issues_by_severity",
    "generate_recommendations",
    "generate_summary",
    "score_to_grade",
]
