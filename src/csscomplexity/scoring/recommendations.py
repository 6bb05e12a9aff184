"""Turn the issue list into a short, prioritized list of recommendations."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from csscomplexity.model.issue import Issue, IssueId
from csscomplexity.model.report import Recommendation

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def generate_recommendations(issues: Sequence[Issue]) -> list[Recommendation]:
    """One recommendation per category that has at least one related issue.

    ``MISSING_LAYERS`` issues carry their own suggestions and do not feed a
    recommendation.
    """
    counts = Counter(issue.id for issue in issues)
    recommendations: list[Recommendation] = []

    high_spec = counts[IssueId.HIGH_SPECIFICITY]
    if high_spec or counts[IssueId.DEEP_SELECTOR]:
        recommendations.append(
            Recommendation(
                category="Specificity",
                title="Reduce selector complexity",
                description=(
                    "Your CSS has high specificity selectors or deeply nested selectors. "
                    "Consider adopting a flat, single-class approach like BEM or "
                    "utility-first CSS."
                ),
                priority="high" if high_spec > 5 else "medium",
                related_issue_ids=(IssueId.HIGH_SPECIFICITY, IssueId.DEEP_SELECTOR),
            )
        )

    if counts[IssueId.IMPORTANT_ABUSE]:
        recommendations.append(
            Recommendation(
                category="Cascade",
                title="Reduce !important usage",
                description=(
                    "Excessive !important declarations indicate specificity wars. Establish "
                    "a clear cascade hierarchy using CSS layers or lower-specificity selectors."
                ),
                priority="high",
                related_issue_ids=(IssueId.IMPORTANT_ABUSE,),
            )
        )

    if counts[IssueId.OVERRIDE_PRESSURE]:
        recommendations.append(
            Recommendation(
                category="Cascade",
                title="Consolidate override patterns",
                description=(
                    "Some properties are defined many times across different selectors. "
                    "Define base styles once and use modifiers for variations."
                ),
                priority="medium",
                related_issue_ids=(IssueId.OVERRIDE_PRESSURE,),
            )
        )

    duplicates = counts[IssueId.DUPLICATE_DECLARATIONS]
    if duplicates:
        recommendations.append(
            Recommendation(
                category="Duplication",
                title="Extract repeated declarations",
                description=(
                    "Multiple declarations are repeated throughout your CSS. Extract them "
                    "into utility classes or CSS custom properties for better maintainability."
                ),
                priority="high" if duplicates > 10 else "medium",
                related_issue_ids=(IssueId.DUPLICATE_DECLARATIONS,),
            )
        )

    hotspots = counts[IssueId.LAYOUT_RISK_HOTSPOT]
    if hotspots:
        recommendations.append(
            Recommendation(
                category="Layout",
                title="Simplify layout rules",
                description=(
                    "Some rules contain many layout-affecting properties. Consider using "
                    "modern layout techniques (flexbox/grid) and isolating positioning from "
                    "other layout concerns."
                ),
                priority="high" if hotspots > 5 else "low",
                related_issue_ids=(IssueId.LAYOUT_RISK_HOTSPOT,),
            )
        )

    return sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority])
