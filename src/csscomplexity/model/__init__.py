"""Model layer -- public type re-exports."""

from csscomplexity.model.config import (
    AnalyzerConfig,
    ConfigError,
    RuleToggles,
    Thresholds,
    merge_config,
)
from csscomplexity.model.issue import Evidence, Issue, IssueId, IssueTag, Severity, Suggestion
from csscomplexity.model.metrics import (
    DeclarationLocation,
    DuplicateBlock,
    DuplicateDeclaration,
    FileMetrics,
    GlobalMetrics,
    OverrideDefinition,
    OverrideGroup,
    TopSelector,
)
from csscomplexity.model.report import (
    CategoryScores,
    Recommendation,
    Report,
    Summary,
    ThresholdResult,
)
from csscomplexity.model.specificity import (
    ZERO_SPECIFICITY,
    Specificity,
    compare_specificity,
    specificity_to_score,
)
from csscomplexity.model.stylesheet import (
    ParsedDeclaration,
    ParsedRule,
    ParsedSelector,
    ParseResult,
)

__all__ = [
    # specificity
    "Specificity",
    "ZERO_SPECIFICITY",
    "compare_specificity",
    "specificity_to_score",
    # stylesheet
    "ParsedSelector",
    "ParsedDeclaration",
    "ParsedRule",
    "ParseResult",
    # metrics
    "FileMetrics",
    "GlobalMetrics",
    "TopSelector",
    "DeclarationLocation",
    "DuplicateDeclaration",
    "DuplicateBlock",
    "OverrideDefinition",
    "OverrideGroup",
    # issue
    "Severity",
    "IssueId",
    "IssueTag",
    "Evidence",
    "Suggestion",
    "Issue",
    # report
    "CategoryScores",
    "Summary",
    "Recommendation",
    "Report",
    "ThresholdResult",
    # config
    "Thresholds",
    "RuleToggles",
    "AnalyzerConfig",
    "ConfigError",
    "merge_config",
]
