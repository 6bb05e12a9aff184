"""CSS complexity analyzer: selector, cascade, duplication, and layout risk reports."""

__version__ = "0.1.0"

from csscomplexity.analyzer import (  # noqa: E402
    analyze,
    analyze_css,
    analyze_directory,
    check_thresholds,
    format_report_as_json,
    generate_report,
)
from csscomplexity.model import AnalyzerConfig, Report, merge_config  # noqa: E402
from csscomplexity.stylesheet import parse_css, parse_css_file  # noqa: E402

__all__ = [
    "__version__",
    "analyze",
    "analyze_css",
    "analyze_directory",
    "check_thresholds",
    "format_report_as_json",
    "generate_report",
    "AnalyzerConfig",
    "Report",
    "merge_config",
    "parse_css",
    "parse_css_file",
]
