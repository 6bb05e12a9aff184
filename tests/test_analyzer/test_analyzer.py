"""Tests for the analysis entry points and threshold checks."""

import json
import re

from csscomplexity import (
    __version__,
    analyze,
    analyze_css,
    analyze_directory,
    check_thresholds,
    format_report_as_json,
    generate_report,
)
from csscomplexity.model import IssueId, Report, Severity
from csscomplexity.stylesheet import parse_css

MESSY_CSS = """
#header .nav ul li a:hover { color: red !important; }
.a .b .c .d .e .f .g .h { margin: 0; }
.modal { position: absolute; top: 0; left: 0; width: 100%; height: 100%; }
.one { color: red; } .two { color: red; } .three { color: red; }
"""


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------


class TestAnalyze:
    def test_no_files(self):
        report = analyze([])
        assert report.global_metrics.total_files == 0
        assert report.issues == ()
        assert report.summary.overall_score == 0
        assert report.summary.grade == "A"
        assert report.recommendations == ()
        assert report.top_selectors == ()

    def test_version_and_timestamp(self):
        report = analyze([])
        assert report.version == __version__
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", report.timestamp)

    def test_full_pipeline(self):
        report = analyze([parse_css(MESSY_CSS, "messy.css")])
        ids = {issue.id for issue in report.issues}
        assert {
            IssueId.HIGH_SPECIFICITY,
            IssueId.DEEP_SELECTOR,
            IssueId.DUPLICATE_DECLARATIONS,
            IssueId.LAYOUT_RISK_HOTSPOT,
        } <= ids
        assert report.summary.total_issues == len(report.issues)
        assert report.summary.overall_score > 0
        assert report.file_metrics[0].file == "messy.css"
        assert report.top_selectors[0].selector == "#header .nav ul li a:hover"
        assert report.recommendations

    def test_failed_parse_is_an_empty_file(self, tmp_path):
        from csscomplexity.stylesheet import parse_css_file

        result = parse_css_file(tmp_path / "missing.css")
        report = analyze([result])
        assert report.global_metrics.total_files == 1
        assert report.global_metrics.total_rules == 0
        assert report.issues == ()

    def test_config_mapping(self):
        css = ".a .b .c {}"
        assert not analyze([parse_css(css)]).issues
        report = analyze([parse_css(css)], {"thresholds": {"maxSelectorDepth": 2}})
        assert report.issues[0].id is IssueId.DEEP_SELECTOR

    def test_generate_report_timestamp(self):
        report = generate_report([], timestamp="2024-01-01T00:00:00.000Z")
        assert report.timestamp == "2024-01-01T00:00:00.000Z"


class TestAnalyzeCss:
    def test_filename(self):
        report = analyze_css(".a { color: red }", filename="inline.css")
        assert report.file_metrics[0].file == "inline.css"
        assert report.global_metrics.total_rules == 1

    def test_default_filename(self):
        assert analyze_css("a {}").file_metrics[0].file == "input.css"


class TestAnalyzeDirectory:
    def test_directory(self, tmp_path):
        (tmp_path / "a.css").write_text(".a { color: red }", encoding="utf-8")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.css").write_text(".b { color: red }", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
        report = analyze_directory(tmp_path)
        assert report.global_metrics.total_files == 2
        assert [m.file.endswith(".css") for m in report.file_metrics] == [True, True]


# ---------------------------------------------------------------------------
# check_thresholds
# ---------------------------------------------------------------------------


class TestCheckThresholds:
    def test_clean_report_passes(self):
        result = check_thresholds(analyze([]))
        assert result.passed
        assert result.reasons == ()

    def test_score_over_maximum(self):
        report = analyze([parse_css(MESSY_CSS)])
        score = report.summary.overall_score
        result = check_thresholds(report, {"maxScore": score - 1})
        assert not result.passed
        assert f"Overall score ({score}) exceeds maximum allowed ({score - 1})" in result.reasons

    def test_critical_issues_fail(self):
        report = analyze([parse_css("#a #b { color: red }")])
        assert report.summary.issues_by_severity[Severity.CRITICAL] == 1
        result = check_thresholds(report, {"maxScore": 100})
        assert not result.passed
        assert result.reasons == ("Found 1 critical issue(s)",)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


class TestJson:
    def test_round_trip(self):
        report = analyze([parse_css(MESSY_CSS, "messy.css"), parse_css("@layer x { a {} }", "l.css")])
        text = format_report_as_json(report)
        data = json.loads(text)
        assert data == report.to_dict()
        assert Report.from_dict(data) == report

    def test_camel_case_keys(self):
        data = json.loads(format_report_as_json(analyze_css(MESSY_CSS)))
        assert set(data) == {
            "version",
            "timestamp",
            "summary",
            "globalMetrics",
            "fileMetrics",
            "issues",
            "topSelectors",
            "recommendations",
        }
        assert set(data["summary"]["categoryScores"]) == {
            "specificity",
            "cascade",
            "duplication",
            "layoutRisk",
        }
        assert set(data["summary"]["issuesBySeverity"]) == {"critical", "high", "medium", "low"}

    def test_whole_averages_serialize_as_integers(self):
        data = json.loads(format_report_as_json(analyze_css(".a .b { color: red }")))
        metrics = data["fileMetrics"][0]
        assert metrics["avgSelectorDepth"] == 2
        assert isinstance(metrics["avgSelectorDepth"], int)
        assert metrics["avgSpecificity"] == {"ids": 0, "classes": 2, "elements": 0}
        assert all(isinstance(v, int) for v in metrics["avgSpecificity"].values())
        assert isinstance(data["globalMetrics"]["avgSelectorDepth"], int)

    def test_indented(self):
        assert format_report_as_json(analyze([])).startswith('{\n  "version"')
