"""Tests for the issue detectors and the rule engine."""

import pytest

from csscomplexity.model import (
    AnalyzerConfig,
    IssueId,
    IssueTag,
    Severity,
    Specificity,
    merge_config,
)
from csscomplexity.rules import (
    ALL_RULES,
    check_deep_selectors,
    check_duplicate_declarations,
    check_high_specificity,
    check_important_abuse,
    check_layout_risk_hotspot,
    check_missing_layers,
    check_override_pressure,
    run_all_rules,
    severity_for_depth,
    severity_for_duplicate_count,
    severity_for_important_count,
    severity_for_layout_risk,
    severity_for_missing_layers,
    severity_for_override_pressure,
    severity_for_specificity,
)
from csscomplexity.stylesheet import parse_css

DEFAULT = AnalyzerConfig()


def _parse(css: str, filename: str = "test.css"):
    return [parse_css(css, filename)]


def _ids(issues) -> list[IssueId]:
    return [issue.id for issue in issues]


# ---------------------------------------------------------------------------
# Severity grading
# ---------------------------------------------------------------------------


class TestSeverityGrading:
    @pytest.mark.parametrize(
        "depth, severity",
        [(5, Severity.MEDIUM), (6, Severity.HIGH), (7, Severity.HIGH), (8, Severity.CRITICAL)],
    )
    def test_depth(self, depth, severity):
        assert severity_for_depth(depth, 4) is severity

    @pytest.mark.parametrize(
        "specificity, severity",
        [
            (Specificity(2, 0, 0), Severity.CRITICAL),
            (Specificity(1, 0, 0), Severity.HIGH),
            (Specificity(0, 9, 0), Severity.HIGH),
            (Specificity(0, 7, 0), Severity.MEDIUM),
            (Specificity(0, 5, 0), Severity.LOW),
        ],
    )
    def test_specificity(self, specificity, severity):
        assert severity_for_specificity(specificity, 40) is severity

    @pytest.mark.parametrize(
        "count, severity",
        [(20, Severity.CRITICAL), (13, Severity.HIGH), (8, Severity.MEDIUM), (6, Severity.LOW)],
    )
    def test_important_count(self, count, severity):
        assert severity_for_important_count(count, 5) is severity

    @pytest.mark.parametrize(
        "count, severity",
        [(15, Severity.HIGH), (9, Severity.MEDIUM), (8, Severity.LOW), (3, Severity.LOW)],
    )
    def test_duplicate_count(self, count, severity):
        assert severity_for_duplicate_count(count, 3) is severity

    @pytest.mark.parametrize(
        "risk, severity",
        [(15, Severity.HIGH), (10, Severity.MEDIUM), (5, Severity.LOW)],
    )
    def test_layout_risk(self, risk, severity):
        assert severity_for_layout_risk(risk) is severity

    def test_override_pressure(self):
        assert severity_for_override_pressure(15, 50) is Severity.HIGH
        assert severity_for_override_pressure(15, 10) is Severity.MEDIUM
        assert severity_for_override_pressure(5, 30) is Severity.MEDIUM
        assert severity_for_override_pressure(5, 10) is Severity.LOW

    def test_missing_layers(self):
        assert severity_for_missing_layers(200, 0) is Severity.MEDIUM
        assert severity_for_missing_layers(50, 20) is Severity.MEDIUM
        assert severity_for_missing_layers(50, 5) is Severity.LOW


# ---------------------------------------------------------------------------
# check_deep_selectors
# ---------------------------------------------------------------------------


class TestDeepSelectors:
    def test_depth_five_is_medium(self):
        issues = check_deep_selectors(_parse(".a .b .c .d .e { color: red; }"), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.id is IssueId.DEEP_SELECTOR
        assert issue.severity is Severity.MEDIUM
        assert issue.confidence == 0.9
        assert issue.title == "Deeply nested selector (depth: 5)"
        assert issue.evidence.depth == 5
        assert issue.evidence.selector == ".a .b .c .d .e"
        assert issue.evidence.line == 1
        assert issue.tags == (IssueTag.SPECIFICITY, IssueTag.MAINTAINABILITY)

    def test_depth_eight_is_critical(self):
        issues = check_deep_selectors(_parse(".a .b .c .d .e .f .g .h { color: red; }"), DEFAULT)
        assert issues[0].severity is Severity.CRITICAL

    def test_at_threshold_is_fine(self):
        assert check_deep_selectors(_parse(".a .b .c .d { color: red }"), DEFAULT) == []

    def test_each_selector_in_list_checked(self):
        issues = check_deep_selectors(_parse(".a .b .c .d .e, .x, .p .q .r .s .t {}"), DEFAULT)
        assert [i.evidence.selector for i in issues] == [".a .b .c .d .e", ".p .q .r .s .t"]

    def test_custom_threshold(self):
        config = merge_config({"thresholds": {"maxSelectorDepth": 2}})
        assert len(check_deep_selectors(_parse(".a .b .c {}"), config)) == 1


# ---------------------------------------------------------------------------
# check_high_specificity
# ---------------------------------------------------------------------------


class TestHighSpecificity:
    def test_id_selector(self):
        issues = check_high_specificity(_parse("#main { color: red }"), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.severity is Severity.HIGH
        assert issue.confidence == 0.95
        assert issue.title == "High specificity selector (1,0,0)"
        assert "uses ID selector and specificity score (100) exceeds threshold (40)" in issue.why
        assert issue.suggestions[0].action == "Replace ID with class"
        assert issue.evidence.specificity == Specificity(1, 0, 0)

    def test_class_chain(self):
        issues = check_high_specificity(_parse(".a.b.c.d.e { color: red }"), DEFAULT)
        assert len(issues) == 1
        assert issues[0].severity is Severity.LOW
        assert "specificity score (50) exceeds threshold (40)" in issues[0].why
        assert "uses ID" not in issues[0].why
        assert issues[0].suggestions[0].action == "Simplify selector"

    def test_two_ids_critical(self):
        issues = check_high_specificity(_parse("#a #b {}"), DEFAULT)
        assert issues[0].severity is Severity.CRITICAL

    def test_low_specificity_ignored(self):
        assert check_high_specificity(_parse(".a .b div {}"), DEFAULT) == []


# ---------------------------------------------------------------------------
# check_important_abuse
# ---------------------------------------------------------------------------


class TestImportantAbuse:
    def test_file_level(self):
        css = ".first { color: red } " + " ".join(
            f".r{i} {{ color: red !important }}" for i in range(6)
        )
        issues = check_important_abuse(_parse(css), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.confidence == 0.85
        assert issue.severity is Severity.LOW
        assert issue.title == "Excessive !important usage (6 occurrences)"
        assert issue.evidence.count == 6
        assert issue.evidence.selector == ".r0"
        assert issue.tags == (IssueTag.CASCADE, IssueTag.OVERRIDE, IssueTag.MAINTAINABILITY)

    def test_at_threshold_is_fine(self):
        css = " ".join(f".r{i} {{ color: red !important }}" for i in range(5))
        assert check_important_abuse(_parse(css), DEFAULT) == []

    def test_layout_property(self):
        issues = check_important_abuse(_parse(".a { width: 10px !important }"), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.severity is Severity.MEDIUM
        assert issue.confidence == 0.8
        assert issue.title == "!important on layout property: width"
        assert issue.evidence.property == "width"
        assert issue.evidence.value == "10px"

    def test_file_issues_come_before_declaration_issues(self):
        css = " ".join(f".r{i} {{ width: 1px !important }}" for i in range(6))
        issues = check_important_abuse(_parse(css), DEFAULT)
        assert len(issues) == 7
        assert issues[0].evidence.count == 6
        assert all(i.evidence.property == "width" for i in issues[1:])

    def test_counts_per_file(self):
        css = " ".join(f".r{i} {{ color: red !important }}" for i in range(4))
        results = [parse_css(css, "a.css"), parse_css(css, "b.css")]
        assert check_important_abuse(results, DEFAULT) == []


# ---------------------------------------------------------------------------
# check_duplicate_declarations
# ---------------------------------------------------------------------------


class TestDuplicateDeclarations:
    def test_three_is_low(self):
        css = ".a { color: red } .b { color: red } .c { color: red }"
        issues = check_duplicate_declarations(_parse(css), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.id is IssueId.DUPLICATE_DECLARATIONS
        assert issue.evidence.count == 3
        assert issue.severity is Severity.LOW
        assert issue.title == "Duplicate declaration: color (3 times)"
        assert issue.evidence.selector == ".a"
        assert issue.suggestions[0].description.endswith(".color-red")
        assert issue.suggestions[1].description == "Define --color: red and reference with var(--color)"

    def test_nine_is_medium(self):
        css = " ".join(f".s{i} {{ color: red }}" for i in range(9))
        issues = check_duplicate_declarations(_parse(css), DEFAULT)
        assert issues[0].evidence.count == 9
        assert issues[0].severity is Severity.MEDIUM

    def test_utility_class_name(self):
        css = " ".join(f".s{i} {{ border-radius: 4px }}" for i in range(3))
        issue = check_duplicate_declarations(_parse(css), DEFAULT)[0]
        assert issue.suggestions[0].description.endswith(".border-radius-4px")


# ---------------------------------------------------------------------------
# check_layout_risk_hotspot
# ---------------------------------------------------------------------------


class TestLayoutRiskHotspot:
    def test_positioned_hotspot(self):
        css = ".modal { position: absolute; top: 0; left: 0; }"
        issues = check_layout_risk_hotspot(_parse(css), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.title == "Layout risk hotspot (risk score: 8)"
        assert issue.severity is Severity.LOW
        assert issue.evidence.count == 3
        assert "including absolute/fixed positioning" in issue.why
        assert issue.suggestions[0].action == "Use relative positioning"

    def test_unpositioned_hotspot(self):
        css = ".box { width: 1px; height: 1px; margin: 0; padding: 0; display: flex }"
        issues = check_layout_risk_hotspot(_parse(css), DEFAULT)
        assert len(issues) == 1
        assert "positioning" not in issues[0].why
        assert issues[0].suggestions[0].action == "Simplify layout"

    def test_below_threshold(self):
        css = ".box { width: 1px; height: 1px; margin: 0; padding: 0 }"
        assert check_layout_risk_hotspot(_parse(css), DEFAULT) == []


# ---------------------------------------------------------------------------
# check_override_pressure
# ---------------------------------------------------------------------------


class TestOverridePressure:
    def test_five_definitions(self):
        css = ".a { color: red } #b { color: blue } .c { color: x } .d { color: y } .e { color: z }"
        issues = check_override_pressure(_parse(css), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.title == "High override pressure: color (5 definitions)"
        # scores range 10..100
        assert issue.severity is Severity.MEDIUM
        assert "ranging from 10 to 100" in issue.why
        assert issue.evidence.selector == ".a"

    def test_four_definitions(self):
        css = " ".join(f".s{i} {{ color: c{i} }}" for i in range(4))
        assert check_override_pressure(_parse(css), DEFAULT) == []


# ---------------------------------------------------------------------------
# check_missing_layers
# ---------------------------------------------------------------------------


def _rules(count: int) -> str:
    return "\n".join(f".rule-{i} {{ color: c{i}; }}" for i in range(count))


class TestMissingLayers:
    def test_fifty_rules_without_layers(self):
        issues = check_missing_layers(_parse(_rules(50)), DEFAULT)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.id is IssueId.MISSING_LAYERS
        assert issue.severity is Severity.LOW
        assert issue.evidence.count == 50
        assert issue.evidence.file == "test.css"
        assert "Your CSS has 50 rules, but" in issue.why

    def test_wrapped_in_layer(self):
        css = "@layer base {\n" + _rules(50) + "\n}"
        assert check_missing_layers(_parse(css), DEFAULT) == []

    def test_small_codebase(self):
        assert check_missing_layers(_parse(_rules(10)), DEFAULT) == []

    def test_important_triggers(self):
        css = " ".join(f".r{i} {{ color: red !important }}" for i in range(5))
        issues = check_missing_layers(_parse(css), DEFAULT)
        assert "5 rules and 5 !important declarations" in issues[0].why

    def test_three_large_files(self):
        results = [parse_css(_rules(20), f"{n}.css") for n in range(3)]
        assert len(check_missing_layers(results, DEFAULT)) == 1

    def test_layers_in_any_file(self):
        results = [parse_css(_rules(60), "a.css"), parse_css("@layer base;", "b.css")]
        assert check_missing_layers(results, DEFAULT) == []

    def test_no_results(self):
        assert check_missing_layers([], DEFAULT) == []


# ---------------------------------------------------------------------------
# run_all_rules
# ---------------------------------------------------------------------------


class TestRunAllRules:
    def test_rule_order(self):
        assert [name for name, _ in ALL_RULES] == [
            "deep_selectors",
            "high_specificity",
            "important_abuse",
            "duplicate_declarations",
            "layout_risk_hotspot",
            "override_pressure",
            "missing_layers",
        ]

    def test_sorted_by_severity(self):
        css = "#a #b { color: red } .a .b .c .d .e { color: red } .x { width: 1px !important }"
        issues = run_all_rules(_parse(css), DEFAULT)
        ranks = [i.severity.rank for i in issues]
        assert ranks == sorted(ranks)
        assert issues[0].severity is Severity.CRITICAL

    def test_stable_within_severity(self):
        css = ".a .b .c .d .e {} .p .q .r .s .t {}"
        issues = [i for i in run_all_rules(_parse(css), DEFAULT) if i.id is IssueId.DEEP_SELECTOR]
        assert [i.evidence.selector for i in issues] == [".a .b .c .d .e", ".p .q .r .s .t"]

    def test_toggle_disables_rule(self):
        config = merge_config({"rules": {"deepSelectors": False}})
        issues = run_all_rules(_parse(".a .b .c .d .e {}"), config)
        assert IssueId.DEEP_SELECTOR not in _ids(issues)

    def test_missing_layers_toggle(self):
        config = merge_config({"rules": {"missingLayers": False}})
        assert IssueId.MISSING_LAYERS not in _ids(run_all_rules(_parse(_rules(60)), config))

    def test_default_config(self):
        issues = run_all_rules(_parse(".a .b .c .d .e {}"))
        assert IssueId.DEEP_SELECTOR in _ids(issues)

    def test_extra_rules(self):
        def no_op(results, config):
            return []

        assert run_all_rules(_parse("a {}"), DEFAULT, extra_rules=[no_op]) == []

    def test_empty_input(self):
        assert run_all_rules([], DEFAULT) == []
