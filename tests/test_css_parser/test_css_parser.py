"""Tests for the tolerant stylesheet parser."""

from csscomplexity.model import ParsedDeclaration, Specificity
from csscomplexity.stylesheet import parse_css, parse_css_file


# ---------------------------------------------------------------------------
# Rules and declarations
# ---------------------------------------------------------------------------


class TestRules:
    def test_single_rule(self):
        result = parse_css(".button { color: red; padding: 4px }", "a.css")
        assert result.ok
        assert result.file == "a.css"
        assert len(result.rules) == 1
        rule = result.rules[0]
        assert rule.file == "a.css"
        assert rule.first_selector == ".button"
        assert rule.declarations == (
            ParsedDeclaration("color", "red"),
            ParsedDeclaration("padding", "4px"),
        )

    def test_default_filename(self):
        assert parse_css("a {}").file == "input.css"

    def test_selector_list(self):
        rule = parse_css("h1, .title > span { margin: 0 }").rules[0]
        assert [s.raw for s in rule.selectors] == ["h1", ".title > span"]
        assert rule.selectors[1].depth == 2
        assert rule.first_specificity == Specificity(0, 0, 1)

    def test_important(self):
        rule = parse_css("a { color: red !important; width: 1px ! IMPORTANT; top: 0 }").rules[0]
        assert [d.important for d in rule.declarations] == [True, True, False]
        assert rule.declarations[0].value == "red"
        assert rule.important_count == 2

    def test_value_keeps_case(self):
        rule = parse_css("a { font-family: Helvetica Neue , Arial }").rules[0]
        assert rule.declarations[0].value == "Helvetica Neue , Arial"

    def test_value_with_semicolon_in_string(self):
        rule = parse_css('a { content: "a;b"; color: red }').rules[0]
        assert rule.declarations[0].value == '"a;b"'
        assert len(rule.declarations) == 2

    def test_value_with_parentheses(self):
        rule = parse_css("a { background: url(data:image/png;base64,AAA) }").rules[0]
        assert rule.declarations[0].value == "url(data:image/png;base64,AAA)"

    def test_empty_selector_rule_dropped(self):
        assert parse_css("{ color: red } a { color: blue }").rules[0].first_selector == "a"

    def test_nested_rules_are_separate(self):
        result = parse_css(".card { color: red; .title { color: blue } }")
        assert [r.first_selector for r in result.rules] == [".card", ".title"]
        assert result.rules[1].declarations == (ParsedDeclaration("color", "blue"),)

    def test_nested_declarations_belong_to_ancestor(self):
        result = parse_css(".a { color: red; &:hover { color: blue; } }")
        assert result.rules[0].first_selector == ".a"
        assert result.rules[0].declarations == (
            ParsedDeclaration("color", "red"),
            ParsedDeclaration("color", "blue"),
        )

    def test_nested_declarations_keep_source_order(self):
        css = ".a { .b { top: 0 } left: 0; @media print { display: none } width: 1px }"
        rule = parse_css(css).rules[0]
        assert [d.property for d in rule.declarations] == ["top", "left", "display", "width"]

    def test_nested_important_counts_on_ancestor(self):
        rule = parse_css(".a { .b { color: red !important } }").rules[0]
        assert rule.important_count == 1

    def test_rules_in_media_queries(self):
        result = parse_css("@media (min-width: 40em) { .a { color: red } } .b { color: blue }")
        assert [r.first_selector for r in result.rules] == [".a", ".b"]
        assert result.rules[0].layer is None


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


class TestPositions:
    def test_line_and_column(self):
        result = parse_css("a { color: red }\n\n  .b {\n color: blue }")
        assert (result.rules[0].line, result.rules[0].column) == (1, 1)
        assert (result.rules[1].line, result.rules[1].column) == (3, 3)

    def test_comments_keep_line_numbers(self):
        result = parse_css("/* one\ntwo\n*/\n.a { color: red }")
        assert result.rules[0].line == 4

    def test_comment_text_ignored(self):
        result = parse_css("/* .fake { color: red } */ .real { /* x: y; */ color: red }")
        assert [r.first_selector for r in result.rules] == [".real"]
        assert len(result.rules[0].declarations) == 1


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------


class TestLayers:
    def test_layer_statement_and_blocks(self):
        css = """
        @layer reset, base;
        @layer base { a { color: red } }
        @layer components { .btn { color: blue } }
        @layer base { p { margin: 0 } }
        """
        result = parse_css(css)
        assert result.uses_layers
        assert result.layers == ("reset", "base", "components")
        assert [r.layer for r in result.rules] == ["base", "components", "base"]

    def test_nearest_layer_wins(self):
        css = "@layer outer { @media print { @layer inner { a { color: red } } } }"
        assert parse_css(css).rules[0].layer == "inner"

    def test_anonymous_layer_falls_through(self):
        css = "@layer outer { @layer { a { color: red } } }"
        result = parse_css(css)
        assert result.rules[0].layer == "outer"
        assert result.layers == ("outer",)

    def test_layer_name_case_insensitive(self):
        assert parse_css("@LAYER base { a { color: red } }").uses_layers

    def test_no_layers(self):
        result = parse_css("a { color: red }")
        assert not result.uses_layers
        assert result.layers == ()


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformedInput:
    def test_unclosed_block(self):
        result = parse_css(".a { color: red; .b { width: 1px")
        assert result.ok
        assert [r.first_selector for r in result.rules] == [".a", ".b"]

    def test_stray_closing_brace(self):
        result = parse_css("} .a { color: red } }")
        assert [r.first_selector for r in result.rules] == [".a"]

    def test_unparseable_selector_uses_estimate(self):
        result = parse_css("&:hover { color: red }")
        assert result.rules[0].selectors[0].depth == 1

    def test_garbage_text(self):
        result = parse_css("this is not css")
        assert result.ok
        assert result.rules == ()


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestParseFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "site.css"
        path.write_text(".a { color: red }", encoding="utf-8")
        result = parse_css_file(path)
        assert result.file == str(path)
        assert len(result.rules) == 1

    def test_missing_file(self, tmp_path):
        result = parse_css_file(tmp_path / "missing.css")
        assert not result.ok
        assert result.rules == ()
        assert result.errors[0].startswith("Failed to read file:")
