"""Stylesheet parser -- tolerant CSS scanning into ParseResult values."""

from csscomplexity.stylesheet.parser import DEFAULT_FILENAME, parse_css, parse_css_file

__all__ = ["DEFAULT_FILENAME", "parse_css", "parse_css_file"]
