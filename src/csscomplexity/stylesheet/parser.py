"""Tolerant, hand-written parser for CSS stylesheets.

Syntax example:
    @layer reset, base;
    @layer base {
        @media (min-width: 40em) {
            .nav > a:hover, .nav > a:focus { color: red !important; }
        }
    }

Unclosed blocks end at end of input, stray closing braces are skipped, and
text that is neither a rule nor a declaration is ignored, so broken input
yields partial results instead of an error.
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Union

from csscomplexity.model.stylesheet import ParsedDeclaration, ParsedRule, ParseResult
from csscomplexity.selector import parse_selector, split_selector_list

__all__ = ["parse_css", "parse_css_file"]

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "input.css"

_AT_NAME_RE = re.compile(r"@([-\w]*)")
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


@dataclass
class _AtRule:
    name: str
    params: str
    parent: _Container | None
    children: list[_Node] | None = None  # None for statement at-rules


@dataclass
class _Rule:
    selector: str
    offset: int
    parent: _Container | None
    children: list[_Node] = field(default_factory=list)


_Container = Union[_AtRule, _Rule]
_Node = Union[_AtRule, _Rule, ParsedDeclaration]


def _strip_comments(source: str) -> str:
    """Blank out ``/* ... */`` comments, keeping newlines so offsets stay valid."""
    out: list[str] = []
    i = 0
    n = len(source)
    quote: str | None = None
    while i < n:
        ch = source[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(source[i + 1])
                i += 2
                continue
            if ch == quote or ch == "\n":
                quote = None
            i += 1
            continue
        if ch in "\"'":
            quote = ch
            out.append(ch)
            i += 1
            continue
        if ch == "/" and source.startswith("*", i + 1):
            end = source.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.extend("\n" if c == "\n" else " " for c in source[i:end])
            i = end
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _parse_declaration(text: str) -> ParsedDeclaration | None:
    prop, sep, value = text.partition(":")
    prop = prop.strip()
    if not sep or not prop:
        return None
    important = False
    match = _IMPORTANT_RE.search(value)
    if match:
        important = True
        value = value[: match.start()]
    return ParsedDeclaration(property=prop, value=value.strip(), important=important)


class _Scanner:
    """Builds a lightweight node tree from comment-free CSS text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> list[_Node]:
        return self._parse_children(None)

    def _skip_separators(self) -> None:
        text, n = self.text, len(self.text)
        while self.pos < n and (text[self.pos].isspace() or text[self.pos] == ";"):
            self.pos += 1

    def _read_until(self, stops: str) -> tuple[str, str | None]:
        """Read up to the next top-level character in *stops* (not consumed).

        Characters inside strings, parentheses, and brackets never stop the
        read. Returns the text read and the stop character, or None at EOF.
        """
        text, n = self.text, len(self.text)
        start = self.pos
        depth = 0
        quote: str | None = None
        while self.pos < n:
            ch = text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            if quote:
                if ch == quote or ch == "\n":
                    quote = None
            elif ch in "\"'":
                quote = ch
            elif ch in "([":
                depth += 1
            elif ch in ")]":
                depth = max(0, depth - 1)
            elif depth == 0 and ch in stops:
                return text[start : self.pos], ch
            self.pos += 1
        self.pos = n
        return text[start:n], None

    def _parse_children(self, parent: _Container | None) -> list[_Node]:
        children: list[_Node] = []
        while True:
            self._skip_separators()
            if self.pos >= len(self.text):
                return children
            ch = self.text[self.pos]
            if ch == "}":
                self.pos += 1
                if parent is None:
                    logger.debug("Skipping stray '}' at offset %d", self.pos - 1)
                    continue
                return children
            if ch == "@":
                children.append(self._parse_at_rule(parent))
                continue

            start = self.pos
            prelude, stop = self._read_until("{;}")
            if stop == "{":
                self.pos += 1
                offset = start + (len(prelude) - len(prelude.lstrip()))
                rule = _Rule(selector=prelude.strip(), offset=offset, parent=parent)
                rule.children = self._parse_children(rule)
                children.append(rule)
                continue
            if stop == ";":
                self.pos += 1
            declaration = _parse_declaration(prelude)
            if declaration is not None and parent is not None:
                children.append(declaration)
            elif prelude.strip():
                logger.debug("Ignoring unparseable text: %r", prelude.strip()[:40])

    def _parse_at_rule(self, parent: _Container | None) -> _AtRule:
        match = _AT_NAME_RE.match(self.text, self.pos)
        name = match.group(1) if match else ""
        self.pos = match.end() if match else self.pos + 1
        params, stop = self._read_until("{;}")
        node = _AtRule(name=name, params=params.strip(), parent=parent)
        if stop == "{":
            self.pos += 1
            node.children = self._parse_children(node)
        elif stop == ";":
            self.pos += 1
        return node


def _walk(nodes: list[_Node]) -> Iterator[_AtRule | _Rule]:
    """Pre-order traversal of rules and at-rules in source order."""
    for node in nodes:
        if isinstance(node, _Rule):
            yield node
            yield from _walk(node.children)
        elif isinstance(node, _AtRule):
            yield node
            if node.children:
                yield from _walk(node.children)


def _declarations(node: _Container) -> Iterator[ParsedDeclaration]:
    """Every declaration under *node*, nested rules and at-rules included, in source order."""
    for child in node.children or ():
        if isinstance(child, ParsedDeclaration):
            yield child
        else:
            yield from _declarations(child)


def _is_layer(node: _AtRule) -> bool:
    return node.name.lower() == "layer"


def _layer_for(rule: _Rule) -> str | None:
    """Name of the nearest enclosing named ``@layer`` block, if any."""
    parent = rule.parent
    while parent is not None:
        if isinstance(parent, _AtRule) and _is_layer(parent) and parent.params:
            return parent.params.strip()
        parent = parent.parent
    return None


class _Positions:
    """Maps string offsets to 1-based (line, column) pairs."""

    def __init__(self, text: str) -> None:
        self._starts = [0] + [i + 1 for i, ch in enumerate(text) if ch == "\n"]

    def locate(self, offset: int) -> tuple[int, int]:
        index = bisect.bisect_right(self._starts, offset) - 1
        return index + 1, offset - self._starts[index] + 1


def _build_result(source: str, filename: str) -> ParseResult:
    text = _strip_comments(source)
    tree = _Scanner(text).parse()
    positions = _Positions(text)

    layers: list[str] = []
    uses_layers = False
    for node in _walk(tree):
        if isinstance(node, _AtRule) and _is_layer(node):
            uses_layers = True
            for name in node.params.split(","):
                name = name.strip()
                if name and name not in layers:
                    layers.append(name)

    rules: list[ParsedRule] = []
    for node in _walk(tree):
        if not isinstance(node, _Rule):
            continue
        selectors = tuple(parse_selector(s) for s in split_selector_list(node.selector))
        if not selectors:
            continue
        line, column = positions.locate(node.offset)
        rules.append(
            ParsedRule(
                selectors=selectors,
                declarations=tuple(_declarations(node)),
                file=filename,
                line=line,
                column=column,
                layer=_layer_for(node),
            )
        )

    return ParseResult(
        file=filename,
        rules=tuple(rules),
        layers=tuple(layers),
        uses_layers=uses_layers,
    )


def parse_css(source: str, filename: str = DEFAULT_FILENAME) -> ParseResult:
    """Parse stylesheet text into a :class:`ParseResult`.

    Never raises: an unexpected failure is reported as a result with no
    rules and a single error string.
    """
    try:
        result = _build_result(source, filename)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to parse %s: %s", filename, exc)
        return ParseResult.failure(filename, f"Failed to parse CSS: {exc}")
    logger.debug("Parsed %s: %d rule(s)", filename, len(result.rules))
    return result


def parse_css_file(path: str | Path) -> ParseResult:
    """Read and parse the stylesheet at *path*."""
    filename = str(path)
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", filename, exc)
        return ParseResult.failure(filename, f"Failed to read file: {exc}")
    return parse_css(source, filename)
