"""Stylesheet discovery and concurrent parsing."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Sequence

from csscomplexity.model.config import AnalyzerConfig
from csscomplexity.model.stylesheet import ParseResult
from csscomplexity.stylesheet import parse_css_file

logger = logging.getLogger(__name__)

MAX_WORKERS = 8


def _matches(relative: str, patterns: Iterable[str]) -> bool:
    for pattern in patterns:
        if fnmatchcase(relative, pattern):
            return True
        # "**/x/**" should also match "x/..." at the top of the tree.
        if pattern.startswith("**/") and fnmatchcase(relative, pattern[3:]):
            return True
    return False


def find_css_files(base: str | Path, config: AnalyzerConfig) -> list[Path]:
    """Return stylesheets under *base* matching ``include`` and not excluded.

    ``exclude`` and ``ignore_patterns`` are matched against the path
    relative to *base*. A *base* that is itself a file is returned as is.

    Raises:
        FileNotFoundError: If *base* does not exist.
    """
    root = Path(base).resolve()
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {base}")
    if root.is_file():
        return [root]

    skip = (*config.exclude, *config.ignore_patterns)
    found: set[Path] = set()
    for pattern in config.include:
        for candidate in root.glob(pattern):
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(root).as_posix()
            if _matches(relative, skip):
                logger.debug("Excluded %s", relative)
                continue
            found.add(candidate)
    return sorted(found)


def parse_files(paths: Sequence[str | Path], max_workers: int = MAX_WORKERS) -> list[ParseResult]:
    """Parse every file concurrently; results keep the order of *paths*."""
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(paths))) as pool:
        return list(pool.map(parse_css_file, paths))
