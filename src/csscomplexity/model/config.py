"""Analyzer configuration: thresholds, rule toggles, and default merging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration cannot be read or holds invalid values."""

    def __init__(self, path: str | Path | None, message: str) -> None:
        self.path = str(path) if path is not None else None
        if self.path is None:
            super().__init__(f"Invalid config: {message}")
        else:
            super().__init__(f"Invalid config file {self.path}: {message}")


@dataclass(frozen=True)
class Thresholds:
    max_selector_depth: int = 4
    max_specificity_score: int = 40
    max_important_per_file: int = 5
    max_duplicate_declarations: int = 3


@dataclass(frozen=True)
class RuleToggles:
    """One flag per detector; every detector is enabled by default."""

    deep_selectors: bool = True
    high_specificity: bool = True
    important_abuse: bool = True
    duplicate_declarations: bool = True
    layout_risk_hotspot: bool = True
    override_pressure: bool = True
    missing_layers: bool = True


@dataclass(frozen=True)
class AnalyzerConfig:
    """Fully resolved configuration consumed by the analysis pipeline."""

    include: tuple[str, ...] = ("**/*.css",)
    exclude: tuple[str, ...] = ("**/node_modules/**", "**/dist/**", "**/vendor/**")
    thresholds: Thresholds = field(default_factory=Thresholds)
    ignore_patterns: tuple[str, ...] = ()
    max_score: int = 100
    rules: RuleToggles = field(default_factory=RuleToggles)

    def to_dict(self) -> dict[str, Any]:
        """Render with the camelCase keys used by config files."""
        return {
            "include": list(self.include),
            "exclude": list(self.exclude),
            "thresholds": {_camel(f.name): getattr(self.thresholds, f.name) for f in fields(Thresholds)},
            "ignorePatterns": list(self.ignore_patterns),
            "maxScore": self.max_score,
            "rules": {_camel(f.name): getattr(self.rules, f.name) for f in fields(RuleToggles)},
        }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _check_value(value: Any, expected: type, label: str) -> Any:
    """Return *value* if it is an *expected* (int or bool), else raise ConfigError."""
    # bool is a subclass of int, so it must be told apart explicitly.
    if expected is bool:
        valid = isinstance(value, bool)
    else:
        valid = isinstance(value, int) and not isinstance(value, bool)
    if not valid:
        kind = "a boolean" if expected is bool else "an integer"
        raise ConfigError(None, f"{label} must be {kind}, got {value!r}")
    return value


def _check_patterns(value: Any, label: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(None, f"{label} must be a list of glob patterns, got {value!r}")
    for pattern in value:
        if not isinstance(pattern, str):
            raise ConfigError(None, f"{label} must contain only strings, got {pattern!r}")
    return tuple(value)


def _merge_section(section: Any, overrides: Mapping[str, Any] | None, label: str) -> Any:
    """Overlay camelCase or snake_case *overrides* onto a dataclass *section*.

    Raises:
        ConfigError: If *overrides* is not a mapping or a value has the wrong type.
    """
    if not overrides:
        return section
    if not isinstance(overrides, Mapping):
        raise ConfigError(None, f"{label}s must be a mapping, got {overrides!r}")
    by_key = {}
    for f in fields(section):
        by_key[f.name] = f.name
        by_key[_camel(f.name)] = f.name
    updates: dict[str, Any] = {}
    for key, value in overrides.items():
        name = by_key.get(key)
        if name is None:
            logger.warning("Ignoring unknown %s key: %s", label, key)
            continue
        if value is None:
            continue
        expected = type(getattr(section, name))
        updates[name] = _check_value(value, expected, f"{label} {key}")
    return replace(section, **updates)


def merge_config(user: AnalyzerConfig | Mapping[str, Any] | None = None) -> AnalyzerConfig:
    """Merge user configuration over the defaults.

    *user* may be a resolved :class:`AnalyzerConfig` (returned unchanged), a
    mapping as loaded from a config file, or None. Nested ``thresholds`` and
    ``rules`` are merged key by key so a partial section keeps the remaining
    defaults.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    if isinstance(user, AnalyzerConfig):
        return user
    if not user:
        return AnalyzerConfig()

    base = AnalyzerConfig()
    updates: dict[str, Any] = {}
    for key, value in user.items():
        if value is None:
            continue
        if key == "include":
            updates["include"] = _check_patterns(value, key)
        elif key == "exclude":
            updates["exclude"] = _check_patterns(value, key)
        elif key in ("ignorePatterns", "ignore_patterns"):
            updates["ignore_patterns"] = _check_patterns(value, key)
        elif key in ("maxScore", "max_score"):
            updates["max_score"] = _check_value(value, int, key)
        elif key == "thresholds":
            updates["thresholds"] = _merge_section(base.thresholds, value, "threshold")
        elif key == "rules":
            updates["rules"] = _merge_section(base.rules, value, "rule")
        else:
            logger.warning("Ignoring unknown config key: %s", key)
    return replace(base, **updates)
