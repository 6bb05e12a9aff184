"""Config file discovery, loading, and generation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from csscomplexity.model.config import AnalyzerConfig, ConfigError

logger = logging.getLogger(__name__)

# Searched in this order in each directory.
CONFIG_FILES = (
    ".csscomplexityrc",
    ".csscomplexityrc.json",
    "csscomplexity.config.json",
    ".csscomplexityrc.yaml",
    ".csscomplexityrc.yml",
)

DEFAULT_CONFIG_FILENAME = ".csscomplexityrc.json"

# Stricter than the library default so a fresh config is useful in CI.
INIT_MAX_SCORE = 60


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a config file as a raw mapping.

    ``.yaml``/``.yml`` files are read with PyYAML, anything else as JSON.
    An empty document yields an empty mapping.

    Raises:
        ConfigError: If the file is unreadable, malformed, or not a mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(path, str(exc)) from exc

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text) if text.strip() else None
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(path, str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(path, f"expected a mapping, got {type(data).__name__}")
    return data


def find_config_path(start: str | Path) -> Path | None:
    """Nearest config file at or above *start*, or None."""
    directory = Path(start).resolve()
    if directory.is_file():
        directory = directory.parent
    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None


def find_config(start: str | Path) -> dict[str, Any] | None:
    """Load the nearest config file at or above *start*."""
    path = find_config_path(start)
    if path is None:
        return None
    logger.debug("Using config file %s", path)
    return load_config_file(path)


def generate_default_config() -> str:
    """Render the default configuration as indented JSON."""
    data = AnalyzerConfig(max_score=INIT_MAX_SCORE).to_dict()
    return json.dumps(data, indent=2)


def write_config_file(directory: str | Path, filename: str = DEFAULT_CONFIG_FILENAME) -> Path:
    """Write the default configuration into *directory* and return its path."""
    path = Path(directory) / filename
    path.write_text(generate_default_config(), encoding="utf-8")
    return path


def resolve_config(
    target: str | Path,
    use_config_file: bool = True,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Raw config for *target*: the nearest config file, then *overrides* on top."""
    config: dict[str, Any] = {}
    if use_config_file:
        config.update(find_config(target) or {})
    if overrides:
        config.update(overrides)
    return config
