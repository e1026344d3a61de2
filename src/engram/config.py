"""Engram configuration loader.

Priority (high → low):
  1. CLI flags             (--root; handled by the CLI, not here)
  2. Environment variables (ENGRAM_STORE_DIR, ENGRAM_SEQUENCE_WIDTH)
  3. Per-project engram.yaml  (in the project root, next to .engram/)
  4. Global ~/.engram/config.yaml
  5. Hardcoded defaults

Store paths must be relative and stay inside the project root.
All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_PATH: Path = Path.home() / ".engram" / "config.yaml"
_PROJECT_CONFIG_NAME: str = "engram.yaml"

# Known top-level sections; unknown keys produce a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["store"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file or environment variable has an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class StoreCfg:
    """On-disk layout of the worklog store (engram.yaml: store:).

    Attributes:
        dir: Store directory, relative to the project root.
        worklog: Entry directory, relative to the store directory.
        sequence_width: Zero-padding width of the sequence in entry filenames.
    """

    dir: str = ".engram"
    worklog: str = "worklog"
    sequence_width: int = 6


@dataclass
class EngramConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    store: StoreCfg = field(default_factory=StoreCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _validate_relative(key: str, value: str) -> None:
    """Raise ConfigError if *value* is absolute or climbs out with '..'."""
    path = PurePath(value)
    if not value or path.is_absolute() or ".." in path.parts:
        raise ConfigError(
            f"{key} must be a relative path inside the project: '{value}'\n"
            "  Example: store.dir: .engram"
        )


def _parse_width(value: Any, source: str) -> int:
    try:
        width = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"store.sequence_width must be an integer ({source}): '{value}'")
    if width < 1:
        raise ConfigError(f"store.sequence_width must be >= 1 ({source}): {width}")
    return width


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return raw


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> EngramConfig:
    """Build an *EngramConfig* from a merged raw YAML dict."""
    cfg = EngramConfig()

    if "store" in data:
        s = data["store"] or {}
        if not isinstance(s, dict):
            raise ConfigError("store: must be a mapping (dir, worklog, sequence_width).")
        cfg.store = StoreCfg(
            dir=str(s.get("dir", cfg.store.dir)),
            worklog=str(s.get("worklog", cfg.store.worklog)),
            sequence_width=_parse_width(
                s.get("sequence_width", cfg.store.sequence_width), "config file"
            ),
        )

    return cfg


def _apply_env_overrides(cfg: EngramConfig) -> EngramConfig:
    """Apply ENGRAM_* environment variable overrides."""
    if store_dir := os.environ.get("ENGRAM_STORE_DIR"):
        cfg.store.dir = store_dir
    if width := os.environ.get("ENGRAM_SEQUENCE_WIDTH"):
        cfg.store.sequence_width = _parse_width(width, "ENGRAM_SEQUENCE_WIDTH")
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> EngramConfig:
    """Load and return a merged *EngramConfig*.

    Applies layers in order: global → per-project → env vars.

    Args:
        project_dir: Directory to search for *engram.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Raises:
        ConfigError: If a value is invalid or a store path escapes the project.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _apply_env_overrides(_cfg_from_dict(merged))

    _validate_relative("store.dir", cfg.store.dir)
    _validate_relative("store.worklog", cfg.store.worklog)

    return cfg
