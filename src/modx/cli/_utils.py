"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from modx.core.config import ConfigManager
from modx.core.config.domains import LoggingConfig
from modx.core.engine import ModxEngine
from modx.core.utils.io import read_yaml
from modx.core.utils.logging import configure_logging
from modx.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from args or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def setup_logging(args: argparse.Namespace, repo_root: Path) -> None:
    """Configure logging from ``logging.*`` config; ``--verbose`` forces DEBUG."""
    cfg = LoggingConfig(repo_root, config=ConfigManager(repo_root).load_config())
    level = "DEBUG" if getattr(args, "verbose", False) else cfg.level
    configure_logging(level, cfg.file)


def parse_assignments(pairs: List[str]) -> Dict[str, Any]:
    """Parse ``KEY=VALUE`` strings; values are read as YAML scalars or collections.

    Raises:
        ValueError: when an entry has no ``=`` or an empty key
    """
    data: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        value = yaml.safe_load(raw) if raw.strip() else ""
        data[key] = value
    return data


def load_render_data(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge ``--data`` file contents with ``--set`` values (``--set`` wins)."""
    data: Dict[str, Any] = {}
    data_file = getattr(args, "data_file", None)
    if data_file:
        loaded = read_yaml(Path(data_file), default={}, raise_on_error=True)
        if not isinstance(loaded, dict):
            raise ValueError(f"Data file must contain a mapping: {data_file}")
        data.update(loaded)
    data.update(parse_assignments(getattr(args, "values", None) or []))
    return data


def build_engine(
    args: argparse.Namespace,
    repo_root: Path,
    *,
    use_cache: bool = True,
) -> ModxEngine:
    """Build a ModxEngine from config plus command-line overrides."""
    overrides: Dict[str, Any] = {}
    paths: Optional[List[str]] = getattr(args, "paths", None)
    if paths:
        overrides["templates"] = {"paths": [str(Path(p).resolve()) for p in paths]}
    if not use_cache:
        overrides["cache"] = {"enabled": False}
    return ModxEngine.from_config(repo_root, overrides=overrides or None)


__all__ = [
    "get_repo_root",
    "setup_logging",
    "parse_assignments",
    "load_render_data",
    "build_engine",
]
