"""Project root discovery."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIRNAME = ".modx"
_ROOT_MARKERS = (PROJECT_CONFIG_DIRNAME, ".git")


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Return the nearest ancestor of ``start`` holding a ``.modx`` or ``.git`` entry.

    Falls back to ``start`` (default: the working directory) when no marker
    is found, so a bare directory of templates still works.
    """
    origin = Path(start or Path.cwd()).expanduser().resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return origin


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.modx``."""
    return Path(repo_root) / PROJECT_CONFIG_DIRNAME


__all__ = ["PROJECT_CONFIG_DIRNAME", "resolve_project_root", "get_project_config_dir"]
