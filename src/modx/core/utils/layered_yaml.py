"""Layered YAML loading helper shared by the configuration manager."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from modx.core.utils.io import iter_yaml_files, read_yaml
from modx.core.utils.merge import deep_merge


def merge_yaml_directory(base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
    """Merge all YAML files from ``directory`` into ``base``.

    Files are merged in deterministic order. Missing directories are ignored.
    YAML must be valid; invalid YAML raises.
    """
    d = Path(directory)
    if not d.exists():
        return base

    cfg: Dict[str, Any] = dict(base)
    for path in iter_yaml_files(d):
        module_cfg = read_yaml(path, default={}, raise_on_error=True) or {}
        if not isinstance(module_cfg, dict):
            raise ValueError(f"Config file must contain a YAML mapping: {path}")
        cfg = deep_merge(cfg, module_cfg)
    return cfg


__all__ = ["merge_yaml_directory"]
