"""I/O utilities for modx.

- Core: atomic writes, directory management, text I/O
- JSON: read/write with advisory locks
- YAML: read with advisory locks, deterministic directory iteration
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .json import (
    read_json,
    write_json_atomic,
)
from .yaml import (
    dump_yaml_string,
    iter_yaml_files,
    read_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "read_json",
    "write_json_atomic",
    # yaml
    "read_yaml",
    "dump_yaml_string",
    "iter_yaml_files",
]
