"""
modx CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (template/, cache/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_verbose_flag,
    add_standard_flags,
    add_render_args,
)
from ._utils import (
    get_repo_root,
    setup_logging,
    parse_assignments,
    load_render_data,
    build_engine,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_verbose_flag",
    "add_standard_flags",
    "add_render_args",
    # Utilities
    "get_repo_root",
    "setup_logging",
    "parse_assignments",
    "load_render_data",
    "build_engine",
]
