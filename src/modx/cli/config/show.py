"""
modx config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and MODX_* environment variables.
"""

from __future__ import annotations

import argparse
import sys

from modx.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from modx.core.config import ConfigManager
from modx.core.utils.io import dump_yaml_string

SUMMARY = "Show current configuration"


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'cache.ttl')",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config_manager = ConfigManager(get_repo_root(args))
        key = getattr(args, "key", None)

        if key:
            value = config_manager.get(key)
            if value is None:
                formatter.text(f"Key not found: {key}")
                return 1
            data = _nest_key(key, value)
        else:
            data = config_manager.get_all()

        if formatter.json_mode:
            formatter.json_output(data)
        else:
            formatter.text(dump_yaml_string(data).rstrip())
        return 0

    except Exception as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
