"""
modx cache clear command.

SUMMARY: Clear cached renders

Without ``--template`` every entry in the configured store is removed.
"""

from __future__ import annotations

import argparse
import sys

from modx.cli import OutputFormatter, add_standard_flags, get_repo_root, setup_logging
from modx.core.config import CacheConfig, ConfigManager
from modx.core.engine import cache_from_config

SUMMARY = "Clear cached renders"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--template",
        help="Only clear entries for this template name",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        setup_logging(args, repo_root)

        config = ConfigManager(repo_root).load_config()
        cache = cache_from_config(CacheConfig(repo_root, config=config))
        if cache is None:
            formatter.success(
                {"cleared": False, "template": args.template, "reason": "cache disabled"},
                "Render cache is disabled; nothing to clear",
            )
            return 0

        cleared = cache.clear(args.template)
        target = f"template '{args.template}'" if args.template else "all templates"
        formatter.success(
            {"cleared": cleared, "template": args.template},
            f"Cleared render cache for {target}" if cleared else f"No cached renders for {target}",
        )
        return 0

    except Exception as e:
        formatter.error(e, error_code="cache_clear_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
