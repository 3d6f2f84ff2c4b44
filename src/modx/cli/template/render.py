"""
modx template render command.

SUMMARY: Render a template to stdout

Data comes from ``--data FILE`` and repeated ``--set KEY=VALUE`` options.
Output is served from the render cache unless ``--no-cache`` is given.
"""

from __future__ import annotations

import argparse
import sys

from modx.cli import (
    OutputFormatter,
    add_render_args,
    add_standard_flags,
    build_engine,
    get_repo_root,
    load_render_data,
    setup_logging,
)

SUMMARY = "Render a template to stdout"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_render_args(parser)
    parser.add_argument(
        "--ttl",
        type=int,
        help="Cache TTL in seconds for this render (<= 0 never expires)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass the render cache",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Render a template - delegates to ModxEngine."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        setup_logging(args, repo_root)

        engine = build_engine(args, repo_root, use_cache=not getattr(args, "no_cache", False))
        engine.with_data(load_render_data(args))
        if args.layout:
            engine.layout(args.layout)

        output = engine.render(args.name, getattr(args, "ttl", None))

        if formatter.json_mode:
            formatter.json_output({"template": args.name, "output": output})
        else:
            sys.stdout.write(output)
        return 0

    except Exception as e:
        formatter.error(e, error_code="template_render_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
