"""
modx template compile command.

SUMMARY: Show the compiled text of a template without executing it

Prints the intermediate Jinja2 source followed by the compilation report.
Nothing is executed and the render cache is not touched.
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

SUMMARY = "Show the compiled text of a template without executing it"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_render_args(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        setup_logging(args, repo_root)

        engine = build_engine(args, repo_root, use_cache=False)
        engine.with_data(load_render_data(args))
        if args.layout:
            engine.layout(args.layout)

        compiled = engine.compile(args.name)
        report = compiled.report

        if formatter.json_mode:
            formatter.json_output({
                "template": compiled.name,
                "path": str(compiled.path),
                "source": compiled.source,
                "report": report.to_dict(),
            })
            return 0

        formatter.text(compiled.source)
        formatter.text("")
        formatter.text(f"# {report.summary()}")
        for warning in report.warnings:
            formatter.text(f"# warning: {warning}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="template_compile_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
