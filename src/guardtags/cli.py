"""CLI entry for build-time guard metadata checks."""

from __future__ import annotations

import argparse

from .catalog import build_catalog
from .config import ScanOptions, load_scan_options
from .consistency import verify
from .constants import APP_NAME
from .errors import GuardTagsError
from .logging_utils import setup_logging
from .presenters import (
    render_catalog_markdown,
    render_catalog_text,
    render_error,
    render_report_lines,
)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_file, verbose=args.verbose)
        options = load_scan_options(args.config) if args.config else ScanOptions()
        if args.command == "check":
            return _run_check(args.library, options)
        return _run_catalog(args.library, options, markdown=args.markdown)
    except GuardTagsError as exc:
        print(render_error(str(exc)))
        return EXIT_ERROR


def _run_check(library: str, options: ScanOptions) -> int:
    report = verify(library, options)
    for line in render_report_lines(report):
        print(line)
    return EXIT_OK if report.ok else EXIT_VIOLATIONS


def _run_catalog(library: str, options: ScanOptions, *, markdown: bool) -> int:
    sections = build_catalog(library, options)
    if markdown:
        print(render_catalog_markdown(sections), end="")
    else:
        print(render_catalog_text(sections))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Verify and list guard function metadata of a Python library.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("library", help="Importable module or package name to scan.")
    common.add_argument(
        "--config",
        required=False,
        help="Path to a pyproject.toml with a [tool.guardtags] table.",
    )
    common.add_argument("--log-file", required=False, help="Write structured logs to this file.")
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Write structured logs to stderr when no log file is given.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "check",
        parents=[common],
        help="Report untagged members and shortcut collisions.",
    )
    catalog_parser = subparsers.add_parser(
        "catalog",
        parents=[common],
        help="List guard functions by group.",
    )
    catalog_parser.add_argument(
        "--markdown",
        action="store_true",
        help="Render the catalog as Markdown.",
    )
    return parser
