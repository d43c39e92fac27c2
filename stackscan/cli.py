"""Command-line entry point: scan a project and print its stack.

Exit codes:
  0  scan completed (errors from individual detectors are reported, not fatal)
  2  the project root does not exist, or the options are out of range
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from stackscan.core.config import get_settings
from stackscan.core.logging import configure_structlog
from stackscan.report import format_scan_result
from stackscan.scanner import ProjectRootNotFoundError, Scanner, ScannerOptions

EXIT_OK = 0
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackscan",
        description="Detect the tech stack of a JavaScript/TypeScript project.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root to scan (defaults to the current directory).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the scan result as JSON instead of a text report.",
    )
    parser.add_argument(
        "--min-confidence",
        type=int,
        default=None,
        help="Drop results below this confidence (0-100). Overrides STACKSCAN_MIN_CONFIDENCE.",
    )
    parser.add_argument(
        "--include-low-confidence",
        action="store_true",
        help="Keep every admitted result regardless of --min-confidence.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    configure_structlog(debug=settings.debug, level=settings.log_level)

    changes: dict = {}
    if args.min_confidence is not None:
        changes["min_confidence"] = args.min_confidence
    if args.include_low_confidence:
        changes["include_low_confidence"] = True

    try:
        options = ScannerOptions(**{**settings.scanner_options().model_dump(), **changes})
    except ValidationError as exc:
        print(f"stackscan: invalid options: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = Scanner(options).scan(args.path)
    except ProjectRootNotFoundError as exc:
        print(f"stackscan: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_scan_result(result))

    return EXIT_OK
