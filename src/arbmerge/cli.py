"""Command line interface.

Usage:
    arbmerge merge [--config build.yaml] [--project-root .] [--output DIR]
    arbmerge build [--config build.yaml] [--project-root .]

Exit Codes:
    0: Success
    1: At least one locale failed to merge, or the build reported an error
    2: Configuration error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from arbmerge import __version__
from arbmerge.builder import FlutterGenBuilder
from arbmerge.config import DEFAULT_BUILDER_NAME, load_builder_config, load_builder_options
from arbmerge.errors import ConfigurationError
from arbmerge.merging.orchestrator import merge_translations

__all__ = ["main", "parse_args"]

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="arbmerge",
        description="Merge ARB translation files and build the flutter_gen package",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=Path("build.yaml"),
        help="build.yaml or flat options file, relative to the project root (default: build.yaml)",
    )
    common.add_argument(
        "--builder",
        default=DEFAULT_BUILDER_NAME,
        help=f"Builder entry to read options from (default: {DEFAULT_BUILDER_NAME})",
    )
    common.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Root of the app being built (default: current directory)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    merge = commands.add_parser("merge", parents=[common], help="Only merge ARB files")
    merge.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: .dart_tool/merged_translations)",
    )
    merge.add_argument(
        "--skip-dependencies",
        action="store_true",
        help="Do not run 'flutter pub get' in the base app",
    )
    commands.add_parser("build", parents=[common], help="Run the full flutter_gen build")

    return parser.parse_args(args)


def _config_path(parsed: argparse.Namespace) -> Path:
    config: Path = parsed.config
    return config if config.is_absolute() else parsed.project_root / config


def _run_merge(parsed: argparse.Namespace) -> int:
    try:
        config = load_builder_config(_config_path(parsed), parsed.builder)
    except ConfigurationError as e:
        logger.error("❌ %s", e)
        if e.hint:
            logger.info("💡 %s", e.hint)
        return 2

    summary = merge_translations(
        config,
        parsed.project_root,
        parsed.output,
        check_dependencies=not parsed.skip_dependencies,
    )
    for result in summary.get_errors():
        print(f"[ERROR] {result.locale}: {result.error}", file=sys.stderr)
    return 1 if summary.has_errors else 0


def _run_build(parsed: argparse.Namespace) -> int:
    options: Mapping[str, Any] | None
    try:
        options = load_builder_options(_config_path(parsed), parsed.builder)
    except ConfigurationError as e:
        logger.error("❌ %s", e)
        options = None

    report = FlutterGenBuilder.from_options(options, parsed.project_root).build()
    return 1 if report.error is not None else 0


def main(args: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments (None uses sys.argv)

    Returns:
        Exit code
    """
    parsed = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format=_LOG_FORMAT,
    )

    if parsed.command == "merge":
        return _run_merge(parsed)
    return _run_build(parsed)


if __name__ == "__main__":
    sys.exit(main())
