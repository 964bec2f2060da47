"""Command-line front door for lazydu.

Parses CLI options over config-file defaults and resolves the scan root.
Then scans, projects and prints the size rows.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_cli_defaults
from .projection import ViewOptions, project
from .render import render_rows
from .size_format import parse_size
from .size_tree import ScanRootError, walk
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for depth levels."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _size_value(value: str) -> int:
    """argparse type for byte sizes with optional unit suffix."""
    try:
        return parse_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser, seeded with config-file defaults."""
    parser = argparse.ArgumentParser(
        prog="lazydu",
        description="Show disk usage of a directory tree as a tree or flat list.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to current directory.")
    parser.add_argument("-l", "--list", dest="list_output", action="store_true", help="Flat list output instead of tree.")
    parser.add_argument("-s", "--sort", action="store_true", help="Sort entries by size, largest first.")
    parser.add_argument("-r", "--reverse", action="store_true", help="With --sort, order smallest first.")
    parser.add_argument(
        "-t",
        "--threshold",
        type=_size_value,
        default=0,
        metavar="SIZE",
        help="Hide entries smaller than SIZE (e.g. 150, 10K, 2.5MB).",
    )
    parser.add_argument(
        "-d",
        "--depth",
        type=_nonnegative_int,
        default=None,
        metavar="LEVELS",
        help="Maximum display depth (root is 0).",
    )
    parser.add_argument("-f", "--files-only", action="store_true", help="With --list, omit directory rows.")
    parser.add_argument("-m", "--machine", action="store_true", help="Print raw byte counts.")
    parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=None,
        help="Number of scanner threads (default: CPU count).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scan progress and errors to stderr.")
    parser.set_defaults(**load_cli_defaults())
    return parser


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr at WARNING, or DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments, scan the target and print its size rows.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A root that cannot be read exits non-zero; unreadable
    entries below it are only annotated.
    """
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    if default_path is None:
        default_path = Path(".")
    path = Path(args.path) if args.path else default_path

    try:
        tree = walk(path, max_workers=args.jobs)
    except ScanRootError as exc:
        raise SystemExit(f"lazydu: cannot read '{path}': {exc.strerror}") from exc

    options = ViewOptions(
        sort_by_size=args.sort,
        ascending=args.reverse,
        threshold=args.threshold,
        max_depth=args.depth,
    )
    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme, no_color=no_color)
    for line in render_rows(
        project(tree, options),
        list_output=args.list_output,
        files_only=args.files_only,
        machine=args.machine,
        theme=theme,
    ):
        sys.stdout.write(line + "\n")


if __name__ == "__main__":
    main()
