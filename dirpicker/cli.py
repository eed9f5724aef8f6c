"""Command-line front door for dirpicker.

Parses CLI options, resolves the root directory, sets up logging, and loads
the user config. Then dispatches into the interactive explorer runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .content_pane.syntax import normalize_style
from .errors import RootResolutionError
from .file_tree_model import resolve_root
from .runtime import run_explorer
from .runtime.config import load_explorer_config
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None, debug: bool) -> None:
    """Route package logs to ``log_file``; without one, keep the screen clean."""
    package_logger = logging.getLogger("dirpicker")
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory tree, select files and folders, and export paths or contents."
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for the content viewer.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Show the debug footer and log at DEBUG level.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the explorer on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A missing or non-directory root exits with status 1
    before any scanning happens.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_file, args.debug)

    if default_path is None:
        default_path = Path.cwd()
    try:
        root = resolve_root(args.path or default_path)
    except RootResolutionError as exc:
        raise SystemExit(f"Error: {exc.reason}: {exc.path}") from exc

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("Error: dirpicker needs an interactive terminal.")

    config = load_explorer_config()
    if args.style is not None:
        config = replace(config, style=normalize_style(args.style))
    run_explorer(
        root,
        config,
        no_color=args.no_color,
        theme_name=args.theme,
        show_debug=args.debug,
    )


if __name__ == "__main__":
    main()
