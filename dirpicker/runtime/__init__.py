"""Runtime orchestration for the interactive explorer.

Public entrypoint is ``run_explorer``; the session, loop, terminal, and
config modules are wiring around the tree/selection/viewer core.
"""

from __future__ import annotations

import sys
from pathlib import Path

from .app import ExplorerSession
from .config import ExplorerConfig, load_explorer_config
from .loop import run_main_loop
from .terminal import TerminalController


def run_explorer(
    root: Path,
    config: ExplorerConfig,
    *,
    no_color: bool = False,
    theme_name: str | None = None,
    show_debug: bool = False,
) -> None:
    """Scan ``root`` and drive the interactive explorer on the controlling tty."""
    session = ExplorerSession.open(root, config, no_color=no_color, theme_name=theme_name)
    session.state.show_debug = show_debug
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(session, terminal, stdin_fd)


__all__ = [
    "ExplorerConfig",
    "ExplorerSession",
    "TerminalController",
    "load_explorer_config",
    "run_explorer",
    "run_main_loop",
]
