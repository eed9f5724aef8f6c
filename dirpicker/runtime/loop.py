"""Main interactive event loop for the terminal UI.

Reads one key at a time, runs the bound action to completion, then redraws.
Keys typed during a slow scan stay buffered by the tty and are handled next.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from ..input import read_key
from .app import ExplorerSession
from .terminal import TerminalController

IDLE_POLL_MS = 250


def run_main_loop(session: ExplorerSession, terminal: TerminalController, stdin_fd: int) -> None:
    """Run the interactive session until a quit action occurs."""
    state = session.state
    last_size: tuple[int, int] | None = None

    def show_loading(path: Path) -> None:
        terminal.write_frame(session.loading_lines(path))

    session.on_slow_load = show_loading

    with terminal.raw_mode():
        while not state.quit_requested:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.dirty = True
            session.expire_status(time.monotonic())

            if state.dirty:
                terminal.write_frame(session.render(term.lines, term.columns))
                state.dirty = False

            key = read_key(stdin_fd, timeout_ms=IDLE_POLL_MS)
            if not key:
                continue
            session.handle_key(key, term.lines, term.columns)
