"""Explorer session: key actions, mode switching, and per-mode screen rendering.

The session never touches the terminal. The main loop feeds it key tokens
and terminal dimensions and writes whatever ``render`` returns.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from ..ansi import clip_ansi_line
from ..content_pane import PAGER_CHROME_ROWS, ContentPager, build_content_export, colorize_source
from ..errors import WriteError
from ..export import ExportService
from ..file_tree_model import TreeModel
from ..input import KeyBinding, ModeKeymap
from ..selection import SelectionEngine
from ..tree_pane import TreeViewport, render_window, window_bounds
from ..ui_theme import available_theme_names, normalize_theme_name, resolve_theme
from .config import ExplorerConfig, save_theme_name
from .state import AppState

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 3.0
TREE_HEADER_ROWS = 4
TREE_FOOTER_ROWS = 2
DEBUG_ROWS = 4
SCROLL_INDICATOR_ROWS = 2

TITLE = "Interactive Directory Explorer"
NAVIGATION_HINT = "Navigation: ↑/↓ Move, Space: Select, Enter: Expand/Collapse"
ACTIONS_HINT = "Actions: S: Save Selected Paths, L: List Selected Files, C: View Content, Q: Quit"
NO_FILES_SELECTED = "No files selected. Use Space to select files."


class ExplorerSession:
    """Wire the tree model, selection engine, viewport, and viewers to key actions."""

    def __init__(
        self,
        model: TreeModel,
        config: ExplorerConfig | None = None,
        *,
        no_color: bool = False,
        theme_name: str | None = None,
        export_service: ExportService | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if model.root is None:
            raise ValueError("tree model must be initialized before starting a session")
        self.model = model
        self.config = config or ExplorerConfig()
        self.selection = SelectionEngine(model)
        self.viewport = TreeViewport()
        self.export_service = export_service or ExportService()
        self.no_color = no_color
        self.clock = clock
        self.state = AppState(theme_name=normalize_theme_name(theme_name or self.config.theme))
        self.theme = resolve_theme(self.state.theme_name, no_color=no_color)
        # Set by the main loop to draw a frame before a slow deferred scan.
        self.on_slow_load: Callable[[Path], None] | None = None
        self._page_height = 10
        self._screen_rows = 24
        self.viewport.rebuild(model.root)
        self._selected_count = self.selection.selected_count()
        self._keymap = self._build_keymap()

    @classmethod
    def open(cls, root_path: Path | str, config: ExplorerConfig | None = None, **kwargs) -> ExplorerSession:
        """Scan ``root_path`` and return a ready session (may raise ``RootResolutionError``)."""
        active_config = config or ExplorerConfig()
        model = TreeModel(ignore_dirs=active_config.ignore_dirs)
        model.initialize(root_path)
        return cls(model, active_config, **kwargs)

    def _build_keymap(self) -> ModeKeymap:
        return (
            ModeKeymap()
            .bind(
                KeyBinding("tree", ("UP", "k"), lambda: self.viewport.move(-1)),
                KeyBinding("tree", ("DOWN", "j"), lambda: self.viewport.move(1)),
                KeyBinding("tree", ("PGUP",), lambda: self.viewport.page(-1, self._page_height)),
                KeyBinding("tree", ("PGDN",), lambda: self.viewport.page(1, self._page_height)),
                KeyBinding("tree", ("HOME",), lambda: self.viewport.move_to(0)),
                KeyBinding("tree", ("END",), lambda: self.viewport.move_to(len(self.viewport) - 1)),
                KeyBinding("tree", ("ENTER",), self.toggle_expand),
                KeyBinding("tree", ("RIGHT",), self.expand_current),
                KeyBinding("tree", ("LEFT",), self.collapse_current),
                KeyBinding("tree", (" ",), self.toggle_selection),
                KeyBinding("tree", ("s",), self.save_selection),
                KeyBinding("tree", ("l",), self.list_selected_files),
                KeyBinding("tree", ("c",), self.open_content_menu),
                KeyBinding("tree", ("d",), self.toggle_debug),
                KeyBinding("tree", ("t",), self.cycle_theme),
                KeyBinding("tree", ("q", "CTRL_C"), self.request_quit),
                KeyBinding("content_menu", ("1",), self.start_pager),
                KeyBinding("content_menu", ("2",), self.open_export_prompt),
                KeyBinding("prompt", ("ESC", "CTRL_C"), self.return_to_tree),
                KeyBinding("prompt", ("ENTER",), self.submit_prompt),
                KeyBinding("prompt", ("BACKSPACE",), lambda: self._edit_prompt(self.state.prompt_text[:-1])),
                KeyBinding("prompt", ("CTRL_U",), lambda: self._edit_prompt("")),
                KeyBinding("message", ("UP", "k"), lambda: self._scroll_message(-1)),
                KeyBinding("message", ("DOWN", "j"), lambda: self._scroll_message(1)),
                KeyBinding("message", ("PGUP",), lambda: self._page_message(-1)),
                KeyBinding("message", ("PGDN",), lambda: self._page_message(1)),
            )
            .fallback("content_menu", lambda _key: self.return_to_tree())
            .fallback("prompt", self._type_prompt_char)
            .fallback("message", lambda _key: self.close_message())
            .fallback("pager", self._pager_key)
        )

    # Status line

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.state.status_message = message
        self.state.status_is_error = error
        self.state.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def expire_status(self, now: float) -> None:
        if self.state.status_message and now >= self.state.status_message_until:
            self.state.status_message = ""
            self.state.status_message_until = 0.0
            self.state.dirty = True

    # Tree actions

    def _rebuild(self) -> None:
        assert self.model.root is not None
        self.viewport.rebuild(self.model.root)

    def _expand_path(self, path: Path) -> bool:
        if self.model.needs_deferred_load(path) and self.on_slow_load is not None:
            self.on_slow_load(path)
        errors_before = len(self.model.scan_errors)
        changed = self.model.expand(path)
        if changed:
            self._rebuild()
            # Children loaded under a FULL directory arrive FULL.
            self._selected_count = self.selection.selected_count()
        new_errors = self.model.scan_errors[errors_before:]
        if new_errors:
            self.set_status(f"Error scanning {new_errors[-1].path}: {new_errors[-1].reason}", error=True)
        return changed

    def toggle_expand(self) -> bool:
        row = self.viewport.current()
        if row is None:
            return False
        node = self.model.lookup(row.owner_path)
        if node is None or not node.is_dir or node.is_root:
            return False
        return self._expand_path(node.path)

    def expand_current(self) -> bool:
        row = self.viewport.current()
        if row is None:
            return False
        node = self.model.lookup(row.owner_path)
        if node is None or not node.is_dir or node.expanded:
            return False
        return self._expand_path(node.path)

    def collapse_current(self) -> bool:
        """Collapse the directory under the cursor, or jump to its parent row."""
        row = self.viewport.current()
        if row is None:
            return False
        node = self.model.lookup(row.owner_path)
        if node is None:
            return False
        if not row.is_placeholder and node.is_dir and node.expanded and self.model.collapse(node.path):
            self._rebuild()
            return True
        target = node if row.is_placeholder else self.model.parent_of(node)
        if target is None:
            return False
        index = self.viewport.index_of(target)
        return index is not None and self.viewport.move_to(index)

    def toggle_selection(self) -> bool:
        row = self.viewport.current()
        if row is None or row.node is None:
            return False
        self.selection.toggle(row.node)
        self._rebuild()
        self._selected_count = self.selection.selected_count()
        return True

    def save_selection(self) -> bool:
        filename = self.config.selection_filename
        try:
            self.export_service.save_selection(self.selection.selected_paths(), filename)
        except WriteError as exc:
            self.set_status(f"Error saving selection: {exc.reason}", error=True)
            return True
        self.set_status(f"Selection saved in '{filename}'.")
        return True

    def list_selected_files(self) -> bool:
        files = self.selection.selected_files()
        if not files:
            lines = [NO_FILES_SELECTED]
        else:
            lines = [f"{idx}. {path}" for idx, path in enumerate(files, start=1)]
            lines.append("")
            lines.append(f"Total: {len(files)} file(s) selected")
        self._show_message("Selected Files", lines)
        return True

    def open_content_menu(self) -> bool:
        if not self.selection.selected_files():
            self._show_message("View Content", [NO_FILES_SELECTED])
            return True
        self.state.mode = "content_menu"
        return True

    def toggle_debug(self) -> bool:
        self.state.show_debug = not self.state.show_debug
        return True

    def cycle_theme(self) -> bool:
        if self.no_color:
            return False
        names = available_theme_names()
        current = names.index(self.state.theme_name) if self.state.theme_name in names else -1
        self.state.theme_name = names[(current + 1) % len(names)]
        self.theme = resolve_theme(self.state.theme_name)
        save_theme_name(self.state.theme_name)
        self.set_status(f"Theme: {self.state.theme_name}")
        return True

    def request_quit(self) -> bool:
        self.state.quit_requested = True
        return True

    # Content viewing and export

    def start_pager(self) -> bool:
        colorize = None
        if not self.no_color:
            style = self.config.style

            def colorize(source: str, path: Path) -> str:
                return colorize_source(source, path, style)

        pager = ContentPager(
            self.selection.selected_files(),
            page_height=self._pager_rows(),
            colorize=colorize,
            theme=self.theme,
        )
        if not pager.active:
            self._show_message("View Content", ["No text files selected to display content."])
            return True
        self.state.pager = pager
        self.state.mode = "pager"
        return True

    def open_export_prompt(self) -> bool:
        self.state.mode = "prompt"
        self.state.prompt_label = "Enter output filename: "
        self.state.prompt_text = self.config.content_filename
        return True

    def submit_prompt(self) -> bool:
        filename = self.state.prompt_text.strip() or self.config.content_filename
        self.state.mode = "tree"
        self.export_content(filename)
        return True

    def export_content(self, filename: str) -> bool:
        result = build_content_export(self.selection.selected_files(), self.export_service)
        try:
            self.export_service.save_content(result.text, filename)
        except WriteError as exc:
            self.set_status(f"Error saving file contents: {exc.reason}", error=True)
            return False
        logger.info("exported %d file(s) to %s", len(result.exported), filename)
        message = f"File contents saved to '{filename}'."
        if result.skipped_binary:
            message += f" Skipped {len(result.skipped_binary)} binary file(s)."
        if result.read_errors:
            message += f" {len(result.read_errors)} file(s) could not be read."
        self.set_status(message)
        return True

    # Mode actions

    def return_to_tree(self) -> bool:
        self.state.mode = "tree"
        return True

    def close_message(self) -> bool:
        self.state.message_lines = []
        return self.return_to_tree()

    def _edit_prompt(self, text: str) -> bool:
        self.state.prompt_text = text
        return True

    def _type_prompt_char(self, key: str) -> bool:
        if len(key) != 1 or not key.isprintable():
            return False
        return self._edit_prompt(self.state.prompt_text + key)

    def _scroll_message(self, delta: int) -> bool:
        max_start = max(0, len(self.state.message_lines) - self._message_rows(self._screen_rows))
        start = max(0, min(self.state.message_start + delta, max_start))
        if start == self.state.message_start:
            return False
        self.state.message_start = start
        return True

    def _page_message(self, direction: int) -> bool:
        return self._scroll_message(direction * self._message_rows(self._screen_rows))

    def _pager_key(self, key: str) -> bool:
        pager = self.state.pager
        if pager is None:
            return self.return_to_tree()
        pager.resize(self._pager_rows())
        changed = pager.handle_key(key)
        if not pager.active:
            self.state.pager = None
            self.state.mode = "tree"
        return changed

    def _show_message(self, title: str, lines: list[str]) -> None:
        self.state.mode = "message"
        self.state.message_title = title
        self.state.message_lines = lines
        self.state.message_start = 0

    # Key dispatch

    def handle_key(self, key: str, rows: int = 24, columns: int = 80) -> bool:
        """Dispatch one key token for the active mode; return whether the screen changed."""
        self._screen_rows = rows
        self._page_height = self.tree_view_rows(rows)
        changed = self._keymap.dispatch(self.state.mode, key)
        if changed:
            self.state.dirty = True
        return changed

    # Rendering

    def tree_view_rows(self, rows: int) -> int:
        chrome = TREE_HEADER_ROWS + TREE_FOOTER_ROWS + SCROLL_INDICATOR_ROWS
        if self.state.show_debug:
            chrome += DEBUG_ROWS
        return max(1, rows - chrome)

    def _message_rows(self, rows: int) -> int:
        return max(1, rows - 4)

    def _pager_rows(self) -> int:
        return max(1, self._screen_rows - PAGER_CHROME_ROWS)

    def render(self, rows: int, columns: int) -> list[str]:
        mode = self.state.mode
        if mode == "pager" and self.state.pager is not None:
            return self.state.pager.render(columns)
        if mode == "content_menu":
            return self._render_content_menu(columns)
        if mode == "message":
            return self._render_message(rows, columns)
        return self._render_tree(rows, columns)

    def _render_tree(self, rows: int, columns: int) -> list[str]:
        theme = self.theme
        reset = theme.reset
        height = self.tree_view_rows(rows)
        lines = [
            f"{theme.title}{TITLE}{reset}",
            f"{theme.hint}{NAVIGATION_HINT}{reset}",
            f"{theme.hint}{ACTIONS_HINT}{reset}",
            "",
        ]
        lines.extend(render_window(self.viewport.rows, self.viewport.cursor, height, width=columns, theme=theme))
        lines.append("")
        lines.append(self._status_line())
        if self.state.show_debug:
            lines.extend(self._debug_lines(height))
        return [clip_ansi_line(line, columns) for line in lines]

    def _status_line(self) -> str:
        theme = self.theme
        if self.state.mode == "prompt":
            return f"{theme.hint}{self.state.prompt_label}{theme.reset}{self.state.prompt_text}_"
        if self.state.status_message:
            color = theme.status_error if self.state.status_is_error else theme.status_ok
            return f"{color}{self.state.status_message}{theme.reset}"
        count = self._selected_count
        noun = "file" if count == 1 else "files"
        return f"{theme.hint}{count} {noun} selected{theme.reset}"

    def _debug_lines(self, height: int) -> list[str]:
        current = self.viewport.current()
        start, end = window_bounds(len(self.viewport), self.viewport.cursor, height)
        return [
            f"DEBUG INFO: Cursor Position: {self.viewport.cursor}",
            f"DEBUG INFO: Active node: {current.path if current is not None else '-'}",
            f"DEBUG INFO: Total visible nodes: {len(self.viewport)}",
            f"DEBUG INFO: Visible range: {start}-{end - 1} ({end - start} entries)",
        ]

    def _render_content_menu(self, columns: int) -> list[str]:
        theme = self.theme
        lines = [
            f"{theme.title}View Content Options{theme.reset}",
            f"{theme.hint}1. Display on screen{theme.reset}",
            f"{theme.hint}2. Save to file{theme.reset}",
            f"{theme.hint}ESC. Cancel{theme.reset}",
        ]
        return [clip_ansi_line(line, columns) for line in lines]

    def _render_message(self, rows: int, columns: int) -> list[str]:
        theme = self.theme
        visible = self._message_rows(rows)
        start = self.state.message_start
        lines = [
            f"{theme.title}{self.state.message_title}{theme.reset}",
            f"{theme.hint}Press any key to return to the explorer{theme.reset}",
            "",
        ]
        lines.extend(self.state.message_lines[start : start + visible])
        return [clip_ansi_line(line, columns) for line in lines]

    def loading_lines(self, path: Path) -> list[str]:
        theme = self.theme
        return [
            f"{theme.warning}Loading contents of large directory: {path}{theme.reset}",
            f"{theme.warning}This may take a moment...{theme.reset}",
        ]
