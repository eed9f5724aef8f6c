"""Selected-file content: interactive pager state and aggregate export.

The pager is a key-driven state machine with no terminal access of its own;
the runtime feeds it key tokens and draws whatever ``render`` returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..ansi import clip_ansi_line
from ..errors import ReadError, describe_os_error
from ..export import SEPARATOR, ContentEntry, ExportService, error_line
from ..ui_theme import DEFAULT_THEME, UITheme
from .binary import partition_binary
from .paging import PagedText, paginate
from .syntax import read_text, sanitize_terminal_text

logger = logging.getLogger(__name__)

PAGER_CHROME_ROWS = 8
PAGER_NAVIGATION_HINT = "Navigation: n: next file, p: prev file, →: next page, ←: prev page, q: quit"


def read_entry(path: Path) -> ContentEntry:
    """Read one file for display/export, capturing failures as ``ReadError``."""
    try:
        return ContentEntry(path=path, content=read_text(path))
    except OSError as exc:
        error = ReadError(path, describe_os_error(exc))
        logger.warning("read failed for %s: %s", path, error.reason)
        return ContentEntry(path=path, error=error)


def collect_export_entries(paths: Iterable[Path]) -> list[ContentEntry]:
    return [read_entry(path) for path in paths]


def binary_warning_lines(binary_files: list[Path]) -> list[str]:
    """Lines enumerating the binary files that will be skipped."""
    if not binary_files:
        return []
    return [f"Skipping {len(binary_files)} binary file(s):"] + [f"- {path}" for path in binary_files]


@dataclass(frozen=True)
class ContentExport:
    """Aggregate export text plus what was included, skipped, or failed."""

    text: str
    exported: list[Path] = field(default_factory=list)
    skipped_binary: list[Path] = field(default_factory=list)
    read_errors: list[ReadError] = field(default_factory=list)


def build_content_export(paths: Iterable[Path], service: ExportService | None = None) -> ContentExport:
    """Concatenate every non-binary file in ``paths`` into one export text."""
    active_service = service or ExportService()
    text_files, binary_files = partition_binary(paths)
    entries = collect_export_entries(text_files)
    return ContentExport(
        text=active_service.export_content(entries),
        exported=[entry.path for entry in entries if entry.error is None],
        skipped_binary=binary_files,
        read_errors=[entry.error for entry in entries if entry.error is not None],
    )


class ContentPager:
    """Page through the text files of a selection one file at a time.

    Keys: ``n``/``p`` switch files, RIGHT/PGDN/SPACE and LEFT/PGUP switch
    pages, ``q``/ESC closes. Moving past the last file closes the pager.
    Binary files are dropped up front and announced on a warning screen.
    """

    def __init__(
        self,
        paths: Iterable[Path],
        page_height: int,
        colorize: Callable[[str, Path], str] | None = None,
        theme: UITheme | None = None,
    ) -> None:
        self.text_files, self.binary_files = partition_binary(paths)
        self.page_height = max(1, page_height)
        self.colorize = colorize
        self.theme = theme or DEFAULT_THEME
        self.file_index = 0
        self.page_index = 0
        self.showing_warning = bool(self.binary_files)
        self.active = bool(self.text_files) or self.showing_warning
        self._pages: PagedText | None = None
        self._pages_for: int | None = None

    @property
    def current_file(self) -> Path | None:
        if not self.text_files:
            return None
        return self.text_files[self.file_index]

    def resize(self, page_height: int) -> None:
        page_height = max(1, page_height)
        if page_height == self.page_height:
            return
        self.page_height = page_height
        self._pages = None
        self._pages_for = None
        self.page_index = min(self.page_index, len(self.pages()) - 1) if self.text_files else 0

    def pages(self) -> PagedText:
        """Pages of the current file, loaded and cached on first access."""
        if self._pages is not None and self._pages_for == self.file_index:
            return self._pages
        path = self.current_file
        if path is None:
            self._pages = paginate("", self.page_height)
        else:
            entry = read_entry(path)
            if entry.error is not None:
                content = error_line(path, entry.error.reason)
            else:
                # Pages split on LF only.
                content = (entry.content or "").replace("\r\n", "\n").replace("\r", "\n")
                content = sanitize_terminal_text(content)
                if self.colorize is not None:
                    content = self.colorize(content, path)
            self._pages = paginate(content, self.page_height)
        self._pages_for = self.file_index
        return self._pages

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return whether the view changed."""
        if not self.active:
            return False
        if key in {"q", "ESC", "CTRL_C"}:
            self.active = False
            return True
        if self.showing_warning:
            self.showing_warning = False
            if not self.text_files:
                self.active = False
            return True
        if key == "n":
            return self._select_file(self.file_index + 1)
        if key == "p":
            return self._select_file(self.file_index - 1)
        if key in {"RIGHT", "PGDN", " "}:
            return self._select_page(self.page_index + 1)
        if key in {"LEFT", "PGUP"}:
            return self._select_page(self.page_index - 1)
        return False

    def _select_file(self, index: int) -> bool:
        if index >= len(self.text_files):
            self.active = False
            return True
        index = max(0, index)
        if index == self.file_index:
            return False
        self.file_index = index
        self.page_index = 0
        return True

    def _select_page(self, index: int) -> bool:
        index = max(0, min(index, len(self.pages()) - 1))
        if index == self.page_index:
            return False
        self.page_index = index
        return True

    def render(self, width: int) -> list[str]:
        theme = self.theme
        reset = theme.reset
        if self.showing_warning:
            lines = [f"{theme.warning}{line}{reset}" for line in binary_warning_lines(self.binary_files)]
            lines.append("")
            lines.append(f"{theme.hint}Press any key to continue, q to quit{reset}")
            return [clip_ansi_line(line, width) for line in lines]

        pages = self.pages()
        header = f"FILE: {self.current_file} ({self.file_index + 1}/{len(self.text_files)})"
        lines = [
            f"{theme.pager_header}{SEPARATOR}{reset}",
            f"{theme.pager_header}{header}{reset}",
            f"{theme.pager_header}{SEPARATOR}{reset}",
        ]
        lines.extend(line + reset if reset else line for line in pages[self.page_index])
        lines.append("")
        lines.append(f"{theme.hint}Page {self.page_index + 1}/{len(pages)}{reset}")
        lines.append(f"{theme.hint}{PAGER_NAVIGATION_HINT}{reset}")
        return [clip_ansi_line(line, width) for line in lines]
