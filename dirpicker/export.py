"""Selection-list and content-export text, plus the file writer that persists them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import ReadError, WriteError, describe_os_error

logger = logging.getLogger(__name__)

DEFAULT_SELECTION_FILENAME = "selected_directories.txt"
DEFAULT_CONTENT_FILENAME = "file_contents.txt"
SEPARATOR = "=" * 80


@dataclass(frozen=True)
class ContentEntry:
    """One file's content for export, or the error that prevented reading it."""

    path: Path
    content: str | None = None
    error: ReadError | None = None


def error_line(path: Path, reason: str) -> str:
    return f"ERROR reading {path}: {reason}"


class ExportService:
    """Build export text and hand it to disk."""

    @staticmethod
    def export_selection(paths: Iterable[Path]) -> str:
        """Newline-joined absolute paths in the order given (tree pre-order)."""
        return "\n".join(str(path) for path in paths)

    @staticmethod
    def export_content(entries: Iterable[ContentEntry]) -> str:
        """Concatenate entries, each framed by a ``FILE:`` header and a blank line."""
        parts: list[str] = []
        for entry in entries:
            if entry.error is not None:
                body = error_line(entry.path, entry.error.reason)
            else:
                body = entry.content or ""
            if not body.endswith("\n"):
                body += "\n"
            parts.append(f"{SEPARATOR}\nFILE: {entry.path}\n{SEPARATOR}\n{body}\n")
        return "".join(parts)

    @staticmethod
    def write_export(target: Path | str, text: str) -> Path:
        """Write ``text`` as UTF-8, newline-terminated; raise ``WriteError`` on failure."""
        path = Path(target)
        if text and not text.endswith("\n"):
            text += "\n"
        try:
            path.write_text(text, encoding="utf-8", newline="")
        except OSError as exc:
            logger.warning("could not write %s: %s", path, describe_os_error(exc))
            raise WriteError(path, describe_os_error(exc)) from exc
        logger.info("wrote %d bytes to %s", len(text.encode("utf-8")), path)
        return path

    def save_selection(self, paths: Iterable[Path], filename: Path | str = DEFAULT_SELECTION_FILENAME) -> Path:
        return self.write_export(filename, self.export_selection(paths))

    def save_content(self, text: str, filename: Path | str = DEFAULT_CONTENT_FILENAME) -> Path:
        return self.write_export(filename, text)


__all__ = [
    "DEFAULT_SELECTION_FILENAME",
    "DEFAULT_CONTENT_FILENAME",
    "SEPARATOR",
    "ContentEntry",
    "ExportService",
    "error_line",
]
