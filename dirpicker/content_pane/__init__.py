"""Content viewer for selected files: binary detection, paging, and export.

Implementation lives in small focused modules; this package file keeps the
public imports used by the runtime and tests.
"""

from __future__ import annotations

from .binary import BINARY_SAMPLE_BYTES, BINARY_SIGNATURES, is_binary, looks_binary, partition_binary
from .paging import PagedText, paginate
from .syntax import DEFAULT_STYLE, colorize_source, read_text, sanitize_terminal_text
from .viewer import (
    PAGER_CHROME_ROWS,
    ContentExport,
    ContentPager,
    binary_warning_lines,
    build_content_export,
    collect_export_entries,
    read_entry,
)

__all__ = [
    "BINARY_SAMPLE_BYTES",
    "BINARY_SIGNATURES",
    "is_binary",
    "looks_binary",
    "partition_binary",
    "PagedText",
    "paginate",
    "DEFAULT_STYLE",
    "colorize_source",
    "read_text",
    "sanitize_terminal_text",
    "PAGER_CHROME_ROWS",
    "ContentExport",
    "ContentPager",
    "binary_warning_lines",
    "build_content_export",
    "collect_export_entries",
    "read_entry",
]
