"""Tree pane: visible-row flattening, cursor stability, and windowed rendering."""

from .rendering import file_count_label, format_tree_row, render_window, window_bounds, window_start
from .types import TreeRow
from .visible import TreeViewport, placeholder_row, rebuild_visible

__all__ = [
    "TreeRow",
    "TreeViewport",
    "placeholder_row",
    "rebuild_visible",
    "file_count_label",
    "format_tree_row",
    "render_window",
    "window_bounds",
    "window_start",
]
