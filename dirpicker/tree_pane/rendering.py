"""Tree-row formatting and scrolled-window rendering for the explorer view."""

from __future__ import annotations

from ..ansi import clip_ansi_line
from ..file_tree_model import Node, SelectionState
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import TreeRow

INDENT = "    "
CURSOR_MARKER = "› "
SELECTION_GLYPHS: dict[SelectionState, str] = {
    SelectionState.FULL: "[✓]",
    SelectionState.PARTIAL: "[▪]",
    SelectionState.NONE: "[ ]",
}
EXPANDED_GLYPH = "▾"
COLLAPSED_GLYPH = "▸"
MORE_ABOVE = "   ↑ ... (more entries) ..."
MORE_BELOW = "   ↓ ... (more entries) ..."


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply cursor styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def selection_glyph(state: SelectionState, theme: UITheme) -> str:
    glyph = SELECTION_GLYPHS[state]
    if state is SelectionState.FULL and theme.selection_full:
        return f"{theme.selection_full}{glyph}{theme.reset}"
    if state is SelectionState.PARTIAL and theme.selection_partial:
        return f"{theme.selection_partial}{glyph}{theme.reset}"
    return glyph


def file_count_label(node: Node) -> str:
    """Describe a directory's file count; partial scans read as a lower bound.

    Returns ``""`` when nothing is known yet.
    """
    count = node.descendant_file_count
    if count is None:
        return ""
    noun = "file" if count == 1 else "files"
    if node.counts_complete:
        return f"{count} {noun}"
    if count == 0:
        return ""
    return f"{count}+ {noun}"


def format_tree_row(row: TreeRow, is_cursor: bool = False, theme: UITheme | None = None) -> str:
    """Render one row: indent, cursor marker, selection glyph, expand glyph, name."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    marker = CURSOR_MARKER if is_cursor else "  "
    indent = INDENT * row.depth

    if row.is_placeholder or row.node is None:
        text = f"{marker}{indent}{active_theme.tree_placeholder}{row.display or ''}{reset}"
        return selected_with_ansi(text, active_theme) if is_cursor else text

    node = row.node
    check = selection_glyph(node.selection, active_theme)
    if node.is_dir:
        glyph = EXPANDED_GLYPH if (node.expanded or row.depth == 0) else COLLAPSED_GLYPH
        name = f"{active_theme.tree_dir}{node.name}/{reset}"
        counter = ""
        if not node.expanded and row.depth > 0:
            label = file_count_label(node)
            if label:
                counter = f" {active_theme.tree_count}({label}){reset}"
        text = f"{marker}{indent}{check} {active_theme.tree_marker}{glyph}{reset} {name}{counter}"
    else:
        text = f"{marker}{indent}{check}   {active_theme.tree_file}{node.name}{reset}"
    return selected_with_ansi(text, active_theme) if is_cursor else text


def window_start(cursor: int, height: int) -> int:
    """Start offset that vertically centers ``cursor`` when possible."""
    return max(0, cursor - max(1, height) // 2)


def window_bounds(total: int, cursor: int, height: int) -> tuple[int, int]:
    start = window_start(cursor, height)
    end = min(start + max(1, height), total)
    return start, end


def render_window(
    rows: list[TreeRow],
    cursor: int,
    height: int,
    width: int | None = None,
    theme: UITheme | None = None,
) -> list[str]:
    """Return display lines for the window of ``rows`` around ``cursor``.

    Emits up to ``height`` tree rows, preceded by a "more above" indicator
    when rows exist before the window and followed by a "more below"
    indicator when rows remain after it.
    """
    active_theme = theme or DEFAULT_THEME
    start, end = window_bounds(len(rows), cursor, height)
    lines: list[str] = []
    if start > 0:
        lines.append(f"{active_theme.scroll_hint}{MORE_ABOVE}{active_theme.reset}")
    for idx in range(start, end):
        line = format_tree_row(rows[idx], is_cursor=idx == cursor, theme=active_theme)
        if width is not None:
            line = clip_ansi_line(line, width) + active_theme.reset
        lines.append(line)
    if end < len(rows):
        lines.append(f"{active_theme.scroll_hint}{MORE_BELOW}{active_theme.reset}")
    return lines
