"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tree rows, chrome, pager). Syntax
highlighting style for file content remains a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    title: str
    hint: str
    tree_dir: str
    tree_file: str
    tree_marker: str
    tree_count: str
    tree_placeholder: str
    selection_full: str
    selection_partial: str
    scroll_hint: str
    status_ok: str
    status_error: str
    warning: str
    pager_header: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;36m",
    hint="\033[33m",
    tree_dir="\033[36m",
    tree_file="\033[38;5;252m",
    tree_marker="\033[38;5;44m",
    tree_count="\033[2m",
    tree_placeholder="\033[2;33m",
    selection_full="\033[1;37m",
    selection_partial="\033[2;37m",
    scroll_hint="\033[33m",
    status_ok="\033[32m",
    status_error="\033[31m",
    warning="\033[33m",
    pager_header="\033[1;36m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    hint="\033[2;38;5;110m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    tree_marker="\033[38;5;39m",
    tree_count="\033[38;5;73m",
    tree_placeholder="\033[2;38;5;110m",
    selection_full="\033[38;5;84m",
    selection_partial="\033[38;5;215m",
    scroll_hint="\033[2;38;5;110m",
    status_ok="\033[38;5;84m",
    status_error="\033[38;5;203m",
    warning="\033[38;5;215m",
    pager_header="\033[1;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    title="",
    hint="",
    tree_dir="",
    tree_file="",
    tree_marker="",
    tree_count="",
    tree_placeholder="",
    selection_full="",
    selection_partial="",
    scroll_hint="",
    status_ok="",
    status_error="",
    warning="",
    pager_header="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
