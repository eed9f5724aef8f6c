from __future__ import annotations

from dataclasses import dataclass, field

from ..content_pane import ContentPager


@dataclass
class AppState:
    mode: str = "tree"
    show_debug: bool = False
    dirty: bool = True
    quit_requested: bool = False
    theme_name: str = "default"
    status_message: str = ""
    status_is_error: bool = False
    status_message_until: float = 0.0
    prompt_label: str = ""
    prompt_text: str = ""
    message_title: str = ""
    message_lines: list[str] = field(default_factory=list)
    message_start: int = 0
    pager: ContentPager | None = None
