"""Persistent JSON config helpers.

Holds the deferred-directory ignore-set, export filenames, and UI theme/style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..content_pane import DEFAULT_STYLE
from ..export import DEFAULT_CONTENT_FILENAME, DEFAULT_SELECTION_FILENAME
from ..file_tree_model import DEFAULT_IGNORE_DIRS

logger = logging.getLogger(__name__)

APP_NAME = "dirpicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class ExplorerConfig:
    """Startup settings injected into the tree model and session."""

    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS
    selection_filename: str = DEFAULT_SELECTION_FILENAME
    content_filename: str = DEFAULT_CONTENT_FILENAME
    theme: str | None = None
    style: str = DEFAULT_STYLE


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; failures are logged, not raised."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config %s: %s", CONFIG_PATH, exc)


def _load_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_ignore_dirs(data: dict[str, object]) -> tuple[str, ...]:
    """Return configured ignore names; non-list values fall back to defaults.

    Non-string and blank items are dropped. An explicit empty list disables
    deferral entirely.
    """
    value = data.get("ignore_dirs")
    if not isinstance(value, list):
        return DEFAULT_IGNORE_DIRS
    names: list[str] = []
    for item in value:
        if isinstance(item, str) and item.strip() and item.strip() not in names:
            names.append(item.strip())
    return tuple(names)


def load_explorer_config() -> ExplorerConfig:
    data = load_config()
    return ExplorerConfig(
        ignore_dirs=_load_ignore_dirs(data),
        selection_filename=_load_string(data, "selection_filename") or DEFAULT_SELECTION_FILENAME,
        content_filename=_load_string(data, "content_filename") or DEFAULT_CONTENT_FILENAME,
        theme=_load_string(data, "theme"),
        style=_load_string(data, "style") or DEFAULT_STYLE,
    )


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
