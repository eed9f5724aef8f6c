"""Row datatypes used across tree-pane modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..file_tree_model import Node


@dataclass(frozen=True)
class TreeRow:
    """One row of the visible sequence: a tree node or a display-only placeholder."""

    path: Path
    depth: int
    node: Node | None = None
    kind: str = "node"
    display: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.kind == "placeholder"

    @property
    def owner_path(self) -> Path:
        """Path of the node this row acts on (placeholders act on their directory)."""
        if self.is_placeholder:
            return self.path.parent
        return self.path

    def identity(self) -> tuple[Path, str]:
        return (self.path, self.kind)
