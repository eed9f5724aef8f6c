"""Domain datatypes for the lazily-loaded directory tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SelectionState(Enum):
    """Tri-state selection value; ``PARTIAL`` only ever arises from propagation."""

    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


@dataclass(eq=False)
class Node:
    """One filesystem entry in the in-memory tree.

    ``children`` is owned by this node. ``parent_path`` is the parent's key in
    the owning ``TreeModel`` map and is only used to walk upward.
    Descendant counters cover the loaded subtree only; ``counts_complete``
    turns True once every directory below this one has been loaded.
    """

    path: Path
    name: str
    is_dir: bool
    parent_path: Path | None = None
    children: list["Node"] = field(default_factory=list)
    expanded: bool = False
    loaded: bool = False
    deferred: bool = False
    selection: SelectionState = SelectionState.NONE
    descendant_file_count: int | None = None
    descendant_total_count: int | None = None
    counts_complete: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_path is None

    @property
    def is_selected(self) -> bool:
        return self.selection is SelectionState.FULL

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"Node({kind} {str(self.path)!r}, {self.selection.value})"


__all__ = [
    "SelectionState",
    "Node",
]
