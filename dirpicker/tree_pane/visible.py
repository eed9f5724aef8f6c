"""Visible-row flattening and cursor bookkeeping for the tree viewport."""

from __future__ import annotations

from ..file_tree_model import Node
from .types import TreeRow

PLACEHOLDER_NAME = "..."


def placeholder_row(directory: Node, depth: int) -> TreeRow:
    """Build the "not yet scanned" row shown under an unscanned deferred directory."""
    return TreeRow(
        path=directory.path / PLACEHOLDER_NAME,
        depth=depth,
        node=None,
        kind="placeholder",
        display=f"... (large directory, {directory.name})",
    )


def rebuild_visible(root: Node) -> list[TreeRow]:
    """Flatten ``root`` into pre-order rows, descending only into expanded nodes.

    The root is always present and always treated as expanded.
    """
    rows: list[TreeRow] = []
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        rows.append(TreeRow(path=node.path, depth=depth, node=node))
        if not node.is_dir:
            continue
        if node.deferred and not node.loaded and not node.expanded:
            rows.append(placeholder_row(node, depth + 1))
            continue
        if node is not root and not node.expanded:
            continue
        for child in reversed(node.children):
            stack.append((child, depth + 1))
    return rows


class TreeViewport:
    """Hold the visible rows and a cursor index that survives rebuilds."""

    def __init__(self) -> None:
        self.rows: list[TreeRow] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.rows)

    def current(self) -> TreeRow | None:
        if not self.rows:
            return None
        return self.rows[self.cursor]

    def rebuild(self, root: Node) -> None:
        """Recompute rows and relocate the cursor to the same row when possible.

        When the row under the cursor disappeared, the cursor clamps to
        ``min(old_index, len - 1)``.
        """
        previous = self.current()
        old_index = self.cursor
        self.rows = rebuild_visible(root)
        if previous is not None:
            wanted = previous.identity()
            for idx, row in enumerate(self.rows):
                if row.identity() == wanted:
                    self.cursor = idx
                    return
        self.cursor = max(0, min(old_index, len(self.rows) - 1))

    def move(self, delta: int) -> bool:
        return self.move_to(self.cursor + delta)

    def page(self, direction: int, height: int) -> bool:
        """Move by one window height, keeping one row of overlap."""
        return self.move(direction * max(1, height - 1))

    def move_to(self, index: int) -> bool:
        """Clamp and apply a new cursor index; return whether it changed."""
        if not self.rows:
            return False
        target = max(0, min(index, len(self.rows) - 1))
        if target == self.cursor:
            return False
        self.cursor = target
        return True

    def index_of(self, node: Node) -> int | None:
        for idx, row in enumerate(self.rows):
            if row.node is node:
                return idx
        return None
