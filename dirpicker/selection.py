"""Tri-state selection with full-subtree stamping and upward propagation.

Toggling stamps the new state over the loaded subtree (explicit work stack),
then re-derives ancestors from their direct children until one is unchanged.
"""

from __future__ import annotations

from pathlib import Path

from .file_tree_model import Node, SelectionState, TreeModel


def derive_state(directory: Node) -> SelectionState:
    """Return the state a non-empty directory must have given its children."""
    all_full = True
    all_none = True
    for child in directory.children:
        if child.selection is not SelectionState.FULL:
            all_full = False
        if child.selection is not SelectionState.NONE:
            all_none = False
        if not all_full and not all_none:
            return SelectionState.PARTIAL
    if all_full:
        return SelectionState.FULL
    return SelectionState.NONE


class SelectionEngine:
    """Maintain ``Node.selection`` across one ``TreeModel``."""

    def __init__(self, model: TreeModel) -> None:
        self.model = model

    def toggle(self, node: Node) -> SelectionState:
        """Flip ``node`` between FULL and NONE and propagate.

        PARTIAL counts as "not yet FULL", so a partially selected directory
        becomes fully selected. Empty directories toggle as leaves.
        """
        target = SelectionState.NONE if node.selection is SelectionState.FULL else SelectionState.FULL
        self._stamp(node, target)
        self._propagate_up(node)
        return target

    def toggle_path(self, path: Path | str) -> SelectionState | None:
        node = self.model.lookup(path)
        if node is None:
            return None
        return self.toggle(node)

    def _stamp(self, node: Node, state: SelectionState) -> None:
        stack = [node]
        while stack:
            current = stack.pop()
            current.selection = state
            if current.is_dir:
                stack.extend(current.children)

    def _propagate_up(self, node: Node) -> None:
        for ancestor in self.model.iter_ancestors(node):
            if not ancestor.children:
                break
            derived = derive_state(ancestor)
            if derived is ancestor.selection:
                break
            ancestor.selection = derived

    def _iter_selected(self) -> list[Node]:
        """Pre-order list of every FULL node."""
        root = self.model.root
        if root is None:
            return []
        out: list[Node] = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.selection is SelectionState.FULL:
                out.append(node)
            if node.is_dir and node.selection is not SelectionState.NONE:
                stack.extend(reversed(node.children))
        return out

    def selected_paths(self) -> list[Path]:
        return [node.path for node in self._iter_selected()]

    def selected_files(self) -> list[Path]:
        return [node.path for node in self._iter_selected() if not node.is_dir]

    def selected_count(self) -> int:
        return sum(1 for node in self._iter_selected() if not node.is_dir)


__all__ = [
    "derive_state",
    "SelectionEngine",
]
