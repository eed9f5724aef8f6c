"""Path-keyed tree model with eager two-level prefetch and deferred loading."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..errors import RootResolutionError, ScanError
from .fs import list_directory_children
from .types import Node, SelectionState

logger = logging.getLogger(__name__)

# Directory names whose scan is postponed until the user expands them.
DEFAULT_IGNORE_DIRS: tuple[str, ...] = ("node_modules", ".git", "dist", "build", ".next", ".cache")


def resolve_root(root_path: Path | str) -> Path:
    """Return the absolute root directory or raise ``RootResolutionError``."""
    candidate = Path(root_path).expanduser()
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise RootResolutionError(candidate, "path does not exist") from exc
    if not resolved.is_dir():
        raise RootResolutionError(resolved, "not a directory")
    return resolved


class TreeModel:
    """Own every ``Node`` of one explored root and the path→node index.

    Nodes are only ever created by a scan and never removed. ``loaded`` and
    ``expanded`` are mutated here; ``selection`` belongs to ``SelectionEngine``.
    """

    def __init__(self, ignore_dirs: Iterable[str] = DEFAULT_IGNORE_DIRS) -> None:
        self.ignore_dirs: frozenset[str] = frozenset(ignore_dirs)
        self.root: Node | None = None
        self.scan_errors: list[ScanError] = []
        self._nodes: dict[Path, Node] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return Path(path) in self._nodes

    def is_ignored_name(self, name: str) -> bool:
        return name in self.ignore_dirs

    def initialize(self, root_path: Path | str) -> Node:
        """Create the root and prefetch two directory levels below it.

        Raises ``RootResolutionError`` when ``root_path`` is missing or is not
        a directory. Deferred directories are created but never scanned here.
        """
        resolved = resolve_root(root_path)

        self._nodes = {}
        self.scan_errors = []
        root = Node(path=resolved, name=resolved.name or str(resolved), is_dir=True, expanded=True)
        self._nodes[resolved] = root
        self.root = root

        for child in self.load_children(root):
            if child.is_dir and not child.deferred:
                self.load_children(child)
        return root

    def load_children(self, node: Node) -> list[Node]:
        """Scan ``node``'s immediate entries and attach them as children.

        Failures are logged and recorded in ``scan_errors``; the node is still
        marked loaded with whatever could be read.
        """
        if not node.is_dir:
            return []
        if node.loaded:
            return node.children

        entries, entry_errors, scan_error = list_directory_children(node.path)
        for error in entry_errors:
            self._report(error)
        if scan_error is not None:
            self._report(scan_error)

        # A FULL leaf directory stays FULL once it gains children.
        initial = SelectionState.FULL if node.selection is SelectionState.FULL else SelectionState.NONE
        children: list[Node] = []
        for entry in entries:
            if entry.path in self._nodes:
                continue
            child = Node(
                path=entry.path,
                name=entry.name,
                is_dir=entry.is_dir,
                parent_path=node.path,
                deferred=entry.is_dir and self.is_ignored_name(entry.name),
                selection=initial,
            )
            self._nodes[child.path] = child
            children.append(child)

        node.children = children
        node.loaded = True
        self._refresh_counts(node)
        return children

    def expand(self, path: Path | str) -> bool:
        """Toggle expansion of the directory at ``path``.

        Returns ``False`` for unknown paths and files. First expansion of an
        unloaded directory scans exactly one level, deferred ones included.
        """
        node = self.lookup(path)
        if node is None or not node.is_dir:
            return False
        if node.expanded:
            return self.collapse(node.path)
        node.expanded = True
        if not node.loaded:
            if node.deferred:
                logger.debug("loading deferred directory %s (single level)", node.path)
            self.load_children(node)
        return True

    def collapse(self, path: Path | str) -> bool:
        node = self.lookup(path)
        if node is None or not node.is_dir or node.is_root or not node.expanded:
            return False
        node.expanded = False
        return True

    def lookup(self, path: Path | str) -> Node | None:
        return self._nodes.get(Path(path))

    def parent_of(self, node: Node) -> Node | None:
        if node.parent_path is None:
            return None
        return self._nodes.get(node.parent_path)

    def iter_ancestors(self, node: Node) -> Iterator[Node]:
        """Yield parent, grandparent, ... up to and including the root."""
        parent = self.parent_of(node)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    def depth_of(self, node: Node) -> int:
        return sum(1 for _ancestor in self.iter_ancestors(node))

    def needs_deferred_load(self, path: Path | str) -> bool:
        """Return whether expanding ``path`` would trigger a deferred scan."""
        node = self.lookup(path)
        return bool(node is not None and node.deferred and not node.loaded and not node.expanded)

    def _report(self, error: ScanError) -> None:
        logger.warning("scan failed for %s: %s", error.path, error.reason)
        self.scan_errors.append(error)

    def _refresh_counts(self, node: Node) -> None:
        """Recompute cached descendant counters for ``node`` and its ancestors."""
        current: Node | None = node
        while current is not None:
            if current.loaded:
                files = 0
                total = 0
                complete = True
                for child in current.children:
                    total += 1
                    if child.is_dir:
                        files += child.descendant_file_count or 0
                        total += child.descendant_total_count or 0
                        complete = complete and child.counts_complete
                    else:
                        files += 1
                current.descendant_file_count = files
                current.descendant_total_count = total
                current.counts_complete = complete
            current = self.parent_of(current)


__all__ = [
    "DEFAULT_IGNORE_DIRS",
    "TreeModel",
    "resolve_root",
]
