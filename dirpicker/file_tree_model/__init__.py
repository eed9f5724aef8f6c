"""Domain model for the lazily-populated directory tree.

This package contains non-UI tree primitives:
- node and tri-state selection datatypes
- filesystem child listing with directory-first ordering
- the path-keyed ``TreeModel`` with deferred directory loading
"""

from __future__ import annotations

from .fs import DirectoryChild, child_sort_key, list_directory_children
from .model import DEFAULT_IGNORE_DIRS, TreeModel, resolve_root
from .types import Node, SelectionState

__all__ = [
    "Node",
    "SelectionState",
    "DirectoryChild",
    "child_sort_key",
    "list_directory_children",
    "DEFAULT_IGNORE_DIRS",
    "TreeModel",
    "resolve_root",
]
