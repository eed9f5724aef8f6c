"""Filesystem scanning helpers for directory-child listing and ordering."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ..errors import ScanError, describe_os_error


@dataclass(frozen=True)
class DirectoryChild:
    """One directory entry observed during a scan."""

    name: str
    path: Path
    is_dir: bool


def child_sort_key(child: DirectoryChild) -> tuple[bool, str]:
    """Directories first, then case-sensitive name order."""
    return (not child.is_dir, child.name)


def list_directory_children(
    directory: Path,
) -> tuple[list[DirectoryChild], list[ScanError], ScanError | None]:
    """List immediate children of ``directory`` in display order.

    Returns ``(children, entry_errors, scan_error)``. ``entry_errors`` holds
    one ``ScanError`` per entry that could not be classified (dangling
    symlink, entry removed mid-scan); such entries are skipped. ``scan_error``
    is set when the directory itself cannot be listed; whatever was read before
    the failure is still returned.
    """
    children: list[DirectoryChild] = []
    entry_errors: list[ScanError] = []
    scan_error: ScanError | None = None

    try:
        with os.scandir(directory) as entries:
            for child in entries:
                child_path = Path(child.path)
                try:
                    # Follow symlinks so linked directories stay expandable.
                    child_stat = child.stat()
                except OSError as exc:
                    entry_errors.append(ScanError(child_path, describe_os_error(exc)))
                    continue
                children.append(
                    DirectoryChild(
                        name=child.name,
                        path=child_path,
                        is_dir=stat.S_ISDIR(child_stat.st_mode),
                    )
                )
    except OSError as exc:
        scan_error = ScanError(directory, describe_os_error(exc))

    children.sort(key=child_sort_key)
    return children, entry_errors, scan_error


__all__ = [
    "DirectoryChild",
    "child_sort_key",
    "list_directory_children",
]
