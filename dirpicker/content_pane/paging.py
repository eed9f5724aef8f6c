"""Lazy, restartable pagination of text content by line."""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload


class PagedText(Sequence[list[str]]):
    """Read-only sequence of pages; page ``n`` is sliced on demand.

    Holds no cursor: callers keep the current page index themselves.
    """

    def __init__(self, content: str, page_height: int) -> None:
        self.lines = content.split("\n")
        self.page_height = max(1, page_height)

    def __len__(self) -> int:
        return max(1, -(-len(self.lines) // self.page_height))

    @overload
    def __getitem__(self, index: int) -> list[str]: ...

    @overload
    def __getitem__(self, index: slice) -> list[list[str]]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        total = len(self)
        if index < 0:
            index += total
        if not 0 <= index < total:
            raise IndexError("page index out of range")
        start = index * self.page_height
        return self.lines[start : start + self.page_height]


def paginate(content: str, page_height: int) -> PagedText:
    return PagedText(content, page_height)
