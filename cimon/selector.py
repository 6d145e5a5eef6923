"""Wrapping cursor for list navigation."""

from __future__ import annotations


class Selector:
    """Cursor over a list of ``count`` items that wraps at both ends."""

    def __init__(self) -> None:
        self._index = 0
        self._count = 0

    def set_count(self, n: int) -> None:
        """Set the number of items, clamping the cursor into range."""
        self._count = n
        if n == 0:
            self._index = 0
        elif self._index >= n:
            self._index = n - 1

    def next(self) -> None:
        """Move down one item, wrapping to the top."""
        if self._count:
            self._index = (self._index + 1) % self._count

    def prev(self) -> None:
        """Move up one item, wrapping to the bottom."""
        if self._count:
            self._index = (self._index - 1) % self._count

    def index(self) -> int:
        """Current cursor position."""
        return self._index

    def count(self) -> int:
        """Number of items."""
        return self._count