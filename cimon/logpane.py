"""Scrollable log and diff pane with line highlighting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from cimon.theme import (
    COLOR_ACCENT,
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_MUTED,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_SURFACE,
    Style,
)


class LogPaneMode(IntEnum):
    """How much of the screen the pane takes."""

    HIDDEN = 0
    HALF = 1
    FULL = 2


class LineType(Enum):
    """Kind of a line in a unified diff."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    HUNK = "hunk"
    HEADER = "header"


def classify_line(line: str) -> LineType:
    """Classify a diff line by its prefix."""
    if line.startswith(("+++", "---")):
        return LineType.HEADER
    if line.startswith("+"):
        return LineType.ADDED
    if line.startswith("-"):
        return LineType.REMOVED
    if line.startswith("@@"):
        return LineType.HUNK
    if line.startswith("diff "):
        return LineType.HEADER
    return LineType.CONTEXT


_LINE_COLORS = {
    LineType.ADDED: COLOR_GREEN,
    LineType.REMOVED: COLOR_RED,
    LineType.HUNK: COLOR_BLUE,
    LineType.HEADER: COLOR_PURPLE,
    LineType.CONTEXT: COLOR_MUTED,
}


@dataclass
class LogPane:
    """A pane showing log or diff text; live panes follow the end of the text."""

    mode: LogPaneMode = LogPaneMode.HIDDEN
    content: str = ""
    title: str = ""
    is_live: bool = False
    scroll_pos: int = 0

    def cycle_mode(self) -> None:
        """Switch hidden → half → full → hidden."""
        self.mode = LogPaneMode((self.mode + 1) % len(LogPaneMode))

    def set_content(self, title: str, content: str, is_live: bool) -> None:
        """Replace the text and scroll back to the top."""
        self.title = title
        self.content = content
        self.is_live = is_live
        self.scroll_pos = 0

    def clear(self) -> None:
        """Remove the text and title."""
        self.content = ""
        self.title = ""
        self.is_live = False

    def render(self, width: int, height: int) -> str:
        """Render the header and the visible window of lines."""
        if self.mode == LogPaneMode.HIDDEN or height <= 0:
            return ""

        pane_height = height if self.mode == LogPaneMode.FULL else height // 2
        pane_height = max(pane_height, 3)

        header = Style(
            background=COLOR_SURFACE,
            foreground=COLOR_ACCENT,
            width=width,
            padding=(0, 1),
        ).render(self._header_text())

        lines = self.content.split("\n")
        content_height = pane_height - 1

        start = len(lines) - content_height if self.is_live else self.scroll_pos
        start = max(start, 0)
        end = min(start + content_height, len(lines))

        body = "\n".join(_highlight(line) for line in lines[start:end])
        return header + "\n" + body + "\n" * (content_height - (end - start))

    def _header_text(self) -> str:
        title = self.title or "Log"
        if self.is_live:
            title += "  LIVE ●"
        return title


def _highlight(line: str) -> str:
    return Style(foreground=_LINE_COLORS[classify_line(line)]).render(line)