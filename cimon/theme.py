"""Colours, status glyphs and a small terminal styling helper."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum


class ViewMode(Enum):
    """Which view of the interface is active."""

    COMPACT = "compact"
    DETAIL = "detail"
    RUN_DETAIL = "run-detail"
    PR_DETAIL = "pr-detail"

    def __str__(self) -> str:
        return self.value


COLOR_BG = "#1a1b26"
COLOR_FG = "#c0caf5"
COLOR_MUTED = "#565f89"
COLOR_ACCENT = "#e0af68"
COLOR_GREEN = "#9ece6a"
COLOR_RED = "#f7768e"
COLOR_AMBER = "#ff9e64"
COLOR_BLUE = "#7aa2f7"
COLOR_PURPLE = "#bb9af7"
COLOR_BORDER = "#3b4261"
COLOR_SURFACE = "#24283b"
COLOR_SELECTION = "#364a82"

REPO_COLORS = (COLOR_BLUE, COLOR_PURPLE, COLOR_GREEN, COLOR_AMBER, COLOR_ACCENT)

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_RESET = "\x1b[0m"


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def visible_width(text: str) -> int:
    """Display width of the widest line of ``text``, ignoring colour codes."""
    plain = _ANSI_RE.sub("", text)
    return max(sum(_char_width(ch) for ch in line) for line in plain.split("\n"))


def pad_right(text: str, width: int) -> str:
    """Pad ``text`` with spaces up to ``width`` visible columns."""
    visible = visible_width(text)
    if visible >= width:
        return text
    return text + " " * (width - visible)


def _rgb(hex_color: str) -> tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_code(hex_color: str) -> str:
    r, g, b = _rgb(hex_color)
    return f"38;2;{r};{g};{b}"


def _bg_code(hex_color: str) -> str:
    r, g, b = _rgb(hex_color)
    return f"48;2;{r};{g};{b}"


@dataclass(frozen=True)
class Style:
    """Terminal text style: colours, weight, width, padding and a rounded border.

    ``padding`` is ``(vertical, horizontal)``; ``width`` includes the padding.
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    width: int | None = None
    padding: tuple[int, int] = (0, 0)
    border: bool = False
    border_foreground: str | None = None

    def _sgr(self) -> str:
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground:
            codes.append(_fg_code(self.foreground))
        if self.background:
            codes.append(_bg_code(self.background))
        return f"\x1b[{';'.join(codes)}m" if codes else ""

    def render(self, text: str) -> str:
        """Return ``text`` laid out and coloured according to this style."""
        pad_v, pad_h = self.padding
        lines = text.split("\n")
        if self.width is not None:
            block = max(self.width - 2 * pad_h, 0)
        else:
            block = max(visible_width(line) for line in lines)
        lines = [pad_right(line, block) for line in lines]
        full = max(visible_width(line) for line in lines) + 2 * pad_h
        lines = [" " * pad_h + line + " " * pad_h for line in lines]
        blank = " " * full
        lines = [blank] * pad_v + lines + [blank] * pad_v

        sgr = self._sgr()
        if sgr:
            lines = [sgr + line + _RESET for line in lines]

        if self.border:
            edge = (
                f"\x1b[{_fg_code(self.border_foreground)}m"
                if self.border_foreground
                else ""
            )
            end = _RESET if edge else ""
            inner = max(visible_width(line) for line in lines)
            top = f"{edge}╭{'─' * inner}╮{end}"
            bottom = f"{edge}╰{'─' * inner}╯{end}"
            side = f"{edge}│{end}"
            lines = [top] + [side + pad_right(line, inner) + side for line in lines] + [bottom]

        return "\n".join(lines)


def repo_color(index: int) -> str:
    """Colour assigned to the repo at ``index``, cycling through the palette."""
    return REPO_COLORS[index % len(REPO_COLORS)]


def status_color(conclusion: str) -> str:
    """Colour for a run or job conclusion."""
    return {
        "success": COLOR_GREEN,
        "failure": COLOR_RED,
        "cancelled": COLOR_MUTED,
    }.get(conclusion, COLOR_ACCENT)


def status_dot(conclusion: str) -> str:
    """Glyph for a run or job conclusion."""
    return {
        "success": "●",
        "failure": "✗",
        "cancelled": "○",
        "": "◌",
    }.get(conclusion, "?")


def pulsing_dot(conclusion: str, tick_even: bool) -> str:
    """Alternating glyph for unfinished runs; the normal glyph otherwise."""
    if conclusion == "":
        return "◌" if tick_even else "●"
    return status_dot(conclusion)