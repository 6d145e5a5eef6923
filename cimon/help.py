"""Keybinding help overlay."""

from __future__ import annotations

from dataclasses import dataclass

from cimon.theme import COLOR_ACCENT, COLOR_BLUE, COLOR_BORDER, COLOR_FG, Style

_COMMON = (("?", "Toggle help"), ("q", "Quit"))

_BINDINGS: dict[str, tuple[tuple[str, str], ...]] = {
    "compact": (
        ("w/s", "Navigate up/down"),
        ("d/enter", "Drill into repo"),
        ("1", "Batch merge ready agent PRs"),
        *_COMMON,
    ),
    "detail": (
        ("w/s", "Navigate up/down"),
        ("d/enter", "Drill into run/PR"),
        ("a/esc", "Back to repos"),
        ("1", "Rerun (run) / Approve (PR)"),
        ("2", "View diff / logs"),
        ("3", "Dismiss PR"),
        ("e", "Toggle log pane"),
        ("r", "Open on GitHub"),
        *_COMMON,
    ),
    "run-detail": (
        ("w/s", "Navigate jobs"),
        ("d", "Expand/collapse job steps"),
        ("a/esc", "Back to repo"),
        ("1", "Rerun workflow"),
        ("2", "Rerun failed jobs"),
        ("e", "Toggle log pane"),
        ("r", "Open on GitHub"),
        *_COMMON,
    ),
    "pr-detail": (
        ("w/s", "Navigate files"),
        ("d", "Jump to file diff"),
        ("a/esc", "Back to repo"),
        ("1", "Approve PR"),
        ("2", "Merge PR"),
        ("3", "Dismiss PR"),
        ("e", "Toggle log pane"),
        ("r", "Open on GitHub"),
        *_COMMON,
    ),
}


@dataclass
class HelpOverlay:
    """Boxed list of the keybindings of the current view."""

    visible: bool = False

    def toggle(self) -> None:
        """Show or hide the overlay."""
        self.visible = not self.visible

    def render(self, view_name: str, width: int, height: int) -> str:
        """The help box for ``view_name``, or an empty string when hidden."""
        if not self.visible:
            return ""
        bindings = _BINDINGS.get(view_name, _COMMON)

        key_style = Style(foreground=COLOR_BLUE, width=12)
        desc_style = Style(foreground=COLOR_FG)
        parts = [
            Style(foreground=COLOR_ACCENT, bold=True).render("Keybindings — " + view_name),
            "\n\n",
        ]
        for key, desc in bindings:
            parts.append("  " + key_style.render(key) + desc_style.render(desc) + "\n")

        box = Style(border=True, border_foreground=COLOR_BORDER, padding=(1, 2))
        return box.render("".join(parts))