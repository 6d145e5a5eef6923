"""Drill-down view of a single pull request and its changed files."""

from __future__ import annotations

from datetime import datetime

from cimon.detail import format_age
from cimon.diffparse import DiffFile
from cimon.models import PullRequest
from cimon.selector import Selector
from cimon.theme import (
    COLOR_ACCENT,
    COLOR_AMBER,
    COLOR_GREEN,
    COLOR_MUTED,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_SELECTION,
    Style,
    pad_right,
)

_MUTED = Style(foreground=COLOR_MUTED)


class PRDetailView:
    """Header, CI and review status, and the list of changed files."""

    def __init__(self, pr: PullRequest, repo_name: str) -> None:
        self.pr = pr
        self.repo_name = repo_name
        self.files: list[DiffFile] = []
        self.raw_diff = ""
        self.cursor = Selector()

    def set_files(self, files: list[DiffFile]) -> None:
        """Set the changed files and resize the cursor."""
        self.files = list(files)
        self.cursor.set_count(len(self.files))

    def selected_file(self) -> DiffFile | None:
        """The file under the cursor, or None before the diff is loaded."""
        if not self.files:
            return None
        return self.files[self.cursor.index()]

    def render(self, width: int, height: int) -> str:
        """Draw the pull request view."""
        pr = self.pr
        number = Style(foreground=COLOR_ACCENT, bold=True).render(f"#{pr.number}")
        lines = [f"  {number}  {pr.title}"]

        hours = 0.0
        if pr.created_at is not None:
            hours = (datetime.now(pr.created_at.tzinfo) - pr.created_at).total_seconds() / 3600
        size = f"+{pr.additions} -{pr.deletions} ({pr.size()} lines)"
        meta = f"  {pr.author} · {format_age(hours)} · {size}"
        if pr.is_agent:
            meta += "   " + Style(foreground=COLOR_PURPLE).render("agent")
        if pr.draft:
            meta += "   " + _MUTED.render("draft")
        lines.append(_MUTED.render(meta))

        lines.append(f"  {_ci_status(pr)}  {_review_status(pr)}")
        lines.append("")

        if not self.files:
            lines.append(_MUTED.render("  Loading diff..."))
        else:
            lines.append(_MUTED.render(f"  Files Changed ({len(self.files)})"))
            for i, diff_file in enumerate(self.files):
                lines.append(_file_line(diff_file, self.cursor.index() == i, width))

        return "\n".join(lines)


def _file_line(diff_file: DiffFile, selected: bool, width: int) -> str:
    adds = Style(foreground=COLOR_GREEN).render(f"+{diff_file.additions}")
    dels = Style(foreground=COLOR_RED).render(f"-{diff_file.deletions}")
    line = f"  {diff_file.path}  {adds} {dels}"
    if selected:
        line = Style(background=COLOR_SELECTION).render(pad_right(line, width))
    return line


def _ci_status(pr: PullRequest) -> str:
    if pr.ci_status == "success":
        return Style(foreground=COLOR_GREEN).render("CI✓")
    if pr.ci_status == "failure":
        return Style(foreground=COLOR_RED).render("CI✗")
    return Style(foreground=COLOR_AMBER).render("CI⧗")


def _review_status(pr: PullRequest) -> str:
    if pr.review_state == "approved":
        return _MUTED.render("review: ") + Style(foreground=COLOR_GREEN).render("approved ✔")
    if pr.review_state == "changes_requested":
        return _MUTED.render("review: ") + Style(foreground=COLOR_RED).render("changes requested")
    if pr.review_state == "pending":
        return _MUTED.render("review: pending")
    return _MUTED.render("review: none")