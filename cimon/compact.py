"""Compact list of repos with inline details of failures and active runs."""

from __future__ import annotations

from datetime import datetime, timedelta

from cimon.pipeline import format_duration, format_time_ago
from cimon.progress import render_mini_bar
from cimon.repostate import ActiveRunInfo, InlineStatus, PRSummary, RepoState, RepoStatus
from cimon.selector import Selector
from cimon.theme import (
    COLOR_AMBER,
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_MUTED,
    COLOR_RED,
    COLOR_SELECTION,
    Style,
    pad_right,
)

_MUTED = Style(foreground=COLOR_MUTED)


class CompactView:
    """One line per repo, expanded inline for failures and active runs."""

    def __init__(self, repos: list[RepoState] | None = None) -> None:
        self.repos: list[RepoState] = list(repos) if repos else []
        self.cursor = Selector()
        self.cursor.set_count(len(self.repos))

    def update_repos(self, repos: list[RepoState]) -> None:
        """Replace the repos, keeping the cursor where it can stay."""
        self.repos = list(repos)
        self.cursor.set_count(len(self.repos))

    def selected_repo(self) -> RepoState | None:
        """The repo under the cursor, or None when there are none."""
        if not self.repos:
            return None
        return self.repos[self.cursor.index()]

    def acknowledge_selected(self) -> None:
        """Clear the NEW flag of the selected repo."""
        repo = self.selected_repo()
        if repo is not None:
            repo.new_flag = False
            repo.user_acknowledged = True

    def render(self, width: int, height: int) -> str:
        """Draw the repo list."""
        if not self.repos:
            return _MUTED.render("No repos configured. Run `cimon init`.")

        lines: list[str] = []
        for i, repo in enumerate(self.repos):
            inline = repo.inline
            lines.append(_repo_line(repo, i == self.cursor.index(), width))
            if inline.worst == RepoStatus.FAILED and inline.failed_workflow:
                lines.append(_failed_inline(inline))
            if inline.agent_fail_count > 0 and inline.worst != RepoStatus.FAILED:
                lines.append(_agent_fail_inline(inline.agent_fail_count))
            lines.extend(_active_inline(info) for info in inline.active_runs)

        if all(repo.inline.worst == RepoStatus.PASSING for repo in self.repos):
            lines.extend([""] * max(height - 3 - len(lines), 0))
            lines.append(Style(foreground=COLOR_GREEN).render("all passing"))

        return "\n".join(lines)


def _repo_line(repo: RepoState, selected: bool, width: int) -> str:
    dot = _status_dot(repo.inline.worst)
    icon = _status_icon(repo.inline)
    pr_text = _pr_summary(repo.pr_summary)
    new_flag = Style(foreground=COLOR_RED, bold=True).render(" NEW") if repo.new_flag else ""
    line = f"{dot} {repo.repo_name}  {icon}  {pr_text}{new_flag}"
    if selected:
        line = Style(background=COLOR_SELECTION).render(pad_right(line, width))
    return line


def _pr_summary(summary: PRSummary) -> str:
    if summary.total == 0:
        return _MUTED.render("—")
    noun = "PR" if summary.total == 1 else "PRs"
    text = f"{summary.total} {noun}"
    if summary.ready > 0:
        text += _MUTED.render(f" ({summary.ready} ready)")
    elif summary.ci_pending:
        text += _MUTED.render(" (CI ⧗)")
    return text


def _failed_inline(status: InlineStatus) -> str:
    cross = Style(foreground=COLOR_RED).render("✗")
    jobs = "  ".join(f"{job} {cross}" for job in status.failed_jobs)
    ago = format_time_ago(status.failed_at)
    return _MUTED.render(f"  {status.failed_workflow}: ") + jobs + _MUTED.render("  " + ago)


def _agent_fail_inline(count: int) -> str:
    noun = "agent workflows" if count > 1 else "agent workflow"
    return _MUTED.render("  ") + Style(foreground=COLOR_AMBER).render(f"{count} {noun} failing")


def _active_inline(info: ActiveRunInfo) -> str:
    bar = render_mini_bar(info.completed_jobs, info.total_jobs, 10)
    elapsed = format_duration(info.elapsed)
    progress = f"{info.completed_jobs}/{info.total_jobs}"
    return (
        _MUTED.render(f"  {info.name} ")
        + Style(foreground=COLOR_GREEN).render(bar)
        + _MUTED.render(f" {progress}  {elapsed}")
    )


_DOT_COLORS = {
    RepoStatus.FAILED: COLOR_RED,
    RepoStatus.AGENT_FAILED: COLOR_AMBER,
    RepoStatus.ACTIVE: COLOR_BLUE,
    RepoStatus.PENDING: COLOR_AMBER,
}


def _status_dot(worst: RepoStatus) -> str:
    return Style(foreground=_DOT_COLORS.get(worst, COLOR_GREEN)).render("■")


def _status_icon(status: InlineStatus) -> str:
    worst = status.worst
    if worst == RepoStatus.FAILED:
        return Style(foreground=COLOR_RED).render("✗")
    if worst == RepoStatus.AGENT_FAILED:
        return Style(foreground=COLOR_AMBER).render("⚠")
    if worst == RepoStatus.ACTIVE:
        icon = Style(foreground=COLOR_BLUE).render("●")
        if status.releasing:
            icon += " " + _MUTED.render("releasing")
        return icon
    if worst == RepoStatus.PENDING:
        return Style(foreground=COLOR_AMBER).render("⧗")
    return Style(foreground=COLOR_GREEN).render("✓")


def clear_expired_new_flags(repos: list[RepoState], max_age: timedelta) -> None:
    """Clear NEW flags whose notable change is older than ``max_age``."""
    for repo in repos:
        changed = repo.last_notable_change
        if repo.new_flag and changed is not None:
            if datetime.now(changed.tzinfo) - changed > max_age:
                repo.new_flag = False