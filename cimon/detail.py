"""Per-repo drill-in view listing the latest runs and open pull requests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace

from cimon.models import Job, ReviewItem, WorkflowRun
from cimon.pipeline import format_duration, format_time_ago
from cimon.repostate import RepoState
from cimon.selector import Selector
from cimon.theme import (
    COLOR_AMBER,
    COLOR_BLUE,
    COLOR_FG,
    COLOR_GREEN,
    COLOR_MUTED,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_SELECTION,
    Style,
    pad_right,
)

_MUTED = Style(foreground=COLOR_MUTED)


def _latest_run_per_workflow(runs: Sequence[WorkflowRun]) -> list[WorkflowRun]:
    """First run of each workflow file; runs are ordered newest first."""
    seen: set[str] = set()
    result = []
    for run in runs:
        if run.workflow_file in seen:
            continue
        seen.add(run.workflow_file)
        result.append(run)
    return result


def _group_priority(label: str) -> int:
    """Sort order of a group label; lower comes first."""
    lower = label.lower()
    if "ci" in lower:
        return 0
    if "build" in lower:
        return 1
    if "release" in lower or "deploy" in lower:
        return 2
    if "agent" in lower:
        return 3
    return 4


def _sort_runs_by_group(runs: list[WorkflowRun], groups: Mapping[str, str] | None) -> None:
    if groups is None:
        return
    runs.sort(key=lambda run: _group_priority(groups.get(run.workflow_file, "")))


class DetailView:
    """Runs (latest per workflow, grouped) followed by pull requests.

    The cursor runs over both lists: positions below ``run_count`` are runs.
    """

    def __init__(self, repo: RepoState) -> None:
        runs = _latest_run_per_workflow(repo.runs)
        _sort_runs_by_group(runs, repo.workflow_groups)
        self.repo = replace(repo, runs=runs)
        self.run_count = len(runs)
        self.cursor = Selector()
        self.cursor.set_count(len(runs) + len(self.repo.review_items))

    def is_run_selected(self) -> bool:
        """True if the cursor is on a run rather than a pull request."""
        return self.cursor.index() < self.run_count

    def selected_run(self) -> WorkflowRun | None:
        """The run under the cursor, or None if the cursor is on a pull request."""
        idx = self.cursor.index()
        if self.run_count == 0 or idx >= self.run_count:
            return None
        return self.repo.runs[idx]

    def selected_review_item(self) -> ReviewItem | None:
        """The review item under the cursor, or None if the cursor is on a run."""
        idx = self.cursor.index()
        if idx < self.run_count:
            return None
        pr_idx = idx - self.run_count
        if pr_idx >= len(self.repo.review_items):
            return None
        return self.repo.review_items[pr_idx]

    def render(self, width: int, height: int) -> str:
        """Draw the view for one repo."""
        lines = [Style(foreground=COLOR_FG, bold=True).render(self.repo.repo_name), ""]

        if not self.repo.runs:
            lines.append(_MUTED.render("  No recent runs"))
        groups = self.repo.workflow_groups or {}
        last_group = ""
        for i, run in enumerate(self.repo.runs):
            label = groups.get(run.workflow_file) or "Other"
            if label != last_group:
                if last_group:
                    lines.append("")
                lines.append(_MUTED.render(label))
                last_group = label
            selected = self.cursor.index() == i
            lines.append(_run_line(run, selected, width))
            if selected:
                lines.extend(_job_line(job) for job in run.jobs)

        lines.append("")
        lines.append(_MUTED.render("Pull Requests"))
        if not self.repo.review_items:
            lines.append(_MUTED.render("  No open PRs"))
        for i, item in enumerate(self.repo.review_items):
            selected = self.cursor.index() == self.run_count + i
            lines.append(_pr_line(item, selected, width))

        return "\n".join(lines)


def _conclusion_mark(conclusion: str) -> str:
    if conclusion == "success":
        return Style(foreground=COLOR_GREEN).render("✓")
    if conclusion == "failure":
        return Style(foreground=COLOR_RED).render("✗")
    return _MUTED.render("○")


def _run_line(run: WorkflowRun, selected: bool, width: int) -> str:
    if run.is_active():
        dot = Style(foreground=COLOR_BLUE).render("●")
    else:
        dot = _conclusion_mark(run.conclusion)
    sha = run.head_sha[:6]
    ago = format_time_ago(run.updated_at)
    name = _MUTED.render(run.name)
    line = f"  {run.head_branch} {dot} {sha}  {ago}  {name}"
    if selected:
        line = Style(background=COLOR_SELECTION).render(pad_right(line, width))
    return line


def _job_line(job: Job) -> str:
    dot = _conclusion_mark(job.conclusion)
    elapsed = ""
    if job.started_at is not None and job.completed_at is not None:
        elapsed = format_duration(job.completed_at - job.started_at)
    return f"    {dot} {job.name}  {elapsed}"


def _pr_line(item: ReviewItem, selected: bool, width: int) -> str:
    pr = item.pr
    if pr.ci_status == "success":
        ci = Style(foreground=COLOR_GREEN).render("CI✓")
    elif pr.ci_status == "failure":
        ci = Style(foreground=COLOR_RED).render("CI✗")
    else:
        ci = Style(foreground=COLOR_AMBER).render("CI⧗")

    agent = Style(foreground=COLOR_PURPLE).render("agent") + "  " if pr.is_agent else ""
    approved = (
        " " + Style(foreground=COLOR_GREEN).render("✔") if pr.review_state == "approved" else ""
    )

    title = pr.title
    max_title = max(width - 30, 10)
    if len(title) > max_title:
        title = title[: max_title - 1] + "…"

    age = format_age(item.age.total_seconds() / 3600)
    line = f"  #{pr.number}  {title}  {agent}{age} {ci}{approved}"
    if selected:
        line = Style(background=COLOR_SELECTION).render(pad_right(line, width))
    return line


def format_age(hours: float) -> str:
    """Compact age such as ``<1h``, ``5h`` or ``3d``."""
    if hours < 1:
        return "<1h"
    if hours < 24:
        return f"{hours:.0f}h"
    return f"{hours / 24:.0f}d"