"""Filterable list of workflow runs and time formatting helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from cimon.models import Job, WorkflowRun
from cimon.progress import render_job_progress
from cimon.selector import Selector
from cimon.theme import (
    COLOR_MUTED,
    COLOR_RED,
    COLOR_SELECTION,
    Style,
    pulsing_dot,
    status_color,
    status_dot,
)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class FilterBar:
    """Case-insensitive filter matching every space-separated term."""

    query: str = ""
    active: bool = False

    def matches(self, text: str) -> bool:
        """True if ``text`` contains all terms of the query."""
        if not self.query:
            return True
        lower = text.lower()
        return all(term in lower for term in self.query.lower().split())

    def handle_key(self, key: str) -> bool:
        """Edit the query with ``key``; return whether the key was consumed."""
        if not self.active:
            return False
        if key == "esc":
            self.active = False
            self.query = ""
            return True
        if key == "enter":
            self.active = False
            return True
        if key == "backspace":
            self.query = self.query[:-1]
            return True
        if len(key) == 1:
            self.query += key
            return True
        return False

    def clear(self) -> None:
        """Reset the query and deactivate."""
        self.query = ""
        self.active = False


@dataclass
class PipelineView:
    """Workflow runs rendered as a vertical list.

    ``known_failures`` holds ``"repo:job"`` keys of failures already known.
    """

    runs: list[WorkflowRun] = field(default_factory=list)
    selector: Selector = field(default_factory=Selector)
    filter: FilterBar = field(default_factory=FilterBar)
    expand_jobs: bool = False
    known_failures: set[str] = field(default_factory=set)
    tick_even: bool = False

    def set_runs(self, runs: list[WorkflowRun]) -> None:
        """Replace the runs and resize the cursor to the filtered list."""
        self.runs = runs
        self.selector.set_count(len(self.filtered_runs()))

    def selected_run(self) -> WorkflowRun | None:
        """The run under the cursor, or None."""
        filtered = self.filtered_runs()
        idx = self.selector.index()
        if idx >= len(filtered):
            return None
        return filtered[idx]

    def filtered_runs(self) -> list[WorkflowRun]:
        """Runs matching the current filter query."""
        if not self.filter.query:
            return self.runs
        return [
            run for run in self.runs
            if self.filter.matches(
                f"{run.name} {run.head_branch} {run.actor} {run.conclusion}"
            )
        ]

    def render(self, width: int) -> str:
        """Render the filtered runs, one per line, with optional job lines."""
        filtered = self.filtered_runs()
        self.selector.set_count(len(filtered))
        if not filtered:
            return Style(foreground=COLOR_MUTED).render("  No pipeline runs")

        parts = []
        for i, run in enumerate(filtered):
            parts.append(self._render_run(run, i == self.selector.index(), width) + "\n")
            if self.expand_jobs:
                parts.extend(self._render_job(run.repo, job) + "\n" for job in run.jobs)
        return "".join(parts)

    def _render_run(self, run: WorkflowRun, selected: bool, width: int) -> str:
        muted = Style(foreground=COLOR_MUTED)
        dot = Style(foreground=status_color(run.conclusion)).render(
            pulsing_dot(run.conclusion, self.tick_even)
        )
        elapsed = format_duration(run.elapsed())
        ago = format_time_ago(run.updated_at)
        sha = run.head_sha[:7]
        progress = render_job_progress(run.jobs)

        line = (
            f" {dot} {run.name}  {muted.render(run.head_branch)}  "
            f"{muted.render(sha)}  {muted.render(run.actor)}"
        )
        if progress:
            line += "  " + progress
        line += f"  {muted.render(elapsed)}  {muted.render(ago)}{_failure_hint(run)}"

        if selected:
            return Style(background=COLOR_SELECTION, width=width).render(line)
        return line

    def _render_job(self, repo: str, job: Job) -> str:
        dot = Style(foreground=status_color(job.conclusion)).render(status_dot(job.conclusion))
        label = job.name
        if f"{repo}:{job.name}" in self.known_failures:
            label += Style(foreground=COLOR_MUTED).render(" known")
        return f"   {dot} {label}"


def _failure_hint(run: WorkflowRun) -> str:
    """Name of the first failed step (or job) of a failed run."""
    if run.conclusion != "failure":
        return ""
    job = next((j for j in run.jobs if j.conclusion == "failure"), None)
    if job is None:
        return ""
    step = next((s for s in job.steps if s.conclusion == "failure"), None)
    name = step.name if step is not None else job.name
    return Style(foreground=COLOR_RED).render(" ▸ " + name)


def format_duration(duration: timedelta) -> str:
    """Compact duration such as ``30s``, ``2m30s`` or ``1h30m``."""
    seconds = duration.total_seconds()
    if seconds < 60:
        return f"{int(seconds)}s"
    if seconds < 3600:
        return f"{int(seconds / 60)}m{int(seconds) % 60}s"
    return f"{int(seconds / 3600)}h{int(seconds / 60) % 60}m"


def format_time_absolute(moment: datetime | None) -> str:
    """Wall-clock time, with the date added when it is not today."""
    if moment is None:
        return ""
    now = datetime.now(moment.tzinfo)
    clock = f"{moment.hour:02d}:{moment.minute:02d}"
    if now.date() == moment.date():
        return clock
    if now.year == moment.year:
        return f"{_MONTHS[moment.month - 1]} {moment.day} {clock}"
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} {clock}"


def format_time_ago(moment: datetime | None) -> str:
    """Relative time such as ``now``, ``3m ago`` or ``2mo ago``."""
    if moment is None:
        return ""
    delta = datetime.now(moment.tzinfo) - moment
    hours = delta.total_seconds() / 3600
    if delta < timedelta(minutes=1):
        return "now"
    if delta < timedelta(hours=1):
        return f"{int(delta.total_seconds() / 60)}m ago"
    if delta < timedelta(days=1):
        return f"{int(hours)}h ago"
    if delta < timedelta(days=7):
        return f"{int(hours / 24)}d ago"
    if delta < timedelta(days=30):
        return f"{int(hours / (24 * 7))}w ago"
    return f"{int(hours / (24 * 30))}mo ago"