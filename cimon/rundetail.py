"""Drill-down view of a single workflow run, its jobs and their steps."""

from __future__ import annotations

from dataclasses import replace

from cimon.models import Job, Step, WorkflowRun
from cimon.pipeline import format_duration, format_time_ago
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


class RunDetailView:
    """Run summary and its jobs; failed jobs start with their steps expanded."""

    def __init__(self, run: WorkflowRun, repo_name: str) -> None:
        self.run = replace(run, jobs=list(run.jobs))
        self.repo_name = repo_name
        self.cursor = Selector()
        self._expanded: set[int] = set()
        self._reset_jobs()

    def _reset_jobs(self) -> None:
        self.cursor.set_count(len(self.run.jobs))
        self._expanded = {
            i for i, job in enumerate(self.run.jobs) if job.conclusion == "failure"
        }

    def selected_job(self) -> Job | None:
        """The job under the cursor, or None when there are no jobs."""
        if not self.run.jobs:
            return None
        return self.run.jobs[self.cursor.index()]

    def is_expanded(self, index: int) -> bool:
        """True if the job at ``index`` shows its steps."""
        return index in self._expanded

    def toggle_expand(self) -> None:
        """Expand or collapse the steps of the selected job."""
        self._expanded ^= {self.cursor.index()}

    def set_jobs(self, jobs: list[Job]) -> None:
        """Replace the jobs, resize the cursor and expand failed jobs."""
        self.run.jobs = list(jobs)
        self._reset_jobs()

    def render(self, width: int, height: int) -> str:
        """Draw the run view."""
        run = self.run
        dot = _run_status_dot(run)
        sha = run.head_sha[:6]
        ago = format_time_ago(run.updated_at)
        summary = f"  {run.head_branch} {dot} {sha}  {run.event} by {run.actor}"
        lines = [summary + _MUTED.render("  " + ago)]
        lines.append(_MUTED.render("  " + self._stats_line()))
        lines.append("")
        lines.append(_MUTED.render("  Jobs"))

        if not run.jobs:
            lines.append(_MUTED.render("  Loading jobs..."))
        for i, job in enumerate(run.jobs):
            lines.append(_job_line(job, self.cursor.index() == i, width))
            if i in self._expanded:
                lines.extend(_step_line(step) for step in job.steps)

        return "\n".join(lines)

    def _stats_line(self) -> str:
        run = self.run
        status = run.status if run.is_active() else run.conclusion
        elapsed = format_duration(run.elapsed())
        total = len(run.jobs)
        if total == 0:
            return f"{status} · elapsed {elapsed}"
        passed = sum(1 for job in run.jobs if job.conclusion == "success")
        return f"{status} · {passed}/{total} jobs passed · elapsed {elapsed}"


def _conclusion_mark(conclusion: str) -> str:
    if conclusion == "success":
        return Style(foreground=COLOR_GREEN).render("✓")
    if conclusion == "failure":
        return Style(foreground=COLOR_RED).render("✗")
    return _MUTED.render("○")


def _run_status_dot(run: WorkflowRun) -> str:
    if run.is_active():
        return Style(foreground=COLOR_BLUE).render("●")
    return _conclusion_mark(run.conclusion)


def _job_status_dot(job: Job) -> str:
    if job.status == "in_progress":
        return Style(foreground=COLOR_BLUE).render("●")
    return _conclusion_mark(job.conclusion)


def _step_status_dot(step: Step) -> str:
    if step.conclusion == "success":
        return Style(foreground=COLOR_GREEN).render("✓")
    if step.conclusion == "failure":
        return Style(foreground=COLOR_RED).render("✗")
    if step.conclusion == "skipped":
        return _MUTED.render("○")
    return Style(foreground=COLOR_AMBER).render("⧗")


def _job_line(job: Job, selected: bool, width: int) -> str:
    dot = _job_status_dot(job)
    elapsed = ""
    if job.started_at is not None and job.completed_at is not None:
        elapsed = format_duration(job.completed_at - job.started_at)
    runner = _MUTED.render("  " + job.runner_name) if job.runner_name else ""
    line = f"  {dot} {job.name}  {elapsed}{runner}"
    if selected:
        line = Style(background=COLOR_SELECTION).render(pad_right(line, width))
    return line


def _step_line(step: Step) -> str:
    return f"      {_step_status_dot(step)} {step.name}"