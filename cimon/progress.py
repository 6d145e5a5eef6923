"""Job progress bars for workflow runs."""

from __future__ import annotations

from collections.abc import Sequence

from cimon.models import Job
from cimon.theme import COLOR_AMBER, COLOR_GREEN, COLOR_RED, Style

_BAR_COLORS = {"red": COLOR_RED, "amber": COLOR_AMBER, "green": COLOR_GREEN}


def render_mini_bar(filled: int, total: int, width: int) -> str:
    """A bar of ``width`` cells, filled in proportion to ``filled / total``."""
    if total == 0:
        return "░" * width
    cells = min(filled * width // total, width)
    return "█" * cells + "░" * (width - cells)


def job_progress_color(jobs: Sequence[Job]) -> str:
    """``"red"`` if any job failed, ``"amber"`` if any is running or queued, else ``"green"``."""
    if any(job.conclusion == "failure" for job in jobs):
        return "red"
    if any(job.status in ("in_progress", "queued") for job in jobs):
        return "amber"
    return "green"


def render_job_progress(jobs: Sequence[Job]) -> str:
    """Compact progress such as ``[3/5]███░░``, or an empty string with no jobs."""
    if not jobs:
        return ""
    done = sum(1 for job in jobs if job.status == "completed")
    total = len(jobs)
    bar_color = _BAR_COLORS[job_progress_color(jobs)]
    bar = render_mini_bar(done, total, 5)
    return f"[{done}/{total}]" + Style(foreground=bar_color).render(bar)