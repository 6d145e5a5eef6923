"""Per-repo display state derived from runs and pull requests."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum

from cimon.models import PullRequest, ReviewItem, WorkflowRun


class RepoStatus(IntEnum):
    """Worst CI state of a repo; higher is worse."""

    PASSING = 0
    PENDING = 1
    ACTIVE = 2
    AGENT_FAILED = 3  # non-critical workflow failure
    FAILED = 4  # critical workflow failure


@dataclass
class ActiveRunInfo:
    """Summary of a running workflow for inline display."""

    name: str = ""
    completed_jobs: int = 0
    total_jobs: int = 0
    elapsed: timedelta = timedelta(0)
    is_release: bool = False


@dataclass
class InlineStatus:
    """CI state shown inline under a repo in the compact view."""

    worst: RepoStatus = RepoStatus.PASSING
    failed_workflow: str = ""
    failed_jobs: list[str] = field(default_factory=list)
    failed_at: datetime | None = None
    agent_fail_count: int = 0
    active_runs: list[ActiveRunInfo] = field(default_factory=list)
    releasing: bool = False


@dataclass
class PRSummary:
    """Pull request counts for the repo summary line.

    ``ready`` counts PRs that are approved, passing CI and not drafts.
    """

    total: int = 0
    ready: int = 0
    ci_pending: bool = False


@dataclass
class RepoState:
    """All display state for one repo.

    ``workflow_groups`` maps a workflow file to its group label.
    """

    repo_name: str = ""
    full_name: str = ""
    runs: list[WorkflowRun] = field(default_factory=list)
    prs: list[PullRequest] = field(default_factory=list)
    review_items: list[ReviewItem] = field(default_factory=list)
    inline: InlineStatus = field(default_factory=InlineStatus)
    pr_summary: PRSummary = field(default_factory=PRSummary)
    workflow_groups: dict[str, str] = field(default_factory=dict)
    new_flag: bool = False
    last_notable_change: datetime | None = None
    user_acknowledged: bool = False


def compute_inline_status(
    runs: Sequence[WorkflowRun], critical_workflows: Collection[str] | None
) -> InlineStatus:
    """Derive the inline state from runs ordered newest first.

    Only the latest completed run of each workflow counts. Failures in
    ``critical_workflows`` are critical; with None every workflow is.
    """
    status = InlineStatus()
    seen_completed: set[str] = set()

    for run in runs:
        if run.is_active():
            status.worst = max(status.worst, RepoStatus.ACTIVE)
            status.active_runs.append(
                ActiveRunInfo(
                    name=run.name,
                    completed_jobs=sum(1 for job in run.jobs if job.conclusion),
                    total_jobs=len(run.jobs),
                    elapsed=run.elapsed(),
                )
            )
            continue

        if run.workflow_file in seen_completed:
            continue
        seen_completed.add(run.workflow_file)

        if run.conclusion != "failure":
            continue
        critical = critical_workflows is None or run.workflow_file in critical_workflows
        if critical:
            status.worst = RepoStatus.FAILED
            if not status.failed_workflow:
                status.failed_workflow = run.name
                status.failed_at = run.updated_at
                status.failed_jobs = [j.name for j in run.jobs if j.conclusion == "failure"]
        else:
            status.agent_fail_count += 1
            status.worst = max(status.worst, RepoStatus.AGENT_FAILED)

    status.releasing = any(info.is_release for info in status.active_runs)
    return status


def compute_pr_summary(prs: Sequence[PullRequest] | None) -> PRSummary:
    """Count open and ready pull requests and note pending CI."""
    prs = prs or []
    return PRSummary(
        total=len(prs),
        ready=sum(
            1
            for pr in prs
            if pr.ci_status == "success" and pr.review_state == "approved" and not pr.draft
        ),
        ci_pending=any(pr.ci_status == "pending" for pr in prs),
    )


def sort_by_attention(states: list[RepoState]) -> None:
    """Sort in place: failures, agent failures, active runs, ready PRs, then the rest."""
    states.sort(
        key=lambda s: (
            s.inline.worst != RepoStatus.FAILED,
            s.inline.worst != RepoStatus.AGENT_FAILED,
            s.inline.worst != RepoStatus.ACTIVE,
            s.pr_summary.ready <= 0,
        )
    )


def detect_new_flag(prev: RepoState, curr: RepoState) -> bool:
    """True if the repo changed in a way worth flagging as NEW."""
    if prev.inline.worst != RepoStatus.FAILED and curr.inline.worst == RepoStatus.FAILED:
        return True
    if curr.pr_summary.ready > prev.pr_summary.ready:
        return True
    return not prev.inline.releasing and curr.inline.releasing