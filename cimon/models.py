"""Data records for workflow runs, jobs, steps and pull requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


def _now_like(moment: datetime) -> datetime:
    """Current time in the same timezone flavour (naive or aware) as ``moment``."""
    return datetime.now(moment.tzinfo)


@dataclass
class Step:
    """One step inside a job."""

    name: str = ""
    status: str = ""
    conclusion: str = ""
    number: int = 0


@dataclass
class Job:
    """One job of a workflow run."""

    id: int = 0
    name: str = ""
    status: str = ""
    conclusion: str = ""
    started_at: datetime | None = None
    completed_at: datetime | None = None
    runner_name: str = ""
    steps: list[Step] = field(default_factory=list)


@dataclass
class WorkflowRun:
    """A single run of a workflow."""

    id: int = 0
    name: str = ""
    workflow_file: str = ""
    head_branch: str = ""
    head_sha: str = ""
    status: str = ""
    conclusion: str = ""
    event: str = ""
    actor: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    html_url: str = ""
    repo: str = ""
    jobs: list[Job] = field(default_factory=list)

    def is_active(self) -> bool:
        """True while the run has not completed."""
        return self.status != "completed"

    def elapsed(self) -> timedelta:
        """Time from creation to the last update, or to now while active."""
        if self.created_at is None:
            return timedelta(0)
        if self.is_active() or self.updated_at is None:
            end = _now_like(self.created_at)
        else:
            end = self.updated_at
        return end - self.created_at


@dataclass
class PullRequest:
    """An open pull request."""

    number: int = 0
    title: str = ""
    author: str = ""
    repo: str = ""
    html_url: str = ""
    state: str = ""
    ci_status: str = ""
    review_state: str = ""
    is_agent: bool = False
    agent_source: str = ""
    additions: int = 0
    deletions: int = 0
    draft: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def size(self) -> int:
        """Total number of changed lines."""
        return self.additions + self.deletions


@dataclass
class ReviewItem:
    """A pull request queued for review, with its age."""

    pr: PullRequest = field(default_factory=PullRequest)
    age: timedelta = timedelta(0)