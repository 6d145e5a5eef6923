from datetime import datetime, timedelta

from cimon.models import Job, PullRequest, WorkflowRun
from cimon.repostate import (
    InlineStatus,
    PRSummary,
    RepoState,
    RepoStatus,
    compute_inline_status,
    compute_pr_summary,
    detect_new_flag,
    sort_by_attention,
)


def test_all_passing():
    runs = [
        WorkflowRun(status="completed", conclusion="success"),
        WorkflowRun(status="completed", conclusion="success"),
    ]
    status = compute_inline_status(runs, None)
    assert status.worst == RepoStatus.PASSING
    assert status.failed_jobs == []
    assert status.active_runs == []


def test_has_failure():
    now = datetime.now()
    runs = [
        WorkflowRun(
            status="completed",
            conclusion="failure",
            name="ci",
            workflow_file="ci.yml",
            updated_at=now - timedelta(minutes=4),
            jobs=[
                Job(name="build", conclusion="failure"),
                Job(name="test", conclusion="failure"),
                Job(name="lint", conclusion="success"),
            ],
        )
    ]
    status = compute_inline_status(runs, None)
    assert status.worst == RepoStatus.FAILED
    assert status.failed_jobs == ["build", "test"]
    assert status.failed_workflow == "ci"
    assert status.failed_at == now - timedelta(minutes=4)


def test_has_active():
    runs = [
        WorkflowRun(
            status="in_progress",
            name="deploy",
            jobs=[
                Job(name="build", conclusion="success"),
                Job(name="test", conclusion=""),
                Job(name="deploy", conclusion=""),
            ],
        )
    ]
    status = compute_inline_status(runs, None)
    assert status.worst == RepoStatus.ACTIVE
    assert len(status.active_runs) == 1
    assert status.active_runs[0].name == "deploy"
    assert status.active_runs[0].completed_jobs == 1
    assert status.active_runs[0].total_jobs == 3


def test_failure_trumps_active():
    runs = [
        WorkflowRun(status="completed", conclusion="failure", name="ci", workflow_file="ci.yml"),
        WorkflowRun(status="in_progress", name="deploy", workflow_file="deploy.yml"),
    ]
    assert compute_inline_status(runs, None).worst == RepoStatus.FAILED


def test_old_failure_superseded_by_new_success():
    now = datetime.now()
    runs = [
        WorkflowRun(status="completed", conclusion="success", name="CI",
                    workflow_file="ci.yml", updated_at=now - timedelta(minutes=5)),
        WorkflowRun(status="completed", conclusion="failure", name="CI",
                    workflow_file="ci.yml", updated_at=now - timedelta(hours=15)),
    ]
    status = compute_inline_status(runs, None)
    assert status.worst == RepoStatus.PASSING
    assert status.failed_workflow == ""


def test_latest_failed_other_passing():
    now = datetime.now()
    runs = [
        WorkflowRun(status="completed", conclusion="failure", name="CI",
                    workflow_file="ci.yml", updated_at=now),
        WorkflowRun(status="completed", conclusion="success", name="CI",
                    workflow_file="ci.yml", updated_at=now - timedelta(hours=1)),
        WorkflowRun(status="completed", conclusion="success", name="Release",
                    workflow_file="release.yml", updated_at=now),
    ]
    status = compute_inline_status(runs, None)
    assert status.worst == RepoStatus.FAILED
    assert status.failed_workflow == "CI"


def test_agent_failure_is_amber():
    now = datetime.now()
    critical = {"ci.yml"}
    runs = [
        WorkflowRun(status="completed", conclusion="success", name="CI",
                    workflow_file="ci.yml", updated_at=now),
        WorkflowRun(status="completed", conclusion="failure", name="claude-test-gaps",
                    workflow_file="claude-test-gaps.yml", updated_at=now),
        WorkflowRun(status="completed", conclusion="failure", name="claude-dep-audit",
                    workflow_file="claude-dep-audit.yml", updated_at=now),
    ]
    status = compute_inline_status(runs, critical)
    assert status.worst == RepoStatus.AGENT_FAILED
    assert status.agent_fail_count == 2
    assert status.failed_workflow == ""


def test_critical_failure_trumps_agent():
    now = datetime.now()
    critical = {"ci.yml"}
    runs = [
        WorkflowRun(status="completed", conclusion="failure", name="CI",
                    workflow_file="ci.yml", updated_at=now),
        WorkflowRun(status="completed", conclusion="failure", name="claude-test-gaps",
                    workflow_file="claude-test-gaps.yml", updated_at=now),
    ]
    status = compute_inline_status(runs, critical)
    assert status.worst == RepoStatus.FAILED
    assert status.agent_fail_count == 1
    assert status.failed_workflow == "CI"


def test_pr_summary_empty():
    summary = compute_pr_summary(None)
    assert summary == PRSummary(total=0, ready=0, ci_pending=False)


def test_pr_summary_mixed_states():
    prs = [
        PullRequest(ci_status="success", review_state="approved", draft=False),
        PullRequest(ci_status="success", review_state="approved", draft=False),
        PullRequest(ci_status="pending", review_state="", draft=False),
        PullRequest(ci_status="success", review_state="", draft=True),
    ]
    summary = compute_pr_summary(prs)
    assert summary.total == 4
    assert summary.ready == 2
    assert summary.ci_pending is True


def test_pr_summary_agent_prs():
    prs = [
        PullRequest(ci_status="success", review_state="approved", is_agent=True),
        PullRequest(ci_status="failure", is_agent=True),
    ]
    assert compute_pr_summary(prs).ready == 1


def test_sort_failures_first():
    states = [
        RepoState(repo_name="green", inline=InlineStatus(worst=RepoStatus.PASSING)),
        RepoState(repo_name="failed", inline=InlineStatus(worst=RepoStatus.FAILED)),
        RepoState(repo_name="active", inline=InlineStatus(worst=RepoStatus.ACTIVE)),
    ]
    sort_by_attention(states)
    assert [s.repo_name for s in states] == ["failed", "active", "green"]


def test_sort_ready_prs_before_quiet():
    states = [
        RepoState(repo_name="quiet", pr_summary=PRSummary(total=0)),
        RepoState(repo_name="has-ready", pr_summary=PRSummary(total=2, ready=1)),
    ]
    sort_by_attention(states)
    assert [s.repo_name for s in states] == ["has-ready", "quiet"]


def test_sort_agent_failures_before_active():
    states = [
        RepoState(repo_name="active", inline=InlineStatus(worst=RepoStatus.ACTIVE)),
        RepoState(repo_name="agent", inline=InlineStatus(worst=RepoStatus.AGENT_FAILED)),
        RepoState(repo_name="quiet", inline=InlineStatus(worst=RepoStatus.PASSING)),
    ]
    sort_by_attention(states)
    assert [s.repo_name for s in states] == ["agent", "active", "quiet"]


def test_sort_is_stable():
    states = [RepoState(repo_name=name) for name in ("b", "a", "c")]
    sort_by_attention(states)
    assert [s.repo_name for s in states] == ["b", "a", "c"]


def test_detect_new_failure():
    prev = RepoState(inline=InlineStatus(worst=RepoStatus.PASSING))
    curr = RepoState(inline=InlineStatus(worst=RepoStatus.FAILED))
    assert detect_new_flag(prev, curr) is True


def test_detect_no_change():
    prev = RepoState(pr_summary=PRSummary(ready=1))
    curr = RepoState(pr_summary=PRSummary(ready=1))
    assert detect_new_flag(prev, curr) is False


def test_detect_new_ready_pr():
    prev = RepoState(pr_summary=PRSummary(ready=0))
    curr = RepoState(pr_summary=PRSummary(ready=1))
    assert detect_new_flag(prev, curr) is True


def test_detect_release_started():
    prev = RepoState(inline=InlineStatus(releasing=False))
    curr = RepoState(inline=InlineStatus(releasing=True))
    assert detect_new_flag(prev, curr) is True


def test_detect_ongoing_failure_not_new():
    prev = RepoState(inline=InlineStatus(worst=RepoStatus.FAILED))
    curr = RepoState(inline=InlineStatus(worst=RepoStatus.FAILED))
    assert detect_new_flag(prev, curr) is False