# cimon

Building blocks for a terminal dashboard that watches CI workflow runs and
pull requests across several repositories. Every view renders to a plain
string with ANSI colour codes, so it can sit behind any terminal event loop.
The package has no dependencies outside the standard library.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `cimon.models` – the dataclasses `WorkflowRun` (with `is_active()` and
  `elapsed()`), `Job`, `Step`, `PullRequest` (with `size()`) and `ReviewItem`.
- `cimon.repostate` – `compute_inline_status`, `compute_pr_summary`,
  `sort_by_attention` and `detect_new_flag` turn runs and pull requests into
  the per-repository `RepoState`, `InlineStatus`, `PRSummary` and
  `RepoStatus` values.
- `cimon.compact` – `CompactView`, one line per repository with failures,
  failing agent workflows and active runs expanded inline, plus
  `clear_expired_new_flags`.
- `cimon.detail` – `DetailView`, one repository's latest run per workflow,
  grouped by workflow group, followed by its open pull requests; also
  `format_age`.
- `cimon.rundetail` – `RunDetailView`, the jobs and steps of a single run;
  failed jobs start expanded.
- `cimon.prdetail` – `PRDetailView`, one pull request with CI and review
  status and its changed files.
- `cimon.diffparse` – `parse_diff_files` turns a unified diff into
  `DiffFile` entries (path, additions, deletions, line offset).
- `cimon.pipeline` – `PipelineView` with a multi-term `FilterBar`, and the
  helpers `format_duration`, `format_time_ago` and `format_time_absolute`.
- `cimon.progress` – `render_mini_bar`, `job_progress_color` and
  `render_job_progress`.
- `cimon.logpane` – `LogPane`, a hidden/half/full pane that highlights diff
  lines (`classify_line`, `LineType`) and follows the end of live output.
- `cimon.help` – `HelpOverlay`, a boxed list of the keys of each view.
- `cimon.confirmbar` – `ConfirmBar`, a y/n/Esc prompt with callbacks.
- `cimon.flash` – `Flash`, a message visible for three seconds.
- `cimon.selector` – `Selector`, a cursor that wraps at both ends.
- `cimon.theme` – the colour palette, `ViewMode`, status glyphs and colours,
  and `Style`, a small renderer for colour, bold, width, padding and rounded
  borders.

## Example

```python
from cimon.models import WorkflowRun, Job
from cimon.repostate import RepoState, compute_inline_status, sort_by_attention
from cimon.compact import CompactView

runs = [
    WorkflowRun(name="ci", workflow_file="ci.yml", status="completed",
                conclusion="failure",
                jobs=[Job(name="build", conclusion="failure")]),
]
state = RepoState(repo_name="api", full_name="owner/api", runs=runs,
                  inline=compute_inline_status(runs, None))
states = [state]
sort_by_attention(states)
print(CompactView(states).render(80, 24))
```

Parsing a unified diff:

```python
from cimon.diffparse import parse_diff_files

diff_text = "diff --git a/app.py b/app.py\n--- a/app.py\n+++ b/app.py\n+print('hi')\n"
for f in parse_diff_files(diff_text):
    print(f.path, f.additions, f.deletions)   # app.py 1 0
```

## What it does not do

cimon only computes state and renders views. It does not fetch runs or pull
requests from any CI service, store anything, read key presses or define a
key map, or run an interactive screen, and it installs no command. Feeding it
data and wiring keys to `Selector`, `ConfirmBar`, `FilterBar` and the views is
left to the program that uses it.