"""Per-file summary of a unified diff."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DiffFile:
    """One file of a diff: its path, line counts and where it starts.

    ``offset`` is the line number of the file's ``diff --git`` header in the
    raw diff, used to scroll the log pane to it.
    """

    path: str
    additions: int = 0
    deletions: int = 0
    offset: int = 0


def parse_diff_files(raw: str) -> list[DiffFile]:
    """Extract the files of a unified diff, in order of appearance."""
    if not raw:
        return []
    files: list[DiffFile] = []
    current: DiffFile | None = None

    for number, line in enumerate(raw.split("\n")):
        if line.startswith("diff --git "):
            current = DiffFile(path=_parse_diff_path(line), offset=number)
            files.append(current)
            continue
        if current is None:
            continue
        if line.startswith("+") and not line.startswith("+++"):
            current.additions += 1
        elif line.startswith("-") and not line.startswith("---"):
            current.deletions += 1
    return files


def _parse_diff_path(line: str) -> str:
    """Path from ``diff --git a/path b/path``; the last `` b/`` wins."""
    idx = line.rfind(" b/")
    if idx >= 0:
        return line[idx + 3:]
    _, sep, rest = line.partition(" a/")
    if sep:
        return rest.split(" ", 1)[0]
    return line