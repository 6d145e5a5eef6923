import re

import pytest

from cimon.help import HelpOverlay


def _plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def test_hidden_renders_nothing():
    assert HelpOverlay().render("compact", 80, 24) == ""


def test_toggle_flips_visibility():
    overlay = HelpOverlay()
    overlay.toggle()
    assert overlay.visible is True
    overlay.toggle()
    assert overlay.visible is False


def test_compact_bindings():
    overlay = HelpOverlay(visible=True)
    out = _plain(overlay.render("compact", 80, 24))
    assert "Keybindings — compact" in out
    assert "Batch merge ready agent PRs" in out
    assert "Drill into repo" in out


@pytest.mark.parametrize(
    "view, expected",
    [
        ("detail", "Rerun (run) / Approve (PR)"),
        ("run-detail", "Rerun failed jobs"),
        ("pr-detail", "Merge PR"),
    ],
)
def test_view_specific_bindings(view, expected):
    out = _plain(HelpOverlay(visible=True).render(view, 80, 24))
    assert expected in out
    assert "Toggle help" in out


def test_unknown_view_only_common_bindings():
    out = _plain(HelpOverlay(visible=True).render("other", 80, 24))
    assert "Toggle help" in out
    assert "Quit" in out
    assert "Navigate" not in out


def test_rendered_inside_rounded_box():
    lines = _plain(HelpOverlay(visible=True).render("detail", 80, 24)).split("\n")
    assert lines[0].startswith("╭")
    assert lines[-1].startswith("╰")
    assert all(line.startswith("│") and line.endswith("│") for line in lines[1:-1])


def test_key_column_is_aligned():
    lines = _plain(HelpOverlay(visible=True).render("compact", 80, 24)).split("\n")
    quit_line = next(line for line in lines if "Quit" in line)
    help_line = next(line for line in lines if "Toggle help" in line)
    assert quit_line.index("Quit") == help_line.index("Toggle help")