import re

import pytest

from cimon.logpane import LineType, LogPane, LogPaneMode, classify_line


def _plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("+++ b/file.go", LineType.HEADER),
        ("--- a/file.go", LineType.HEADER),
        ("+added", LineType.ADDED),
        ("-removed", LineType.REMOVED),
        ("@@ -1,3 +1,4 @@", LineType.HUNK),
        ("diff --git a/x b/x", LineType.HEADER),
        (" context", LineType.CONTEXT),
        ("", LineType.CONTEXT),
    ],
)
def test_classify_line(line, expected):
    assert classify_line(line) is expected


def test_cycle_mode_wraps():
    pane = LogPane()
    assert pane.mode is LogPaneMode.HIDDEN
    pane.cycle_mode()
    assert pane.mode is LogPaneMode.HALF
    pane.cycle_mode()
    assert pane.mode is LogPaneMode.FULL
    pane.cycle_mode()
    assert pane.mode is LogPaneMode.HIDDEN


def test_set_content_resets_scroll():
    pane = LogPane(scroll_pos=7)
    pane.set_content("Diff", "+a", True)
    assert pane.scroll_pos == 0
    assert pane.title == "Diff"
    assert pane.content == "+a"
    assert pane.is_live is True


def test_clear():
    pane = LogPane()
    pane.set_content("Diff", "+a", True)
    pane.clear()
    assert pane.content == ""
    assert pane.title == ""
    assert pane.is_live is False


def test_hidden_renders_nothing():
    pane = LogPane(content="abc")
    assert pane.render(80, 20) == ""


def test_zero_height_renders_nothing():
    pane = LogPane(mode=LogPaneMode.FULL, content="abc")
    assert pane.render(80, 0) == ""


def test_default_title_is_log():
    pane = LogPane(mode=LogPaneMode.FULL, content="abc")
    first = _plain(pane.render(40, 10)).split("\n")[0]
    assert first.strip() == "Log"


def test_live_title_marker():
    pane = LogPane(mode=LogPaneMode.FULL)
    pane.set_content("agent", "x", True)
    first = _plain(pane.render(40, 10)).split("\n")[0]
    assert "LIVE ●" in first
    assert "agent" in first


def test_full_mode_fills_height():
    pane = LogPane(mode=LogPaneMode.FULL, content="one line")
    height = 6
    assert len(pane.render(40, height).split("\n")) == height


def test_half_mode_uses_half_height():
    pane = LogPane(mode=LogPaneMode.HALF, content="\n".join(f"l{i}" for i in range(50)))
    height = 20
    assert len(pane.render(40, height).split("\n")) == height // 2


def test_minimum_height_is_three():
    pane = LogPane(mode=LogPaneMode.FULL, content="a")
    assert len(pane.render(40, 1).split("\n")) == 3


def test_live_mode_follows_end():
    pane = LogPane(mode=LogPaneMode.FULL)
    pane.set_content("t", "\n".join(f"line{i}" for i in range(20)), True)
    out = _plain(pane.render(40, 5))
    assert "line19" in out
    assert "line0\n" not in out


def test_scroll_position_selects_window():
    pane = LogPane(mode=LogPaneMode.FULL, content="\n".join(f"row{i}" for i in range(20)))
    pane.scroll_pos = 10
    body = _plain(pane.render(40, 5)).split("\n")[1:]
    assert body[0] == "row10"
    assert "row9" not in body


def test_lines_are_highlighted_in_content():
    pane = LogPane(mode=LogPaneMode.FULL, content="+added\n-removed")
    out = pane.render(40, 5)
    plain = _plain(out)
    assert "+added" in plain
    assert "-removed" in plain
    assert out != plain