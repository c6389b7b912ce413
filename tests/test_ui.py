"""Tests for the curses presentation layer, using a recording fake window."""

import curses
from contextlib import contextmanager

import pytest

from holdtimer import ui
from holdtimer.config import LegendEntry, ListItem
from holdtimer.scheduler import AppState

from helpers import FakeWindow

ATTRS = {"highlight": 1, "item": 0}


def _snapshot(selected=None, ticks=0):
    state = AppState(
        [ListItem("alpha", 1), ListItem("beta", 0)],
        [LegendEntry("Quit: q", "CRITICAL"), LegendEntry("Hold: space", "INFO")],
    )
    state.items.selected = selected
    state.timer.elapsed_ticks = ticks
    return state.snapshot()


class TestListLines:

    def test_label_then_filler(self):
        lines = ui.list_lines(_snapshot())
        assert [text.strip() for text, _ in lines] == ["alpha", ui.FILLER, "beta"]
        assert not any(selected for _, selected in lines)

    def test_selected_item_is_marked(self):
        lines = ui.list_lines(_snapshot(selected=0))
        assert lines[0] == (">> alpha", True)
        assert lines[1][1] is True
        assert lines[2] == ("   beta", False)

    def test_scrolls_selected_into_view(self):
        lines = [("row", False)] * 10 + [("sel", True), ("sel", True)]
        assert ui._scroll_offset(lines, 5) == 7
        assert ui._scroll_offset(lines[:4], 5) == 0


class TestDraw:

    def test_panel_split(self):
        assert ui._panel_widths(100) == (30, 50, 20)
        assert sum(ui._panel_widths(77)) == 77

    def test_renders_all_panels(self):
        window = FakeWindow(rows=30, cols=120)
        ui.draw(window, _snapshot(selected=1, ticks=1500), ATTRS)
        text = window.text()
        assert "List" in text
        assert ">> beta" in text
        assert "15.00" in text
        assert "paused" in text
        assert "Keybinds" in text
        assert "CRITICAL " in text
        assert "Quit: q" in text
        assert window.refreshed == 1

    def test_legend_is_bottom_anchored(self):
        window = FakeWindow(rows=30, cols=120)
        ui.draw(window, _snapshot(), ATTRS)
        rows = {text: y for y, _, text in window.writes}
        assert rows["Hold: space"] == 28
        assert rows["Quit: q"] == 27

    def test_tiny_window_does_not_fail(self):
        window = FakeWindow(rows=3, cols=8)
        ui.draw(window, _snapshot(selected=0, ticks=5), ATTRS)


class TestTerminal:

    def _patch_curses(self, monkeypatch, calls, window):
        monkeypatch.setattr(curses, "initscr", lambda: window)
        for name in ("noecho", "cbreak", "nocbreak", "echo", "endwin"):
            monkeypatch.setattr(curses, name, lambda name=name: calls.append(name))
        monkeypatch.setattr(curses, "curs_set", lambda visible: calls.append(f"curs_set({visible})"))

    def test_restores_on_error(self, monkeypatch, capsys):
        calls = []
        window = FakeWindow()
        self._patch_curses(monkeypatch, calls, window)
        with pytest.raises(RuntimeError, match="boom"):
            with ui.terminal() as stdscr:
                assert stdscr is window
                raise RuntimeError("boom")
        assert calls[-2:] == ["curs_set(1)", "endwin"]
        assert "nocbreak" in calls and "echo" in calls
        assert window.keypad_calls == [True, False]
        out = capsys.readouterr().out
        assert out.endswith("\x1b[?1049l")

    def test_setup_failure_is_wrapped(self, monkeypatch, capsys):
        def fail():
            raise curses.error("setupterm: could not find terminal")

        monkeypatch.setattr(curses, "initscr", fail)
        with pytest.raises(ui.TerminalError, match="could not find terminal"):
            with ui.terminal():
                pytest.fail("body must not run")
        assert capsys.readouterr().out.endswith("\x1b[?1049l")


class TestRun:

    def test_colour_setup_failure_is_terminal_error(self, monkeypatch):
        window = FakeWindow()
        exited = []

        @contextmanager
        def fake_terminal():
            try:
                yield window
            finally:
                exited.append(True)

        def fail():
            raise curses.error("start_color() returned ERR")

        monkeypatch.setattr(ui, "terminal", fake_terminal)
        monkeypatch.setattr(curses, "has_colors", lambda: True)
        monkeypatch.setattr(curses, "start_color", fail)
        with pytest.raises(ui.TerminalError, match="start_color"):
            ui.run({})
        assert exited == [True]
