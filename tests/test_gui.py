"""Tests for the clock window. Tests that need a real Tk window skip without a display."""

from __future__ import annotations

import sys
from datetime import datetime

import pytest

tk = pytest.importorskip("tkinter")

from digiclock import cli, gui  # noqa: E402
from digiclock.gui import BACKGROUND, WINDOW_TITLE, ClockWindow  # noqa: E402
from digiclock.settings import ClockConfiguration, TimeFormat  # noqa: E402

FIXED = datetime(2025, 9, 6, 15, 30, 45)


class _Key:
    def __init__(self, char: str):
        self.char = char


@pytest.fixture()
def window():
    try:
        win = ClockWindow(ClockConfiguration(), now=lambda: FIXED)
    except tk.TclError as e:
        pytest.skip(f"no display: {e}")
    yield win
    try:
        win.close()
    except tk.TclError:
        pass


def _text(win: ClockWindow, item: int) -> str:
    return win.canvas.itemcget(item, "text")


def test_window_basics(window):
    assert window.title() == WINDOW_TITLE
    assert window.canvas.cget("bg") == BACKGROUND


def test_initial_frame_24h_with_date(window):
    assert _text(window, window._time_item) == "15:30:45"
    assert _text(window, window._date_item) == "Saturday, September 06, 2025"


def test_t_key_switches_to_12h(window):
    window._on_key(_Key("T"))
    assert window.config_state.time_format is TimeFormat.H12
    assert _text(window, window._time_item) == "03:30:45 PM"


def test_d_key_hides_date(window):
    window._on_key(_Key("d"))
    assert window.config_state.show_date is False
    assert _text(window, window._date_item) == ""
    window._on_key(_Key("D"))
    assert _text(window, window._date_item) == "Saturday, September 06, 2025"


def test_other_key_keeps_frame(window):
    before = window.last_frame
    window._on_key(_Key("q"))
    assert window.last_frame == before
    assert window.config_state.read() == (TimeFormat.H24, True)


def test_tick_reschedules(window):
    window._tick()
    assert window._tick_job is not None


def test_close_cancels_timer():
    try:
        win = ClockWindow(ClockConfiguration(), now=lambda: FIXED)
    except tk.TclError as e:
        pytest.skip(f"no display: {e}")
    win.close()
    assert win._tick_job is None


# ---- without a display ----


class _FakeCanvas:
    def __init__(self):
        self.texts: dict[int, str] = {}
        self.positions: dict[int, tuple[float, float]] = {}

    def winfo_width(self) -> int:
        return 400

    def winfo_height(self) -> int:
        return 200

    def coords(self, item: int, x: float, y: float) -> None:
        self.positions[item] = (x, y)

    def itemconfigure(self, item: int, text: str) -> None:
        self.texts[item] = text


def _headless(config: ClockConfiguration) -> ClockWindow:
    # skip tk.Tk.__init__; fill in just what redraw/_tick/_on_key touch
    win = ClockWindow.__new__(ClockWindow)
    win.config_state = config
    win.now = lambda: FIXED
    win.canvas = _FakeCanvas()
    win._time_item = 1
    win._date_item = 2
    win._tick_job = None
    win.last_frame = None
    win.scheduled = []

    def after(ms, fn):
        win.scheduled.append((ms, fn))
        return f"after#{len(win.scheduled)}"

    win.after = after
    return win


def test_headless_redraw_layout():
    win = _headless(ClockConfiguration())
    win.redraw()
    assert win.canvas.texts == {1: "15:30:45", 2: "Saturday, September 06, 2025"}
    assert win.canvas.positions == {1: (200, 50), 2: (200, 150)}


def test_headless_keys_toggle_and_repaint():
    win = _headless(ClockConfiguration())
    win.redraw()
    win._on_key(_Key("T"))
    assert win.canvas.texts[1] == "03:30:45 PM"
    win._on_key(_Key("d"))
    assert win.canvas.texts[2] == ""
    win._on_key(_Key("t"))
    win._on_key(_Key("D"))
    assert win.canvas.texts == {1: "15:30:45", 2: "Saturday, September 06, 2025"}


def test_headless_other_key_does_not_repaint():
    win = _headless(ClockConfiguration())
    win._on_key(_Key("x"))
    assert win.canvas.texts == {}
    assert win.last_frame is None


def test_tick_keeps_running_after_failed_render():
    win = _headless(ClockConfiguration())

    def broken():
        raise RuntimeError("render failed")

    win.redraw = broken
    with pytest.raises(RuntimeError):
        win._tick()
    assert win._tick_job == "after#1"
    assert win.scheduled == [(1000, win._tick)]


# ---- startup failure ----


def test_run_gui_reports_tcl_error_and_exits_1(monkeypatch):
    def no_display(*_a, **_kw):
        raise tk.TclError("no display name and no $DISPLAY environment variable")

    reported = []
    monkeypatch.setattr(gui, "ClockWindow", no_display)
    monkeypatch.setattr(gui, "_report_startup_failure", reported.append)

    with pytest.raises(SystemExit) as exc:
        gui.run_gui(ClockConfiguration())
    assert exc.value.code == 1
    assert len(reported) == 1
    assert reported[0].startswith("Window creation failed!")
    assert "no display name" in reported[0]


def test_startup_failure_falls_back_to_stderr(monkeypatch, capsys):
    def no_display(*_a, **_kw):
        raise tk.TclError("no display")

    monkeypatch.setattr(gui.tk, "Tk", no_display)
    gui._report_startup_failure("Window creation failed! Error: no display")
    assert "Window creation failed! Error: no display" in capsys.readouterr().err


# ---- digiclock-window entrypoint ----


def test_window_script_accepts_log_level(monkeypatch):
    seen = []
    monkeypatch.setattr(cli, "cmd_window", lambda args: seen.append(args) or 0)
    monkeypatch.setattr(sys, "argv", ["digiclock-window", "--log-level", "DEBUG", "--format", "12"])

    with pytest.raises(SystemExit) as exc:
        gui.main()
    assert exc.value.code == 0
    assert seen[0].log_level == "DEBUG"
    assert seen[0].format is TimeFormat.H12
