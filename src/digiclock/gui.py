from __future__ import annotations

import logging
import sys
import tkinter as tk
from datetime import datetime
from tkinter import messagebox
from typing import Callable

from ._util import _now_local
from .clockfmt import take_snapshot
from .driver import Frame, build_frame
from .settings import ClockConfiguration

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Digital Clock"
WINDOW_SIZE = (400, 200)
BACKGROUND = "#000000"
FOREGROUND = "#00ff00"
# negative sizes are pixels in Tk
TIME_FONT = ("Arial", -60, "bold")
DATE_FONT = ("Arial", -30)
TICK_MS = 1000


class ClockWindow(tk.Tk):
    def __init__(
        self,
        config: ClockConfiguration,
        now: Callable[[], datetime] | None = None,
    ):
        super().__init__()
        self.title(WINDOW_TITLE)
        w, h = WINDOW_SIZE
        self.geometry(f"{w}x{h}")
        self.resizable(False, False)
        self.configure(bg=BACKGROUND)

        self.config_state = config
        self.now = now or _now_local
        self._tick_job: str | None = None
        self.last_frame: Frame | None = None

        self.canvas = tk.Canvas(self, bg=BACKGROUND, highlightthickness=0, borderwidth=0)
        self.canvas.pack(fill="both", expand=True)
        self._time_item = self.canvas.create_text(0, 0, text="", fill=FOREGROUND, font=TIME_FONT, anchor="center")
        self._date_item = self.canvas.create_text(0, 0, text="", fill=FOREGROUND, font=DATE_FONT, anchor="center")

        self.bind("<KeyPress>", self._on_key)
        self.canvas.bind("<Configure>", lambda _e: self.redraw())
        self.protocol("WM_DELETE_WINDOW", self.close)

        self.redraw()
        self._tick_job = self.after(TICK_MS, self._tick)

    # -------- Crash guard --------

    def report_callback_exception(self, exc, val, tb):  # type: ignore[override]
        logger.error("callback failed", exc_info=(exc, val, tb))
        try:
            messagebox.showerror("Crash prevented", f"{exc.__name__}: {val}")
        except tk.TclError:
            pass

    # -------------------------
    # Rendering
    # -------------------------

    def redraw(self) -> Frame:
        frame = build_frame(self.config_state, take_snapshot(self.now()), style="window")

        width = self.canvas.winfo_width()
        height = self.canvas.winfo_height()
        if width <= 1 or height <= 1:
            # not mapped yet
            width, height = WINDOW_SIZE

        # time centered in the upper half, date in the lower half
        self.canvas.coords(self._time_item, width / 2, height / 4)
        self.canvas.itemconfigure(self._time_item, text=frame.time_text)
        self.canvas.coords(self._date_item, width / 2, height * 3 / 4)
        self.canvas.itemconfigure(self._date_item, text=frame.date_text or "")

        self.last_frame = frame
        return frame

    def _tick(self) -> None:
        # reschedule first so one failed render doesn't stop the clock
        self._tick_job = self.after(TICK_MS, self._tick)
        self.redraw()

    # -------------------------
    # Input
    # -------------------------

    def _on_key(self, event: tk.Event) -> None:
        if self.config_state.handle_key(event.char):
            self.redraw()

    def close(self) -> None:
        if self._tick_job:
            try:
                self.after_cancel(self._tick_job)
            except tk.TclError:
                pass
            self._tick_job = None
        logger.info("window closed")
        self.destroy()


# -------------------------
# GUI Entrypoint
# -------------------------


def _report_startup_failure(message: str) -> None:
    logger.error(message)
    try:
        root = tk.Tk()
        root.withdraw()
        messagebox.showerror("Error!", message, parent=root)
        root.destroy()
    except tk.TclError:
        print(f"🚫 {message}", file=sys.stderr)


def run_gui(config: ClockConfiguration | None = None) -> int:
    config = config or ClockConfiguration()
    try:
        app = ClockWindow(config)
    except tk.TclError as e:
        _report_startup_failure(f"Window creation failed! Error: {e}")
        raise SystemExit(1)
    logger.info("window clock started (%r)", config)
    app.mainloop()
    return 0


def main() -> None:
    from .cli import main as cli_main

    raise SystemExit(cli_main(["window", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
