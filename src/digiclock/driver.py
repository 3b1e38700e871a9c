from __future__ import annotations

import logging
import os
import signal
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, NamedTuple, TextIO

from ._util import _now_local
from .clockfmt import TimeSnapshot, format_date, format_time, take_snapshot
from .settings import ClockConfiguration

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    time_text: str
    date_text: str | None = None

    def lines(self) -> list[str]:
        out = [self.time_text]
        if self.date_text is not None:
            out.append(self.date_text)
        return out


def build_frame(config: ClockConfiguration, snapshot: TimeSnapshot, style: str = "window") -> Frame:
    # read both settings together so a concurrent toggle can't split them
    time_format, show_date = config.read()
    time_text = format_time(snapshot, time_format, style=style)
    date_text = format_date(snapshot) if show_date else None
    return Frame(time_text, date_text)


# -------------------------
# Terminal adapters
# -------------------------


class Terminal(ABC):
    """Where the console clock draws: wipe the screen, then write one frame."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    @abstractmethod
    def clear(self) -> None: ...

    def write(self, text: str) -> None:
        out = self.stream or sys.stdout
        out.write(text + "\n")
        out.flush()


class PosixTerminal(Terminal):
    CLEAR_COMMAND = "clear"

    def clear(self) -> None:
        os.system(self.CLEAR_COMMAND)


class WindowsTerminal(Terminal):
    CLEAR_COMMAND = "cls"

    def clear(self) -> None:
        os.system(self.CLEAR_COMMAND)


def select_terminal(platform_name: str | None = None, stream: TextIO | None = None) -> Terminal:
    name = platform_name or os.name
    if name == "nt":
        return WindowsTerminal(stream)
    return PosixTerminal(stream)


# -------------------------
# Console loop
# -------------------------


class ConsoleClock:
    """
    Redraws the time once per interval until the stop token is set.

    Each tick re-reads the clock; a late tick is simply late, nothing is
    made up for.
    """

    def __init__(
        self,
        terminal: Terminal,
        config: ClockConfiguration,
        *,
        interval: float = 1.0,
        now: Callable[[], datetime] | None = None,
        stop: threading.Event | None = None,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0 (got {interval})")
        self.terminal = terminal
        self.config = config
        self.interval = interval
        self.now = now or _now_local
        self.stop = stop or threading.Event()

    def tick(self) -> Frame:
        frame = build_frame(self.config, take_snapshot(self.now()), style="console")
        self.terminal.clear()
        self.terminal.write("\n".join(frame.lines()))
        logger.debug("tick: %s", frame.time_text)
        return frame

    def run(self, max_ticks: int | None = None) -> int:
        """Draw frames until stopped (or max_ticks reached). Returns frames drawn."""
        drawn = 0
        logger.info("console clock started (interval=%ss)", self.interval)
        try:
            while not self.stop.is_set():
                self.tick()
                drawn += 1
                if max_ticks is not None and drawn >= max_ticks:
                    break
                # wait() returns early when stop is set
                self.stop.wait(self.interval)
        except KeyboardInterrupt:
            # Ctrl+C, or SIGTERM via install_stop_signals
            logger.info("interrupted, stopping")
            self.stop.set()
        logger.info("console clock stopped after %d frame(s)", drawn)
        return drawn


def _interrupt(signum, _frame) -> None:
    raise KeyboardInterrupt(f"signal {signum}")


def install_stop_signals() -> None:
    """Make SIGINT and SIGTERM both end ConsoleClock.run the same way Ctrl+C does."""
    signal.signal(signal.SIGINT, signal.default_int_handler)
    sigterm = getattr(signal, "SIGTERM", None)
    if sigterm is not None:
        signal.signal(sigterm, _interrupt)
