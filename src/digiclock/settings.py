from __future__ import annotations

import logging
import os
import threading
from enum import IntEnum

logger = logging.getLogger(__name__)

TOGGLE_FORMAT_KEY = "t"
TOGGLE_DATE_KEY = "d"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TimeFormat(IntEnum):
    H12 = 12
    H24 = 24

    def flipped(self) -> "TimeFormat":
        return TimeFormat.H12 if self is TimeFormat.H24 else TimeFormat.H24


class ClockConfiguration:
    """
    The two user-facing clock settings: 12/24-hour display and date visibility.

    Only the input handlers write it; the render path reads it. Both fields
    sit behind one lock so a repaint on another thread never sees half a
    toggle.
    """

    def __init__(self, time_format: TimeFormat = TimeFormat.H24, show_date: bool = True):
        self._lock = threading.Lock()
        self._time_format = TimeFormat(time_format)
        self._show_date = bool(show_date)

    def __repr__(self) -> str:
        fmt, show = self.read()
        return f"ClockConfiguration(time_format={fmt.name}, show_date={show})"

    @property
    def time_format(self) -> TimeFormat:
        with self._lock:
            return self._time_format

    @property
    def show_date(self) -> bool:
        with self._lock:
            return self._show_date

    def read(self) -> tuple[TimeFormat, bool]:
        with self._lock:
            return self._time_format, self._show_date

    def set_time_format(self, time_format: TimeFormat | int) -> None:
        with self._lock:
            self._time_format = TimeFormat(time_format)

    def toggle_format(self) -> TimeFormat:
        with self._lock:
            self._time_format = self._time_format.flipped()
            new = self._time_format
        logger.info("time format -> %d-hour", int(new))
        return new

    def toggle_date(self) -> bool:
        with self._lock:
            self._show_date = not self._show_date
            new = self._show_date
        logger.info("date display -> %s", "on" if new else "off")
        return new

    def handle_key(self, key: object) -> bool:
        """
        Apply a single keypress. 't'/'T' flips 12/24-hour, 'd'/'D' flips the
        date line, everything else is ignored.

        Returns True when the configuration changed.
        """
        if not isinstance(key, str) or len(key) != 1:
            return False
        k = key.lower()
        if k == TOGGLE_FORMAT_KEY:
            self.toggle_format()
            return True
        if k == TOGGLE_DATE_KEY:
            self.toggle_date()
            return True
        return False


def resolve_log_level(level_arg: str | None) -> str:
    """--log-level wins, then DIGICLOCK_LOG_LEVEL, then WARNING."""
    for candidate in (level_arg, os.environ.get("DIGICLOCK_LOG_LEVEL")):
        if candidate and candidate.strip():
            name = candidate.strip().upper()
            if name not in LOG_LEVELS:
                raise SystemExit(f"Unknown log level {candidate!r}. Use one of: {', '.join(LOG_LEVELS)}")
            return name
    return "WARNING"
