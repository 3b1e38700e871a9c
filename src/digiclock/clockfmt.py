from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ._util import _now_local
from .settings import TimeFormat

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# field separators per front end
_SEPARATORS = {
    "window": ":",
    "console": " : ",
}


@dataclass(frozen=True)
class TimeSnapshot:
    """
    One reading of the local clock.

    weekday is 0-based from Sunday, month is 0-based from January,
    year is the full calendar year.
    """

    hour: int
    minute: int
    second: int
    weekday: int
    month: int
    day: int
    year: int


def snapshot_from_datetime(dt: datetime) -> TimeSnapshot:
    # datetime.weekday() counts from Monday
    return TimeSnapshot(
        hour=dt.hour,
        minute=dt.minute,
        second=dt.second,
        weekday=(dt.weekday() + 1) % 7,
        month=dt.month - 1,
        day=dt.day,
        year=dt.year,
    )


def take_snapshot(now: datetime | None = None) -> TimeSnapshot:
    """Read the host clock (or the given datetime) into a fresh snapshot."""
    return snapshot_from_datetime(now if now is not None else _now_local())


def _check_range(name: str, value: int, lo: int, hi: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or not lo <= value <= hi:
        raise ValueError(f"{name} out of range: {value!r} (expected {lo}..{hi})")


def _bounded(text: str, limit: int | None) -> str:
    if limit is None:
        return text
    if limit < 0:
        raise ValueError(f"limit must be >= 0 (got {limit})")
    return text[:limit]


def parse_time_format(value: object) -> TimeFormat:
    """
    Accepts:
      - 12 / 24 (int or TimeFormat)
      - "12", "24", "12h", "24h" (any case, surrounding blanks ignored)
    Raises ValueError for anything else.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value in (12, 24):
            return TimeFormat(value)
        raise ValueError(f"time format must be 12 or 24 (got {value!r})")

    s = str(value or "").strip().lower()
    if s.endswith("h"):
        s = s[:-1]
    if s == "12":
        return TimeFormat.H12
    if s == "24":
        return TimeFormat.H24
    raise ValueError(f"time format must be 12 or 24 (got {value!r})")


def display_hour(hour: int, time_format: TimeFormat | int) -> int:
    """Hour as shown on the clock face: 0 -> 12 and 13..23 -> 1..11 in 12-hour mode."""
    _check_range("hour", hour, 0, 23)
    if parse_time_format(time_format) is TimeFormat.H24:
        return hour
    if hour == 0:
        return 12
    if hour > 12:
        return hour - 12
    return hour


def meridiem(hour: int) -> str:
    # decided on the 0..23 hour, before any 12-hour remapping
    _check_range("hour", hour, 0, 23)
    return "PM" if hour >= 12 else "AM"


def format_time(
    snapshot: TimeSnapshot,
    time_format: TimeFormat | int,
    *,
    style: str = "window",
    limit: int | None = None,
) -> str:
    """
    Format the time part of a snapshot.

    style="window"  -> "03:30:45 PM" / "15:30:45"
    style="console" -> "03 : 30 : 45 PM" / "15 : 30 : 45"

    The AM/PM suffix only appears in 12-hour mode. When limit is given the
    result never exceeds limit characters.
    """
    fmt = parse_time_format(time_format)
    sep = _SEPARATORS.get(style)
    if sep is None:
        raise ValueError(f"unknown style {style!r} (expected one of {sorted(_SEPARATORS)})")

    _check_range("minute", snapshot.minute, 0, 59)
    _check_range("second", snapshot.second, 0, 60)

    hour = display_hour(snapshot.hour, fmt)
    text = sep.join(f"{v:02d}" for v in (hour, snapshot.minute, snapshot.second))
    if fmt is TimeFormat.H12:
        text = f"{text} {meridiem(snapshot.hour)}"
    return _bounded(text, limit)


def format_date(snapshot: TimeSnapshot, *, limit: int | None = None) -> str:
    """
    Format the date part of a snapshot as "<Weekday>, <Month> <DD>, <YYYY>",
    e.g. "Saturday, September 06, 2025".
    """
    _check_range("weekday", snapshot.weekday, 0, len(WEEKDAY_NAMES) - 1)
    _check_range("month", snapshot.month, 0, len(MONTH_NAMES) - 1)
    _check_range("day", snapshot.day, 1, 31)

    text = (
        f"{WEEKDAY_NAMES[snapshot.weekday]}, "
        f"{MONTH_NAMES[snapshot.month]} {snapshot.day:02d}, {snapshot.year}"
    )
    return _bounded(text, limit)
