from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, TextIO

from ._util import setup_logging
from .clockfmt import parse_time_format
from .driver import ConsoleClock, install_stop_signals, select_terminal
from .settings import LOG_LEVELS, ClockConfiguration, TimeFormat, resolve_log_level

logger = logging.getLogger(__name__)

PROMPT = "Select time format:\n1. 12-hour\n2. 24-hour\nEnter 1 or 2: "
INVALID_CHOICE = "Invalid input. Please enter 1 or 2.\n"

_MENU_CHOICES = {1: TimeFormat.H12, 2: TimeFormat.H24}


# -------------------------
# Startup prompt
# -------------------------


def prompt_time_format(read: Callable[[], str] | None = None, out: TextIO | None = None) -> TimeFormat:
    """
    Ask for 12- or 24-hour display until the answer is 1 or 2.
    Anything else (including non-numbers) re-prompts. EOF aborts.
    """
    read = read or sys.stdin.readline
    out = out or sys.stdout

    while True:
        out.write(PROMPT)
        out.flush()
        line = read()
        if line == "":
            raise SystemExit("No time format selected (end of input).")
        try:
            choice = int(line.strip())
        except ValueError:
            choice = None
        if choice in _MENU_CHOICES:
            return _MENU_CHOICES[choice]
        out.write(INVALID_CHOICE)


# -------------------------
# Argument helpers
# -------------------------


def _format_arg(value: str) -> TimeFormat:
    try:
        return parse_time_format(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from e
    if f <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0 (got {value!r})")
    return f


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1 (got {value!r})")
    return n


# -------------------------
# Commands
# -------------------------


def cmd_console(args: argparse.Namespace) -> int:
    time_format = args.format if args.format is not None else prompt_time_format()
    config = ClockConfiguration(time_format=time_format, show_date=args.show_date)

    clock = ConsoleClock(select_terminal(), config, interval=args.interval)
    install_stop_signals()
    clock.run(max_ticks=args.ticks)
    return 0


def cmd_window(args: argparse.Namespace) -> int:
    # tkinter is imported lazily so the console clock works without Tk
    try:
        from .gui import run_gui
    except ImportError as e:
        message = f"Window clock unavailable, tkinter could not be loaded: {e}"
        logger.error(message)
        print(f"🚫 {message}", file=sys.stderr)
        raise SystemExit(1)

    time_format = args.format if args.format is not None else TimeFormat.H24
    config = ClockConfiguration(time_format=time_format, show_date=not args.no_date)
    return run_gui(config)


def _add_log_level(p: argparse.ArgumentParser, default) -> None:
    p.add_argument(
        "--log-level",
        default=default,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: $DIGICLOCK_LOG_LEVEL or WARNING)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="digiclock", description="Digital clock for the terminal or a small window")
    _add_log_level(p, None)

    sub = p.add_subparsers(dest="cmd", required=True)

    console = sub.add_parser("console", help="Print the time in the terminal once per second")
    console.add_argument(
        "--format",
        type=_format_arg,
        default=None,
        help="12 or 24 (prompts when omitted)",
    )
    console.add_argument("--show-date", action="store_true", help="Print the date under the time")
    console.add_argument("--interval", type=_positive_float, default=1.0, help="Seconds between frames")
    console.add_argument("--ticks", type=_positive_int, default=None, help="Stop after N frames")
    _add_log_level(console, argparse.SUPPRESS)
    console.set_defaults(func=cmd_console)

    window = sub.add_parser("window", help="Open the clock window (T toggles 12/24, D toggles date)")
    window.add_argument("--format", type=_format_arg, default=None, help="12 or 24 (default 24)")
    window.add_argument("--no-date", action="store_true", help="Start with the date hidden")
    _add_log_level(window, argparse.SUPPRESS)
    window.set_defaults(func=cmd_window)

    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    setup_logging(resolve_log_level(args.log_level))
    logger.debug("args: %s", args)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
