"""Shared low-level helpers used by both cli.py and gui.py."""

from __future__ import annotations

import logging
from datetime import datetime

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"


def _now_local() -> datetime:
    return datetime.now().astimezone()


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
