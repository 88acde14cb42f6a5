"""Time utility helpers for build timestamps."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def now_local() -> datetime:
    """Return current naive local wall-clock time."""

    return datetime.now()


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a space or ``T`` separator."""

    return datetime.fromisoformat(value.strip())


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""

    return lambda: moment
