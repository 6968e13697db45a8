"""Wall-clock collaborators injected into the simulation.

All timestamps are integer epoch milliseconds.
"""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


class Clock(Protocol):
    def now(self) -> int: ...

    def hour_of_day(self) -> int: ...


class SystemClock:
    """Reads the host clock. Hour of day is in local time."""

    def now(self) -> int:
        return int(time.time() * 1000)

    def hour_of_day(self) -> int:
        return datetime.now().hour


class ManualClock:
    """Clock driven by the caller. Used by tests and offline replays.

    Unless an hour is pinned with ``hour`` or :meth:`set_hour`, the hour of
    day is derived from ``now`` in UTC.
    """

    def __init__(self, now_ms: int = 0, hour: int | None = None) -> None:
        if now_ms < 0:
            raise ValueError("now_ms must be >= 0")
        self._now = now_ms
        self._hour: int | None = None
        if hour is not None:
            self.set_hour(hour)

    def now(self) -> int:
        return self._now

    def hour_of_day(self) -> int:
        if self._hour is not None:
            return self._hour
        return datetime.fromtimestamp(self._now / 1000, tz=timezone.utc).hour

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("cannot move a clock backwards")
        self._now += ms
        return self._now

    def set_hour(self, hour: int | None) -> None:
        if hour is not None and not 0 <= hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {hour}")
        self._hour = hour


def is_night(hour: int, start: int, end: int) -> bool:
    """True when *hour* falls in the window [start, 24) + [0, end)."""
    return hour >= start or hour < end
