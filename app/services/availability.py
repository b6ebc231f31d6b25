"""
Join-link availability window for a scheduled masterclass.

Window model:
- opens_at = start - lead (one hour by default)
- ends_at  = end, or start when the masterclass has no end instant
- now >  ends_at            -> ENDED     (no link, no countdown)
- opens_at <= now <= ends_at -> JOINABLE  (link exposed)
- now <  opens_at           -> NOT_YET   (countdown to start)

Everything here is pure except watch_window, which re-evaluates the window
on a fixed cadence and never decrements a cached countdown.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import AsyncIterator, Callable, Optional

JOIN_WINDOW_LEAD = timedelta(hours=1)

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR


class WindowState(str, Enum):
    NOT_YET = "not_yet"
    JOINABLE = "joinable"
    ENDED = "ended"


@dataclass(frozen=True)
class Countdown:
    days: int
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True)
class AvailabilityWindow:
    state: WindowState
    opens_at: datetime
    ends_at: datetime
    countdown: Optional[Countdown] = None

    @property
    def is_joinable(self) -> bool:
        return self.state == WindowState.JOINABLE


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are stored and compared as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def countdown_until(now: datetime, target: datetime) -> Countdown:
    """Split the millisecond difference into d/h/m/s by integer division."""
    remaining_ms = max(0, (as_utc(target) - as_utc(now)) // timedelta(milliseconds=1))
    return Countdown(
        days=remaining_ms // _MS_PER_DAY,
        hours=(remaining_ms // _MS_PER_HOUR) % 24,
        minutes=(remaining_ms // _MS_PER_MINUTE) % 60,
        seconds=(remaining_ms // _MS_PER_SECOND) % 60,
    )


def evaluate_window(
    now: datetime,
    start: datetime,
    end: Optional[datetime] = None,
    lead: timedelta = JOIN_WINDOW_LEAD,
) -> AvailabilityWindow:
    now, start = as_utc(now), as_utc(start)
    ends_at = as_utc(end) if end is not None else start
    opens_at = start - lead

    if now > ends_at:
        return AvailabilityWindow(WindowState.ENDED, opens_at, ends_at)
    if opens_at <= now:
        return AvailabilityWindow(WindowState.JOINABLE, opens_at, ends_at)
    return AvailabilityWindow(
        WindowState.NOT_YET, opens_at, ends_at, countdown_until(now, start)
    )


async def watch_window(
    start: datetime,
    end: Optional[datetime] = None,
    *,
    clock: Callable[[], datetime] = utcnow,
    interval: float = 1.0,
    lead: timedelta = JOIN_WINDOW_LEAD,
) -> AsyncIterator[AvailabilityWindow]:
    """
    Yield a freshly evaluated window every `interval` seconds.

    Each tick reads the clock again, so a late tick still lands in the right
    state. The generator finishes after yielding ENDED; cancelling the
    consuming task stops it between ticks.
    """
    while True:
        window = evaluate_window(clock(), start, end, lead)
        yield window
        if window.state == WindowState.ENDED:
            return
        await asyncio.sleep(interval)
