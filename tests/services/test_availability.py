# tests/services/test_availability.py

from datetime import datetime, timedelta, timezone

import pytest

from app.services.availability import (
    WindowState,
    countdown_until,
    evaluate_window,
    watch_window,
)

START = datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc)
END = START + timedelta(minutes=120)


@pytest.mark.parametrize(
    "before_start",
    [
        timedelta(hours=1, seconds=1),
        timedelta(hours=1, minutes=59, seconds=59),
        timedelta(hours=23, minutes=59, seconds=59),
        timedelta(days=1, hours=2),
        timedelta(days=45, hours=7, minutes=3, seconds=9, milliseconds=999),
    ],
)
def test_not_yet_open_has_bounded_countdown(before_start):
    window = evaluate_window(START - before_start, START, END)

    assert window.state == WindowState.NOT_YET
    c = window.countdown
    assert c is not None
    assert c.days >= 0
    assert 0 <= c.hours < 24
    assert 0 <= c.minutes < 60
    assert 0 <= c.seconds < 60


@pytest.mark.parametrize(
    "now",
    [
        START - timedelta(hours=1),
        START - timedelta(minutes=30),
        START,
        START + timedelta(minutes=60),
        END,
    ],
)
def test_joinable_from_one_hour_before_start_until_end(now):
    window = evaluate_window(now, START, END)
    assert window.state == WindowState.JOINABLE
    assert window.countdown is None


def test_ended_is_sticky():
    states = [
        evaluate_window(END + timedelta(seconds=s), START, END).state
        for s in (1, 60, 3600, 86400 * 30)
    ]
    assert states == [WindowState.ENDED] * 4


def test_missing_end_falls_back_to_start():
    assert evaluate_window(START, START).state == WindowState.JOINABLE
    ended = evaluate_window(START + timedelta(seconds=1), START)
    assert ended.state == WindowState.ENDED
    assert ended.ends_at == START


def test_naive_datetimes_are_treated_as_utc():
    naive_start = START.replace(tzinfo=None)
    window = evaluate_window(naive_start - timedelta(minutes=10), naive_start)
    assert window.state == WindowState.JOINABLE
    assert window.opens_at == START - timedelta(hours=1)


def test_custom_lead_moves_the_opening():
    now = START - timedelta(minutes=20)
    assert evaluate_window(now, START, END, lead=timedelta(minutes=15)).state == WindowState.NOT_YET
    assert evaluate_window(now, START, END, lead=timedelta(minutes=30)).state == WindowState.JOINABLE


def test_countdown_uses_whole_units():
    c = countdown_until(START - timedelta(days=2, hours=3, minutes=4, seconds=5, milliseconds=600), START)
    assert (c.days, c.hours, c.minutes, c.seconds) == (2, 3, 4, 5)


def test_countdown_never_negative():
    c = countdown_until(START + timedelta(minutes=5), START)
    assert (c.days, c.hours, c.minutes, c.seconds) == (0, 0, 0, 0)


def test_catalog_scenario_window():
    """2025-02-01 10:00 UTC, 120 minutes."""
    joinable = evaluate_window(datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc), START, END)
    assert joinable.state == WindowState.JOINABLE

    not_yet = evaluate_window(datetime(2025, 1, 31, 8, 0, tzinfo=timezone.utc), START, END)
    assert not_yet.state == WindowState.NOT_YET
    c = not_yet.countdown
    # 26 hours until the start
    assert (c.days, c.hours, c.minutes, c.seconds) == (1, 2, 0, 0)


class FakeClock:
    def __init__(self, *times):
        self._times = list(times)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if len(self._times) > 1:
            return self._times.pop(0)
        return self._times[0]


@pytest.mark.asyncio
async def test_watch_window_rederives_state_each_tick():
    # A lagging timer jumps straight from NOT_YET past the whole window.
    clock = FakeClock(
        START - timedelta(hours=2),
        START - timedelta(minutes=59),
        END + timedelta(seconds=1),
        END + timedelta(hours=1),
    )

    states = [
        w.state async for w in watch_window(START, END, clock=clock, interval=0)
    ]

    assert states == [WindowState.NOT_YET, WindowState.JOINABLE, WindowState.ENDED]
    assert clock.calls == 3


@pytest.mark.asyncio
async def test_watch_window_countdown_follows_the_clock():
    clock = FakeClock(
        START - timedelta(hours=3),
        START - timedelta(hours=2, minutes=30),
        END + timedelta(seconds=1),
    )

    windows = [w async for w in watch_window(START, END, clock=clock, interval=0)]

    assert windows[0].countdown.hours == 3
    assert windows[1].countdown.hours == 2
    assert windows[1].countdown.minutes == 30
    assert windows[-1].countdown is None
