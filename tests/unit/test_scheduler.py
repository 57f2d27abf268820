"""Tests for the auto-play scheduler."""

import threading
import time

from warsim.play.scheduler import TickScheduler


def test_ticks_until_callback_stops():
    calls = []
    done = threading.Event()
    scheduler = TickScheduler()

    def tick() -> bool:
        calls.append(1)
        if len(calls) == 3:
            done.set()
            return False
        return True

    scheduler.start(0.001, tick)

    assert done.wait(2.0)
    time.sleep(0.05)
    assert len(calls) == 3
    assert scheduler.running is False


def test_cancel_before_first_tick():
    calls = []
    scheduler = TickScheduler()

    scheduler.start(0.2, lambda: calls.append(1) or True)
    assert scheduler.running is True
    scheduler.cancel()
    time.sleep(0.3)

    assert calls == []
    assert scheduler.running is False


def test_restart_replaces_previous_schedule():
    """Only the most recent schedule keeps firing."""
    first = []
    second = threading.Event()
    scheduler = TickScheduler()

    scheduler.start(0.2, lambda: first.append(1) or True)
    scheduler.start(0.001, lambda: second.set() or False)

    assert second.wait(2.0)
    time.sleep(0.3)
    assert first == []
