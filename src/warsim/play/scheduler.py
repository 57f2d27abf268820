"""Cancellable repeating tick used for auto-play."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickScheduler:
    """Calls a function at a fixed cadence until cancelled.

    Each tick is a one-shot ``threading.Timer`` that re-arms itself after
    the callback returns, so ticks never overlap. Starting a new schedule
    cancels the previous one under the same lock, and every timer carries
    a generation number so a tick that was already firing when it got
    cancelled does not re-arm.

    Thread-safety: start() and cancel() are protected by a threading.Lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self, interval: float, callback: Callable[[], bool]) -> None:
        """Replace any running schedule with a new one.

        Args:
            interval: Seconds between ticks
            callback: Called on every tick; returning False stops the schedule
        """
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._arm_locked(self._generation, interval, callback)
        logger.debug(f"Scheduler started at {interval:.3f}s per tick")

    def cancel(self) -> None:
        """Stop ticking. A tick already in progress finishes but does not re-arm."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def _arm_locked(self, generation: int, interval: float, callback: Callable[[], bool]) -> None:
        timer = threading.Timer(interval, self._fire, args=(generation, interval, callback))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int, interval: float, callback: Callable[[], bool]) -> None:
        with self._lock:
            if generation != self._generation:
                return
        keep_going = callback()
        with self._lock:
            if generation != self._generation:
                return
            if keep_going:
                self._arm_locked(generation, interval, callback)
            else:
                self._timer = None
