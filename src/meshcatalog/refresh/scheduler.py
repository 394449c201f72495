"""Periodic re-registration of dynamic capabilities."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any, Callable

from meshcatalog.refresh.supervisor import supervise

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = timedelta(hours=24)


class RefreshScheduler:
    """
    Runs a registration cycle now, then once per interval, forever.

    One instance per process, started once. Cycles never overlap: each one
    holds a lock for its whole duration. A failing cycle is logged and the
    schedule carries on; there is no retry before the next tick and no stop
    operation short of process exit.
    """

    def __init__(
        self,
        cycle: Callable[[], Any],
        interval: timedelta = REFRESH_INTERVAL,
        wait: Callable[[float], Any] | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            cycle: One registration cycle
            interval: Time between cycles after the first
            wait: Blocks for the given number of seconds (defaults to an
                internal event that is never set)
        """
        self._cycle = cycle
        self._interval = interval
        self._lock = threading.Lock()
        self._wait = wait or threading.Event().wait
        self._thread: threading.Thread | None = None
        self.cycles = 0

    @property
    def interval(self) -> timedelta:
        return self._interval

    @property
    def started(self) -> bool:
        return self._thread is not None

    def start(self) -> threading.Thread:
        """Run the schedule on a supervised daemon thread."""
        if self._thread is not None:
            raise RuntimeError("Refresh scheduler already started")
        self._thread = supervise("dynamic-registration", self.run)
        return self._thread

    def run(self, max_ticks: int | None = None) -> None:
        """
        Eager cycle, then one cycle per interval.

        ``max_ticks`` bounds the number of interval cycles; None runs forever.
        """
        self.run_cycle()
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self._wait(self._interval.total_seconds())
            ticks += 1
            self.run_cycle()

    def run_cycle(self) -> None:
        with self._lock:
            try:
                self._cycle()
            except Exception:
                logger.exception("Registration cycle failed")
            finally:
                self.cycles += 1
