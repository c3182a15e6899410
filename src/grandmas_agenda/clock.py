"""Simulated wall clock driven by a background accelerator thread."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)


class SimulatedClock:
    """Wall clock that advances only by offsets fed to :meth:`advance`.

    The accelerator thread is the only writer of the pending offset and the
    poll loop the only consumer; both go through ``_lock`` so that a tick
    landing between the read and the reset of :meth:`sample` is never lost.
    """

    def __init__(self, base: Optional[datetime] = None, flush_threshold: float = 1.0) -> None:
        self.base = base or datetime.now()
        self.flush_threshold = flush_threshold
        self._pending = 0.0
        self._applied = 0.0
        self._lock = threading.Lock()

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("simulated time cannot run backwards")
        with self._lock:
            self._pending += seconds

    def sample(self) -> datetime:
        """Fold in any pending offset past the threshold and return the time."""
        with self._lock:
            if self._pending >= self.flush_threshold:
                self._applied += self._pending
                self._pending = 0.0
            applied = self._applied
        return self.base + timedelta(seconds=applied)

    @property
    def pending(self) -> float:
        with self._lock:
            return self._pending

    @property
    def elapsed(self) -> float:
        """Simulated seconds applied so far."""
        with self._lock:
            return self._applied

    def hour_of_day(self, now: datetime) -> int:
        """Hours since midnight of the starting day; 24 once the day is over."""
        midnight = self.base.replace(hour=0, minute=0, second=0, microsecond=0)
        return int((now - midnight).total_seconds() // 3600)


class ClockAccelerator:
    """Feed ``speed_factor`` simulated seconds per real second into a clock."""

    def __init__(
        self,
        clock: SimulatedClock,
        speed_factor: int,
        tick_interval: timedelta = timedelta(milliseconds=100),
    ) -> None:
        self.clock = clock
        self.speed_factor = speed_factor
        self.tick_interval = tick_interval
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="clock-accelerator", daemon=True
        )
        self._thread.start()
        logger.info(
            "Clock accelerator started at x%d (tick %.3fs).",
            self.speed_factor,
            self.tick_interval.total_seconds(),
        )

    def stop(self, timeout: float = 1.0) -> None:
        thread = self._thread
        if not thread:
            return
        self._stop_event.set()
        thread.join(timeout=timeout)
        self._thread = None
        logger.info("Clock accelerator stopped.")

    def is_running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def tick(self) -> None:
        self.clock.advance(self.speed_factor * self.tick_interval.total_seconds())

    def _run(self) -> None:
        interval = self.tick_interval.total_seconds()
        while not self._stop_event.wait(interval):
            self.tick()
