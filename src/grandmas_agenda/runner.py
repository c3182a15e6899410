"""Poll loop tying the clock, matcher, gate and input parser together."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from .clock import SimulatedClock
from .config import ReminderSettings
from .console import Console
from .gate import InteractionGate
from .input_parser import (
    FORMAT_HINT,
    answer_time_query,
    is_valid_time_input,
    resolve_query_time,
)
from .matcher import is_due_soon, is_exact_start
from .models import DUE_SOON_MINUTES
from .state import SchedulerState

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class AgendaRunner:
    """Checks the schedule against the simulated clock on every poll tick."""

    def __init__(
        self,
        state: SchedulerState,
        clock: SimulatedClock,
        console: Console,
        settings: Optional[ReminderSettings] = None,
        gate: Optional[InteractionGate] = None,
    ) -> None:
        self.state = state
        self.clock = clock
        self.console = console
        self.settings = settings or ReminderSettings()
        self.gate = gate or InteractionGate(console, self.settings)
        self._stop_event = threading.Event()

    def run(self) -> int:
        """Poll until the simulated day is over and return the exit code."""
        interval = self.settings.poll_interval.total_seconds()
        now = self.clock.sample()
        logger.info("Agenda started at simulated %s", now.strftime("%Y-%m-%d %H:%M:%S"))
        while not self.day_over(now):
            self.poll_once(now)
            if self._stop_event.wait(interval):
                logger.info("Agenda stopped before the end of the day.")
                return 0
            now = self.clock.sample()
        logger.info("Simulated day finished at %s", now.strftime("%Y-%m-%d %H:%M:%S"))
        return 0

    def stop(self) -> None:
        self._stop_event.set()

    def day_over(self, now: datetime) -> bool:
        return self.clock.hour_of_day(now) >= HOURS_PER_DAY

    def poll_once(self, now: datetime) -> None:
        self.check_schedule(now)
        self.handle_input(now)

    def check_schedule(self, now: datetime) -> None:
        for index, activity in enumerate(self.state.activities):
            if activity.done:
                continue
            if self.state.start_latch.check(
                index, now.minute, is_exact_start(activity, now)
            ):
                logger.info("Start trigger for %s at %s", activity.name, f"{now:%H:%M}")
                self.console.write(f"Time for {activity.name}")
                self.gate.confirm(activity)
            if self.state.due_soon_latch.check(
                index, now.minute, not activity.done and is_due_soon(activity, now)
            ):
                logger.info("Due-soon trigger for %s at %s", activity.name, f"{now:%H:%M}")
                self.console.write(
                    f"Don't forget to do {activity.name} in {DUE_SOON_MINUTES} minutes!"
                )
                self.gate.confirm(activity)

    def handle_input(self, now: datetime) -> None:
        chunk = self.console.read_available()
        if not chunk:
            return
        for line in self.state.input_buffer.feed(chunk):
            if not is_valid_time_input(line):
                logger.debug("Rejected time query %r", line)
                self.console.write(FORMAT_HINT)
                continue
            answer_time_query(
                self.state.activities,
                self.gate,
                self.console,
                resolve_query_time(line, now),
            )
            self.console.pause(self.settings.clear_delay.total_seconds())
            self.console.clear()
