from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from datetime import datetime, timedelta

import pytest

from grandmas_agenda.clock import SimulatedClock
from grandmas_agenda.config import ReminderSettings
from grandmas_agenda.models import Activity, TimeOfDay

DAY = datetime(2026, 10, 17)


def at(hour: int, minute: int, second: int = 0) -> datetime:
    return DAY.replace(hour=hour, minute=minute, second=second)


def make_activity(name: str, start: str, end: str, done: bool = False) -> Activity:
    return Activity(name, TimeOfDay.parse(start), TimeOfDay.parse(end), done)


class FakeConsole:
    """Scripted console: answers prompts from a queue and records output."""

    def __init__(self, answers=(), keystrokes=()) -> None:
        self.answers = deque(answers)
        self.keystrokes = deque(keystrokes)
        self.output: list[str] = []
        self.prompts: list[str] = []
        self.pauses: list[float] = []
        self.clears = 0
        self.blocking_depth = 0
        self.prompted_while_blocking: list[bool] = []

    def write(self, message: str) -> None:
        self.output.append(message)

    def prompt_line(self, message: str) -> str:
        self.prompts.append(message)
        self.prompted_while_blocking.append(self.blocking_depth > 0)
        if not self.answers:
            raise EOFError("no scripted answers left")
        return self.answers.popleft()

    def read_available(self) -> str:
        return self.keystrokes.popleft() if self.keystrokes else ""

    @contextmanager
    def blocking_input(self):
        self.blocking_depth += 1
        try:
            yield
        finally:
            self.blocking_depth -= 1

    def pause(self, seconds: float) -> None:
        self.pauses.append(seconds)

    def clear(self) -> None:
        self.clears += 1


class SteppingClock(SimulatedClock):
    """Simulated clock that moves forward a fixed step on every sample."""

    def __init__(self, base: datetime, step_seconds: float) -> None:
        super().__init__(base=base)
        self.step_seconds = step_seconds
        self.samples: list[datetime] = []

    def sample(self) -> datetime:
        if self.samples:
            self.advance(self.step_seconds)
        now = super().sample()
        self.samples.append(now)
        return now


@pytest.fixture
def settings() -> ReminderSettings:
    return ReminderSettings(
        poll_interval=timedelta(0),
        confirm_delay=timedelta(0),
        clear_delay=timedelta(0),
    )


@pytest.fixture
def console() -> FakeConsole:
    return FakeConsole()
