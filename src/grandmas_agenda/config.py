"""Configuration models and helpers for the agenda reminder."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class ReminderSettings:
    """Runtime configuration for the clock, poll loop and prompts."""

    tick_interval: timedelta = timedelta(milliseconds=100)
    poll_interval: timedelta = timedelta(milliseconds=100)
    flush_threshold: float = 1.0
    confirm_delay: timedelta = timedelta(seconds=3)
    clear_delay: timedelta = timedelta(seconds=2)
    min_speed: int = 1
    max_speed: int = 30

    @classmethod
    def from_options(
        cls,
        tick_seconds: float = 0.1,
        poll_seconds: float | None = None,
        confirm_seconds: float = 3.0,
        clear_seconds: float = 2.0,
    ) -> "ReminderSettings":
        poll = poll_seconds if poll_seconds is not None else tick_seconds
        return cls(
            tick_interval=timedelta(seconds=tick_seconds),
            poll_interval=timedelta(seconds=poll),
            confirm_delay=timedelta(seconds=confirm_seconds),
            clear_delay=timedelta(seconds=clear_seconds),
        )

    def accepts_speed(self, speed_factor: int) -> bool:
        return self.min_speed <= speed_factor <= self.max_speed
