"""Domain models for the daily schedule."""

from __future__ import annotations

from dataclasses import dataclass

MAX_ACTIVITIES = 10
MAX_NAME_LENGTH = 19
DUE_SOON_MINUTES = 10


@dataclass(frozen=True, order=True, slots=True)
class TimeOfDay:
    """Wall-clock hour and minute, ordered lexically."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        hour, sep, minute = value.strip().partition(":")
        if not sep or not hour.isdigit() or not minute.isdigit():
            raise ValueError(f"expected HH:MM, got {value!r}")
        return cls(int(hour), int(minute))

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(slots=True)
class Activity:
    """A named block of the day that the user is reminded about."""

    name: str
    start: TimeOfDay
    end: TimeOfDay
    done: bool = False

    def __post_init__(self) -> None:
        if not self.name or len(self.name) > MAX_NAME_LENGTH:
            raise ValueError(
                f"activity name must be 1..{MAX_NAME_LENGTH} characters: {self.name!r}"
            )
        if not self.start < self.end:
            raise ValueError(
                f"{self.name}: start {self.start} must be before end {self.end}"
            )

    def mark_done(self) -> None:
        self.done = True

    @property
    def duration_minutes(self) -> int:
        return self.end.minutes_since_midnight - self.start.minutes_since_midnight
