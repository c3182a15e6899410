"""Time-window predicates and once-per-minute trigger latches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .models import DUE_SOON_MINUTES, Activity


class ClockReading(Protocol):
    hour: int
    minute: int


def _minutes(value: ClockReading) -> int:
    return value.hour * 60 + value.minute


def is_within(activity: Activity, now: ClockReading) -> bool:
    """True when ``now`` falls in ``[start, end)`` at minute granularity."""
    return (
        activity.start.minutes_since_midnight
        <= _minutes(now)
        < activity.end.minutes_since_midnight
    )


def is_exact_start(activity: Activity, now: ClockReading) -> bool:
    return now.hour == activity.start.hour and now.minute == activity.start.minute


def minutes_until_end(activity: Activity, now: ClockReading) -> int:
    """Minutes left before the activity ends, counted within a single day."""
    return activity.end.minutes_since_midnight - _minutes(now)


def is_due_soon(activity: Activity, now: ClockReading) -> bool:
    return (
        is_within(activity, now)
        and minutes_until_end(activity, now) == DUE_SOON_MINUTES
    )


@dataclass(slots=True)
class MinuteLatch:
    """Bitmask of activity indices that already fired in the current minute.

    Every check marks its index, hit or miss, and any change of the observed
    minute clears the whole mask. The mark happens before the minute
    rollover is noticed, so the first index checked in a new minute still
    sees its bit from the previous minute and is only evaluated again on
    the next poll.
    """

    mask: int = 0
    previous_minute: Optional[int] = None

    def is_latched(self, index: int) -> bool:
        return bool((self.mask >> index) & 1)

    def check(self, index: int, minute: int, condition: bool) -> bool:
        if self.previous_minute is None:
            self.previous_minute = minute

        fired = not self.is_latched(index) and condition
        self.mask |= 1 << index

        if minute != self.previous_minute:
            self.mask = 0
            self.previous_minute = minute
        return fired
