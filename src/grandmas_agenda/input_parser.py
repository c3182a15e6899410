"""Line assembly and validation for time queries typed while polling."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Sequence

from .matcher import is_within
from .models import Activity

if TYPE_CHECKING:
    from .console import Console
    from .gate import InteractionGate

logger = logging.getLogger(__name__)

NOW_TOKEN = "now"
FORMAT_HINT = 'Please enter a time ("now" or "HH:MM")'
NO_ACTIVITY = "There is no activity to do."

_TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


@dataclass(slots=True)
class InputAccumulator:
    """Collects raw keystrokes until a full line is available."""

    buffer: str = ""

    def feed(self, chunk: str) -> list[str]:
        """Append ``chunk`` and return every line it completed."""
        self.buffer += chunk
        *complete, self.buffer = self.buffer.split("\n")
        return [line.rstrip("\r") for line in complete]

    def clear(self) -> None:
        self.buffer = ""


def _parse_clock(text: str) -> tuple[int, int] | None:
    match = _TIME_PATTERN.fullmatch(text)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def is_valid_time_input(text: str) -> bool:
    return text == NOW_TOKEN or _parse_clock(text) is not None


def resolve_query_time(text: str, now: datetime) -> datetime:
    """Map a validated query to a datetime on the current simulated day."""
    if text == NOW_TOKEN:
        return now
    parsed = _parse_clock(text)
    if parsed is None:
        raise ValueError(f"not a valid time query: {text!r}")
    hour, minute = parsed
    return now.replace(hour=hour, minute=minute)


def answer_time_query(
    activities: Sequence[Activity],
    gate: "InteractionGate",
    console: "Console",
    query_time: datetime,
) -> list[Activity]:
    """Route every activity in progress at ``query_time`` through the gate."""
    matched: list[Activity] = []
    for activity in reversed(activities):
        if is_within(activity, query_time):
            console.write(f"Time for {activity.name}")
            gate.confirm(activity)
            matched.append(activity)

    if not matched:
        console.write(NO_ACTIVITY)
    logger.debug(
        "Query %s matched %s",
        query_time.strftime("%H:%M"),
        [activity.name for activity in matched],
    )
    return matched
