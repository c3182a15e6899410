"""Built-in daily schedule and JSON schedule file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import MAX_ACTIVITIES, MAX_NAME_LENGTH, Activity, TimeOfDay
from .paths import get_schedule_path

logger = logging.getLogger(__name__)

DEFAULT_SCHEDULE: tuple[tuple[str, str, str], ...] = (
    ("Breakfast", "08:50", "09:30"),
    ("Morning walk", "09:00", "10:15"),
    ("House cleaning", "10:20", "10:55"),
    ("Lunch", "11:00", "12:00"),
    ("Afternoon nap", "13:45", "15:00"),
    ("Grocery shopping", "15:20", "15:45"),
    ("Cooking", "16:15", "17:30"),
    ("Dinner", "17:45", "18:30"),
    ("Evening reading", "19:00", "21:30"),
    ("Get medicine", "21:30", "21:45"),
)


class ScheduleError(Exception):
    """Raised when a schedule file cannot be loaded."""


class ActivityEntry(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    start: str
    end: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, value: str) -> str:
        TimeOfDay.parse(value)
        return value


class ScheduleFile(BaseModel):
    activities: list[ActivityEntry] = Field(min_length=1, max_length=MAX_ACTIVITIES)

    model_config = ConfigDict(extra="forbid")


def default_activities() -> list[Activity]:
    """Return a fresh copy of the built-in schedule."""
    return [
        Activity(name, TimeOfDay.parse(start), TimeOfDay.parse(end))
        for name, start, end in DEFAULT_SCHEDULE
    ]


def parse_schedule(payload: object) -> list[Activity]:
    """Validate a decoded schedule document and build activities from it."""
    try:
        document = ScheduleFile.model_validate(payload)
        return [
            Activity(entry.name, TimeOfDay.parse(entry.start), TimeOfDay.parse(entry.end))
            for entry in document.activities
        ]
    except (ValidationError, ValueError) as exc:
        raise ScheduleError(str(exc)) from exc


def load_schedule(path: Optional[Path] = None) -> list[Activity]:
    """Load activities from ``path``, the user schedule file, or the defaults.

    An explicit path must exist. Without one, the per-user ``schedule.json``
    is used when present, otherwise the built-in schedule.
    """
    if path is None:
        candidate = get_schedule_path()
        if not candidate.exists():
            logger.debug("No schedule file at %s; using built-in schedule.", candidate)
            return default_activities()
        path = candidate

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScheduleError(f"{path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ScheduleError(f"{path}: line {exc.lineno}: {exc.msg}") from exc

    try:
        activities = parse_schedule(payload)
    except ScheduleError as exc:
        raise ScheduleError(f"{path}: {exc}") from exc
    logger.info("Loaded %d activities from %s", len(activities), path)
    return activities
