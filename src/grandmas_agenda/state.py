"""Mutable state owned by the poll loop."""

from __future__ import annotations

from dataclasses import dataclass, field

from .input_parser import InputAccumulator
from .matcher import MinuteLatch
from .models import MAX_ACTIVITIES, Activity


@dataclass(slots=True)
class SchedulerState:
    """Schedule plus the latches and input buffer the poll loop carries."""

    activities: list[Activity]
    start_latch: MinuteLatch = field(default_factory=MinuteLatch)
    due_soon_latch: MinuteLatch = field(default_factory=MinuteLatch)
    input_buffer: InputAccumulator = field(default_factory=InputAccumulator)

    def __post_init__(self) -> None:
        if not 0 < len(self.activities) <= MAX_ACTIVITIES:
            raise ValueError(
                f"a schedule holds 1..{MAX_ACTIVITIES} activities, got {len(self.activities)}"
            )

    def pending(self) -> list[Activity]:
        return [activity for activity in self.activities if not activity.done]
