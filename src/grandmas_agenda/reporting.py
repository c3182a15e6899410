"""Console rendering of the schedule."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .matcher import is_within, minutes_until_end
from .state import SchedulerState


class SchedulePrinter:
    """Render the day's activities as a plain-text table."""

    def print_schedule(
        self, state: SchedulerState, at: Optional[datetime] = None
    ) -> None:
        activities = state.activities
        print(f"Daily agenda ({len(state.pending())} of {len(activities)} pending)")
        print("-" * 48)
        for index, activity in enumerate(activities):
            status = "done" if activity.done else "pending"
            print(
                f"{index:>2}  {activity.name:<19}  {activity.start}-{activity.end}"
                f"  {format_minutes(activity.duration_minutes):>6}  {status}"
            )

        if at is None:
            return
        print()
        current = [activity for activity in activities if is_within(activity, at)]
        if not current:
            print(f"Nothing scheduled at {at.strftime('%H:%M')}.")
        for activity in current:
            remaining = minutes_until_end(activity, at)
            print(f"At {at.strftime('%H:%M')}: {activity.name} ({format_minutes(remaining)} left)")


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h{mins:02d}" if hours else f"{mins}m"
