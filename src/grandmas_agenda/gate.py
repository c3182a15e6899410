"""Blocking yes/no confirmation for activities that come due."""

from __future__ import annotations

import enum
import logging

from .config import ReminderSettings
from .console import Console
from .models import Activity

logger = logging.getLogger(__name__)


class GateOutcome(enum.Enum):
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    ALREADY_DONE = "already_done"


def normalize_answer(text: str) -> str | None:
    answer = text.strip().lower()
    return answer if answer in ("yes", "no") else None


class InteractionGate:
    """Ask whether an activity is underway and mark it done on "yes".

    The prompt blocks the poll loop until answered; the clock accelerator
    keeps running meanwhile.
    """

    def __init__(self, console: Console, settings: ReminderSettings) -> None:
        self.console = console
        self.settings = settings

    def confirm(self, activity: Activity) -> GateOutcome:
        if activity.done:
            self.console.write(f"Chill, you've already done: {activity.name}")
            self._finish()
            return GateOutcome.ALREADY_DONE

        with self.console.blocking_input():
            self.console.pause(self.settings.confirm_delay.total_seconds())
            answer = None
            while answer is None:
                answer = normalize_answer(
                    self.console.prompt_line(f"Are you doing {activity.name} now? (yes/no)")
                )

        if answer == "yes":
            activity.mark_done()
            logger.info("Activity confirmed: %s", activity.name)
            self.console.write(f"{activity.name} marked as done.")
            self._finish()
            return GateOutcome.CONFIRMED

        logger.info("Activity declined: %s", activity.name)
        self._finish()
        return GateOutcome.DECLINED

    def _finish(self) -> None:
        self.console.pause(self.settings.clear_delay.total_seconds())
        self.console.clear()
