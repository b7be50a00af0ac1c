from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import Trigger


@dataclass
class DailyCycleState:
    """Which daily triggers already fired on ``day``. Reset at date rollover."""

    day: date
    reminder_fired: bool = False
    summary_fired: bool = False

    def has_fired(self, trigger: Trigger) -> bool:
        if trigger == Trigger.REMINDER:
            return self.reminder_fired
        return self.summary_fired

    def mark_fired(self, trigger: Trigger) -> None:
        if trigger == Trigger.REMINDER:
            self.reminder_fired = True
        else:
            self.summary_fired = True
