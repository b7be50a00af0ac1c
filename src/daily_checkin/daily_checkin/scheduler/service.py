from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Callable, Optional, Protocol

from apscheduler.schedulers.background import BackgroundScheduler

from ..common.datetime_utils import now_local, parse_time_mark, same_minute
from ..core.constants import DEFAULT_TICK_SECONDS, MAX_TICK_SECONDS
from ..core.enums import Trigger
from ..core.exceptions import ConfigError
from ..roster.model import RosterSettings
from ..roster.repository import SettingsProvider
from .model import DailyCycleState

logger = logging.getLogger(__name__)

TICK_JOB_ID = "daily-checkin-tick"


class ReminderPass(Protocol):
    def run_reminder_pass(self, checkin_date: date): ...


class SummaryPass(Protocol):
    def run_summary_pass(self, checkin_date: date): ...


class DailyScheduler:
    """Tick-and-compare trigger loop.

    Every tick reads a fresh settings snapshot and compares the current local
    minute with the reminder and summary marks. A trigger fires at most once
    per calendar day; a minute missed while the process was not ticking is
    not made up later.
    """

    def __init__(
        self,
        settings: SettingsProvider,
        reminders: ReminderPass,
        summary: SummaryPass,
        *,
        tick_seconds: int = DEFAULT_TICK_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        tick_seconds = int(tick_seconds)
        if tick_seconds <= 0 or tick_seconds > MAX_TICK_SECONDS:
            raise ConfigError(f"Scheduler tick must be between 1 and {MAX_TICK_SECONDS} seconds, got {tick_seconds}")

        self._settings = settings
        self._reminders = reminders
        self._summary = summary
        self._tick_seconds = tick_seconds
        self._clock = clock
        self._state: Optional[DailyCycleState] = None
        self._bad_marks: dict[Trigger, str] = {}
        self._runner: Optional[BackgroundScheduler] = None

    @property
    def state(self) -> Optional[DailyCycleState]:
        return self._state

    @property
    def running(self) -> bool:
        return self._runner is not None and self._runner.running

    def _resolve_mark(self, trigger: Trigger, raw: Optional[str]) -> Optional[time]:
        try:
            mark = parse_time_mark(raw)
        except ValueError:
            shown = raw or ""
            if self._bad_marks.get(trigger) != shown:
                logger.warning("%s time %r is unset or not HH:MM, it will not fire", trigger.value, shown)
                self._bad_marks[trigger] = shown
            return None
        self._bad_marks.pop(trigger, None)
        return mark

    def _marks(self, snapshot: RosterSettings) -> list[tuple[Trigger, Optional[time]]]:
        return [
            (Trigger.REMINDER, self._resolve_mark(Trigger.REMINDER, snapshot.reminder_time)),
            (Trigger.SUMMARY, self._resolve_mark(Trigger.SUMMARY, snapshot.summary_time)),
        ]

    def _run(self, trigger: Trigger, today: date) -> None:
        try:
            if trigger == Trigger.REMINDER:
                self._reminders.run_reminder_pass(today)
            else:
                self._summary.run_summary_pass(today)
        except Exception:
            logger.exception("%s pass for %s failed", trigger.value, today)

    def tick(self, now: Optional[datetime] = None) -> list[Trigger]:
        """Evaluate both marks against ``now`` and run what is due.

        Returns the triggers fired by this tick.
        """
        now = now or self._clock()
        today = now.date()

        if self._state is None or self._state.day != today:
            self._state = DailyCycleState(day=today)

        try:
            snapshot = self._settings.snapshot()
        except Exception:
            logger.exception("Cannot read settings, skipping tick at %s", now)
            return []

        fired: list[Trigger] = []
        for trigger, mark in self._marks(snapshot):
            if mark is None or not same_minute(now, mark) or self._state.has_fired(trigger):
                continue
            # Marked before running so a failing pass is not retried within the same minute.
            self._state.mark_fired(trigger)
            fired.append(trigger)
            logger.info("Firing %s pass for %s at %s", trigger.value, today, now.strftime("%H:%M"))
            self._run(trigger, today)
        return fired

    def _safe_tick(self) -> None:
        try:
            self.tick()
        except Exception:
            logger.exception("Scheduler tick failed")

    def start(self) -> None:
        if self.running:
            return
        runner = BackgroundScheduler()
        runner.add_job(
            self._safe_tick,
            "interval",
            seconds=self._tick_seconds,
            id=TICK_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now(),
        )
        runner.start()
        self._runner = runner
        logger.info("Check-in scheduler started (tick every %ss)", self._tick_seconds)

    def stop(self, *, wait: bool = True) -> None:
        if self._runner is None:
            return
        if self._runner.running:
            self._runner.shutdown(wait=wait)
        self._runner = None
        logger.info("Check-in scheduler stopped")
