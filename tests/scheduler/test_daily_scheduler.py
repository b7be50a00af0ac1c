from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timedelta

import pytest

from src.daily_checkin.daily_checkin.core.enums import Trigger
from src.daily_checkin.daily_checkin.core.exceptions import ConfigError
from src.daily_checkin.daily_checkin.scheduler.service import DailyScheduler


class CountingPass:
    def __init__(self, *, explode: bool = False):
        self.reminder_days: list[date] = []
        self.summary_days: list[date] = []
        self._explode = explode

    def run_reminder_pass(self, checkin_date):
        self.reminder_days.append(checkin_date)
        if self._explode:
            raise RuntimeError("boom")

    def run_summary_pass(self, checkin_date):
        self.summary_days.append(checkin_date)
        if self._explode:
            raise RuntimeError("boom")


def at(hh: int, mm: int, ss: int = 0, day: int = 1) -> datetime:
    return datetime(2026, 2, day, hh, mm, ss)


@pytest.fixture
def passes() -> CountingPass:
    return CountingPass()


@pytest.fixture
def scheduler(settings, passes) -> DailyScheduler:
    return DailyScheduler(settings, passes, passes, tick_seconds=20)


def test_fires_once_across_many_ticks_in_the_minute(scheduler, passes):
    fired = [scheduler.tick(at(20, 0, s)) for s in (0, 20, 40)]

    assert fired == [[Trigger.REMINDER], [], []]
    assert passes.reminder_days == [date(2026, 2, 1)]


def test_fires_at_most_once_per_day(scheduler, passes):
    now = at(0, 0)
    while now < at(0, 0, day=2):
        scheduler.tick(now)
        now += timedelta(seconds=30)

    assert passes.reminder_days == [date(2026, 2, 1)]
    assert passes.summary_days == [date(2026, 2, 1)]


def test_state_resets_at_date_rollover(scheduler, passes):
    scheduler.tick(at(20, 0))
    scheduler.tick(at(20, 0, day=2))

    assert passes.reminder_days == [date(2026, 2, 1), date(2026, 2, 2)]
    assert scheduler.state.day == date(2026, 2, 2)


def test_nothing_fires_outside_the_marks(scheduler, passes):
    assert scheduler.tick(at(19, 59, 59)) == []
    assert scheduler.tick(at(20, 1)) == []
    assert passes.reminder_days == []


def test_moving_a_mark_before_it_fires_moves_the_trigger(scheduler, settings, passes):
    scheduler.tick(at(19, 0))
    settings.update(reminder_time="19:30")

    scheduler.tick(at(19, 30))
    scheduler.tick(at(20, 0))

    assert passes.reminder_days == [date(2026, 2, 1)]


def test_moving_a_mark_after_it_fired_does_not_fire_again(scheduler, settings, passes):
    scheduler.tick(at(20, 0))
    settings.update(reminder_time="21:00")

    scheduler.tick(at(21, 0))

    assert passes.reminder_days == [date(2026, 2, 1)]


def test_both_triggers_in_the_same_minute(scheduler, settings, passes):
    settings.update(reminder_time="21:00", summary_time="21:00")

    assert scheduler.tick(at(21, 0)) == [Trigger.REMINDER, Trigger.SUMMARY]


def test_missed_minute_is_not_made_up(scheduler, passes):
    scheduler.tick(at(19, 59, 50))
    scheduler.tick(at(20, 1, 10))

    assert passes.reminder_days == []


def test_malformed_mark_never_fires_and_is_logged_once(scheduler, settings, passes, caplog):
    settings.update(reminder_time="8pm", summary_time=None)

    with caplog.at_level(logging.WARNING):
        for minute in range(3):
            scheduler.tick(at(20, minute))

    assert passes.reminder_days == []
    assert passes.summary_days == []
    assert caplog.text.count("'8pm'") == 1


def test_failing_pass_does_not_break_the_loop(settings):
    passes = CountingPass(explode=True)
    scheduler = DailyScheduler(settings, passes, passes)

    assert scheduler.tick(at(20, 0)) == [Trigger.REMINDER]
    assert scheduler.tick(at(20, 0, 30)) == []
    assert scheduler.tick(at(22, 30)) == [Trigger.SUMMARY]


def test_unreadable_settings_skip_the_tick(passes):
    class BrokenSettings:
        def snapshot(self):
            raise ConfigError("gone")

    scheduler = DailyScheduler(BrokenSettings(), passes, passes)

    assert scheduler.tick(at(20, 0)) == []


def test_tick_coarser_than_a_minute_is_rejected(settings, passes):
    with pytest.raises(ConfigError):
        DailyScheduler(settings, passes, passes, tick_seconds=90)


def test_start_and_stop(settings, passes):
    ticked = threading.Event()

    def clock():
        ticked.set()
        return at(20, 0)

    scheduler = DailyScheduler(settings, passes, passes, tick_seconds=60, clock=clock)
    scheduler.start()
    try:
        assert scheduler.running
        assert ticked.wait(timeout=5)
    finally:
        scheduler.stop()

    assert not scheduler.running
