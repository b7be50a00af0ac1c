from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.daily_checkin.daily_checkin.common.datetime_utils import parse_iso_date, parse_time_mark, same_minute


def test_parse_time_mark():
    assert parse_time_mark("07:05") == time(7, 5)
    assert parse_time_mark(" 22:30 ") == time(22, 30)


@pytest.mark.parametrize("raw", [None, "", "25:00", "8pm", "12:60"])
def test_parse_time_mark_rejects_bad_values(raw):
    with pytest.raises(ValueError):
        parse_time_mark(raw)


def test_same_minute_ignores_seconds():
    assert same_minute(datetime(2026, 2, 1, 7, 5, 59), time(7, 5))
    assert not same_minute(datetime(2026, 2, 1, 7, 6, 0), time(7, 5))


def test_parse_iso_date():
    assert parse_iso_date("2026-02-01") == date(2026, 2, 1)
