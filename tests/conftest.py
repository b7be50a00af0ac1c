from __future__ import annotations

from datetime import date, datetime

import pytest

from src.daily_checkin.daily_checkin.checkin.memory_attendance_store import InMemoryAttendanceStore
from src.daily_checkin.daily_checkin.notifications.gateway import SendResult
from src.daily_checkin.daily_checkin.roster.model import Person, RosterSettings


class MutableSettings:
    """Settings provider whose snapshot tests can swap between ticks."""

    def __init__(self, snapshot: RosterSettings):
        self.current = snapshot
        self.reads = 0

    def snapshot(self) -> RosterSettings:
        self.reads += 1
        return self.current

    def update(self, **changes) -> None:
        data = {
            "roster": self.current.roster,
            "reminder_time": self.current.reminder_time,
            "summary_time": self.current.summary_time,
        }
        data.update(changes)
        self.current = RosterSettings(**data)


class RecordingGateway:
    def __init__(self, *, fail_for: set[str] | None = None, fail_all: bool = False):
        self.sent: list[tuple[list[str], str, str]] = []
        self._fail_for = fail_for or set()
        self._fail_all = fail_all

    def send(self, recipients, subject, body) -> SendResult:
        recipients = list(recipients)
        if self._fail_all or self._fail_for.intersection(recipients):
            return SendResult.failure("smtp down")
        self.sent.append((recipients, subject, body))
        return SendResult.success()


class FakeBlobStore:
    def __init__(self):
        self.blobs: dict[tuple[str, date], tuple[str, bytes]] = {}
        self.purged: list[date] = []

    def store(self, name, checkin_date, extension, data) -> str:
        self.blobs[(name, checkin_date)] = (extension, data)
        return f"mem://{checkin_date.isoformat()}/{name}{extension}"

    def replace(self, name, checkin_date, extension, data) -> str:
        return self.store(name, checkin_date, extension, data)

    def remove_all(self, name, checkin_date) -> None:
        self.blobs.pop((name, checkin_date), None)

    def purge_date(self, checkin_date) -> None:
        for key in [k for k in self.blobs if k[1] == checkin_date]:
            del self.blobs[key]
        self.purged.append(checkin_date)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def day(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def alice() -> Person:
    return Person(name="Alice", email="a@x", avatar="alice.png")


@pytest.fixture
def bob() -> Person:
    return Person(name="Bob", email="b@x")


@pytest.fixture
def settings(alice, bob) -> MutableSettings:
    return MutableSettings(RosterSettings(roster=(alice, bob), reminder_time="20:00", summary_time="22:30"))


@pytest.fixture
def store(fixed_now) -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore(clock=lambda: fixed_now)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def failing_gateway() -> RecordingGateway:
    return RecordingGateway(fail_all=True)


@pytest.fixture
def gateway_factory():
    return RecordingGateway
