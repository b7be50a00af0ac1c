from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from src.daily_checkin.daily_checkin.checkin.mysql_attendance_store import MySQLAttendanceStore
from src.daily_checkin.daily_checkin.core.exceptions import StorageError


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=()):
        if self._conn.error:
            raise self._conn.error
        self._conn.executed.append((" ".join(sql.split()), params))
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.executed: list[tuple[str, tuple]] = []
        self.rows: list[dict] = []
        self.rowcount = 0
        self.error = None
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


@pytest.fixture
def factory():
    return FakeConnFactory()


@pytest.fixture
def mysql_store(factory):
    return MySQLAttendanceStore(factory, clock=lambda: datetime(2026, 2, 1, 9, 0))


def test_record_check_in_is_an_upsert(mysql_store, factory):
    mysql_store.record_check_in("Alice", date(2026, 2, 1), "uploads/2026-02-01/Alice.jpg")

    sql, params = factory.conn.executed[0]
    assert sql.startswith("INSERT INTO checkin_records")
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params == ("Alice", date(2026, 2, 1), "uploads/2026-02-01/Alice.jpg", datetime(2026, 2, 1, 9, 0))
    assert factory.conn.commits == 1


def test_has_checked_in_reads_count(mysql_store, factory):
    factory.conn.rows = [{"n": 1}]
    assert mysql_store.has_checked_in("Alice", date(2026, 2, 1))

    factory.conn.rows = [{"n": 0}]
    assert not mysql_store.has_checked_in("Alice", date(2026, 2, 1))


def test_purge_date_returns_deleted_rows(mysql_store, factory):
    factory.conn.rowcount = 3

    assert mysql_store.purge_date(date(2026, 2, 1)) == 3
    sql, params = factory.conn.executed[0]
    assert sql == "DELETE FROM checkin_records WHERE checkin_date=%s"
    assert params == (date(2026, 2, 1),)


def test_write_failure_surfaces_as_storage_error(mysql_store, factory):
    factory.conn.error = mysql.connector.Error("disk full")

    with pytest.raises(StorageError):
        mysql_store.record_check_in("Alice", date(2026, 2, 1), "x")
    assert factory.conn.rollbacks == 1


def test_read_failure_is_not_reported_as_missing(mysql_store, factory):
    factory.conn.error = mysql.connector.Error("gone away")

    with pytest.raises(StorageError):
        mysql_store.has_checked_in("Alice", date(2026, 2, 1))
