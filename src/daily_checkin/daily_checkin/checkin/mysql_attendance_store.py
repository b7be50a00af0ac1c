from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CheckInRecord
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


def _to_record(r: dict) -> CheckInRecord:
    return CheckInRecord(
        person_name=r["person_name"],
        checkin_date=r["checkin_date"],
        evidence_location=r.get("evidence_location"),
        recorded_at=r["recorded_at"],
    )


class MySQLAttendanceStore(AttendanceStore):
    """Durable store. UNIQUE(person_name, checkin_date) makes every write an upsert."""

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_local):
        self._conn_factory = conn_factory
        self._clock = clock

    @property
    def conn_factory(self) -> DatabaseConnection:
        return self._conn_factory

    def record_check_in(self, name: str, checkin_date: date, evidence_location: Optional[str]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO checkin_records(person_name, checkin_date, evidence_location, recorded_at)
                    VALUES(%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        evidence_location=VALUES(evidence_location),
                        recorded_at=VALUES(recorded_at)
                    """,
                    (name, checkin_date, evidence_location, self._clock()),
                )
        except mysql.connector.Error as e:
            logger.error("Failed to save check-in for %s on %s: %s", name, checkin_date, e)
            raise StorageError(f"Could not save check-in for {name}") from e

    def has_checked_in(self, name: str, checkin_date: date) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT COUNT(*) AS n FROM checkin_records WHERE person_name=%s AND checkin_date=%s",
                    (name, checkin_date),
                )
                r = fetchone(cur)
                return bool(r and int(r["n"]) > 0)
        except mysql.connector.Error as e:
            logger.error("Failed to query check-in for %s on %s: %s", name, checkin_date, e)
            raise StorageError(f"Could not query check-in for {name}") from e

    def get_record(self, name: str, checkin_date: date) -> Optional[CheckInRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT person_name, checkin_date, evidence_location, recorded_at
                    FROM checkin_records
                    WHERE person_name=%s AND checkin_date=%s
                    """,
                    (name, checkin_date),
                )
                r = fetchone(cur)
                return _to_record(r) if r else None
        except mysql.connector.Error as e:
            logger.error("Failed to load check-in for %s on %s: %s", name, checkin_date, e)
            raise StorageError(f"Could not load check-in for {name}") from e

    def list_for_date(self, checkin_date: date) -> Sequence[CheckInRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT person_name, checkin_date, evidence_location, recorded_at
                    FROM checkin_records
                    WHERE checkin_date=%s
                    ORDER BY person_name ASC
                    """,
                    (checkin_date,),
                )
                return [_to_record(r) for r in fetchall(cur)]
        except mysql.connector.Error as e:
            logger.error("Failed to list check-ins on %s: %s", checkin_date, e)
            raise StorageError(f"Could not list check-ins for {checkin_date}") from e

    def purge_date(self, checkin_date: date) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM checkin_records WHERE checkin_date=%s", (checkin_date,))
                return int(cur.rowcount or 0)
        except mysql.connector.Error as e:
            logger.error("Failed to purge check-ins on %s: %s", checkin_date, e)
            raise StorageError(f"Could not purge check-ins for {checkin_date}") from e
