from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CheckInRecord


class AttendanceStore(Protocol):
    """Single source of truth for "has this person checked in on this day".

    Implementations raise StorageError on I/O failure, on reads as well as
    writes.
    """

    def record_check_in(self, name: str, checkin_date: date, evidence_location: Optional[str]) -> None:
        """Upsert the (name, date) record; a second call replaces the first."""
        raise NotImplementedError

    def has_checked_in(self, name: str, checkin_date: date) -> bool:
        raise NotImplementedError

    def get_record(self, name: str, checkin_date: date) -> Optional[CheckInRecord]:
        raise NotImplementedError

    def list_for_date(self, checkin_date: date) -> Sequence[CheckInRecord]:
        raise NotImplementedError

    def purge_date(self, checkin_date: date) -> int:
        """Delete every record of the day. Safe to call on an empty day."""
        raise NotImplementedError
