from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from .model import CheckInRecord
from .repository import AttendanceStore


class InMemoryAttendanceStore(AttendanceStore):
    """Process-local store guarded by a single write lock.

    Used for development (STORE_BACKEND=memory) and tests. Contents do not
    survive a restart.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._clock = clock
        self._lock = threading.Lock()
        self._by_name_date: dict[tuple[str, date], CheckInRecord] = {}

    def record_check_in(self, name: str, checkin_date: date, evidence_location: Optional[str]) -> None:
        rec = CheckInRecord(
            person_name=name,
            checkin_date=checkin_date,
            evidence_location=evidence_location,
            recorded_at=self._clock(),
        )
        with self._lock:
            self._by_name_date[(name, checkin_date)] = rec

    def has_checked_in(self, name: str, checkin_date: date) -> bool:
        with self._lock:
            return (name, checkin_date) in self._by_name_date

    def get_record(self, name: str, checkin_date: date) -> Optional[CheckInRecord]:
        with self._lock:
            return self._by_name_date.get((name, checkin_date))

    def list_for_date(self, checkin_date: date) -> Sequence[CheckInRecord]:
        with self._lock:
            items = [r for (_, d), r in self._by_name_date.items() if d == checkin_date]
        items.sort(key=lambda r: r.person_name)
        return items

    def purge_date(self, checkin_date: date) -> int:
        with self._lock:
            keys = [k for k in self._by_name_date if k[1] == checkin_date]
            for k in keys:
                del self._by_name_date[k]
            return len(keys)
