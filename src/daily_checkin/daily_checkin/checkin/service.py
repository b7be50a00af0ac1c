from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLock
from ..common.validators import require_image_content_type, require_non_empty
from ..core.exceptions import StorageError, ValidationError
from ..evidence.repository import EvidenceBlobStore
from ..roster.model import Person
from ..roster.repository import SettingsProvider
from .model import PersonStatus, SubmissionResult
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


class CheckInService:
    def __init__(
        self,
        settings: SettingsProvider,
        attendance: AttendanceStore,
        evidence: EvidenceBlobStore,
        *,
        clock: Callable[[], datetime] = now_local,
        locks: Optional[KeyedLock] = None,
    ):
        self._settings = settings
        self._attendance = attendance
        self._evidence = evidence
        self._clock = clock
        # Keyed by (name, date); shared with the summary purge.
        self._key_locks = locks or KeyedLock()

    def persons(self) -> list[Person]:
        return list(self._settings.snapshot().roster)

    def submit(
        self,
        *,
        name: str,
        filename: Optional[str],
        content_type: Optional[str],
        data: bytes,
        checkin_date: Optional[date] = None,
    ) -> SubmissionResult:
        """Store today's proof for ``name``, replacing any earlier one.

        The new file is written before the earlier one is dropped, so a
        rejected or failed upload leaves the previous proof in place. The
        submission only counts once the attendance record is saved: if the
        record cannot be written a StorageError is raised even though the
        file is already on disk.
        """
        name = require_non_empty(name, "name")
        if self._settings.snapshot().find(name) is None:
            raise ValidationError("name is not on the check-in roster")
        require_image_content_type(content_type)
        if not data:
            raise ValidationError("Please upload an image file")

        checkin_date = checkin_date or self._clock().date()
        extension = os.path.splitext(filename or "")[1]

        with self._key_locks.hold((name, checkin_date)):
            location = self._evidence.replace(name, checkin_date, extension, data)
            try:
                self._attendance.record_check_in(name, checkin_date, location)
            except StorageError:
                logger.error("Evidence for %s stored at %s but the check-in was not recorded", name, location)
                raise

        logger.info("Recorded check-in for %s on %s (%s)", name, checkin_date, location)
        return SubmissionResult(name=name, checkin_date=checkin_date, evidence_location=location)

    def status_for(self, checkin_date: date) -> list[PersonStatus]:
        snapshot = self._settings.snapshot()
        return [
            PersonStatus(
                name=p.name,
                avatar=p.avatar,
                uploaded=self._attendance.has_checked_in(p.name, checkin_date),
            )
            for p in snapshot.roster
        ]
