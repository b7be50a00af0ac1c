from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..checkin.repository import AttendanceStore
from ..common.locks import KeyedLock
from ..core.enums import SummaryOutcome
from ..core.exceptions import StorageError
from ..evidence.repository import EvidenceBlobStore
from ..notifications.gateway import NotificationGateway, safe_send
from ..notifications.templates import summary_message
from ..roster.model import RosterSettings
from ..roster.repository import SettingsProvider

logger = logging.getLogger(__name__)


@dataclass
class SummaryReport:
    checkin_date: date
    outcome: SummaryOutcome
    non_compliant: list[str] = field(default_factory=list)
    recipients: list[str] = field(default_factory=list)
    purged: bool = False
    error: str | None = None


class SummaryEngine:
    """Roster-wide digest followed by the evidence purge decision.

    Decision table:
    - everyone checked in: purge;
    - someone missing and at least one email on the roster: send one digest
      to every roster email, purge only if the send succeeded;
    - someone missing and no email anywhere: keep everything.

    A StorageError while reading compliance propagates: nothing is sent and
    nothing is purged. A failed purge is logged and reported on the
    SummaryReport (``purged=False``, ``error`` set).

    The pass holds the (name, date) submission locks of the whole roster from
    the compliance read until the purge, so an upload arriving meanwhile is
    written after the purge instead of being wiped by it.
    """

    def __init__(
        self,
        settings: SettingsProvider,
        attendance: AttendanceStore,
        gateway: NotificationGateway,
        evidence: EvidenceBlobStore,
        *,
        locks: Optional[KeyedLock] = None,
    ):
        self._settings = settings
        self._attendance = attendance
        self._gateway = gateway
        self._evidence = evidence
        self._key_locks = locks or KeyedLock()

    def _roster_keys(self, snapshot: RosterSettings, checkin_date: date) -> list[tuple[str, date]]:
        return [(p.name, checkin_date) for p in snapshot.roster]

    def run_summary_pass(self, checkin_date: date) -> SummaryReport:
        snapshot = self._settings.snapshot()
        logger.info("Running summary pass for %s (%d people)", checkin_date, len(snapshot.roster))

        with self._key_locks.hold_all(self._roster_keys(snapshot, checkin_date)):
            return self._run_locked(snapshot, checkin_date)

    def _run_locked(self, snapshot: RosterSettings, checkin_date: date) -> SummaryReport:
        non_compliant = [p for p in snapshot.roster if not self._attendance.has_checked_in(p.name, checkin_date)]
        recipients = snapshot.emails()

        if not non_compliant:
            logger.info("Everyone checked in for %s", checkin_date)
            error = self._purge(checkin_date)
            return SummaryReport(
                checkin_date=checkin_date,
                outcome=SummaryOutcome.FULLY_COMPLIANT,
                purged=error is None,
                error=error,
            )

        missing = [p.name for p in non_compliant]
        if not recipients:
            logger.warning("No recipients available for the %s summary, evidence kept", checkin_date)
            return SummaryReport(
                checkin_date=checkin_date,
                outcome=SummaryOutcome.NO_RECIPIENTS,
                non_compliant=missing,
            )

        subject, body = summary_message(non_compliant, checkin_date)
        result = safe_send(self._gateway, recipients, subject, body)
        if not result.ok:
            logger.error("Summary email for %s failed, evidence kept: %s", checkin_date, result.error)
            return SummaryReport(
                checkin_date=checkin_date,
                outcome=SummaryOutcome.DIGEST_FAILED,
                non_compliant=missing,
                recipients=recipients,
                error=result.error,
            )

        logger.info("Sent summary for %s to %d recipients (%d missing)", checkin_date, len(recipients), len(missing))
        error = self._purge(checkin_date)
        return SummaryReport(
            checkin_date=checkin_date,
            outcome=SummaryOutcome.DIGEST_SENT,
            non_compliant=missing,
            recipients=recipients,
            purged=error is None,
            error=error,
        )

    def purge(self, checkin_date: date) -> Optional[str]:
        """Remove the day's blobs and records. Idempotent.

        Returns None on success, otherwise the storage error message.
        """
        snapshot = self._settings.snapshot()
        with self._key_locks.hold_all(self._roster_keys(snapshot, checkin_date)):
            return self._purge(checkin_date)

    def _purge(self, checkin_date: date) -> Optional[str]:
        # Blobs first: the records stay the source of truth if the blob purge fails.
        try:
            self._evidence.purge_date(checkin_date)
            removed = self._attendance.purge_date(checkin_date)
        except StorageError as e:
            logger.error("Purge for %s did not complete: %s", checkin_date, e)
            return str(e)
        logger.info("Purged %d check-in records and evidence for %s", removed, checkin_date)
        return None
