from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from ..checkin.repository import AttendanceStore
from ..core.exceptions import StorageError
from ..notifications.gateway import NotificationGateway, safe_send
from ..notifications.templates import reminder_message
from ..roster.repository import SettingsProvider

logger = logging.getLogger(__name__)


@dataclass
class ReminderReport:
    checkin_date: date
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped_no_email: list[str] = field(default_factory=list)
    compliant: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Reminders for {self.checkin_date}: {len(self.sent)} sent, {len(self.failed)} failed, "
            f"{len(self.skipped_no_email)} without email, {len(self.compliant)} already checked in"
        )


class ReminderEngine:
    """Individual reminders for everyone on the roster who has not checked in yet.

    Not idempotent: running it twice for the same day sends twice. The
    scheduler guarantees one run per day.
    """

    def __init__(self, settings: SettingsProvider, attendance: AttendanceStore, gateway: NotificationGateway):
        self._settings = settings
        self._attendance = attendance
        self._gateway = gateway

    def run_reminder_pass(self, checkin_date: date) -> ReminderReport:
        snapshot = self._settings.snapshot()
        report = ReminderReport(checkin_date=checkin_date)
        logger.info("Running reminder pass for %s (%d people)", checkin_date, len(snapshot.roster))

        for person in snapshot.roster:
            try:
                done = self._attendance.has_checked_in(person.name, checkin_date)
            except StorageError as e:
                logger.error("Cannot tell whether %s checked in, no reminder sent: %s", person.name, e)
                report.failed.append(person.name)
                continue

            if done:
                logger.info("%s has already checked in", person.name)
                report.compliant.append(person.name)
                continue

            if not person.has_email:
                logger.info("%s has no email configured, reminder skipped", person.name)
                report.skipped_no_email.append(person.name)
                continue

            subject, body = reminder_message(person, checkin_date)
            result = safe_send(self._gateway, [person.email], subject, body)
            if result.ok:
                logger.info("Sent reminder to %s (%s)", person.name, person.email)
                report.sent.append(person.name)
            else:
                logger.error("Reminder to %s failed: %s", person.name, result.error)
                report.failed.append(person.name)

        logger.info(report.message)
        return report
