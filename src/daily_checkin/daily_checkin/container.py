from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .checkin.auth import TokenVerifier, make_md5_token_verifier
from .checkin.memory_attendance_store import InMemoryAttendanceStore
from .checkin.mysql_attendance_store import MySQLAttendanceStore
from .checkin.repository import AttendanceStore
from .checkin.service import CheckInService
from .common.locks import KeyedLock
from .core.constants import DEFAULT_TICK_SECONDS, DEFAULT_UPLOAD_DIR
from .core.exceptions import ConfigError
from .database.connection import DatabaseConnection, db_config_from_dict
from .evidence.local_blob_store import LocalEvidenceBlobStore
from .evidence.repository import EvidenceBlobStore
from .notifications.gateway import NotificationGateway
from .notifications.smtp_gateway import SmtpNotificationGateway, smtp_config_from_settings
from .reminders.service import ReminderEngine
from .roster.json_settings_provider import JsonSettingsProvider
from .roster.repository import SettingsProvider
from .scheduler.service import DailyScheduler
from .summary.service import SummaryEngine


@dataclass(frozen=True)
class Container:
    settings_provider: SettingsProvider
    attendance_store: AttendanceStore
    evidence_store: EvidenceBlobStore
    gateway: NotificationGateway
    token_verifier: TokenVerifier

    checkin_service: CheckInService
    reminder_engine: ReminderEngine
    summary_engine: SummaryEngine
    scheduler: DailyScheduler


def _build_attendance_store(settings: ModuleType) -> AttendanceStore:
    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    if backend == "memory":
        return InMemoryAttendanceStore()
    if backend == "mysql":
        db_config = getattr(settings, "DB_CONFIG", None)
        if not db_config:
            raise ConfigError("DB_CONFIG is required when STORE_BACKEND=mysql")
        return MySQLAttendanceStore(DatabaseConnection(db_config_from_dict(db_config)))
    raise ConfigError(f"Unknown STORE_BACKEND: {backend}")


def build_container(
    settings: ModuleType,
    *,
    settings_provider: SettingsProvider | None = None,
    gateway: NotificationGateway | None = None,
) -> Container:
    """Wire every component from a settings module.

    ``settings_provider`` and ``gateway`` can be injected (tests, alternative
    transports); otherwise they come from ROSTER_CONFIG_PATH and the SMTP_* settings.
    """
    settings_provider = settings_provider or JsonSettingsProvider(getattr(settings, "ROSTER_CONFIG_PATH", "config.json"))
    attendance_store = _build_attendance_store(settings)
    evidence_store = LocalEvidenceBlobStore(getattr(settings, "UPLOAD_DIR", DEFAULT_UPLOAD_DIR))
    gateway = gateway or SmtpNotificationGateway(smtp_config_from_settings(settings))
    token_verifier = make_md5_token_verifier(str(getattr(settings, "TOKEN_MD5", "") or ""))

    submission_locks = KeyedLock()
    checkin_service = CheckInService(settings_provider, attendance_store, evidence_store, locks=submission_locks)
    reminder_engine = ReminderEngine(settings_provider, attendance_store, gateway)
    summary_engine = SummaryEngine(settings_provider, attendance_store, gateway, evidence_store, locks=submission_locks)
    scheduler = DailyScheduler(
        settings_provider,
        reminder_engine,
        summary_engine,
        tick_seconds=int(getattr(settings, "SCHEDULER_TICK_SECONDS", DEFAULT_TICK_SECONDS)),
    )

    return Container(
        settings_provider=settings_provider,
        attendance_store=attendance_store,
        evidence_store=evidence_store,
        gateway=gateway,
        token_verifier=token_verifier,
        checkin_service=checkin_service,
        reminder_engine=reminder_engine,
        summary_engine=summary_engine,
        scheduler=scheduler,
    )
