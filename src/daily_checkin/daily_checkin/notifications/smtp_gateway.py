from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Sequence

from ..core.exceptions import DispatchError
from .gateway import NotificationGateway, SendResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpConfig:
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    from_email: str = ""
    use_tls: bool = True
    use_ssl: bool = False
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if not self.host:
            missing.append("SMTP_HOST")
        if not self.user:
            missing.append("SMTP_USER")
        if not self.password:
            missing.append("SMTP_PASSWORD")
        return missing


class SmtpNotificationGateway(NotificationGateway):
    """Plain-text email over SMTP.

    When the SMTP settings are incomplete the message is logged and reported
    as delivered-but-skipped, so a deployment without mail keeps working.
    """

    def __init__(self, config: SmtpConfig):
        self._config = config

    @property
    def config(self) -> SmtpConfig:
        return self._config

    def _build_message(self, recipients: Sequence[str], subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._config.from_email or self._config.user
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.set_content(body, charset="utf-8")
        return msg

    def _open(self) -> smtplib.SMTP:
        cfg = self._config
        if cfg.use_ssl:
            return smtplib.SMTP_SSL(cfg.host, cfg.port, timeout=cfg.timeout)
        return smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout)

    def _deliver(self, message: EmailMessage, recipients: Sequence[str]) -> None:
        cfg = self._config
        try:
            with self._open() as client:
                if cfg.use_tls and not cfg.use_ssl:
                    client.starttls()
                client.login(cfg.user, cfg.password)
                refused = client.send_message(message, to_addrs=list(recipients))
        except (smtplib.SMTPException, OSError) as e:
            raise DispatchError(f"SMTP delivery failed: {e}") from e
        if refused:
            raise DispatchError(f"Recipients refused: {sorted(refused)}")

    def send(self, recipients: Sequence[str], subject: str, body: str) -> SendResult:
        recipients = [r for r in recipients if r]
        if not recipients:
            logger.warning("No recipients for %r, nothing sent", subject)
            return SendResult.failure("no recipients")

        if not self._config.configured:
            logger.warning(
                "SMTP settings incomplete (missing %s), skipping email. To: %s, subject: %s",
                ", ".join(self._config.missing_fields()),
                recipients,
                subject,
            )
            return SendResult.success(skipped=True)

        message = self._build_message(recipients, subject, body)
        try:
            self._deliver(message, recipients)
        except DispatchError as e:
            logger.error("Email %r to %s failed: %s", subject, recipients, e)
            return SendResult.failure(str(e))
        return SendResult.success()


def smtp_config_from_settings(settings) -> SmtpConfig:
    return SmtpConfig(
        host=str(getattr(settings, "SMTP_HOST", "") or ""),
        port=int(getattr(settings, "SMTP_PORT", 587) or 587),
        user=str(getattr(settings, "SMTP_USER", "") or ""),
        password=str(getattr(settings, "SMTP_PASSWORD", "") or ""),
        from_email=str(getattr(settings, "SMTP_FROM", "") or ""),
        use_tls=bool(getattr(settings, "SMTP_USE_TLS", True)),
        use_ssl=bool(getattr(settings, "SMTP_USE_SSL", False)),
        timeout=float(getattr(settings, "SMTP_TIMEOUT", 15.0) or 15.0),
    )
