from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    ok: bool
    error: Optional[str] = None
    # True when the transport accepted the call without delivering (e.g. not configured).
    skipped: bool = False

    @classmethod
    def success(cls, *, skipped: bool = False) -> "SendResult":
        return cls(ok=True, skipped=skipped)

    @classmethod
    def failure(cls, error: str) -> "SendResult":
        return cls(ok=False, error=error)


class NotificationGateway(Protocol):
    def send(self, recipients: Sequence[str], subject: str, body: str) -> SendResult:
        """Deliver one message to all recipients. Failures are returned, not raised."""
        raise NotImplementedError


def safe_send(gateway: NotificationGateway, recipients: Sequence[str], subject: str, body: str) -> SendResult:
    """Call the gateway and turn anything it raises into a failed result."""
    try:
        return gateway.send(list(recipients), subject, body)
    except Exception as exc:
        logger.exception("Notification gateway raised for %s (%s)", list(recipients), subject)
        return SendResult.failure(str(exc)[:500])
