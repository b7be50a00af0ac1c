from __future__ import annotations

from enum import Enum


class Trigger(str, Enum):
    """The two daily passes driven by the scheduler."""

    REMINDER = "reminder"
    SUMMARY = "summary"


class SummaryOutcome(str, Enum):
    """How a summary pass ended (drives the purge decision)."""

    FULLY_COMPLIANT = "FULLY_COMPLIANT"
    DIGEST_SENT = "DIGEST_SENT"
    DIGEST_FAILED = "DIGEST_FAILED"
    NO_RECIPIENTS = "NO_RECIPIENTS"
