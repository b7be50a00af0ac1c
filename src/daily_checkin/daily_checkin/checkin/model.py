from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class CheckInRecord:
    """Domain entity: the single check-in of a person on a day."""

    person_name: str
    checkin_date: date
    evidence_location: Optional[str]
    recorded_at: datetime


@dataclass(frozen=True)
class PersonStatus:
    """Read-model for rendering per-date compliance."""

    name: str
    avatar: Optional[str]
    uploaded: bool

    def to_dict(self) -> dict:
        return {"name": self.name, "avatar": self.avatar or "", "uploaded": self.uploaded}


@dataclass(frozen=True)
class SubmissionResult:
    name: str
    checkin_date: date
    evidence_location: str
