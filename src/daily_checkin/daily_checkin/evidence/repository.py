from __future__ import annotations

from datetime import date
from typing import Protocol


class EvidenceBlobStore(Protocol):
    def store(self, name: str, checkin_date: date, extension: str, data: bytes) -> str:
        """Persist the proof and return its location."""
        raise NotImplementedError

    def replace(self, name: str, checkin_date: date, extension: str, data: bytes) -> str:
        """Persist the new proof and only then drop the earlier ones of (name, date)."""
        raise NotImplementedError

    def remove_all(self, name: str, checkin_date: date) -> None:
        """Drop every stored proof of (name, date), whatever its extension."""
        raise NotImplementedError

    def purge_date(self, checkin_date: date) -> None:
        """Drop all proofs of the day. Safe to call on an empty day."""
        raise NotImplementedError
