from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Person:
    """A roster entry. Names are unique within the roster."""

    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def has_email(self) -> bool:
        return bool(self.email and self.email.strip())


@dataclass(frozen=True)
class RosterSettings:
    """One consistent snapshot of the live settings.

    Consumers read a snapshot once per decision and never re-read mid-pass.
    """

    roster: tuple[Person, ...] = field(default_factory=tuple)
    reminder_time: Optional[str] = None
    summary_time: Optional[str] = None

    def find(self, name: str) -> Optional[Person]:
        for person in self.roster:
            if person.name == name:
                return person
        return None

    def emails(self) -> list[str]:
        """Every non-empty email across the roster, in roster order, without duplicates."""
        seen: list[str] = []
        for person in self.roster:
            if person.has_email and person.email.strip() not in seen:
                seen.append(person.email.strip())
        return seen
