from __future__ import annotations

from typing import Protocol

from .model import RosterSettings


class SettingsProvider(Protocol):
    def snapshot(self) -> RosterSettings:
        """Return one consistent, immutable view of roster and time marks."""
        raise NotImplementedError
