from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import ConfigError
from .model import Person, RosterSettings
from .repository import SettingsProvider

logger = logging.getLogger(__name__)


def parse_roster_settings(data: Any) -> RosterSettings:
    """Build a snapshot from the decoded JSON document.

    Keys follow the check-in config file: ``checkInPersonList``,
    ``mentionTime`` (reminder mark) and ``checkInTime`` (summary mark).
    """
    if not isinstance(data, dict):
        raise ConfigError("Settings document must be a JSON object")

    if "checkInPersonList" not in data:
        raise ConfigError("checkInPersonList is missing")
    raw_people = data["checkInPersonList"]
    if not isinstance(raw_people, list):
        raise ConfigError("checkInPersonList must be a list")

    people: list[Person] = []
    names: set[str] = set()
    for idx, item in enumerate(raw_people):
        if not isinstance(item, dict):
            raise ConfigError(f"checkInPersonList[{idx}] must be an object")
        name = str(item.get("name") or "").strip()
        if not name:
            raise ConfigError(f"checkInPersonList[{idx}] has no name")
        if name in names:
            raise ConfigError(f"Duplicate roster name: {name}")
        names.add(name)
        people.append(
            Person(
                name=name,
                email=(str(item.get("email") or "").strip() or None),
                avatar=(str(item.get("avatar") or "").strip() or None),
            )
        )

    return RosterSettings(
        roster=tuple(people),
        reminder_time=_optional_str(data.get("mentionTime")),
        summary_time=_optional_str(data.get("checkInTime")),
    )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


class JsonSettingsProvider(SettingsProvider):
    """Settings provider backed by a JSON file that may be edited while running.

    The file is re-read whenever its modification time changes. The first load
    must succeed; a later broken edit is logged and the last good snapshot is
    kept.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._mtime: Optional[float] = None
        self._current = self._load()
        self._mtime = self._stat_mtime()

    @property
    def path(self) -> Path:
        return self._path

    def _stat_mtime(self) -> Optional[float]:
        try:
            return os.stat(self._path).st_mtime
        except OSError:
            return None

    def _load(self) -> RosterSettings:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read settings file {self._path}: {e}") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Cannot parse settings file {self._path}: {e}") from e
        return parse_roster_settings(data)

    def snapshot(self) -> RosterSettings:
        with self._lock:
            mtime = self._stat_mtime()
            if mtime is not None and mtime != self._mtime:
                try:
                    self._current = self._load()
                    logger.info("Reloaded settings from %s (%d people)", self._path, len(self._current.roster))
                except ConfigError as e:
                    logger.error("Keeping previous settings: %s", e)
                self._mtime = mtime
            return self._current
