from __future__ import annotations

import logging
import os
import shutil
from datetime import date
from pathlib import Path

from ..common.datetime_utils import format_iso_date
from ..core.constants import DEFAULT_EVIDENCE_EXTENSION
from ..core.exceptions import StorageError, ValidationError
from .repository import EvidenceBlobStore

logger = logging.getLogger(__name__)


def safe_file_stem(name: str) -> str:
    stem = name.strip().replace(" ", "_")
    if not stem or stem in {".", ".."} or "/" in stem or "\\" in stem:
        raise ValidationError(f"Name cannot be used as a file name: {name!r}")
    return stem


def normalize_extension(extension: str | None) -> str:
    ext = (extension or "").strip()
    if not ext:
        return DEFAULT_EVIDENCE_EXTENSION
    if not ext.startswith("."):
        ext = "." + ext
    if "/" in ext or "\\" in ext or ext == ".":
        raise ValidationError(f"Invalid file extension: {extension!r}")
    return ext


class LocalEvidenceBlobStore(EvidenceBlobStore):
    """Proofs live at ``<root>/<YYYY-MM-DD>/<name><ext>``, one file per person per day."""

    def __init__(self, root: str | Path):
        self._root = Path(root)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create upload directory {self._root}: {e}") from e

    @property
    def root(self) -> Path:
        return self._root

    def date_dir(self, checkin_date: date) -> Path:
        return self._root / format_iso_date(checkin_date)

    def path_for(self, name: str, checkin_date: date, extension: str) -> Path:
        return self.date_dir(checkin_date) / f"{safe_file_stem(name)}{normalize_extension(extension)}"

    def store(self, name: str, checkin_date: date, extension: str, data: bytes) -> str:
        path = self.path_for(name, checkin_date, extension)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error("Failed to store evidence %s: %s", path, e)
            raise StorageError(f"Could not store evidence for {name}") from e
        return str(path)

    def replace(self, name: str, checkin_date: date, extension: str, data: bytes) -> str:
        """Write the new proof, then drop the older ones of (name, date).

        Earlier proofs survive a rejected extension or a failed write.
        """
        path = self.path_for(name, checkin_date, extension)
        tmp = path.with_name(f".{path.name}.part")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Failed to store evidence %s: %s", path, e)
            if tmp.is_file():
                tmp.unlink()
            raise StorageError(f"Could not store evidence for {name}") from e

        try:
            for p in path.parent.iterdir():
                if p.is_file() and p.stem == path.stem and p != path:
                    p.unlink()
        except OSError as e:
            # The new proof is already in place.
            logger.warning("Could not remove older evidence of %s in %s: %s", name, path.parent, e)
        return str(path)

    def remove_all(self, name: str, checkin_date: date) -> None:
        stem = safe_file_stem(name)
        day_dir = self.date_dir(checkin_date)
        if not day_dir.is_dir():
            return
        try:
            for p in day_dir.iterdir():
                if p.is_file() and p.stem == stem:
                    p.unlink()
        except OSError as e:
            logger.error("Failed to remove previous evidence of %s in %s: %s", name, day_dir, e)
            raise StorageError(f"Could not replace evidence for {name}") from e

    def purge_date(self, checkin_date: date) -> None:
        day_dir = self.date_dir(checkin_date)
        try:
            if day_dir.exists():
                shutil.rmtree(day_dir)
            # Recreated empty so a later submission for the same day still has a home.
            day_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to purge upload directory %s: %s", day_dir, e)
            raise StorageError(f"Could not purge evidence for {checkin_date}") from e
        logger.info("Purged upload directory %s", day_dir)
