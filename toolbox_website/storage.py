"""Persistence backends for per-profile state such as favorites."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Dict
from typing import Optional
from typing import Protocol

from toolbox_website import config

logger = logging.getLogger(__name__)

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageUnavailableError(RuntimeError):
    """The persistence backend cannot be read or written."""


class CorruptSlotError(ValueError):
    """The slot exists but its bytes are not readable text."""


class StorageBackend(Protocol):
    def read(self, slot: str) -> Optional[str]:
        """Return the stored text, or None when the slot is empty.

        Raises ``CorruptSlotError`` when the stored bytes cannot be decoded.
        """

    def write(self, slot: str, value: str) -> None:
        """Replace the whole slot with ``value``."""

    def remove(self, slot: str) -> None:
        """Clear the slot; clearing an empty slot is not an error."""


class MemoryStorage:
    """Dict-backed storage for tests and single-process development."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, slot: str) -> Optional[str]:
        return self._slots.get(slot)

    def write(self, slot: str, value: str) -> None:
        self._slots[slot] = value
        self.writes += 1

    def remove(self, slot: str) -> None:
        self._slots.pop(slot, None)


class LocalFileStorage:
    """One file per slot under ``directory``; each write replaces the file."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise StorageUnavailableError(f"Invalid storage slot name: {slot!r}")
        return self.directory / f"{slot}.json"

    def read(self, slot: str) -> Optional[str]:
        path = self._path(slot)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptSlotError(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {path}: {e}") from e

    def write(self, slot: str, value: str) -> None:
        path = self._path(slot)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {path}: {e}") from e

    def remove(self, slot: str) -> None:
        path = self._path(slot)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Failed to remove {path}: {e}") from e


def get_storage_backend() -> StorageBackend:
    """Storage selected by TOOLBOX_STORAGE_BACKEND (local or memory)."""
    backend = config.storage_backend()
    if backend == "memory":
        return MemoryStorage()
    if backend != "local":
        logger.warning(f"Unknown storage backend '{backend}', falling back to local files")
    directory = config.favorites_data_dir()
    logger.info(f"Using local favorites storage at {directory}")
    return LocalFileStorage(directory)
