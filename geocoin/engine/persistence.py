"""Persistence gateway: stores and loads session snapshots.

Stores are fire-and-forget from the session's point of view. I/O failures
and unreadable blobs are logged here and never propagate.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from geocoin.core.errors import CorruptSnapshot
from geocoin.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore(ABC):
    """Opaque blob store specialised for one snapshot."""

    __slots__ = ()

    def load(self) -> Snapshot | None:
        try:
            blob = self._read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Snapshot read failed: %s", exc)
            return None
        if blob is None:
            return None
        try:
            return Snapshot.from_dict(json.loads(blob))
        except (ValueError, CorruptSnapshot) as exc:
            logger.warning("Discarding unreadable snapshot: %s", exc)
            return None

    def save(self, snapshot: Snapshot) -> None:
        blob = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        try:
            self._write(blob)
        except OSError as exc:
            logger.warning("Snapshot write failed: %s", exc)

    def clear(self) -> None:
        try:
            self._delete()
        except OSError as exc:
            logger.warning("Snapshot clear failed: %s", exc)

    @abstractmethod
    def _read(self) -> str | None:
        """Return the stored blob, or None when nothing is stored."""

    @abstractmethod
    def _write(self, blob: str) -> None: ...

    @abstractmethod
    def _delete(self) -> None: ...


class FileSnapshotStore(SnapshotStore):
    """Snapshot kept as a JSON file on disk."""

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> str | None:
        if not self._path.exists():
            return None
        return self._path.read_text(encoding="utf-8")

    def _write(self, blob: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(blob, encoding="utf-8")
        tmp.replace(self._path)

    def _delete(self) -> None:
        self._path.unlink(missing_ok=True)


class MemorySnapshotStore(SnapshotStore):
    """Key/value store in a plain dict; the browser ``localStorage`` analogue."""

    __slots__ = ("_data", "_key", "saves", "loads")

    def __init__(self, data: dict[str, str] | None = None, key: str = "geocoin") -> None:
        self._data = data if data is not None else {}
        self._key = key
        self.saves = 0
        self.loads = 0

    def load(self) -> Snapshot | None:
        self.loads += 1
        return super().load()

    def save(self, snapshot: Snapshot) -> None:
        self.saves += 1
        super().save(snapshot)

    @property
    def blob(self) -> str | None:
        return self._data.get(self._key)

    def _read(self) -> str | None:
        return self._data.get(self._key)

    def _write(self, blob: str) -> None:
        self._data[self._key] = blob

    def _delete(self) -> None:
        self._data.pop(self._key, None)
