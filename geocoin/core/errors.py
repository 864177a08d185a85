"""Exception hierarchy for the cache engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.core.models import Cell


class GeoCoinError(Exception):
    """Base class for all engine errors."""


class AlreadyExists(GeoCoinError):
    """A cache is already registered for this cell."""

    def __init__(self, cell: Cell) -> None:
        super().__init__(f"cache already exists at {cell}")
        self.cell = cell


class CorruptMemento(GeoCoinError):
    """A persisted coin ledger could not be parsed into well-formed coins."""


class CorruptSnapshot(GeoCoinError):
    """A persisted snapshot does not have the expected shape."""
