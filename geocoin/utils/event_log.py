"""Bounded ring buffer of game events exposed via the API."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from geocoin.core.models import Cell


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single entry in the event feed."""

    seq: int
    category: str
    message: str
    cells: tuple[Cell, ...] = ()  # Cells involved in this event


class EventLog:
    """Keeps the most recent *maxlen* events, numbered from 1.

    Only the session's event-processing thread appends; readers take copies.
    """

    __slots__ = ("_buffer", "_next_seq")

    def __init__(self, maxlen: int = 500) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._next_seq = 1

    def append(self, category: str, message: str, cells: tuple[Cell, ...] = ()) -> GameEvent:
        event = GameEvent(self._next_seq, category, message, cells)
        self._next_seq += 1
        self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all retained events with ``seq >= seq``."""
        return [e for e in self._buffer if e.seq >= seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)
