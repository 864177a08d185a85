"""Geolocation collaborator: cancelable position watches."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

PositionCallback = Callable[[float, float], None]
ErrorCallback = Callable[[str], None]


class PositionWatch:
    """A registration that forwards samples until cancelled.

    Once ``cancel()`` returns, neither callback fires again.
    """

    __slots__ = ("watch_id", "_on_position", "_on_error", "_active")

    def __init__(self, watch_id: int, on_position: PositionCallback, on_error: ErrorCallback) -> None:
        self.watch_id = watch_id
        self._on_position = on_position
        self._on_error = on_error
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def deliver(self, lat: float, lng: float) -> bool:
        if not self._active:
            return False
        self._on_position(lat, lng)
        return True

    def fail(self, reason: str) -> bool:
        if not self._active:
            return False
        self._on_error(reason)
        return True


class PushGeolocation:
    """Provider fed from outside: HTTP clients or tests push samples in."""

    __slots__ = ("_watch", "_next_id")

    def __init__(self) -> None:
        self._watch: PositionWatch | None = None
        self._next_id = 1

    def watch(self, on_position: PositionCallback, on_error: ErrorCallback) -> PositionWatch:
        if self._watch is not None:
            self._watch.cancel()
        self._watch = PositionWatch(self._next_id, on_position, on_error)
        self._next_id += 1
        logger.debug("Geolocation watch %d registered", self._watch.watch_id)
        return self._watch

    def push(self, lat: float, lng: float) -> bool:
        """Deliver a sample; False when no watch is active."""
        if self._watch is None:
            return False
        return self._watch.deliver(lat, lng)

    def push_error(self, reason: str) -> bool:
        if self._watch is None:
            return False
        return self._watch.fail(reason)
