"""SessionManager: serializes HTTP intents onto one GameSession.

FastAPI runs sync handlers on a thread pool; every intent holds the lock
for its whole run, so intents never interleave.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from geocoin.core.enums import Direction
from geocoin.core.view import GameView
from geocoin.engine.geolocation import PushGeolocation
from geocoin.engine.persistence import FileSnapshotStore, SnapshotStore
from geocoin.engine.session import GameSession
from geocoin.utils.event_log import GameEvent

if TYPE_CHECKING:
    from geocoin.config import GameConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Thread-safe facade over a single GameSession."""

    def __init__(self, config: GameConfig, store: SnapshotStore | None = None) -> None:
        self.config = config
        self.geolocation = PushGeolocation()
        self._store = store if store is not None else FileSnapshotStore(config.store_path)
        self._session = GameSession(config, store=self._store, geolocation=self.geolocation)
        self._lock = threading.Lock()

    def start(self) -> GameView:
        with self._lock:
            view = self._session.start()
        logger.info("Session ready at cell %s with %d caches visible", view.cell, len(view.caches))
        return view

    def view(self) -> GameView:
        with self._lock:
            return self._session.view()

    def events_since(self, seq: int) -> list[GameEvent]:
        with self._lock:
            return self._session.events.since(seq)

    def move(self, d_lat: float, d_lng: float) -> GameView:
        with self._lock:
            self._session.move(d_lat, d_lng)
            return self._session.view()

    def step(self, direction: Direction) -> GameView:
        with self._lock:
            self._session.step(direction)
            return self._session.view()

    def collect(self, i: int, j: int) -> tuple[int, GameView]:
        with self._lock:
            coins = self._session.collect(self._session.cell(i, j))
            return len(coins), self._session.view()

    def deposit(self, i: int, j: int) -> tuple[int, GameView]:
        with self._lock:
            coins = self._session.deposit(self._session.cell(i, j))
            return len(coins), self._session.view()

    def reset(self) -> GameView:
        with self._lock:
            return self._session.reset()

    def toggle_tracking(self) -> GameView:
        with self._lock:
            self._session.toggle_tracking()
            return self._session.view()

    def push_position(self, lat: float, lng: float) -> tuple[bool, GameView]:
        with self._lock:
            accepted = self.geolocation.push(lat, lng)
            return accepted, self._session.view()

    def push_position_error(self, reason: str) -> tuple[bool, GameView]:
        with self._lock:
            accepted = self.geolocation.push_error(reason)
            return accepted, self._session.view()
