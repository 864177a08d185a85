"""GameSession: processes player intents one at a time against the World.

Every intent runs to completion: mutate the World, refresh visibility,
hand a fresh snapshot to the store, and let the caller read a new view.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoin.core.enums import DIRECTION_STEPS, Direction
from geocoin.core.models import Cell, Coin, LatLng
from geocoin.core.snapshot import RestoreReport, Snapshot, restore_world
from geocoin.core.view import GameView
from geocoin.core.world_state import World
from geocoin.systems.visibility import VisibilityDelta, VisibilityManager
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.engine.geolocation import PositionWatch, PushGeolocation
    from geocoin.engine.persistence import SnapshotStore
    from geocoin.systems.rng import SpawnOracle

logger = logging.getLogger(__name__)


class GameSession:
    """Single-threaded owner of a World and its collaborators."""

    def __init__(
        self,
        config: GameConfig,
        store: SnapshotStore | None = None,
        geolocation: PushGeolocation | None = None,
        oracle: SpawnOracle | None = None,
    ) -> None:
        self.config = config
        self.world = World(config, oracle)
        self.visibility = VisibilityManager(config)
        self.events = EventLog(config.event_log_size)
        self.last_restore: RestoreReport | None = None
        self._store = store
        self._geolocation = geolocation
        self._watch: PositionWatch | None = None
        self._started = False

    # -- lifecycle --

    def start(self) -> GameView:
        """Load the stored snapshot (once) and show the starting neighborhood."""
        if self._started:
            return self.view()
        self._started = True
        snapshot = self._store.load() if self._store is not None else None
        if snapshot is not None:
            self.last_restore = restore_world(self.world, snapshot)
            self.events.append("session", f"Resumed with {self.world.points} coins held.")
        else:
            self.events.append("session", "New game started.")
        self._refresh_visibility()
        return self.view()

    def reset(self) -> GameView:
        """Erase all progress and start over at the origin."""
        if self._store is not None:
            self._store.clear()
        self.world.reset()
        self.events.append("session", "Game reset.")
        logger.info("Game reset to origin %s", self.world.position)
        self._refresh_visibility()
        self._persist()
        return self.view()

    @property
    def tracking(self) -> bool:
        return self._watch is not None and self._watch.active

    def view(self) -> GameView:
        return GameView.from_world(self.world, tracking=self.tracking)

    def cell(self, i: int, j: int) -> Cell:
        return self.world.cells.cell(i, j)

    # -- movement --

    def move(self, d_lat: float, d_lng: float) -> VisibilityDelta:
        """Step by *d_lat*/*d_lng* tiles."""
        self.world.move_by(d_lat, d_lng)
        return self._after_move()

    def step(self, direction: Direction) -> VisibilityDelta:
        d_lat, d_lng = DIRECTION_STEPS[direction]
        return self.move(d_lat, d_lng)

    def move_to(self, lat: float, lng: float) -> VisibilityDelta:
        """Jump to an absolute position, e.g. a geolocation sample."""
        self.world.place_player(LatLng(lat, lng))
        return self._after_move()

    def _after_move(self) -> VisibilityDelta:
        delta = self._refresh_visibility()
        self._persist()
        return delta

    def _refresh_visibility(self) -> VisibilityDelta:
        delta = self.visibility.update(self.world)
        if delta.spawned:
            self.events.append("spawn", f"{len(delta.spawned)} new caches nearby.", delta.spawned)
        return delta

    # -- transfers --

    def collect(self, cell: Cell) -> list[Coin]:
        coins = self.world.collect(cell)
        if coins:
            self.events.append("collect", f"Collected {len(coins)} coins from {cell}.", (cell,))
        self._persist()
        return coins

    def deposit(self, cell: Cell) -> list[Coin]:
        coins = self.world.deposit(cell)
        if coins:
            self.events.append("deposit", f"Deposited {len(coins)} coins into {cell}.", (cell,))
        self._persist()
        return coins

    def collect_coin(self, cell: Cell, coin: Coin) -> bool:
        moved = self.world.collect_coin(cell, coin)
        if moved:
            self.events.append("collect", f"Collected {coin.label} from {cell}.", (cell,))
        self._persist()
        return moved

    def deposit_coin(self, cell: Cell) -> Coin | None:
        coin = self.world.deposit_coin(cell)
        if coin is not None:
            self.events.append("deposit", f"Deposited {coin.label} into {cell}.", (cell,))
        self._persist()
        return coin

    # -- geolocation --

    def toggle_tracking(self) -> bool:
        """Start or stop following geolocation; returns the new state."""
        if self._watch is not None:
            self._stop_tracking()
            self.events.append("tracking", "Location tracking off.")
            return False
        if self._geolocation is None:
            logger.warning("No geolocation provider; tracking unavailable")
            return False
        self._watch = self._geolocation.watch(self._on_position, self._on_position_error)
        self.events.append("tracking", "Location tracking on.")
        return True

    def _stop_tracking(self) -> None:
        if self._watch is not None:
            self._watch.cancel()
            self._watch = None

    def _on_position(self, lat: float, lng: float) -> None:
        self.move_to(lat, lng)

    def _on_position_error(self, reason: str) -> None:
        logger.warning("Geolocation failed (%s); reverting to manual movement", reason)
        self._stop_tracking()
        self.events.append("tracking", f"Location tracking stopped: {reason}")

    # -- persistence --

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save(Snapshot.from_world(self.world))
