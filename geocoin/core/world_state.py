"""Mutable authoritative game state: only mutated by the GameSession."""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import TYPE_CHECKING, Iterator

from geocoin.core.cache import Cache
from geocoin.core.errors import AlreadyExists
from geocoin.core.grid import CellIndex
from geocoin.core.models import Cell, Coin, LatLng
from geocoin.core.registry import CacheRegistry
from geocoin.systems.rng import SpawnOracle

if TYPE_CHECKING:
    from geocoin.config import GameConfig

logger = logging.getLogger(__name__)


class World:
    """The single source of truth for a game session.

    Owns the cell index, the cache registry, the visible set and the
    player's position, inventory and path. Collect and deposit move whole
    ledgers, so the total number of coins across the inventory and every
    registered cache never changes.
    """

    __slots__ = ("config", "cells", "oracle", "registry", "visible", "position", "inventory", "history")

    def __init__(self, config: GameConfig, oracle: SpawnOracle | None = None) -> None:
        self.config = config
        self.cells = CellIndex(config.tile_degrees)
        self.oracle = oracle if oracle is not None else SpawnOracle(config)
        self.registry = CacheRegistry(self.oracle)
        # Insertion-ordered set of cells whose cache is currently shown
        self.visible: dict[Cell, None] = {}
        self.position = self.origin
        self.inventory: list[Coin] = []
        self.history: list[LatLng] = [self.position]

    # -- player --

    @property
    def origin(self) -> LatLng:
        return LatLng(self.config.origin_lat, self.config.origin_lng)

    @property
    def player_cell(self) -> Cell:
        return self.cells.cell_of(self.position.lat, self.position.lng)

    @property
    def points(self) -> int:
        return len(self.inventory)

    def place_player(self, position: LatLng) -> None:
        if not (math.isfinite(position.lat) and math.isfinite(position.lng)):
            raise ValueError(f"Non-finite position {position}")
        self.position = position
        self.history.append(position)
        self._trim_history()

    def move_by(self, d_lat: float, d_lng: float) -> LatLng:
        """Step the player by *d_lat*/*d_lng* tiles."""
        tile = self.config.tile_degrees
        self.place_player(self.position.moved(d_lat * tile, d_lng * tile))
        return self.position

    def _trim_history(self) -> None:
        limit = self.config.history_limit
        if limit > 0 and len(self.history) > limit:
            del self.history[:-limit]

    # -- caches --

    def spawn_cache(self, cell: Cell) -> Cache:
        """Create *cell*'s cache, reusing the existing one outside strict mode."""
        try:
            return self.registry.create(cell)
        except AlreadyExists:
            if self.config.strict:
                raise
            logger.error("Duplicate cache creation at %s ignored", cell)
            existing = self.registry.get(cell)
            assert existing is not None
            return existing

    def cache_at(self, cell: Cell) -> Cache | None:
        return self.registry.get(self.cells.canonical(cell))

    # -- transfers --

    def collect(self, cell: Cell) -> list[Coin]:
        """Move the cache's entire ledger into the inventory."""
        cache = self.cache_at(cell)
        if cache is None or cache.is_empty:
            return []
        taken = cache.take_all()
        self.inventory.extend(taken)
        return taken

    def deposit(self, cell: Cell) -> list[Coin]:
        """Move the entire inventory into the cache's ledger."""
        cache = self.cache_at(cell)
        if cache is None or not self.inventory:
            return []
        given = self.inventory
        self.inventory = []
        cache.put_all(given)
        return given

    def collect_coin(self, cell: Cell, coin: Coin) -> bool:
        cache = self.cache_at(cell)
        if cache is None or not cache.take(coin):
            return False
        self.inventory.append(coin)
        return True

    def deposit_coin(self, cell: Cell) -> Coin | None:
        """Move the most recently collected coin into the cache."""
        cache = self.cache_at(cell)
        if cache is None or not self.inventory:
            return None
        coin = self.inventory.pop()
        cache.put_all([coin])
        return coin

    # -- invariants --

    def all_coins(self) -> Iterator[Coin]:
        yield from self.inventory
        for cache in self.registry:
            yield from cache.coins

    def total_coins(self) -> int:
        return len(self.inventory) + sum(c.count for c in self.registry)

    def duplicate_coins(self) -> list[Coin]:
        counts = Counter(self.all_coins())
        return [coin for coin, n in counts.items() if n > 1]

    # -- lifecycle --

    def reset(self) -> None:
        self.registry.clear()
        self.visible.clear()
        self.inventory = []
        self.position = self.origin
        self.history = [self.position]
