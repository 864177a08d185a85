"""Cache registry: owns every cache created this session, keyed by cell."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from geocoin.core.cache import Cache
from geocoin.core.errors import AlreadyExists
from geocoin.core.models import Cell, Coin

if TYPE_CHECKING:
    from geocoin.systems.rng import SpawnOracle

logger = logging.getLogger(__name__)


class CacheRegistry:
    """All materialized and dematerialized caches.

    Entries are only added, never dropped, except by ``clear()`` on reset.
    """

    __slots__ = ("_oracle", "_caches")

    def __init__(self, oracle: SpawnOracle) -> None:
        self._oracle = oracle
        self._caches: dict[Cell, Cache] = {}

    def create(self, cell: Cell) -> Cache:
        """Create *cell*'s cache with its oracle-derived starting ledger."""
        if cell in self._caches:
            raise AlreadyExists(cell)
        cache = Cache(cell, self._oracle.initial_coins(cell))
        self._caches[cell] = cache
        logger.debug("Created cache %s with %d coins", cell, cache.count)
        return cache

    def adopt(self, cell: Cell, coins: list[Coin]) -> Cache:
        """Register *cell*'s cache with a ledger restored from persistence."""
        if cell in self._caches:
            raise AlreadyExists(cell)
        cache = Cache(cell, list(coins))
        self._caches[cell] = cache
        return cache

    def get(self, cell: Cell) -> Cache | None:
        return self._caches.get(cell)

    def is_pristine(self, cache: Cache) -> bool:
        """True when the ledger still equals the oracle's starting ledger."""
        return cache.coins == self._oracle.initial_coins(cache.cell)

    def clear(self) -> None:
        self._caches.clear()

    def __contains__(self, cell: object) -> bool:
        return cell in self._caches

    def __iter__(self) -> Iterator[Cache]:
        return iter(self._caches.values())

    def __len__(self) -> int:
        return len(self._caches)
