"""Deterministic spawn oracle using xxhash.

The Golden Rule: whether a cell holds a cache, and how many coins it
starts with, depends ONLY on the cell's coordinates. No clock, counter or
process state ever enters the seed.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

import xxhash

from geocoin.core.models import Cell, Coin

if TYPE_CHECKING:
    from geocoin.config import GameConfig

_TWO_64 = float(1 << 64)


def luck(seed: str) -> float:
    """Return a deterministic float in [0.0, 1.0) for *seed*.

    xxh64 over the UTF-8 bytes, scaled by 2**64. Stable across runs,
    processes and platforms.
    """
    return xxhash.xxh64(seed.encode("utf-8")).intdigest() / _TWO_64


def cache_seed(cell: Cell) -> str:
    return f"cache_at_{cell.i},{cell.j}"


def coins_seed(cell: Cell) -> str:
    return f"{cell.i},{cell.j},coins"


class SpawnOracle:
    """Decides cache existence and starting ledger size per cell.

    The existence decision is memoized per cell; the function is pure, so
    memoization only saves work and never changes an answer.
    """

    __slots__ = ("_luck", "_probability", "_max_coins", "_existence")

    def __init__(self, config: GameConfig, luck: Callable[[str], float] = luck) -> None:
        self._luck = luck
        self._probability = config.spawn_probability
        self._max_coins = config.max_coins
        self._existence: dict[Cell, bool] = {}

    def has_cache(self, cell: Cell) -> bool:
        known = self._existence.get(cell)
        if known is None:
            known = self._luck(cache_seed(cell)) < self._probability
            self._existence[cell] = known
        return known

    def initial_coin_count(self, cell: Cell) -> int:
        return math.floor(self._luck(coins_seed(cell)) * self._max_coins)

    def initial_coins(self, cell: Cell) -> list[Coin]:
        """Synthesize the starting ledger: serials ``0..count-1``."""
        return [Coin(cell, serial) for serial in range(self.initial_coin_count(cell))]
