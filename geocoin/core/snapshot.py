"""Persisted snapshot of a game session and its restore policy.

Wire shape (camelCase keys)::

    {
      "playerLat": float, "playerLng": float,
      "playerCoins": [{"cell": {"i": int, "j": int}, "serial": int}, ...],
      "locationHistory": [[lat, lng], ...],
      "caches": [{"lat": float, "lng": float, "memento": str}, ...]
    }

Each cache is anchored at its cell centre and recovered with ``cell_of``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geocoin.core.errors import CorruptMemento, CorruptSnapshot
from geocoin.core.memento import CoinRecord, decode_ledger
from geocoin.core.models import Cell, Coin, LatLng

if TYPE_CHECKING:
    from geocoin.core.world_state import World

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float
    lng: float
    # Decoded per cache by restore_world; a bad ledger is a CorruptMemento, not a CorruptSnapshot
    memento: Any


class Snapshot(BaseModel):
    """Everything needed to rebuild a ``World``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    player_lat: float = Field(alias="playerLat")
    player_lng: float = Field(alias="playerLng")
    player_coins: list[CoinRecord] = Field(default_factory=list, alias="playerCoins")
    location_history: list[tuple[float, float]] = Field(default_factory=list, alias="locationHistory")
    caches: list[CacheEntry] = Field(default_factory=list)

    @classmethod
    def from_world(cls, world: World) -> Snapshot:
        keep_pristine = world.config.persist_pristine_caches
        caches = []
        for cache in world.registry:
            if not keep_pristine and world.registry.is_pristine(cache):
                continue
            anchor = world.cells.anchor(cache.cell)
            caches.append(CacheEntry(lat=anchor.lat, lng=anchor.lng, memento=cache.to_memento()))
        return cls(
            player_lat=world.position.lat,
            player_lng=world.position.lng,
            player_coins=[CoinRecord.from_coin(c) for c in world.inventory],
            location_history=[(p.lat, p.lng) for p in world.history],
            caches=caches,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: Any) -> Snapshot:
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CorruptSnapshot(f"invalid snapshot: {exc.error_count()} error(s)") from exc


@dataclass(slots=True)
class RestoreReport:
    """What ``restore_world`` had to repair while loading."""

    caches_restored: int = 0
    corrupt_mementos: int = 0
    duplicate_caches: int = 0
    duplicate_coins: int = 0

    @property
    def clean(self) -> bool:
        return not (self.corrupt_mementos or self.duplicate_caches or self.duplicate_coins)


def restore_world(world: World, snapshot: Snapshot) -> RestoreReport:
    """Rebuild *world* from *snapshot*.

    Caches come back from their mementos, never from the oracle, unless the
    memento is corrupt; those fall back to the oracle's starting ledger.
    Coin identities stay unique: the inventory claims coins first, then
    intact mementos, then fallbacks. The visible set is left empty.
    """
    report = RestoreReport()
    world.reset()
    cells = world.cells
    seen: set[tuple[int, int, int]] = set()

    def _unique(coins: list[Coin], where: str) -> list[Coin]:
        kept: list[Coin] = []
        for coin in coins:
            if coin.key in seen:
                report.duplicate_coins += 1
                logger.warning("Dropped duplicate coin %s found in %s", coin.label, where)
                continue
            seen.add(coin.key)
            kept.append(coin)
        return kept

    world.position = LatLng(snapshot.player_lat, snapshot.player_lng)
    world.history = [LatLng(lat, lng) for lat, lng in snapshot.location_history] or [world.position]
    limit = world.config.history_limit
    if limit > 0:
        world.history = world.history[-limit:]
    world.inventory = _unique([r.to_coin(cells) for r in snapshot.player_coins], "inventory")

    claimed: set[Cell] = set()
    fallbacks: list[Cell] = []
    for entry in snapshot.caches:
        cell = cells.cell_of(entry.lat, entry.lng)
        if cell in claimed:
            report.duplicate_caches += 1
            logger.warning("Ignored repeated snapshot entry for cache %s", cell)
            continue
        claimed.add(cell)
        try:
            coins = decode_ledger(entry.memento, cells)
        except CorruptMemento as exc:
            report.corrupt_mementos += 1
            logger.warning("Cache %s memento lost (%s); respawning from oracle", cell, exc)
            fallbacks.append(cell)
            continue
        world.registry.adopt(cell, _unique(coins, f"cache {cell}"))
        report.caches_restored += 1

    for cell in fallbacks:
        world.registry.adopt(cell, _unique(world.oracle.initial_coins(cell), f"respawned cache {cell}"))
        report.caches_restored += 1

    logger.info(
        "Restored %d caches, %d coins held (corrupt=%d, dup caches=%d, dup coins=%d)",
        report.caches_restored, len(world.inventory),
        report.corrupt_mementos, report.duplicate_caches, report.duplicate_coins,
    )
    return report
