"""Read-only views handed to the rendering collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from geocoin.core.models import Cell, Coin, LatLng

if TYPE_CHECKING:
    from geocoin.core.world_state import World


@dataclass(frozen=True, slots=True)
class CacheView:
    cell: Cell
    anchor: LatLng
    coins: tuple[Coin, ...]


@dataclass(frozen=True, slots=True)
class GameView:
    """Immutable copy of what the player can see after an intent."""

    position: LatLng
    cell: Cell
    inventory: tuple[Coin, ...]
    history: tuple[LatLng, ...]
    caches: tuple[CacheView, ...]
    tracking: bool = False

    @property
    def points(self) -> int:
        return len(self.inventory)

    @property
    def status(self) -> str:
        if not self.inventory:
            return "No points accumulated."
        return f"{self.points} points accumulated."

    @classmethod
    def from_world(cls, world: World, tracking: bool = False) -> GameView:
        caches = []
        for cell in world.visible:
            cache = world.registry.get(cell)
            if cache is None:
                continue
            caches.append(CacheView(cell, world.cells.anchor(cell), tuple(cache.coins)))
        return cls(
            position=world.position,
            cell=world.player_cell,
            inventory=tuple(world.inventory),
            history=tuple(world.history),
            caches=tuple(caches),
            tracking=tracking,
        )
