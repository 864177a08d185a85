"""Visibility manager: spawns, hides and restores caches around the player."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geocoin.core.enums import CellState
from geocoin.core.models import Cell

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.core.world_state import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VisibilityDelta:
    """Cells whose display state changed during one update."""

    spawned: tuple[Cell, ...] = ()
    restored: tuple[Cell, ...] = ()
    hidden: tuple[Cell, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.spawned or self.restored or self.hidden)


class VisibilityManager:
    """Keeps ``world.visible`` equal to the caches within range of a cell.

    Every update scans the full neighborhood of the destination, so a jump
    of any length shows and hides exactly the right caches. Hiding never
    touches a ledger, and a registered cache is never re-tested against
    the oracle.
    """

    __slots__ = ("_radius", "_metric")

    def __init__(self, config: GameConfig) -> None:
        self._radius = config.neighborhood_size
        self._metric = config.radius_metric

    def update(self, world: World, center: Cell | None = None) -> VisibilityDelta:
        if center is None:
            center = world.player_cell
        in_range = world.cells.neighborhood(center, self._radius, self._metric)
        in_range_set = set(in_range)

        spawned: list[Cell] = []
        restored: list[Cell] = []
        for cell in in_range:
            if cell in world.visible:
                continue
            if cell in world.registry:
                restored.append(cell)
            elif world.oracle.has_cache(cell):
                world.spawn_cache(cell)
                spawned.append(cell)
            else:
                continue
            world.visible[cell] = None

        hidden = [cell for cell in world.visible if cell not in in_range_set]
        for cell in hidden:
            del world.visible[cell]

        delta = VisibilityDelta(tuple(spawned), tuple(restored), tuple(hidden))
        if delta.changed:
            logger.debug(
                "Visibility around %s: +%d spawned, +%d restored, -%d hidden",
                center, len(spawned), len(restored), len(hidden),
            )
        return delta

    @staticmethod
    def state_of(world: World, cell: Cell) -> CellState:
        if cell in world.visible:
            return CellState.MATERIALIZED
        if cell in world.registry:
            return CellState.DEMATERIALIZED
        return CellState.UNCONSIDERED
