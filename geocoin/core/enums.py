"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class RadiusMetric(str, Enum):
    """Distance metric for the visibility neighborhood."""

    CHEBYSHEV = "chebyshev"
    EUCLIDEAN = "euclidean"


@unique
class CellState(IntEnum):
    """Lifecycle of a cell as seen by the visibility manager."""

    UNCONSIDERED = 0    # Never scanned, or scanned and holds no cache
    MATERIALIZED = 1    # Cache registered and currently visible
    DEMATERIALIZED = 2  # Cache registered, out of range, ledger retained


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


# Direction -> (d_lat, d_lng) in tile steps
DIRECTION_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (-1, 0),
    Direction.WEST: (0, -1),
}
