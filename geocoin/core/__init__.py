"""Core data models and world representation."""

from geocoin.core.enums import CellState, Direction, RadiusMetric
from geocoin.core.errors import AlreadyExists, CorruptMemento, CorruptSnapshot, GeoCoinError
from geocoin.core.models import Cell, Coin, LatLng
from geocoin.core.grid import CellIndex
from geocoin.core.cache import Cache
from geocoin.core.registry import CacheRegistry

__all__ = [
    "AlreadyExists",
    "Cache",
    "CacheRegistry",
    "Cell",
    "CellIndex",
    "CellState",
    "Coin",
    "CorruptMemento",
    "CorruptSnapshot",
    "Direction",
    "GeoCoinError",
    "LatLng",
    "RadiusMetric",
]
