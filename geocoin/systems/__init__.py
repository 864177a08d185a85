"""Engine systems: spawn oracle and visibility management."""

from geocoin.systems.rng import SpawnOracle, luck
from geocoin.systems.visibility import VisibilityDelta, VisibilityManager

__all__ = ["SpawnOracle", "VisibilityDelta", "VisibilityManager", "luck"]
