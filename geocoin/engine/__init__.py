"""Engine layer: session event processing, persistence and geolocation."""

from geocoin.engine.geolocation import PositionWatch, PushGeolocation
from geocoin.engine.persistence import FileSnapshotStore, MemorySnapshotStore, SnapshotStore
from geocoin.engine.session import GameSession

__all__ = [
    "FileSnapshotStore",
    "GameSession",
    "MemorySnapshotStore",
    "PositionWatch",
    "PushGeolocation",
    "SnapshotStore",
]
