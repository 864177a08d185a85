"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import RadiusMetric


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World anchor (Oakes College classroom)
    origin_lat: float = 36.98949379578401
    origin_lng: float = -122.06277128548504

    # Grid
    tile_degrees: float = 1e-4
    neighborhood_size: int = 8
    radius_metric: RadiusMetric = RadiusMetric.CHEBYSHEV

    # Spawning
    spawn_probability: float = 0.1
    max_coins: int = 10

    # Persistence
    store_path: str = "geocoin_save.json"
    history_limit: int = 1000              # Most recent location points kept in the snapshot
    persist_pristine_caches: bool = True   # False drops untouched caches from snapshots

    # Debug: raise on duplicate cache creation instead of reusing the existing one
    strict: bool = False

    # Logging
    log_level: str = "INFO"
    event_log_size: int = 500
