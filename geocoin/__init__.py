"""GeoCoin: deterministic geospatial coin caches."""

__version__ = "0.1.0"
