"""Core data models: Cell, Coin, LatLng."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable grid cell identity.

    Obtain instances through ``CellIndex`` so that equal pairs also share
    object identity.
    """

    i: int
    j: int

    def __repr__(self) -> str:
        return f"({self.i}, {self.j})"


@dataclass(frozen=True, slots=True)
class Coin:
    """A uniquely identified coin: its origin cell plus a per-cell serial."""

    origin: Cell
    serial: int

    @property
    def key(self) -> tuple[int, int, int]:
        return self.origin.i, self.origin.j, self.serial

    @property
    def label(self) -> str:
        return f"{self.origin.i}:{self.origin.j}#{self.serial}"

    def __repr__(self) -> str:
        return f"Coin({self.label})"


@dataclass(frozen=True, slots=True)
class LatLng:
    """A real-world coordinate in degrees."""

    lat: float
    lng: float

    def moved(self, d_lat: float, d_lng: float) -> LatLng:
        return LatLng(self.lat + d_lat, self.lng + d_lng)
