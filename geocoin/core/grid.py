"""Cell index: maps continuous coordinates onto canonical grid cells."""

from __future__ import annotations

import math

from geocoin.core.enums import RadiusMetric
from geocoin.core.models import Cell, LatLng


class CellIndex:
    """Canonicalizing lookup from coordinates to ``Cell`` identities.

    Repeated lookups of the same integer pair return the same object, so
    callers may key maps by identity as well as by value.
    """

    __slots__ = ("tile_degrees", "_cells")

    def __init__(self, tile_degrees: float) -> None:
        self.tile_degrees = tile_degrees
        self._cells: dict[tuple[int, int], Cell] = {}

    # -- lookup --

    def cell(self, i: int, j: int) -> Cell:
        key = (i, j)
        cell = self._cells.get(key)
        if cell is None:
            cell = Cell(i, j)
            self._cells[key] = cell
        return cell

    def cell_of(self, lat: float, lng: float) -> Cell:
        return self.cell(
            math.floor(lat / self.tile_degrees),
            math.floor(lng / self.tile_degrees),
        )

    def canonical(self, cell: Cell) -> Cell:
        """Return the canonical instance for a cell built elsewhere."""
        return self.cell(cell.i, cell.j)

    def anchor(self, cell: Cell) -> LatLng:
        """Centre of *cell*; ``cell_of`` maps it back to the same cell."""
        return LatLng((cell.i + 0.5) * self.tile_degrees, (cell.j + 0.5) * self.tile_degrees)

    def __len__(self) -> int:
        return len(self._cells)

    # -- neighborhood --

    def neighborhood(
        self,
        center: Cell,
        radius: int,
        metric: RadiusMetric = RadiusMetric.CHEBYSHEV,
    ) -> list[Cell]:
        """Return every cell within *radius* of *center*, bound inclusive.

        Chebyshev covers the ``(2r+1)^2`` square; Euclidean keeps offsets
        with ``di^2 + dj^2 <= r^2``. Order is row-major by offset.
        """
        r_sq = radius * radius
        result: list[Cell] = []
        for di in range(-radius, radius + 1):
            for dj in range(-radius, radius + 1):
                if metric == RadiusMetric.EUCLIDEAN and di * di + dj * dj > r_sq:
                    continue
                result.append(self.cell(center.i + di, center.j + dj))
        return result
