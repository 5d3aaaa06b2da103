from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Sequence

from phonontransport.model.cell import Cell
from phonontransport.model.surface import SurfaceLocation, TransmissionSurface

if TYPE_CHECKING:
    from phonontransport.pre.material import Material

logger = logging.getLogger(__name__)


class Grid:
    """
    Regular nx-by-ny arrangement of equally sized cells.

    Interior faces transmit phonons to the neighbouring cell, the outer faces
    of the grid reflect them. Cell ids run row by row: ``id = iy * nx + ix``.
    """
    def __init__(
        self,
        nx: int,
        ny: int,
        cell_length: float,
        cell_width: float,
        material: Material,
        init_temps: float | Sequence[float],
    ) -> None:
        """
        Initialize the grid.

        Args:
            nx: Number of cells along x.
            ny: Number of cells along y.
            cell_length: Extent of one cell along x.
            cell_width: Extent of one cell along y.
            material: Material shared by all cells.
            init_temps: One initial temperature for all cells, or one per cell in id order.
        """
        if nx < 1 or ny < 1:
            raise ValueError(f"Grid needs at least one cell in each direction, got {nx}x{ny}.")

        if isinstance(init_temps, (int, float)):
            init_temps = [float(init_temps)] * (nx * ny)
        if len(init_temps) != nx * ny:
            raise ValueError(f"Expected {nx * ny} initial temperatures, got {len(init_temps)}.")

        self.nx = nx
        self.ny = ny
        self.cells: list[Cell] = []
        for iy in range(ny):
            for ix in range(nx):
                cell_id = iy * nx + ix
                cell = Cell(cell_length, cell_width, material, init_temps[cell_id], cell_id=cell_id)
                cell.add_to_area(cell.extent.area)
                self.cells.append(cell)

        self._connect_neighbours()
        logger.info(f"Created {nx}x{ny} grid of {cell_length}x{cell_width} cells.")

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def cell_at(self, ix: int, iy: int) -> Cell:
        if not (0 <= ix < self.nx and 0 <= iy < self.ny):
            raise IndexError(f"Cell ({ix}, {iy}) is outside the {self.nx}x{self.ny} grid.")
        return self.cells[iy * self.nx + ix]

    def _join(self, cell: Cell, neighbour: Cell, location: SurfaceLocation) -> None:
        cell.set_surface(location, TransmissionSurface(location, cell, neighbour))
        back = location.opposite
        neighbour.set_surface(back, TransmissionSurface(back, neighbour, cell))

    def _connect_neighbours(self) -> None:
        for iy in range(self.ny):
            for ix in range(self.nx):
                cell = self.cell_at(ix, iy)
                if ix + 1 < self.nx:
                    self._join(cell, self.cell_at(ix + 1, iy), SurfaceLocation.RIGHT)
                if iy + 1 < self.ny:
                    self._join(cell, self.cell_at(ix, iy + 1), SurfaceLocation.TOP)
