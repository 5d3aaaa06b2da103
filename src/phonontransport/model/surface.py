"""
Cell Surfaces
=============
Each cell is bounded by four axis-aligned faces. A surface decides what
happens to a phonon that reached it and tells the caller which cell the
phonon continues in.

Classes:
    SurfaceLocation: The four faces of a rectangular cell.
    Surface: Abstract interface ``handle_phonon(phonon) -> Cell``.
    BoundarySurface: Specular reflection, the phonon stays in its cell.
    TransmissionSurface: Hands the phonon over to the neighbouring cell.
"""
from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phonontransport.model.cell import Cell
    from phonontransport.model.phonon import Phonon

logger = logging.getLogger(__name__)


class SurfaceLocation(StrEnum):
    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"

    @property
    def is_vertical(self) -> bool:
        """True for faces normal to the x axis."""
        return self in (SurfaceLocation.LEFT, SurfaceLocation.RIGHT)

    @property
    def opposite(self) -> SurfaceLocation:
        return _OPPOSITE[self]


_OPPOSITE = {
    SurfaceLocation.LEFT: SurfaceLocation.RIGHT,
    SurfaceLocation.RIGHT: SurfaceLocation.LEFT,
    SurfaceLocation.TOP: SurfaceLocation.BOTTOM,
    SurfaceLocation.BOTTOM: SurfaceLocation.TOP,
}


def _resolve(ref: weakref.ReferenceType[Cell]) -> Cell:
    cell = ref()
    if cell is None:
        raise RuntimeError("Surface refers to a cell that no longer exists.")
    return cell


class Surface(ABC):
    """
    Abstract base class for cell faces.

    The owning cell is held through a weak reference: a surface never keeps
    its cell alive and is never shared between cells.
    """
    def __init__(self, location: SurfaceLocation, cell: Cell) -> None:
        self.location = location
        self._cell_ref = weakref.ref(cell)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(location={self.location.value})"

    @property
    def cell(self) -> Cell:
        """The cell this surface bounds."""
        return _resolve(self._cell_ref)

    @abstractmethod
    def handle_phonon(self, phonon: Phonon) -> Cell:
        """
        Apply the surface rule to a phonon sitting on this surface.

        Args:
            phonon: Phonon positioned exactly on the surface.

        Returns:
            The cell the phonon continues moving in.
        """
        pass


class BoundarySurface(Surface):
    """
    Perfectly reflecting outer boundary.
    """
    def handle_phonon(self, phonon: Phonon) -> Cell:
        dx, dy = phonon.get_direction()
        if self.location.is_vertical:
            phonon.set_direction(-dx, dy)
        else:
            phonon.set_direction(dx, -dy)
        return self.cell


class TransmissionSurface(Surface):
    """
    Interior face shared with a neighbouring cell.

    The phonon keeps its direction and remaining drift time, is placed on the
    opposite face of the neighbour and queued there as incoming, so the
    neighbour does not process it again in the current step.
    """
    def __init__(self, location: SurfaceLocation, cell: Cell, neighbour: Cell) -> None:
        super().__init__(location, cell)
        self._neighbour_ref = weakref.ref(neighbour)

    @property
    def neighbour(self) -> Cell:
        return _resolve(self._neighbour_ref)

    def handle_phonon(self, phonon: Phonon) -> Cell:
        neighbour = self.neighbour
        # A phonon may cross several cells within one step
        self.cell.discard_incoming_phonon(phonon)
        landing = self.location.opposite
        if landing.is_vertical:
            phonon.set_coords(x=0.0 if landing == SurfaceLocation.LEFT else neighbour.length)
        else:
            phonon.set_coords(y=0.0 if landing == SurfaceLocation.BOTTOM else neighbour.width)

        neighbour.add_incoming_phonon(phonon)
        logger.debug(f"Phonon transmitted from cell {self.cell.id} to cell {neighbour.id} via {self.location.value} face.")
        return neighbour
