"""Ballistic phonon transport in a 2-D grid of rectangular cells."""
from phonontransport.model.geometry import Rectangle, Vector
from phonontransport.model.phonon import Phonon
from phonontransport.model.surface import (
    Surface, BoundarySurface, TransmissionSurface, SurfaceLocation
)
from phonontransport.model.cell import Cell, MaterialSnapshot, SensorMeasurements
from phonontransport.model.grid import Grid

__all__ = [
    "Rectangle", "Vector", "Phonon",
    "Surface", "BoundarySurface", "TransmissionSurface", "SurfaceLocation",
    "Cell", "MaterialSnapshot", "SensorMeasurements", "Grid",
]
