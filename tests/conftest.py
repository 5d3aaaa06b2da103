import math

import matplotlib
matplotlib.use("Agg")  # headless
import pytest

from phonontransport.model.cell import Cell
from phonontransport.model.geometry import Vector
from phonontransport.model.phonon import Phonon
from phonontransport.pre.material import TabulatedMaterial


@pytest.fixture
def material():
    """Material with a heat capacity rising linearly from 2.0 at 200 K to 4.0 at 400 K."""
    return TabulatedMaterial(
        name="Test",
        temperatures=[200.0, 300.0, 400.0],
        heat_capacities=[2.0, 3.0, 4.0],
        emit_energies=[1.0, 1.5, 2.0],
        base_tables=[[(0.0, 0.0), (1.0, 1.0)], [(0.0, 0.0), (1.0, 0.5)], [(0.0, 0.0), (1.0, 0.25)]],
        scatter_tables=[[(1.0, 0.1)], [(1.0, 0.2)], [(1.0, 0.3)]],
        emit_tables=[[(0.0, 0.0), (1.0, 0.9)], [(0.0, 0.0), (1.0, 0.8)], [(0.0, 0.0), (1.0, 0.7)]],
    )


@pytest.fixture
def cell(material):
    """Unit cell at 300 K covering its own area."""
    c = Cell(1.0, 1.0, material, 300.0)
    c.add_to_area(1.0)
    return c


@pytest.fixture
def make_phonon():
    def _make(x=0.5, y=0.5, dx=1.0, dy=0.0, speed=1.0, sign=1, drift_time=0.0):
        return Phonon(x, y, Vector(dx, dy), speed, sign, drift_time)
    return _make

