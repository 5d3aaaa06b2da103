import gc

import pytest

from phonontransport.model.cell import Cell
from phonontransport.model.surface import (
    BoundarySurface, SurfaceLocation, TransmissionSurface
)


@pytest.mark.parametrize("location", [SurfaceLocation.LEFT, SurfaceLocation.RIGHT])
def test_vertical_surface_negates_dx(cell, make_phonon, location):
    p = make_phonon(dx=0.6, dy=0.8)
    returned = cell.get_surface(location).handle_phonon(p)
    assert returned is cell
    assert p.get_direction() == (-0.6, 0.8)


@pytest.mark.parametrize("location", [SurfaceLocation.TOP, SurfaceLocation.BOTTOM])
def test_horizontal_surface_negates_dy(cell, make_phonon, location):
    p = make_phonon(dx=0.6, dy=-0.8)
    returned = cell.get_surface(location).handle_phonon(p)
    assert returned is cell
    assert p.get_direction() == (0.6, 0.8)


@pytest.mark.parametrize("location", list(SurfaceLocation))
def test_reflecting_twice_restores_direction(cell, make_phonon, location):
    p = make_phonon(dx=0.28, dy=-0.96)
    surface = cell.get_surface(location)
    surface.handle_phonon(p)
    surface.handle_phonon(p)
    assert p.get_direction() == (0.28, -0.96)


def test_reflection_does_not_move_phonon(cell, make_phonon):
    p = make_phonon(x=1.0, y=0.3, dx=1.0, dy=0.0)
    cell.get_surface(SurfaceLocation.RIGHT).handle_phonon(p)
    assert p.get_coords() == (1.0, 0.3)


def test_cell_starts_with_four_boundary_surfaces(cell):
    for location in SurfaceLocation:
        surface = cell.get_surface(location)
        assert isinstance(surface, BoundarySurface)
        assert surface.location == location
        assert surface.cell is cell


def test_opposite_locations():
    assert SurfaceLocation.LEFT.opposite == SurfaceLocation.RIGHT
    assert SurfaceLocation.TOP.opposite == SurfaceLocation.BOTTOM
    assert SurfaceLocation.BOTTOM.opposite.opposite == SurfaceLocation.BOTTOM


@pytest.mark.parametrize(
    "location, start, expected",
    [
        (SurfaceLocation.RIGHT, (2.0, 0.4), (0.0, 0.4)),
        (SurfaceLocation.LEFT, (0.0, 0.4), (3.0, 0.4)),
        (SurfaceLocation.TOP, (0.7, 1.0), (0.7, 0.0)),
        (SurfaceLocation.BOTTOM, (0.7, 0.0), (0.7, 1.0)),
    ],
)
def test_transmission_places_phonon_on_neighbour_face(material, make_phonon, location, start, expected):
    cell = Cell(2.0, 1.0, material, 300.0)
    neighbour = Cell(3.0, 1.0, material, 300.0, cell_id=1)
    surface = TransmissionSurface(location, cell, neighbour)
    p = make_phonon(x=start[0], y=start[1], dx=0.6, dy=0.8, drift_time=0.5)

    returned = surface.handle_phonon(p)

    assert returned is neighbour
    assert p.get_coords() == expected
    assert p.get_direction() == (0.6, 0.8)
    assert p.drift_time == 0.5
    assert neighbour.incoming_phonons == [p]
    assert neighbour.phonons == []


def test_transmission_forgets_phonon_passing_through(material, make_phonon):
    a = Cell(1.0, 1.0, material, 300.0, cell_id=0)
    b = Cell(1.0, 1.0, material, 300.0, cell_id=1)
    c = Cell(1.0, 1.0, material, 300.0, cell_id=2)
    p = make_phonon(x=1.0)

    TransmissionSurface(SurfaceLocation.RIGHT, a, b).handle_phonon(p)
    TransmissionSurface(SurfaceLocation.RIGHT, b, c).handle_phonon(p)

    assert b.incoming_phonons == []
    assert c.incoming_phonons == [p]


def test_dead_cell_reference_raises(material):
    cell = Cell(1.0, 1.0, material, 300.0)
    surface = cell.get_surface(SurfaceLocation.LEFT)
    del cell
    gc.collect()
    with pytest.raises(RuntimeError):
        surface.cell


def test_set_surface_rejects_foreign_surface(material):
    a = Cell(1.0, 1.0, material, 300.0, cell_id=0)
    b = Cell(1.0, 1.0, material, 300.0, cell_id=1)
    with pytest.raises(ValueError):
        a.set_surface(SurfaceLocation.RIGHT, TransmissionSurface(SurfaceLocation.RIGHT, b, a))
