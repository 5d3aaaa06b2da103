import pytest

from phonontransport.model.grid import Grid
from phonontransport.model.surface import BoundarySurface, SurfaceLocation, TransmissionSurface


def test_cells_are_numbered_row_by_row(material):
    grid = Grid(3, 2, 1.0, 0.5, material, 300.0)

    assert len(grid) == 6
    assert [cell.id for cell in grid] == list(range(6))
    assert grid.cell_at(2, 1).id == 5
    assert grid.cell_at(0, 1).id == 3


def test_cells_cover_their_own_area(material):
    grid = Grid(2, 2, 2.0, 0.5, material, 300.0)
    for cell in grid:
        assert cell.area_covered == pytest.approx(1.0)


def test_per_cell_initial_temperatures(material):
    grid = Grid(2, 1, 1.0, 1.0, material, [310.0, 290.0])
    assert grid.cell_at(0, 0).init_temp == 310.0
    assert grid.cell_at(1, 0).temperature == 290.0


def test_wrong_number_of_temperatures(material):
    with pytest.raises(ValueError):
        Grid(2, 2, 1.0, 1.0, material, [300.0, 300.0])


def test_empty_grid_is_rejected(material):
    with pytest.raises(ValueError):
        Grid(0, 3, 1.0, 1.0, material, 300.0)


def test_cell_at_outside_grid(material):
    grid = Grid(2, 2, 1.0, 1.0, material, 300.0)
    with pytest.raises(IndexError):
        grid.cell_at(2, 0)


def test_interior_faces_transmit_outer_faces_reflect(material):
    grid = Grid(2, 2, 1.0, 1.0, material, 300.0)
    lower_left = grid.cell_at(0, 0)

    right = lower_left.get_surface(SurfaceLocation.RIGHT)
    top = lower_left.get_surface(SurfaceLocation.TOP)
    assert isinstance(right, TransmissionSurface)
    assert right.neighbour is grid.cell_at(1, 0)
    assert isinstance(top, TransmissionSurface)
    assert top.neighbour is grid.cell_at(0, 1)
    assert isinstance(lower_left.get_surface(SurfaceLocation.LEFT), BoundarySurface)
    assert isinstance(lower_left.get_surface(SurfaceLocation.BOTTOM), BoundarySurface)

    upper_right = grid.cell_at(1, 1)
    assert upper_right.get_surface(SurfaceLocation.LEFT).neighbour is grid.cell_at(0, 1)
    assert upper_right.get_surface(SurfaceLocation.BOTTOM).neighbour is grid.cell_at(1, 0)
    assert isinstance(upper_right.get_surface(SurfaceLocation.RIGHT), BoundarySurface)
    assert isinstance(upper_right.get_surface(SurfaceLocation.TOP), BoundarySurface)
