import pytest

from phonontransport.model.geometry import Vector
from phonontransport.model.phonon import Phonon


def test_drift_moves_along_direction(make_phonon):
    p = make_phonon(x=0.1, y=0.2, dx=0.6, dy=0.8, speed=2.0)
    p.drift(0.5)
    x, y = p.get_coords()
    assert x == pytest.approx(0.7)
    assert y == pytest.approx(1.0)


def test_negative_drift_backs_up(make_phonon):
    p = make_phonon(x=0.5, y=0.5, dx=0.6, dy=0.8, speed=3.0)
    p.drift(0.25)
    p.drift(-0.25)
    assert p.get_coords() == pytest.approx((0.5, 0.5))


def test_set_coords_leaves_omitted_axis_unchanged(make_phonon):
    p = make_phonon(x=0.3, y=0.4)
    p.set_coords(x=0.9)
    assert p.get_coords() == (0.9, 0.4)
    p.set_coords(y=0.0)
    assert p.get_coords() == (0.9, 0.0)
    p.set_coords()
    assert p.get_coords() == (0.9, 0.0)


def test_independent_axis_setters(make_phonon):
    p = make_phonon(x=0.3, y=0.4)
    p.x = 1
    assert (p.x, p.y) == (1.0, 0.4)
    p.y = 0.25
    assert (p.x, p.y) == (1.0, 0.25)


def test_set_direction(make_phonon):
    p = make_phonon(dx=1.0, dy=0.0)
    p.set_direction(0.0, -1.0)
    assert p.get_direction() == (0.0, -1.0)
    assert p.direction == Vector(0.0, -1.0)


@pytest.mark.parametrize("sign", [0, 2, -2])
def test_invalid_sign_is_rejected(sign):
    with pytest.raises(ValueError):
        Phonon(0.5, 0.5, Vector(1.0, 0.0), 1.0, sign)


def test_negative_speed_is_rejected():
    with pytest.raises(ValueError):
        Phonon(0.5, 0.5, Vector(1.0, 0.0), -1.0)
