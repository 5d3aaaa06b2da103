"""
Geometric Primitives of the 2-D cell grid.
"""
from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vector:
    """
    A direction in the plane. Expected to be of unit length; it is never
    re-normalized here.
    """
    dx: float
    dy: float

    @classmethod
    def from_angle(cls, angle_rad: float) -> Vector:
        """Unit vector at the given angle from the +x axis."""
        return cls(math.cos(angle_rad), math.sin(angle_rad))


@dataclass(frozen=True)
class Rectangle:
    """
    Local coordinate box of a cell with the origin in its lower-left corner.

    Attributes:
        length: Extent along x.
        width: Extent along y.
    """
    length: float
    width: float

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError(
                f"Rectangle dimensions must be positive, got length={self.length}, width={self.width}."
            )

    @property
    def area(self) -> float:
        return self.length * self.width
