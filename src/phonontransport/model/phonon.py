from __future__ import annotations

from typing import Optional

from phonontransport.model.geometry import Vector


class Phonon:
    """
    A simulated energy carrier moving ballistically inside a cell.

    Only the state the transport kernel consumes lives here: position,
    direction, speed, the signed energy contribution and the time still to
    be drifted in the current step.
    """
    def __init__(
        self,
        x: float,
        y: float,
        direction: Vector,
        speed: float,
        sign: int = 1,
        drift_time: float = 0.0,
    ) -> None:
        """
        Initialize the phonon.

        Args:
            x: Position along the cell length.
            y: Position along the cell width.
            direction: Unit direction of motion.
            speed: Group velocity magnitude, non-negative.
            sign: Energy contribution, +1 or -1.
            drift_time: Remaining time budget of the current step.
        """
        if sign not in (-1, 1):
            raise ValueError(f"Phonon sign must be +1 or -1, got {sign}.")
        if speed < 0:
            raise ValueError(f"Phonon speed must be non-negative, got {speed}.")

        self._x = float(x)
        self._y = float(y)
        self._direction = direction
        self.speed = float(speed)
        self.sign = sign
        self.drift_time = float(drift_time)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(x={self._x}, y={self._y}, "
            f"direction=({self._direction.dx}, {self._direction.dy}), "
            f"speed={self.speed}, sign={self.sign}, drift_time={self.drift_time})"
        )

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._x = float(value)

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._y = float(value)

    @property
    def direction(self) -> Vector:
        return self._direction

    def drift(self, time: float) -> None:
        """Move along the current direction for the given time. Negative time moves backwards."""
        distance = self.speed * time
        self._x += self._direction.dx * distance
        self._y += self._direction.dy * distance

    def get_coords(self) -> tuple[float, float]:
        return self._x, self._y

    def set_coords(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """
        Update the position. An axis passed as None keeps its current value.
        """
        if x is not None:
            self._x = float(x)
        if y is not None:
            self._y = float(y)

    def get_direction(self) -> tuple[float, float]:
        return self._direction.dx, self._direction.dy

    def set_direction(self, dx: float, dy: float) -> None:
        self._direction = Vector(dx, dy)
