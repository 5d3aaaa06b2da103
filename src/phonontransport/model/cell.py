"""
Transport Cell
==============
A rectangular region of the simulation grid acting both as the container of
its phonon population and as a temperature/heat-flux sensor.

Why is this file needed?
------------------------
1. Geometry: It resolves where a free-flying phonon first left the cell and
   puts it back exactly on that face (``move_to_nearest_surface``).
2. Population: It keeps resident phonons apart from phonons that arrived
   during the current step until the step boundary (``merge_incoming_phonons``).
3. Measurements: It converts the population into temperature and flux time
   series and refreshes the temperature-dependent material data.

Classes:
    MaterialSnapshot: Material data evaluated at the current cell temperature.
    SensorMeasurements: Read-only copy of a cell's measurement history.
    Cell: The cell itself.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from phonontransport.model.geometry import Rectangle
from phonontransport.model.surface import BoundarySurface, Surface, SurfaceLocation

if TYPE_CHECKING:
    from phonontransport.model.phonon import Phonon
    from phonontransport.pre.material import Material, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterialSnapshot:
    """
    Temperature-dependent material data cached by a cell between steps.
    Replaced as a whole every time the cell temperature changes.
    """
    temperature: float
    heat_capacity: float
    base_table: Table
    scatter_table: Table

    @classmethod
    def at(cls, material: Material, temperature: float) -> MaterialSnapshot:
        """Query the material model at the given temperature."""
        base_table, heat_capacity = material.base_data(temperature)
        return cls(
            temperature=temperature,
            heat_capacity=heat_capacity,
            base_table=base_table,
            scatter_table=material.scatter_table(temperature),
        )


@dataclass(frozen=True)
class SensorMeasurements:
    """
    Measurement history of one cell, one entry per ``take_measurements`` call.
    """
    init_temp: float
    temperatures: tuple[float, ...]
    x_fluxes: tuple[float, ...]
    y_fluxes: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.temperatures)

    def plot(self, dt: float = 1.0, name: str = "", show: bool = True):
        """
        Plot temperature and heat flux histories.

        Args:
            dt: Time between two measurements, used to scale the time axis.
            name: Label used in the figure title.
            show: Call ``plt.show()`` after drawing.

        Returns:
            The matplotlib figure.
        """
        import matplotlib.pyplot as plt
        import numpy as np

        if not self.temperatures:
            logger.warning("No measurements available to plot.")
            return None

        times = np.arange(1, len(self.temperatures) + 1) * dt

        fig, (ax_t, ax_q) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
        ax_t.axhline(self.init_temp, color='gray', linestyle=':', lw=1, label='Initial')
        ax_t.plot(times, self.temperatures, 'r', lw=1.5, label='Temperature')
        ax_t.set_ylabel('Temperature (K)')
        ax_t.legend()
        ax_t.grid(True)

        ax_q.plot(times, self.x_fluxes, lw=1.5, label='x')
        ax_q.plot(times, self.y_fluxes, lw=1.5, label='y')
        ax_q.set_xlabel('Time (s)')
        ax_q.set_ylabel('Heat flux (W/m²)')
        ax_q.legend()
        ax_q.grid(True)

        fig.suptitle(f'Sensor History {name}'.strip())
        if show:
            plt.show()
        return fig


def _time_past_surface(dist: float, pos: float, vel: float) -> Optional[float]:
    """
    Time the phonon spent beyond the surface on one axis, or None if it did
    not leave [0, dist] on that axis while moving outwards.

    The longer the time, the sooner the corresponding surface was reached.
    """
    if pos <= 0.0 and vel < 0.0:
        return pos / vel
    if pos >= dist and vel > 0.0:
        return (pos - dist) / vel
    return None


class Cell:
    """
    Rectangular cell of the transport grid.

    Every change to the resident or incoming lists goes through one per-cell
    lock, so other workers may queue phonons into a cell while it is being
    processed. Surface crossings and measurements are not locked; a cell is
    moved and measured by one worker at a time.
    """
    def __init__(
        self,
        length: float,
        width: float,
        material: Material,
        init_temp: float,
        cell_id: int = 0,
    ) -> None:
        """
        Initialize the cell with reflecting surfaces on all four faces.

        Args:
            length: Extent along x.
            width: Extent along y.
            material: Material model queried for temperature-dependent data.
            init_temp: Initial temperature in Kelvin.
            cell_id: Identifier of the cell within its grid.
        """
        self.extent = Rectangle(length, width)
        self.id = cell_id
        self.material = material
        self.init_temp = init_temp
        self.area_covered: float = 0.0

        self._phonons: list[Phonon] = []
        self._incoming_phonons: list[Phonon] = []
        self._lock = threading.Lock()

        self._surfaces: dict[SurfaceLocation, Surface] = {
            location: BoundarySurface(location, self) for location in SurfaceLocation
        }

        self.snapshot = MaterialSnapshot.at(material, init_temp)

        self._temperatures: list[float] = []
        self._x_fluxes: list[float] = []
        self._y_fluxes: list[float] = []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self.id}, length={self.length}, width={self.width}, "
            f"temperature={self.temperature})"
        )

    def __str__(self) -> str:
        return "{0:<5} {1:<7} {2:<7}".format(
            round(self.temperature, 2), len(self._phonons), len(self._incoming_phonons)
        )

    @property
    def length(self) -> float:
        return self.extent.length

    @property
    def width(self) -> float:
        return self.extent.width

    @property
    def phonons(self) -> list[Phonon]:
        """Resident phonons, processed in the current step."""
        return self._phonons

    @property
    def incoming_phonons(self) -> list[Phonon]:
        """Phonons that arrived during the current step."""
        return self._incoming_phonons

    @property
    def temperature(self) -> float:
        return self.snapshot.temperature

    @property
    def heat_capacity(self) -> float:
        return self.snapshot.heat_capacity

    @property
    def base_table(self) -> Table:
        return self.snapshot.base_table

    @property
    def scatter_table(self) -> Table:
        return self.snapshot.scatter_table

    # --- Population ---

    def add_phonon(self, phonon: Phonon) -> None:
        with self._lock:
            self._phonons.append(phonon)

    def add_incoming_phonon(self, phonon: Phonon) -> None:
        with self._lock:
            self._incoming_phonons.append(phonon)

    def merge_incoming_phonons(self) -> None:
        """
        Move incoming phonons into the resident population.

        Must run once per step boundary, after every surface crossing of the
        step has been resolved.
        """
        with self._lock:
            self._phonons.extend(self._incoming_phonons)
            self._incoming_phonons.clear()

    def discard_incoming_phonon(self, phonon: Phonon) -> None:
        """Forget a phonon that arrived this step and already moved on."""
        with self._lock:
            self._incoming_phonons = [p for p in self._incoming_phonons if p is not phonon]

    def remove_phonons(self, phonons: Iterable[Phonon]) -> None:
        """Drop phonons that left this cell during the current step."""
        leaving = {id(p) for p in phonons}
        if leaving:
            with self._lock:
                self._phonons = [p for p in self._phonons if id(p) not in leaving]

    # --- Surfaces ---

    def get_surface(self, location: SurfaceLocation) -> Surface:
        return self._surfaces[location]

    def set_surface(self, location: SurfaceLocation, surface: Surface) -> None:
        """Replace a face; used when the grid wires neighbouring cells together."""
        if surface.cell is not self:
            raise ValueError(f"Surface {surface!r} does not belong to cell {self.id}.")
        self._surfaces[location] = surface

    def move_to_nearest_surface(self, phonon: Phonon) -> Optional[SurfaceLocation]:
        """
        Drift the phonon by its remaining drift time and resolve the first
        surface it crossed.

        On a crossing the phonon is put back exactly on the crossed face and
        its ``drift_time`` holds the time still owed for this step. Without a
        crossing the drift time is fully consumed.

        Args:
            phonon: Phonon inside this cell with ``drift_time`` set.

        Returns:
            The crossed surface location, or None if the phonon stayed inside.
        """
        phonon.drift(phonon.drift_time)
        px, py = phonon.get_coords()
        dx, dy = phonon.get_direction()
        vx = dx * phonon.speed
        vy = dy * phonon.speed

        time_x = _time_past_surface(self.length, px, vx)
        time_y = _time_past_surface(self.width, py, vy)

        if time_x is None and time_y is None:
            phonon.drift_time = 0.0
            return None

        # Ties (corner hits) resolve to the x axis
        if time_y is None or (time_x is not None and time_x >= time_y):
            backtrack_time = time_x
            phonon.drift_time = backtrack_time
            phonon.drift(-backtrack_time)
            if vx < 0:
                phonon.set_coords(x=0.0)
                return SurfaceLocation.LEFT
            phonon.set_coords(x=self.length)
            return SurfaceLocation.RIGHT

        backtrack_time = time_y
        phonon.drift_time = backtrack_time
        phonon.drift(-backtrack_time)
        if vy < 0:
            phonon.set_coords(y=0.0)
            return SurfaceLocation.BOTTOM
        phonon.set_coords(y=self.width)
        return SurfaceLocation.TOP

    # --- Measurements ---

    def add_to_area(self, area: float) -> None:
        self.area_covered += area

    def get_emit_data(self, temperature: float) -> tuple[Table, float]:
        return self.material.emit_data(temperature)

    def take_measurements(self, eff_energy: float, t_eq: float) -> None:
        """
        Record temperature and heat flux of the resident population.

        The caller guarantees ``area_covered > 0``.

        Args:
            eff_energy: Energy carried by one phonon unit.
            t_eq: Equilibrium temperature the deviational energy is measured from.
        """
        energy_units = 0
        x_flux = 0.0
        y_flux = 0.0
        for p in self._phonons:
            sign = p.sign
            dx, dy = p.get_direction()
            energy_units += sign
            x_flux += dx * p.speed * sign
            y_flux += dy * p.speed * sign

        flux_factor = eff_energy / self.area_covered

        self._temperatures.append(energy_units * eff_energy / (self.area_covered * self.heat_capacity) + t_eq)
        self._x_fluxes.append(flux_factor * x_flux)
        self._y_fluxes.append(flux_factor * y_flux)
        self._update_params()

    def get_measurements(self) -> SensorMeasurements:
        return SensorMeasurements(
            init_temp=self.init_temp,
            temperatures=tuple(self._temperatures),
            x_fluxes=tuple(self._x_fluxes),
            y_fluxes=tuple(self._y_fluxes),
        )

    def _update_params(self) -> None:
        self.snapshot = MaterialSnapshot.at(self.material, self._temperatures[-1])
