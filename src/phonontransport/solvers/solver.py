"""
Transport Solver
================
Reference time-stepping driver for the transport cells.

Why is this file needed?
------------------------
1. Time-Stepping: It manages the temporal loop and the per-step sequence
   (transport, merge of incoming phonons, measurements).
2. Bounce Loops: It caps the number of surface interactions of a single
   phonon within a step so that corner geometries cannot hang the run.
3. Initial State: It seeds each cell with the deviational phonon population
   matching its initial temperature.

Note: This module should be pure Python/NumPy and should NOT import matplotlib.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from phonontransport import config
from phonontransport.model.geometry import Vector
from phonontransport.model.phonon import Phonon

if TYPE_CHECKING:
    from phonontransport.model.cell import Cell
    from phonontransport.model.grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class SimulationSettings:
    time_step: float = config.DEFAULT_TIME_STEP  # s
    num_steps: int = 100
    phonon_speed: float = config.DEFAULT_PHONON_SPEED  # m/s
    eff_energy: float = config.DEFAULT_EFF_ENERGY  # J
    t_eq: float = config.DEFAULT_T_EQ  # K
    max_surface_hits: int = config.MAX_SURFACE_HITS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.time_step <= 0:
            raise ValueError(f"Time step must be positive, got {self.time_step}.")
        if self.num_steps < 0:
            raise ValueError(f"Number of steps must be non-negative, got {self.num_steps}.")
        if self.eff_energy <= 0:
            raise ValueError(f"Effective energy must be positive, got {self.eff_energy}.")
        if self.max_surface_hits < 1:
            raise ValueError(f"Surface hit cap must be at least 1, got {self.max_surface_hits}.")


class TransportSolver:
    """
    Drives the phonon population of a grid through time.
    """

    def __init__(
        self,
        grid: Grid,
        settings: SimulationSettings,
    ) -> None:
        """
        Initialize the solver with a grid.

        Args:
            grid: The cells to be simulated.
            settings: Time step, measurement constants and limits.
        """
        self.grid = grid
        self.settings = settings
        self.rng = np.random.default_rng(settings.seed)
        self.step_count: int = 0
        self.capped_phonons: int = 0

    def seed_phonons(self) -> int:
        """
        Fill every cell with phonons representing its deviation from the
        equilibrium temperature.

        Returns:
            Total number of phonons created.
        """
        s = self.settings
        total = 0
        for cell in self.grid:
            delta_t = cell.init_temp - s.t_eq
            count = int(round(abs(delta_t) * cell.heat_capacity * cell.area_covered / s.eff_energy))
            if count == 0:
                continue
            sign = 1 if delta_t > 0 else -1

            xs = self.rng.uniform(0.0, cell.length, count)
            ys = self.rng.uniform(0.0, cell.width, count)
            angles = self.rng.uniform(0.0, 2.0 * math.pi, count)
            for x, y, angle in zip(xs, ys, angles):
                cell.add_phonon(Phonon(x, y, Vector.from_angle(angle), s.phonon_speed, sign))
            total += count
            logger.debug(f"Seeded {count} phonons with sign {sign:+d} in cell {cell.id}.")

        logger.info(f"Seeded {total} phonons in {len(self.grid)} cells.")
        return total

    def transport_phonon(self, cell: Cell, phonon: Phonon) -> tuple[Cell, bool]:
        """
        Move a phonon for its remaining drift time, bouncing off or passing
        through surfaces until the time is used up.

        Args:
            cell: Cell the phonon currently resides in.
            phonon: Phonon with ``drift_time`` set for this step.

        Returns:
            The cell the phonon ended in and whether it was handed to another
            cell at any point during the step.
        """
        current = cell
        transmitted = False
        hits = 0
        while True:
            location = current.move_to_nearest_surface(phonon)
            if location is None:
                return current, transmitted

            next_cell = current.get_surface(location).handle_phonon(phonon)
            if next_cell is not current:
                transmitted = True
            current = next_cell

            hits += 1
            if hits >= self.settings.max_surface_hits:
                logger.warning(
                    f"Phonon reached {hits} surface interactions in step {self.step_count + 1} "
                    f"(cell {current.id}); dropping remaining drift time {phonon.drift_time:.3e} s."
                )
                phonon.drift_time = 0.0
                self.capped_phonons += 1
                return current, transmitted

    def step(self) -> None:
        """Advance all cells by one time step and take measurements."""
        dt = self.settings.time_step

        for cell in self.grid:
            leaving: list[Phonon] = []
            for phonon in cell.phonons:
                phonon.drift_time = dt
                _, transmitted = self.transport_phonon(cell, phonon)
                if transmitted:
                    leaving.append(phonon)
            cell.remove_phonons(leaving)

        for cell in self.grid:
            cell.merge_incoming_phonons()

        for cell in self.grid:
            cell.take_measurements(self.settings.eff_energy, self.settings.t_eq)

        self.step_count += 1

    def run(self, num_steps: Optional[int] = None) -> None:
        """
        Run the time loop.

        Args:
            num_steps: Number of steps; defaults to ``settings.num_steps``.
        """
        total_steps = self.settings.num_steps if num_steps is None else num_steps
        report_every = max(1, total_steps // 10)

        logger.info(f"Starting transport: {total_steps} steps of {self.settings.time_step:.3e} s.")
        for i in range(1, total_steps + 1):
            self.step()
            if i % report_every == 0 or i == total_steps:
                temps = [cell.temperature for cell in self.grid]
                progress = int(i / total_steps * 100)
                logger.info(
                    f"Progress: {progress} % - Step: {self.step_count} - "
                    f"T min/max: {min(temps):.3f}/{max(temps):.3f} K"
                )

        if self.capped_phonons:
            logger.warning(f"{self.capped_phonons} phonon steps hit the surface interaction cap.")
