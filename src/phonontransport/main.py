"""
Application Initialization
==========================
Builds the grid, the material and the solver from command-line arguments
and runs a transport simulation.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Loads the material library.
3. Instantiates the Grid (Model) and the TransportSolver (Controller).
4. Saves and optionally plots the measurement histories.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from phonontransport import config
from phonontransport.logging_config import parse_level, setup_logging
from phonontransport.model.grid import Grid
from phonontransport.model.io import IOManager
from phonontransport.pre.material import get_material
from phonontransport.solvers.solver import SimulationSettings, TransportSolver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phonontransport",
        description="Ballistic phonon transport between a hot and a cold region of a cell grid.",
    )
    parser.add_argument("--nx", type=int, default=4, help="cells along x")
    parser.add_argument("--ny", type=int, default=1, help="cells along y")
    parser.add_argument("--cell-length", type=float, default=1e-6, help="cell extent along x (m)")
    parser.add_argument("--cell-width", type=float, default=1e-6, help="cell extent along y (m)")
    parser.add_argument("--t-hot", type=float, default=310.0, help="initial temperature of the left half (K)")
    parser.add_argument("--t-cold", type=float, default=config.DEFAULT_T_EQ,
                        help="initial temperature of the right half (K)")
    parser.add_argument("--t-eq", type=float, default=config.DEFAULT_T_EQ, help="equilibrium temperature (K)")
    parser.add_argument("--steps", type=int, default=100, help="number of time steps")
    parser.add_argument("--dt", type=float, default=config.DEFAULT_TIME_STEP, help="time step (s)")
    parser.add_argument("--speed", type=float, default=config.DEFAULT_PHONON_SPEED, help="phonon speed (m/s)")
    parser.add_argument("--eff-energy", type=float, default=config.DEFAULT_EFF_ENERGY,
                        help="energy of one phonon unit (J)")
    parser.add_argument("--material", default=config.DEFAULT_MATERIAL_NAME, help="material name")
    parser.add_argument("--materials-file", default=config.DEFAULT_MATS_PATH, help="material library JSON")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--output", default=None, help="save measurements to this .h5 file")
    parser.add_argument("--plot", type=int, default=None, metavar="CELL_ID",
                        help="plot the history of the given cell")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.plot is not None and not 0 <= args.plot < args.nx * args.ny:
        parser.error(f"--plot: cell {args.plot} is outside the {args.nx}x{args.ny} grid")

    setup_logging(level=parse_level(args.log_level), log_file=args.log_file)

    material = get_material(args.material, args.materials_file)

    # Hot left half, cold right half
    init_temps = [
        args.t_hot if ix < (args.nx + 1) // 2 else args.t_cold
        for iy in range(args.ny)
        for ix in range(args.nx)
    ]
    grid = Grid(args.nx, args.ny, args.cell_length, args.cell_width, material, init_temps)

    settings = SimulationSettings(
        time_step=args.dt,
        num_steps=args.steps,
        phonon_speed=args.speed,
        eff_energy=args.eff_energy,
        t_eq=args.t_eq,
        seed=args.seed,
    )
    solver = TransportSolver(grid, settings)
    solver.seed_phonons()
    solver.run()

    for cell in grid:
        logger.info(f"Cell {cell.id:>3}: {cell}")

    if args.output:
        IOManager.save_measurements(grid, args.output, settings)

    if args.plot is not None:
        grid.cells[args.plot].get_measurements().plot(dt=settings.time_step, name=f"(cell {args.plot})")


if __name__ == "__main__":
    main()
