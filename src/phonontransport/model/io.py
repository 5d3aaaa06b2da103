"""
Input/Output Manager (HDF5)
Handles saving and loading cell measurement histories to .h5 files.
"""
import logging
from dataclasses import asdict
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, Iterable, Optional

import h5py
import numpy as np

from phonontransport.model.cell import Cell, SensorMeasurements

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("phonontransport")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


class IOManager:

    @staticmethod
    def save_measurements(
        cells: Iterable[Cell],
        filepath: str,
        settings: Optional[Any] = None,
    ) -> None:
        """
        Save the measurement history of every cell.

        Args:
            cells: Cells to save, e.g. a Grid.
            filepath: Target .h5 file, overwritten if it exists.
            settings: Optional dataclass with run settings stored as attributes.
        """
        logger.info(f"Saving measurements to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION

                if settings is not None:
                    grp_sim = f.create_group("settings")
                    for key, val in asdict(settings).items():
                        if val is not None:
                            grp_sim.attrs[key] = val

                grp_cells = f.create_group("cells")
                count = 0
                for cell in cells:
                    m = cell.get_measurements()
                    grp = grp_cells.create_group(str(cell.id))
                    grp.attrs["init_temp"] = m.init_temp
                    grp.attrs["length"] = cell.length
                    grp.attrs["width"] = cell.width
                    for name in ("temperatures", "x_fluxes", "y_fluxes"):
                        grp.create_dataset(
                            name,
                            data=np.asarray(getattr(m, name), dtype=np.float64),
                            compression="gzip"
                        )
                    count += 1
                logger.debug(f"Saved measurements of {count} cells.")

            logger.info(f"Measurements saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save measurements: {e}")
            raise e

    @staticmethod
    def load_measurements(filepath: str) -> Dict[int, SensorMeasurements]:
        """
        Load measurement histories keyed by cell id.
        """
        logger.info(f"Loading measurements from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        measurements: Dict[int, SensorMeasurements] = {}
        try:
            with h5py.File(filepath, "r") as f:
                if "cells" not in f:
                    logger.warning("No cell measurements found in file.")
                    return measurements

                for key, grp in f["cells"].items():
                    measurements[int(key)] = SensorMeasurements(
                        init_temp=float(grp.attrs["init_temp"]),
                        temperatures=tuple(grp["temperatures"][:].tolist()),
                        x_fluxes=tuple(grp["x_fluxes"][:].tolist()),
                        y_fluxes=tuple(grp["y_fluxes"][:].tolist()),
                    )

            logger.info(f"Loaded measurements of {len(measurements)} cells from: {filepath}")
            return measurements

        except Exception as e:
            logger.exception(f"Failed to load measurements: {e}")
            raise e
