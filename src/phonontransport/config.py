"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths scattered throughout the code.
2. Defaults: Numerical defaults of the transport solver (time step, phonon
   speed, bounce-loop cap) are defined once and shared by the solver and the CLI.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_MATS_PATH (str): Absolute path to the default material library.
    MAX_SURFACE_HITS (int): Cap on surface interactions of one phonon per step.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to a resource shipped inside the package, so it
    resolves the same from a checkout and from an installed wheel.
    """
    # config.py is in src/phonontransport/, next to assets/
    package_root: Path = Path(__file__).resolve().parent
    return os.path.join(str(package_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_MATS_PATH: str = os.path.join(ASSETS_PATH, "materials_default.json")
DEFAULT_MATERIAL_NAME: str = "Silicon"

# A phonon stuck in a corner can bounce forever within one step
MAX_SURFACE_HITS: int = 1000

DEFAULT_TIME_STEP: float = 1e-11  # s
DEFAULT_PHONON_SPEED: float = 6000.0  # m/s
DEFAULT_EFF_ENERGY: float = 4e-15  # J per phonon unit
DEFAULT_T_EQ: float = 300.0  # K

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
