"""
Material Models
===============
Temperature-dependent data consumed by the transport cells.

The cells never interpret the lookup tables themselves; they only cache them
at the current temperature and forward them to the scattering and emission
logic.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List
import json
import logging

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Ordered (x, y) pairs, e.g. a cumulative distribution over frequency
Table = tuple[tuple[float, float], ...]


def _as_table(pairs: Any) -> Table:
    return tuple((float(x), float(y)) for x, y in pairs)


class Material(ABC):
    """Abstract base class for materials used by the transport cells."""

    def __init__(self, name: str, description: str = ""):
        """
        Args:
            name: The name of the material.
            description: Free text shown in listings.
        """
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    @abstractmethod
    def base_data(self, temperature: float) -> tuple[Table, float]:
        """Base lookup table and heat capacity at the given temperature.

        Args:
            temperature (float): Temperature in Kelvin.

        Returns:
            tuple: The base table and the heat capacity in J/(m²·K).
        """
        pass

    @abstractmethod
    def scatter_table(self, temperature: float) -> Table:
        """Scattering probability table at the given temperature in Kelvin."""
        pass

    @abstractmethod
    def emit_data(self, temperature: float) -> tuple[Table, float]:
        """Emission table and energy of an emitted phonon unit at the given temperature in Kelvin."""
        pass


class TabulatedMaterial(Material):
    """
    Material defined by data at a set of temperature nodes.

    Scalar quantities are interpolated linearly and clamped outside the node
    range. Tables are taken from the node closest to the requested temperature.
    """
    def __init__(
        self,
        name: str,
        temperatures: npt.ArrayLike,
        heat_capacities: npt.ArrayLike,
        emit_energies: npt.ArrayLike,
        base_tables: List[Table],
        scatter_tables: List[Table],
        emit_tables: List[Table],
        description: str = "",
    ):
        super().__init__(name, description)

        temperatures = np.asarray(temperatures, dtype=np.float64)
        heat_capacities = np.asarray(heat_capacities, dtype=np.float64)
        emit_energies = np.asarray(emit_energies, dtype=np.float64)

        if not (
            len(temperatures) == len(heat_capacities) == len(emit_energies)
            == len(base_tables) == len(scatter_tables) == len(emit_tables)
        ):
            raise ValueError("All input arrays must have the same length.")

        if len(temperatures) < 2:
            raise ValueError("At least two data points are required for interpolation.")

        if not np.all(np.diff(temperatures) > 0):
            raise ValueError("Temperature array must be strictly increasing.")

        if np.any(heat_capacities <= 0):
            raise ValueError("Heat capacities must be positive.")

        if np.any(emit_energies <= 0):
            raise ValueError("Emitted energies must be positive.")

        self.temperatures = temperatures
        self.heat_capacities = heat_capacities
        self.emit_energies = emit_energies
        self.base_tables = [_as_table(t) for t in base_tables]
        self.scatter_tables = [_as_table(t) for t in scatter_tables]
        self.emit_tables = [_as_table(t) for t in emit_tables]

    def _nearest_node(self, temperature: float) -> int:
        return int(np.abs(self.temperatures - temperature).argmin())

    def heat_capacity(self, temperature: float) -> float:
        return float(np.interp(
            x=temperature,
            xp=self.temperatures,
            fp=self.heat_capacities,
            left=self.heat_capacities[0],
            right=self.heat_capacities[-1]
        ))

    def emit_energy(self, temperature: float) -> float:
        return float(np.interp(
            x=temperature,
            xp=self.temperatures,
            fp=self.emit_energies,
            left=self.emit_energies[0],
            right=self.emit_energies[-1]
        ))

    def base_data(self, temperature: float) -> tuple[Table, float]:
        return self.base_tables[self._nearest_node(temperature)], self.heat_capacity(temperature)

    def scatter_table(self, temperature: float) -> Table:
        return self.scatter_tables[self._nearest_node(temperature)]

    def emit_data(self, temperature: float) -> tuple[Table, float]:
        return self.emit_tables[self._nearest_node(temperature)], self.emit_energy(temperature)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "temperatures": self.temperatures.tolist(),
            "heat_capacities": self.heat_capacities.tolist(),
            "emit_energies": self.emit_energies.tolist(),
            "base_tables": [[list(pair) for pair in t] for t in self.base_tables],
            "scatter_tables": [[list(pair) for pair in t] for t in self.scatter_tables],
            "emit_tables": [[list(pair) for pair in t] for t in self.emit_tables],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> TabulatedMaterial:
        return TabulatedMaterial(
            name=data.get("name", "Unnamed Material"),
            description=data.get("description", ""),
            temperatures=data["temperatures"],
            heat_capacities=data["heat_capacities"],
            emit_energies=data["emit_energies"],
            base_tables=data["base_tables"],
            scatter_tables=data["scatter_tables"],
            emit_tables=data["emit_tables"],
        )


def load_materials(path: str) -> Dict[str, TabulatedMaterial]:
    """
    Load a material library from a JSON file mapping names to material data.
    """
    logger.info(f"Loading materials from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    materials: Dict[str, TabulatedMaterial] = {}
    for name, mat_dict in data.items():
        mat_dict = {**mat_dict, "name": name}
        materials[name] = TabulatedMaterial.from_dict(mat_dict)
    logger.debug(f"Loaded {len(materials)} materials.")
    return materials


def get_material(name: str, path: str) -> TabulatedMaterial:
    """Load a single material by name from a library file."""
    materials = load_materials(path)
    if name not in materials:
        raise ValueError(f"Unknown material '{name}'. Available: {', '.join(sorted(materials))}")
    return materials[name]
