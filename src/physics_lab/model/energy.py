# MIT License (see LICENSE)
"""
Energy bookkeeping for simulations that can report their energy.
"""
from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class EnergyInfo:
    """
    Energy of a simulation at one instant.

    Attributes:
        potential: Potential energy.
        translational: Translational kinetic energy.
        rotational: Rotational kinetic energy.
        work_done: Work done by damping or other non-conservative forces.
        initial_energy: Total energy when the simulation was started;
            NaN when unknown.
    """
    potential: float = 0.0
    translational: float = 0.0
    rotational: float = 0.0
    work_done: float = math.nan
    initial_energy: float = math.nan

    def total_energy(self) -> float:
        return self.potential + self.translational + self.rotational


class EnergySystem(ABC):
    """Capability of a simulation that can report its energy."""

    @abstractmethod
    def get_energy_info(self) -> EnergyInfo:
        ...

    @abstractmethod
    def set_potential_energy(self, value: float) -> None:
        """Offset potential energy so that it currently equals ``value``."""
