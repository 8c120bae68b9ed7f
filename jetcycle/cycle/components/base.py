"""Base classes for gas-path components.

Defines the common interface for all components along the engine gas
path (compression stages, combustor, turbine, nozzles).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class GasState:
    """Total (stagnation) state of the working gas at a station.

    All properties in SI units.
    """

    pressure: float = 0.0  # Pa
    temperature: float = 0.0  # K
    mass_flow: float = 0.0  # kg/s


def positive_pow(base: float, exponent: float) -> float:
    """``base ** exponent`` with non-positive bases clamped to zero.

    Keeps fractional powers real when upstream values go unphysical, and
    returns ``inf`` where the float result would overflow.
    """
    if base <= 0.0:
        return 0.0
    try:
        return base**exponent
    except OverflowError:
        return math.inf


class CycleComponent(ABC):
    """Abstract base class for a gas-path component.

    Every component takes an inlet GasState and produces an outlet
    GasState, along with its shaft power.
    """

    name: str = ""
    component_type: str = ""

    @abstractmethod
    def compute(self, inlet: GasState, **kwargs: Any) -> GasState:
        """Run the component model.

        Args:
            inlet: Inlet gas state.
            **kwargs: Component-specific parameters.

        Returns:
            Outlet gas state.
        """
        ...

    def power(self) -> float:
        """Net shaft power [W] absorbed (positive) or produced (negative)."""
        return 0.0

    def summary(self) -> dict[str, Any]:
        """Return a summary dictionary of the component state."""
        return {
            "name": self.name,
            "type": self.component_type,
            "power_W": self.power(),
        }
