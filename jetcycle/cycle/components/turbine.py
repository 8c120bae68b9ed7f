"""Turbine component model for JetCycle.

The turbine supplies exactly the shaft power the compressor and fan
absorb. Its temperature drop follows from the work balance:

    ṁ_core · cp · ΔT = (W_compressor + W_fan) / η_mech
    T5 = T4 − ΔT
    P5 = P4 · (T5 / T4)^(γ/(γ−1))
"""

from __future__ import annotations

from typing import Any

from jetcycle.cycle.components.base import CycleComponent, GasState, positive_pow
from jetcycle.utils.constants import CP_AIR, ISENTROPIC_EXP

MECHANICAL_EFFICIENCY = 0.99


class Turbine(CycleComponent):
    """Work-balance turbine.

    The exit temperature is not clamped: when the required work exceeds
    what the gas can give, T5 may fall below ambient. Callers decide how
    to report that (see :attr:`temperature_drop`).

    Args:
        name: Component name.
        mechanical_efficiency: Shaft transmission efficiency (0–1).
    """

    component_type = "turbine"

    def __init__(self, name: str = "turbine", mechanical_efficiency: float = MECHANICAL_EFFICIENCY):
        self.name = name
        self._mech_efficiency = mechanical_efficiency
        self.shaft_power = 0.0  # W delivered to the shaft
        self.temperature_drop = 0.0  # K

    def compute(self, inlet: GasState, required_power: float = 0.0, **kwargs: Any) -> GasState:
        """Compute turbine exit state (station 5).

        Args:
            inlet: Turbine inlet state (station 4).
            required_power: Shaft power absorbed by compressor and fan [W].

        Returns:
            Outlet gas state.
        """
        shaft_power = required_power / self._mech_efficiency if self._mech_efficiency > 0 else required_power
        if inlet.mass_flow > 0.0:
            dT = shaft_power / (inlet.mass_flow * CP_AIR)
        else:
            dT = 0.0

        t_out = inlet.temperature - dT
        if inlet.temperature > 0.0:
            p_out = inlet.pressure * positive_pow(t_out / inlet.temperature, ISENTROPIC_EXP)
        else:
            p_out = 0.0

        self.shaft_power = shaft_power
        self.temperature_drop = dT
        return GasState(pressure=p_out, temperature=t_out, mass_flow=inlet.mass_flow)

    def power(self) -> float:
        """Shaft power produced [W] (negative convention: produced)."""
        return -self.shaft_power

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        d["temperature_drop_K"] = self.temperature_drop
        d["shaft_power_kW"] = self.shaft_power / 1e3
        return d
