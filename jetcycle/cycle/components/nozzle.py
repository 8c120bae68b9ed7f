"""Propelling nozzle model for JetCycle.

Expands the gas isentropically from its total state to ambient pressure:

    T_exit = T_t · (P_amb / P_t)^((γ−1)/γ),  clamped to [T_amb, T_t]
    v      = sqrt(2 · cp · (T_t − T_exit) · η) / area_scale

An unpressurised nozzle (P_t ≤ P_amb) produces no jet.
"""

from __future__ import annotations

import math
from typing import Any

from jetcycle.cycle.components.base import CycleComponent, GasState, positive_pow
from jetcycle.utils.constants import CP_AIR, ISENTROPIC_EXP_INV

# Area scale factors at or below this are ignored.
MIN_AREA_SCALE = 0.1


class Nozzle(CycleComponent):
    """Convergent(-divergent) nozzle fully expanded to ambient.

    Args:
        name: Component name.
        efficiency: Nozzle efficiency applied to the enthalpy drop.
    """

    component_type = "nozzle"

    def __init__(self, name: str = "nozzle", efficiency: float = 0.95):
        self.name = name
        self._efficiency = efficiency
        self.exit_velocity = 0.0  # m/s
        self.mass_flow = 0.0  # kg/s

    def compute(
        self,
        inlet: GasState,
        ambient_pressure: float = 101325.0,
        ambient_temperature: float = 288.15,
        area_scale: float = 1.0,
        **kwargs: Any,
    ) -> GasState:
        """Compute the nozzle exit state (station 8, static).

        Args:
            inlet: Nozzle inlet total state.
            ambient_pressure: Back pressure [Pa].
            ambient_temperature: Free-stream static temperature [K].
            area_scale: Throat-area scale factor; velocity is divided by it.

        Returns:
            Exit state at ambient pressure.
        """
        t_in = inlet.temperature
        t_exit = t_in
        velocity = 0.0

        if inlet.pressure > ambient_pressure >= 0.0:
            t_ideal = t_in * positive_pow(ambient_pressure / inlet.pressure, ISENTROPIC_EXP_INV)
            t_exit = min(max(t_ideal, ambient_temperature), t_in)
            dH = max(t_in - t_exit, 0.0)
            velocity = math.sqrt(2.0 * CP_AIR * dH * max(self._efficiency, 0.0))

        if area_scale > MIN_AREA_SCALE:
            velocity /= area_scale

        self.exit_velocity = velocity
        self.mass_flow = inlet.mass_flow
        return GasState(pressure=ambient_pressure, temperature=t_exit, mass_flow=inlet.mass_flow)

    @property
    def gross_thrust(self) -> float:
        """Momentum thrust ṁ·v [N] of the last computed state."""
        return self.mass_flow * self.exit_velocity

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        d["exit_velocity_m_s"] = self.exit_velocity
        d["gross_thrust_N"] = self.gross_thrust
        return d
