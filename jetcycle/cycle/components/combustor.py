"""Combustor model for JetCycle.

Heat release is set by the fuel calorific value and the overall air-fuel
ratio, scaled by a light-off intensity that reaches unity at idle spool
speed. Fuel flow always follows from the core air flow:

    ṁ_fuel = ṁ_core / AFR
    q      = intensity(N) · CV / AFR          [J per kg of air]
    T4     = T3 + q / cp
    P4     = P3 · η_comb · diffuser_loss_scale
"""

from __future__ import annotations

from typing import Any

from jetcycle.cycle.components.base import CycleComponent, GasState
from jetcycle.utils.constants import CP_AIR

# Spool fraction at which combustion is fully established.
FULL_LIGHT_OFF_SPOOL = 0.6


def combustion_intensity(spool_fraction: float) -> float:
    """Light-off ramp, 0 at rest and 1 from idle spool upward."""
    return min(max(spool_fraction / FULL_LIGHT_OFF_SPOOL, 0.0), 1.0)


class Combustor(CycleComponent):
    """Constant-cp burner with a pressure-loss factor.

    Args:
        name: Component name.
        efficiency: Combustor pressure efficiency (P4/P3 before diffuser scaling).
    """

    component_type = "combustor"

    def __init__(self, name: str = "combustor", efficiency: float = 0.98):
        self.name = name
        self._efficiency = efficiency
        self.fuel_flow = 0.0  # kg/s
        self.heat_release = 0.0  # J/kg of air

    def compute(
        self,
        inlet: GasState,
        fuel_cv: float = 43.0e6,
        afr: float = 60.0,
        spool_fraction: float = 1.0,
        diffuser_loss_scale: float = 1.0,
        **kwargs: Any,
    ) -> GasState:
        """Compute the combustor exit state (station 4).

        Args:
            inlet: Combustor inlet state (station 3).
            fuel_cv: Fuel calorific value [J/kg].
            afr: Overall air-fuel ratio. Non-positive means no fuel.
            spool_fraction: Spool speed fraction, drives the light-off ramp.
            diffuser_loss_scale: Operator scale on the pressure loss.

        Returns:
            Outlet gas state.
        """
        if afr > 0.0:
            self.fuel_flow = inlet.mass_flow / afr
            self.heat_release = combustion_intensity(spool_fraction) * fuel_cv / afr
        else:
            self.fuel_flow = 0.0
            self.heat_release = 0.0

        return GasState(
            pressure=inlet.pressure * self._efficiency * diffuser_loss_scale,
            temperature=inlet.temperature + self.heat_release / CP_AIR,
            mass_flow=inlet.mass_flow,
        )

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        d["fuel_flow_kg_s"] = self.fuel_flow
        d["heat_release_kJ_kg"] = self.heat_release / 1e3
        return d
