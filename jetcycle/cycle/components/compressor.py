"""Compression stages for JetCycle.

One stage per engine architecture, each raising the gas from the intake
face (station 2) to the combustor inlet (station 3):

- AxialCompressor: spool-driven compressor (turbojet / turbofan core)
- RamDiffuser: ramjet, compression by ram effect only
- PropellantFeed: rocket, chamber pressure set by the feed system
- Fan: bypass-stream compression of a turbofan
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from jetcycle.core.config import EngineDesign, EngineType
from jetcycle.cycle.components.base import CycleComponent, GasState, positive_pow
from jetcycle.utils.constants import CP_AIR, ISENTROPIC_EXP_INV, MPA_TO_PA

RAM_RECOVERY = 0.95
ROCKET_CHAMBER_PRESSURE = 3.0 * MPA_TO_PA  # Pa at full throttle
PROPELLANT_FEED_TEMPERATURE = 300.0  # K
FAN_EFFICIENCY = 0.9


def spool_pressure_ratio(design_ratio: float, spool_fraction: float) -> float:
    """Pressure ratio on the working line: PR = 1 + (PR_d − 1)·N²."""
    return 1.0 + (design_ratio - 1.0) * spool_fraction**2


def compression_temperature(t_in: float, pressure_ratio: float, efficiency: float) -> float:
    """Real compression exit temperature.

    T_out = T_in · (1 + (PR^0.286 − 1) / η)
    """
    rise = positive_pow(pressure_ratio, ISENTROPIC_EXP_INV) - 1.0
    if efficiency > 0.0:
        rise /= efficiency
    return t_in * (1.0 + rise)


class CompressionStage(CycleComponent):
    """Strategy interface for station 2 → 3 compression."""

    component_type = "compression"

    # Whether the stage draws air through the intake (stations 0 → 2).
    uses_intake: bool = True
    # Whether mass flow follows inlet density and pays ram drag.
    air_breathing: bool = True

    def __init__(self, name: str = "") -> None:
        self.name = name or self.component_type
        self.pressure_ratio = 1.0
        self._specific_work = 0.0
        self._mass_flow = 0.0

    @abstractmethod
    def compress(self, inlet: GasState, spool_fraction: float, design: EngineDesign) -> GasState:
        """Compute the combustor-inlet state.

        Args:
            inlet: Compressor-face total state (station 2).
            spool_fraction: Spool speed as a fraction (0–1).
            design: Engine design.

        Returns:
            Station 3 state; mass flow carried through from the inlet.
        """
        ...

    def compute(self, inlet: GasState, **kwargs: Any) -> GasState:
        outlet = self.compress(inlet, kwargs["spool_fraction"], kwargs["design"])
        self._mass_flow = inlet.mass_flow
        return outlet

    @property
    def specific_work(self) -> float:
        """Shaft work absorbed per unit mass [J/kg] in the last compute."""
        return self._specific_work

    def power(self) -> float:
        return self._specific_work * self._mass_flow

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        d["pressure_ratio"] = self.pressure_ratio
        d["specific_work_kJ_kg"] = self._specific_work / 1e3
        return d


class AxialCompressor(CompressionStage):
    """Spool-driven compressor with a quadratic pressure-ratio schedule."""

    component_type = "compressor"

    def compress(self, inlet: GasState, spool_fraction: float, design: EngineDesign) -> GasState:
        pr = spool_pressure_ratio(design.pressure_ratio, spool_fraction)
        t3 = compression_temperature(inlet.temperature, pr, design.efficiency.compressor)
        self.pressure_ratio = pr
        self._specific_work = CP_AIR * (t3 - inlet.temperature)
        return GasState(pressure=inlet.pressure * pr, temperature=t3, mass_flow=inlet.mass_flow)


class RamDiffuser(CompressionStage):
    """Ramjet: no rotating compressor, only diffuser pressure recovery."""

    component_type = "ram_diffuser"

    def compress(self, inlet: GasState, spool_fraction: float, design: EngineDesign) -> GasState:
        self.pressure_ratio = RAM_RECOVERY
        self._specific_work = 0.0
        return GasState(
            pressure=inlet.pressure * RAM_RECOVERY,
            temperature=inlet.temperature,
            mass_flow=inlet.mass_flow,
        )


class PropellantFeed(CompressionStage):
    """Rocket: chamber pressure follows the throttle, no air is ingested."""

    component_type = "propellant_feed"
    uses_intake = False
    air_breathing = False

    def compress(self, inlet: GasState, spool_fraction: float, design: EngineDesign) -> GasState:
        p3 = ROCKET_CHAMBER_PRESSURE * spool_fraction
        self.pressure_ratio = p3 / inlet.pressure if inlet.pressure > 0 else 0.0
        self._specific_work = 0.0
        return GasState(
            pressure=p3,
            temperature=PROPELLANT_FEED_TEMPERATURE,
            mass_flow=inlet.mass_flow,
        )


class Fan(CycleComponent):
    """Bypass fan of a turbofan; same working-line form as the core."""

    component_type = "fan"

    def __init__(self, name: str = "fan", efficiency: float = FAN_EFFICIENCY):
        self.name = name
        self._efficiency = efficiency
        self._power = 0.0

    def compute(
        self,
        inlet: GasState,
        spool_fraction: float = 1.0,
        design_pressure_ratio: float = 1.5,
        **kwargs: Any,
    ) -> GasState:
        pr = spool_pressure_ratio(design_pressure_ratio, spool_fraction)
        t13 = compression_temperature(inlet.temperature, pr, self._efficiency)
        self._power = inlet.mass_flow * CP_AIR * (t13 - inlet.temperature)
        return GasState(pressure=inlet.pressure * pr, temperature=t13, mass_flow=inlet.mass_flow)

    def power(self) -> float:
        return self._power


_STAGES: dict[EngineType, type[CompressionStage]] = {
    EngineType.TURBOJET: AxialCompressor,
    EngineType.RAMJET: RamDiffuser,
    EngineType.ROCKET: PropellantFeed,
}


def compression_stage_for(engine_type: EngineType) -> CompressionStage:
    """Return a fresh compression stage for an engine architecture.

    Raises:
        KeyError: If no stage is registered for the engine type.
    """
    try:
        return _STAGES[engine_type]()
    except KeyError:
        raise KeyError(f"No compression stage registered for {engine_type}") from None
