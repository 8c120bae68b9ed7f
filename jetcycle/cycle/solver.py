"""Thermodynamic cycle solver for JetCycle.

Propagates the gas state station by station for one operating point:

    intake (0→2) → compression (2→3) → combustor (3→4)
    → turbine (4→5) → core nozzle (5→8), plus the fan bypass stream

and assembles thrust, fuel flow and TSFC. The compression step is a
strategy chosen by engine type (axial compressor, ram diffuser or
propellant feed); the rest of the chain is shared.

The solver never raises on finite inputs. Unphysical operating points
produce degenerate numbers and flags instead of errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from jetcycle.core.atmosphere import Ambient
from jetcycle.core.config import EngineDesign, EngineInputs
from jetcycle.core.state import EngineState, Station, station_table, uniform_stations
from jetcycle.cycle.components.base import GasState, positive_pow
from jetcycle.cycle.components.combustor import Combustor
from jetcycle.cycle.components.compressor import FAN_EFFICIENCY, Fan, compression_stage_for
from jetcycle.cycle.components.nozzle import Nozzle
from jetcycle.cycle.components.turbine import Turbine
from jetcycle.utils.constants import A_SL, RHO_SL, SECONDS_PER_HOUR

logger = logging.getLogger(__name__)

# Net thrust below which TSFC is reported as TSFC_CEILING.
MIN_THRUST_FOR_TSFC = 1.0  # N
TSFC_CEILING = 1000.0  # kg/(N·h)


@dataclass(frozen=True)
class CycleResult:
    """Complete solution of one tick: published state plus station table."""

    state: EngineState
    stations: Mapping[int, Station]
    components: tuple[dict[str, Any], ...] = field(default=())


def ram_conditions(ambient: Ambient, mach: float) -> tuple[float, float]:
    """Intake total pressure and temperature (γ = 1.4).

    P2 = P0·(1 + 0.2·M²)^3.5,  T2 = T0·(1 + 0.2·M²)
    """
    ratio = 1.0 + 0.2 * mach * mach
    return ambient.pressure * positive_pow(ratio, 3.5), ambient.temperature * ratio


def thrust_specific_fuel_consumption(fuel_flow: float, thrust: float) -> float:
    """TSFC [kg/(N·h)].

    Zero fuel gives 0. Fuel burnt for (almost) no thrust gives
    TSFC_CEILING instead of a division fault.
    """
    if fuel_flow <= 0.0:
        return 0.0
    if thrust < MIN_THRUST_FOR_TSFC:
        return TSFC_CEILING
    return min(fuel_flow / thrust * SECONDS_PER_HOUR, TSFC_CEILING)


def cold_result(ambient: Ambient, rpm: float = 0.0) -> CycleResult:
    """Snapshot of a stopped engine: everything at ambient, no thrust."""
    state = EngineState(
        rpm=rpm,
        thrust=0.0,
        egt=ambient.temperature,
        tsfc=0.0,
        fuel_flow=0.0,
        exit_velocity=0.0,
        p3=ambient.pressure,
        t4=ambient.temperature,
        air_density_inlet=ambient.density,
        running=False,
    )
    return CycleResult(state=state, stations=uniform_stations(ambient.pressure, ambient.temperature))


def solve_cycle(
    inputs: EngineInputs,
    design: EngineDesign,
    ambient: Ambient,
    rpm: float,
) -> CycleResult:
    """Solve the engine cycle at the current spool speed.

    Args:
        inputs: Operator inputs (Mach, fuel, nozzle/diffuser scales).
        design: Engine design.
        ambient: Resolved free-stream conditions.
        rpm: Spool speed [%]; callers only solve above the run threshold.

    Returns:
        CycleResult with every station and state field filled in.
    """
    n = max(rpm / 100.0, 0.0)
    stage = compression_stage_for(design.engine_type)

    # --- Intake and mass flow ---
    if stage.uses_intake:
        p2, t2 = ram_conditions(ambient, inputs.mach)
    else:
        p2, t2 = ambient.pressure, ambient.temperature

    if stage.air_breathing:
        mdot_total = design.mass_flow * (ambient.density / RHO_SL) * n
    else:
        mdot_total = design.mass_flow * n

    bpr = design.bypass_ratio if design.is_turbofan else 0.0
    mdot_core = mdot_total / (1.0 + bpr)
    mdot_bypass = mdot_total - mdot_core

    inlet = GasState(pressure=p2, temperature=t2, mass_flow=mdot_core)

    # --- Compression ---
    s3 = stage.compute(inlet, spool_fraction=n, design=design)

    fan = Fan()
    s13 = fan.compute(
        GasState(pressure=p2, temperature=t2, mass_flow=mdot_bypass),
        spool_fraction=n,
        design_pressure_ratio=design.fan_pressure_ratio,
    )

    # --- Combustion ---
    combustor = Combustor(efficiency=design.efficiency.combustor)
    s4 = combustor.compute(
        s3,
        fuel_cv=inputs.fuel_cv,
        afr=inputs.afr,
        spool_fraction=n,
        diffuser_loss_scale=inputs.chamber_diffuser,
    )

    # --- Turbine work balance ---
    turbine = Turbine()
    s5 = turbine.compute(s4, required_power=stage.power() + fan.power())
    starved = s5.temperature < ambient.temperature

    # --- Nozzles ---
    core_nozzle = Nozzle(name="core_nozzle", efficiency=design.efficiency.nozzle)
    s8 = core_nozzle.compute(
        s5,
        ambient_pressure=ambient.pressure,
        ambient_temperature=ambient.temperature,
        area_scale=inputs.nozzle_area,
    )

    bypass_nozzle = Nozzle(name="bypass_nozzle", efficiency=FAN_EFFICIENCY)
    if mdot_bypass > 0.0:
        bypass_nozzle.compute(
            s13,
            ambient_pressure=ambient.pressure,
            ambient_temperature=ambient.temperature,
        )

    # --- Thrust ---
    gross = core_nozzle.gross_thrust + bypass_nozzle.gross_thrust
    ram_drag = mdot_total * inputs.mach * A_SL if stage.air_breathing else 0.0
    net = max(gross - ram_drag, 0.0)

    state = EngineState(
        rpm=rpm,
        thrust=net,
        egt=s5.temperature,
        tsfc=thrust_specific_fuel_consumption(combustor.fuel_flow, net),
        fuel_flow=combustor.fuel_flow,
        exit_velocity=core_nozzle.exit_velocity,
        p3=s3.pressure,
        t4=s4.temperature,
        air_density_inlet=ambient.density,
        running=True,
        turbine_starved=starved,
        over_temperature=s4.temperature > design.turbine_inlet_temperature,
        gross_thrust=gross,
        ram_drag=ram_drag,
        bypass_velocity=bypass_nozzle.exit_velocity,
        mass_flow=mdot_total,
    )
    stations = station_table(
        {
            0: Station(ambient.pressure, ambient.temperature),
            2: Station(p2, t2),
            3: Station(s3.pressure, s3.temperature),
            4: Station(s4.pressure, s4.temperature),
            5: Station(s5.pressure, s5.temperature),
            8: Station(s8.pressure, s8.temperature),
        }
    )

    components = [stage.summary(), combustor.summary(), turbine.summary(), core_nozzle.summary()]
    if mdot_bypass > 0.0:
        components[1:1] = [fan.summary()]
        components.append(bypass_nozzle.summary())

    logger.debug("Solved cycle at %.1f%% N1: thrust %.0f N, T4 %.0f K", rpm, net, s4.temperature)
    return CycleResult(state=state, stations=stations, components=tuple(components))
