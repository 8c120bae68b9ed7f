"""Published engine outputs.

Both types are frozen: the engine model replaces them wholesale each
tick and readers can hold on to them without copying.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Mapping

from jetcycle.utils.constants import P_SL, T_SL

# 0 ambient, 2 compressor inlet, 3 compressor exit, 4 combustor exit,
# 5 turbine exit, 8 nozzle exit
STATION_IDS: tuple[int, ...] = (0, 2, 3, 4, 5, 8)

STATION_NAMES: dict[int, str] = {
    0: "Ambient",
    2: "Compressor Inlet",
    3: "Compressor Exit",
    4: "Combustor Exit",
    5: "Turbine Exit",
    8: "Nozzle Exit",
}


@dataclass(frozen=True)
class Station:
    """Gas pressure [Pa] and temperature [K] at a station."""

    pressure: float = P_SL
    temperature: float = T_SL


@dataclass(frozen=True)
class EngineState:
    """Derived engine outputs for one tick."""

    rpm: float = 0.0  # % N1
    thrust: float = 0.0  # N, net
    egt: float = T_SL  # K
    tsfc: float = 0.0  # kg/(N·h)
    fuel_flow: float = 0.0  # kg/s
    exit_velocity: float = 0.0  # m/s, core jet
    p3: float = P_SL  # Pa
    t4: float = T_SL  # K
    air_density_inlet: float = 0.0  # kg/m³

    running: bool = False
    turbine_starved: bool = False
    over_temperature: bool = False

    gross_thrust: float = 0.0  # N
    ram_drag: float = 0.0  # N
    bypass_velocity: float = 0.0  # m/s
    mass_flow: float = 0.0  # kg/s, total air (or propellant) flow

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def station_table(stations: Mapping[int, Station]) -> Mapping[int, Station]:
    """Read-only station table holding every canonical station.

    Raises:
        KeyError: If a canonical station is missing.
    """
    missing = [sid for sid in STATION_IDS if sid not in stations]
    if missing:
        raise KeyError(f"Station table missing stations {missing}")
    return MappingProxyType({sid: stations[sid] for sid in STATION_IDS})


def uniform_stations(pressure: float = P_SL, temperature: float = T_SL) -> Mapping[int, Station]:
    """Station table with every station at the same (cold) condition."""
    cold = Station(pressure=pressure, temperature=temperature)
    return station_table({sid: cold for sid in STATION_IDS})
