"""Ambient conditions for the engine inlet.

Resolves static temperature, pressure and density either from the
International Standard Atmosphere or from operator overrides.

ISA model:
    Troposphere (h < 11 km):
        T = 288.15 − 0.0065·h
        P = 101325·(1 − 2.25577e-5·h)^5.2559
    Stratosphere (isothermal, 216.65 K):
        P = P_11·exp(−g0/(R·T_11)·(h − 11000))
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from jetcycle.cycle.components.base import positive_pow
from jetcycle.utils.constants import (
    BARO_COEFF,
    BARO_EXP,
    FT_TO_M,
    G_0,
    H_TROPOPAUSE,
    LAPSE_RATE,
    P_SL,
    R_AIR,
    T_SL,
    T_TROPOPAUSE,
)


@dataclass(frozen=True)
class Ambient:
    """Static free-stream conditions."""

    temperature: float  # K
    pressure: float  # Pa
    density: float  # kg/m³


def ideal_gas_density(pressure: float, temperature: float) -> float:
    """rho = P / (R·T); returns 0 for non-positive temperature."""
    if temperature <= 0.0:
        return 0.0
    return pressure / (R_AIR * temperature)


def _troposphere_pressure(h: float) -> float:
    base = max(1.0 - BARO_COEFF * h, 0.0)
    return P_SL * positive_pow(base, BARO_EXP)


def standard_atmosphere(altitude_m: float) -> tuple[float, float]:
    """ISA static temperature [K] and pressure [Pa] at geometric altitude [m]."""
    if altitude_m <= H_TROPOPAUSE:
        temperature = max(T_SL - LAPSE_RATE * altitude_m, T_TROPOPAUSE)
        return temperature, _troposphere_pressure(altitude_m)

    p_11 = _troposphere_pressure(H_TROPOPAUSE)
    scale = G_0 / (R_AIR * T_TROPOPAUSE)
    return T_TROPOPAUSE, p_11 * math.exp(-scale * (altitude_m - H_TROPOPAUSE))


def resolve_ambient(
    altitude_ft: float,
    manual: bool = False,
    manual_temperature: float = T_SL,
    manual_pressure: float = P_SL,
) -> Ambient:
    """Compute ambient conditions.

    Args:
        altitude_ft: Pressure altitude [ft]. Ignored when *manual* is set.
        manual: Use the operator-entered temperature/pressure unchanged.
        manual_temperature: Override temperature [K].
        manual_pressure: Override pressure [Pa].

    Returns:
        Ambient with density from the ideal-gas relation.
    """
    if manual:
        temperature, pressure = manual_temperature, manual_pressure
    else:
        temperature, pressure = standard_atmosphere(altitude_ft * FT_TO_M)

    return Ambient(
        temperature=temperature,
        pressure=pressure,
        density=ideal_gas_density(pressure, temperature),
    )
