"""Unit conversion utilities for JetCycle.

Provides a lightweight unit conversion system built on top of pint,
with convenience functions for the quantities an operator enters.
"""

from __future__ import annotations

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()
Q_ = _ureg.Quantity


def pressure_to_si(value: float, unit: str) -> float:
    """Convert pressure value to Pascals.

    Args:
        value: Numeric pressure value.
        unit: Source unit string (e.g. "kPa", "bar", "psi", "atm").

    Returns:
        Pressure in Pa.
    """
    return Q_(value, unit).to("Pa").magnitude


def pressure_from_si(value_pa: float, unit: str) -> float:
    """Convert pressure from Pascals to target unit."""
    return Q_(value_pa, "Pa").to(unit).magnitude


def temperature_to_si(value: float, unit: str) -> float:
    """Convert temperature to Kelvin.

    Args:
        value: Numeric temperature value.
        unit: Source unit string (e.g. "degC", "degF", "K").

    Returns:
        Temperature in K.
    """
    return Q_(value, unit).to("K").magnitude


def temperature_from_si(value_k: float, unit: str) -> float:
    """Convert temperature from Kelvin to target unit."""
    return Q_(value_k, "K").to(unit).magnitude


def altitude_to_feet(value: float, unit: str) -> float:
    """Convert an altitude to feet, the unit the engine inputs use."""
    return Q_(value, unit).to("ft").magnitude


def force_from_si(value_n: float, unit: str) -> float:
    """Convert force from Newtons to target unit (e.g. "kN", "lbf")."""
    return Q_(value_n, "N").to(unit).magnitude

