"""Design rule checking and input validation for JetCycle.

Advisory only: the engine model never refuses a tick because of these
findings. The CLI reports them before running a scenario.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from jetcycle.core.config import EngineDesign, EngineInputs, EngineType
from jetcycle.core.spool import RUN_THRESHOLD_RPM
from jetcycle.cycle.components.nozzle import MIN_AREA_SCALE
from jetcycle.utils.constants import FT_TO_M, STOICHIOMETRIC_AFR


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}")


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]")


def validate_inputs(inputs: EngineInputs) -> ValidationResult:
    """Check operator inputs for values the cycle cannot make sense of."""
    result = ValidationResult()

    validate_range("throttle", inputs.throttle, 0.0, 100.0, result, Severity.WARNING)

    if inputs.mach < 0:
        result.error("mach", f"Mach number must be non-negative, got {inputs.mach}")
    elif inputs.mach > 6.0:
        result.warning("mach", f"Mach {inputs.mach:.1f} is beyond the ideal-gas intake model")

    if inputs.altitude < -1500.0:
        result.warning("altitude", f"Altitude {inputs.altitude:.0f} ft is below the Dead Sea")
    if inputs.altitude * FT_TO_M > 44000.0:
        result.warning("altitude", f"Altitude {inputs.altitude:.0f} ft is far above the stratosphere model")

    if inputs.manual_atmosphere:
        validate_positive("ambient_temperature", inputs.ambient_temperature, result)
        validate_positive("ambient_pressure", inputs.ambient_pressure, result)

    validate_positive("afr", inputs.afr, result)
    if 0 < inputs.afr < STOICHIOMETRIC_AFR:
        result.warning("afr", f"AFR {inputs.afr:.1f} is richer than stoichiometric ({STOICHIOMETRIC_AFR})")
    validate_positive("fuel_cv", inputs.fuel_cv, result)

    if inputs.nozzle_area <= MIN_AREA_SCALE:
        result.info("nozzle_area", f"Nozzle area scale {inputs.nozzle_area} is ignored (≤ {MIN_AREA_SCALE})")
    validate_range("chamber_diffuser", inputs.chamber_diffuser, 0.5, 1.0, result, Severity.WARNING)

    return result


def validate_design(design: EngineDesign) -> ValidationResult:
    """Check an engine design for physical reasonableness."""
    result = ValidationResult()

    validate_positive("mass_flow", design.mass_flow, result)
    if design.pressure_ratio < 1.0:
        result.error("pressure_ratio", "Pressure ratio must be >= 1.0")
    elif design.pressure_ratio > 50.0:
        result.warning("pressure_ratio", f"Pressure ratio {design.pressure_ratio:.0f} is very high")

    for name in ("compressor", "turbine", "combustor", "nozzle"):
        value = getattr(design.efficiency, name)
        validate_range(f"efficiency.{name}", value, 1e-6, 1.0, result)

    if design.bypass_ratio < 0:
        result.error("bypass_ratio", "Bypass ratio must be >= 0")
    if design.bypass_ratio > 0 and design.engine_type != EngineType.TURBOJET:
        result.info("bypass_ratio", f"Bypass ratio is ignored for a {design.engine_type.value}")

    validate_range("idle_rpm", design.idle_rpm, RUN_THRESHOLD_RPM, 100.0, result, Severity.WARNING)
    validate_positive("spool_rate", design.spool_rate, result)
    validate_positive("max_timestep", design.max_timestep, result)

    return result
