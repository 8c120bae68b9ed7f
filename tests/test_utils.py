"""Tests for utility modules."""

import pytest

from jetcycle.core.config import EngineDesign, EngineInputs, EngineType
from jetcycle.utils.constants import CP_AIR, FT_TO_M, ISENTROPIC_EXP, P_SL, R_AIR, T_SL
from jetcycle.utils.units import (
    altitude_to_feet,
    force_from_si,
    pressure_from_si,
    pressure_to_si,
    temperature_from_si,
    temperature_to_si,
)
from jetcycle.utils.validation import (
    Severity,
    ValidationResult,
    validate_design,
    validate_inputs,
    validate_positive,
    validate_range,
)


class TestConstants:
    def test_sea_level(self):
        assert P_SL == pytest.approx(101325.0)
        assert T_SL == pytest.approx(288.15)

    def test_air(self):
        assert R_AIR == pytest.approx(287.05)
        assert CP_AIR == pytest.approx(1005.0)
        assert ISENTROPIC_EXP == pytest.approx(3.5)

    def test_feet(self):
        assert FT_TO_M == pytest.approx(0.3048)


class TestUnits:
    def test_pressure_kpa_to_pa(self):
        assert pressure_to_si(101.325, "kPa") == pytest.approx(101325.0)

    def test_pressure_psi_to_pa(self):
        assert pressure_to_si(14.696, "psi") == pytest.approx(101325, rel=1e-2)

    def test_pressure_round_trip(self):
        pa = pressure_to_si(12.0, "bar")
        assert pressure_from_si(pa, "bar") == pytest.approx(12.0, rel=1e-6)

    def test_temperature(self):
        assert temperature_to_si(15.0, "degC") == pytest.approx(288.15, rel=1e-6)
        assert temperature_from_si(273.15, "degC") == pytest.approx(0.0, abs=1e-9)

    def test_altitude(self):
        assert altitude_to_feet(11.0, "km") == pytest.approx(36089.24, rel=1e-5)
        assert altitude_to_feet(30000.0, "ft") == pytest.approx(30000.0)

    def test_force(self):
        assert force_from_si(11890.0, "kN") == pytest.approx(11.89)
        assert force_from_si(4.4482216, "lbf") == pytest.approx(1.0, rel=1e-6)


class TestValidation:
    def test_result_flags(self):
        r = ValidationResult()
        r.warning("x", "careful")
        assert r.is_valid
        assert r.has_warnings
        r.error("y", "broken")
        assert not r.is_valid
        assert len(r.errors) == 1

    def test_positive(self):
        r = ValidationResult()
        validate_positive("afr", 0.0, r)
        assert not r.is_valid

    def test_range(self):
        r = ValidationResult()
        validate_range("throttle", 120.0, 0.0, 100.0, r, Severity.WARNING)
        assert r.is_valid and r.has_warnings

    def test_default_inputs_clean(self):
        r = validate_inputs(EngineInputs())
        assert r.is_valid
        assert not r.has_warnings

    def test_default_design_clean(self):
        r = validate_design(EngineDesign())
        assert r.is_valid
        assert not r.has_warnings

    def test_bad_inputs(self):
        r = validate_inputs(EngineInputs(afr=0.0, mach=-1.0, throttle=150.0))
        params = {m.parameter for m in r.errors}
        assert {"afr", "mach"} <= params
        assert any(m.parameter == "throttle" for m in r.warnings)

    def test_rich_mixture_warning(self):
        r = validate_inputs(EngineInputs(afr=10.0))
        assert r.is_valid
        assert any(m.parameter == "afr" for m in r.warnings)

    def test_manual_atmosphere_checked(self):
        r = validate_inputs(EngineInputs(manual_atmosphere=True, ambient_temperature=0.0))
        assert any(m.parameter == "ambient_temperature" for m in r.errors)

    def test_bad_design(self):
        design = EngineDesign(pressure_ratio=0.5, bypass_ratio=-1.0)
        design.efficiency.turbine = 1.2
        params = {m.parameter for m in validate_design(design).errors}
        assert {"pressure_ratio", "bypass_ratio", "efficiency.turbine"} <= params

    def test_bypass_ignored_for_rocket(self):
        r = validate_design(EngineDesign(engine_type=EngineType.ROCKET, bypass_ratio=3.0))
        assert r.is_valid
        assert any(m.severity == Severity.INFO for m in r.messages)
