"""Tests for the per-tick cycle solver."""

import math

import pytest

from jetcycle.core.atmosphere import resolve_ambient
from jetcycle.core.config import EngineDesign, EngineInputs, EngineType
from jetcycle.core.state import STATION_IDS
from jetcycle.cycle.solver import (
    TSFC_CEILING,
    cold_result,
    ram_conditions,
    solve_cycle,
    thrust_specific_fuel_consumption,
)


def _solve(rpm=100.0, design=None, altitude=0.0, **inputs):
    inp = EngineInputs(altitude=altitude, **inputs)
    return solve_cycle(inp, design or EngineDesign(), resolve_ambient(altitude), rpm)


class TestRamConditions:
    def test_static(self):
        p2, t2 = ram_conditions(resolve_ambient(0.0), 0.0)
        assert p2 == pytest.approx(101325.0)
        assert t2 == pytest.approx(288.15)

    def test_mach_08(self):
        p2, t2 = ram_conditions(resolve_ambient(0.0), 0.8)
        assert t2 == pytest.approx(288.15 * 1.128)
        assert p2 == pytest.approx(101325.0 * 1.128**3.5)


class TestTsfc:
    def test_regular(self):
        assert thrust_specific_fuel_consumption(0.25, 10000.0) == pytest.approx(0.09)

    def test_no_fuel(self):
        assert thrust_specific_fuel_consumption(0.0, 0.0) == 0.0

    def test_zero_thrust_with_fuel(self):
        assert thrust_specific_fuel_consumption(0.1, 0.0) == TSFC_CEILING

    def test_finite(self):
        assert math.isfinite(thrust_specific_fuel_consumption(1.0, 1.0))


class TestTurbojet:
    def test_sls_max_power(self):
        result = _solve(100.0)
        s = result.state
        assert 9.0e3 < s.thrust < 15.0e3
        assert 1.0e6 < s.p3 < 1.4e6
        assert s.fuel_flow == pytest.approx(s.mass_flow / 60.0)
        assert s.tsfc == pytest.approx(s.fuel_flow / s.thrust * 3600.0)
        assert s.running
        assert not s.turbine_starved

    def test_reference_values(self):
        s = _solve(100.0).state
        assert s.p3 == pytest.approx(101325.0 * 12.0)
        assert s.t4 == pytest.approx(639.16 + 713.10, abs=0.5)
        assert s.thrust == pytest.approx(11890.0, rel=1e-2)

    def test_all_stations_present(self):
        result = _solve(80.0)
        assert tuple(result.stations) == STATION_IDS

    def test_station_ordering(self):
        """Air-breathing turbojet only: a rocket feeds propellant at a fixed 300 K."""
        for rpm in (20.0, 60.0, 100.0):
            st = _solve(rpm, mach=0.6, altitude=20000.0).stations
            assert st[0].temperature <= st[2].temperature <= st[3].temperature <= st[4].temperature
            assert st[4].temperature >= st[5].temperature

    def test_egt_is_turbine_exit(self):
        result = _solve(90.0)
        assert result.state.egt == result.stations[5].temperature
        assert result.state.t4 == result.stations[4].temperature

    def test_ram_drag(self):
        s = _solve(100.0, mach=0.8).state
        assert s.ram_drag == pytest.approx(s.mass_flow * 0.8 * 340.3)
        assert s.thrust == pytest.approx(s.gross_thrust - s.ram_drag)

    def test_mass_flow_scales_with_density(self):
        sl = _solve(100.0).state
        high = _solve(100.0, altitude=30000.0).state
        ratio = high.air_density_inlet / sl.air_density_inlet
        assert high.mass_flow == pytest.approx(sl.mass_flow * ratio)

    def test_nozzle_area_slows_jet(self):
        ref = _solve(100.0).state
        wide = _solve(100.0, nozzle_area=1.5).state
        assert wide.exit_velocity == pytest.approx(ref.exit_velocity / 1.5)
        assert wide.thrust < ref.thrust

    def test_diffuser_loss_lowers_thrust(self):
        ref = _solve(100.0).state
        lossy = _solve(100.0, chamber_diffuser=0.8).state
        assert lossy.thrust < ref.thrust

    def test_over_temperature_flag(self):
        design = EngineDesign(turbine_inlet_temperature=1000.0)
        assert _solve(100.0, design=design).state.over_temperature
        assert not _solve(100.0).state.over_temperature

    def test_thrust_never_negative(self):
        s = _solve(30.0, mach=2.0).state
        assert s.thrust >= 0.0


class TestDegenerateInputs:
    def test_starved_turbine_without_fuel(self):
        result = _solve(100.0, afr=0.0)
        s = result.state
        assert s.turbine_starved
        assert result.stations[5].temperature < result.stations[0].temperature
        assert s.thrust == 0.0
        assert s.fuel_flow == 0.0
        assert s.tsfc == 0.0

    def test_fuel_without_heat(self):
        s = _solve(100.0, fuel_cv=0.0).state
        assert s.thrust == 0.0
        assert s.fuel_flow > 0.0
        assert s.tsfc == TSFC_CEILING

    @pytest.mark.parametrize(
        "inputs",
        [
            {"afr": -10.0},
            {"fuel_cv": -1e6},
            {"nozzle_area": 0.0},
            {"nozzle_area": -3.0},
            {"chamber_diffuser": 0.0},
            {"mach": -1.0},
            {"mach": 8.0},
        ],
    )
    def test_unphysical_inputs_do_not_raise(self, inputs):
        result = _solve(100.0, **inputs)
        assert result.state.thrust >= 0.0
        for station in result.stations.values():
            assert math.isfinite(station.pressure)
            assert math.isfinite(station.temperature)

    def test_extreme_mach_does_not_raise(self):
        result = _solve(100.0, mach=1e60)
        assert result.state.running
        assert result.state.thrust >= 0.0
        assert result.stations[2].pressure == math.inf

    def test_zero_mass_flow_design(self):
        s = _solve(100.0, design=EngineDesign(mass_flow=0.0)).state
        assert s.thrust == 0.0
        assert s.fuel_flow == 0.0


class TestTurbofan:
    def test_bypass_split(self):
        design = EngineDesign(bypass_ratio=5.0)
        result = _solve(100.0, design=design)
        s = result.state
        assert s.bypass_velocity > 0.0
        assert s.fuel_flow == pytest.approx(s.mass_flow / 6.0 / 60.0)

    def test_fan_work_cools_turbine_exit(self):
        jet = _solve(100.0).state
        fan = _solve(100.0, design=EngineDesign(bypass_ratio=5.0)).state
        assert fan.egt < jet.egt

    def test_component_summaries(self):
        result = _solve(100.0, design=EngineDesign(bypass_ratio=5.0))
        types = [c["type"] for c in result.components]
        assert types == ["compressor", "fan", "combustor", "turbine", "nozzle", "nozzle"]


class TestRamjet:
    def test_static_ramjet_no_thrust(self):
        s = _solve(100.0, design=EngineDesign(engine_type=EngineType.RAMJET)).state
        assert s.thrust == 0.0

    def test_supersonic_ramjet(self):
        result = _solve(100.0, design=EngineDesign(engine_type=EngineType.RAMJET), mach=2.5)
        st = result.stations
        assert result.state.thrust > 0.0
        assert st[3].temperature == st[2].temperature
        assert st[3].pressure == pytest.approx(0.95 * st[2].pressure)
        assert st[5].temperature == st[4].temperature  # no turbine load


class TestRocket:
    def test_chamber_pressure_follows_throttle(self):
        design = EngineDesign(engine_type=EngineType.ROCKET)
        assert _solve(100.0, design=design).state.p3 == pytest.approx(3.0e6)
        assert _solve(50.0, design=design).state.p3 == pytest.approx(1.5e6)

    def test_intake_bypassed(self):
        result = _solve(100.0, design=EngineDesign(engine_type=EngineType.ROCKET), mach=2.0)
        assert result.stations[2] == result.stations[0]
        assert result.state.ram_drag == 0.0

    def test_ignores_ambient_density(self):
        design = EngineDesign(engine_type=EngineType.ROCKET)
        assert _solve(100.0, design=design, altitude=40000.0).state.mass_flow == pytest.approx(15.0)

    def test_static_thrust(self):
        assert _solve(100.0, design=EngineDesign(engine_type=EngineType.ROCKET)).state.thrust > 0.0

    def test_feed_temperature_ignores_hot_ambient(self):
        ambient = resolve_ambient(0.0, manual=True, manual_temperature=310.0, manual_pressure=101325.0)
        design = EngineDesign(engine_type=EngineType.ROCKET)
        st = solve_cycle(EngineInputs(), design, ambient, 100.0).stations
        assert st[2].temperature == pytest.approx(310.0)
        assert st[3].temperature == pytest.approx(300.0)
        assert st[4].temperature > st[2].temperature


class TestColdResult:
    def test_cold_snapshot(self):
        amb = resolve_ambient(20000.0)
        result = cold_result(amb, rpm=3.0)
        s = result.state
        assert s.thrust == 0.0
        assert s.egt == amb.temperature
        assert s.p3 == amb.pressure
        assert s.t4 == amb.temperature
        assert s.rpm == 3.0
        assert not s.running
        for station in result.stations.values():
            assert station.temperature == amb.temperature
            assert station.pressure == amb.pressure
