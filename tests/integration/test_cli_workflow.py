"""Integration tests for end-to-end CLI workflows."""

import json
import os

import pytest
from click.testing import CliRunner

from jetcycle.cli.main import cli
from jetcycle.core.config import EngineType, load_arrays_hdf5, load_setup_json


@pytest.fixture
def runner():
    return CliRunner()


class TestRunCommand:
    def test_default_run(self, runner):
        result = runner.invoke(cli, ["run", "--duration", "6"])
        assert result.exit_code == 0, result.output
        assert "Engine State" in result.output
        assert "Stations" in result.output

    def test_run_saves_setup(self, runner, tmp_path):
        out = os.path.join(tmp_path, "setup.json")
        result = runner.invoke(
            cli,
            ["run", "--throttle", "85", "--altitude", "30000", "--mach", "0.8", "--duration", "2", "-o", out],
        )
        assert result.exit_code == 0, result.output
        assert os.path.exists(out)

        with open(out) as f:
            data = json.load(f)
        assert data["inputs"]["throttle"] == 85.0
        assert data["inputs"]["altitude"] == pytest.approx(30000.0)

    def test_altitude_unit(self, runner, tmp_path):
        out = os.path.join(tmp_path, "setup.json")
        result = runner.invoke(
            cli, ["run", "--altitude", "9", "--altitude-unit", "km", "--duration", "1", "-o", out]
        )
        assert result.exit_code == 0, result.output
        assert load_setup_json(out).inputs.altitude == pytest.approx(29527.6, rel=1e-4)

    def test_manual_atmosphere_units(self, runner, tmp_path):
        out = os.path.join(tmp_path, "hot_day.json")
        result = runner.invoke(
            cli,
            [
                "run",
                "--ambient-pressure",
                "0.9",
                "--pressure-unit",
                "bar",
                "--ambient-temperature",
                "35",
                "--temperature-unit",
                "degC",
                "--duration",
                "1",
                "-o",
                out,
            ],
        )
        assert result.exit_code == 0, result.output
        inputs = load_setup_json(out).inputs
        assert inputs.manual_atmosphere is True
        assert inputs.ambient_pressure == pytest.approx(90000.0)
        assert inputs.ambient_temperature == pytest.approx(308.15)

    def test_isa_flag_keeps_standard_atmosphere(self, runner, tmp_path):
        out = os.path.join(tmp_path, "isa.json")
        result = runner.invoke(
            cli, ["run", "--ambient-pressure", "80", "--isa", "--duration", "1", "-o", out]
        )
        assert result.exit_code == 0, result.output
        inputs = load_setup_json(out).inputs
        assert inputs.manual_atmosphere is False
        assert inputs.ambient_pressure == pytest.approx(80000.0)

    def test_large_timestep_runs_full_duration(self, runner, tmp_path):
        pytest.importorskip("h5py")
        trace = os.path.join(tmp_path, "trace.h5")
        result = runner.invoke(cli, ["run", "--dt", "0.5", "--duration", "2", "--trace", trace])
        assert result.exit_code == 0, result.output
        arrays = load_arrays_hdf5(trace)
        assert arrays["time"][-1] == pytest.approx(2.0)
        assert len(arrays["time"]) == 20

    def test_turbofan_run(self, runner, tmp_path):
        out = os.path.join(tmp_path, "fan.json")
        result = runner.invoke(cli, ["run", "--type", "turbofan", "--duration", "6", "-o", out])
        assert result.exit_code == 0, result.output
        setup = load_setup_json(out)
        assert setup.design.engine_type == EngineType.TURBOJET
        assert setup.design.bypass_ratio == pytest.approx(5.0)

    def test_rocket_run(self, runner):
        result = runner.invoke(cli, ["run", "--type", "rocket", "--duration", "6"])
        assert result.exit_code == 0, result.output

    def test_validation_messages(self, runner):
        result = runner.invoke(cli, ["run", "--afr", "10", "--duration", "1"])
        assert result.exit_code == 0, result.output
        assert "WARNING" in result.output

    def test_trace_output(self, runner, tmp_path):
        pytest.importorskip("h5py")
        trace = os.path.join(tmp_path, "trace.h5")
        result = runner.invoke(cli, ["run", "--duration", "1", "--trace", trace])
        assert result.exit_code == 0, result.output
        assert os.path.exists(trace)


class TestSetupWorkflow:
    def test_run_then_info(self, runner, tmp_path):
        out = os.path.join(tmp_path, "setup.json")
        result = runner.invoke(cli, ["run", "--type", "ramjet", "--mach", "2.5", "--duration", "1", "-o", out])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["info", "setup", out])
        assert result.exit_code == 0, result.output
        assert "ramjet" in result.output

    def test_rerun_from_setup(self, runner, tmp_path):
        out = os.path.join(tmp_path, "setup.json")
        result = runner.invoke(cli, ["run", "--pr", "20", "--duration", "1", "-o", out])
        assert result.exit_code == 0, result.output

        again = os.path.join(tmp_path, "again.json")
        result = runner.invoke(cli, ["run", "--setup", out, "--duration", "1", "-o", again])
        assert result.exit_code == 0, result.output
        assert load_setup_json(again).design.pressure_ratio == pytest.approx(20.0)


class TestOtherCommands:
    def test_sweep(self, runner):
        result = runner.invoke(cli, ["sweep", "--points", "3"])
        assert result.exit_code == 0, result.output
        assert "Throttle Sweep" in result.output

    def test_atmosphere(self, runner):
        result = runner.invoke(cli, ["atmosphere", "0", "11", "--unit", "km"])
        assert result.exit_code == 0, result.output
        assert "288.15" in result.output
        assert "216.65" in result.output

    def test_atmosphere_default_table(self, runner):
        result = runner.invoke(cli, ["atmosphere"])
        assert result.exit_code == 0, result.output

    def test_info_engines(self, runner):
        result = runner.invoke(cli, ["info", "engines"])
        assert result.exit_code == 0, result.output
        for tag in ("turbojet", "ramjet", "rocket"):
            assert tag in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
