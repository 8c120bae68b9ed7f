"""CLI command for running an engine scenario."""

from __future__ import annotations

from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from jetcycle.core.config import (
    EngineDesign,
    EngineInputs,
    EngineSetup,
    EngineType,
    ProjectMeta,
    load_setup_json,
    save_setup_json,
)
from jetcycle.core.engine import EngineModel
from jetcycle.core.recorder import SimulationRecorder, save_trace_hdf5
from jetcycle.core.state import STATION_NAMES
from jetcycle.utils.units import (
    altitude_to_feet,
    force_from_si,
    pressure_from_si,
    pressure_to_si,
    temperature_from_si,
    temperature_to_si,
)
from jetcycle.utils.validation import ValidationResult, validate_design, validate_inputs


_SCENARIO_OPTIONS = [
    click.option(
        "--setup",
        "setup_path",
        type=click.Path(exists=True),
        default=None,
        help="Start from a saved setup (JSON); other options override it.",
    ),
    click.option(
        "--type",
        "engine_type",
        type=click.Choice(["turbojet", "turbofan", "ramjet", "rocket"], case_sensitive=False),
        default=None,
        help="Engine architecture.  [default: turbojet]",
    ),
    click.option("--mass-flow", type=float, default=None, help="Design mass flow [kg/s]."),
    click.option("--pr", type=float, default=None, help="Design compressor pressure ratio."),
    click.option("--bpr", type=float, default=None, help="Bypass ratio (turbofan)."),
    click.option("--mach", type=float, default=None, help="Flight Mach number."),
    click.option("--altitude", type=float, default=None, help="Altitude, in --altitude-unit."),
    click.option("--altitude-unit", default="ft", show_default=True, help="Unit of --altitude (ft, m, km)."),
    click.option("--afr", type=float, default=None, help="Overall air-fuel ratio."),
    click.option("--ignition/--no-ignition", default=None, help="Ignition (idle schedule) on or off."),
    click.option(
        "--manual-atmosphere/--isa",
        default=None,
        help="Use the entered ambient pressure and temperature instead of ISA.",
    ),
    click.option(
        "--ambient-pressure", type=float, default=None, help="Ambient static pressure, in --pressure-unit."
    ),
    click.option(
        "--pressure-unit", default="kPa", show_default=True, help="Unit of --ambient-pressure (kPa, bar, psi)."
    ),
    click.option(
        "--ambient-temperature", type=float, default=None, help="Ambient static temperature, in --temperature-unit."
    ),
    click.option(
        "--temperature-unit", default="K", show_default=True, help="Unit of --ambient-temperature (K, degC)."
    ),
]


def scenario_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by commands that build an engine model."""
    for option in reversed(_SCENARIO_OPTIONS):
        func = option(func)
    return func


def build_setup(
    setup_path: str | None,
    engine_type: str | None,
    mass_flow: float | None,
    pr: float | None,
    bpr: float | None,
    mach: float | None,
    altitude: float | None,
    altitude_unit: str,
    afr: float | None,
    ignition: bool | None,
    manual_atmosphere: bool | None = None,
    ambient_pressure: float | None = None,
    pressure_unit: str = "kPa",
    ambient_temperature: float | None = None,
    temperature_unit: str = "K",
) -> EngineSetup:
    """Assemble an engine setup from a saved file and CLI overrides."""
    setup = load_setup_json(setup_path) if setup_path else EngineSetup(inputs=_default_inputs())

    design: EngineDesign = setup.design
    if engine_type is not None:
        design.engine_type = EngineType.parse(engine_type)
        if engine_type.lower() == "turbofan" and bpr is None and design.bypass_ratio == 0.0:
            design.bypass_ratio = 5.0
    if mass_flow is not None:
        design.mass_flow = mass_flow
    if pr is not None:
        design.pressure_ratio = pr
    if bpr is not None:
        design.bypass_ratio = bpr

    inputs = setup.inputs
    if mach is not None:
        inputs.mach = mach
    if altitude is not None:
        inputs.altitude = altitude_to_feet(altitude, altitude_unit)
    if afr is not None:
        inputs.afr = afr
    if ignition is not None:
        inputs.ignition = ignition

    # Entering either ambient value switches to the manual atmosphere unless --isa is given.
    if ambient_pressure is not None:
        inputs.ambient_pressure = pressure_to_si(ambient_pressure, pressure_unit)
    if ambient_temperature is not None:
        inputs.ambient_temperature = temperature_to_si(ambient_temperature, temperature_unit)
    if manual_atmosphere is not None:
        inputs.manual_atmosphere = manual_atmosphere
    elif ambient_pressure is not None or ambient_temperature is not None:
        inputs.manual_atmosphere = True
    return setup


def _default_inputs() -> EngineInputs:
    # CLI scenarios start with the engine lit; the library default is off.
    return EngineInputs(ignition=True)


def print_validation(console: Console, result: ValidationResult) -> None:
    for msg in result.messages:
        style = {"error": "red", "warning": "yellow"}.get(msg.severity.value, "dim")
        console.print(f"[{style}]{msg.severity.value.upper()}[/{style}] {msg.parameter}: {msg.message}")


def state_table(model: EngineModel) -> Table:
    state = model.state
    table = Table(title="Engine State")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Spool Speed", f"{state.rpm:.1f}", "% N1")
    table.add_row("Net Thrust", f"{force_from_si(state.thrust, 'kN'):.2f}", "kN")
    table.add_row("Gross Thrust", f"{force_from_si(state.gross_thrust, 'kN'):.2f}", "kN")
    table.add_row("Ram Drag", f"{force_from_si(state.ram_drag, 'kN'):.2f}", "kN")
    table.add_row("Mass Flow", f"{state.mass_flow:.2f}", "kg/s")
    table.add_row("Fuel Flow", f"{state.fuel_flow:.4f}", "kg/s")
    table.add_row("TSFC", f"{state.tsfc:.4f}", "kg/(N·h)")
    table.add_row("Core Jet Velocity", f"{state.exit_velocity:.0f}", "m/s")
    if state.bypass_velocity > 0:
        table.add_row("Bypass Jet Velocity", f"{state.bypass_velocity:.0f}", "m/s")
    table.add_row("EGT", f"{state.egt:.0f}", "K")
    table.add_row("T4", f"{state.t4:.0f}", "K")
    table.add_row("P3", f"{pressure_from_si(state.p3, 'kPa'):.1f}", "kPa")
    table.add_row("Inlet Air Density", f"{state.air_density_inlet:.4f}", "kg/m³")
    return table


def station_table(model: EngineModel) -> Table:
    table = Table(title="Stations")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Station", style="cyan")
    table.add_column("P [kPa]", style="green", justify="right")
    table.add_column("T [K]", style="green", justify="right")
    table.add_column("T [°C]", style="dim", justify="right")

    for sid, station in model.stations.items():
        table.add_row(
            str(sid),
            STATION_NAMES[sid],
            f"{pressure_from_si(station.pressure, 'kPa'):.1f}",
            f"{station.temperature:.1f}",
            f"{temperature_from_si(station.temperature, 'degC'):.1f}",
        )
    return table


@click.command("run")
@scenario_options
@click.option("--throttle", type=float, default=100.0, show_default=True, help="Throttle [%].")
@click.option("--duration", type=float, default=10.0, show_default=True, help="Simulated time [s].")
@click.option("--dt", type=float, default=0.02, show_default=True, help="Timestep [s].")
@click.option("--output", "-o", type=click.Path(), default=None, help="Save the setup (JSON).")
@click.option("--trace", type=click.Path(), default=None, help="Save the time history (HDF5).")
@click.pass_context
def run(
    ctx: click.Context,
    throttle: float,
    duration: float,
    dt: float,
    output: str | None,
    trace: str | None,
    **scenario: Any,
) -> None:
    """Run the engine at a fixed throttle and print the final state."""
    console: Console = ctx.obj.get("console", Console())

    setup = build_setup(**scenario)
    setup.inputs.throttle = throttle
    if output:
        setup.meta = ProjectMeta(name=f"{setup.design.engine_type.value} run")

    check = validate_design(setup.design)
    check.merge(validate_inputs(setup.inputs))
    print_validation(console, check)

    model = EngineModel.from_setup(setup)
    recorder = SimulationRecorder(model, dt=dt)
    history = recorder.run(duration)

    console.print(
        f"\n[bold]JetCycle: {setup.design.engine_type.value} at {throttle:.0f}% throttle, "
        f"{duration:.1f} s[/bold]\n"
    )
    console.print(state_table(model))
    console.print(station_table(model))

    if model.state.turbine_starved:
        console.print("[yellow]Turbine starved: exit temperature below ambient.[/yellow]")
    if model.state.over_temperature:
        console.print("[yellow]Combustor exit temperature above the turbine inlet limit.[/yellow]")

    if output:
        save_setup_json(setup, output)
        console.print(f"\n[dim]Saved setup to {output}[/dim]")
    if trace:
        if save_trace_hdf5(history, trace, dt=recorder.dt):
            console.print(f"[dim]Saved trace to {trace}[/dim]")
        else:
            console.print("[yellow]h5py not installed; trace not saved.[/yellow]")
