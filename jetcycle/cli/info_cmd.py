"""CLI command for inspecting setup files and engine architectures."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from jetcycle.core.config import EngineType, load_setup_json
from jetcycle.cycle.components.compressor import compression_stage_for
from jetcycle.utils.validation import validate_design, validate_inputs


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Inspect setup files and engine architectures."""
    pass


@info.command("setup")
@click.argument("path", type=click.Path(exists=True))
@click.pass_context
def info_setup(ctx: click.Context, path: str) -> None:
    """Display summary of a setup file."""
    console: Console = ctx.obj.get("console", Console())
    setup = load_setup_json(path)

    tree = Tree(f"[bold]{setup.meta.name}[/bold]")
    meta = tree.add("[cyan]Metadata[/cyan]")
    meta.add(f"Author: {setup.meta.author or '—'}")
    meta.add(f"Version: {setup.meta.version}")
    meta.add(f"Modified: {setup.meta.modified or '—'}")

    design = setup.design
    ds = tree.add("[cyan]Design[/cyan]")
    ds.add(f"Engine Type: {design.engine_type.value}")
    ds.add(f"Mass Flow: {design.mass_flow:.2f} kg/s")
    ds.add(f"Pressure Ratio: {design.pressure_ratio:.1f}")
    ds.add(f"Bypass Ratio: {design.bypass_ratio:.1f}")
    ds.add(f"Turbine Inlet Limit: {design.turbine_inlet_temperature:.0f} K")
    eff = ds.add("Efficiencies")
    for name in ("compressor", "turbine", "combustor", "nozzle"):
        eff.add(f"{name}: {getattr(design.efficiency, name):.3f}")

    inputs = setup.inputs
    op = tree.add("[cyan]Operating Point[/cyan]")
    op.add(f"Throttle: {inputs.throttle:.0f} %")
    op.add(f"Ignition: {'on' if inputs.ignition else 'off'}")
    op.add(f"Mach: {inputs.mach:.2f}")
    if inputs.manual_atmosphere:
        op.add(f"Ambient: {inputs.ambient_temperature:.1f} K, {inputs.ambient_pressure / 1e3:.1f} kPa (manual)")
    else:
        op.add(f"Altitude: {inputs.altitude:.0f} ft")
    op.add(f"AFR: {inputs.afr:.1f}")

    check = validate_design(design)
    check.merge(validate_inputs(inputs))
    if check.messages:
        findings = tree.add("[yellow]Findings[/yellow]")
        for msg in check.messages:
            findings.add(f"{msg.severity.value}: {msg.message}")

    console.print(tree)


@info.command("engines")
@click.pass_context
def info_engines(ctx: click.Context) -> None:
    """List supported engine architectures."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Engine Architectures")
    table.add_column("Type", style="cyan")
    table.add_column("Compression Stage", style="green")
    table.add_column("Air-Breathing", style="yellow")

    for engine_type in EngineType:
        stage = compression_stage_for(engine_type)
        table.add_row(
            engine_type.value,
            stage.component_type,
            "yes" if stage.air_breathing else "no",
        )
    console.print(table)
