"""CLI command for standard-atmosphere tables."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from jetcycle.core.atmosphere import resolve_ambient
from jetcycle.utils.units import altitude_to_feet, pressure_from_si, temperature_from_si


@click.command("atmosphere")
@click.argument("altitudes", type=float, nargs=-1)
@click.option("--unit", default="ft", show_default=True, help="Unit of the altitudes (ft, m, km).")
@click.pass_context
def atmosphere(ctx: click.Context, altitudes: tuple[float, ...], unit: str) -> None:
    """Print ISA ambient conditions at the given ALTITUDES."""
    console: Console = ctx.obj.get("console", Console())
    if not altitudes:
        altitudes = (0.0, 10000.0, 20000.0, 30000.0, 36089.0, 45000.0)
        unit = "ft"

    table = Table(title="International Standard Atmosphere")
    table.add_column(f"Altitude [{unit}]", style="cyan", justify="right")
    table.add_column("T [K]", style="green", justify="right")
    table.add_column("T [°C]", style="dim", justify="right")
    table.add_column("P [kPa]", style="green", justify="right")
    table.add_column("ρ [kg/m³]", style="green", justify="right")

    for alt in altitudes:
        amb = resolve_ambient(altitude_to_feet(alt, unit))
        table.add_row(
            f"{alt:g}",
            f"{amb.temperature:.2f}",
            f"{temperature_from_si(amb.temperature, 'degC'):.2f}",
            f"{pressure_from_si(amb.pressure, 'kPa'):.3f}",
            f"{amb.density:.4f}",
        )
    console.print(table)
