"""CLI command for throttle sweeps."""

from __future__ import annotations

from typing import Any

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from jetcycle.cli.run_cmd import build_setup, scenario_options
from jetcycle.core.engine import EngineModel
from jetcycle.core.spool import settle_time
from jetcycle.utils.units import force_from_si, pressure_from_si


def throttle_sweep(model: EngineModel, throttles: np.ndarray, dt: float = 0.02) -> list[dict[str, float]]:
    """Settle the engine at each throttle setting in turn.

    The spool is given the time it needs to reach each governor target,
    plus one second, before the state is sampled.
    """
    rows = []
    for throttle in throttles:
        model.set_inputs(throttle=float(throttle))
        design = model.design
        # Worst case: spool travel across the full range.
        duration = settle_time(0.0, 100.0, design.spool_rate) + 1.0
        for _ in range(int(round(duration / dt))):
            model.update(dt)
        state = model.state
        rows.append(
            {
                "throttle": float(throttle),
                "rpm": state.rpm,
                "thrust": state.thrust,
                "fuel_flow": state.fuel_flow,
                "tsfc": state.tsfc,
                "p3": state.p3,
                "t4": state.t4,
                "egt": state.egt,
            }
        )
    return rows


@click.command("sweep")
@scenario_options
@click.option("--start", type=float, default=0.0, show_default=True, help="First throttle [%].")
@click.option("--stop", type=float, default=100.0, show_default=True, help="Last throttle [%].")
@click.option("--points", type=int, default=11, show_default=True, help="Number of throttle settings.")
@click.pass_context
def sweep(ctx: click.Context, start: float, stop: float, points: int, **scenario: Any) -> None:
    """Tabulate settled engine performance across a throttle range."""
    console: Console = ctx.obj.get("console", Console())

    setup = build_setup(**scenario)
    model = EngineModel.from_setup(setup)
    rows = throttle_sweep(model, np.linspace(start, stop, points))

    table = Table(title=f"Throttle Sweep — {setup.design.engine_type.value}")
    table.add_column("Throttle [%]", style="cyan", justify="right")
    table.add_column("N1 [%]", justify="right")
    table.add_column("Thrust [kN]", style="green", justify="right")
    table.add_column("Fuel [kg/s]", justify="right")
    table.add_column("TSFC [kg/(N·h)]", justify="right")
    table.add_column("P3 [kPa]", justify="right")
    table.add_column("T4 [K]", justify="right")
    table.add_column("EGT [K]", justify="right")

    for row in rows:
        table.add_row(
            f"{row['throttle']:.0f}",
            f"{row['rpm']:.1f}",
            f"{force_from_si(row['thrust'], 'kN'):.2f}",
            f"{row['fuel_flow']:.4f}",
            f"{row['tsfc']:.4f}",
            f"{pressure_from_si(row['p3'], 'kPa'):.1f}",
            f"{row['t4']:.0f}",
            f"{row['egt']:.0f}",
        )
    console.print(table)
