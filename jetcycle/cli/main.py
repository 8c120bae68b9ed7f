"""JetCycle command-line interface.

Entry point for the ``jetcycle`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from jetcycle import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """JetCycle — real-time jet engine cycle simulator.

    Runs turbojet, turbofan, ramjet and rocket operating scenarios and
    reports thrust, fuel flow and station gas properties.
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# Import and register sub-command groups
from jetcycle.cli.run_cmd import run  # noqa: E402
from jetcycle.cli.sweep_cmd import sweep  # noqa: E402
from jetcycle.cli.atmosphere_cmd import atmosphere  # noqa: E402
from jetcycle.cli.info_cmd import info  # noqa: E402

cli.add_command(run)
cli.add_command(sweep)
cli.add_command(atmosphere)
cli.add_command(info)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
