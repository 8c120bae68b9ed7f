"""JetCycle command-line interface package."""

from jetcycle.cli.main import cli, main

__all__ = ["cli", "main"]
