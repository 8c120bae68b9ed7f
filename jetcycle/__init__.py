"""JetCycle — real-time thermodynamic cycle simulator for jet engines."""

__app_name__ = "jetcycle"
__version__ = "0.1.0"
