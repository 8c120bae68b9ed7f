"""Engine cycle analysis for JetCycle.

Provides gas-path component models (compression stages, combustor,
turbine, nozzle) and the per-tick cycle solver for turbojets, turbofans,
ramjets and rockets.
"""
