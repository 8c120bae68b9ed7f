"""Core modules for JetCycle.

This package contains the engine model and its supporting pieces:
- config: Inputs / design data model and JSON + HDF5 persistence
- atmosphere: Standard atmosphere and manual ambient overrides
- spool: Rate-limited spool dynamics and timestep policy
- state: Published engine state and station table
- engine: The stateful engine model ticked by the host loop
- recorder: Fixed-step run driver and time-history traces
"""
