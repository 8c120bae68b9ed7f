"""Fixed-step simulation runs and time-history traces.

Drives an :class:`EngineModel` at a constant timestep and records the
published state after every tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from jetcycle.core.config import save_arrays_hdf5
from jetcycle.core.engine import EngineModel

logger = logging.getLogger(__name__)

TRACE_CHANNELS: tuple[str, ...] = ("rpm", "thrust", "egt", "fuel_flow", "tsfc", "p3", "t4")


@dataclass
class Trace:
    """Time history of the engine state; one array per channel."""

    time: np.ndarray = field(default_factory=lambda: np.zeros(0))
    channels: dict[str, np.ndarray] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.time)

    def __getitem__(self, channel: str) -> np.ndarray:
        return self.channels[channel]

    def final(self, channel: str) -> float:
        """Last recorded value of a channel."""
        return float(self.channels[channel][-1])

    def settling_time(self, channel: str, rel_tol: float = 1e-3) -> float:
        """Earliest time after which *channel* stays within *rel_tol* of its final value."""
        values = self.channels[channel]
        final = values[-1]
        tol = max(abs(final) * rel_tol, 1e-9)
        outside = np.nonzero(np.abs(values - final) > tol)[0]
        if outside.size == 0:
            return float(self.time[0]) if len(self.time) else 0.0
        idx = outside[-1] + 1
        return float(self.time[min(idx, len(self.time) - 1)])

    def to_arrays(self) -> dict[str, np.ndarray]:
        return {"time": self.time, **self.channels}


class SimulationRecorder:
    """Run an engine model for a fixed duration and record its state.

    Args:
        model: Engine model to drive; it is mutated in place.
        dt: Timestep [s]. Values above the design's max timestep are
            reduced to it, so the recorded run covers the full duration.
    """

    def __init__(self, model: EngineModel, dt: float = 0.02):
        if dt <= 0:
            raise ValueError(f"Timestep must be positive, got {dt}")
        max_dt = model.design.max_timestep
        if 0.0 < max_dt < dt:
            logger.warning("Timestep %.3f s exceeds the %.3f s limit; recording at %.3f s", dt, max_dt, max_dt)
            dt = max_dt
        self.model = model
        self.dt = dt

    def run(self, duration: float) -> Trace:
        """Tick the model for *duration* seconds.

        Returns:
            Trace sampled after every tick.
        """
        steps = int(round(duration / self.dt))
        time = np.empty(steps)
        data = {name: np.empty(steps) for name in TRACE_CHANNELS}

        for i in range(steps):
            self.model.update(self.dt)
            state = self.model.state
            time[i] = self.model.time
            for name in TRACE_CHANNELS:
                data[name][i] = getattr(state, name)

        logger.debug("Recorded %d ticks (%.2f s) at dt=%.3f s", steps, duration, self.dt)
        return Trace(time=time, channels=data)


def save_trace_hdf5(trace: Trace, path: str | Path, dt: float | None = None) -> bool:
    """Write a trace to HDF5. Returns False if h5py is unavailable."""
    attrs = {"dt": dt} if dt is not None else None
    return save_arrays_hdf5(trace.to_arrays(), path, attrs=attrs)
