"""Stateful engine model ticked by the host application.

The model owns the operator inputs, the engine design and the published
state/station table. Each call to :meth:`EngineModel.update`:

1. clamps the timestep,
2. resolves the ambient conditions (written back into the inputs),
3. advances the spool toward the governor target,
4. solves the cycle above the run threshold, or publishes the cold
   snapshot below it,
5. replaces state and stations in one step.

Readers get frozen values, so nothing outside the model can write into
its outputs.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from jetcycle.core.atmosphere import Ambient, resolve_ambient
from jetcycle.core.config import EngineDesign, EngineInputs, EngineSetup
from jetcycle.core.spool import RUN_THRESHOLD_RPM, advance_spool, clamp_timestep, governor_target
from jetcycle.core.state import EngineState, Station, uniform_stations
from jetcycle.cycle.solver import CycleResult, cold_result, solve_cycle

logger = logging.getLogger(__name__)

_INPUT_FIELDS = frozenset(f.name for f in fields(EngineInputs))


@dataclass(frozen=True)
class EngineSnapshot:
    """Value copy of everything a renderer or telemetry panel may read."""

    time: float
    inputs: EngineInputs
    state: EngineState
    stations: Mapping[int, Station]


class EngineModel:
    """Real-time engine cycle simulator.

    Args:
        design: Engine design. Defaults to the reference 15 kg/s turbojet.
        inputs: Initial operator inputs.
    """

    def __init__(self, design: EngineDesign | None = None, inputs: EngineInputs | None = None):
        self._design = copy.deepcopy(design) if design is not None else EngineDesign()
        self._inputs = copy.deepcopy(inputs) if inputs is not None else EngineInputs()
        self._state = EngineState(air_density_inlet=self._inputs.ambient_density)
        self._stations = uniform_stations()
        self._time = 0.0
        self._components: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_setup(cls, setup: EngineSetup) -> EngineModel:
        """Build a fresh model from a persisted setup."""
        return cls(design=setup.design, inputs=setup.inputs)

    # --- Inputs and design ---

    @property
    def inputs(self) -> EngineInputs:
        """Copy of the current operator inputs."""
        return replace(self._inputs)

    @property
    def design(self) -> EngineDesign:
        """Copy of the engine design."""
        return copy.deepcopy(self._design)

    def set_inputs(self, **values: Any) -> None:
        """Set named operator inputs between ticks.

        Values are taken as given; range checking is the caller's job.

        Raises:
            AttributeError: If a name is not an input field.
        """
        unknown = sorted(set(values) - _INPUT_FIELDS)
        if unknown:
            raise AttributeError(f"Unknown engine input(s): {unknown}")
        for name, value in values.items():
            setattr(self._inputs, name, value)

    def reconfigure(self, design: EngineDesign) -> None:
        """Replace the engine design (e.g. switch engine type)."""
        logger.info(
            "Reconfigured engine: %s, %.1f kg/s, PR %.1f, BPR %.1f",
            design.engine_type.value,
            design.mass_flow,
            design.pressure_ratio,
            design.bypass_ratio,
        )
        self._design = copy.deepcopy(design)

    def setup(self) -> EngineSetup:
        """Current inputs and design as a persistable setup."""
        return EngineSetup(inputs=self.inputs, design=self.design)

    # --- Outputs ---

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def stations(self) -> Mapping[int, Station]:
        return self._stations

    @property
    def time(self) -> float:
        """Simulated time [s] accumulated from clamped timesteps."""
        return self._time

    def component_summaries(self) -> tuple[dict[str, Any], ...]:
        """Per-component summaries from the last solved tick."""
        return self._components

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            time=self._time,
            inputs=self.inputs,
            state=self._state,
            stations=self._stations,
        )

    # --- Tick ---

    def resolve_ambient(self) -> Ambient:
        """Resolve ambient conditions and write them back into the inputs."""
        inp = self._inputs
        ambient = resolve_ambient(
            inp.altitude,
            manual=inp.manual_atmosphere,
            manual_temperature=inp.ambient_temperature,
            manual_pressure=inp.ambient_pressure,
        )
        inp.ambient_temperature = ambient.temperature
        inp.ambient_pressure = ambient.pressure
        inp.ambient_density = ambient.density
        return ambient

    def update(self, dt: float) -> None:
        """Advance the simulation by *dt* seconds of wall-clock time."""
        design = self._design
        dt = clamp_timestep(dt, design.max_timestep)
        ambient = self.resolve_ambient()

        target = governor_target(self._inputs.throttle, self._inputs.ignition, design.idle_rpm)
        rpm = advance_spool(self._state.rpm, target, design.spool_rate, dt)

        if rpm > RUN_THRESHOLD_RPM:
            result = solve_cycle(self._inputs, design, ambient, rpm)
        else:
            result = cold_result(ambient, rpm)

        self._publish(result)
        self._time += dt

    def _publish(self, result: CycleResult) -> None:
        previous = self._state
        state = result.state
        if state.turbine_starved and not previous.turbine_starved:
            logger.warning(
                "Turbine starved: exit temperature %.1f K below ambient %.1f K",
                state.egt,
                result.stations[0].temperature,
            )
        if state.over_temperature and not previous.over_temperature:
            logger.warning(
                "Combustor exit temperature %.0f K exceeds turbine inlet limit %.0f K",
                state.t4,
                self._design.turbine_inlet_temperature,
            )
        if state.running != previous.running:
            logger.info("Engine %s at %.1f%% N1", "running" if state.running else "stopped", state.rpm)

        self._state = state
        self._stations = result.stations
        self._components = result.components
