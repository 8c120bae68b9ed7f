"""Engine setup data model and project I/O for JetCycle.

Holds the operator inputs and the fixed engine design, and handles
saving/loading them as JSON. Simulation time histories (large arrays)
go to HDF5.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np

from jetcycle.utils.constants import P_SL, RHO_SL, T_SL

logger = logging.getLogger(__name__)

# Attempt HDF5 import; gracefully degrade if not installed
try:
    import h5py

    _HAS_H5PY = True
except ImportError:
    _HAS_H5PY = False
    logger.info("h5py not available — HDF5 features disabled")


class EngineType(Enum):
    """Engine architecture. TURBOJET covers turbofans (bypass_ratio > 0)."""

    TURBOJET = "turbojet"
    RAMJET = "ramjet"
    ROCKET = "rocket"

    @classmethod
    def parse(cls, value: str | EngineType) -> EngineType:
        """Resolve an engine type from its tag (accepts "turbofan" too)."""
        if isinstance(value, EngineType):
            return value
        tag = str(value).strip().lower()
        if tag == "turbofan":
            return cls.TURBOJET
        try:
            return cls(tag)
        except ValueError:
            valid = [t.value for t in cls] + ["turbofan"]
            raise ValueError(f"Unknown engine type: {value!r}. Expected one of {valid}") from None


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level project metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


# --- Engine inputs and design ---


@dataclass
class EngineInputs:
    """Operator-settable inputs. Persist across ticks; never range-checked."""

    throttle: float = 0.0  # % [0, 100]
    ignition: bool = False
    mach: float = 0.0
    altitude: float = 0.0  # ft

    # Ambient override
    manual_atmosphere: bool = False
    ambient_temperature: float = T_SL  # K
    ambient_pressure: float = P_SL  # Pa
    ambient_density: float = RHO_SL  # kg/m³

    # Fuel / combustor
    fuel_cv: float = 43.0e6  # J/kg (kerosene)
    afr: float = 60.0  # overall air-fuel ratio
    injection_pressure: float = 30.0  # bar
    chamber_volume: float = 0.5  # m³
    nozzle_area: float = 1.0  # scale factor, 1.0 = design
    chamber_diffuser: float = 1.0  # pressure-loss scale factor


@dataclass
class Efficiencies:
    """Component efficiencies (0–1)."""

    compressor: float = 0.85
    turbine: float = 0.90
    combustor: float = 0.98
    nozzle: float = 0.95


@dataclass
class EngineDesign:
    """Fixed engine design, sea-level static reference.

    Every field carries an explicit default so a design is complete from
    construction onward.
    """

    engine_type: EngineType = EngineType.TURBOJET
    mass_flow: float = 15.0  # kg/s
    pressure_ratio: float = 12.0
    turbine_inlet_temperature: float = 1400.0  # K, informational ceiling
    efficiency: Efficiencies = field(default_factory=Efficiencies)
    bypass_ratio: float = 0.0
    fan_pressure_ratio: float = 1.5

    # Spool schedule
    idle_rpm: float = 60.0  # % N1 with ignition on and throttle at 0
    spool_rate: float = 20.0  # %/s
    max_timestep: float = 0.1  # s

    def __post_init__(self) -> None:
        self.engine_type = EngineType.parse(self.engine_type)
        if isinstance(self.efficiency, dict):
            self.efficiency = Efficiencies(**self.efficiency)

    @property
    def is_turbofan(self) -> bool:
        return self.engine_type == EngineType.TURBOJET and self.bypass_ratio > 0.0


@dataclass
class EngineSetup:
    """Everything needed to reconstruct a simulation: inputs plus design."""

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    inputs: EngineInputs = field(default_factory=EngineInputs)
    design: EngineDesign = field(default_factory=EngineDesign)


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy and enum types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def setup_to_dict(setup: EngineSetup) -> dict[str, Any]:
    """Plain-JSON dictionary view of a setup."""
    return json.loads(json.dumps(asdict(setup), cls=_NumpyEncoder))


def setup_from_dict(data: dict[str, Any]) -> EngineSetup:
    """Rebuild a setup from :func:`setup_to_dict` output."""
    data = dict(data)
    meta = ProjectMeta(**data.pop("meta", {}))
    inputs = EngineInputs(**data.pop("inputs", {}))
    design = EngineDesign(**data.pop("design", {}))
    if data:
        raise TypeError(f"Unexpected setup keys: {sorted(data)}")
    return EngineSetup(meta=meta, inputs=inputs, design=design)


def save_setup_json(setup: EngineSetup, path: str | Path) -> None:
    """Save an engine setup to a JSON file."""
    path = Path(path)
    setup.meta.touch()
    if not setup.meta.created:
        setup.meta.created = setup.meta.modified

    with open(path, "w") as f:
        json.dump(setup_to_dict(setup), f, indent=2)

    logger.info("Saved setup to %s", path)


def load_setup_json(path: str | Path) -> EngineSetup:
    """Load an engine setup from a JSON file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    setup = setup_from_dict(data)
    logger.info("Loaded setup from %s", path)
    return setup


# --- HDF5 helpers ---


def save_arrays_hdf5(
    arrays: dict[str, np.ndarray],
    path: str | Path,
    attrs: dict[str, Any] | None = None,
) -> bool:
    """Save a dictionary of numpy arrays to HDF5.

    Returns:
        True if the file was written, False if h5py is unavailable.
    """
    if not _HAS_H5PY:
        logger.warning("h5py not available, skipping HDF5 save")
        return False
    path = Path(path)
    with h5py.File(path, "w") as f:
        for key, arr in arrays.items():
            f.create_dataset(key, data=arr)
        f.attrs["created"] = datetime.now(timezone.utc).isoformat()
        for key, value in (attrs or {}).items():
            f.attrs[key] = value
    logger.info("Saved %d arrays to %s", len(arrays), path)
    return True


def load_arrays_hdf5(path: str | Path) -> dict[str, np.ndarray]:
    """Load all datasets from an HDF5 file into a dictionary."""
    if not _HAS_H5PY:
        logger.warning("h5py not available, skipping HDF5 load")
        return {}
    path = Path(path)
    arrays: dict[str, np.ndarray] = {}
    with h5py.File(path, "r") as f:
        for key in f.keys():
            arrays[key] = f[key][:]
    return arrays
