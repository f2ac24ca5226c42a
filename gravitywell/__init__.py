"""Orbital sandbox: a sun, user-placed planets and moons, merges and explosions."""

from importlib.metadata import PackageNotFoundError, version

from .physics import MassiveBody, Satellite, circular_orbit_velocity
from .integrators import compute_acceleration, acceleration, integrate
from .presets import BODY_KINDS, create_body
from .simulation import Simulation, SimulationState, SimulationSnapshot
from .constants import (
    DEFAULT_G,
    SUN_MASS,
    TIME_STEP,
    SOFTENING_LENGTH,
    SOFTENING_FACTOR_SQ,
)

try:
    __version__ = version("gravitywell")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "MassiveBody",
    "Satellite",
    "circular_orbit_velocity",
    "compute_acceleration",
    "acceleration",
    "integrate",
    "BODY_KINDS",
    "create_body",
    "Simulation",
    "SimulationState",
    "SimulationSnapshot",
    "DEFAULT_G",
    "SUN_MASS",
    "TIME_STEP",
    "SOFTENING_LENGTH",
    "SOFTENING_FACTOR_SQ",
    "__version__",
]
