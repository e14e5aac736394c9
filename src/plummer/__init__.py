"""
Plummer: Test-Particle Orbits in a Plummer Potential

A Python package for integrating the orbit of a single test particle in the
softened potential of a Plummer sphere with a fixed-step symplectic leapfrog.
"""

# Package metadata
__version__ = "0.1.0"

# Configuration
from .config import config, temp_config

# Core classes
from .vectors import CartesianVector3, SphericalVector3, to_cartesian, to_spherical
from .system import G, PlummerSystem, acceleration
from .particle import ParticleState
from .integrator import drift, kick, step
from .simulation import RunParameters, evolve, run
from .trajectory import Trajectory

# I/O
from .config_reader import ConfigReader, ConfigError, RunConfig
from .output import SnapshotWriter, OutputError, format_snapshot

# Define what gets imported with "from plummer import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "CartesianVector3",
    "SphericalVector3",
    "PlummerSystem",
    "ParticleState",
    "RunParameters",
    "RunConfig",
    "Trajectory",
    "ConfigReader",
    "SnapshotWriter",
    # Errors
    "ConfigError",
    "OutputError",
    # Functions
    "to_cartesian",
    "to_spherical",
    "acceleration",
    "drift",
    "kick",
    "step",
    "evolve",
    "run",
    "format_snapshot",
    # Constants
    "G",
]
