"""
StealthSim Source Package

Stealth aircraft radar detection simulator:
- Simplified monostatic radar equation with geometry/aspect RCS model
- Piecewise detection probability and range gate
- Time-stepped radar pulse lifecycle with stealth-mode state machine
"""

from stealthsim.physics import (
    DETECTION_THRESHOLD,
    AircraftConfig,
    ConfigurationError,
    GeometryClass,
    Position,
    RadarConfig,
    RadarResult,
    effective_cross_section,
    evaluate,
    is_optimal_stealth_config,
    optimal_stealth_config,
    propagation_time,
)
from stealthsim.simulation import (
    Pulse,
    PulsePhase,
    SimulationClock,
    SimulationSession,
)

__version__ = "1.0.0"
__author__ = "StealthSim Contributors"

__all__ = [
    # Physics
    "AircraftConfig",
    "RadarConfig",
    "Position",
    "GeometryClass",
    "RadarResult",
    "ConfigurationError",
    "DETECTION_THRESHOLD",
    "effective_cross_section",
    "evaluate",
    "propagation_time",
    "is_optimal_stealth_config",
    "optimal_stealth_config",
    # Simulation
    "Pulse",
    "PulsePhase",
    "SimulationClock",
    "SimulationSession",
]
