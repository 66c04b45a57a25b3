"""
StealthSim Physics Package

Detection physics engine: configuration, RCS model and radar equation.

Modules:
    - constants: Physical constants and detection policy
    - parameters: Aircraft/radar configuration and canonical stealth config
    - rcs: Geometry-dependent effective radar cross-section
    - radar_equation: Radar equation, detection probability, range gate
"""

from .constants import DETECTION_THRESHOLD, SIGNAL_FLOOR_DBM, SPEED_OF_LIGHT
from .parameters import (
    DEFAULT_AIRCRAFT,
    DEFAULT_LIMITS,
    DEFAULT_RADAR,
    AircraftConfig,
    ConfigurationError,
    ParameterLimits,
    Position,
    RadarConfig,
    is_optimal_stealth_config,
    optimal_stealth_config,
)
from .radar_equation import (
    RadarResult,
    calculate_received_power,
    calculate_wavelength,
    detection_probability,
    evaluate,
    propagation_time,
)
from .rcs import (
    GEOMETRY_PROFILES,
    GeometryClass,
    angular_factor,
    effective_cross_section,
    geometry_factor,
)

__all__ = [
    # Constants
    "SPEED_OF_LIGHT",
    "SIGNAL_FLOOR_DBM",
    "DETECTION_THRESHOLD",
    # Configuration
    "Position",
    "AircraftConfig",
    "RadarConfig",
    "ParameterLimits",
    "ConfigurationError",
    "DEFAULT_AIRCRAFT",
    "DEFAULT_RADAR",
    "DEFAULT_LIMITS",
    "optimal_stealth_config",
    "is_optimal_stealth_config",
    # RCS
    "GeometryClass",
    "GEOMETRY_PROFILES",
    "geometry_factor",
    "angular_factor",
    "effective_cross_section",
    # Radar Equation
    "RadarResult",
    "calculate_wavelength",
    "calculate_received_power",
    "detection_probability",
    "evaluate",
    "propagation_time",
]
