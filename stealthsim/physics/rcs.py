"""
Radar Cross Section (RCS) Model

Effective RCS from a material baseline, a per-geometry signature factor and a
closed-form aspect-angle curve.

    σ_eff = σ_base × G(class) × A(class, θ)

Faceted stealth shaping is only effective near nose/tail aspect, so its
angular curve is sharply peaked toward broadside; conventional airframes vary
gently. Both curves are ≥ 1 and periodic with period π (front/back symmetric).

The per-class factors are policy constants encoding low/medium/high baseline
signature, not measured or tabulated cross-section data.

References:
    - Skolnik, "Radar Handbook", 3rd Ed., Chapter 14
    - Knott, Shaeffer & Tuley, "Radar Cross Section", 2nd Ed., Chapter 12
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

import numba
import numpy as np


class GeometryClass(Enum):
    """Airframe geometry classes."""

    STEALTH = "stealth"  # Faceted low-observable (F-117, B-2)
    FIGHTER = "fighter"  # 4th generation fighter
    CONVENTIONAL = "conventional"  # Transport / airliner


@dataclass(frozen=True)
class GeometryProfile:
    """
    Signature profile of a geometry class.

    Attributes:
        base_factor: Multiplier applied to the material baseline RCS
        angular_coefficient: Peak added factor at broadside
        angular_exponent: Power of sin(θ) shaping the aspect curve
    """

    base_factor: float
    angular_coefficient: float
    angular_exponent: int


GEOMETRY_PROFILES: Dict[GeometryClass, GeometryProfile] = {
    GeometryClass.STEALTH: GeometryProfile(
        base_factor=0.001, angular_coefficient=50.0, angular_exponent=4
    ),
    GeometryClass.FIGHTER: GeometryProfile(
        base_factor=5.0, angular_coefficient=2.0, angular_exponent=2
    ),
    GeometryClass.CONVENTIONAL: GeometryProfile(
        base_factor=25.0, angular_coefficient=2.0, angular_exponent=2
    ),
}


@numba.jit(nopython=True, cache=True)
def _angular_factor_jit(angle_rad: float, coefficient: float, exponent: int) -> float:
    """
    JIT-compiled aspect-angle RCS factor.

    A(θ) = 1 + k × sin(θ)^n

    Args:
        angle_rad: Aspect angle to radar [rad] (0 = nose-on)
        coefficient: Broadside peak coefficient k
        exponent: Even power n of sin(θ)

    Returns:
        RCS multiplication factor (≥ 1)
    """
    return 1.0 + coefficient * np.sin(angle_rad) ** exponent


def get_profile(geometry: GeometryClass) -> GeometryProfile:
    """Look up the signature profile for a geometry class."""
    return GEOMETRY_PROFILES[GeometryClass(geometry)]


def geometry_factor(geometry: GeometryClass) -> float:
    """Baseline signature multiplier for a geometry class."""
    return get_profile(geometry).base_factor


def angular_factor(geometry: GeometryClass, angle_deg: float) -> float:
    """
    Aspect-angle RCS factor.

    Args:
        geometry: Geometry class
        angle_deg: Aspect angle to radar [deg]

    Returns:
        1 + 50·sin⁴θ for stealth shaping, 1 + 2·sin²θ otherwise
    """
    profile = get_profile(geometry)
    return float(
        _angular_factor_jit(
            np.radians(angle_deg), profile.angular_coefficient, profile.angular_exponent
        )
    )


def effective_cross_section(aircraft) -> float:
    """
    Geometric RCS before material absorption.

    σ = σ_base × G(class) × A(class, θ)

    Args:
        aircraft: AircraftConfig

    Returns:
        RCS [m²], strictly positive for a valid configuration
    """
    return (
        aircraft.base_cross_section
        * geometry_factor(aircraft.geometry)
        * angular_factor(aircraft.geometry, aircraft.angle_to_radar_deg)
    )

