"""
Scenario Generator

Generates signature sweeps over aircraft parameters for a fixed radar.

Features:
    - Cartesian product of geometry, aspect, absorption and baseline RCS
    - Memory-efficient iterator variant
    - Quick aspect sweep for polar signature plots

Usage:
    space = ParameterSpace(
        geometries=["stealth", "fighter"],
        angles_deg=[0, 45, 90],
    )
    rows = ScenarioGenerator.evaluate(space)
"""

from dataclasses import dataclass, field
from itertools import product
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np

from stealthsim.physics.constants import DETECTION_THRESHOLD
from stealthsim.physics.parameters import DEFAULT_RADAR, AircraftConfig, Position, RadarConfig
from stealthsim.physics.radar_equation import RadarResult, evaluate
from stealthsim.physics.rcs import GeometryClass


@dataclass
class ParameterSpace:
    """
    Parameter space definition for a signature sweep.

    Attributes:
        geometries: Geometry class names
        angles_deg: Aspect angles [deg]
        absorptions: Absorption coefficients
        cross_sections_m2: Baseline RCS values [m²]
        position: Aircraft position for every point [m]
        radar: Radar configuration for every point
        detection_threshold: Pd detection threshold
    """

    geometries: List[str] = field(default_factory=lambda: [g.value for g in GeometryClass])
    angles_deg: List[float] = field(default_factory=lambda: [0, 30, 60, 90, 120, 150, 180])
    absorptions: List[float] = field(default_factory=lambda: [0.0, 0.5, 0.95])
    cross_sections_m2: List[float] = field(default_factory=lambda: [0.001, 0.01, 0.1, 1.0])
    position: Tuple[float, float, float] = (10.0, 8.0, 15.0)
    radar: RadarConfig = DEFAULT_RADAR
    detection_threshold: float = DETECTION_THRESHOLD

    @property
    def total_configs(self) -> int:
        """Total number of configurations."""
        return (
            len(self.geometries)
            * len(self.angles_deg)
            * len(self.absorptions)
            * len(self.cross_sections_m2)
        )


@dataclass(frozen=True)
class SweepRow:
    """One evaluated point of a sweep."""

    aircraft: AircraftConfig
    radar: RadarConfig
    result: RadarResult

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary for CSV export."""
        return {
            "geometry": self.aircraft.geometry.value,
            "angle_deg": self.aircraft.angle_to_radar_deg,
            "absorption": self.aircraft.absorption_coefficient,
            "rcs_base_m2": self.aircraft.base_cross_section,
            "frequency_ghz": self.radar.frequency_ghz,
            "power_kw": self.radar.power_kw,
            "distance_m": self.result.distance_m,
            "effective_rcs_m2": self.result.effective_rcs_m2,
            "signal_dbm": self.result.signal_strength_dbm,
            "pd": self.result.detection_probability,
            "detected": self.result.is_detected,
        }


class ScenarioGenerator:
    """
    Generates aircraft configurations from a parameter space.
    """

    @staticmethod
    def generate_iterator(space: ParameterSpace) -> Iterator[AircraftConfig]:
        """
        Generate configurations as iterator (memory efficient).

        Args:
            space: Parameter space definition

        Yields:
            AircraftConfig objects
        """
        position = Position.coerce(space.position)
        for geometry, angle, absorption, rcs in product(
            space.geometries, space.angles_deg, space.absorptions, space.cross_sections_m2
        ):
            yield AircraftConfig(
                base_cross_section=rcs,
                absorption_coefficient=absorption,
                geometry=geometry,
                angle_to_radar_deg=float(angle) % 360.0,
                position=position,
            )

    @staticmethod
    def generate(space: ParameterSpace) -> List[AircraftConfig]:
        """
        Generate all configurations from parameter space.

        Args:
            space: Parameter space definition

        Returns:
            List of AircraftConfig objects
        """
        return list(ScenarioGenerator.generate_iterator(space))

    @staticmethod
    def evaluate(space: ParameterSpace) -> List[SweepRow]:
        """
        Evaluate every configuration of the space against its radar.

        Returns:
            List of SweepRow in generation order
        """
        return [
            SweepRow(
                aircraft=aircraft,
                radar=space.radar,
                result=evaluate(aircraft, space.radar, space.detection_threshold),
            )
            for aircraft in ScenarioGenerator.generate_iterator(space)
        ]

    @staticmethod
    def quick_aspect_sweep(
        geometry: str = "stealth",
        n_angles: int = 36,
        base_cross_section: float = 0.01,
        absorption: float = 0.0,
    ) -> ParameterSpace:
        """
        Full-circle aspect sweep for a single airframe.

        Args:
            geometry: Geometry class name
            n_angles: Number of evenly spaced angles over [0, 360)
            base_cross_section: Baseline RCS [m²]
            absorption: Absorption coefficient

        Returns:
            ParameterSpace with one geometry, absorption and RCS value
        """
        angles = np.linspace(0.0, 360.0, n_angles, endpoint=False)
        return ParameterSpace(
            geometries=[geometry],
            angles_deg=[float(a) for a in angles],
            absorptions=[absorption],
            cross_sections_m2=[base_cross_section],
        )
