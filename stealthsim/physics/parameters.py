"""
Aircraft and Radar Configuration

Immutable configuration value objects consumed by the detection engine and
the simulation clock. Values are validated at construction so that NaN never
reaches a RadarResult.

Coordinate system: radar at the origin, y up, bearing measured from +z
toward +x.
"""

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import numpy as np

from .constants import (
    OPTIMAL_STEALTH_ABSORPTION,
    OPTIMAL_STEALTH_ANGLE_DEG,
    OPTIMAL_STEALTH_CROSS_SECTION,
)
from .rcs import GeometryClass


class ConfigurationError(ValueError):
    """Raised when a configuration value is outside its documented range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def _finite(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}", field=name) from e
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value}", field=name)
    return value


def _positive(name: str, value: Any) -> float:
    value = _finite(name, value)
    if value <= 0.0:
        raise ConfigurationError(f"{name} must be > 0, got {value}", field=name)
    return value


PositionLike = Union["Position", Sequence[float], Mapping[str, float], np.ndarray]


@dataclass(frozen=True)
class Position:
    """
    Aircraft position relative to the radar.

    Attributes:
        x: Cross-range [m]
        y: Altitude [m]
        z: Down-range [m]
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, _finite(f"position.{name}", getattr(self, name)))

    @classmethod
    def coerce(cls, value: PositionLike) -> "Position":
        """Build a Position from a Position, an (x, y, z) sequence or an x/y/z mapping."""
        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(x=value["x"], y=value["y"], z=value["z"])
            except KeyError as e:
                raise ConfigurationError(
                    f"position mapping is missing {e.args[0]!r}", field="position"
                ) from e
        try:
            x, y, z = value
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"position must have exactly 3 components, got {value!r}", field="position"
            ) from e
        return cls(x=x, y=y, z=z)

    def as_array(self) -> np.ndarray:
        """Return [x, y, z] as a float64 array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class AircraftConfig:
    """
    Aircraft signature configuration.

    Attributes:
        base_cross_section: Material/shape baseline RCS [m²] (> 0)
        absorption_coefficient: Fraction of radar energy absorbed [0, 1)
        geometry: Airframe class selecting base factor and angular curve
        angle_to_radar_deg: Aspect angle to the radar [deg] in [0, 360)
        position: Position relative to the radar [m]
    """

    base_cross_section: float
    absorption_coefficient: float
    geometry: GeometryClass
    angle_to_radar_deg: float
    position: Position = field(default_factory=lambda: Position(0.0, 0.0, 0.0))

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "base_cross_section",
            _positive("base_cross_section", self.base_cross_section),
        )

        absorption = _finite("absorption_coefficient", self.absorption_coefficient)
        if not 0.0 <= absorption < 1.0:
            # Full absorption would zero the RCS and break the log10 in dBm conversion
            raise ConfigurationError(
                f"absorption_coefficient must be in [0, 1), got {absorption}",
                field="absorption_coefficient",
            )
        object.__setattr__(self, "absorption_coefficient", absorption)

        try:
            geometry = GeometryClass(self.geometry)
        except ValueError as e:
            choices = ", ".join(g.value for g in GeometryClass)
            raise ConfigurationError(
                f"geometry must be one of {choices}, got {self.geometry!r}", field="geometry"
            ) from e
        object.__setattr__(self, "geometry", geometry)

        angle = _finite("angle_to_radar_deg", self.angle_to_radar_deg)
        if not 0.0 <= angle < 360.0:
            raise ConfigurationError(
                f"angle_to_radar_deg must be in [0, 360), got {angle}",
                field="angle_to_radar_deg",
            )
        object.__setattr__(self, "angle_to_radar_deg", angle)

        object.__setattr__(self, "position", Position.coerce(self.position))

    def with_changes(self, **changes: Any) -> "AircraftConfig":
        """Return a validated copy with the given fields replaced."""
        return _replace(self, changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_cross_section": self.base_cross_section,
            "absorption_coefficient": self.absorption_coefficient,
            "geometry": self.geometry.value,
            "angle_to_radar_deg": self.angle_to_radar_deg,
            "position": self.position.to_dict(),
        }


@dataclass(frozen=True)
class RadarConfig:
    """
    Monostatic radar configuration (unity antenna gain).

    Attributes:
        frequency_ghz: Operating frequency [GHz]
        power_kw: Peak transmitted power [kW]
        range_km: Instrumented range [km]
        sensitivity_dbm: Minimum detectable signal [dBm]
    """

    frequency_ghz: float
    power_kw: float
    range_km: float
    sensitivity_dbm: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequency_ghz", _positive("frequency_ghz", self.frequency_ghz))
        object.__setattr__(self, "power_kw", _positive("power_kw", self.power_kw))
        object.__setattr__(self, "range_km", _positive("range_km", self.range_km))
        object.__setattr__(
            self, "sensitivity_dbm", _finite("sensitivity_dbm", self.sensitivity_dbm)
        )

    def with_changes(self, **changes: Any) -> "RadarConfig":
        """Return a validated copy with the given fields replaced."""
        return _replace(self, changes)

    def to_dict(self) -> Dict[str, float]:
        return {
            "frequency_ghz": self.frequency_ghz,
            "power_kw": self.power_kw,
            "range_km": self.range_km,
            "sensitivity_dbm": self.sensitivity_dbm,
        }


def _replace(config, changes: Dict[str, Any]):
    known = {f.name for f in fields(config)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ConfigurationError(
            f"unknown {type(config).__name__} field(s): {', '.join(unknown)}",
            field=unknown[0],
        )
    return replace(config, **changes)


# =============================================================================
# CANONICAL STEALTH CONFIGURATION
# =============================================================================


def optimal_stealth_config(position: PositionLike) -> AircraftConfig:
    """
    Canonical low-observability configuration at the given position.

    Minimizes σ in Pr = (Pt × λ² × σ) / ((4π)³ × R⁴):
        - minimum baseline cross-section (0.001 m²)
        - maximum absorption (95%)
        - faceted stealth geometry
        - nose-on aspect (0°)
    """
    return AircraftConfig(
        base_cross_section=OPTIMAL_STEALTH_CROSS_SECTION,
        absorption_coefficient=OPTIMAL_STEALTH_ABSORPTION,
        geometry=GeometryClass.STEALTH,
        angle_to_radar_deg=OPTIMAL_STEALTH_ANGLE_DEG,
        position=Position.coerce(position),
    )


def is_optimal_stealth_config(aircraft: AircraftConfig) -> bool:
    """Check whether every signature field matches the canonical stealth configuration."""
    return (
        aircraft.base_cross_section == OPTIMAL_STEALTH_CROSS_SECTION
        and aircraft.absorption_coefficient == OPTIMAL_STEALTH_ABSORPTION
        and aircraft.geometry is GeometryClass.STEALTH
        and aircraft.angle_to_radar_deg == OPTIMAL_STEALTH_ANGLE_DEG
    )


# =============================================================================
# CONTROL LIMITS AND DEFAULTS
# =============================================================================


@dataclass(frozen=True)
class ParameterLimits:
    """
    Input ranges offered to the operator.

    Values outside these ranges are clamped before validation. Angles are
    wrapped into [0, 360).
    """

    position_x: tuple = (-30.0, 30.0)
    position_y: tuple = (2.0, 30.0)
    position_z: tuple = (-30.0, 30.0)
    base_cross_section: tuple = (0.001, 1.0)
    absorption_coefficient: tuple = (0.0, OPTIMAL_STEALTH_ABSORPTION)
    frequency_ghz: tuple = (1.0, 35.0)
    power_kw: tuple = (10.0, 1000.0)
    range_km: tuple = (10.0, 500.0)
    sensitivity_dbm: tuple = (-120.0, -60.0)

    @staticmethod
    def _clip(value: Any, bounds: tuple, name: str) -> float:
        low, high = bounds
        return float(np.clip(_finite(name, value), low, high))

    def clamp_aircraft(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Clamp a partial aircraft update to the control ranges."""
        clamped = dict(changes)
        for name in ("base_cross_section", "absorption_coefficient"):
            if name in clamped:
                clamped[name] = self._clip(clamped[name], getattr(self, name), name)
        if "angle_to_radar_deg" in clamped:
            clamped["angle_to_radar_deg"] = (
                _finite("angle_to_radar_deg", clamped["angle_to_radar_deg"]) % 360.0
            )
        if "position" in clamped:
            p = Position.coerce(clamped["position"])
            clamped["position"] = Position(
                x=self._clip(p.x, self.position_x, "position.x"),
                y=self._clip(p.y, self.position_y, "position.y"),
                z=self._clip(p.z, self.position_z, "position.z"),
            )
        return clamped

    def clamp_radar(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Clamp a partial radar update to the control ranges."""
        clamped = dict(changes)
        for name in ("frequency_ghz", "power_kw", "range_km", "sensitivity_dbm"):
            if name in clamped:
                clamped[name] = self._clip(clamped[name], getattr(self, name), name)
        return clamped


DEFAULT_LIMITS = ParameterLimits()

DEFAULT_AIRCRAFT = AircraftConfig(
    base_cross_section=0.01,
    absorption_coefficient=0.8,
    geometry=GeometryClass.STEALTH,
    angle_to_radar_deg=0.0,
    position=Position(10.0, 8.0, 15.0),
)

DEFAULT_RADAR = RadarConfig(
    frequency_ghz=10.0,
    power_kw=500.0,
    range_km=100.0,
    sensitivity_dbm=-90.0,
)
