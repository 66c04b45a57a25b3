"""
Scenario Loader

YAML-based scenario configuration parser for StealthSim.

Loads an aircraft/radar setup from a YAML file and creates a configured
SimulationSession.

Scenario layout:
    scenario:   name, description
    aircraft:   base_cross_section_m2, absorption_coefficient, geometry,
                angle_to_radar_deg, position {x_m, y_m, z_m}
    radar:      frequency_ghz, power_kw, range_km, sensitivity_dbm
    simulation: duration_s, dt_s, detection_threshold, stealth_mode

Usage:
    loader = ScenarioLoader('scenarios/stealth_ingress.yaml')
    session = loader.create_session()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from stealthsim.physics.constants import DETECTION_THRESHOLD, PULSE_ADVANCE_PERIOD_S
from stealthsim.physics.parameters import (
    DEFAULT_AIRCRAFT,
    DEFAULT_RADAR,
    AircraftConfig,
    ConfigurationError,
    Position,
    RadarConfig,
    _finite,
)

logger = logging.getLogger(__name__)


def _number(
    section: Dict[str, Any],
    key: str,
    default: float,
    low: Optional[float] = None,
    high: Optional[float] = None,
    low_inclusive: bool = True,
) -> float:
    """Read a finite number, with an optional lower bound and exclusive upper bound."""
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a number, got {value!r}", field=key)
    value = _finite(key, value)
    if low is not None and (value < low or (value == low and not low_inclusive)):
        bound = ">=" if low_inclusive else ">"
        raise ConfigurationError(f"{key} must be {bound} {low}, got {value}", field=key)
    if high is not None and value >= high:
        raise ConfigurationError(f"{key} must be < {high}, got {value}", field=key)
    return value


def _flag(section: Dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}", field=key)
    return value


@dataclass
class ScenarioConfig:
    """Complete scenario configuration."""

    name: str
    description: str
    aircraft: AircraftConfig
    radar: RadarConfig
    duration_s: float = 10.0
    dt_s: float = PULSE_ADVANCE_PERIOD_S
    detection_threshold: float = DETECTION_THRESHOLD
    stealth_mode: bool = False


class ScenarioLoader:
    """
    Loads scenarios from YAML files.

    Usage:
        loader = ScenarioLoader('scenarios/stealth_ingress.yaml')
        config = loader.get_config()
        session = loader.create_session()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize scenario loader.

        Args:
            filepath: Path to YAML scenario file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[ScenarioConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load scenario from YAML file.

        Args:
            filepath: Path to YAML scenario file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ConfigurationError: If a section is malformed or a value is invalid
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Scenario file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Scenario root must be a mapping, got {type(data).__name__}", field="scenario"
            )

        self.data = data
        self._config = self._parse_config()
        logger.info("Loaded scenario '%s' from %s", self._config.name, filepath)
        return True

    def load_string(self, text: str) -> ScenarioConfig:
        """Parse a scenario from a YAML string."""
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Scenario root must be a mapping, got {type(data).__name__}", field="scenario"
            )
        self.data = data
        self._config = self._parse_config()
        return self._config

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"'{name}' section must be a mapping", field=name)
        return section

    def _parse_config(self) -> ScenarioConfig:
        """Parse loaded YAML data into ScenarioConfig."""
        scenario = self._section("scenario")
        sim = self._section("simulation")

        return ScenarioConfig(
            name=str(scenario.get("name", "Unnamed Scenario")),
            description=str(scenario.get("description", "")),
            aircraft=self._parse_aircraft(),
            radar=self._parse_radar(),
            duration_s=_number(sim, "duration_s", 10.0, low=0.0),
            dt_s=_number(sim, "dt_s", PULSE_ADVANCE_PERIOD_S, low=0.0, low_inclusive=False),
            detection_threshold=_number(
                sim, "detection_threshold", DETECTION_THRESHOLD, low=0.0, high=1.0
            ),
            stealth_mode=_flag(sim, "stealth_mode", False),
        )

    def _parse_aircraft(self) -> AircraftConfig:
        """Parse aircraft configuration."""
        aircraft = self._section("aircraft")
        pos = aircraft.get("position") or {}
        if not isinstance(pos, dict):
            raise ConfigurationError("'aircraft.position' must be a mapping", field="position")
        default_pos = DEFAULT_AIRCRAFT.position

        return AircraftConfig(
            base_cross_section=aircraft.get(
                "base_cross_section_m2", DEFAULT_AIRCRAFT.base_cross_section
            ),
            absorption_coefficient=aircraft.get(
                "absorption_coefficient", DEFAULT_AIRCRAFT.absorption_coefficient
            ),
            geometry=aircraft.get("geometry", DEFAULT_AIRCRAFT.geometry.value),
            angle_to_radar_deg=aircraft.get(
                "angle_to_radar_deg", DEFAULT_AIRCRAFT.angle_to_radar_deg
            ),
            position=Position(
                x=pos.get("x_m", default_pos.x),
                y=pos.get("y_m", default_pos.y),
                z=pos.get("z_m", default_pos.z),
            ),
        )

    def _parse_radar(self) -> RadarConfig:
        """Parse radar configuration."""
        radar = self._section("radar")

        return RadarConfig(
            frequency_ghz=radar.get("frequency_ghz", DEFAULT_RADAR.frequency_ghz),
            power_kw=radar.get("power_kw", DEFAULT_RADAR.power_kw),
            range_km=radar.get("range_km", DEFAULT_RADAR.range_km),
            sensitivity_dbm=radar.get("sensitivity_dbm", DEFAULT_RADAR.sensitivity_dbm),
        )

    def get_config(self) -> Optional[ScenarioConfig]:
        """
        Get parsed scenario configuration.

        Returns:
            ScenarioConfig or None if not loaded
        """
        return self._config

    def get_scenario_name(self) -> str:
        """Get scenario name."""
        if self._config:
            return self._config.name
        return "Unknown"

    def create_session(self):
        """
        Create a SimulationSession from the loaded scenario.

        Returns:
            Configured SimulationSession instance

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")

        # Import here to avoid circular dependencies
        from stealthsim.simulation.session import SimulationSession

        session = SimulationSession(
            aircraft=self._config.aircraft,
            radar=self._config.radar,
            detection_threshold=self._config.detection_threshold,
        )
        if self._config.stealth_mode:
            session.enter_stealth()

        return session

    def create_run_config(self):
        """
        Create a headless RunConfig from the loaded scenario.

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")

        from stealthsim.simulation.headless_runner import RunConfig

        aircraft = self._config.aircraft
        radar = self._config.radar
        return RunConfig(
            base_cross_section=aircraft.base_cross_section,
            absorption_coefficient=aircraft.absorption_coefficient,
            geometry=aircraft.geometry.value,
            angle_to_radar_deg=aircraft.angle_to_radar_deg,
            position=(aircraft.position.x, aircraft.position.y, aircraft.position.z),
            frequency_ghz=radar.frequency_ghz,
            power_kw=radar.power_kw,
            range_km=radar.range_km,
            sensitivity_dbm=radar.sensitivity_dbm,
            duration_s=self._config.duration_s,
            dt_s=self._config.dt_s,
            detection_threshold=self._config.detection_threshold,
            stealth_mode=self._config.stealth_mode,
        )


def load_scenario(filepath: str) -> ScenarioConfig:
    """
    Convenience function to load a scenario file.

    Args:
        filepath: Path to YAML scenario file

    Returns:
        ScenarioConfig instance
    """
    loader = ScenarioLoader(filepath)
    return loader.get_config()
