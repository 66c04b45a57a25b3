"""
Scenario Exporter

Serializes the current session configuration to the YAML scenario format,
so operators can save and share a setup.
"""

import logging
from datetime import datetime
from typing import Any, Dict

import yaml

from stealthsim.physics.constants import PULSE_ADVANCE_PERIOD_S

logger = logging.getLogger(__name__)


def export_scenario_to_yaml(
    session,
    filepath: str,
    scenario_name: str = "Custom Scenario",
    description: str = "",
    duration_s: float = 10.0,
    dt_s: float = PULSE_ADVANCE_PERIOD_S,
) -> bool:
    """
    Export current session state to a YAML file.

    Args:
        session: SimulationSession instance
        filepath: Output file path
        scenario_name: Human-readable scenario name
        description: Scenario description
        duration_s: Duration stored for headless replays [s]
        dt_s: Time step stored for headless replays [s]

    Returns:
        True if export successful, False otherwise
    """
    scenario_data = {
        "scenario": {
            "name": scenario_name,
            "description": description
            or f"Exported on {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "version": "1.0",
        },
        "aircraft": _extract_aircraft(session),
        "radar": _extract_radar(session),
        "simulation": _extract_simulation_params(session, duration_s, dt_s),
    }

    try:
        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                scenario_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )
    except OSError as e:
        logger.error("Failed to export scenario to %s: %s", filepath, e)
        return False

    logger.info("Scenario saved to %s", filepath)
    return True


def _extract_aircraft(session) -> Dict[str, Any]:
    """Extract aircraft configuration from session."""
    aircraft = session.aircraft

    return {
        "base_cross_section_m2": float(aircraft.base_cross_section),
        "absorption_coefficient": float(aircraft.absorption_coefficient),
        "geometry": aircraft.geometry.value,
        "angle_to_radar_deg": float(aircraft.angle_to_radar_deg),
        "position": {
            "x_m": float(aircraft.position.x),
            "y_m": float(aircraft.position.y),
            "z_m": float(aircraft.position.z),
        },
    }


def _extract_radar(session) -> Dict[str, Any]:
    """Extract radar configuration from session."""
    radar = session.radar

    return {
        "frequency_ghz": float(radar.frequency_ghz),
        "power_kw": float(radar.power_kw),
        "range_km": float(radar.range_km),
        "sensitivity_dbm": float(radar.sensitivity_dbm),
    }


def _extract_simulation_params(session, duration_s: float, dt_s: float) -> Dict[str, Any]:
    """Extract simulation parameters from session."""
    return {
        "duration_s": float(duration_s),
        "dt_s": float(dt_s),
        "detection_threshold": float(session.detection_threshold),
        "stealth_mode": bool(session.stealth_active),
    }


def get_default_filename() -> str:
    """Generate default filename with timestamp."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"scenario_{timestamp}.yaml"
