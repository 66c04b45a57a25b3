"""
StealthSim I/O Package

YAML scenario import/export.
"""

from .exporter import export_scenario_to_yaml, get_default_filename
from .scenario_loader import ScenarioConfig, ScenarioLoader, load_scenario

__all__ = [
    "ScenarioLoader",
    "ScenarioConfig",
    "load_scenario",
    "export_scenario_to_yaml",
    "get_default_filename",
]
