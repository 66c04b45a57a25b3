"""
StealthSim Simulation Package

Pulse lifecycle clock, operator session, headless runner and sweeps.
"""

from .clock import ClockSnapshot, SimulationClock
from .headless_runner import HeadlessRunner, RunConfig, RunResult, run_single_simulation
from .pulses import Pulse, PulsePhase
from .scenario_generator import ParameterSpace, ScenarioGenerator, SweepRow
from .session import SessionSnapshot, SimulationSession

__all__ = [
    "Pulse",
    "PulsePhase",
    "SimulationClock",
    "ClockSnapshot",
    "SimulationSession",
    "SessionSnapshot",
    "HeadlessRunner",
    "RunConfig",
    "RunResult",
    "run_single_simulation",
    "ScenarioGenerator",
    "ParameterSpace",
    "SweepRow",
]
