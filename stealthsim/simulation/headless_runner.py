"""
Headless Simulation Runner

Runs a simulator session without any renderer, for scripted checks and
batch processing.

Features:
    - Fixed time-step execution of the pulse clock
    - Optional constant-velocity aircraft motion with per-step re-evaluation
    - Detection and pulse statistics

Usage:
    config = RunConfig(geometry="fighter", angle_to_radar_deg=90)
    runner = HeadlessRunner(config)
    result = runner.run()
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from stealthsim.physics.constants import DETECTION_THRESHOLD, PULSE_ADVANCE_PERIOD_S
from stealthsim.physics.parameters import (
    DEFAULT_AIRCRAFT,
    DEFAULT_RADAR,
    AircraftConfig,
    ConfigurationError,
    Position,
    RadarConfig,
)
from stealthsim.physics.radar_equation import RadarResult

from .session import SimulationSession


@dataclass
class RunConfig:
    """
    Configuration for a headless run.

    Attributes:
        base_cross_section: Baseline RCS [m²]
        absorption_coefficient: Absorbed fraction [0, 1)
        geometry: "stealth", "fighter" or "conventional"
        angle_to_radar_deg: Aspect angle [deg]
        position: Initial (x, y, z) [m]
        velocity_mps: Constant aircraft velocity (vx, vy, vz) [m/s]
        frequency_ghz: Radar frequency [GHz]
        power_kw: Transmit power [kW]
        range_km: Instrumented range [km]
        sensitivity_dbm: Receiver sensitivity [dBm]
        duration_s: Simulated duration [s]
        dt_s: Time step [s]
        detection_threshold: Pd detection threshold
        stealth_mode: Start with the canonical stealth configuration applied
    """

    # Aircraft
    base_cross_section: float = DEFAULT_AIRCRAFT.base_cross_section
    absorption_coefficient: float = DEFAULT_AIRCRAFT.absorption_coefficient
    geometry: str = DEFAULT_AIRCRAFT.geometry.value
    angle_to_radar_deg: float = DEFAULT_AIRCRAFT.angle_to_radar_deg
    position: Tuple[float, float, float] = (10.0, 8.0, 15.0)
    velocity_mps: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    # Radar
    frequency_ghz: float = DEFAULT_RADAR.frequency_ghz
    power_kw: float = DEFAULT_RADAR.power_kw
    range_km: float = DEFAULT_RADAR.range_km
    sensitivity_dbm: float = DEFAULT_RADAR.sensitivity_dbm

    # Simulation
    duration_s: float = 10.0
    dt_s: float = PULSE_ADVANCE_PERIOD_S
    detection_threshold: float = DETECTION_THRESHOLD
    stealth_mode: bool = False

    def to_aircraft(self) -> AircraftConfig:
        """Convert to AircraftConfig (validated)."""
        return AircraftConfig(
            base_cross_section=self.base_cross_section,
            absorption_coefficient=self.absorption_coefficient,
            geometry=self.geometry,
            angle_to_radar_deg=self.angle_to_radar_deg,
            position=Position.coerce(self.position),
        )

    def to_radar(self) -> RadarConfig:
        """Convert to RadarConfig (validated)."""
        return RadarConfig(
            frequency_ghz=self.frequency_ghz,
            power_kw=self.power_kw,
            range_km=self.range_km,
            sensitivity_dbm=self.sensitivity_dbm,
        )


@dataclass
class RunResult:
    """
    Results from a headless run.

    Attributes:
        config: Original configuration
        n_steps: Time steps executed
        n_pulses_emitted: Pulses spawned
        n_pulses_retired: Pulses that completed or left the display
        peak_live_pulses: Largest number of simultaneously live pulses
        n_detected_steps: Steps on which the aircraft was detected
        detection_ratio: n_detected_steps / n_steps
        mean_pd: Average detection probability
        min_signal_dbm: Weakest received signal
        max_signal_dbm: Strongest received signal
        final_result: Detection result at the end of the run
        stealth_active: Stealth flag at the end of the run
        runtime_s: Wall-clock execution time
    """

    config: RunConfig
    n_steps: int = 0
    n_pulses_emitted: int = 0
    n_pulses_retired: int = 0
    peak_live_pulses: int = 0
    n_detected_steps: int = 0
    detection_ratio: float = 0.0
    mean_pd: float = 0.0
    min_signal_dbm: float = 0.0
    max_signal_dbm: float = 0.0
    final_result: Optional[RadarResult] = None
    stealth_active: bool = False
    runtime_s: float = 0.0
    pd_history: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for CSV/JSON export."""
        return {
            "geometry": self.config.geometry,
            "angle_deg": self.config.angle_to_radar_deg,
            "rcs_m2": self.config.base_cross_section,
            "absorption": self.config.absorption_coefficient,
            "frequency_ghz": self.config.frequency_ghz,
            "power_kw": self.config.power_kw,
            "n_steps": self.n_steps,
            "n_pulses_emitted": self.n_pulses_emitted,
            "n_pulses_retired": self.n_pulses_retired,
            "peak_live_pulses": self.peak_live_pulses,
            "n_detected_steps": self.n_detected_steps,
            "detection_ratio": self.detection_ratio,
            "mean_pd": self.mean_pd,
            "min_signal_dbm": self.min_signal_dbm,
            "max_signal_dbm": self.max_signal_dbm,
            "stealth_active": self.stealth_active,
            "runtime_s": self.runtime_s,
            "threshold": self.config.detection_threshold,
        }


class HeadlessRunner:
    """
    Headless simulation runner.

    Executes a session without GUI, collecting detection and pulse
    statistics.
    """

    def __init__(self, config: RunConfig):
        """
        Initialize headless runner.

        Args:
            config: Run configuration

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config.dt_s <= 0 or config.duration_s < 0:
            raise ConfigurationError(
                f"dt_s must be > 0 and duration_s >= 0, got {config.dt_s}, {config.duration_s}",
                field="dt_s",
            )

        self.config = config
        self.session = SimulationSession(
            aircraft=config.to_aircraft(),
            radar=config.to_radar(),
            detection_threshold=config.detection_threshold,
        )
        if config.stealth_mode:
            self.session.enter_stealth()

        self._velocity = np.asarray(config.velocity_mps, dtype=np.float64)

        # Results accumulators
        self._pd_values: List[float] = []
        self._signal_values: List[float] = []
        self._detections: List[bool] = []
        self._peak_live = 0

    def run(self) -> RunResult:
        """
        Execute the run.

        Returns:
            RunResult with detection and pulse statistics
        """
        start_time = time.perf_counter()

        n_steps = int(round(self.config.duration_s / self.config.dt_s))
        moving = bool(np.any(self._velocity != 0.0))

        for _ in range(n_steps):
            if moving:
                # Scripted motion is not bound by the operator control ranges
                aircraft = self.session.aircraft
                position = aircraft.position.as_array() + self._velocity * self.config.dt_s
                self.session.set_aircraft(aircraft.with_changes(position=position))

            frame = self.session.tick(self.config.dt_s)

            self._peak_live = max(self._peak_live, len(frame.pulses))
            self._pd_values.append(frame.result.detection_probability)
            self._signal_values.append(frame.result.signal_strength_dbm)
            self._detections.append(frame.result.is_detected)

        runtime = time.perf_counter() - start_time

        return self._build_result(n_steps, runtime)

    def _build_result(self, n_steps: int, runtime: float) -> RunResult:
        """Build run result from accumulated data."""
        n_detected = sum(self._detections)
        pd_array = np.array(self._pd_values) if self._pd_values else np.array([0.0])
        signal_array = (
            np.array(self._signal_values)
            if self._signal_values
            else np.array([self.session.result.signal_strength_dbm])
        )

        return RunResult(
            config=self.config,
            n_steps=n_steps,
            n_pulses_emitted=self.session.clock.pulses_emitted,
            n_pulses_retired=self.session.clock.pulses_retired,
            peak_live_pulses=self._peak_live,
            n_detected_steps=n_detected,
            detection_ratio=n_detected / n_steps if n_steps > 0 else 0.0,
            mean_pd=float(np.mean(pd_array)),
            min_signal_dbm=float(np.min(signal_array)),
            max_signal_dbm=float(np.max(signal_array)),
            final_result=self.session.result,
            stealth_active=self.session.stealth_active,
            runtime_s=runtime,
            pd_history=self._pd_values[:100],  # Keep first 100 for debugging
        )


def run_single_simulation(config: RunConfig) -> RunResult:
    """
    Convenience function for one-off runs.

    Args:
        config: Run configuration

    Returns:
        Run result
    """
    runner = HeadlessRunner(config)
    return runner.run()
