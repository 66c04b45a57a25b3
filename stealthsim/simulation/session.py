"""
Simulation Session

Caller-owned holder of the aircraft/radar configuration, the latest detection
result and the simulation clock.

Every configuration write runs, in order and before returning:
    1. clamp to the control limits
    2. validation (rejected writes leave the session untouched)
    3. detection recomputation
    4. stealth invariant check

so a snapshot never shows a stealth flag inconsistent with the configuration
it displays.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from stealthsim.physics.constants import DETECTION_THRESHOLD
from stealthsim.physics.parameters import (
    DEFAULT_AIRCRAFT,
    DEFAULT_LIMITS,
    DEFAULT_RADAR,
    AircraftConfig,
    ParameterLimits,
    RadarConfig,
)
from stealthsim.physics.radar_equation import RadarResult, evaluate, propagation_time

from .clock import SimulationClock
from .pulses import Pulse, PulsePhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer needs for one frame."""

    time: float
    aircraft: AircraftConfig
    radar: RadarConfig
    result: RadarResult
    pulses: Tuple[Pulse, ...]
    pulse_phases: Tuple[PulsePhase, ...]
    stealth_active: bool
    propagation_time_s: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for UI / JSON export."""
        return {
            "time": self.time,
            "aircraft": self.aircraft.to_dict(),
            "radar": self.radar.to_dict(),
            "result": self.result.to_dict(),
            "pulses": [
                dict(p.to_dict(), phase=phase.value)
                for p, phase in zip(self.pulses, self.pulse_phases)
            ],
            "stealth_active": self.stealth_active,
            "propagation_time_s": self.propagation_time_s,
        }


class SimulationSession:
    """
    One operator session of the stealth radar simulator.

    Usage:
        session = SimulationSession()
        session.update_aircraft(angle_to_radar_deg=45)
        frame = session.tick(0.05)
    """

    def __init__(
        self,
        aircraft: Optional[AircraftConfig] = None,
        radar: Optional[RadarConfig] = None,
        clock: Optional[SimulationClock] = None,
        detection_threshold: float = DETECTION_THRESHOLD,
        limits: ParameterLimits = DEFAULT_LIMITS,
    ):
        """
        Initialize session.

        Args:
            aircraft: Initial aircraft configuration (default: page defaults)
            radar: Initial radar configuration (default: page defaults)
            clock: Simulation clock (default: standard pulse cadence)
            detection_threshold: Pd above which the aircraft counts as detected
            limits: Control ranges applied to every update
        """
        self.clock = clock or SimulationClock()
        self.detection_threshold = detection_threshold
        self.limits = limits

        self._apply(aircraft or DEFAULT_AIRCRAFT, radar or DEFAULT_RADAR)

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def aircraft(self) -> AircraftConfig:
        return self._aircraft

    @property
    def radar(self) -> RadarConfig:
        return self._radar

    @property
    def result(self) -> RadarResult:
        """Detection result for the current configuration."""
        return self._result

    def update_aircraft(self, **changes: Any) -> RadarResult:
        """
        Apply a partial aircraft update (e.g. a slider move).

        Raises:
            ConfigurationError: If the update is invalid; state is unchanged
        """
        aircraft = self._aircraft.with_changes(**self.limits.clamp_aircraft(changes))
        self._apply(aircraft, self._radar)
        return self._result

    def update_radar(self, **changes: Any) -> RadarResult:
        """
        Apply a partial radar update.

        Raises:
            ConfigurationError: If the update is invalid; state is unchanged
        """
        radar = self._radar.with_changes(**self.limits.clamp_radar(changes))
        self._apply(self._aircraft, radar)
        return self._result

    def set_aircraft(self, aircraft: AircraftConfig) -> RadarResult:
        """Replace the whole aircraft configuration (no clamping)."""
        self._apply(aircraft, self._radar)
        return self._result

    def _apply(self, aircraft: AircraftConfig, radar: RadarConfig) -> None:
        result = evaluate(aircraft, radar, self.detection_threshold)
        self._aircraft = aircraft
        self._radar = radar
        self._result = result
        self.clock.enforce_stealth_invariant(aircraft)

    # =========================================================================
    # STEALTH MODE
    # =========================================================================

    @property
    def stealth_active(self) -> bool:
        return self.clock.stealth_active

    @property
    def stealth_override_warning(self) -> bool:
        """True when a manual parameter change would break stealth mode."""
        return self.clock.stealth_active

    def enter_stealth(self) -> AircraftConfig:
        """Apply the canonical stealth configuration at the current position."""
        aircraft = self.clock.enter_stealth(self._aircraft.position)
        self._apply(aircraft, self._radar)
        return aircraft

    def exit_stealth(self) -> None:
        self.clock.exit_stealth()

    def toggle_stealth(self) -> bool:
        """Stealth button: enter if inactive, exit otherwise. Returns the new flag."""
        if self.clock.stealth_active:
            self.exit_stealth()
        else:
            self.enter_stealth()
        return self.clock.stealth_active

    # =========================================================================
    # TIME
    # =========================================================================

    def tick(self, delta_time: float) -> SessionSnapshot:
        """Advance the pulse animation and return the new frame."""
        self.clock.tick(delta_time, aircraft=self._aircraft)
        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        clock_state = self.clock.snapshot()
        return SessionSnapshot(
            time=clock_state.time,
            aircraft=self._aircraft,
            radar=self._radar,
            result=self._result,
            pulses=clock_state.pulses,
            pulse_phases=tuple(p.phase(clock_state.stealth_active) for p in clock_state.pulses),
            stealth_active=clock_state.stealth_active,
            propagation_time_s=propagation_time(self._result.distance_m),
        )

    def reset(self) -> None:
        """Restore default configuration and clear the clock."""
        self.clock.reset()
        self._apply(DEFAULT_AIRCRAFT, DEFAULT_RADAR)
        logger.info("Session reset to defaults")
