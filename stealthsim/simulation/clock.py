"""
Simulation Clock

Discrete-time pulse lifecycle and stealth-mode state machine.

Two periodic drivers run on simulated time:
    - Spawn: emits one new pulse every spawn period
    - Advance: moves every live pulse forward every advance period and
      retires pulses that completed their round trip or left the display

The clock assumes no timer or event loop. The host calls tick(dt) at any
cadence; the output depends only on the sequence of dt values.

Stealth states:
    NORMAL  --enter_stealth()------------------------>  STEALTH
    STEALTH --exit_stealth() / configuration drift--->  NORMAL
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from stealthsim.physics.constants import (
    MAX_DISPLAY_RADIUS,
    PULSE_ADVANCE_PERIOD_S,
    PULSE_DISTANCE_STEP,
    PULSE_PROGRESS_STEP,
    PULSE_SPAWN_PERIOD_S,
)
from stealthsim.physics.parameters import (
    AircraftConfig,
    ConfigurationError,
    PositionLike,
    is_optimal_stealth_config,
    optimal_stealth_config,
)

from .pulses import Pulse, PulsePhase

logger = logging.getLogger(__name__)

# Events due within this tolerance of the end of a tick fire in that tick
_TIME_EPSILON = 1e-9
_TIME_REL_TOLERANCE = 1e-12


def _is_due(event_time: float, end_time: float) -> bool:
    return event_time <= end_time or math.isclose(
        event_time, end_time, rel_tol=_TIME_REL_TOLERANCE, abs_tol=_TIME_EPSILON
    )


@dataclass(frozen=True)
class ClockSnapshot:
    """
    Read-only view of the clock after a tick.

    Attributes:
        time: Simulation time [s]
        pulses: Live pulses, oldest first
        stealth_active: Stealth flag
    """

    time: float
    pulses: Tuple[Pulse, ...]
    stealth_active: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for UI."""
        return {
            "time": self.time,
            "pulses": [p.to_dict() for p in self.pulses],
            "stealth_active": self.stealth_active,
        }


class SimulationClock:
    """
    Owner of the live pulse set and the stealth flag.

    Callers submit configuration and read snapshots; they never touch the
    pulse list directly.
    """

    def __init__(
        self,
        spawn_period: float = PULSE_SPAWN_PERIOD_S,
        advance_period: float = PULSE_ADVANCE_PERIOD_S,
        progress_step: float = PULSE_PROGRESS_STEP,
        distance_step: float = PULSE_DISTANCE_STEP,
        max_display_radius: float = MAX_DISPLAY_RADIUS,
    ):
        """
        Initialize the clock.

        Args:
            spawn_period: Time between pulse emissions [s]
            advance_period: Time between advance steps [s]
            progress_step: Round-trip fraction added per advance step
            distance_step: Scene distance added per advance step
            max_display_radius: Pulses at or beyond this range are retired
        """
        for name, value in (
            ("spawn_period", spawn_period),
            ("advance_period", advance_period),
            ("progress_step", progress_step),
            ("distance_step", distance_step),
            ("max_display_radius", max_display_radius),
        ):
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {value}", field=name)

        self.spawn_period = float(spawn_period)
        self.advance_period = float(advance_period)
        self.progress_step = float(progress_step)
        self.distance_step = float(distance_step)
        self.max_display_radius = float(max_display_radius)

        self.reset()

    def reset(self) -> None:
        """Reset clock to initial state (no pulses, normal mode)."""
        self._elapsed = 0.0
        self._elapsed_error = 0.0
        self._pulses: List[Pulse] = []
        self._stealth_active = False
        self._spawn_count = 0
        self._advance_count = 0
        self.pulses_retired = 0

    # =========================================================================
    # PULSE LIFECYCLE
    # =========================================================================

    def tick(self, delta_time: float, aircraft: Optional[AircraftConfig] = None) -> ClockSnapshot:
        """
        Advance simulated time, running every spawn/advance event that falls due.

        Events fire at exact multiples of their period. When both are due at
        the same instant, advance runs first so a new pulse appears with
        progress 0.

        Args:
            delta_time: Elapsed time [s] (>= 0)
            aircraft: Current aircraft configuration, checked against the
                stealth invariant before advancing

        Returns:
            ClockSnapshot after the tick
        """
        if not math.isfinite(delta_time) or delta_time < 0:
            raise ConfigurationError(
                f"delta_time must be finite and >= 0, got {delta_time}", field="delta_time"
            )

        if aircraft is not None:
            self.enforce_stealth_invariant(aircraft)

        self._accumulate(delta_time)
        end_time = self.current_time

        while True:
            next_advance = (self._advance_count + 1) * self.advance_period
            next_spawn = (self._spawn_count + 1) * self.spawn_period
            event_time = min(next_advance, next_spawn)

            if not _is_due(event_time, end_time):
                break

            if _is_due(next_advance, event_time):
                self._advance()
            if _is_due(next_spawn, event_time):
                self._spawn(event_time)

        return self.snapshot()

    def run(self, duration_s: float, dt: float = PULSE_ADVANCE_PERIOD_S) -> ClockSnapshot:
        """
        Run the clock for a duration with a fixed time step.

        Args:
            duration_s: Simulation duration [s]
            dt: Time step [s]

        Returns:
            Final snapshot
        """
        if not math.isfinite(dt) or dt <= 0:
            raise ConfigurationError(f"dt must be finite and > 0, got {dt}", field="dt")
        if not math.isfinite(duration_s) or duration_s < 0:
            raise ConfigurationError(
                f"duration_s must be finite and >= 0, got {duration_s}", field="duration_s"
            )

        n_steps = int(round(duration_s / dt))
        snapshot = self.snapshot()
        for _ in range(n_steps):
            snapshot = self.tick(dt)
        return snapshot

    def _accumulate(self, delta_time: float) -> None:
        # Neumaier summation keeps elapsed time on the k × period event grid
        total = self._elapsed + delta_time
        if abs(self._elapsed) >= abs(delta_time):
            self._elapsed_error += (self._elapsed - total) + delta_time
        else:
            self._elapsed_error += (delta_time - total) + self._elapsed
        self._elapsed = total

    @property
    def current_time(self) -> float:
        """Simulation time [s]."""
        return self._elapsed + self._elapsed_error

    def _spawn(self, event_time: float) -> None:
        self._spawn_count += 1
        pulse = Pulse(pulse_id=self._spawn_count, spawn_time=event_time)
        self._pulses.append(pulse)
        logger.debug("Pulse %d emitted at t=%.3f s", pulse.pulse_id, event_time)

    def _advance(self) -> None:
        self._advance_count += 1

        active = []
        for pulse in self._pulses:
            pulse = pulse.advanced(self.progress_step, self.distance_step)
            if pulse.is_expired(self.max_display_radius):
                self.pulses_retired += 1
                logger.debug("Pulse %d retired", pulse.pulse_id)
            else:
                active.append(pulse)
        self._pulses = active

    @property
    def pulses(self) -> Tuple[Pulse, ...]:
        """Live pulses, oldest first."""
        return tuple(self._pulses)

    @property
    def pulses_emitted(self) -> int:
        """Total pulses spawned since reset."""
        return self._spawn_count

    def pulse_phase(self, pulse: Pulse) -> PulsePhase:
        """Classify a pulse under the current stealth mode."""
        return pulse.phase(self._stealth_active)

    def snapshot(self) -> ClockSnapshot:
        """Read-only view of the current state."""
        return ClockSnapshot(
            time=self.current_time,
            pulses=tuple(self._pulses),
            stealth_active=self._stealth_active,
        )

    # =========================================================================
    # STEALTH MODE
    # =========================================================================

    @property
    def stealth_active(self) -> bool:
        """Stealth flag."""
        return self._stealth_active

    def enter_stealth(self, position: PositionLike) -> AircraftConfig:
        """
        Switch to stealth mode.

        Args:
            position: Current aircraft position (preserved)

        Returns:
            Canonical stealth configuration at that position, which the caller
            must adopt as its aircraft configuration
        """
        config = optimal_stealth_config(position)
        if not self._stealth_active:
            logger.info("Stealth mode activated")
        self._stealth_active = True
        return config

    def exit_stealth(self) -> None:
        """Leave stealth mode without touching the configuration."""
        if self._stealth_active:
            logger.info("Stealth mode deactivated")
        self._stealth_active = False

    def enforce_stealth_invariant(self, aircraft: AircraftConfig) -> bool:
        """
        Drop stealth mode if the aircraft no longer matches the canonical configuration.

        Args:
            aircraft: Current aircraft configuration

        Returns:
            Stealth flag after the check
        """
        if self._stealth_active and not is_optimal_stealth_config(aircraft):
            self._stealth_active = False
            logger.info("Stealth mode deactivated: configuration no longer canonical")
        return self._stealth_active
