"""
Radar Pulses

One simulated outbound radar emission, tracked for animation. Pulses are
immutable; the clock replaces each live pulse with an advanced copy on every
advance step, so snapshots handed to renderers can never be mutated.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


class PulsePhase(Enum):
    """
    Where a pulse is on its round trip.

    The first half of a pulse's life is the outbound leg. On the second half
    the wavefront either reflects back to the radar or, with stealth shaping
    active, is deflected around the airframe and never returns.
    """

    OUTBOUND = "outbound"
    RETURNING = "returning"
    DEFLECTED = "deflected"


# Fraction of the round trip at which a pulse reaches the target
TARGET_REACHED_PROGRESS = 0.5


@dataclass(frozen=True)
class Pulse:
    """
    Radar pulse state.

    Attributes:
        pulse_id: Unique, strictly increasing per clock
        progress: Fraction of the round trip elapsed [0, 1)
        range_traveled: Distance covered [scene units]
        spawn_time: Simulation time when emitted [s]
    """

    pulse_id: int
    progress: float = 0.0
    range_traveled: float = 0.0
    spawn_time: float = 0.0

    def advanced(self, progress_step: float, distance_step: float) -> "Pulse":
        """Return this pulse moved forward by one advance step."""
        return replace(
            self,
            progress=self.progress + progress_step,
            range_traveled=self.range_traveled + distance_step,
        )

    def is_expired(self, max_display_radius: float) -> bool:
        """Check if the round trip is complete or the pulse left the display."""
        return self.progress >= 1.0 or self.range_traveled >= max_display_radius

    def phase(self, stealth_active: bool) -> PulsePhase:
        """Classify the pulse for rendering."""
        if self.progress < TARGET_REACHED_PROGRESS:
            return PulsePhase.OUTBOUND
        return PulsePhase.DEFLECTED if stealth_active else PulsePhase.RETURNING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for UI."""
        return {
            "id": self.pulse_id,
            "progress": self.progress,
            "range_traveled": self.range_traveled,
            "spawn_time": self.spawn_time,
        }
