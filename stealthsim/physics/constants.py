"""
Physical and Policy Constants for the Detection Engine

All physical constants are in SI units. The speed of light is the rounded
value used throughout the detection engine; it is kept rounded so results
stay reproducible against the reference tables.

References:
    - Skolnik, "Radar Handbook", 3rd Ed., Chapter 2
    - IEEE Std 686-2008: Standard Radar Definitions
"""

from typing import Final

# =============================================================================
# FUNDAMENTAL CONSTANTS
# =============================================================================

SPEED_OF_LIGHT: Final[float] = 3.0e8
"""Speed of light [m/s] - rounded engine value (not the exact SI 299 792 458)"""

RADAR_CONSTANT_4PI_CUBED: Final[float] = (4.0 * 3.141592653589793) ** 3
"""(4π)³ constant used in radar equation denominator"""

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

GHZ_TO_HZ: Final[float] = 1.0e9
KW_TO_W: Final[float] = 1.0e3
KM_TO_M: Final[float] = 1.0e3
W_TO_MW: Final[float] = 1.0e3
"""Watts to milliwatts, for dBm conversion"""

# =============================================================================
# DETECTION ENGINE POLICY
# =============================================================================

SIGNAL_FLOOR_DBM: Final[float] = -200.0
"""Signal strength reported when the target is outside instrumented range [dBm]"""

DETECTION_THRESHOLD: Final[float] = 0.3
"""Detection probability above which the target counts as detected.

Stealth succeeds only while Pd stays at or below 30%.
"""

SNR_SATURATION_DB: Final[float] = 10.0
"""SNR above which detection is certain [dB]"""

SNR_FLOOR_DB: Final[float] = -10.0
"""SNR at or below which detection is impossible [dB]"""

# =============================================================================
# CANONICAL STEALTH CONFIGURATION
# =============================================================================

OPTIMAL_STEALTH_CROSS_SECTION: Final[float] = 0.001
"""Minimum material/shape baseline RCS [m²]"""

OPTIMAL_STEALTH_ABSORPTION: Final[float] = 0.95
"""Maximum allowed absorption coefficient (95%)"""

OPTIMAL_STEALTH_ANGLE_DEG: Final[float] = 0.0
"""Nose-on aspect, lowest RCS for faceted shaping [deg]"""

# =============================================================================
# PULSE ANIMATION DEFAULTS
# =============================================================================

PULSE_SPAWN_PERIOD_S: Final[float] = 1.0
PULSE_ADVANCE_PERIOD_S: Final[float] = 0.05
PULSE_PROGRESS_STEP: Final[float] = 0.02
PULSE_DISTANCE_STEP: Final[float] = 1.0
MAX_DISPLAY_RADIUS: Final[float] = 40.0
"""Scene radius beyond which a pulse is no longer drawn [scene units]"""
