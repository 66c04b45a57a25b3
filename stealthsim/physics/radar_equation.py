"""
Radar Equation and Detection Verdict

Monostatic radar equation with unity antenna gain, a piecewise-linear
detection probability model and the range gate.

    Pr = (Pt × λ² × σ) / ((4π)³ × R⁴)

All functions are pure: identical inputs yield bit-identical results.

References:
    - Skolnik, "Radar Handbook", 3rd Ed., McGraw-Hill, 2008, Eq. 2.1
    - IEEE Std 686-2008, "IEEE Standard Radar Definitions"
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

import numba
import numpy as np

from .constants import (
    DETECTION_THRESHOLD,
    GHZ_TO_HZ,
    KM_TO_M,
    KW_TO_W,
    RADAR_CONSTANT_4PI_CUBED,
    SIGNAL_FLOOR_DBM,
    SNR_FLOOR_DB,
    SNR_SATURATION_DB,
    SPEED_OF_LIGHT,
    W_TO_MW,
)
from .parameters import AircraftConfig, ConfigurationError, RadarConfig
from .rcs import effective_cross_section


@dataclass(frozen=True)
class RadarResult:
    """
    Detection verdict for one aircraft/radar configuration.

    Attributes:
        distance_m: Slant range from radar to aircraft [m]
        bearing_deg: Bearing, 0° along +z increasing toward +x [deg]
        effective_rcs_m2: RCS after absorption [m²] (0 outside range)
        signal_strength_dbm: Received power [dBm] (floor outside range)
        detection_probability: Pd in [0, 1]
        is_detected: Pd above the detection threshold
    """

    distance_m: float
    bearing_deg: float
    effective_rcs_m2: float
    signal_strength_dbm: float
    detection_probability: float
    is_detected: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return asdict(self)


# =============================================================================
# NUMBA JIT-COMPILED FUNCTIONS
# =============================================================================


@numba.jit(nopython=True, cache=True)
def _calculate_received_power_jit(
    power_tx: float, wavelength: float, rcs: float, range_m: float
) -> float:
    """
    JIT-compiled radar equation, unity gain, no losses (Eq. 2.1, Skolnik 3rd Ed.)

    Pr = (Pt × λ² × σ) / ((4π)³ × R⁴)

    Args:
        power_tx: Transmitted power [W]
        wavelength: Radar wavelength [m]
        rcs: Radar cross section [m²]
        range_m: Target range [m]

    Returns:
        Received power [W], infinite at zero range
    """
    numerator = power_tx * (wavelength**2) * rcs
    denominator = RADAR_CONSTANT_4PI_CUBED * (range_m**4)

    # Target co-located with the antenna
    if denominator == 0.0:
        return np.inf

    return numerator / denominator


@numba.jit(nopython=True, cache=True)
def _watts_to_dbm_jit(power_w: float) -> float:
    """P[dBm] = 10 log10(P[W] × 1000)"""
    return 10.0 * np.log10(power_w * 1000.0)


# =============================================================================
# HIGH-LEVEL API FUNCTIONS
# =============================================================================


def calculate_wavelength(frequency_ghz: float) -> float:
    """λ = c / f, with the rounded engine speed of light [m]."""
    return SPEED_OF_LIGHT / (frequency_ghz * GHZ_TO_HZ)


def calculate_received_power(radar: RadarConfig, rcs_m2: float, range_m: float) -> float:
    """
    Received power for a target of given RCS at given range.

    Args:
        radar: Radar configuration
        rcs_m2: Effective radar cross section [m²]
        range_m: Target range [m]

    Returns:
        Received power [W]

    Reference: Skolnik, "Radar Handbook", 3rd Ed., Eq. 2.1
    """
    return float(
        _calculate_received_power_jit(
            radar.power_kw * KW_TO_W,
            calculate_wavelength(radar.frequency_ghz),
            rcs_m2,
            range_m,
        )
    )


def watts_to_dbm(power_w: float) -> float:
    """Convert power in watts to dBm."""
    return float(_watts_to_dbm_jit(power_w))


def detection_probability(snr_db: float) -> float:
    """
    Piecewise-linear probability of detection.

    SNR > 10 dB            → 1
    0 < SNR ≤ 10 dB        → SNR / 10
    -10 < SNR ≤ 0 dB       → max(0, (SNR + 10) / 20)
    SNR ≤ -10 dB           → 0

    Note that the marginal ramp tops out at 0.5 at SNR = 0 while the upper
    ramp restarts from 0 just above it.

    Args:
        snr_db: Signal strength minus receiver sensitivity [dB]

    Returns:
        Pd in [0, 1]
    """
    if snr_db > SNR_SATURATION_DB:
        return 1.0
    if snr_db > 0.0:
        return snr_db / SNR_SATURATION_DB
    if snr_db > SNR_FLOOR_DB:
        return max(0.0, (snr_db - SNR_FLOOR_DB) / (2.0 * SNR_SATURATION_DB))
    return 0.0


def calculate_geometry(aircraft: AircraftConfig) -> tuple:
    """
    Range and bearing from the radar at the origin.

    Returns:
        (distance [m], bearing [deg]); bearing 0° along +z, increasing toward +x
    """
    p = aircraft.position
    distance = math.sqrt(p.x**2 + p.y**2 + p.z**2)
    bearing = math.degrees(math.atan2(p.x, p.z))
    return distance, bearing


def evaluate(
    aircraft: AircraftConfig,
    radar: RadarConfig,
    threshold: float = DETECTION_THRESHOLD,
) -> RadarResult:
    """
    Compute the detection verdict for the current configuration.

    Steps:
        1. Range and bearing from position
        2. Range gate (out of range → floor result, no further math)
        3. σ_eff = σ × (1 - absorption)
        4. λ = c / f
        5. Pr from the radar equation, converted to dBm
        6. SNR = Pr[dBm] - sensitivity
        7. Pd from the piecewise model, detected if Pd > threshold

    Args:
        aircraft: Aircraft configuration
        radar: Radar configuration
        threshold: Detection probability threshold in [0, 1)

    Returns:
        RadarResult
    """
    if not 0.0 <= threshold < 1.0:
        raise ConfigurationError(
            f"threshold must be in [0, 1), got {threshold}", field="threshold"
        )

    distance, bearing = calculate_geometry(aircraft)

    # Range gate before any division by R⁴
    if distance > radar.range_km * KM_TO_M:
        return RadarResult(
            distance_m=distance,
            bearing_deg=bearing,
            effective_rcs_m2=0.0,
            signal_strength_dbm=SIGNAL_FLOOR_DBM,
            detection_probability=0.0,
            is_detected=False,
        )

    rcs = effective_cross_section(aircraft) * (1.0 - aircraft.absorption_coefficient)

    received_w = calculate_received_power(radar, rcs, distance)
    signal_dbm = watts_to_dbm(received_w)

    snr_db = signal_dbm - radar.sensitivity_dbm
    pd = detection_probability(snr_db)

    return RadarResult(
        distance_m=distance,
        bearing_deg=bearing,
        effective_rcs_m2=rcs,
        signal_strength_dbm=signal_dbm,
        detection_probability=pd,
        is_detected=pd > threshold,
    )


def propagation_time(distance_m: float) -> float:
    """
    Round-trip time of flight at light speed.

    t = 2R / c

    Used for display and animation pacing only.

    Args:
        distance_m: One-way distance [m]

    Returns:
        Round-trip time [s]
    """
    if distance_m < 0:
        raise ConfigurationError(
            f"distance_m must be >= 0, got {distance_m}", field="distance_m"
        )
    return 2.0 * distance_m / SPEED_OF_LIGHT
