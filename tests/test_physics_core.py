"""
StealthSim Detection Engine Test Suite

Test ID | Description                         | Reference             | Tolerance
--------|-------------------------------------|-----------------------|------------
1       | Geometry and angular RCS factors    | Policy table          | Exact
2       | RCS positivity and π periodicity    | sin² / sin⁴ curves    | 1e-12 rel
3       | Range gate                          | R > range_km × 1000   | Exact
4       | Detection probability segments      | Piecewise model       | 1e-9
5       | Stealth vs conventional scenarios   | Radar equation        | 1e-6 rel
6       | Purity / reproducibility            | Bit-identical         | Exact
7       | Configuration validation            | ConfigurationError    | Exact
8       | Propagation time                    | t = 2R / c            | Exact

References:
    - Skolnik, M.I. (2008). "Radar Handbook", 3rd Edition, McGraw-Hill
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stealthsim.physics import (
    DEFAULT_AIRCRAFT,
    DEFAULT_RADAR,
    DETECTION_THRESHOLD,
    SIGNAL_FLOOR_DBM,
    SPEED_OF_LIGHT,
    AircraftConfig,
    ConfigurationError,
    GeometryClass,
    Position,
    RadarConfig,
    angular_factor,
    calculate_wavelength,
    detection_probability,
    effective_cross_section,
    evaluate,
    geometry_factor,
    is_optimal_stealth_config,
    optimal_stealth_config,
    propagation_time,
)

REFERENCE_RADAR = RadarConfig(frequency_ghz=10, power_kw=500, range_km=100, sensitivity_dbm=-90)


def make_aircraft(**overrides) -> AircraftConfig:
    fields = dict(
        base_cross_section=1.0,
        absorption_coefficient=0.0,
        geometry=GeometryClass.FIGHTER,
        angle_to_radar_deg=0.0,
        position=Position(10.0, 8.0, 15.0),
    )
    fields.update(overrides)
    return AircraftConfig(**fields)


# =============================================================================
# TEST 1: Geometry and Angular Factors
# =============================================================================


class TestGeometryFactors:
    """Per-class signature multipliers."""

    def test_geometry_factor_table(self):
        assert geometry_factor(GeometryClass.STEALTH) == 0.001
        assert geometry_factor(GeometryClass.FIGHTER) == 5.0
        assert geometry_factor(GeometryClass.CONVENTIONAL) == 25.0

    def test_geometry_factor_accepts_value_string(self):
        assert geometry_factor("conventional") == 25.0

    def test_angular_factor_nose_on_is_unity(self):
        for geometry in GeometryClass:
            assert angular_factor(geometry, 0.0) == pytest.approx(1.0)

    def test_stealth_broadside_peak(self):
        """1 + 50·sin⁴(90°) = 51"""
        assert angular_factor(GeometryClass.STEALTH, 90.0) == pytest.approx(51.0)

    def test_conventional_broadside_peak(self):
        """1 + 2·sin²(90°) = 3"""
        assert angular_factor(GeometryClass.FIGHTER, 90.0) == pytest.approx(3.0)
        assert angular_factor(GeometryClass.CONVENTIONAL, 90.0) == pytest.approx(3.0)

    def test_oblique_aspect(self):
        """At 45°, sin² = 0.5 and sin⁴ = 0.25"""
        assert angular_factor(GeometryClass.FIGHTER, 45.0) == pytest.approx(2.0)
        assert angular_factor(GeometryClass.STEALTH, 45.0) == pytest.approx(13.5)

    def test_stealth_curve_more_peaked(self):
        """Faceted shaping degrades faster off-axis than conventional shaping."""
        assert angular_factor(GeometryClass.STEALTH, 60.0) > angular_factor(
            GeometryClass.CONVENTIONAL, 60.0
        )


# =============================================================================
# TEST 2: Effective RCS Properties
# =============================================================================


class TestEffectiveCrossSection:
    """Positivity and front/back symmetry."""

    @pytest.mark.parametrize("geometry", list(GeometryClass))
    def test_strictly_positive(self, geometry):
        for angle in np.arange(0.0, 360.0, 7.5):
            aircraft = make_aircraft(
                geometry=geometry, angle_to_radar_deg=angle, base_cross_section=0.001
            )
            assert effective_cross_section(aircraft) > 0.0

    @pytest.mark.parametrize("geometry", list(GeometryClass))
    def test_period_pi(self, geometry):
        for angle in np.arange(0.0, 180.0, 5.0):
            front = make_aircraft(geometry=geometry, angle_to_radar_deg=angle)
            back = make_aircraft(geometry=geometry, angle_to_radar_deg=angle + 180.0)
            assert effective_cross_section(front) == pytest.approx(
                effective_cross_section(back), rel=1e-12
            )

    def test_product_of_factors(self):
        aircraft = make_aircraft(
            base_cross_section=0.5, geometry=GeometryClass.CONVENTIONAL, angle_to_radar_deg=90
        )
        assert effective_cross_section(aircraft) == pytest.approx(0.5 * 25.0 * 3.0)

    def test_absorption_not_applied(self):
        """Absorption is applied by the engine, not the geometric RCS."""
        a = make_aircraft(absorption_coefficient=0.0)
        b = make_aircraft(absorption_coefficient=0.9)
        assert effective_cross_section(a) == effective_cross_section(b)


# =============================================================================
# TEST 3: Range Gate
# =============================================================================


class TestRangeGate:
    """Targets beyond instrumented range are never detected."""

    def test_just_beyond_range(self):
        radar = REFERENCE_RADAR.with_changes(range_km=0.01)  # 10 m
        aircraft = make_aircraft(
            geometry=GeometryClass.CONVENTIONAL,
            angle_to_radar_deg=90,
            position=Position(0.0, 0.0, 10.0 + 1e-6),
        )
        result = evaluate(aircraft, radar)

        assert result.is_detected is False
        assert result.detection_probability == 0.0
        assert result.signal_strength_dbm == SIGNAL_FLOOR_DBM
        assert result.effective_rcs_m2 == 0.0
        assert result.distance_m == pytest.approx(10.0 + 1e-6)

    def test_bearing_reported_when_gated(self):
        radar = REFERENCE_RADAR.with_changes(range_km=0.001)
        result = evaluate(make_aircraft(position=Position(5.0, 0.0, 0.0)), radar)
        assert result.bearing_deg == pytest.approx(90.0)

    def test_within_range_not_gated(self):
        result = evaluate(make_aircraft(), REFERENCE_RADAR)
        assert result.signal_strength_dbm > SIGNAL_FLOOR_DBM
        assert result.effective_rcs_m2 > 0.0


# =============================================================================
# TEST 4: Detection Probability
# =============================================================================


class TestDetectionProbability:
    """Piecewise-linear Pd(SNR)."""

    @pytest.mark.parametrize(
        "snr_db, expected",
        [
            (30.0, 1.0),
            (10.5, 1.0),
            (10.0, 1.0),
            (5.0, 0.5),
            (1.0, 0.1),
            (0.0, 0.5),
            (-5.0, 0.25),
            (-10.0, 0.0),
            (-40.0, 0.0),
        ],
    )
    def test_segment_values(self, snr_db, expected):
        assert detection_probability(snr_db) == pytest.approx(expected)

    def test_continuous_at_saturation(self):
        assert detection_probability(10.0 + 1e-9) == pytest.approx(
            detection_probability(10.0), abs=1e-9
        )

    def test_continuous_at_floor(self):
        assert detection_probability(-10.0 + 1e-9) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("low, high", [(-30.0, -10.0), (-10.0, 0.0), (1e-9, 10.0), (10.0, 40.0)])
    def test_non_decreasing_within_segments(self, low, high):
        snrs = np.linspace(low, high, 201)
        pds = [detection_probability(s) for s in snrs]
        assert all(b >= a for a, b in zip(pds, pds[1:]))

    def test_bounded(self):
        for snr in np.linspace(-50.0, 50.0, 501):
            assert 0.0 <= detection_probability(snr) <= 1.0


# =============================================================================
# TEST 5: Reference Scenarios
# =============================================================================


class TestReferenceScenarios:
    """Canonical stealth vs conventional airliner against the same radar."""

    def test_stealth_not_detected(self):
        aircraft = AircraftConfig(
            base_cross_section=0.001,
            absorption_coefficient=0.95,
            geometry=GeometryClass.STEALTH,
            angle_to_radar_deg=0.0,
            position=Position(10.0, 8.0, 15.0),
        )
        result = evaluate(aircraft, REFERENCE_RADAR)

        assert result.distance_m == pytest.approx(math.sqrt(389.0))
        assert result.distance_m == pytest.approx(19.72, abs=0.01)
        assert result.effective_rcs_m2 == pytest.approx(0.001 * 0.001 * 1.0 * 0.05, rel=1e-9)
        assert result.signal_strength_dbm == pytest.approx(-101.25, abs=0.05)
        assert result.signal_strength_dbm < REFERENCE_RADAR.sensitivity_dbm
        assert result.detection_probability == 0.0
        assert result.is_detected is False

    def test_conventional_broadside_detected(self):
        aircraft = AircraftConfig(
            base_cross_section=25.0,
            absorption_coefficient=0.0,
            geometry=GeometryClass.CONVENTIONAL,
            angle_to_radar_deg=90.0,
            position=Position(50.0, 8.0, 50.0),
        )
        result = evaluate(aircraft, REFERENCE_RADAR)

        assert result.effective_rcs_m2 == pytest.approx(25.0 * 25.0 * 3.0)
        assert result.signal_strength_dbm > REFERENCE_RADAR.sensitivity_dbm + 10.0
        assert result.detection_probability == 1.0
        assert result.is_detected is True

    def test_radar_equation_by_hand(self):
        aircraft = make_aircraft()
        result = evaluate(aircraft, REFERENCE_RADAR)

        wavelength = 3e8 / 10e9
        sigma = 1.0 * 5.0 * 1.0
        distance = math.sqrt(10.0**2 + 8.0**2 + 15.0**2)
        received = (500e3 * wavelength**2 * sigma) / ((4 * math.pi) ** 3 * distance**4)

        assert result.signal_strength_dbm == pytest.approx(10 * math.log10(received * 1000))

    def test_sub_metre_range_uses_full_equation(self):
        aircraft = make_aircraft(position=Position(0.3, 0.3, 0.3))
        result = evaluate(aircraft, REFERENCE_RADAR)

        wavelength = 3e8 / 10e9
        distance = math.sqrt(3 * 0.3**2)
        received = (500e3 * wavelength**2 * 5.0) / ((4 * math.pi) ** 3 * distance**4)

        assert result.distance_m == pytest.approx(distance)
        assert result.signal_strength_dbm == pytest.approx(10 * math.log10(received * 1000))

    def test_co_located_target_detected(self):
        result = evaluate(make_aircraft(position=Position(0.0, 0.0, 0.0)), REFERENCE_RADAR)
        assert result.distance_m == 0.0
        assert math.isinf(result.signal_strength_dbm)
        assert result.detection_probability == 1.0
        assert result.is_detected is True

    def test_bearing_convention(self):
        assert evaluate(make_aircraft(position=Position(0, 5, 10)), REFERENCE_RADAR).bearing_deg == (
            pytest.approx(0.0)
        )
        assert evaluate(make_aircraft(position=Position(10, 5, 0)), REFERENCE_RADAR).bearing_deg == (
            pytest.approx(90.0)
        )
        assert evaluate(make_aircraft(position=Position(-10, 5, 0)), REFERENCE_RADAR).bearing_deg == (
            pytest.approx(-90.0)
        )

    def test_default_threshold_is_thirty_percent(self):
        """Page defaults sit at Pd ≈ 0.48: detected at 0.3, not at 0.5."""
        assert DETECTION_THRESHOLD == 0.3
        result = evaluate(DEFAULT_AIRCRAFT, DEFAULT_RADAR)
        assert result.detection_probability == pytest.approx(0.477, abs=0.01)
        assert result.is_detected is True
        assert evaluate(DEFAULT_AIRCRAFT, DEFAULT_RADAR, threshold=0.5).is_detected is False

    def test_absorption_lowers_signal(self):
        bare = evaluate(make_aircraft(absorption_coefficient=0.0), REFERENCE_RADAR)
        coated = evaluate(make_aircraft(absorption_coefficient=0.9), REFERENCE_RADAR)
        assert coated.signal_strength_dbm == pytest.approx(bare.signal_strength_dbm - 10.0)

    def test_invalid_threshold_rejected(self):
        with pytest.raises(ConfigurationError):
            evaluate(make_aircraft(), REFERENCE_RADAR, threshold=1.0)


# =============================================================================
# TEST 6: Purity
# =============================================================================


class TestPurity:
    def test_bit_identical(self):
        aircraft = make_aircraft(geometry=GeometryClass.STEALTH, angle_to_radar_deg=33.0)
        first = evaluate(aircraft, REFERENCE_RADAR)
        second = evaluate(aircraft, REFERENCE_RADAR)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_inputs_unchanged(self):
        aircraft = make_aircraft()
        before = aircraft.to_dict()
        evaluate(aircraft, REFERENCE_RADAR)
        assert aircraft.to_dict() == before


# =============================================================================
# TEST 7: Configuration Validation
# =============================================================================


class TestConfigurationValidation:
    @pytest.mark.parametrize("absorption", [1.0, 1.5, -0.1, float("nan")])
    def test_absorption_range(self, absorption):
        with pytest.raises(ConfigurationError) as exc:
            make_aircraft(absorption_coefficient=absorption)
        assert exc.value.field == "absorption_coefficient"

    @pytest.mark.parametrize("rcs", [0.0, -1.0, float("inf")])
    def test_base_cross_section_positive(self, rcs):
        with pytest.raises(ConfigurationError):
            make_aircraft(base_cross_section=rcs)

    @pytest.mark.parametrize("angle", [-1.0, 360.0, float("nan")])
    def test_angle_range(self, angle):
        with pytest.raises(ConfigurationError):
            make_aircraft(angle_to_radar_deg=angle)

    def test_unknown_geometry(self):
        with pytest.raises(ConfigurationError):
            make_aircraft(geometry="blimp")

    def test_geometry_string_coerced(self):
        assert make_aircraft(geometry="stealth").geometry is GeometryClass.STEALTH

    def test_position_coerced(self):
        aircraft = make_aircraft(position=(1, 2, 3))
        assert aircraft.position == Position(1.0, 2.0, 3.0)
        assert make_aircraft(position={"x": 1, "y": 2, "z": 3}).position == aircraft.position

    def test_position_wrong_length(self):
        with pytest.raises(ConfigurationError):
            make_aircraft(position=(1, 2))

    @pytest.mark.parametrize(
        "field_name", ["frequency_ghz", "power_kw", "range_km"]
    )
    def test_radar_positive_fields(self, field_name):
        with pytest.raises(ConfigurationError) as exc:
            REFERENCE_RADAR.with_changes(**{field_name: 0.0})
        assert exc.value.field == field_name

    def test_sensitivity_finite(self):
        with pytest.raises(ConfigurationError):
            REFERENCE_RADAR.with_changes(sensitivity_dbm=float("-inf"))

    def test_with_changes_unknown_field(self):
        with pytest.raises(ConfigurationError):
            make_aircraft().with_changes(wingspan=10.0)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


# =============================================================================
# TEST 8: Canonical Stealth Configuration and Propagation
# =============================================================================


class TestCanonicalStealth:
    def test_optimal_config_preserves_position(self):
        config = optimal_stealth_config((3.0, 4.0, 5.0))
        assert config.position == Position(3.0, 4.0, 5.0)
        assert config.base_cross_section == 0.001
        assert config.absorption_coefficient == 0.95
        assert config.geometry is GeometryClass.STEALTH
        assert config.angle_to_radar_deg == 0.0
        assert is_optimal_stealth_config(config)

    def test_any_signature_field_breaks_match(self):
        config = optimal_stealth_config(Position(0, 5, 5))
        assert not is_optimal_stealth_config(config.with_changes(base_cross_section=0.002))
        assert not is_optimal_stealth_config(config.with_changes(absorption_coefficient=0.94))
        assert not is_optimal_stealth_config(config.with_changes(geometry="fighter"))
        assert not is_optimal_stealth_config(config.with_changes(angle_to_radar_deg=1.0))

    def test_position_does_not_break_match(self):
        config = optimal_stealth_config(Position(0, 5, 5))
        assert is_optimal_stealth_config(config.with_changes(position=(20, 10, -5)))


class TestPropagation:
    def test_round_trip_time(self):
        assert propagation_time(150.0) == pytest.approx(1e-6)
        assert propagation_time(0.0) == 0.0

    def test_uses_rounded_speed_of_light(self):
        assert SPEED_OF_LIGHT == 3e8
        assert calculate_wavelength(10.0) == pytest.approx(0.03)

    def test_negative_distance_rejected(self):
        with pytest.raises(ConfigurationError):
            propagation_time(-1.0)
