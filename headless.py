#!/usr/bin/env python3
"""
Headless Simulation CLI

Run a single stealth radar session without GUI.

Usage:
    python headless.py                                  # Page defaults
    python headless.py --geometry fighter --angle 90    # Custom aircraft
    python headless.py --config scenario.yaml           # From file

Examples:
    # Canonical stealth configuration
    python headless.py --stealth --duration 5

    # Conventional airliner broadside
    python headless.py --geometry conventional --rcs 1.0 --absorption 0 --angle 90
"""

import argparse
import logging
import os
import sys

import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from stealthsim.io import ScenarioLoader, export_scenario_to_yaml, get_default_filename
from stealthsim.physics import ConfigurationError
from stealthsim.simulation import HeadlessRunner, RunConfig


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run headless stealth radar simulation")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML scenario file")
    parser.add_argument(
        "--save",
        nargs="?",
        const="",
        default=None,
        help="Export final setup to YAML (default name: scenario_YYYYMMDD_HHMMSS.yaml)",
    )

    # Aircraft parameters
    parser.add_argument("--rcs", type=float, default=0.01, help="Base RCS in m² (default: 0.01)")
    parser.add_argument(
        "--absorption", type=float, default=0.8, help="Absorption coefficient (default: 0.8)"
    )
    parser.add_argument(
        "--geometry",
        choices=["stealth", "fighter", "conventional"],
        default="stealth",
        help="Airframe geometry (default: stealth)",
    )
    parser.add_argument("--angle", type=float, default=0.0, help="Angle to radar in deg")
    parser.add_argument(
        "--position",
        type=float,
        nargs=3,
        default=[10.0, 8.0, 15.0],
        metavar=("X", "Y", "Z"),
        help="Aircraft position in m (default: 10 8 15)",
    )
    parser.add_argument("--stealth", action="store_true", help="Start in stealth mode")

    # Radar parameters
    parser.add_argument("--frequency", type=float, default=10.0, help="Frequency in GHz")
    parser.add_argument("--power", type=float, default=500.0, help="Transmit power in kW")
    parser.add_argument("--range", type=float, default=100.0, help="Radar range in km")
    parser.add_argument("--sensitivity", type=float, default=-90.0, help="Sensitivity in dBm")

    # Simulation parameters
    parser.add_argument("--duration", type=float, default=10.0, help="Duration in s")
    parser.add_argument(
        "--threshold", type=float, default=0.3, help="Detection Pd threshold (default: 0.3)"
    )

    # Options
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            if not os.path.exists(args.config):
                print(f"Error: Config file not found: {args.config}")
                return 1
            config = ScenarioLoader(args.config).create_run_config()
        else:
            config = RunConfig(
                base_cross_section=args.rcs,
                absorption_coefficient=args.absorption,
                geometry=args.geometry,
                angle_to_radar_deg=args.angle,
                position=tuple(args.position),
                frequency_ghz=args.frequency,
                power_kw=args.power,
                range_km=args.range,
                sensitivity_dbm=args.sensitivity,
                duration_s=args.duration,
                detection_threshold=args.threshold,
                stealth_mode=args.stealth,
            )
        runner = HeadlessRunner(config)
    except (ConfigurationError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1

    if not args.quiet:
        print("=" * 60)
        print("StealthSim Headless Mode")
        print("=" * 60)
        print(f"Geometry: {config.geometry}  Angle: {config.angle_to_radar_deg:.1f}°")
        print(f"Base RCS: {config.base_cross_section:.3f} m²")
        print(f"Absorption: {config.absorption_coefficient * 100:.0f}%")
        print(f"Frequency: {config.frequency_ghz:.1f} GHz  Power: {config.power_kw:.0f} kW")
        print(f"Duration: {config.duration_s:.1f} s  Threshold: {config.detection_threshold:.2f}")
        print("=" * 60)

    result = runner.run()

    if args.save is not None:
        export_scenario_to_yaml(
            runner.session,
            args.save or get_default_filename(),
            duration_s=config.duration_s,
            dt_s=config.dt_s,
        )

    final = result.final_result
    if not args.quiet:
        print("\n--- RESULTS ---")
        print(f"Distance: {final.distance_m:.2f} m  Bearing: {final.bearing_deg:.1f}°")
        print(f"Effective RCS: {final.effective_rcs_m2:.3e} m²")
        print(f"Signal strength: {final.signal_strength_dbm:.1f} dBm")
        print(f"Detection probability: {final.detection_probability * 100:.1f}%")
        print(f"Detected: {'YES' if final.is_detected else 'NO'}")
        print(f"Stealth mode: {'ACTIVE' if result.stealth_active else 'off'}")
        print(f"Pulses emitted/retired: {result.n_pulses_emitted}/{result.n_pulses_retired}")
        print(f"Peak live pulses: {result.peak_live_pulses}")
        print(f"Runtime: {result.runtime_s * 1000:.1f} ms")
        print("=" * 60)
    else:
        # Machine-readable output
        print(f"{final.detection_probability:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
