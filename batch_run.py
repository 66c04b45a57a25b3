#!/usr/bin/env python3
"""
Batch Run Script - Signature Sweep

Evaluates the detection engine over a parameter space and writes the
results to CSV for analysis.

Usage:
    python batch_run.py                       # Default sweep
    python batch_run.py --quick stealth       # Full-circle aspect sweep
    python batch_run.py --output sweep.csv
"""

import argparse
import csv
import os
import sys
import time
from datetime import datetime
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from stealthsim.simulation.scenario_generator import ParameterSpace, ScenarioGenerator, SweepRow


def run_sweep(space: ParameterSpace, output_file: str) -> List[SweepRow]:
    """
    Evaluate a parameter space and save it.

    Args:
        space: Parameter space definition
        output_file: Output CSV file path

    Returns:
        List of evaluated rows
    """
    print("=" * 60)
    print("StealthSim Signature Sweep")
    print("=" * 60)
    print(f"Configurations: {space.total_configs}")
    print(f"Output: {output_file}")
    print("=" * 60)

    start_time = time.perf_counter()
    rows = ScenarioGenerator.evaluate(space)
    total_time = time.perf_counter() - start_time

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    _save_results_csv(rows, output_file)
    _print_summary(rows, total_time)

    return rows


def _save_results_csv(rows: List[SweepRow], filepath: str) -> None:
    """Save rows to CSV file."""
    if not rows:
        return

    fieldnames = list(rows[0].to_dict().keys())

    with open(filepath, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for row in rows:
            writer.writerow(row.to_dict())

    print(f"\nResults saved to: {filepath}")


def _print_summary(rows: List[SweepRow], total_time: float) -> None:
    """Print sweep summary."""
    if not rows:
        print("No results to summarize")
        return

    n_detected = sum(1 for r in rows if r.result.is_detected)
    avg_pd = sum(r.result.detection_probability for r in rows) / len(rows)

    print("\n" + "=" * 60)
    print("SWEEP COMPLETE")
    print("=" * 60)
    print(f"Total configurations: {len(rows)}")
    print(f"Detected: {n_detected} ({n_detected / len(rows) * 100:.1f}%)")
    print(f"Average Pd: {avg_pd:.3f}")
    print(f"Total time: {total_time:.2f}s")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(description="Run stealth signature sweep")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output CSV file (default: output/sweep_YYYYMMDD_HHMMSS.csv)",
    )
    parser.add_argument(
        "--quick",
        choices=["stealth", "fighter", "conventional"],
        default=None,
        help="Full-circle aspect sweep for one geometry",
    )
    parser.add_argument(
        "--angles", type=int, default=36, help="Angles in quick sweep (default: 36)"
    )

    args = parser.parse_args()

    if args.output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        args.output = f"output/sweep_{timestamp}.csv"

    if args.quick:
        print(f"Running quick aspect sweep for {args.quick}...")
        space = ScenarioGenerator.quick_aspect_sweep(geometry=args.quick, n_angles=args.angles)
    else:
        space = ParameterSpace()

    run_sweep(space, output_file=args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
