"""
EV Station Sim - Main Entry Point
Run this file to simulate a year of operation of one EV charging station.

    python main.py [options]      run a simulation and print a summary
    python main.py validate       20 chargepoints, default seed, full year,
                                  compared against reference ranges
"""

import argparse
import sys
from typing import List, Optional

from ev_station_sim.analytics import (
    MONTH_NAMES, REFERENCE_CONCURRENCY_PERCENT, REFERENCE_MAX_POWER_KW,
    build_summary, within,
)
from ev_station_sim.errors import InvalidArgument
from ev_station_sim.simulation import (
    DEFAULT_SIMULATION_SEED, KWH_PER_100KM, POWER_PER_CHARGEPOINT_KW,
    VERBOSE_DEFAULT_MAX_TICKS, EVChargingSimulation, SimulationConfig, SimulationOptions,
)
from ev_station_sim.utils import RunDirectory

VALIDATION_CHARGEPOINTS = 20


def _bounded(kind, low, high, unit=""):
    """argparse type accepting values of ``kind`` within [low, high]."""
    def parse(text):
        value = kind(text)
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}{unit}, got {text}")
        return value
    return parse


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="EV Charging Station Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Station configuration
    parser.add_argument(
        "--chargepoints", type=_bounded(int, 1, 100), default=20,
        help="Number of chargepoints at the station"
    )
    parser.add_argument(
        "--power", type=_bounded(float, 1, 100, " kW"), default=POWER_PER_CHARGEPOINT_KW,
        help="Power rating per chargepoint in kW"
    )

    # Demand configuration
    parser.add_argument(
        "--arrival-multiplier", type=_bounded(float, 20, 200, "%"), default=100.0,
        help="Scale of the hourly arrival probabilities, in percent"
    )
    parser.add_argument(
        "--consumption", type=_bounded(float, 5, 50, " kWh/100km"), default=KWH_PER_100KM,
        help="Average car consumption in kWh per 100 km"
    )

    # Simulation configuration
    parser.add_argument(
        "--seed", type=int, default=DEFAULT_SIMULATION_SEED,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--ticks", type=_bounded(int, 1, 10 ** 7), default=None,
        help="Number of 15-minute ticks to simulate (default: one year, "
             f"or {VERBOSE_DEFAULT_MAX_TICKS} with --verbose)"
    )

    # Output configuration
    parser.add_argument(
        "--output-dir", type=str, default=None,
        help="Directory for a timestamped run folder with tick/session data"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Trace every arrival, charge and release"
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Only print the summary"
    )
    parser.add_argument(
        "--progress-interval", type=_bounded(int, 1, 10 ** 7), default=30 * 24 * 4,
        help="Print progress every N ticks"
    )

    return parser.parse_args(argv)


def print_summary(summary: dict) -> None:
    print("\n" + "=" * 70)
    print("SIMULATION SUMMARY")
    print("=" * 70)
    print(f"Chargepoints: {summary['num_chargepoints']} | Seed: {summary['seed']} | "
          f"Days: {summary['days_simulated']:.1f}")
    print(f"\nEnergy:")
    print(f"  Total energy consumed: {summary['total_energy_consumed_kwh']:.2f} kWh")
    print(f"\nPower:")
    print(f"  Theoretical max power demand: {summary['theoretical_max_power_demand_kw']:.2f} kW")
    print(f"  Actual max power demand: {summary['actual_max_power_demand_kw']:.2f} kW")
    print(f"  Concurrency factor: {summary['concurrency_factor_percent']:.2f}%")
    if 'peak_day' in summary:
        print(f"  Peak day: {summary['peak_day']} "
              f"(mean daily peak {summary['mean_daily_peak_kw']:.2f} kW)")

    events = summary['events_breakdown']
    print(f"\nCharging sessions: {summary['num_charging_sessions']} "
          f"({summary['zero_demand_arrivals']} arrivals needed no charge)")
    print(f"  Completed: {summary['completed_sessions']} | "
          f"Busiest day: {summary['busiest_day_sessions']} sessions")
    print(f"  Avg per day: {events['avg_per_day']:.1f} | Avg per week: {events['avg_per_week']:.1f}")
    for name, sessions in zip(MONTH_NAMES, events['per_month']):
        print(f"  {name:<10} {sessions:>6,}")
    print("=" * 70)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the station simulation."""
    args = parse_args(argv)

    ticks = args.ticks
    if ticks is None and args.verbose:
        ticks = VERBOSE_DEFAULT_MAX_TICKS

    config = SimulationConfig(
        power_per_chargepoint_kw=args.power,
        kwh_per_100km=args.consumption,
        arrival_multiplier=args.arrival_multiplier / 100,
    )
    options = SimulationOptions(
        num_chargepoints=args.chargepoints,
        seed=args.seed,
        verbose=args.verbose,
        max_ticks=ticks,
        progress_interval=None if args.quiet else args.progress_interval,
    )

    try:
        sim = EVChargingSimulation(options, config)
    except InvalidArgument as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if not args.quiet:
        print("=" * 70)
        print("EV STATION SIMULATION")
        print("=" * 70)
        print(f"Station: {args.chargepoints} chargepoints x {args.power} kW")
        print(f"Demand: {args.arrival_multiplier:.0f}% arrivals, {args.consumption} kWh/100km")
        print(f"Duration: {sim.max_ticks} ticks, seed {args.seed}")
        print("=" * 70)
        print()

    result = sim.run()
    summary = build_summary(result)
    print_summary(summary)

    if args.output_dir:
        run_dir = RunDirectory.for_station(args.output_dir, args.chargepoints, args.seed)
        run_dir.save_metadata(vars(args), extra={'simulation_id': result.simulation_id})
        result.save(run_dir.data_dir, extra={'summary': summary})
        run_dir.write_report("daily_peak_power.csv", result.tick_recorder.daily_peak_power())
        run_dir.write_report("hourly_profile.csv", result.tick_recorder.hourly_profile())
        run_dir.write_report("daily_energy.csv", result.tick_recorder.daily_energy())
        run_dir.write_report("exemplary_day.csv", result.tick_recorder.exemplary_day())
        print(f"Results saved to: {run_dir.root}")

    return 0


def run_validation() -> int:
    """Full-year reference run, checked against the expected ranges."""
    print("\n--- Running validation ---")
    print(f"[VALIDATION] Simulating {VALIDATION_CHARGEPOINTS} CPs, "
          f"Seed: {DEFAULT_SIMULATION_SEED}, Full Year.")

    sim = EVChargingSimulation(SimulationOptions(
        num_chargepoints=VALIDATION_CHARGEPOINTS,
        seed=DEFAULT_SIMULATION_SEED,
        record_ticks=False,
    ))
    summary = build_summary(sim.run())

    actual = summary['actual_max_power_demand_kw']
    concurrency = summary['concurrency_factor_percent']

    print("[VALIDATION] Results:")
    print(f"  Total Energy Consumed: {summary['total_energy_consumed_kwh']:.2f} kWh")
    print(f"  Theoretical Max Power Demand: {summary['theoretical_max_power_demand_kw']:.2f} kW")
    print(f"  Actual Max Power Demand: {actual:.2f} kW")
    print(f"  Concurrency Factor: {concurrency:.2f}%")

    low, high = REFERENCE_MAX_POWER_KW
    verdict = "Matches" if within(actual, REFERENCE_MAX_POWER_KW) else "Differs from"
    print(f"  Actual Max Power ({actual:.2f} kW) vs. reference range [{low:.0f}-{high:.0f} kW]: "
          f"{verdict} reference")
    low, high = REFERENCE_CONCURRENCY_PERCENT
    verdict = "Matches" if within(concurrency, REFERENCE_CONCURRENCY_PERCENT) else "Differs from"
    print(f"  Concurrency Factor ({concurrency:.2f}%) vs. reference range [{low:.0f}-{high:.0f}%]: "
          f"{verdict} reference")
    print("--- End of validation ---\n")
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "validate":
        sys.exit(run_validation())
    else:
        sys.exit(main())
