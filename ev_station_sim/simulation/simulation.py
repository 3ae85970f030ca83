"""
Simulation Engine Module
Tick-stepped simulation of one charging station over a simulated year.
"""

from __future__ import annotations

import json
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ev_station_sim.analytics.statistics import SimulationStatistics
from ev_station_sim.analytics.tick_recorder import TickRecorder
from ev_station_sim.charging.station import ChargingStation
from ev_station_sim.errors import InvalidArgument, InvariantViolation
from ev_station_sim.simulation.config import DEFAULT_SIMULATION_SEED, SimulationConfig
from ev_station_sim.utils.distributions import weighted_choice
from ev_station_sim.utils.seeded_random import SeededRandom
from ev_station_sim.vehicle.tracker import VehicleTracker
from ev_station_sim.vehicle.vehicle import ElectricVehicle


@dataclass
class SimulationOptions:
    """Per-run options."""
    num_chargepoints: int
    seed: int = DEFAULT_SIMULATION_SEED
    verbose: bool = False
    max_ticks: Optional[int] = None         # None = one simulated year
    record_ticks: bool = True               # Keep the per-tick series
    progress_interval: Optional[int] = None  # Print progress every N ticks

    def validate(self) -> None:
        if isinstance(self.num_chargepoints, bool) or not isinstance(self.num_chargepoints, int):
            raise InvalidArgument(f"num_chargepoints must be an integer, got {self.num_chargepoints!r}")
        if self.num_chargepoints < 0:
            raise InvalidArgument(f"num_chargepoints cannot be negative, got {self.num_chargepoints}")
        if self.max_ticks is not None and (not isinstance(self.max_ticks, int) or self.max_ticks <= 0):
            raise InvalidArgument(f"max_ticks must be a positive integer, got {self.max_ticks!r}")
        if self.progress_interval is not None and self.progress_interval <= 0:
            raise InvalidArgument(f"progress_interval must be positive, got {self.progress_interval}")


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Read-only outcome of a completed run."""
    simulation_id: str
    num_chargepoints: int
    seed: int
    ticks_simulated: int
    total_energy_consumed_kwh: float
    actual_max_power_demand_kw: float
    total_sessions: int
    completed_sessions: int
    busiest_day_sessions: int
    zero_demand_arrivals: int
    wall_clock_time_seconds: float
    config: SimulationConfig
    tick_recorder: TickRecorder = field(repr=False)
    session_dataframe: pd.DataFrame = field(repr=False)

    @property
    def tick_dataframe(self) -> pd.DataFrame:
        return self.tick_recorder.get_dataframe()

    @property
    def days_simulated(self) -> float:
        return self.ticks_simulated / self.config.ticks_per_day

    def to_dict(self) -> Dict[str, Any]:
        return {
            'simulation_id': self.simulation_id,
            'num_chargepoints': self.num_chargepoints,
            'seed': self.seed,
            'ticks_simulated': self.ticks_simulated,
            'total_energy_consumed_kwh': self.total_energy_consumed_kwh,
            'actual_max_power_demand_kw': self.actual_max_power_demand_kw,
            'total_sessions': self.total_sessions,
            'completed_sessions': self.completed_sessions,
            'busiest_day_sessions': self.busiest_day_sessions,
            'zero_demand_arrivals': self.zero_demand_arrivals,
            'wall_clock_time_seconds': self.wall_clock_time_seconds,
            'config': self.config.to_dict(),
        }

    def save(self, output_dir: str = "./simulation_results", extra: Optional[Dict] = None) -> str:
        """Write tick series, session log and summary. Returns the base path."""
        os.makedirs(output_dir, exist_ok=True)
        base_path = os.path.join(output_dir, self.simulation_id)

        self.tick_recorder.export_csv(f"{base_path}_ticks.csv")
        self.session_dataframe.to_csv(f"{base_path}_sessions.csv", index=False)

        summary = self.to_dict()
        if extra:
            summary.update(extra)
        with open(f"{base_path}_summary.json", 'w') as f:
            json.dump(summary, f, indent=2, default=str)

        return base_path


class EVChargingSimulation:
    """
    Main simulation engine.

    Owns the station, random stream, statistics, tick recorder and vehicle
    tracker of exactly one run; nothing is shared between instances.

    Per tick, chargepoints are visited in index order. An idle chargepoint
    rolls for an arrival; an accepted arrival samples a demand, is assigned
    and then charged once in the same tick. An occupied chargepoint charges
    once. Occupied chargepoints (after the transition) add their rated power
    to the tick's demand.
    """

    def __init__(self, options: SimulationOptions, config: Optional[SimulationConfig] = None):
        self.options = options
        self.config = config or SimulationConfig()
        self.options.validate()
        self.config.validate()

        self.id = str(uuid.uuid4())[:8]
        self.max_ticks: int = (
            options.max_ticks if options.max_ticks is not None else self.config.total_ticks_per_year
        )

        # Callbacks
        self.on_tick: Optional[Callable[[int, Dict], None]] = None
        self.on_complete: Optional[Callable[[SimulationResult], None]] = None

        self._initialize()

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def _initialize(self) -> None:
        """Create all per-run state."""
        cfg = self.config
        self.random = SeededRandom(self.options.seed)
        self.stats = SimulationStatistics()
        self.vehicle_tracker = VehicleTracker()
        self.tick_recorder = TickRecorder(cfg.ticks_per_hour, cfg.hours_per_day)
        self.station = ChargingStation(
            self.options.num_chargepoints,
            power_kw=cfg.power_per_chargepoint_kw,
            ticks_per_hour=cfg.ticks_per_hour,
            verbose=self.options.verbose,
            on_release=self.vehicle_tracker.record_release,
        )

        self._tick_arrival_probabilities: List[float] = [
            cfg.tick_arrival_probability(hour) for hour in range(cfg.hours_per_day)
        ]

        self.current_tick: int = 0
        self.next_ev_id: int = 1
        self.is_running: bool = False
        self._started: bool = False
        self.result: Optional[SimulationResult] = None

        if self.options.verbose:
            print(f"Initializing Simulation: {self.options.num_chargepoints} CPs, "
                  f"Seed: {self.options.seed}, Verbose: {self.options.verbose}, Ticks: {self.max_ticks}")

    def _log_sim(self, tick: int, message: str) -> None:
        if self.options.verbose:
            print(f"[TICK {tick}][SIM] {message}")

    # ========================================================================
    # MAIN SIMULATION LOOP
    # ========================================================================

    def run(self) -> SimulationResult:
        """
        Simulate all configured ticks and return the result.

        Raises:
            InvariantViolation: if this engine already started a run, whether
                it completed or was aborted by an exception (use reset()).
        """
        if self._started:
            raise InvariantViolation(f"Simulation {self.id} has already run; call reset() first")

        start_time = datetime.now()
        self._started = True
        self.is_running = True
        interval = self.options.progress_interval

        try:
            for tick in range(self.max_ticks):
                self.current_tick = tick

                if interval and tick > 0 and tick % interval == 0 and not self.options.verbose:
                    self._print_progress(tick)

                self._execute_tick(tick)

                if self.on_tick:
                    self.on_tick(tick, self._get_tick_info())
        finally:
            self.is_running = False

        self.vehicle_tracker.sync()
        sessions_per_day = self.vehicle_tracker.sessions_per_day(self.config.ticks_per_day)
        if self.options.verbose:
            print(f"Simulation run complete for {self.max_ticks} ticks.")

        self.result = SimulationResult(
            simulation_id=self.id,
            num_chargepoints=self.options.num_chargepoints,
            seed=self.options.seed,
            ticks_simulated=self.max_ticks,
            total_energy_consumed_kwh=self.stats.total_energy_consumed_kwh,
            actual_max_power_demand_kw=self.stats.actual_max_power_demand_kw,
            total_sessions=self.vehicle_tracker.total_sessions,
            completed_sessions=len(self.vehicle_tracker.get_completed_sessions()),
            busiest_day_sessions=max(sessions_per_day.values(), default=0),
            zero_demand_arrivals=self.vehicle_tracker.zero_demand_arrivals,
            wall_clock_time_seconds=(datetime.now() - start_time).total_seconds(),
            config=self.config,
            tick_recorder=self.tick_recorder,
            session_dataframe=self.vehicle_tracker.get_dataframe(),
        )

        if self.on_complete:
            self.on_complete(self.result)

        return self.result

    def _execute_tick(self, tick: int) -> None:
        cfg = self.config
        hour = (tick % cfg.ticks_per_day) // cfg.ticks_per_hour
        tick_probability = self._tick_arrival_probabilities[hour]

        energy_this_tick = 0.0
        power_demand_this_tick = 0.0
        occupied = 0
        arrivals = 0

        self._log_sim(tick, f"--- Starting Tick (Hour: {hour}) ---")

        for chargepoint in self.station.chargepoints:
            if chargepoint.is_available():
                if self.random.next() < tick_probability:
                    self._log_sim(tick, f"EV Arrival Event at CP {chargepoint.id} "
                                        f"(Prob: {tick_probability:.4f})")
                    if self._handle_arrival(chargepoint, tick):
                        arrivals += 1
                        energy_this_tick += chargepoint.process_charging_tick(tick)
            else:
                energy_this_tick += chargepoint.process_charging_tick(tick)

            if not chargepoint.is_available():
                power_demand_this_tick += chargepoint.power_kw
                occupied += 1

        self.stats.record_tick_data(energy_this_tick, power_demand_this_tick)
        if self.options.record_ticks:
            self.tick_recorder.record(tick, energy_this_tick, power_demand_this_tick, occupied, arrivals)

        self._log_sim(tick, f"Tick Summary: Energy Delivered: {energy_this_tick:.2f} kWh, "
                            f"Current Power Demand: {power_demand_this_tick:.2f} kW")

    def _handle_arrival(self, chargepoint, tick: int) -> bool:
        """
        Sample the arriving EV's demand and plug it in.
        Returns True if a vehicle was assigned (nothing delivered yet).
        """
        demand_km = weighted_choice(self.config.charging_demand_km_distribution, self.random)
        energy_needed_kwh = self.config.energy_needed_kwh(demand_km)

        if energy_needed_kwh <= 0:
            self.vehicle_tracker.record_zero_demand_arrival()
            chargepoint.log(tick, "EV arrived but rolled 0km demand, needs no charge.")
            return False

        ev = ElectricVehicle(self.next_ev_id, energy_needed_kwh)
        self.next_ev_id += 1
        if not chargepoint.assign_ev(ev, tick):
            return False

        self.vehicle_tracker.register_vehicle(ev, chargepoint.id, tick)
        return True

    # ========================================================================
    # REPORTING
    # ========================================================================

    def _get_tick_info(self) -> Dict[str, Any]:
        return {
            'tick': self.current_tick,
            'occupied': self.station.occupied_count(),
            'power_kw': self.station.current_power_demand_kw(),
            'total_energy_kwh': self.stats.total_energy_consumed_kwh,
            'max_power_kw': self.stats.actual_max_power_demand_kw,
            'sessions': self.vehicle_tracker.total_sessions,
        }

    def _print_progress(self, tick: int) -> None:
        day = tick // self.config.ticks_per_day + 1
        print(f"  Simulating... Tick {tick}/{self.max_ticks} (Day {day}) "
              f"for {self.options.num_chargepoints} CPs")

    def reset(self) -> None:
        """Discard all run state and start again from the same seed."""
        self._initialize()

    def __repr__(self) -> str:
        status = "running" if self.is_running else "idle"
        if self.result:
            status = "completed"
        elif self._started and not self.is_running:
            status = "aborted"
        return f"EVChargingSimulation({self.id}, {status}, tick={self.current_tick})"
