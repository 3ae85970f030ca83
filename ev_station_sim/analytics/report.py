"""
Report Module
Figures derived from a finished run: theoretical maximum power, concurrency
factor and a charging events breakdown built from recorded sessions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ev_station_sim.simulation.simulation import SimulationResult

# Non-leap calendar
MONTH_DAYS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Reference ranges for the 20-chargepoint, default-seed, full-year run
REFERENCE_MAX_POWER_KW = (77.0, 121.0)
REFERENCE_CONCURRENCY_PERCENT = (35.0, 55.0)


@dataclass
class ChargingEventsBreakdown:
    """Charging sessions per calendar month plus daily and weekly averages."""
    per_month: List[int] = field(default_factory=lambda: [0] * 12)
    avg_per_week: float = 0.0
    avg_per_day: float = 0.0


def theoretical_max_power_kw(num_chargepoints: int, power_per_chargepoint_kw: float) -> float:
    """Power demand with every chargepoint active at once."""
    return num_chargepoints * power_per_chargepoint_kw


def concurrency_factor(actual_max_power_kw: float, theoretical_max_kw: float) -> float:
    """Observed peak as a percentage of the theoretical maximum (0 if none)."""
    if theoretical_max_kw <= 0:
        return 0.0
    return actual_max_power_kw / theoretical_max_kw * 100


def month_of_day(day) -> np.ndarray:
    """0-based month index for 1-based day(s) of year; days past 365 count as December."""
    boundaries = np.cumsum(MONTH_DAYS)
    return np.minimum(np.searchsorted(boundaries, np.asarray(day), side='left'), 11)


def charging_events_breakdown(result: SimulationResult) -> ChargingEventsBreakdown:
    """
    Count recorded sessions by the calendar month of their arrival day.

    Averages are taken over the days actually simulated.
    """
    breakdown = ChargingEventsBreakdown()
    sessions = result.session_dataframe
    if sessions.empty:
        return breakdown

    ticks_per_day = result.config.ticks_per_day
    days = sessions['arrival_tick'].to_numpy() // ticks_per_day + 1
    counts = np.bincount(month_of_day(days), minlength=12)
    breakdown.per_month = [int(c) for c in counts]

    days_simulated = result.days_simulated
    breakdown.avg_per_day = result.total_sessions / days_simulated
    breakdown.avg_per_week = result.total_sessions / (days_simulated / 7)
    return breakdown


def build_summary(result: SimulationResult) -> Dict[str, Any]:
    """Flat dictionary of headline figures for printing or JSON export."""
    theoretical = theoretical_max_power_kw(
        result.num_chargepoints, result.config.power_per_chargepoint_kw
    )
    summary = {
        'num_chargepoints': result.num_chargepoints,
        'seed': result.seed,
        'ticks_simulated': result.ticks_simulated,
        'days_simulated': result.days_simulated,
        'total_energy_consumed_kwh': result.total_energy_consumed_kwh,
        'theoretical_max_power_demand_kw': theoretical,
        'actual_max_power_demand_kw': result.actual_max_power_demand_kw,
        'concurrency_factor_percent': concurrency_factor(result.actual_max_power_demand_kw, theoretical),
        'num_charging_sessions': result.total_sessions,
        'completed_sessions': result.completed_sessions,
        'busiest_day_sessions': result.busiest_day_sessions,
        'zero_demand_arrivals': result.zero_demand_arrivals,
        'events_breakdown': asdict(charging_events_breakdown(result)),
    }

    peaks = result.tick_recorder.daily_peak_power()
    if not peaks.empty:
        summary['peak_day'] = int(peaks.idxmax())
        summary['mean_daily_peak_kw'] = float(peaks.mean())

    return summary


def within(value: float, bounds) -> bool:
    low, high = bounds
    return low <= value <= high
