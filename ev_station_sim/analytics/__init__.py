"""analytics – running statistics, per-tick recording and derived reports."""

from .statistics import SimulationStatistics
from .tick_recorder import TickRecord, TickRecorder
from .report import (
    MONTH_DAYS, MONTH_NAMES, REFERENCE_MAX_POWER_KW, REFERENCE_CONCURRENCY_PERCENT,
    ChargingEventsBreakdown, theoretical_max_power_kw, concurrency_factor,
    month_of_day, charging_events_breakdown, build_summary, within,
)

__all__ = [
    "SimulationStatistics", "TickRecord", "TickRecorder",
    "MONTH_DAYS", "MONTH_NAMES", "REFERENCE_MAX_POWER_KW", "REFERENCE_CONCURRENCY_PERCENT",
    "ChargingEventsBreakdown", "theoretical_max_power_kw", "concurrency_factor",
    "month_of_day", "charging_events_breakdown", "build_summary", "within",
]
