"""
Statistics Module
Running totals for delivered energy and peak power demand.
"""

from __future__ import annotations


class SimulationStatistics:
    """
    Aggregates per-tick results.

    ``total_energy_consumed_kwh`` sums every tick's delivered energy;
    ``actual_max_power_demand_kw`` keeps the highest per-tick sum of rated
    power over occupied chargepoints.
    """

    def __init__(self):
        self.total_energy_consumed_kwh: float = 0.0
        self.actual_max_power_demand_kw: float = 0.0
        self.ticks_recorded: int = 0

    def reset(self) -> None:
        self.total_energy_consumed_kwh = 0.0
        self.actual_max_power_demand_kw = 0.0
        self.ticks_recorded = 0

    def record_tick_data(self, energy_this_tick_kwh: float, power_demand_this_tick_kw: float) -> None:
        self.total_energy_consumed_kwh += energy_this_tick_kwh
        if power_demand_this_tick_kw > self.actual_max_power_demand_kw:
            self.actual_max_power_demand_kw = power_demand_this_tick_kw
        self.ticks_recorded += 1

    def to_dict(self) -> dict:
        return {
            'total_energy_consumed_kwh': self.total_energy_consumed_kwh,
            'actual_max_power_demand_kw': self.actual_max_power_demand_kw,
            'ticks_recorded': self.ticks_recorded,
        }

    def __repr__(self) -> str:
        return (f"SimulationStatistics(energy={self.total_energy_consumed_kwh:.2f}kWh, "
                f"max_power={self.actual_max_power_demand_kw:.2f}kW)")
