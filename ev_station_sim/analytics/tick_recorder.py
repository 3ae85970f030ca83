"""
Tick Recorder Module
Per-tick power and energy series, the basis for daily peak and daily
profile analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd


@dataclass
class TickRecord:
    """State of the station at the end of one tick."""
    tick: int
    day: int                # 1-based
    hour: int               # 0-23
    energy_kwh: float
    power_demand_kw: float
    occupied_chargepoints: int
    arrivals: int


class TickRecorder:
    """
    Stores one ``TickRecord`` per simulated tick.

    The DataFrame view is rebuilt lazily, only after new records arrive.
    """

    COLUMNS = [
        'tick', 'day', 'hour', 'energy_kwh', 'power_demand_kw',
        'occupied_chargepoints', 'arrivals',
    ]

    def __init__(self, ticks_per_hour: int, hours_per_day: int):
        self.ticks_per_hour = ticks_per_hour
        self.hours_per_day = hours_per_day
        self.ticks_per_day = ticks_per_hour * hours_per_day
        self.records: List[TickRecord] = []
        self._df: Optional[pd.DataFrame] = None

    def record(
        self,
        tick: int,
        energy_kwh: float,
        power_demand_kw: float,
        occupied_chargepoints: int,
        arrivals: int
    ) -> TickRecord:
        record = TickRecord(
            tick=tick,
            day=tick // self.ticks_per_day + 1,
            hour=(tick % self.ticks_per_day) // self.ticks_per_hour,
            energy_kwh=energy_kwh,
            power_demand_kw=power_demand_kw,
            occupied_chargepoints=occupied_chargepoints,
            arrivals=arrivals,
        )
        self.records.append(record)
        self._df = None
        return record

    def __len__(self) -> int:
        return len(self.records)

    # ========================================================================
    # ANALYSIS
    # ========================================================================

    def get_dataframe(self) -> pd.DataFrame:
        if self._df is None:
            self._df = pd.DataFrame(
                [(r.tick, r.day, r.hour, r.energy_kwh, r.power_demand_kw,
                  r.occupied_chargepoints, r.arrivals) for r in self.records],
                columns=self.COLUMNS,
            )
        return self._df

    def daily_peak_power(self) -> pd.Series:
        """Highest power demand per day, indexed by 1-based day."""
        df = self.get_dataframe()
        if df.empty:
            return pd.Series(dtype=float, name='peak_power_kw')
        return df.groupby('day')['power_demand_kw'].max().rename('peak_power_kw')

    def daily_energy(self) -> pd.Series:
        df = self.get_dataframe()
        if df.empty:
            return pd.Series(dtype=float, name='energy_kwh')
        return df.groupby('day')['energy_kwh'].sum().rename('energy_kwh')

    def exemplary_day(self, day: Optional[int] = None) -> pd.Series:
        """
        Mean power demand for each hour of one day.

        Defaults to the day with the highest peak (earliest on ties). Hours
        not covered by the recorded ticks are 0.
        """
        df = self.get_dataframe()
        hours = pd.RangeIndex(self.hours_per_day, name='hour')
        if df.empty:
            return pd.Series(np.zeros(self.hours_per_day), index=hours, name='power_demand_kw')

        if day is None:
            day = int(self.daily_peak_power().idxmax())
        day_df = df[df['day'] == day]
        if day_df.empty:
            raise KeyError(f"Day {day} was not simulated")

        return (day_df.groupby('hour')['power_demand_kw'].mean()
                .reindex(hours, fill_value=0.0)
                .rename('power_demand_kw'))

    def hourly_profile(self) -> pd.Series:
        """Mean power demand per hour of day over the whole run."""
        df = self.get_dataframe()
        hours = pd.RangeIndex(self.hours_per_day, name='hour')
        if df.empty:
            return pd.Series(np.zeros(self.hours_per_day), index=hours, name='power_demand_kw')
        return (df.groupby('hour')['power_demand_kw'].mean()
                .reindex(hours, fill_value=0.0)
                .rename('power_demand_kw'))

    def export_csv(self, filepath: str) -> None:
        self.get_dataframe().to_csv(filepath, index=False)

    def __repr__(self) -> str:
        return f"TickRecorder({len(self.records)} ticks)"
