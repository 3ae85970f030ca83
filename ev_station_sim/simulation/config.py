"""
Simulation configuration: station constants, hourly arrival probabilities
and the charging demand distribution.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List

from ev_station_sim.errors import InvalidArgument
from ev_station_sim.utils.distributions import DemandDistributionItem

POWER_PER_CHARGEPOINT_KW = 11.0
DAYS_IN_YEAR = 365                  # Non-leap year
TICKS_PER_HOUR = 4                  # 15-minute ticks
HOURS_PER_DAY = 24
TOTAL_TICKS_PER_YEAR = DAYS_IN_YEAR * HOURS_PER_DAY * TICKS_PER_HOUR
KWH_PER_100KM = 18.0

DEFAULT_SIMULATION_SEED = 12345

# Ticks simulated by default when tracing is switched on (half a day)
VERBOSE_DEFAULT_MAX_TICKS = 48

# Probability that an EV arrives at an *available* chargepoint during each
# hour of the day (index 0 = 00:00-01:00)
ARRIVAL_PROBABILITY_PER_HOUR: List[float] = [
    0.0094, 0.0094, 0.0094, 0.0094, 0.0094, 0.0094,     # 00-06
    0.0094, 0.0094, 0.0283, 0.0283, 0.0566, 0.0566,     # 06-12
    0.0566, 0.0755, 0.0755, 0.0755, 0.1038, 0.1038,     # 12-18
    0.1038, 0.0472, 0.0472, 0.0472, 0.0094, 0.0094,     # 18-24
]

# Distance driven since the last charge (km) for an arriving EV.
# 0 km means the driver does not charge at all.
CHARGING_DEMAND_KM_DISTRIBUTION: List[DemandDistributionItem] = [
    DemandDistributionItem(0, 0.3431),
    DemandDistributionItem(5, 0.0490),
    DemandDistributionItem(10, 0.0980),
    DemandDistributionItem(20, 0.1176),
    DemandDistributionItem(30, 0.0882),
    DemandDistributionItem(50, 0.1176),
    DemandDistributionItem(100, 0.1078),
    DemandDistributionItem(200, 0.0490),
    DemandDistributionItem(300, 0.0294),
]


@dataclass
class SimulationConfig:
    """Physical and statistical constants of one station."""
    power_per_chargepoint_kw: float = POWER_PER_CHARGEPOINT_KW
    days_in_year: int = DAYS_IN_YEAR
    ticks_per_hour: int = TICKS_PER_HOUR
    hours_per_day: int = HOURS_PER_DAY
    kwh_per_100km: float = KWH_PER_100KM

    arrival_probability_per_hour: List[float] = field(
        default_factory=lambda: list(ARRIVAL_PROBABILITY_PER_HOUR)
    )
    charging_demand_km_distribution: List[DemandDistributionItem] = field(
        default_factory=lambda: list(CHARGING_DEMAND_KM_DISTRIBUTION)
    )

    # Scales every hourly arrival probability (1.0 = table as given)
    arrival_multiplier: float = 1.0

    def __post_init__(self):
        # Accept plain (km, probability) pairs
        self.charging_demand_km_distribution = [
            item if isinstance(item, DemandDistributionItem) else DemandDistributionItem(*item)
            for item in self.charging_demand_km_distribution
        ]

    @property
    def ticks_per_day(self) -> int:
        return self.hours_per_day * self.ticks_per_hour

    @property
    def total_ticks_per_year(self) -> int:
        return self.days_in_year * self.ticks_per_day

    def tick_arrival_probability(self, hour: int) -> float:
        """Arrival probability for one tick, spread evenly over the hour."""
        return self.arrival_probability_per_hour[hour] * self.arrival_multiplier / self.ticks_per_hour

    def energy_needed_kwh(self, demand_km: float) -> float:
        return (demand_km / 100) * self.kwh_per_100km

    def validate(self) -> None:
        """Raise InvalidArgument for any malformed constant or table."""
        if self.power_per_chargepoint_kw <= 0:
            raise InvalidArgument(f"power_per_chargepoint_kw must be positive, got {self.power_per_chargepoint_kw}")
        for name in ('days_in_year', 'ticks_per_hour', 'hours_per_day'):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
        if self.kwh_per_100km <= 0:
            raise InvalidArgument(f"kwh_per_100km must be positive, got {self.kwh_per_100km}")
        if self.arrival_multiplier < 0:
            raise InvalidArgument(f"arrival_multiplier cannot be negative, got {self.arrival_multiplier}")

        hourly = self.arrival_probability_per_hour
        if len(hourly) != self.hours_per_day:
            raise InvalidArgument(
                f"Hourly arrival table needs {self.hours_per_day} entries, got {len(hourly)}"
            )
        if any(not 0.0 <= p <= 1.0 for p in hourly):
            raise InvalidArgument("Hourly arrival probabilities must lie in [0, 1]")
        if not any(p > 0 for p in hourly):
            raise InvalidArgument("Hourly arrival table is all zero")

        demand = self.charging_demand_km_distribution
        if not demand:
            raise InvalidArgument("Charging demand distribution cannot be empty")
        for item in demand:
            if item.value < 0:
                raise InvalidArgument(f"Demand distance cannot be negative, got {item.value}")
            if item.probability < 0:
                raise InvalidArgument(f"Demand probability cannot be negative, got {item.probability}")

    def to_dict(self) -> Dict:
        return asdict(self)
