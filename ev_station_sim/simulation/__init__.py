"""simulation – configuration, tick-loop engine and result container."""

from .config import (
    POWER_PER_CHARGEPOINT_KW, DAYS_IN_YEAR, TICKS_PER_HOUR, HOURS_PER_DAY,
    TOTAL_TICKS_PER_YEAR, KWH_PER_100KM, DEFAULT_SIMULATION_SEED, VERBOSE_DEFAULT_MAX_TICKS,
    ARRIVAL_PROBABILITY_PER_HOUR, CHARGING_DEMAND_KM_DISTRIBUTION, SimulationConfig,
)
from .simulation import SimulationOptions, SimulationResult, EVChargingSimulation

__all__ = [
    "POWER_PER_CHARGEPOINT_KW", "DAYS_IN_YEAR", "TICKS_PER_HOUR", "HOURS_PER_DAY",
    "TOTAL_TICKS_PER_YEAR", "KWH_PER_100KM", "DEFAULT_SIMULATION_SEED", "VERBOSE_DEFAULT_MAX_TICKS",
    "ARRIVAL_PROBABILITY_PER_HOUR", "CHARGING_DEMAND_KM_DISTRIBUTION", "SimulationConfig",
    "SimulationOptions", "SimulationResult", "EVChargingSimulation",
]
