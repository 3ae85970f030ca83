"""charging – chargepoint state machine and station."""

from .chargepoint import ChargerStatus, Chargepoint, DEFAULT_POWER_KW, DEFAULT_TICKS_PER_HOUR
from .station import ChargingStation

__all__ = [
    "ChargerStatus", "Chargepoint", "DEFAULT_POWER_KW", "DEFAULT_TICKS_PER_HOUR",
    "ChargingStation",
]
