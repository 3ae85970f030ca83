"""vehicle – EV energy accumulator and per-session tracker."""

from .vehicle import ElectricVehicle, FULL_CHARGE_EPSILON_KWH
from .tracker import ChargingSessionRecord, VehicleTracker

__all__ = [
    "ElectricVehicle", "FULL_CHARGE_EPSILON_KWH",
    "ChargingSessionRecord", "VehicleTracker",
]
