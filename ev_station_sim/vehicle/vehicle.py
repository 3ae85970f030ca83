"""
Vehicle Module
Electric vehicle as a pure energy accumulator for one charging session.
"""

from __future__ import annotations

from dataclasses import dataclass

from ev_station_sim.errors import InvalidArgument

# Absorbs float accumulation error when charging in fractional increments
FULL_CHARGE_EPSILON_KWH = 0.0001


@dataclass
class ElectricVehicle:
    """
    An EV that arrived at the station needing a fixed amount of energy.

    ``energy_received_kwh`` only grows and never exceeds
    ``energy_needed_kwh``.
    """
    id: int
    energy_needed_kwh: float
    energy_received_kwh: float = 0.0

    def __post_init__(self):
        if self.energy_needed_kwh <= 0:
            raise InvalidArgument(
                f"EV {self.id} must need a positive amount of energy, "
                f"got {self.energy_needed_kwh}"
            )
        if not 0.0 <= self.energy_received_kwh <= self.energy_needed_kwh:
            raise InvalidArgument(
                f"EV {self.id} received energy {self.energy_received_kwh} "
                f"outside [0, {self.energy_needed_kwh}]"
            )

    @property
    def remaining_kwh(self) -> float:
        return max(0.0, self.energy_needed_kwh - self.energy_received_kwh)

    def charge(self, energy_kwh: float) -> float:
        """
        Offer energy to the vehicle. Returns the amount actually accepted,
        clamped to the remaining need and never negative.
        """
        accepted = max(0.0, min(energy_kwh, self.remaining_kwh))
        self.energy_received_kwh += accepted
        return accepted

    def is_fully_charged(self) -> bool:
        return self.energy_received_kwh >= self.energy_needed_kwh - FULL_CHARGE_EPSILON_KWH

    def __repr__(self) -> str:
        return (f"ElectricVehicle({self.id}, "
                f"{self.energy_received_kwh:.2f}/{self.energy_needed_kwh:.2f} kWh)")
