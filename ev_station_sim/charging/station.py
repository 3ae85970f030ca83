"""
Station Module
Fixed, ordered collection of chargepoints.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from ev_station_sim.charging.chargepoint import Chargepoint, DEFAULT_POWER_KW, DEFAULT_TICKS_PER_HOUR
from ev_station_sim.errors import InvalidArgument
from ev_station_sim.vehicle.vehicle import ElectricVehicle


class ChargingStation:
    """
    Chargepoints indexed 0..n-1. Membership never changes after
    construction. An empty station is legal and never accepts an arrival.
    """

    def __init__(
        self,
        num_chargepoints: int,
        power_kw: float = DEFAULT_POWER_KW,
        ticks_per_hour: int = DEFAULT_TICKS_PER_HOUR,
        verbose: bool = False,
        on_release: Optional[Callable[[ElectricVehicle, int], None]] = None
    ):
        if num_chargepoints < 0:
            raise InvalidArgument(f"Chargepoint count cannot be negative, got {num_chargepoints}")

        self.chargepoints: List[Chargepoint] = [
            Chargepoint(
                id=i,
                power_kw=power_kw,
                ticks_per_hour=ticks_per_hour,
                verbose=verbose,
                on_release=on_release,
            )
            for i in range(num_chargepoints)
        ]

    def find_available_chargepoint(self) -> Optional[Chargepoint]:
        """First idle chargepoint in index order, or None."""
        return next((cp for cp in self.chargepoints if cp.is_available()), None)

    def get_total_chargepoints(self) -> int:
        return len(self.chargepoints)

    def occupied_count(self) -> int:
        return sum(1 for cp in self.chargepoints if not cp.is_available())

    def current_power_demand_kw(self) -> float:
        return sum(cp.power_kw for cp in self.chargepoints if not cp.is_available())

    def __iter__(self) -> Iterator[Chargepoint]:
        return iter(self.chargepoints)

    def __len__(self) -> int:
        return len(self.chargepoints)

    def __repr__(self) -> str:
        return f"ChargingStation({len(self)} chargepoints, {self.occupied_count()} occupied)"
