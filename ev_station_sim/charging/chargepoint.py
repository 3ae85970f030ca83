"""
Chargepoint Module
Single-vehicle charging slot with a fixed power rating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from ev_station_sim.errors import InvalidArgument
from ev_station_sim.vehicle.vehicle import ElectricVehicle

DEFAULT_POWER_KW = 11.0
DEFAULT_TICKS_PER_HOUR = 4


class ChargerStatus(Enum):
    AVAILABLE = auto()
    OCCUPIED = auto()


@dataclass
class Chargepoint:
    """
    Charging slot that holds at most one vehicle.

    AVAILABLE --assign_ev--> OCCUPIED --(fully charged | release_ev)--> AVAILABLE

    Every method that may trace takes the current tick as an argument; the
    chargepoint keeps no reference to the engine.
    """
    id: int
    power_kw: float = DEFAULT_POWER_KW
    ticks_per_hour: int = DEFAULT_TICKS_PER_HOUR
    verbose: bool = False
    current_ev: Optional[ElectricVehicle] = None
    on_release: Optional[Callable[[ElectricVehicle, int], None]] = field(default=None, repr=False)
    total_sessions: int = 0
    total_energy_delivered_kwh: float = 0.0

    def __post_init__(self):
        if self.power_kw <= 0:
            raise InvalidArgument(f"Chargepoint {self.id} power must be positive, got {self.power_kw}")
        if self.ticks_per_hour <= 0:
            raise InvalidArgument(f"ticks_per_hour must be positive, got {self.ticks_per_hour}")

    @property
    def status(self) -> ChargerStatus:
        return ChargerStatus.AVAILABLE if self.current_ev is None else ChargerStatus.OCCUPIED

    @property
    def energy_per_tick_kwh(self) -> float:
        """Rated power sustained for one tick."""
        return self.power_kw * (1 / self.ticks_per_hour)

    def is_available(self) -> bool:
        return self.current_ev is None

    def log(self, tick: int, message: str) -> None:
        """Tracing hook: prints ``[TICK t][CP id] message`` when verbose."""
        if self.verbose:
            print(f"[TICK {tick}][CP {self.id}] {message}")

    def assign_ev(self, ev: Optional[ElectricVehicle], tick: int = 0) -> bool:
        """
        Plug a vehicle in. Delivers nothing; the caller runs the first
        charging tick separately.

        Returns False (state unchanged) if the chargepoint is busy or the
        vehicle needs no charge.
        """
        if not self.is_available():
            self.log(tick, f"Attempted to assign EV[{getattr(ev, 'id', None)}] "
                           f"but chargepoint is busy with EV[{self.current_ev.id}].")
            return False
        if ev is None or not ev.energy_needed_kwh or ev.energy_needed_kwh <= 0:
            self.log(tick, f"Attempted to assign EV[{getattr(ev, 'id', None)}] but it needs no charge.")
            return False

        self.current_ev = ev
        self.total_sessions += 1
        self.log(tick, f"EV[{ev.id}] assigned. Needs {ev.energy_needed_kwh:.2f} kWh.")
        return True

    def process_charging_tick(self, tick: int = 0) -> float:
        """
        Deliver one tick of energy to the connected vehicle and release it
        once fully charged. Returns the energy actually delivered (0 if idle).
        """
        ev = self.current_ev
        if ev is None:
            return 0.0

        delivered = ev.charge(self.energy_per_tick_kwh)
        self.total_energy_delivered_kwh += delivered

        if delivered > 0:
            self.log(tick, f"Charging EV[{ev.id}]: +{delivered:.2f} kWh. "
                           f"(Total EV charge: {ev.energy_received_kwh:.2f}/"
                           f"{ev.energy_needed_kwh:.2f} kWh)")

        if ev.is_fully_charged():
            self.log(tick, f"EV[{ev.id}] fully charged! ({ev.energy_received_kwh:.2f} kWh). Releasing.")
            self.release_ev(tick)

        return delivered

    def release_ev(self, tick: int = 0) -> Optional[ElectricVehicle]:
        """Unplug the current vehicle, if any. Returns the released vehicle."""
        ev = self.current_ev
        if ev is None:
            return None

        self.current_ev = None
        if self.on_release is not None:
            self.on_release(ev, tick)
        return ev

    def __repr__(self) -> str:
        ev = f"EV[{self.current_ev.id}]" if self.current_ev else "idle"
        return f"Chargepoint({self.id}, {self.power_kw}kW, {ev})"
