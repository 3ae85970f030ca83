"""
VehicleTracker Module
Lifecycle log of every vehicle created during one simulation run.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import pandas as pd

from ev_station_sim.vehicle.vehicle import ElectricVehicle


@dataclass
class ChargingSessionRecord:
    """One charging session: a vehicle from arrival to release."""
    vehicle_id: int
    chargepoint_id: int
    arrival_tick: int
    energy_needed_kwh: float
    energy_received_kwh: float = 0.0
    release_tick: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.release_tick is not None

    def duration_ticks(self, current_tick: Optional[int] = None) -> Optional[int]:
        """Ticks spent connected, counting the arrival tick itself."""
        end = self.release_tick if self.release_tick is not None else current_tick
        if end is None:
            return None
        return end - self.arrival_tick + 1


class VehicleTracker:
    """
    Single source of truth for vehicles created in a run.

    The engine registers each vehicle when its arrival is accepted; the
    chargepoint's release callback closes the session and the tracker drops
    its reference to the vehicle. Vehicles still plugged in at the end of
    the run stay open.
    """

    def __init__(self):
        self.sessions: Dict[int, ChargingSessionRecord] = {}
        self._open_vehicles: Dict[int, ElectricVehicle] = {}
        self.zero_demand_arrivals: int = 0

    def register_vehicle(self, vehicle: ElectricVehicle, chargepoint_id: int, tick: int) -> ChargingSessionRecord:
        if vehicle.id in self.sessions:
            raise ValueError(f"Vehicle {vehicle.id} already registered")
        record = ChargingSessionRecord(
            vehicle_id=vehicle.id,
            chargepoint_id=chargepoint_id,
            arrival_tick=tick,
            energy_needed_kwh=vehicle.energy_needed_kwh,
        )
        self.sessions[vehicle.id] = record
        self._open_vehicles[vehicle.id] = vehicle
        return record

    def record_zero_demand_arrival(self) -> None:
        self.zero_demand_arrivals += 1

    def record_release(self, vehicle: ElectricVehicle, tick: int) -> None:
        """Close the session of a released vehicle."""
        record = self.sessions.get(vehicle.id)
        if record is None:
            return
        record.energy_received_kwh = vehicle.energy_received_kwh
        record.release_tick = tick
        self._open_vehicles.pop(vehicle.id, None)

    def sync(self) -> None:
        """Copy current energy of still-connected vehicles into their records."""
        for vid, vehicle in self._open_vehicles.items():
            self.sessions[vid].energy_received_kwh = vehicle.energy_received_kwh

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def total_sessions(self) -> int:
        return len(self.sessions)

    def get_active_sessions(self) -> List[ChargingSessionRecord]:
        return [r for r in self.sessions.values() if not r.is_complete]

    def get_completed_sessions(self) -> List[ChargingSessionRecord]:
        return [r for r in self.sessions.values() if r.is_complete]

    def total_energy_received_kwh(self) -> float:
        """Energy received by every vehicle ever created: closed records plus open vehicles."""
        self.sync()
        return sum(r.energy_received_kwh for r in self.sessions.values())

    def sessions_per_day(self, ticks_per_day: int) -> Dict[int, int]:
        """Session count keyed by 1-based arrival day."""
        return dict(Counter(r.arrival_tick // ticks_per_day + 1 for r in self.sessions.values()))

    def get_dataframe(self) -> pd.DataFrame:
        self.sync()
        columns = [
            'vehicle_id', 'chargepoint_id', 'arrival_tick', 'energy_needed_kwh',
            'energy_received_kwh', 'release_tick',
        ]
        if not self.sessions:
            return pd.DataFrame(columns=columns)
        df = pd.DataFrame([asdict(r) for r in self.sessions.values()], columns=columns)
        df['release_tick'] = df['release_tick'].astype('Int64')
        return df

    def __repr__(self) -> str:
        return (f"VehicleTracker(sessions={self.total_sessions}, "
                f"active={len(self.get_active_sessions())})")
