"""
Shared pytest fixtures for the EV Station Sim test suite.
"""

import pytest

from ev_station_sim.charging.chargepoint import Chargepoint
from ev_station_sim.simulation import EVChargingSimulation, SimulationConfig, SimulationOptions
from ev_station_sim.vehicle.vehicle import ElectricVehicle


class ScriptedRandom:
    """Stand-in stream returning preset draws, counting how many were taken."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next(self):
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def default_chargepoint():
    """An idle 11 kW chargepoint with 15-minute ticks (2.75 kWh per tick)."""
    return Chargepoint(id=0)


@pytest.fixture
def small_ev():
    """An EV needing less than one tick of energy."""
    return ElectricVehicle(id=1, energy_needed_kwh=0.9)


@pytest.fixture
def large_ev():
    """An EV needing 54 kWh (300 km at 18 kWh/100km)."""
    return ElectricVehicle(id=2, energy_needed_kwh=54.0)


@pytest.fixture
def busy_config():
    """Every idle chargepoint gets an arrival each tick; every arrival needs 10 km."""
    return SimulationConfig(
        arrival_probability_per_hour=[1.0] * 24,
        arrival_multiplier=4.0,
        charging_demand_km_distribution=[(10, 1.0)],
    )


@pytest.fixture
def one_week_simulation():
    """Default station of 20 chargepoints over 7 simulated days."""
    return EVChargingSimulation(SimulationOptions(num_chargepoints=20, max_ticks=7 * 96))
