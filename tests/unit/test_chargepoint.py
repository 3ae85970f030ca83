"""
Unit tests for Chargepoint.

Covers:
- Initialization: defaults, energy per tick, invalid ratings
- assign_ev(): busy slot, missing or zero-need vehicle, no delivery on assign
- process_charging_tick(): idle slot, automatic release, partial final tick
- release_ev(): idempotence and release callback
- Tracing output when verbose
"""

from types import SimpleNamespace

import pytest

from ev_station_sim.charging.chargepoint import Chargepoint, ChargerStatus
from ev_station_sim.errors import InvalidArgument
from ev_station_sim.vehicle.vehicle import ElectricVehicle


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

class TestChargepointInit:
    def test_defaults(self, default_chargepoint):
        assert default_chargepoint.power_kw == 11.0
        assert default_chargepoint.status == ChargerStatus.AVAILABLE
        assert default_chargepoint.is_available() is True

    def test_energy_per_tick(self, default_chargepoint):
        assert default_chargepoint.energy_per_tick_kwh == pytest.approx(2.75)

    def test_energy_per_tick_hourly(self):
        cp = Chargepoint(id=1, power_kw=22.0, ticks_per_hour=1)
        assert cp.energy_per_tick_kwh == pytest.approx(22.0)

    def test_non_positive_power_rejected(self):
        with pytest.raises(InvalidArgument):
            Chargepoint(id=0, power_kw=0.0)

    def test_non_positive_ticks_rejected(self):
        with pytest.raises(InvalidArgument):
            Chargepoint(id=0, ticks_per_hour=0)


# ---------------------------------------------------------------------------
# assign_ev
# ---------------------------------------------------------------------------

class TestAssignEV:
    def test_assign_to_idle(self, default_chargepoint, large_ev):
        assert default_chargepoint.assign_ev(large_ev) is True
        assert default_chargepoint.current_ev is large_ev
        assert default_chargepoint.status == ChargerStatus.OCCUPIED
        assert default_chargepoint.total_sessions == 1

    def test_assign_delivers_nothing(self, default_chargepoint, large_ev):
        default_chargepoint.assign_ev(large_ev)
        assert large_ev.energy_received_kwh == 0.0
        assert default_chargepoint.total_energy_delivered_kwh == 0.0

    def test_busy_keeps_existing_vehicle(self, default_chargepoint, large_ev, small_ev):
        default_chargepoint.assign_ev(large_ev)
        assert default_chargepoint.assign_ev(small_ev) is False
        assert default_chargepoint.current_ev is large_ev
        assert default_chargepoint.total_sessions == 1

    def test_none_rejected(self, default_chargepoint):
        assert default_chargepoint.assign_ev(None) is False
        assert default_chargepoint.is_available()

    def test_zero_need_rejected(self, default_chargepoint):
        ev = SimpleNamespace(id=9, energy_needed_kwh=0.0)
        assert default_chargepoint.assign_ev(ev) is False
        assert default_chargepoint.is_available()


# ---------------------------------------------------------------------------
# process_charging_tick
# ---------------------------------------------------------------------------

class TestProcessChargingTick:
    def test_idle_delivers_nothing(self, default_chargepoint):
        assert default_chargepoint.process_charging_tick() == 0.0

    def test_small_ev_released_same_tick(self, default_chargepoint, small_ev):
        released = []
        default_chargepoint.on_release = lambda ev, tick: released.append((ev.id, tick))
        default_chargepoint.assign_ev(small_ev, tick=5)

        delivered = default_chargepoint.process_charging_tick(tick=5)

        assert delivered == pytest.approx(0.9)
        assert default_chargepoint.is_available()
        assert released == [(1, 5)]

    def test_large_ev_takes_twenty_ticks(self, default_chargepoint, large_ev):
        default_chargepoint.assign_ev(large_ev)
        for tick in range(19):
            assert default_chargepoint.process_charging_tick(tick) == pytest.approx(2.75)
        assert large_ev.energy_received_kwh == pytest.approx(52.25)
        assert not default_chargepoint.is_available()

        assert default_chargepoint.process_charging_tick(19) == pytest.approx(1.75)
        assert large_ev.is_fully_charged()
        assert default_chargepoint.is_available()

    def test_total_energy_delivered_accumulates(self, default_chargepoint, large_ev, small_ev):
        default_chargepoint.assign_ev(small_ev)
        default_chargepoint.process_charging_tick()
        default_chargepoint.assign_ev(large_ev)
        default_chargepoint.process_charging_tick()
        assert default_chargepoint.total_energy_delivered_kwh == pytest.approx(0.9 + 2.75)
        assert default_chargepoint.total_sessions == 2


# ---------------------------------------------------------------------------
# release_ev
# ---------------------------------------------------------------------------

class TestReleaseEV:
    def test_release_returns_vehicle(self, default_chargepoint, large_ev):
        default_chargepoint.assign_ev(large_ev)
        assert default_chargepoint.release_ev() is large_ev
        assert default_chargepoint.is_available()

    def test_release_idle_is_noop(self, default_chargepoint):
        calls = []
        default_chargepoint.on_release = lambda ev, tick: calls.append(ev)
        assert default_chargepoint.release_ev() is None
        assert default_chargepoint.release_ev() is None
        assert calls == []

    def test_early_release_keeps_partial_energy(self, default_chargepoint, large_ev):
        default_chargepoint.assign_ev(large_ev)
        default_chargepoint.process_charging_tick()
        ev = default_chargepoint.release_ev()
        assert ev.energy_received_kwh == pytest.approx(2.75)
        assert not ev.is_fully_charged()


# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------

class TestChargepointTracing:
    def test_silent_by_default(self, default_chargepoint, small_ev, capsys):
        default_chargepoint.assign_ev(small_ev)
        default_chargepoint.process_charging_tick()
        assert capsys.readouterr().out == ""

    def test_verbose_lines_tagged(self, small_ev, capsys):
        cp = Chargepoint(id=3, verbose=True)
        cp.assign_ev(small_ev, tick=7)
        cp.process_charging_tick(tick=7)
        lines = capsys.readouterr().out.splitlines()
        assert lines
        assert all(line.startswith("[TICK 7][CP 3]") for line in lines)
        assert any("fully charged" in line for line in lines)

    def test_busy_assign_traced(self, large_ev, capsys):
        cp = Chargepoint(id=0, verbose=True)
        cp.assign_ev(large_ev)
        cp.assign_ev(ElectricVehicle(id=8, energy_needed_kwh=1.0), tick=2)
        assert "busy" in capsys.readouterr().out
