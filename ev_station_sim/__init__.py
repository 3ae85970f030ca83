"""
EV Station Sim
==============
Tick-based simulation of a single EV charging station over a simulated year,
with seeded, reproducible arrivals and charging demand.

Package layout
--------------
ev_station_sim/
    simulation/     – configuration, tick-loop engine, result container
    vehicle/        – EV energy accumulator, per-session tracker
    charging/       – chargepoint state machine, station
    analytics/      – running statistics, per-tick recorder, derived report
    utils/          – seeded random stream, weighted choice, run directories
"""

__version__ = "0.3.0"
