"""Fuel systems package.

Provides the burn model over the aggregate three-tank model and the
granular five-tank network with pumps and a crossfeed valve.
"""

from fuelsim.systems.fuel.base import (
    FuelSystemError,
    FuelSystemState,
    PumpLink,
    PumpState,
    TankModel,
)
from fuelsim.systems.fuel.burn_model import (
    SimulationState,
    calculate_fuel_burn,
    simulate_fuel_burn,
)
from fuelsim.systems.fuel.components import Pump, Tank, Valve
from fuelsim.systems.fuel.fuel_system import FuelSystem

__all__ = [
    "FuelSystem",
    "FuelSystemError",
    "FuelSystemState",
    "Pump",
    "PumpLink",
    "PumpState",
    "SimulationState",
    "Tank",
    "TankModel",
    "Valve",
    "calculate_fuel_burn",
    "simulate_fuel_burn",
]
