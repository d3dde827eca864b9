"""Fuel burn model for the aggregate (three-tank) fuel model.

The burn rate is a dimensionless blend of engine spool levels derated
with altitude plus a payload term, consumed as liters per simulated
second. Each step the rate is split across the center and wing tanks.

Typical usage:
    state = SimulationState()
    rate = calculate_fuel_burn(state.n1_level, state.n2_level, state.altitude, state.payload)
    simulate_fuel_burn(state, rate)
"""

from dataclasses import dataclass
from typing import ClassVar

from fuelsim.systems.fuel.base import FuelSystemState, TankModel

MTOW_TONNES = 319.0  # Maximum takeoff weight
FUEL_DENSITY = 0.8  # kg per liter
MAX_ALTITUDE_FT = 40000.0

CENTER_TANK_CAPACITY = 100000.0  # Liters
WING_TANK_CAPACITY = 56000.0  # Liters, each wing

# MTOW in kg less the weight of full aggregate tanks
MAX_PAYLOAD = MTOW_TONNES * 1000.0 - (
    CENTER_TANK_CAPACITY * FUEL_DENSITY + 2.0 * WING_TANK_CAPACITY * FUEL_DENSITY
)

CENTER_SHARE = 0.5
WING_SHARE = 0.25

# Input domains enforced by the control surface
ENGINE_LEVEL_RANGE = (0.0, 1.0)
ALTITUDE_RANGE = (0.0, MAX_ALTITUDE_FT)
PAYLOAD_RANGE = (0.0, MTOW_TONNES)


@dataclass
class SimulationState:
    """State of the aggregate fuel model.

    Defaults are the launch state of the control panel. Volumes are only
    floored at zero; the capacities are nominal and not enforced.

    Attributes:
        n1_level: Low-pressure spool level (0.0-1.0).
        n2_level: High-pressure spool level (0.0-1.0).
        altitude: Altitude in feet (0-40000).
        payload: Payload in tonnes (0-319).
        center_tank_volume: Center tank fuel in liters.
        left_wing_tank_volume: Left wing tank fuel in liters.
        right_wing_tank_volume: Right wing tank fuel in liters.
        time_elapsed: Simulated seconds since start.
        fuel_burn_rate: Burn rate computed at the last step.
    """

    MODEL: ClassVar[TankModel] = TankModel.AGGREGATE

    n1_level: float = 0.5
    n2_level: float = 0.5
    altitude: float = 10000.0
    payload: float = 0.0
    center_tank_volume: float = CENTER_TANK_CAPACITY
    left_wing_tank_volume: float = WING_TANK_CAPACITY
    right_wing_tank_volume: float = WING_TANK_CAPACITY
    time_elapsed: float = 0.0
    fuel_burn_rate: float = 0.0

    @property
    def total_fuel(self) -> float:
        return self.center_tank_volume + self.left_wing_tank_volume + self.right_wing_tank_volume

    def to_fuel_state(self, low_fuel_fraction: float = 0.1) -> FuelSystemState:
        """Snapshot the three tanks as a FuelSystemState.

        Args:
            low_fuel_fraction: Fraction of total capacity below which
                LOW_FUEL is raised.

        Returns:
            Snapshot tagged TankModel.AGGREGATE.
        """
        volumes = {
            "center": self.center_tank_volume,
            "left_wing": self.left_wing_tank_volume,
            "right_wing": self.right_wing_tank_volume,
        }
        capacities = {
            "center": CENTER_TANK_CAPACITY,
            "left_wing": WING_TANK_CAPACITY,
            "right_wing": WING_TANK_CAPACITY,
        }
        total = sum(volumes.values())

        warnings = []
        if total < sum(capacities.values()) * low_fuel_fraction:
            warnings.append("LOW_FUEL")

        failures = []
        if total <= 0.0:
            failures.append("FUEL_EXHAUSTED")

        return FuelSystemState(
            model=self.MODEL,
            volumes=volumes,
            capacities=capacities,
            total_volume=total,
            warnings=warnings,
            failures=failures,
        )


def calculate_fuel_burn(n1_level: float, n2_level: float, altitude: float, payload: float) -> float:
    """Calculate the fuel burn rate.

    Higher spool levels and lower altitude increase burn; payload adds a
    term proportional to MAX_PAYLOAD. Inputs are expected pre-clamped to
    their ranges and are not validated here.

    Args:
        n1_level: N1 spool level (0.0-1.0).
        n2_level: N2 spool level (0.0-1.0).
        altitude: Altitude in feet (0-40000).
        payload: Payload in tonnes (0-319).

    Returns:
        Burn rate in liters per simulated second.
    """
    altitude_factor = 1.0 - altitude / MAX_ALTITUDE_FT
    return (
        n1_level * altitude_factor * 0.5
        + n2_level * altitude_factor * 0.5
        + (payload / MAX_PAYLOAD) * 0.5
    )


def simulate_fuel_burn(state: SimulationState, burn_rate: float) -> None:
    """Burn one second of fuel from the aggregate tanks.

    Splits the rate 50/25/25 across center/left/right and floors each
    volume at zero. time_elapsed and fuel_burn_rate are the caller's.

    Args:
        state: State whose tank volumes are mutated in place.
        burn_rate: Liters to burn this step.
    """
    center_burn = burn_rate * CENTER_SHARE
    left_burn = burn_rate * WING_SHARE
    right_burn = burn_rate * WING_SHARE

    state.center_tank_volume = max(state.center_tank_volume - center_burn, 0.0)
    state.left_wing_tank_volume = max(state.left_wing_tank_volume - left_burn, 0.0)
    state.right_wing_tank_volume = max(state.right_wing_tank_volume - right_burn, 0.0)
