"""Shared types for the fuel models.

Two tank models coexist: the three aggregate tanks driven by the burn
model, and the five granular tanks owned by FuelSystem. Every state
snapshot is tagged with the model it came from so the two sets of
numbers are never mixed.
"""

from dataclasses import dataclass, field
from enum import Enum


class FuelSystemError(Exception):
    """Raised for unknown tanks, pumps, or invalid pump links."""


class TankModel(Enum):
    """Which tank model a state snapshot belongs to."""

    AGGREGATE = "aggregate"  # center / left wing / right wing
    GRANULAR = "granular"  # center, inner and outer wing tanks


class PumpState(Enum):
    """Per-pump state reported by FuelSystem.update()."""

    IDLE = "idle"  # Inactive, blocked, or nothing to move
    TRANSFERRING = "transferring"  # Moved fuel during the last update
    FAULT = "fault"  # Failed, ignores activation


@dataclass(frozen=True)
class PumpLink:
    """Explicit association between a pump and the tanks it connects.

    Attributes:
        source: Tank the pump draws from.
        target: Tank the pump delivers to.
    """

    source: str
    target: str

    @property
    def is_crossfeed(self) -> bool:
        """True when the link crosses from one wing group to the other."""
        return _side(self.source) != _side(self.target) and "center" not in (
            self.source,
            self.target,
        )


def _side(tank_name: str) -> str:
    return tank_name.split("_", 1)[0]


@dataclass
class FuelSystemState:
    """Snapshot of a fuel model.

    Attributes:
        model: Tank model this snapshot describes.
        volumes: Tank name -> current volume in liters.
        capacities: Tank name -> capacity in liters.
        total_volume: Sum of all tank volumes in liters.
        crossfeed_open: Crossfeed valve position (granular model only).
        pump_states: Per-pump state, in pump index order.
        warnings: Warning codes (LOW_FUEL).
        failures: Failure codes (FUEL_EXHAUSTED, PUMP_FAILURE).
    """

    model: TankModel
    volumes: dict[str, float]
    capacities: dict[str, float]
    total_volume: float
    crossfeed_open: bool = False
    pump_states: list[PumpState] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
