"""Fuel network primitives: tanks, pumps and valves.

Tanks enforce 0 <= current_volume <= capacity on every mutation by
clamping. Mutators return the volume actually applied, so a caller
moving fuel between tanks can tell a full or empty tank apart from a
completed transfer.

Typical usage:
    tank = Tank(100.0)
    tank.add_fuel(150.0)     # returns 100.0, tank is full
    tank.remove_fuel(200.0)  # returns 100.0, tank is empty
"""

from dataclasses import dataclass


@dataclass
class Tank:
    """Bounded fuel tank.

    Attributes:
        capacity: Maximum volume in liters.
        current_volume: Current volume in liters (starts empty).
        name: Tank identifier (e.g., "center", "left_inner").
    """

    capacity: float
    current_volume: float = 0.0
    name: str = ""

    def __post_init__(self) -> None:
        self.current_volume = min(max(self.current_volume, 0.0), self.capacity)

    def add_fuel(self, volume: float) -> float:
        """Add fuel, clamping to [0, capacity].

        Args:
            volume: Liters to add.

        Returns:
            Liters actually added. Less than volume when the tank filled up.
            Negative when a negative volume drained the tank.
        """
        before = self.current_volume
        self.current_volume += volume
        if self.current_volume > self.capacity:
            self.current_volume = self.capacity
        elif self.current_volume < 0.0:
            self.current_volume = 0.0
        return self.current_volume - before

    def remove_fuel(self, volume: float) -> float:
        """Remove fuel, clamping to [0, capacity].

        Args:
            volume: Liters to remove.

        Returns:
            Liters actually removed. Less than volume when the tank ran dry.
        """
        before = self.current_volume
        self.current_volume -= volume
        if self.current_volume < 0.0:
            self.current_volume = 0.0
        elif self.current_volume > self.capacity:
            self.current_volume = self.capacity
        return before - self.current_volume

    @property
    def is_full(self) -> bool:
        return self.current_volume >= self.capacity

    @property
    def is_empty(self) -> bool:
        return self.current_volume <= 0.0

    @property
    def fill_fraction(self) -> float:
        """Current volume as a fraction of capacity (0.0 for zero capacity)."""
        if self.capacity <= 0.0:
            return 0.0
        return self.current_volume / self.capacity


@dataclass
class Pump:
    """Fuel transfer pump.

    A failed pump stays failed until repaired and moves no fuel even if
    its switch is on.

    Attributes:
        is_active: Pump switch position.
        failed: Whether the pump has failed.
    """

    is_active: bool = False
    failed: bool = False

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def fail(self) -> None:
        self.failed = True

    def repair(self) -> None:
        self.failed = False


@dataclass
class Valve:
    """Two-position valve (crossfeed).

    Attributes:
        is_open: Valve position.
    """

    is_open: bool = False

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
