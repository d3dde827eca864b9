"""Granular fuel network: five tanks, five transfer pumps, crossfeed valve.

Each pump is linked by index to a source and a target tank. On update an
active, healthy pump moves transfer_rate_lps * delta_time liters from its
source to its target; links that cross between wing groups only flow
while the crossfeed valve is open. Fuel the target cannot accept is put
back in the source, so transfers conserve fuel.

The transfer rate defaults to 0.0 L/s, which leaves update() a no-op on
volumes while still reporting pump states.

Typical usage:
    system = FuelSystem(transfer_rate_lps=2.0)
    system.left_outer_tank.add_fuel(5000.0)
    system.activate_pump(0)
    system.update(1.0)
    state = system.get_state()
"""

import logging

from fuelsim.core.config import ConfigLoader
from fuelsim.systems.fuel.base import (
    FuelSystemError,
    FuelSystemState,
    PumpLink,
    PumpState,
    TankModel,
)
from fuelsim.systems.fuel.components import Pump, Tank, Valve

logger = logging.getLogger(__name__)

# Tank order is also the order of FuelSystem.tanks
TANK_CAPACITIES: dict[str, float] = {
    "center": 24000.0,
    "left_inner": 15000.0,
    "left_outer": 5000.0,
    "right_inner": 15000.0,
    "right_outer": 5000.0,
}

DEFAULT_PUMP_LINKS: tuple[PumpLink, ...] = (
    PumpLink("left_outer", "left_inner"),
    PumpLink("right_outer", "right_inner"),
    PumpLink("left_inner", "center"),
    PumpLink("right_inner", "center"),
    PumpLink("left_inner", "right_inner"),  # Crossfeed
)

PUMP_COUNT = len(DEFAULT_PUMP_LINKS)


class FuelSystem:
    """Granular fuel system model.

    Attributes:
        center_tank: Center tank (24000 L).
        left_inner_tank: Left inner wing tank (15000 L).
        left_outer_tank: Left outer wing tank (5000 L).
        right_inner_tank: Right inner wing tank (15000 L).
        right_outer_tank: Right outer wing tank (5000 L).
        crossfeed_valve: Valve gating transfers between wing groups.
        pumps: Transfer pumps, index-linked to pump_links.
        pump_links: Source/target tank for each pump.
        transfer_rate_lps: Flow of an active pump in liters per second.
        low_fuel_fraction: Fraction of total capacity below which
            LOW_FUEL is reported.
    """

    MODEL = TankModel.GRANULAR

    def __init__(
        self,
        transfer_rate_lps: float = 0.0,
        pump_links: list[PumpLink] | None = None,
        low_fuel_fraction: float = 0.1,
    ) -> None:
        """Build the network with empty tanks, a closed valve and idle pumps.

        Args:
            transfer_rate_lps: Pump flow in liters per second.
            pump_links: One link per pump. Defaults to DEFAULT_PUMP_LINKS.
            low_fuel_fraction: LOW_FUEL threshold as a fraction of capacity.

        Raises:
            FuelSystemError: If the links are the wrong count or name
                unknown tanks.
        """
        self.center_tank = Tank(TANK_CAPACITIES["center"], name="center")
        self.left_inner_tank = Tank(TANK_CAPACITIES["left_inner"], name="left_inner")
        self.left_outer_tank = Tank(TANK_CAPACITIES["left_outer"], name="left_outer")
        self.right_inner_tank = Tank(TANK_CAPACITIES["right_inner"], name="right_inner")
        self.right_outer_tank = Tank(TANK_CAPACITIES["right_outer"], name="right_outer")
        self.crossfeed_valve = Valve()
        self.pumps = [Pump() for _ in range(PUMP_COUNT)]

        links = list(pump_links) if pump_links is not None else list(DEFAULT_PUMP_LINKS)
        self._validate_links(links)
        self.pump_links = links

        self.transfer_rate_lps = transfer_rate_lps
        self.low_fuel_fraction = low_fuel_fraction
        self._pump_states = [PumpState.IDLE] * PUMP_COUNT

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "FuelSystem":
        """Build a fuel system from the fuel_system configuration section.

        Args:
            config: Loaded configuration.

        Returns:
            FuelSystem with configured rate, links and initial volumes.

        Raises:
            FuelSystemError: If a pump entry, tank name or number is invalid.
        """
        section = config.get_section("fuel_system")

        links = None
        if section.get("pumps") is not None:
            try:
                links = [PumpLink(str(p["source"]), str(p["target"])) for p in section["pumps"]]
            except (KeyError, TypeError) as e:
                raise FuelSystemError(f"Invalid pump configuration: {e}") from e

        try:
            transfer_rate = max(float(section.get("transfer_rate_lps", 0.0)), 0.0)
            low_fuel_fraction = float(section.get("low_fuel_fraction", 0.1))
        except (TypeError, ValueError) as e:
            raise FuelSystemError(f"Invalid fuel system configuration: {e}") from e

        initial_volumes = section.get("initial_volumes") or {}
        if not isinstance(initial_volumes, dict):
            raise FuelSystemError(
                f"Invalid initial volumes: expected a mapping, got {type(initial_volumes).__name__}"
            )

        system = cls(
            transfer_rate_lps=transfer_rate,
            pump_links=links,
            low_fuel_fraction=low_fuel_fraction,
        )

        for tank_name, volume in initial_volumes.items():
            tank = system.get_tank(tank_name)
            try:
                tank.add_fuel(max(float(volume), 0.0))
            except (TypeError, ValueError) as e:
                raise FuelSystemError(f"Invalid initial volume for {tank_name}: {e}") from e

        logger.info(
            "Fuel system configured: rate=%.2f L/s, %.1f L loaded",
            system.transfer_rate_lps,
            system.total_fuel(),
        )
        return system

    @property
    def tanks(self) -> list[Tank]:
        """Tanks in order: center, left inner, left outer, right inner, right outer."""
        return [
            self.center_tank,
            self.left_inner_tank,
            self.left_outer_tank,
            self.right_inner_tank,
            self.right_outer_tank,
        ]

    def get_tank(self, name: str) -> Tank:
        """Look up a tank by name.

        Raises:
            FuelSystemError: If no tank has that name.
        """
        for tank in self.tanks:
            if tank.name == name:
                return tank
        raise FuelSystemError(f"Unknown tank: {name}")

    def total_fuel(self) -> float:
        return sum(tank.current_volume for tank in self.tanks)

    def activate_pump(self, index: int) -> None:
        self._pump(index).activate()

    def deactivate_pump(self, index: int) -> None:
        self._pump(index).deactivate()

    def fail_pump(self, index: int) -> None:
        """Inject a pump failure. The pump reports FAULT until repaired."""
        self._pump(index).fail()
        self._pump_states[index] = PumpState.FAULT
        logger.warning("Pump %d failed (%s -> %s)", index, *self._link_names(index))

    def repair_pump(self, index: int) -> None:
        self._pump(index).repair()
        self._pump_states[index] = PumpState.IDLE
        logger.info("Pump %d repaired", index)

    def get_pump_state(self, index: int) -> PumpState:
        self._pump(index)
        return self._pump_states[index]

    def update(self, delta_time: float) -> None:
        """Advance the network by delta_time seconds.

        Pumps are processed in index order, so a tank filled by one pump
        can feed the next within the same tick.

        Args:
            delta_time: Elapsed time in seconds.
        """
        volume_per_pump = self.transfer_rate_lps * delta_time

        for index, (pump, link) in enumerate(zip(self.pumps, self.pump_links)):
            if pump.failed:
                self._pump_states[index] = PumpState.FAULT
                continue

            if not pump.is_active or volume_per_pump <= 0.0:
                self._pump_states[index] = PumpState.IDLE
                continue

            if link.is_crossfeed and not self.crossfeed_valve.is_open:
                self._pump_states[index] = PumpState.IDLE
                continue

            moved = self._transfer(link, volume_per_pump)
            self._pump_states[index] = PumpState.TRANSFERRING if moved > 0.0 else PumpState.IDLE

    def get_state(self) -> FuelSystemState:
        """Get a snapshot of tank volumes, valve and pump states.

        Returns:
            FuelSystemState tagged TankModel.GRANULAR.
        """
        volumes = {tank.name: tank.current_volume for tank in self.tanks}
        capacities = {tank.name: tank.capacity for tank in self.tanks}
        total = sum(volumes.values())

        warnings = []
        if total < sum(capacities.values()) * self.low_fuel_fraction:
            warnings.append("LOW_FUEL")

        failures = []
        if total <= 0.0:
            failures.append("FUEL_EXHAUSTED")
        if any(pump.failed for pump in self.pumps):
            failures.append("PUMP_FAILURE")

        return FuelSystemState(
            model=self.MODEL,
            volumes=volumes,
            capacities=capacities,
            total_volume=total,
            crossfeed_open=self.crossfeed_valve.is_open,
            pump_states=list(self._pump_states),
            warnings=warnings,
            failures=failures,
        )

    def _transfer(self, link: PumpLink, volume: float) -> float:
        if volume <= 0.0:
            return 0.0

        source = self.get_tank(link.source)
        target = self.get_tank(link.target)

        removed = source.remove_fuel(volume)
        added = target.add_fuel(removed)
        if added < removed:
            # Target full, return the excess
            source.add_fuel(removed - added)

        if added > 0.0:
            logger.debug("Transferred %.3f L %s -> %s", added, link.source, link.target)
        return added

    def _pump(self, index: int) -> Pump:
        if not 0 <= index < len(self.pumps):
            raise FuelSystemError(f"Pump index out of range: {index}")
        return self.pumps[index]

    def _link_names(self, index: int) -> tuple[str, str]:
        link = self.pump_links[index]
        return link.source, link.target

    def _validate_links(self, links: list[PumpLink]) -> None:
        if len(links) != PUMP_COUNT:
            raise FuelSystemError(f"Expected {PUMP_COUNT} pump links, got {len(links)}")

        for link in links:
            for name in (link.source, link.target):
                if name not in TANK_CAPACITIES:
                    raise FuelSystemError(f"Pump link references unknown tank: {name}")
            if link.source == link.target:
                raise FuelSystemError(f"Pump link source and target are the same: {link.source}")
