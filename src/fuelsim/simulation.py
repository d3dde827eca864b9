"""Simulation controller.

Plays the part of the control panel: holds the inputs (clamped to their
ranges the way the panel sliders did), advances the aggregate model one
second per step, ticks the granular FuelSystem alongside it, and
publishes the read-outs on the event bus.

The aggregate model drives the read-outs. The granular FuelSystem keeps
its own tanks and is reported separately through get_network_state().

Typical usage:
    sim = FuelSimulation.from_config(load_config())
    sim.set_altitude(35000.0)
    event = sim.step()
    print(event.fuel_burn_rate)
"""

from dataclasses import dataclass, field

from fuelsim.core.config import ConfigLoader
from fuelsim.core.event_bus import Event, EventBus
from fuelsim.core.logging_system import get_logger
from fuelsim.systems.fuel.base import FuelSystemState
from fuelsim.systems.fuel.burn_model import (
    ALTITUDE_RANGE,
    ENGINE_LEVEL_RANGE,
    PAYLOAD_RANGE,
    SimulationState,
    calculate_fuel_burn,
    simulate_fuel_burn,
)
from fuelsim.systems.fuel.fuel_system import FuelSystem

STEP_SECONDS = 1.0


@dataclass
class FuelStateEvent(Event):
    """Event published after every simulation step.

    Attributes:
        center_tank_volume: Center tank fuel in liters.
        left_wing_tank_volume: Left wing tank fuel in liters.
        right_wing_tank_volume: Right wing tank fuel in liters.
        time_elapsed: Simulated seconds since start.
        fuel_burn_rate: Burn rate used for this step.
        warnings: Warning codes of the aggregate model.
        failures: Failure codes of the aggregate model.
    """

    center_tank_volume: float = 0.0
    left_wing_tank_volume: float = 0.0
    right_wing_tank_volume: float = 0.0
    time_elapsed: float = 0.0
    fuel_burn_rate: float = 0.0
    warnings: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)


def clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return min(max(value, low), high)


class FuelSimulation:
    """Single-writer controller for the aggregate and granular fuel models."""

    def __init__(
        self,
        state: SimulationState | None = None,
        fuel_system: FuelSystem | None = None,
        event_bus: EventBus | None = None,
        low_fuel_fraction: float = 0.1,
    ) -> None:
        """Initialize the controller.

        Args:
            state: Aggregate model state. Defaults to the launch state.
            fuel_system: Granular network. Defaults to an empty FuelSystem.
            event_bus: Bus for FuelStateEvent. A private one is created if omitted.
            low_fuel_fraction: LOW_FUEL threshold for the aggregate tanks.
        """
        self.state = state if state is not None else SimulationState()
        self.fuel_system = fuel_system if fuel_system is not None else FuelSystem()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.low_fuel_fraction = low_fuel_fraction

        self._log = get_logger("fuelsim.simulation")
        self._reported: set[str] = set()

    @classmethod
    def from_config(cls, config: ConfigLoader, event_bus: EventBus | None = None) -> "FuelSimulation":
        """Build a simulation from configuration.

        Initial inputs go through the same clamping as the setters.

        Args:
            config: Loaded configuration.
            event_bus: Optional shared event bus.

        Returns:
            Configured FuelSimulation.
        """
        initial = config.get("simulation.initial", {}) or {}
        defaults = SimulationState()

        state = SimulationState(
            center_tank_volume=max(
                float(initial.get("center_tank_volume", defaults.center_tank_volume)), 0.0
            ),
            left_wing_tank_volume=max(
                float(initial.get("left_wing_tank_volume", defaults.left_wing_tank_volume)), 0.0
            ),
            right_wing_tank_volume=max(
                float(initial.get("right_wing_tank_volume", defaults.right_wing_tank_volume)), 0.0
            ),
        )

        sim = cls(
            state=state,
            fuel_system=FuelSystem.from_config(config),
            event_bus=event_bus,
            low_fuel_fraction=float(config.get("fuel_system.low_fuel_fraction", 0.1)),
        )
        sim.set_n1_level(float(initial.get("n1_level", defaults.n1_level)))
        sim.set_n2_level(float(initial.get("n2_level", defaults.n2_level)))
        sim.set_altitude(float(initial.get("altitude", defaults.altitude)))
        sim.set_payload(float(initial.get("payload", defaults.payload)))
        return sim

    def set_n1_level(self, value: float) -> None:
        self.state.n1_level = clamp(value, ENGINE_LEVEL_RANGE)

    def set_n2_level(self, value: float) -> None:
        self.state.n2_level = clamp(value, ENGINE_LEVEL_RANGE)

    def set_altitude(self, value: float) -> None:
        self.state.altitude = clamp(value, ALTITUDE_RANGE)

    def set_payload(self, value: float) -> None:
        self.state.payload = clamp(value, PAYLOAD_RANGE)

    def step(self) -> FuelStateEvent:
        """Advance the simulation by one second.

        Returns:
            The FuelStateEvent published for this step.
        """
        state = self.state
        burn_rate = calculate_fuel_burn(state.n1_level, state.n2_level, state.altitude, state.payload)
        state.fuel_burn_rate = burn_rate
        simulate_fuel_burn(state, burn_rate)
        state.time_elapsed += STEP_SECONDS

        self.fuel_system.update(STEP_SECONDS)

        fuel_state = self.get_fuel_state()
        self._report_transitions(fuel_state)

        self._log.debug(
            "t=%.0fs burn=%.4f center=%.2f left=%.2f right=%.2f",
            state.time_elapsed,
            burn_rate,
            state.center_tank_volume,
            state.left_wing_tank_volume,
            state.right_wing_tank_volume,
        )

        event = FuelStateEvent(
            center_tank_volume=state.center_tank_volume,
            left_wing_tank_volume=state.left_wing_tank_volume,
            right_wing_tank_volume=state.right_wing_tank_volume,
            time_elapsed=state.time_elapsed,
            fuel_burn_rate=burn_rate,
            warnings=fuel_state.warnings,
            failures=fuel_state.failures,
        )
        self.event_bus.publish(event)
        return event

    def get_fuel_state(self) -> FuelSystemState:
        """Snapshot of the aggregate tanks."""
        return self.state.to_fuel_state(self.low_fuel_fraction)

    def get_network_state(self) -> FuelSystemState:
        """Snapshot of the granular FuelSystem."""
        return self.fuel_system.get_state()

    def total_fuel(self) -> float:
        return self.state.total_fuel

    def readout(self) -> dict[str, str]:
        """Format the panel read-outs.

        Returns:
            Label -> display text, in panel order.
        """
        state = self.state
        return {
            "N1 Level": f"{state.n1_level * 100.0:.2f}%",
            "N2 Level": f"{state.n2_level * 100.0:.2f}%",
            "Altitude": f"{state.altitude:.0f} ft",
            "Payload": f"{state.payload:.2f} tonnes",
            "Center Tank Volume": f"{state.center_tank_volume:.2f} liters",
            "Left Wing Tank Volume": f"{state.left_wing_tank_volume:.2f} liters",
            "Right Wing Tank Volume": f"{state.right_wing_tank_volume:.2f} liters",
            "Time Elapsed": f"{state.time_elapsed:.2f} seconds",
            "Fuel Burn Rate": f"{state.fuel_burn_rate:.2f} liters/second",
        }

    def _report_transitions(self, fuel_state: FuelSystemState) -> None:
        # Log each warning or failure once, when it first appears
        active = set(fuel_state.warnings) | set(fuel_state.failures)
        for code in sorted(active - self._reported):
            self._log.warning("%s at t=%.0fs", code, self.state.time_elapsed)
        self._reported = active
