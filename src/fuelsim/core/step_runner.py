"""Synchronous step runner.

Drives a simulation for a number of one-second steps on the calling
thread. There is no wall clock and no sleeping: every step runs to
completion before the next, so the simulation state has a single writer.

The runner watches the simulation's event bus for fuel exhaustion rather
than inspecting step results, so any other subscriber sees the same
stream it reacts to.

Typical usage example:
    from fuelsim.core.step_runner import StepRunner

    runner = StepRunner(simulation)
    executed = runner.run(3600)
"""

import logging

from fuelsim.core.event_bus import EventPriority
from fuelsim.simulation import FuelSimulation, FuelStateEvent

logger = logging.getLogger(__name__)


class StepRunner:
    """Runs simulation steps until a count is reached or the run is halted.

    A run ends early when stop() or pause() is called (for example from an
    event handler) or when the aggregate tanks are exhausted.

    Examples:
        >>> runner = StepRunner(sim)
        >>> runner.run(10)
        10
    """

    def __init__(self, simulation: FuelSimulation, stop_when_exhausted: bool = True) -> None:
        """Initialize the runner.

        Args:
            simulation: Simulation to step.
            stop_when_exhausted: End the run once all aggregate tanks are empty.
        """
        self.simulation = simulation
        self.stop_when_exhausted = stop_when_exhausted

        self.running = False
        self.paused = False
        self.step_count = 0

    def run(self, steps: int) -> int:
        """Run up to the given number of steps.

        Args:
            steps: Maximum number of steps to execute.

        Returns:
            Number of steps executed by this call.
        """
        if self.paused:
            logger.info("Runner paused, no steps executed")
            return 0

        self.running = True
        executed = 0

        # Registered for the duration of the run only
        subscription = self.simulation.event_bus.subscribe(
            FuelStateEvent, self._on_fuel_state, EventPriority.CRITICAL
        )
        logger.info("Run started: up to %d steps", steps)

        try:
            while self.running and not self.paused and executed < steps:
                self.simulation.step()
                executed += 1
                self.step_count += 1

        except KeyboardInterrupt:
            logger.info("Run interrupted by user")

        except Exception as e:
            logger.error("Run failed after %d steps: %s", executed, e, exc_info=True)
            raise

        finally:
            self.simulation.event_bus.unsubscribe(subscription)
            self.running = False
            logger.info("Run stopped after %d steps", executed)

        return executed

    def stop(self) -> None:
        """Stop the current run after the step in progress."""
        self.running = False
        logger.info("Runner stop requested")

    def pause(self) -> None:
        """Halt the current run and refuse new runs until resume()."""
        self.paused = True
        logger.info("Runner paused")

    def resume(self) -> None:
        self.paused = False
        logger.info("Runner resumed")

    def is_running(self) -> bool:
        return self.running

    def is_paused(self) -> bool:
        return self.paused

    def _on_fuel_state(self, event: FuelStateEvent) -> None:
        if self.stop_when_exhausted and "FUEL_EXHAUSTED" in event.failures:
            logger.info("Fuel exhausted at t=%.0fs", event.time_elapsed)
            self.running = False
