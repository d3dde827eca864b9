"""FuelSim - headless fuel system simulation.

Main entry point. Loads configuration, applies the engine and flight
inputs from the command line, runs the requested number of one-second
steps and prints the panel read-outs.

Typical usage:
    python -m fuelsim.main --steps 60
    python -m fuelsim.main --steps 3600 --n1 0.9 --n2 0.9 --altitude 0 --payload 120
    python -m fuelsim.main --config fuelsim.yaml --log-config logging.yaml
    python -m fuelsim.main --steps 10 --trace
"""

import argparse
import sys

from fuelsim.core.config import load_config
from fuelsim.core.event_bus import EventPriority
from fuelsim.core.logging_system import (
    LoggingError,
    get_logger,
    initialize_logging,
    shutdown_logging,
)
from fuelsim.core.step_runner import StepRunner
from fuelsim.simulation import FuelSimulation, FuelStateEvent


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="FuelSim - aircraft fuel system simulation")

    parser.add_argument("--steps", type=int, default=1, help="Number of one-second steps to run")
    parser.add_argument("--n1", type=float, help="N1 level (0.0-1.0)")
    parser.add_argument("--n2", type=float, help="N2 level (0.0-1.0)")
    parser.add_argument("--altitude", type=float, help="Altitude in feet (0-40000)")
    parser.add_argument("--payload", type=float, help="Payload in tonnes (0-319)")
    parser.add_argument("--config", type=str, help="Simulation configuration YAML file")
    parser.add_argument("--log-config", type=str, help="Logging configuration YAML file")
    parser.add_argument("--trace", action="store_true", help="Print tank volumes after every step")

    return parser.parse_args(argv)


def print_step(event: FuelStateEvent) -> None:
    """Print one trace line for a completed step."""
    print(
        f"t={event.time_elapsed:.0f}s burn={event.fuel_burn_rate:.2f} L/s "
        f"center={event.center_tank_volume:.2f} left={event.left_wing_tank_volume:.2f} "
        f"right={event.right_wing_tank_volume:.2f}"
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    try:
        initialize_logging(args.log_config, use_platform_dir=args.log_config is None)
    except LoggingError as e:
        print(f"Logging setup failed: {e}", file=sys.stderr)
        return 1

    logger = get_logger("fuelsim.main")

    try:
        sim = FuelSimulation.from_config(load_config(args.config))

        if args.n1 is not None:
            sim.set_n1_level(args.n1)
        if args.n2 is not None:
            sim.set_n2_level(args.n2)
        if args.altitude is not None:
            sim.set_altitude(args.altitude)
        if args.payload is not None:
            sim.set_payload(args.payload)

        if args.trace:
            sim.event_bus.subscribe(FuelStateEvent, print_step, EventPriority.LOW)

        executed = StepRunner(sim).run(max(args.steps, 0))
        logger.info("Simulated %d steps", executed)

        for label, value in sim.readout().items():
            print(f"{label}: {value}")

        fuel_state = sim.get_fuel_state()
        for code in fuel_state.warnings + fuel_state.failures:
            print(f"WARNING: {code}")

        return 0
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
