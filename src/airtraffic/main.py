"""AirTraffic - discrete-time airspace simulator.

Command line entry point. Loads a YAML scenario, builds the airspace
registry, runs the simulation engine and logs every event plus a summary.

Typical usage:
    airtraffic config/scenario.yaml
    python -m airtraffic.main config/scenario.yaml --steps 20
    python -m airtraffic.main config/scenario.yaml --log-config config/logging.yaml
"""

import argparse
import sys
from collections.abc import Sequence

from airtraffic.airspace.registry import build_registry
from airtraffic.core.config import ConfigLoader, SimulationConfig
from airtraffic.core.event_bus import EventBus
from airtraffic.core.logging_system import get_logger, initialize_logging, shutdown_logging
from airtraffic.simulation.engine import SimulationEngine
from airtraffic.simulation.pilots import NoOpPilot, ScriptedPilot
from airtraffic.simulation.reporting import EventLogger, RunSummary

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="AirTraffic - discrete-time airspace simulator")

    parser.add_argument(
        "scenario",
        type=str,
        help="Path to scenario YAML file",
    )

    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Number of simulation steps (overrides simulation.steps)",
    )

    parser.add_argument(
        "--log-config",
        type=str,
        default=None,
        help="Path to logging configuration YAML file",
    )

    parser.add_argument(
        "--no-platform-logs",
        action="store_true",
        help="Write logs to the logging config directory instead of the platform log directory",
    )

    return parser.parse_args(argv)


def run_simulation(config: SimulationConfig, steps: int | None = None) -> RunSummary:
    """Build the airspace from a scenario and run it.

    Args:
        config: Validated scenario.
        steps: Step count override; uses config.steps if None.

    Returns:
        Summary of the run's event stream.

    Raises:
        AircraftCountExceedsCapacityError: If the scenario has too many aircraft.
    """
    registry = build_registry(config.capacity, config.aircraft, initial_fuel=config.initial_fuel)
    pilot = ScriptedPilot(config.corrections) if config.corrections else NoOpPilot()

    bus = EventBus()
    summary = RunSummary()
    summary.attach(bus)
    EventLogger().attach(bus)

    engine = SimulationEngine(
        registry,
        pilot=pilot,
        event_bus=bus,
        collision_threshold=config.collision_threshold,
        burn_rate=config.burn_rate,
    )

    engine.run(config.steps if steps is None else steps)

    logger.info(
        "Simulation finished: %d steps, %d aircraft, %d collisions",
        engine.steps_completed,
        registry.count,
        summary.collisions,
    )
    for band, count in summary.band_counts().items():
        logger.info("  %s: %d aircraft", band.value, count)
    for aircraft in registry:
        logger.debug("Final state: %s", aircraft.get_state())

    return summary


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    try:
        if args.log_config:
            initialize_logging(args.log_config, use_platform_dir=not args.no_platform_logs)
        else:
            initialize_logging(use_platform_dir=not args.no_platform_logs)

        config = SimulationConfig.from_loader(ConfigLoader.load(args.scenario))
        run_simulation(config, steps=args.steps)
        return 0
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
