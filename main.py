"""Main entry point for the creature evolution simulation.

This module provides command-line options to run the simulation:
- Web mode (default): FastAPI backend
- Headless mode: stats-only, faster than realtime
"""

import argparse
import logging
import sys

from backend.logging_config import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_web_server():
    """Run the web server."""
    from creatures.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

    try:
        import uvicorn

        from backend.main import app
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .[backend]")
        sys.exit(1)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("CREATURE EVOLUTION - WEB SERVER")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("API docs available at http://localhost:%d/docs", DEFAULT_API_PORT)
    logger.info("Press Ctrl+C to stop the server")
    uvicorn.run(app, host=DEFAULT_API_HOST, port=DEFAULT_API_PORT)


def run_headless(
    ticks: int,
    stats_interval: int,
    seed=None,
    dt=None,
    population=None,
):
    """Run the simulation without a server, logging stats periodically.

    Returns:
        The final stats dictionary
    """
    from creatures import CreatureBorn, CreatureDied, Simulation, SimulationConfig

    config = SimulationConfig(seed=seed)
    if dt is not None:
        config.dt = dt
    if population is not None:
        config.initial_population = population

    simulation = Simulation(config)
    simulation.scatter_food()
    simulation.populate()

    births = deaths = 0
    for tick in range(1, ticks + 1):
        simulation.step()
        for event in simulation.drain_events():
            if isinstance(event, CreatureBorn):
                births += 1
            elif isinstance(event, CreatureDied):
                deaths += 1

        if tick % stats_interval == 0 or tick == ticks:
            stats = simulation.stats()
            logger.info(
                "t=%.1fs frame=%d population=%d births=%d deaths=%d mean_energy=%.1f "
                "max_generation=%d",
                stats["time"],
                stats["frame"],
                stats["population"],
                births,
                deaths,
                stats["mean_energy"],
                stats["max_generation"],
            )
        if simulation.population == 0:
            logger.info("Population extinct at frame %d", simulation.frame)
            break

    return simulation.stats()


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Evolving Articulated Creatures Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Quick headless run
  python main.py --headless --ticks 1000

  # Reproducible run with a larger population
  python main.py --headless --ticks 50000 --seed 42 --population 30
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no server, stats only)"
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=10000,
        help="Ticks to simulate in headless mode (default: 10000)",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=500,
        help="Log stats every N ticks in headless mode (default: 500)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument("--dt", type=float, default=None, help="Step size in seconds")
    parser.add_argument("--population", type=int, default=None, help="Initial population")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Overrides CREATURES_LOG_LEVEL",
    )

    args = parser.parse_args()
    configure_logging(level=args.log_level, headless=args.headless)

    if args.headless:
        logger.info("Starting headless simulation: %d ticks", args.ticks)
        run_headless(
            args.ticks,
            max(1, args.stats_interval),
            seed=args.seed,
            dt=args.dt,
            population=args.population,
        )
    else:
        run_web_server()


if __name__ == "__main__":
    main()
