"""Entry point for ``python -m formica``.

Loads the YAML config, builds a simulation engine, optionally scatters a
preset node layout and either opens a Pygame window or runs headless for
a fixed number of ticks and logs the final stats.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from formica.simulation.config import SimulationConfig, parse_variant
from formica.simulation.engine import SimulationEngine

logger = logging.getLogger("formica")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create engine, run headless or launch renderer."""
    parser = argparse.ArgumentParser(
        prog="formica",
        description="formica - ant colony optimisation simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--variant",
        choices=["tour", "foraging"],
        help="Override the configured variant",
    )
    parser.add_argument("--seed", type=int, help="Override the configured seed")
    parser.add_argument(
        "--preset",
        type=int,
        default=6,
        help="Number of random nodes to place at start (default: 6)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and log the final stats",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=1000,
        help="Ticks to run in headless mode (default: 1000)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=30.0,
        help="Simulation ticks per second (default: 30)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.variant is not None:
        config.variant = parse_variant(args.variant)
    if args.seed is not None:
        config.seed = args.seed

    engine = SimulationEngine(config=config)
    if args.preset > 0:
        engine.scatter(args.preset)
    engine.start()

    if args.headless:
        ran = engine.run(args.ticks)
        stats = engine.stats()
        logger.info("Ran %d tick(s): %s", ran, stats.as_dict())
        return

    from formica.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(engine=engine, ticks_per_second=args.speed)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
