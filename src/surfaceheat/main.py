"""
Application Initialization
==========================
This module wires configuration, logging, the simulation and the renderer
together and runs one simulation from the command line.

It acts as the composition root. It:
1. Parses the command line and sets up logging.
2. Builds the SimulationConfig (preset, optionally overridden by a JSON file).
3. Attaches the matplotlib renderer and pacer unless running headless.
4. Runs the simulation.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from surfaceheat.config import ConfigurationError, SimulationConfig
from surfaceheat.logging_config import setup_logging
from surfaceheat.pre.trajectories import MotionPattern
from surfaceheat.solvers.simulation import Simulation

logger = logging.getLogger(__name__)

VARIANTS = {
    "focal": SimulationConfig.focal_point,
    "beam": SimulationConfig.sun_beam,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="surfaceheat",
        description="2-D heat diffusion driven by a moving beam.",
    )
    parser.add_argument("--variant", choices=sorted(VARIANTS), default="focal",
                        help="focal: single hot cell with heat radius tracking; beam: disk of radius 3.")
    parser.add_argument("--pattern", choices=[p.value for p in MotionPattern], default=MotionPattern.CIRCLE.value)
    parser.add_argument("--duration", type=float, default=20.0, help="Simulated time in seconds.")
    parser.add_argument("--config", default=None, help="JSON file with configuration values (overrides the variant).")
    parser.add_argument("--headless", action="store_true", help="Run without rendering or pacing.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def load_config(variant: str, config_path: Optional[str]) -> SimulationConfig:
    config = VARIANTS[variant]()
    if config_path:
        config = SimulationConfig.from_json(config_path, base=config)
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Build the configuration
    try:
        config = load_config(args.variant, args.config)
        simulation = Simulation(config)
    except (ConfigurationError, OSError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    # 3. Attach renderer
    renderer = None
    pacer = None
    if not args.headless:
        from surfaceheat.view.renderer import MatplotlibRenderer, matplotlib_pause
        renderer = MatplotlibRenderer()
        pacer = matplotlib_pause

    # 4. Run
    try:
        result = simulation.run(args.duration, args.pattern, sink=renderer, pacer=pacer)
    except ConfigurationError as e:
        logger.error(f"Invalid run parameters: {e}")
        return 2
    finally:
        if renderer is not None:
            renderer.close()

    if result.distances:
        logger.info(f"Final heat radius: {result.distances[-1]:.2f} cells")
    return 0


if __name__ == "__main__":
    sys.exit(main())
