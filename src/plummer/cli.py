"""
Command line entry point.

Usage::

    plummer [config.txt] [--output FILE] [--time] [--plot] [-v]

Reads a run configuration file, integrates the orbit and writes the
snapshot file named by ``output_file`` (or ``--output``). Configuration and
output errors print a one-line message to stderr and exit with status 1.
"""

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence
from . import __version__
from .config import config
from .config_reader import RunConfig
from .output import OutputError
from .simulation import run
from .trajectory import Trajectory
from .utils import Timer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plummer",
        description="Integrate a test particle orbit in a Plummer potential.",
    )
    parser.add_argument("config", nargs="?", default="config.txt",
                        help="Run configuration file (default: config.txt)")
    parser.add_argument("-o", "--output", default=None,
                        help="Override output_file from the configuration")
    parser.add_argument("--time", action="store_true",
                        help="Print the wall-clock time of the integration")
    parser.add_argument("--plot", action="store_true",
                        help="Show a 3D plot of the written trajectory")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(),
                                                  logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        run_config = RunConfig.from_file(args.config)
        if args.output is not None:
            run_config = dataclasses.replace(run_config, output_file=args.output)
        with Timer("Integration", verbose=args.time):
            run(run_config)
    except (ValueError, OutputError) as exc:
        # ConfigError is a ValueError
        logger.debug("Run failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.plot:
        traj = Trajectory.from_file(run_config.output_file,
                                    system=run_config.system())
        traj.plot_3d().show()
    return 0
