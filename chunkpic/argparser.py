"""Command-line options of a simulation run."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Sequence

ELAPSED_TIME_MAX = 60.0 * 60.0
PHYSICAL_TIME_MAX = sys.float_info.max


@dataclass(frozen=True)
class Arguments:
    """Parsed command-line options."""

    config: str
    load: str = ""
    save: str = ""
    tmax: float = PHYSICAL_TIME_MAX
    emax: float = ELAPSED_TIME_MAX
    verbose: int = 0

    @property
    def is_initial_run(self) -> bool:
        """True when no snapshot is to be loaded."""
        return self.load == ""


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the run options."""
    parser = argparse.ArgumentParser(description="Run a chunked particle simulation.")
    parser.add_argument("-c", "--config", required=True, help="configuration file")
    parser.add_argument("-l", "--load", default="", help="prefix of snapshot to load")
    parser.add_argument("-s", "--save", default="", help="prefix of snapshot to save")
    parser.add_argument(
        "-t", "--tmax", type=float, default=PHYSICAL_TIME_MAX, help="maximum physical time"
    )
    parser.add_argument(
        "-e", "--emax", type=float, default=ELAPSED_TIME_MAX, help="maximum elapsed time [sec]"
    )
    parser.add_argument("-v", "--verbose", type=int, default=0, help="verbosity level")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Arguments:
    """Parse ``argv`` (or ``sys.argv``); exits with an error on bad input."""
    namespace = build_parser().parse_args(argv)
    return Arguments(**vars(namespace))