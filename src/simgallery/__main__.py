"""Command-line interface."""
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from simgallery import __version__
from simgallery.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simgallery", description="Interactive teaching simulations.")
    parser.add_argument("--sim", metavar="ID", help="load this simulation at startup")
    parser.add_argument("--list", action="store_true", help="print the registered simulation ids and exit")
    parser.add_argument("--log-level", default="info", help="logging level (debug, info, warning, ...)")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.list:
        from simgallery.core.registry import DemonstrationRegistry
        from simgallery.demos import install_demos

        registry = DemonstrationRegistry()
        install_demos(registry)
        for entry in registry:
            print(f"{entry.sim_id:24s} {entry.title}")
        return 0

    from simgallery.app.main import main as run_app

    return run_app(initial_sim=args.sim)


if __name__ == "__main__":
    sys.exit(main())
