"""Entry point for the vmhealth command."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from vmhealth import __version__
from vmhealth.config import Settings, settings
from vmhealth.health.engine import check_system
from vmhealth.report import render_report

console = Console()


def run(explain_mode: bool = False, cfg: Settings | None = None, out: Console | None = None) -> int:
    """Check the host, print the report and return the exit code."""
    health = check_system(cfg or settings)
    render_report(health, out or console, explain_mode=explain_mode)
    return health.exit_code


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="vmhealth",
        description="Report whether CPU, memory and disk usage are under the health threshold",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default=None,
        help='pass "explain" to print the reasoning behind each verdict',
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # Anything other than "explain" just disables explain mode
    args, _ = parser.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    sys.exit(run(explain_mode=args.mode == "explain"))


if __name__ == "__main__":
    main()
