"""
HealthTracker — CLI Entry Point
=================================

Usage:
    healthtracker --version
    healthtracker [--api-url URL] about

Exit codes:
    0  success, including "API unreachable" (reported on stdout)
    2  usage error (argparse)
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from healthtracker import __version__
from healthtracker.cli.api_client import ApiClient, HttpApiClient
from healthtracker.cli.commands import about_command
from healthtracker.config import Settings

ClientFactory = Callable[[str, float], ApiClient]

COMMANDS = {
    "about": about_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthtracker",
        description="Health Tracker CLI",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the HealthTracker API (default: HEALTH_TRACKER_API_URL or http://localhost:8000)",
    )
    subcommands = parser.add_subparsers(dest="command")
    subcommands.add_parser("about", help="Show API version and record statistics")
    return parser


def main(
    argv: Optional[List[str]] = None,
    out: TextIO = sys.stdout,
    settings: Optional[Settings] = None,
    client_factory: ClientFactory = HttpApiClient,
) -> int:
    """
    Parse arguments and dispatch. Returns the exit code.

    client_factory(base_url, timeout) builds the ApiClient; tests inject one
    backed by httpx.MockTransport.
    """
    args = build_parser().parse_args(argv)

    if args.command is None:
        out.write("Health Tracker CLI\nUse --help for usage information.\n")
        return 0

    settings = settings or Settings()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    command = COMMANDS[args.command]
    client = client_factory(args.api_url or settings.api_url, settings.client_timeout)
    try:
        return command(client, out)
    finally:
        close = getattr(client, "close", None)
        if close is not None:
            close()


if __name__ == "__main__":
    sys.exit(main())
