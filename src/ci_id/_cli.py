from __future__ import annotations

import argparse
import logging
import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler

from ci_id import __version__
from ci_id._console import print_outcome
from ci_id._dispatch import detect_credentials
from ci_id._schema import Detected, NotDetected
from ci_id._transport import DEFAULT_TIMEOUT_SEC, UrllibTransport

LOG_LEVEL_ENV = "CI_ID_LOG"


class ExitCode(IntEnum):
    OK = 0
    FAILED = 1
    USAGE = 2  # argparse's own exit status
    NOT_DETECTED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ci-id",
        description="Print an ambient OIDC identity token from the current CI environment.",
    )
    parser.add_argument(
        "audience",
        nargs="?",
        default=None,
        help="Optional audience name (default: the provider's default audience)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SEC,
        help=f"Network timeout in seconds (default: {DEFAULT_TIMEOUT_SEC:g})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help=f"Increase log verbosity (-v info, -vv debug). Overrides ${LOG_LEVEL_ENV}.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _resolve_log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO

    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    if isinstance(level, int):
        return level
    return logging.WARNING


def configure_logging(verbose: int) -> None:
    """Send log records to stderr through rich; stdout is reserved for the token."""
    logging.basicConfig(
        level=_resolve_log_level(verbose),
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True), show_time=False, show_path=False
            )
        ],
        force=True,
    )


def run(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    outcome = detect_credentials(
        args.audience, transport=UrllibTransport(timeout=args.timeout)
    )
    print_outcome(outcome)

    if isinstance(outcome, Detected):
        return ExitCode.OK
    if isinstance(outcome, NotDetected):
        return ExitCode.NOT_DETECTED
    return ExitCode.FAILED


def main() -> None:
    sys.exit(run())
