"""Command-line interface for the market lens."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from eth_utils import is_address

from .config import load_config
from .errors import LensError
from .logging_setup import configure_logging
from .services import Lens

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="market-lens",
        description="Batch reader for lending-market state",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    metadata_parser = sub.add_parser("metadata", help="Market metadata per instrument")
    metadata_parser.add_argument(
        "instruments",
        nargs="*",
        help="Instrument addresses (default: deployment.instruments from config)",
    )

    positions_parser = sub.add_parser("positions", help="Account positions per instrument")
    positions_parser.add_argument("account", help="Account address")
    positions_parser.add_argument(
        "instruments",
        nargs="*",
        help="Instrument addresses (default: deployment.instruments from config)",
    )

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; returns the process exit status."""
    configure_logging(args.log_level)
    addresses = list(args.instruments or [])
    if args.command == "positions":
        addresses.append(args.account)
    for address in addresses:
        if not is_address(address):
            build_parser().error(f"invalid address: {address}")

    config = load_config(args.config)
    lens = Lens(config)

    try:
        if args.command == "metadata":
            records = await lens.fetch_market_metadata_batch(args.instruments or None)
        elif args.command == "positions":
            records = await lens.fetch_account_position_batch(
                args.account, args.instruments or None
            )
        else:
            build_parser().print_help()
            return 1
    except LensError as e:
        logger.error("Read failed: %s", e)
        return 1

    print(json.dumps([r.to_dict() for r in records], indent=2))
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
