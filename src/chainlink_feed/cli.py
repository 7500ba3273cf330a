"""Command-line interface for the Chainlink feed client."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .oracles import ChainlinkOracle

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="chainlink-feed",
        description="Read the latest answers of Chainlink price feeds",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in the working directory)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    round_parser = sub.add_parser("round", help="Print the latest rounds as JSON")
    round_parser.add_argument(
        "identifiers", nargs="*", help="Feed identifiers (default: all feeds)"
    )

    prices_parser = sub.add_parser("prices", help="Print the latest prices")
    prices_parser.add_argument(
        "identifiers", nargs="*", help="Feed identifiers (default: all feeds)"
    )

    return parser


def _select(config: AppConfig, identifiers: list[str]) -> list[str] | None:
    """Validate requested identifiers against the config."""
    if not identifiers:
        return None
    known = {f.identifier for f in config.feeds}
    unknown = [i for i in identifiers if i not in known]
    if unknown:
        raise ValueError(f"Unknown feed identifier(s): {', '.join(unknown)}")
    return identifiers


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    oracle = ChainlinkOracle(config)
    symbols = _select(config, args.identifiers)
    wanted = symbols or [f.identifier for f in config.feeds]

    if args.command == "round":
        rounds = await oracle.fetch_rounds(symbols)
        print(json.dumps([r.to_dict() for r in rounds.values()], indent=2))
        missing = [i for i in wanted if i not in rounds]
    else:
        prices = await oracle.fetch_prices(symbols)
        for identifier, price in prices.items():
            print(f"{identifier}: {price}")
        missing = [i for i in wanted if i not in prices]

    if missing:
        logger.error("No answer for: %s", ", ".join(missing))
        return 1
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        code = asyncio.run(_run(args))
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(2)
    sys.exit(code)
