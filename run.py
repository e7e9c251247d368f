#!/usr/bin/env python3
"""
Minting engine - command line runner

Builds a collection from config, applies the requested administration
calls and an optional mint, then prints the resulting state as JSON.
All calls are made as --caller (default: the configured owner).

Usage:
    python run.py                              # Print initial state
    python run.py --caller alice --mint 2 --payment 20
    python run.py --whitelist alice bob --toggle-whitelist
    python run.py --mint 1 --payment 10 --event-log      # Trail in logging.output_file
    python run.py --pause --caller alice --mint 1 --payment 10   # -> error, exit 1
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv

from src.config import load_config, get_validated_config
from src.minting import Collection, EventLogger, MintingError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Run mint and administration calls against a collection"
    )
    parser.add_argument(
        "--config",
        default=os.environ.get("MINTING_CONFIG", "config/config.yaml"),
        help="Path to config file (env: MINTING_CONFIG)",
    )
    parser.add_argument("--caller", help="Identity making every call (default: owner)")
    parser.add_argument("--now", type=int, help="Override current unix time")
    parser.add_argument("--whitelist", nargs="+", metavar="ADDR", help="Add addresses to the allow-list")
    parser.add_argument("--toggle-whitelist", action="store_true", help="Flip whitelist-only mode")
    pause_group = parser.add_mutually_exclusive_group()
    pause_group.add_argument("--pause", action="store_true", help="Pause minting")
    pause_group.add_argument("--unpause", action="store_true", help="Unpause minting")
    parser.add_argument("--mint", type=int, metavar="N", help="Mint N tokens")
    parser.add_argument("--payment", type=int, default=0, help="Payment attached to the mint")
    parser.add_argument("--withdraw", action="store_true", help="Withdraw held funds after minting")
    parser.add_argument(
        "--event-log",
        nargs="?",
        const="",
        metavar="PATH",
        help="Also write notifications to a JSONL file (default path: logging.output_file)",
    )
    return parser


def apply_calls(collection: Collection, args: argparse.Namespace, caller: str) -> None:
    """Run the requested calls in a fixed order: admin, mint, withdraw."""
    if args.whitelist:
        collection.add_many_to_whitelist(caller, args.whitelist)
    if args.toggle_whitelist:
        collection.toggle_whitelist_only(caller)
    if args.pause:
        collection.pause(caller)
    if args.unpause:
        collection.unpause(caller)
    if args.mint is not None:
        minted = collection.mint(caller, args.mint, payment=args.payment)
        logger.info("Minted %s to %s", minted, caller)
    if args.withdraw:
        collection.withdraw(caller)


def main(argv: list[str] | None = None) -> int:
    args: argparse.Namespace = build_parser().parse_args(argv)

    load_config(args.config)
    config = get_validated_config()
    logging.basicConfig(level=config.logging.level, format="%(levelname)s %(name)s: %(message)s")

    clock = (lambda: args.now) if args.now is not None else None
    collection = Collection.from_config(config, clock=clock)
    if args.event_log is not None:
        # Bare --event-log falls back to logging.output_file
        EventLogger(output_file=args.event_log or None).attach(collection.events)

    caller: str = args.caller or collection.owner
    try:
        apply_calls(collection, args, caller)
    except MintingError as e:
        print(json.dumps(e.to_response(), indent=2))
        return 1

    state: dict[str, Any] = collection.snapshot()
    print(json.dumps(state, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
