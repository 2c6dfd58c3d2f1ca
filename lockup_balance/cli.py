"""Command-line interface for the lockup balance calculator."""
from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Any, TextIO

from .calculator import LockupBalanceCalculator
from .config import AppConfig, build_policy, load_config
from .errors import LockupBalanceError
from .formatting import format_breakdown
from .logging_setup import configure_logging
from .models import BalanceBreakdown, StaleBalance
from .snapshot import decode_snapshot, encode_breakdown, parse_uint

EXIT_STALE = 2
EXIT_INVALID_INPUT = 3

_LABELS = {
    "total": "Total",
    "locked": "Locked",
    "unlocked": "Unlocked",
    "available_to_transfer": "Available to transfer",
    "reserved_for_storage": "Reserved for storage",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lockup-balance",
        description="Lockup account vesting balance calculator",
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

    breakdown = sub.add_parser("breakdown", help="Compute a lockup balance breakdown")
    breakdown.add_argument("snapshot", help="Snapshot JSON file ('-' for stdin)")
    breakdown.add_argument(
        "--now",
        default=None,
        help="Evaluate at this timestamp (ns since epoch) instead of observed_at",
    )
    breakdown.add_argument(
        "--json",
        action="store_true",
        help="Print decimal-string JSON instead of display labels",
    )

    return parser


def _read_snapshot(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path) as f:
        return json.load(f)


def render_result(
    result: BalanceBreakdown | StaleBalance,
    config: AppConfig,
    out: TextIO,
    as_json: bool = False,
) -> int:
    """Write a result to ``out``; returns the process exit status."""
    if isinstance(result, StaleBalance):
        out.write(
            f"Balance data may be stale: locked {result.locked} exceeds total {result.total}\n"
        )
        return EXIT_STALE

    if as_json:
        out.write(json.dumps(encode_breakdown(result), indent=2) + "\n")
        return 0

    labels = format_breakdown(
        result,
        symbol=config.token.symbol,
        nomination_exp=config.token.nomination_exp,
        default_decimals=config.display.default_decimals,
        field_decimals=config.display.field_decimals,
    )
    for name, title in _LABELS.items():
        out.write(f"{title}: {labels[name]}\n")
    out.write(f"Transfer to wallet: {'yes' if result.can_transfer else 'no'}\n")
    return 0


def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    calculator = LockupBalanceCalculator(build_policy(config))

    try:
        snapshot = decode_snapshot(_read_snapshot(args.snapshot))
        if args.now is not None:
            snapshot = dataclasses.replace(
                snapshot, observed_at=parse_uint(args.now, "--now")
            )
        result = calculator.evaluate(snapshot)
    except (LockupBalanceError, json.JSONDecodeError) as e:
        sys.stderr.write(f"Invalid snapshot: {e}\n")
        return EXIT_INVALID_INPUT

    return render_result(result, config, sys.stdout, args.json)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(_run(args))
