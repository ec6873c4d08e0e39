"""Command-line interface for the vault dashboard view."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict, is_dataclass
from typing import Any

from .config import load_config
from .errors import MissingRole, ModuleNotFound, VaultViewError
from .logging_setup import configure_logging
from .services import UpgradeableFacade, build_facade

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="vault-view",
        description="Read-only dashboard over vault health, positions and statistics",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--caller",
        default=os.environ.get("VAULT_VIEW_CALLER", ""),
        help="Identity the queries are made as (default: $VAULT_VIEW_CALLER)",
    )

    sub = parser.add_subparsers(dest="command")

    health = sub.add_parser("health", help="Health factor of one user")
    health.add_argument("user")

    batch_health = sub.add_parser("batch-health", help="Health factors of many users")
    batch_health.add_argument("users", nargs="+")

    positions = sub.add_parser("positions", help="Positions for (user, asset) pairs")
    positions.add_argument("--users", nargs="+", required=True)
    positions.add_argument("--assets", nargs="+", required=True)

    for name, help_text in (
        ("summary", "Collateral/debt totals and health for a user"),
        ("overview", "Summary plus risk flag for a user"),
        ("breakdown", "Per-asset positions with prices for a user"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("user")
        p.add_argument("assets", nargs="*")

    prices = sub.add_parser("prices", help="Oracle prices for assets")
    prices.add_argument("assets", nargs="+")

    sub.add_parser("stats", help="Global system statistics")

    return parser


def _jsonable(result: Any) -> Any:
    if is_dataclass(result):
        return asdict(result)
    if isinstance(result, list):
        return [_jsonable(item) for item in result]
    return result


async def _execute(facade: UpgradeableFacade, args: argparse.Namespace) -> Any:
    """Dispatch the selected command to the facade."""
    caller = args.caller

    if args.command == "health":
        return await facade.get_user_health_factor(caller, args.user)
    if args.command == "batch-health":
        factors, flags = await facade.batch_get_user_health_factors(caller, args.users)
        return {"users": args.users, "health_factors": factors, "cache_valid": flags}
    if args.command == "positions":
        return await facade.batch_get_user_positions(caller, args.users, args.assets)
    if args.command == "summary":
        return await facade.get_user_summary(caller, args.user, args.assets)
    if args.command == "overview":
        return await facade.get_user_overview(caller, args.user, args.assets)
    if args.command == "breakdown":
        return await facade.get_user_asset_breakdown(caller, args.user, args.assets)
    if args.command == "prices":
        return await facade.batch_get_asset_prices(caller, args.assets)
    if args.command == "stats":
        return await facade.get_system_stats(caller)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)

    try:
        facade = build_facade(load_config(args.config))
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = asyncio.run(_execute(facade, args))
    except (VaultViewError, MissingRole, ModuleNotFound) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(_jsonable(result), indent=2))


if __name__ == "__main__":
    main()
