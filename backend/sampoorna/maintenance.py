"""Command-line maintenance tasks for the settings document.

Usage::

    sampoorna-maintenance fill-defaults
    sampoorna-maintenance fill-defaults --district Idukki
    sampoorna-maintenance show
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Optional, Sequence

from .config import get_settings
from .errors import SettingsError
from .services.settings_store import get_settings_store
from .storage.database import shutdown_database

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = get_settings().location_defaults
    parser = argparse.ArgumentParser(prog="sampoorna-maintenance", description=__doc__.splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    fill = subparsers.add_parser("fill-defaults", help="Fill blank panchayat, district and state values")
    fill.add_argument("--panchayat", default=defaults.panchayat_name)
    fill.add_argument("--district", default=defaults.district)
    fill.add_argument("--state", default=defaults.state)

    subparsers.add_parser("show", help="Print the current settings document")
    return parser


async def run(args: argparse.Namespace) -> dict:
    store = await get_settings_store()
    try:
        if args.command == "fill-defaults":
            settings = await store.fill_location_defaults(args.panchayat, args.district, args.state)
            general = settings["general"]
            logger.info(
                "Location set to panchayat=%s district=%s state=%s",
                general["panchayatName"],
                general["district"],
                general["state"],
            )
            return settings
        return await store.get_or_create()
    finally:
        await shutdown_database()


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=get_settings().log_level.upper(), format="%(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    try:
        settings = asyncio.run(run(args))
    except SettingsError as exc:
        logger.error("%s: %s", exc.message, exc.detail)
        return 1
    if args.command == "show":
        print(json.dumps(settings, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
