"""Command-line entry point.

Usage:
    radarfeed --host latency --zone europe --field callsign --pattern '^BAW'
    python -m radarfeed.cli --list-zones
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from radarfeed.config import Settings
from radarfeed.errors import RadarFeedError
from radarfeed.services.session import Session

logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    async with Session(settings) as session:
        if args.list_hosts:
            print(json.dumps(await session.load_balancers(), indent=2))
            return 0
        if args.list_zones:
            print(json.dumps(await session.zone_names(), indent=2))
            return 0

        selected = await session.select_host(args.host)
        logger.info("Using load balancer %s", selected.hostname)

        if await session.select_zone(args.zone) is None:
            logger.error("Zone %r not found", args.zone)
            return 2

        if args.details:
            result = await session.details_by_attribute(args.field, args.pattern, args.refresh)
            print(json.dumps(result.model_dump(exclude_none=True), indent=2))
            return 0 if result.ok else 1

        records = await session.records_by_attribute(args.field, args.pattern, args.refresh)
        print(json.dumps([r.model_dump(exclude_none=True) for r in records], indent=2))
        return 0


def main() -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Live flight feed client")
    parser.add_argument("--host", default=settings.default_host or "random",
                        help="Hostname, index, 'latency' or 'random'")
    parser.add_argument("--zone", default=settings.default_zone or "all", help="Zone name or 'all'")
    parser.add_argument("--field", default="callsign", help="Aircraft field to match")
    parser.add_argument("--pattern", default=".*", help="Regular expression for --field")
    parser.add_argument("--details", action="store_true", help="Fetch per-flight details")
    parser.add_argument("--refresh", action="store_true")
    parser.add_argument("--list-hosts", action="store_true")
    parser.add_argument("--list-zones", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        code = asyncio.run(run(args, settings))
    except (RadarFeedError, ValueError) as exc:
        logger.error("%s", exc)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
