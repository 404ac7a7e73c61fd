from typing import List
import argparse
import aiohttp
import asyncio
import logging
import sys

import sentry_sdk

from social.graze.openid.config import Settings, configure_logging, configure_sentry
from social.graze.openid.discovery.discover import discover
from social.graze.openid.discovery.exceptions import DiscoveryException

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


async def realMain(argv: List[str] | None = None) -> int:
    settings = Settings()

    parser = argparse.ArgumentParser(
        prog="openid-discover", description="Discover OpenID endpoints"
    )
    parser.add_argument("identifier", nargs="+", help="The identifier(s) to discover.")
    parser.add_argument(
        "--max-redirects",
        type=positive_int,
        default=settings.max_redirects,
        help="The number of X-XRDS-Location redirects to follow.",
    )

    args = vars(parser.parse_args(argv))

    configure_logging(settings)
    configure_sentry(settings)

    identifiers: List[str] = args.get("identifier", [])
    failures = 0

    async with aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.http_timeout),
        headers={"User-Agent": settings.user_agent},
    ) as session:
        for identifier in identifiers:
            try:
                discovery = await discover(
                    session, identifier, args.get("max_redirects")
                )
                print(f"{identifier} {discovery.model_dump_json()}")
            except (DiscoveryException, aiohttp.ClientError, asyncio.TimeoutError):
                failures += 1
                logger.exception("Unable to discover %s", identifier)
            except Exception as e:
                failures += 1
                sentry_sdk.capture_exception(e)
                logger.exception("Exception discovering %s", identifier)

    return 1 if failures else 0


def main() -> None:
    sys.exit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
