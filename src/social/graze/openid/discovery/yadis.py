"""Yadis based OpenID discovery.

Fetches the identifier, follows X-XRDS-Location headers to the XRDS
document and picks the highest precedence OpenID service it declares.
"""

import logging
from itertools import chain
from typing import List, Optional, Sequence, Tuple

import sentry_sdk
from aiohttp import ClientSession

from social.graze.openid.discovery.exceptions import TooManyRedirects
from social.graze.openid.discovery.types import IdentType, ServiceDescriptor
from social.graze.openid.discovery.xrds import parse_xrds

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10

XRDS_LOCATION_HEADER = "X-XRDS-Location"

OPENID_2_SERVER = "http://specs.openid.net/auth/2.0/server"
OPENID_2_SIGNON = "http://specs.openid.net/auth/2.0/signon"
OPENID_1_0_SIGNON = "http://openid.net/signon/1.0"
OPENID_1_1_SIGNON = "http://openid.net/signon/1.1"

# Checked in this order regardless of the order a service lists its types.
SERVICE_TYPE_PRECEDENCE = (
    OPENID_2_SERVER,
    OPENID_2_SIGNON,
    OPENID_1_0_SIGNON,
    OPENID_1_1_SIGNON,
)

YadisResult = Tuple[str, str, IdentType]


def service_identity(
    identifier: str, service: ServiceDescriptor
) -> Optional[Tuple[str, IdentType]]:
    """Determine the identifier and mode an OpenID service declares.

    Args:
        identifier: The identifier discovery started from
        service: Service element from the XRDS document

    Returns:
        Identifier and IdentType for the first matching OpenID service type,
        None if the service is not an OpenID service
    """
    local_id = next(iter(service.local_ids), identifier)
    for service_type in SERVICE_TYPE_PRECEDENCE:
        if service_type not in service.types:
            continue
        if service_type == OPENID_2_SERVER:
            return (identifier, IdentType.op_identifier)
        return (local_id, IdentType.claimed_identifier)
    return None


def parse_yadis(
    identifier: str, groups: Sequence[Sequence[ServiceDescriptor]]
) -> Optional[YadisResult]:
    """Pick the OpenID endpoint out of the services of an XRDS document.

    The first service, in document order, that declares an OpenID service
    type and at least one URI wins.

    Returns:
        Provider URI, identifier and IdentType, or None if no service qualifies
    """
    for service in chain.from_iterable(groups):
        identity = service_identity(identifier, service)
        if identity is None:
            continue
        provider = next(iter(service.uris), None)
        if provider is None:
            continue
        (local_id, ident_type) = identity
        return (provider, local_id, ident_type)
    return None


async def discover_yadis(
    session: ClientSession,
    identifier: str,
    last_location: Optional[str] = None,
    max_redirects: int = MAX_REDIRECTS,
) -> Optional[YadisResult]:
    """Attempt Yadis discovery for an identifier.

    Follows X-XRDS-Location headers until a response does not point
    somewhere new, then parses that response as an XRDS document.

    Args:
        session: HTTP client session
        identifier: Identifier to discover
        last_location: XRDS location already followed, if any
        max_redirects: Number of fetches allowed before giving up

    Returns:
        Provider URI, identifier and IdentType, or None if the document
        could not be fetched, parsed or holds no OpenID service

    Raises:
        TooManyRedirects: The redirect budget ran out before a document
            was reached
    """
    remaining = max_redirects
    visited: List[str] = []

    while True:
        if remaining <= 0:
            logger.info(
                "Giving up on %s after %d XRDS locations: %s",
                identifier,
                len(visited),
                visited,
            )
            raise TooManyRedirects(identifier, max_redirects)

        url = last_location if last_location is not None else identifier
        visited.append(url)

        async with session.get(url) as resp:
            location = resp.headers.get(XRDS_LOCATION_HEADER)
            if location is not None and location != last_location:
                logger.debug("Following X-XRDS-Location %s -> %s", url, location)
                last_location = location
                remaining -= 1
                continue

            if resp.status != 200:
                logger.debug("XRDS fetch of %s returned %d", url, resp.status)
                sentry_sdk.add_breadcrumb(
                    category="openid.discovery",
                    message=f"XRDS fetch returned {resp.status}",
                    data={"url": url},
                )
                return None

            body = await resp.read()

        groups = parse_xrds(body)
        if groups is None:
            sentry_sdk.add_breadcrumb(
                category="openid.discovery",
                message="Response is not an XRDS document",
                data={"url": url},
            )
            return None

        result = parse_yadis(identifier, groups)
        if result is None:
            logger.debug("No OpenID service declared in XRDS document at %s", url)
        return result
