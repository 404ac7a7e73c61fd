"""OpenID endpoint discovery.

Resolves a user supplied identifier to the endpoint to authenticate against,
trying Yadis (XRDS) discovery first and falling back to HTML link tags.
"""

import logging

import sentry_sdk
from aiohttp import ClientSession

from social.graze.openid.discovery.exceptions import DiscoveryFailed
from social.graze.openid.discovery.html import discover_html
from social.graze.openid.discovery.types import Discovery, ModernDiscovery
from social.graze.openid.discovery.yadis import MAX_REDIRECTS, discover_yadis

logger = logging.getLogger(__name__)


async def discover(
    session: ClientSession, identifier: str, max_redirects: int = MAX_REDIRECTS
) -> Discovery:
    """Resolve an OpenID endpoint and the identifier to present to it.

    Only "nothing found" outcomes fall back to HTML discovery. Transport
    errors and TooManyRedirects from Yadis discovery propagate unchanged.

    Args:
        session: HTTP client session
        identifier: User supplied identifier
        max_redirects: X-XRDS-Location budget for Yadis discovery

    Returns:
        LegacyDiscovery or ModernDiscovery

    Raises:
        DiscoveryFailed: Neither method found an endpoint
        TooManyRedirects: The X-XRDS-Location chain was too long
    """
    yadis_result = await discover_yadis(session, identifier, None, max_redirects)
    if yadis_result is not None:
        (provider, local_id, ident_type) = yadis_result
        logger.debug("Discovered %s via XRDS: %s", identifier, provider)
        return ModernDiscovery(
            provider=provider, identifier=local_id, ident_type=ident_type
        )

    html_result = await discover_html(session, identifier)
    if html_result is not None:
        logger.debug("Discovered %s via HTML: %s", identifier, html_result.kind)
        return html_result

    logger.info("No OpenID endpoint found for %s", identifier)
    sentry_sdk.add_breadcrumb(
        category="openid.discovery",
        message="Discovery failed",
        data={"identifier": identifier},
    )
    raise DiscoveryFailed(identifier)
