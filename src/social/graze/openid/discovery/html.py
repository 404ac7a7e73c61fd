"""HTML based OpenID discovery.

Scans a document for <link rel="openid..."> tags. This is a deliberately
small scanner rather than an HTML parser: tags are split on angle brackets,
only fragments starting with "link " are considered, and anything that does
not tokenize cleanly is dropped.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

import sentry_sdk
from aiohttp import ClientSession

from social.graze.openid.discovery.types import (
    Discovery,
    IdentType,
    LegacyDiscovery,
    ModernDiscovery,
)

logger = logging.getLogger(__name__)

LINK_PREFIX = "link "
OPENID_REL_PREFIX = "openid"

WHITESPACE = re.compile(r"\s")

Attribute = Tuple[str, str]


def html_tags(document: str) -> List[str]:
    """Split a document into the text of its tags.

    Each fragment is the text following a "<" up to the next ">". The text
    before the first "<" is kept as the first fragment.
    """
    return [fragment.split(">", 1)[0] for fragment in document.split("<")]


def split_attribute(text: str) -> Optional[Tuple[Attribute, str]]:
    """Split the leading key=value pair off a string of attributes.

    Returns:
        The (key, value) pair and the remaining text, or None if the text
        holds no complete attribute
    """
    (key, separator, rest) = text.partition("=")
    if not separator:
        return None

    if rest.startswith('"'):
        (value, terminator, rest) = rest[1:].partition('"')
        if not terminator:
            return None
    else:
        match = WHITESPACE.search(rest)
        if match is None:
            return None
        value = rest[: match.start()]
        rest = rest[match.end() :]

    return ((key, value), rest.lstrip())


def split_attributes(text: str) -> List[Attribute]:
    """Tokenize attributes until the text runs out or stops parsing."""
    attributes = []
    while True:
        split = split_attribute(text)
        if split is None:
            return attributes
        (attribute, text) = split
        attributes.append(attribute)


def lookup(pairs: Iterable[Attribute], key: str) -> Optional[str]:
    return next((value for name, value in pairs if name == key), None)


def link_tags(tags: Iterable[str]) -> List[Attribute]:
    """Extract (rel, href) pairs from link tag fragments.

    Fragments missing either attribute are skipped.
    """
    links = []
    for tag in tags:
        if not tag.startswith(LINK_PREFIX):
            continue
        attributes = split_attributes(tag[len(LINK_PREFIX) :])
        rel = lookup(attributes, "rel")
        href = lookup(attributes, "href")
        if rel is not None and href is not None:
            links.append((rel, href))
    return links


def drop_quotes(value: str) -> str:
    """Remove one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_html(identifier: str, document: str) -> Optional[Discovery]:
    """Resolve an OpenID endpoint from the link tags of an HTML document.

    OpenID 2.0 links take precedence over OpenID 1.x links. HTML discovery
    only ever yields a claimed identifier (OpenID 2.0 section 7.3.3).

    Args:
        identifier: The identifier the document was fetched for
        document: Document text

    Returns:
        Discovery result, or None if the document declares no endpoint
    """
    links = []
    for rel, href in link_tags(html_tags(document)):
        rel = drop_quotes(rel)
        if rel.startswith(OPENID_REL_PREFIX):
            links.append((rel, drop_quotes(href)))

    provider = lookup(links, "openid2.provider")
    if provider is not None:
        local_id = lookup(links, "openid2.local_id")
        return ModernDiscovery(
            provider=provider,
            identifier=local_id if local_id is not None else identifier,
            ident_type=IdentType.claimed_identifier,
        )

    server = lookup(links, "openid.server")
    if server is not None:
        return LegacyDiscovery(
            endpoint=server, delegate=lookup(links, "openid.delegate")
        )

    return None


async def discover_html(session: ClientSession, identifier: str) -> Optional[Discovery]:
    """Attempt HTML discovery for an identifier.

    Args:
        session: HTTP client session
        identifier: Identifier to fetch

    Returns:
        Discovery result, or None if the page could not be fetched or
        declares no endpoint
    """
    async with session.get(identifier) as resp:
        if not 200 <= resp.status < 300:
            logger.debug("HTML fetch of %s returned %d", identifier, resp.status)
            sentry_sdk.add_breadcrumb(
                category="openid.discovery",
                message=f"HTML fetch returned {resp.status}",
                data={"url": identifier},
            )
            return None
        body = await resp.read()

    result = parse_html(identifier, body.decode("utf-8", errors="replace"))
    if result is None:
        logger.debug("No OpenID link tags found at %s", identifier)
    return result
