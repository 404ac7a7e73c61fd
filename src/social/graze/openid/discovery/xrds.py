"""XRDS document parsing.

Reads the service declarations out of a Yadis XRDS document. Each <XRD>
element becomes one group of services, ordered by their priority attribute.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from social.graze.openid.discovery.types import ServiceDescriptor

logger = logging.getLogger(__name__)

XRDS_NS = "xri://$xrds"
XRD_NS = "xri://$xrd*($v*2.0)"
OPENID_NS = "http://openid.net/xmlns/1.0"

XRDS_TAG = f"{{{XRDS_NS}}}XRDS"
XRD_TAG = f"{{{XRD_NS}}}XRD"
SERVICE_TAG = f"{{{XRD_NS}}}Service"
TYPE_TAG = f"{{{XRD_NS}}}Type"
URI_TAG = f"{{{XRD_NS}}}URI"
LOCAL_ID_TAG = f"{{{XRD_NS}}}LocalID"
DELEGATE_TAG = f"{{{OPENID_NS}}}Delegate"


def parse_priority(element: ET.Element) -> Optional[int]:
    """Read the priority attribute of an element.

    Returns None when the attribute is missing, "null" or not a
    non-negative integer.
    """
    value = element.get("priority")
    if value is None:
        return None
    try:
        priority = int(value.strip())
    except ValueError:
        return None
    return priority if priority >= 0 else None


def priority_key(priority: Optional[int]) -> float:
    # Elements without a priority sort after every prioritised element.
    return float("inf") if priority is None else priority


def element_text(element: ET.Element) -> Optional[str]:
    text = (element.text or "").strip()
    return text or None


def parse_service(service: ET.Element) -> ServiceDescriptor:
    types: List[str] = []
    local_ids: List[str] = []
    uris = []

    for child in service:
        text = element_text(child)
        if text is None:
            continue
        if child.tag == TYPE_TAG:
            types.append(text)
        elif child.tag in (LOCAL_ID_TAG, DELEGATE_TAG):
            local_ids.append(text)
        elif child.tag == URI_TAG:
            uris.append((parse_priority(child), text))

    uris.sort(key=lambda uri: priority_key(uri[0]))

    return ServiceDescriptor(
        types=types,
        local_ids=local_ids,
        uris=[uri for _, uri in uris],
        priority=parse_priority(service),
    )


def parse_xrds(data: Union[bytes, str]) -> Optional[List[List[ServiceDescriptor]]]:
    """Parse an XRDS document into groups of service descriptors.

    Args:
        data: Raw document body

    Returns:
        One list of services per XRD element, in document order, or None if
        the body is not an XRDS document.
    """
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError, ValueError) as e:
        # LookupError and ValueError come from unknown or unsupported encodings.
        logger.debug("Body is not a parsable XML document: %s", e)
        return None

    if root.tag != XRDS_TAG:
        logger.debug("Unexpected XRDS root element %s", root.tag)
        return None

    groups = []
    for xrd in root.findall(XRD_TAG):
        services = [parse_service(service) for service in xrd.findall(SERVICE_TAG)]
        services.sort(key=lambda service: priority_key(service.priority))
        groups.append(services)
    return groups
