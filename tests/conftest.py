"""
Shared test helpers for OpenID discovery tests.

Provides mock aiohttp sessions and responses so discovery can be exercised
without network access, along with sample XRDS and HTML documents.
"""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
from aiohttp import ClientResponse, ClientSession
from multidict import CIMultiDict, CIMultiDictProxy


def create_mock_response(
    status: int = 200,
    headers: Optional[Dict[str, str]] = None,
    body: bytes | str = b"",
) -> ClientResponse:
    """Create a mock aiohttp ClientResponse."""
    mock_response = AsyncMock(spec=ClientResponse)
    mock_response.status = status
    mock_response.headers = CIMultiDictProxy(CIMultiDict(headers or {}))
    if isinstance(body, str):
        body = body.encode("utf-8")
    mock_response.read = AsyncMock(return_value=body)
    return mock_response


def create_request_context(response: ClientResponse) -> AsyncMock:
    """Wrap a response in the async context manager returned by session.get."""
    context = AsyncMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


def create_mock_session(responses: List[ClientResponse]) -> Mock:
    """Create a mock ClientSession returning the responses in order."""
    mock_session = Mock(spec=ClientSession)
    mock_session.get = Mock(
        side_effect=[create_request_context(response) for response in responses]
    )
    return mock_session


def xrds_document(*services: str) -> str:
    """Build an XRDS document with a single XRD holding the given services."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<xrds:XRDS xmlns:xrds="xri://$xrds" xmlns="xri://$xrd*($v*2.0)"'
        ' xmlns:openid="http://openid.net/xmlns/1.0">\n'
        "<XRD>\n" + "\n".join(services) + "\n</XRD>\n"
        "</xrds:XRDS>\n"
    )


def xrds_service(
    types: List[str],
    uris: List[str] | None = None,
    local_ids: List[str] | None = None,
    priority: int | None = None,
) -> str:
    """Build an XRDS <Service> element."""
    attributes = f' priority="{priority}"' if priority is not None else ""
    children = [f"<Type>{service_type}</Type>" for service_type in types]
    children += [f"<URI>{uri}</URI>" for uri in uris or []]
    children += [f"<LocalID>{local_id}</LocalID>" for local_id in local_ids or []]
    return f"<Service{attributes}>" + "".join(children) + "</Service>"


@pytest.fixture
def identifier() -> str:
    return "https://alice.example.com/"
