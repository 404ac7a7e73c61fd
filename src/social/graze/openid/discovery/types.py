"""OpenID discovery data models.

Defines the service descriptors read from XRDS documents and the two
discovery outcomes: OpenID 1.x servers and OpenID 2.0 providers.
"""

from enum import IntEnum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class IdentType(IntEnum):
    """OpenID 2.0 identifier mode.

    Distinguishes provider-chosen identity (OP identifier) from an
    identifier claimed by the end user.
    """

    op_identifier = 1
    claimed_identifier = 2


class ServiceDescriptor(BaseModel):
    """A single <Service> element of an XRDS document."""

    model_config = ConfigDict(frozen=True)

    types: List[str] = Field(default_factory=list)
    local_ids: List[str] = Field(default_factory=list)
    uris: List[str] = Field(default_factory=list)
    priority: Optional[int] = None


class LegacyDiscovery(BaseModel):
    """OpenID 1.x server with an optional delegate identifier."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["openid1"] = "openid1"
    endpoint: str
    delegate: Optional[str] = None


class ModernDiscovery(BaseModel):
    """OpenID 2.0 provider endpoint with the identifier to present to it."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["openid2"] = "openid2"
    provider: str = Field(min_length=1)
    identifier: str
    ident_type: IdentType


Discovery = Annotated[
    Union[LegacyDiscovery, ModernDiscovery], Field(discriminator="kind")
]
