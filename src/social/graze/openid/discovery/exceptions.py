class DiscoveryException(Exception):
    """Base class for errors raised while discovering an OpenID endpoint."""


class DiscoveryFailed(DiscoveryException):
    """Neither XRDS nor HTML discovery produced an endpoint."""

    def __init__(self, identifier: str):
        super().__init__(f"Unable to discover an OpenID endpoint for {identifier}")
        self.identifier = identifier


class TooManyRedirects(DiscoveryException):
    """The X-XRDS-Location chain exceeded the redirect budget."""

    def __init__(self, identifier: str, max_redirects: int):
        super().__init__(
            f"Too many X-XRDS-Location redirects resolving {identifier} "
            f"(limit {max_redirects})"
        )
        self.identifier = identifier
        self.max_redirects = max_redirects
