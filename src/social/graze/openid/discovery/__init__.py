"""
OpenID Discovery

This package resolves a user supplied OpenID identifier to the endpoint that
authenticates it, the protocol generation to speak, and the identifier to
present to the endpoint.

Key Components:
- discover.py: Entry point combining both discovery methods
- yadis.py: Yadis discovery via X-XRDS-Location and XRDS documents
- xrds.py: XRDS document parsing
- html.py: HTML discovery via <link rel="openid..."> tags
- types.py: Discovery results and service descriptors
- __main__.py: CLI interface for discovery

Discovery Methods:
1. Yadis Discovery
   - Follows X-XRDS-Location headers (at most 10 documents by default)
   - Picks the first service declaring an OpenID 2.0 server, OpenID 2.0
     signon, or OpenID 1.x signon type together with an endpoint URI

2. HTML Discovery
   - openid2.provider / openid2.local_id links (OpenID 2.0)
   - openid.server / openid.delegate links (OpenID 1.x)

Yadis discovery is always attempted first. HTML discovery is only attempted
when Yadis discovery finds nothing; transport errors and exhausted redirect
budgets are raised to the caller.
"""
