"""
OpenID Endpoint Discovery

This module implements the discovery step of OpenID relying party
authentication: given an identifier typed by a user, find the OpenID provider
or server that authenticates it.

Key Components:
- discovery: Yadis and HTML discovery, and the result types they produce
- config: Environment based settings, logging and error reporting setup

Discovery is request scoped: nothing is cached between calls, and each call
performs one HTTP request at a time on a caller supplied aiohttp session.
"""
