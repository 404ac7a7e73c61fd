"""
Configuration Module for OpenID Discovery

This module defines the settings used by the discovery command line tool, loaded
from environment variables through Pydantic settings, along with the logging and
error reporting setup shared by every entry point.

Settings cover:
- Debugging
- Discovery limits (X-XRDS-Location redirect budget)
- HTTP client behaviour (timeout, user agent)
- Error reporting
"""

import json
import logging
import os
from logging.config import dictConfig
from typing import Optional

import sentry_sdk
from pydantic import Field
from pydantic_settings import BaseSettings

from social.graze.openid.discovery.yadis import MAX_REDIRECTS


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Settings for OpenID discovery.

    Values are read from environment variables with defaults suitable for
    interactive use. For example, the redirect budget can be set with the
    MAX_REDIRECTS environment variable.
    """

    debug: bool = False
    """
    Enable verbose logging.
    Set with DEBUG=true environment variable.
    """

    max_redirects: int = Field(default=MAX_REDIRECTS, ge=1)
    """
    Number of documents Yadis discovery may fetch while following
    X-XRDS-Location headers before giving up.
    Set with MAX_REDIRECTS environment variable.
    """

    http_timeout: float = Field(default=30.0, gt=0)
    """
    Total timeout in seconds for each HTTP request.
    Set with HTTP_TIMEOUT environment variable.
    """

    user_agent: str = "graze-openid"
    """
    User-Agent header sent with discovery requests.
    Set with USER_AGENT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """


def configure_logging(settings: Optional[Settings] = None) -> None:
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    if settings is not None and not settings.debug:
        logging.getLogger().setLevel(logging.INFO)
    else:
        logging.getLogger().setLevel(logging.DEBUG)


def configure_sentry(settings: Settings) -> bool:
    """Initialise Sentry error reporting when a DSN is configured.

    Returns:
        True if Sentry was initialised
    """
    if settings.sentry_dsn is None:
        return False
    sentry_sdk.init(dsn=settings.sentry_dsn, debug=settings.debug)
    logger.debug("Sentry error reporting enabled")
    return True
